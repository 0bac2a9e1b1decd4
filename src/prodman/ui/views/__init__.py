from .products_view import ProductsView

__all__ = ["ProductsView"]
