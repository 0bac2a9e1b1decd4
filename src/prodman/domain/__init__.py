from .models import Product, ProductType, DEFAULT_PRODUCT_TYPE
from .errors import AppError, ConfigError, RemoteUnavailableError, WriteRejectedError

__all__ = [
    "Product",
    "ProductType",
    "DEFAULT_PRODUCT_TYPE",
    "AppError",
    "ConfigError",
    "RemoteUnavailableError",
    "WriteRejectedError",
]
