from .product_api import ProductApiService
from .inventory_service import InventoryService
from .reporting_service import ReportingService

__all__ = [
    "ProductApiService",
    "InventoryService",
    "ReportingService",
]
