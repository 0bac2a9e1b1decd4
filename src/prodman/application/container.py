from __future__ import annotations

from dataclasses import dataclass

from prodman.config import ApiConfig
from prodman.services.inventory_service import InventoryService
from prodman.services.product_api import ProductApiService
from prodman.services.reporting_service import ReportingService


@dataclass(frozen=True)
class AppContainer:
    config: ApiConfig
    api: ProductApiService
    inventory: InventoryService
    reporting: ReportingService


def build_container(config: ApiConfig, session=None) -> AppContainer:
    api = ProductApiService(config, session=session)
    inventory = InventoryService(api, write_mode=config.write_mode)
    reporting = ReportingService()

    return AppContainer(
        config=config,
        api=api,
        inventory=inventory,
        reporting=reporting,
    )
