from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable

from prodman.domain.errors import RemoteUnavailableError, WriteRejectedError
from prodman.domain.models import DEFAULT_PRODUCT_TYPE, Product, ProductType

log = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _cell(value: Any) -> Any:
    # Fields the server left out render as blank cells.
    return "" if value is None else value


def _or_default(base: dict[str, Any], key: str, default: Any) -> Any:
    value = base.get(key)
    return default if value is None else value


class InventoryService:
    """
    Holds the product list shown by the UI together with the form being
    edited, and mirrors every write into the local list without re-fetching.

    The list starts empty with `loading` set; `load()` clears the flag whether
    or not the remote call succeeded.
    """

    def __init__(self, api, write_mode: str = "optimistic", clock: Callable[[], datetime] = _utc_now):
        self.api = api
        self.write_mode = write_mode
        self.clock = clock

        self.products: list[Product] = []
        self.loading = True
        self.form: dict[str, Any] = {}
        self.editing_id: int | None = None

    @property
    def editing(self) -> bool:
        return self.editing_id is not None

    # ---------- Load ----------
    def load(self) -> list[Product]:
        try:
            self.products = self.api.list_products()
            log.info("products_loaded count=%s", len(self.products))
        except RemoteUnavailableError as e:
            log.warning("products_load_failed error=%s", e)
        finally:
            self.loading = False
        return self.products

    # ---------- Form ----------
    def change_field(self, name: str, value: Any) -> None:
        self.form = {**self.form, name: value}

    def start_edit(self, product: Product) -> None:
        self.form = product.to_dict()
        self.editing_id = product.id

    def clear_form(self) -> None:
        self.form = {}
        self.editing_id = None

    def build_payload(self, base: dict[str, Any], product_id: int | None = None) -> Product:
        now = self.clock()
        raw_type = base.get("type") or DEFAULT_PRODUCT_TYPE
        ptype = raw_type if isinstance(raw_type, ProductType) else ProductType.from_dict(raw_type)
        return Product(
            id=product_id if product_id is not None else int(now.timestamp() * 1000),
            name=base.get("name") or "",
            id_type=_or_default(base, "idType", 1),
            cost_price=_or_default(base, "costPrice", 0),
            price=_or_default(base, "price", 0),
            min_stock=_or_default(base, "minStock", 0),
            stock=_or_default(base, "stock", 0),
            created_at=base.get("createdAt") or _iso(now),
            updated_at=_iso(now),
            type=ptype,
        )

    # ---------- Mutations ----------
    def submit(self) -> Product | None:
        if self.editing:
            return self.update()
        return self.add()

    def add(self) -> Product:
        product = self.build_payload(self.form)
        r = self.api.create_product(product.to_payload())
        self._check_response(r, "create")
        if self.write_mode == "confirmed":
            product = self._adopt_server_id(product, r)

        self.products = [*self.products, product]
        self.clear_form()
        log.info("product_added id=%s name=%s", product.id, product.name)
        return product

    def update(self) -> Product | None:
        if self.editing_id is None:
            return None

        target = self.editing_id
        updated = self.build_payload(self.form, target)
        r = self.api.update_product(target, updated.to_payload())
        self._check_response(r, "update")

        self.products = [updated if p.id == target else p for p in self.products]
        self.clear_form()
        log.info("product_updated id=%s", target)
        return updated

    def delete(self, product_id: int) -> None:
        r = self.api.delete_product(product_id)
        self._check_response(r, "delete")
        self.products = [p for p in self.products if p.id != product_id]
        log.info("product_deleted id=%s", product_id)

    def _check_response(self, r, action: str) -> None:
        if r.ok:
            return
        if self.write_mode == "confirmed":
            raise WriteRejectedError(f"Server rejected {action} (HTTP {r.status_code}).", r.status_code)
        log.warning("product_%s_not_confirmed status=%s local state patched anyway", action, r.status_code)

    def _adopt_server_id(self, product: Product, r) -> Product:
        try:
            body = r.json()
        except ValueError:
            return product
        if isinstance(body, dict) and body.get("id") is not None:
            return replace(product, id=body["id"])
        return product

    # ---------- Queries ----------
    def find(self, product_id: int) -> Product | None:
        for p in self.products:
            if p.id == product_id:
                return p
        return None

    def table_rows(self) -> list[tuple]:
        rows = []
        for p in self.products:
            rows.append((
                p.id,
                p.name,
                _cell(p.id_type),
                p.type.name if p.type else "",
                f"${_cell(p.cost_price)}",
                f"${_cell(p.price)}",
                _cell(p.min_stock),
                _cell(p.stock),
            ))
        return rows
