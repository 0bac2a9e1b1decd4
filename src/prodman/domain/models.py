from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Union

# Form input is carried as typed text until it reaches the server.
Number = Union[int, float, str]


@dataclass(frozen=True)
class ProductType:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductType":
        return cls(id=data.get("id"), name=data.get("name") or "")

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


DEFAULT_PRODUCT_TYPE = ProductType(id=1, name="General")


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    id_type: Number
    cost_price: Number
    price: Number
    min_stock: Number
    stock: Number
    created_at: str
    updated_at: str
    type: Optional[ProductType] = None
    is_active: bool = True
    is_deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        raw_type = data.get("type")
        if isinstance(raw_type, ProductType):
            ptype = raw_type
        elif isinstance(raw_type, dict):
            ptype = ProductType.from_dict(raw_type)
        else:
            ptype = None
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            id_type=data.get("idType"),
            cost_price=data.get("costPrice"),
            price=data.get("price"),
            min_stock=data.get("minStock"),
            stock=data.get("stock"),
            created_at=data.get("createdAt") or "",
            updated_at=data.get("updatedAt") or "",
            type=ptype,
            is_active=bool(data.get("isActive", True)),
            is_deleted=bool(data.get("isDeleted", False)),
        )

    def to_payload(self) -> dict[str, Any]:
        """Write body for POST/PUT. The status flags are never sent."""
        return {
            "id": self.id,
            "name": self.name,
            "idType": self.id_type,
            "costPrice": self.cost_price,
            "price": self.price,
            "minStock": self.min_stock,
            "stock": self.stock,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "type": self.type.to_dict() if self.type else None,
        }

    def to_dict(self) -> dict[str, Any]:
        data = self.to_payload()
        data["isActive"] = self.is_active
        data["isDeleted"] = self.is_deleted
        return data
