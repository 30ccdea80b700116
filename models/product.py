from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from coercion import parse_integer, parse_number, truncate_integer


class ProductCreate(BaseModel):
    """Creation payload for a Product; every field is required."""
    name: str = Field(
        ...,
        description="Product name, trimmed of surrounding whitespace.",
        json_schema_extra={"example": "Widget"},
    )
    price: float = Field(
        ...,
        description="Product price. Numbers and numeric strings are accepted.",
        json_schema_extra={"example": "9.99"},
    )
    quantity: int = Field(
        ...,
        description="Units in stock. Must be a whole number.",
        json_schema_extra={"example": "3"},
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": " Widget ", "price": "9.99", "quantity": "3"}
            ]
        }
    }

    @field_validator("name", mode="before")
    @classmethod
    def _trim_name(cls, v: Any) -> str:
        name = "" if v is None else str(v).strip()
        if not name:
            raise ValueError("name must be a non-empty string")
        return name

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, v: Any) -> float:
        price = parse_number(v)
        if price is None:
            raise ValueError("price must be numeric")
        return price

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, v: Any, info: ValidationInfo) -> int:
        # legacy mode: accept any finite number and truncate toward zero
        if info.context and info.context.get("allow_fractional_quantity"):
            quantity = truncate_integer(v)
        else:
            quantity = parse_integer(v)
        if quantity is None:
            raise ValueError("quantity must be an integer")
        return quantity


class ProductUpdate(BaseModel):
    """Partial update for a Product; supply only fields to change. ``null`` means not supplied."""
    name: Optional[str] = Field(
        None,
        description="New product name (trimmed).",
        json_schema_extra={"example": "Updated Widget"},
    )
    price: Optional[float] = Field(
        None,
        description="New price.",
        json_schema_extra={"example": 12.5},
    )
    quantity: Optional[int] = Field(
        None,
        description="New stock quantity.",
        json_schema_extra={"example": 5},
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"price": 12.5},
                {"quantity": 5},
                {"name": "Widget Pro", "price": "19.99"},
            ]
        }
    }

    @field_validator("name", mode="before")
    @classmethod
    def _trim_name(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v).strip()

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, v: Any) -> Optional[float]:
        if v is None:
            return None
        price = parse_number(v)
        if price is None:
            raise PydanticCustomError("price_not_numeric", "price must be numeric")
        return price

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, v: Any) -> Optional[int]:
        if v is None:
            return None
        quantity = parse_integer(v)
        if quantity is None:
            raise PydanticCustomError("quantity_not_integer", "quantity must be an integer")
        return quantity


class ProductRead(BaseModel):
    """Server representation returned to clients: the stored row, extra columns included."""
    id: int = Field(
        ...,
        description="Server-generated Product ID.",
        json_schema_extra={"example": 1},
    )
    name: str = Field(..., json_schema_extra={"example": "Widget"})
    price: float = Field(..., json_schema_extra={"example": 9.99})
    quantity: int = Field(..., json_schema_extra={"example": 3})

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "examples": [
                {"id": 1, "name": "Widget", "price": 9.99, "quantity": 3}
            ]
        },
    )
