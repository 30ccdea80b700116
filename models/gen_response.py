from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(
        ...,
        description="Human-readable reason the request failed.",
        json_schema_extra={"example": "Product not found"},
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "price must be numeric"},
                {"error": "Product not found"},
            ]
        }
    }


class OkResponse(BaseModel):
    ok: bool = Field(
        True,
        description="Always true when the operation succeeded.",
        json_schema_extra={"example": True},
    )


class HealthResponse(BaseModel):
    ok: bool = Field(
        ...,
        description="Whether the store answered a trivial query.",
        json_schema_extra={"example": True},
    )
    error: Optional[str] = Field(
        None,
        description="Store error message when ok is false.",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"ok": True},
                {"ok": False, "error": "Can't connect to MySQL server on 'localhost'"},
            ]
        }
    }
