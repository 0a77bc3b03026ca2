"""Shared Pydantic models used across Python services."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class ProductBase(BaseModel):
    name: str
    price: Number
    quantity: Number = 0


class Product(ProductBase):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class SuccessEnvelope(BaseModel):
    success: Literal[True] = True
    data: Any
    count: int | None = None
    message: str | None = None

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ErrorEnvelope(BaseModel):
    success: Literal[False] = False
    message: str
    error: str | None = None

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class HealthResponse(BaseModel):
    status: str
    service: str
