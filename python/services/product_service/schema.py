"""Product record schema: field rules for name, price and quantity."""

from __future__ import annotations

from typing import Any, Mapping, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    confloat,
    conint,
)

from product_service.results import Ok, ValidationFailure

NAME_MAX_LENGTH = 100

# Booleans, strings and non-finite floats are rejected; big ints are kept exact.
Amount = Union[
    conint(strict=True, ge=0),
    confloat(strict=True, ge=0, allow_inf_nan=False),
]

FIELD_MESSAGES: dict[str, dict[str, str]] = {
    "name": {
        "required": "Product name is required",
        "type": "Product name must be a string",
        "too_long": f"Product name cannot exceed {NAME_MAX_LENGTH} characters",
    },
    "price": {
        "required": "Product price is required",
        "type": "Product price must be a number",
        "negative": "Price cannot be negative",
    },
    "quantity": {
        "required": "Product quantity is required",
        "type": "Product quantity must be a number",
        "negative": "Quantity cannot be negative",
    },
}


class ProductCandidate(BaseModel):
    """Client-supplied fields, untrusted until validated.

    Fields the client did not send are absent from ``model_fields_set``;
    an explicit JSON ``null`` is kept as ``None``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Any = None
    price: Any = None
    quantity: Any = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ProductCandidate:
        return cls.model_validate(dict(payload))

    def supplied(self) -> dict[str, Any]:
        return {field: getattr(self, field) for field in self.model_fields_set}


class ValidatedProduct(BaseModel):
    model_config = ConfigDict(strict=True, str_strip_whitespace=True, frozen=True)

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    price: Amount
    quantity: Amount


def _kind(errors: list[dict[str, Any]]) -> str:
    types = {error["type"] for error in errors}
    if (
        "missing" in types
        or "string_too_short" in types
        or any(error.get("input") is None for error in errors)
    ):
        return "required"
    if "greater_than_equal" in types:
        return "negative"
    if "string_too_long" in types:
        return "too_long"
    return "type"


def _messages(exc: ValidationError) -> tuple[str, ...]:
    by_field: dict[str, list[dict[str, Any]]] = {}
    for error in exc.errors():
        by_field.setdefault(str(error["loc"][0]), []).append(error)

    return tuple(
        FIELD_MESSAGES[field][_kind(by_field[field])]
        for field in FIELD_MESSAGES
        if field in by_field
    )


def validate(
    candidate: ProductCandidate, *, creating: bool = False
) -> Ok[ValidatedProduct] | ValidationFailure:
    """Check every field and collect one message per violation.

    On creation an omitted quantity defaults to 0. An explicit ``null``
    quantity is still rejected.
    """
    fields = candidate.supplied()
    if creating:
        fields.setdefault("quantity", 0)

    try:
        return Ok(ValidatedProduct.model_validate(fields))
    except ValidationError as exc:
        return ValidationFailure(_messages(exc))
