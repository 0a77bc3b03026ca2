"""Persistence gateway: in-memory document store for product records."""

from __future__ import annotations

import itertools
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Protocol, TypeVar
from uuid import UUID, uuid4

from common.models import Product
from product_service import schema
from product_service.results import (
    MalformedIdentifier,
    NotFound,
    Ok,
    Result,
    StorageFault,
)
from product_service.schema import ProductCandidate

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProductGateway(Protocol):
    async def create(self, candidate: ProductCandidate) -> Result[Product]: ...

    async def list_all(self) -> Result[list[Product]]: ...

    async def get_by_id(self, product_id: str) -> Result[Product]: ...

    async def update_by_id(
        self, product_id: str, candidate: ProductCandidate
    ) -> Result[Product]: ...

    async def delete_by_id(self, product_id: str) -> Result[Product]: ...


def parse_identifier(product_id: str) -> str | None:
    """Return the canonical form of a product id, or None if malformed."""
    try:
        return str(UUID(product_id))
    except (TypeError, ValueError, AttributeError):
        return None


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryProductStore:
    """Document store holding one collection of product documents.

    Each document is replaced as a whole on write, so readers never see a
    half-written record. Ids are never handed out twice, even after the
    record they named has been deleted.
    """

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        self._issued: set[str] = set()
        self._sequence = itertools.count()

    def _commit(self, documents: dict[str, dict[str, Any]]) -> None:
        self._documents = documents

    def _new_id(self) -> str:
        product_id = str(uuid4())
        while product_id in self._issued:
            product_id = str(uuid4())
        self._issued.add(product_id)
        return product_id

    @staticmethod
    def _to_product(document: dict[str, Any]) -> Product:
        return Product(
            id=document["id"],
            name=document["name"],
            price=document["price"],
            quantity=document["quantity"],
            created_at=document["created_at"],
            updated_at=document["updated_at"],
        )

    async def _guard(
        self, operation: str, action: Callable[[], Awaitable[T]]
    ) -> T | StorageFault:
        try:
            return await action()
        except Exception as exc:
            logger.exception("Product store %s failed", operation)
            return StorageFault(detail=str(exc) or type(exc).__name__)

    async def create(self, candidate: ProductCandidate) -> Result[Product]:
        validated = schema.validate(candidate, creating=True)
        if not isinstance(validated, Ok):
            return validated

        async def action() -> Result[Product]:
            now = _now()
            document = {
                "id": self._new_id(),
                "name": validated.value.name,
                "price": validated.value.price,
                "quantity": validated.value.quantity,
                "created_at": now,
                "updated_at": now,
                "seq": next(self._sequence),
            }
            self._commit({**self._documents, document["id"]: document})
            logger.info("Created product %s", document["id"])
            return Ok(self._to_product(document))

        return await self._guard("create", action)

    async def list_all(self) -> Result[list[Product]]:
        async def action() -> Result[list[Product]]:
            documents = sorted(
                self._documents.values(),
                key=lambda doc: (doc["created_at"], doc["seq"]),
                reverse=True,
            )
            return Ok([self._to_product(doc) for doc in documents])

        return await self._guard("list", action)

    async def get_by_id(self, product_id: str) -> Result[Product]:
        key = parse_identifier(product_id)
        if key is None:
            return MalformedIdentifier(product_id)

        async def action() -> Result[Product]:
            document = self._documents.get(key)
            if document is None:
                return NotFound(product_id)
            return Ok(self._to_product(document))

        return await self._guard("get", action)

    async def update_by_id(
        self, product_id: str, candidate: ProductCandidate
    ) -> Result[Product]:
        key = parse_identifier(product_id)
        if key is None:
            return MalformedIdentifier(product_id)
        validated = schema.validate(candidate)
        if not isinstance(validated, Ok):
            return validated

        async def action() -> Result[Product]:
            current = self._documents.get(key)
            if current is None:
                return NotFound(product_id)
            document = {
                **current,
                "name": validated.value.name,
                "price": validated.value.price,
                "quantity": validated.value.quantity,
                "updated_at": _now(),
            }
            self._commit({**self._documents, key: document})
            logger.info("Updated product %s", key)
            return Ok(self._to_product(document))

        return await self._guard("update", action)

    async def delete_by_id(self, product_id: str) -> Result[Product]:
        key = parse_identifier(product_id)
        if key is None:
            return MalformedIdentifier(product_id)

        async def action() -> Result[Product]:
            document = self._documents.get(key)
            if document is None:
                return NotFound(product_id)
            remaining = {k: v for k, v in self._documents.items() if k != key}
            self._commit(remaining)
            logger.info("Deleted product %s", key)
            return Ok(self._to_product(document))

        return await self._guard("delete", action)
