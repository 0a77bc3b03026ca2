"""Request handlers: one per product endpoint.

Each handler turns (path id, body) into a status code and an envelope.
Nothing raised by the gateway escapes; every outcome goes through the
error mapper.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from common.models import Product, SuccessEnvelope
from product_service import errors
from product_service.results import Ok, ValidationFailure
from product_service.schema import ProductCandidate
from product_service.store import ProductGateway

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Product deleted successfully"


@dataclass(frozen=True)
class HandlerResponse:
    status_code: int
    body: dict[str, Any]


def _candidate(payload: Any) -> ProductCandidate | ValidationFailure:
    if payload is None:
        return ProductCandidate()
    if not isinstance(payload, dict):
        return ValidationFailure((errors.INVALID_BODY_MESSAGE,))
    return ProductCandidate.from_payload(payload)


def _record(status_code: int, product: Product) -> HandlerResponse:
    envelope = SuccessEnvelope(data=product.to_json())
    return HandlerResponse(status_code, envelope.to_json())


class ProductHandlers:
    def __init__(self, gateway: ProductGateway, *, dev_mode: bool = False) -> None:
        self.gateway = gateway
        self.dev_mode = dev_mode

    def _failure(self, outcome: Any) -> HandlerResponse:
        status_code, envelope = errors.to_response(outcome, dev_mode=self.dev_mode)
        return HandlerResponse(status_code, envelope.to_json())

    async def _call(
        self, operation: Callable[..., Awaitable[Any]], *args: Any
    ) -> Any:
        try:
            return await operation(*args)
        except Exception as exc:
            logger.exception("Gateway call %s raised", operation.__name__)
            return exc

    async def create(self, payload: Any) -> HandlerResponse:
        candidate = _candidate(payload)
        if isinstance(candidate, ValidationFailure):
            return self._failure(candidate)

        outcome = await self._call(self.gateway.create, candidate)
        if not isinstance(outcome, Ok):
            return self._failure(outcome)
        return _record(201, outcome.value)

    async def list(self) -> HandlerResponse:
        outcome = await self._call(self.gateway.list_all)
        if not isinstance(outcome, Ok):
            return self._failure(outcome)
        products = [product.to_json() for product in outcome.value]
        envelope = SuccessEnvelope(data=products, count=len(products))
        return HandlerResponse(200, envelope.to_json())

    async def get(self, product_id: str) -> HandlerResponse:
        outcome = await self._call(self.gateway.get_by_id, product_id)
        if not isinstance(outcome, Ok):
            return self._failure(outcome)
        return _record(200, outcome.value)

    async def update(self, product_id: str, payload: Any) -> HandlerResponse:
        candidate = _candidate(payload)
        if isinstance(candidate, ValidationFailure):
            return self._failure(candidate)

        outcome = await self._call(self.gateway.update_by_id, product_id, candidate)
        if not isinstance(outcome, Ok):
            return self._failure(outcome)
        return _record(200, outcome.value)

    async def delete(self, product_id: str) -> HandlerResponse:
        outcome = await self._call(self.gateway.delete_by_id, product_id)
        if not isinstance(outcome, Ok):
            return self._failure(outcome)
        envelope = SuccessEnvelope(data={}, message=DELETED_MESSAGE)
        return HandlerResponse(200, envelope.to_json())
