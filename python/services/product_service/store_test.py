import uuid

import pytest

from product_service.results import (
    MalformedIdentifier,
    NotFound,
    Ok,
    StorageFault,
    ValidationFailure,
)
from product_service.schema import ProductCandidate
from product_service.store import (
    InMemoryProductStore,
    parse_identifier,
)

WIDGET = ProductCandidate(name="Widget", price=9.99, quantity=10)


def test_parse_identifier():
    product_id = str(uuid.uuid4())
    assert parse_identifier(product_id) == product_id
    assert parse_identifier(product_id.upper()) == product_id
    assert parse_identifier("invalid-id") is None
    assert parse_identifier("") is None


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps():
    store = InMemoryProductStore()
    result = await store.create(WIDGET)
    assert isinstance(result, Ok)
    product = result.value
    assert parse_identifier(product.id) == product.id
    assert product.name == "Widget"
    assert product.created_at == product.updated_at


@pytest.mark.asyncio
async def test_create_rejects_invalid_fields_without_writing():
    store = InMemoryProductStore()
    result = await store.create(ProductCandidate(name="Bad", price=-10, quantity=5))
    assert result == ValidationFailure(("Price cannot be negative",))
    listed = await store.list_all()
    assert listed.value == []


@pytest.mark.asyncio
async def test_list_is_newest_first():
    store = InMemoryProductStore()
    for name in ("A", "B", "C"):
        await store.create(ProductCandidate(name=name, price=1, quantity=1))
    listed = await store.list_all()
    assert [product.name for product in listed.value] == ["C", "B", "A"]


@pytest.mark.asyncio
async def test_get_update_delete_round_trip():
    store = InMemoryProductStore()
    created = (await store.create(WIDGET)).value

    fetched = await store.get_by_id(created.id)
    assert fetched.value == created

    updated = await store.update_by_id(
        created.id, ProductCandidate(name="Updated", price=150, quantity=25)
    )
    assert isinstance(updated, Ok)
    assert updated.value.id == created.id
    assert updated.value.created_at == created.created_at
    assert updated.value.updated_at >= created.updated_at
    assert (await store.get_by_id(created.id)).value.name == "Updated"

    deleted = await store.delete_by_id(created.id)
    assert deleted.value.name == "Updated"
    assert await store.get_by_id(created.id) == NotFound(created.id)
    assert await store.delete_by_id(created.id) == NotFound(created.id)


@pytest.mark.asyncio
async def test_malformed_identifiers():
    store = InMemoryProductStore()
    assert await store.get_by_id("invalid-id") == MalformedIdentifier("invalid-id")
    assert await store.update_by_id("invalid-id", WIDGET) == MalformedIdentifier("invalid-id")
    assert await store.delete_by_id("invalid-id") == MalformedIdentifier("invalid-id")


@pytest.mark.asyncio
async def test_update_replaces_all_fields():
    store = InMemoryProductStore()
    created = (await store.create(WIDGET)).value
    result = await store.update_by_id(created.id, ProductCandidate(name="Renamed"))
    assert isinstance(result, ValidationFailure)
    assert (await store.get_by_id(created.id)).value.name == "Widget"


@pytest.mark.asyncio
async def test_update_validates_before_not_found():
    store = InMemoryProductStore()
    absent = str(uuid.uuid4())
    assert isinstance(
        await store.update_by_id(absent, ProductCandidate(name="x", price=-1, quantity=1)),
        ValidationFailure,
    )
    assert await store.update_by_id(absent, WIDGET) == NotFound(absent)


@pytest.mark.asyncio
async def test_unexpected_errors_become_storage_faults(monkeypatch):
    store = InMemoryProductStore()

    def broken_commit(documents):
        raise ConnectionError("storage offline")

    monkeypatch.setattr(store, "_commit", broken_commit)
    result = await store.create(WIDGET)
    assert result == StorageFault("storage offline")

    assert (await store.list_all()).value == []
