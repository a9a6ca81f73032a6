import asyncio

import pytest

from query_tracker_api.app.core.exceptions import ConflictError, NotFoundError, ValidationFailure
from query_tracker_api.app.schemas.query import QueryCreate, QueryStatus, QueryUpdate
from query_tracker_api.app.services.query_service import QueryService

MISSING_ID = "00000000-0000-4000-8000-000000000000"


def _create(service, form_data_id, title="Is X present?", description=None):
    fields = {"title": title, "formDataId": form_data_id}
    if description is not None:
        fields["description"] = description
    payload = QueryCreate(**fields)
    return asyncio.run(service.create_query(payload))


@pytest.fixture
def service(memory_store):
    return QueryService(memory_store)


@pytest.fixture
def record(memory_store):
    return memory_store.insert_form_data("Is X present?", "Yes")


def test_create_defaults(service, record) -> None:
    query = _create(service, record.id)
    assert query.status is QueryStatus.OPEN
    assert query.description == ""
    assert query.title == "Is X present?"


def test_create_for_missing_form_data_creates_nothing(service, memory_store) -> None:
    with pytest.raises(NotFoundError):
        _create(service, MISSING_ID)
    assert memory_store.queries == {}
    assert not any(name == "create_query" for name, _ in memory_store.calls)


def test_create_twice_conflicts(service, memory_store, record) -> None:
    _create(service, record.id)
    with pytest.raises(ConflictError):
        _create(service, record.id, title="again")
    assert len(memory_store.queries) == 1


def test_store_conflict_surfaces_as_conflict(memory_store, record) -> None:
    # The pre-check misses; only the store's uniqueness rule catches the duplicate.
    memory_store.stale_reads = True
    service = QueryService(memory_store)
    _create(service, record.id)
    with pytest.raises(ConflictError):
        _create(service, record.id)
    assert len(memory_store.queries) == 1


def test_partial_updates_leave_other_fields(service, record) -> None:
    query = _create(service, record.id, description="D")

    described = asyncio.run(service.update_query(query.id, QueryUpdate(description="x")))
    assert described.status is QueryStatus.OPEN
    assert described.description == "x"

    resolved = asyncio.run(service.update_query(query.id, QueryUpdate(status=QueryStatus.RESOLVED)))
    assert resolved.status is QueryStatus.RESOLVED
    assert resolved.description == "x"


def test_resolved_query_can_be_reopened(service, record) -> None:
    query = _create(service, record.id)
    asyncio.run(service.update_query(query.id, QueryUpdate(status=QueryStatus.RESOLVED)))
    reopened = asyncio.run(service.update_query(query.id, QueryUpdate(status=QueryStatus.OPEN)))
    assert reopened.status is QueryStatus.OPEN


def test_update_missing_query(service, memory_store) -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(service.update_query(MISSING_ID, QueryUpdate(description="x")))
    assert memory_store.queries == {}


def test_update_rejects_empty_patch(service, memory_store, record) -> None:
    query = _create(service, record.id)
    empty = QueryUpdate.model_construct(description=None, status=None)
    with pytest.raises(ValidationFailure):
        asyncio.run(service.update_query(query.id, empty))
    assert memory_store.queries[query.id] == query


def test_delete_then_recreate(service, record) -> None:
    query = _create(service, record.id)
    asyncio.run(service.delete_query(query.id))
    with pytest.raises(NotFoundError):
        asyncio.run(service.get_query(query.id))
    with pytest.raises(NotFoundError):
        asyncio.run(service.delete_query(query.id))
    assert _create(service, record.id).id != query.id
