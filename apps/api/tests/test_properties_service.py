"""Service-level tests for the properties resource."""
from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from properties_api.errors import NotFoundError, PersistenceError, ValidationError
from properties_api.repositories import properties as properties_repo
from properties_api.schemas import properties as schemas
from properties_api.services import properties as properties_service


def _stored(**overrides):
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    fields = dict(
        id="prop-1",
        name="Tower",
        location="Downtown",
        brochure="tower.pdf",
        image="tower.png",
        model3d="tower.glb",
        available_apartments=4,
        status="available",
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _db_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.mark.asyncio
async def test_create_builds_defaults(monkeypatch):
    create = AsyncMock(return_value=_stored(brochure=None, image=None, model3d=None, available_apartments=0))
    monkeypatch.setattr(properties_repo, "create", create)

    payload = schemas.PropertyCreate(name="Tower", location="Downtown", image="")
    response = await properties_service.create_property(payload, AsyncMock())

    assert response.message == "Property created successfully"
    data = create.await_args.args[1]
    assert data == {
        "name": "Tower",
        "location": "Downtown",
        "brochure": None,
        "image": None,
        "model3d": None,
        "available_apartments": 0,
        "status": "available",
    }


@pytest.mark.asyncio
async def test_create_validation_skips_persistence(monkeypatch):
    create = AsyncMock()
    monkeypatch.setattr(properties_repo, "create", create)

    with pytest.raises(ValidationError) as exc:
        await properties_service.create_property(schemas.PropertyCreate(name="Tower"), AsyncMock())

    assert exc.value.status_code == 400
    create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_persistence_failure(monkeypatch):
    monkeypatch.setattr(properties_repo, "create", AsyncMock(side_effect=_db_error()))

    with pytest.raises(PersistenceError) as exc:
        await properties_service.create_property(
            schemas.PropertyCreate(name="Tower", location="Downtown"), AsyncMock()
        )

    assert exc.value.status_code == 500
    assert exc.value.message == "Server error during property creation"
    assert "connection refused" in exc.value.error


@pytest.mark.asyncio
async def test_list_passes_offset_and_limit(monkeypatch):
    monkeypatch.setattr(properties_repo, "count", AsyncMock(return_value=7))
    find_many = AsyncMock(return_value=[_stored()])
    monkeypatch.setattr(properties_repo, "find_many", find_many)

    response = await properties_service.list_properties(AsyncMock(), page=3, limit=3)

    assert find_many.await_args.kwargs == {"skip": 6, "take": 3}
    assert response.pagination.total_pages == 3
    assert response.pagination.has_next_page is False
    assert response.pagination.has_prev_page is True
    assert response.properties[0].id == "prop-1"


@pytest.mark.asyncio
async def test_list_persistence_failure(monkeypatch):
    monkeypatch.setattr(properties_repo, "count", AsyncMock(side_effect=_db_error()))

    with pytest.raises(PersistenceError) as exc:
        await properties_service.list_properties(AsyncMock(), page=1, limit=10)

    assert exc.value.message == "Server error"


@pytest.mark.asyncio
async def test_get_not_found(monkeypatch):
    monkeypatch.setattr(properties_repo, "find_unique", AsyncMock(return_value=None))

    with pytest.raises(NotFoundError) as exc:
        await properties_service.get_property("missing", AsyncMock())

    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_get_persistence_failure(monkeypatch):
    monkeypatch.setattr(properties_repo, "find_unique", AsyncMock(side_effect=_db_error()))

    with pytest.raises(PersistenceError) as exc:
        await properties_service.get_property("prop-1", AsyncMock())

    assert exc.value.status_code == 500
    assert exc.value.message == "Server error"
    assert "connection refused" in exc.value.error


@pytest.mark.asyncio
async def test_update_merge_rules(monkeypatch):
    existing = _stored()
    monkeypatch.setattr(properties_repo, "find_unique", AsyncMock(return_value=existing))
    update = AsyncMock(return_value=_stored(status="sold"))
    monkeypatch.setattr(properties_repo, "update", update)

    payload = schemas.PropertyUpdate.model_validate(
        {"name": "", "status": "sold", "availableApartments": 0, "image": None}
    )
    await properties_service.update_property("prop-1", payload, AsyncMock())

    data = update.await_args.args[2]
    assert data == {
        "name": "Tower",
        "location": "Downtown",
        "status": "sold",
        "brochure": "tower.pdf",
        "image": None,
        "model3d": "tower.glb",
        "available_apartments": 0,
    }


@pytest.mark.asyncio
async def test_update_missing_skips_write(monkeypatch):
    monkeypatch.setattr(properties_repo, "find_unique", AsyncMock(return_value=None))
    update = AsyncMock()
    monkeypatch.setattr(properties_repo, "update", update)

    with pytest.raises(NotFoundError):
        await properties_service.update_property("missing", schemas.PropertyUpdate(), AsyncMock())

    update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_persistence_failure(monkeypatch):
    monkeypatch.setattr(properties_repo, "find_unique", AsyncMock(return_value=_stored()))
    monkeypatch.setattr(properties_repo, "update", AsyncMock(side_effect=_db_error()))

    with pytest.raises(PersistenceError) as exc:
        await properties_service.update_property("prop-1", schemas.PropertyUpdate(), AsyncMock())

    assert exc.value.message == "Server error during property update"


@pytest.mark.asyncio
async def test_delete_persistence_failure(monkeypatch):
    monkeypatch.setattr(properties_repo, "find_unique", AsyncMock(return_value=_stored()))
    monkeypatch.setattr(properties_repo, "delete", AsyncMock(side_effect=_db_error()))

    with pytest.raises(PersistenceError) as exc:
        await properties_service.delete_property("prop-1", AsyncMock())

    assert exc.value.message == "Server error during property deletion"
    assert exc.value.to_body()["error"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 10),
        ("", 10),
        ("abc", 10),
        ("0", 10),
        ("-3", 10),
        ("4", 4),
        (" 7", 7),
        ("2abc", 2),
        ("1e3", 1),
        ("2147483647", 2147483647),
        ("2147483648", 10),
        ("99999999999999999999", 10),
        ("\u0663", 10),
    ],
)
def test_coerce_positive_int(raw, expected):
    assert properties_service.coerce_positive_int(raw, 10) == expected


def test_build_pagination_rounds_up():
    pagination = properties_service.build_pagination(page=1, limit=10, total=21)

    assert pagination.total_pages == 3
    assert pagination.has_next_page is True
    assert pagination.has_prev_page is False
