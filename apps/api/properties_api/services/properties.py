"""Business logic for the properties resource."""
from __future__ import annotations

import logging
import math
import re

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFoundError, PersistenceError, ValidationError
from ..models.property import DEFAULT_STATUS
from ..repositories import properties as properties_repo
from ..schemas import properties as schemas

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Property not found"

# name/location/status fall back on any falsy value; these fall back only when omitted.
PRESENCE_MERGED_FIELDS: tuple[str, ...] = ("brochure", "image", "model3d", "available_apartments")

# Larger values would push the row offset past what the database can bind.
MAX_PAGE_PARAM = 2**31 - 1

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def coerce_positive_int(raw: str | None, default: int) -> int:
    """Read the leading integer of ``raw``; fall back to ``default`` if absent or out of range."""

    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if match is None:
        return default
    value = int(match.group(1))
    return value if 1 <= value <= MAX_PAGE_PARAM else default


def build_pagination(page: int, limit: int, total: int) -> schemas.Pagination:
    total_pages = math.ceil(total / limit)
    return schemas.Pagination(
        current_page=page,
        total_pages=total_pages,
        total_items=total,
        items_per_page=limit,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


async def create_property(
    payload: schemas.PropertyCreate,
    session: AsyncSession,
) -> schemas.PropertyMutationResponse:
    """Validate and persist a new property, applying defaults to optional fields."""

    if not payload.name or not payload.location:
        raise ValidationError("Name and location are required")

    data = {
        "name": payload.name,
        "location": payload.location,
        "brochure": payload.brochure or None,
        "image": payload.image or None,
        "model3d": payload.model3d or None,
        "available_apartments": payload.available_apartments or 0,
        "status": payload.status or DEFAULT_STATUS,
    }

    try:
        property_obj = await properties_repo.create(session, data)
    except SQLAlchemyError as exc:
        logger.exception("Property creation error: %s", exc)
        raise PersistenceError("Server error during property creation", error=str(exc)) from exc

    logger.info("Created property %s", property_obj.id)
    return schemas.PropertyMutationResponse(
        message="Property created successfully",
        property=schemas.PropertyOut.model_validate(property_obj),
    )


async def list_properties(
    session: AsyncSession,
    *,
    page: int,
    limit: int,
) -> schemas.PropertyListResponse:
    """Return one page of properties, newest first, with pagination metadata."""

    skip = (page - 1) * limit

    try:
        total = await properties_repo.count(session)
        rows = await properties_repo.find_many(session, skip=skip, take=limit)
    except SQLAlchemyError as exc:
        logger.exception("Get properties error: %s", exc)
        raise PersistenceError("Server error", error=str(exc)) from exc

    return schemas.PropertyListResponse(
        properties=[schemas.PropertyOut.model_validate(row) for row in rows],
        pagination=build_pagination(page, limit, total),
    )


async def get_property(property_id: str, session: AsyncSession) -> schemas.PropertyResponse:
    try:
        property_obj = await properties_repo.find_unique(session, property_id)
    except SQLAlchemyError as exc:
        logger.exception("Get property error: %s", exc)
        raise PersistenceError("Server error", error=str(exc)) from exc

    if property_obj is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    return schemas.PropertyResponse(property=schemas.PropertyOut.model_validate(property_obj))


async def update_property(
    property_id: str,
    payload: schemas.PropertyUpdate,
    session: AsyncSession,
) -> schemas.PropertyMutationResponse:
    """Merge the supplied fields into an existing property.

    ``name``, ``location`` and ``status`` keep the stored value when the supplied
    one is falsy. The fields in ``PRESENCE_MERGED_FIELDS`` take whatever value was
    sent, including ``0``, ``""`` and ``null``, and keep the stored value only when
    omitted from the body.
    """

    try:
        existing = await properties_repo.find_unique(session, property_id)
        if existing is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        data = {
            "name": payload.name or existing.name,
            "location": payload.location or existing.location,
            "status": payload.status or existing.status,
        }
        for field in PRESENCE_MERGED_FIELDS:
            if field in payload.model_fields_set:
                data[field] = getattr(payload, field)
            else:
                data[field] = getattr(existing, field)

        property_obj = await properties_repo.update(session, property_id, data)
    except SQLAlchemyError as exc:
        logger.exception("Property update error: %s", exc)
        raise PersistenceError("Server error during property update", error=str(exc)) from exc

    if property_obj is None:
        # Removed between the lookup and the write.
        raise NotFoundError(NOT_FOUND_MESSAGE)

    logger.info("Updated property %s", property_id)
    return schemas.PropertyMutationResponse(
        message="Property updated successfully",
        property=schemas.PropertyOut.model_validate(property_obj),
    )


async def delete_property(property_id: str, session: AsyncSession) -> schemas.MessageResponse:
    try:
        existing = await properties_repo.find_unique(session, property_id)
        if existing is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        deleted = await properties_repo.delete(session, property_id)
    except SQLAlchemyError as exc:
        logger.exception("Property deletion error: %s", exc)
        raise PersistenceError("Server error during property deletion", error=str(exc)) from exc

    if not deleted:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    logger.info("Deleted property %s", property_id)
    return schemas.MessageResponse(message="Property deleted successfully")
