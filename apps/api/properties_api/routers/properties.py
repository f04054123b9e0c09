"""Property listing endpoints.

Reads are public; create, update and delete require an admin token.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.security import require_admin
from ..db.session import get_session
from ..schemas import properties as properties_schema
from ..services import properties as properties_service

router = APIRouter()


@router.post(
    "",
    response_model=properties_schema.PropertyMutationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_property(
    payload: properties_schema.PropertyCreate | None = None,
    session: AsyncSession = Depends(get_session),
) -> properties_schema.PropertyMutationResponse:
    """Create a new property."""

    return await properties_service.create_property(payload or properties_schema.PropertyCreate(), session)


@router.get("", response_model=properties_schema.PropertyListResponse)
async def list_properties(
    request: Request,
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> properties_schema.PropertyListResponse:
    """Return a page of properties, newest first."""

    settings = request.app.state.settings
    return await properties_service.list_properties(
        session,
        page=properties_service.coerce_positive_int(page, settings.default_page),
        limit=properties_service.coerce_positive_int(limit, settings.default_page_size),
    )


@router.get("/{property_id}", response_model=properties_schema.PropertyResponse)
async def get_property(
    property_id: str,
    session: AsyncSession = Depends(get_session),
) -> properties_schema.PropertyResponse:
    return await properties_service.get_property(property_id, session)


@router.put(
    "/{property_id}",
    response_model=properties_schema.PropertyMutationResponse,
    dependencies=[Depends(require_admin)],
)
async def update_property(
    property_id: str,
    payload: properties_schema.PropertyUpdate | None = None,
    session: AsyncSession = Depends(get_session),
) -> properties_schema.PropertyMutationResponse:
    """Apply a partial update to a property."""

    return await properties_service.update_property(
        property_id, payload or properties_schema.PropertyUpdate(), session
    )


@router.delete(
    "/{property_id}",
    response_model=properties_schema.MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_property(
    property_id: str,
    session: AsyncSession = Depends(get_session),
) -> properties_schema.MessageResponse:
    return await properties_service.delete_property(property_id, session)
