"""Property repository helpers."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, delete as sa_delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.property import Property


async def create(session: AsyncSession, data: Mapping[str, Any]) -> Property:
    """Insert a property and return it with generated fields populated."""

    property_obj = Property(**data)
    session.add(property_obj)
    await session.commit()
    await session.refresh(property_obj)
    return property_obj


async def count(session: AsyncSession) -> int:
    """Return the total number of properties."""

    result = await session.execute(select(func.count()).select_from(Property))
    return int(result.scalar_one())


async def find_many(session: AsyncSession, *, skip: int, take: int) -> list[Property]:
    """Return one page of properties, newest first."""

    stmt: Select[tuple[Property]] = (
        select(Property).order_by(Property.created_at.desc()).offset(skip).limit(take)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def find_unique(session: AsyncSession, property_id: str) -> Property | None:
    """Return a property by identifier."""

    return await session.get(Property, property_id)


async def update(session: AsyncSession, property_id: str, data: Mapping[str, Any]) -> Property | None:
    """Overwrite the given columns of a property.

    Returns ``None`` when no row exists for ``property_id``.
    """

    property_obj = await session.get(Property, property_id)
    if property_obj is None:
        return None

    for column, value in data.items():
        setattr(property_obj, column, value)
    await session.commit()
    await session.refresh(property_obj)
    return property_obj


async def delete(session: AsyncSession, property_id: str) -> bool:
    """Remove a property permanently. Returns whether a row was deleted."""

    result = await session.execute(sa_delete(Property).where(Property.id == property_id))
    await session.commit()
    return bool(result.rowcount)
