"""Schemas for the properties API."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropertyInput(_CamelModel):
    """Request body shared by create and update.

    Every field is optional here; create enforces ``name``/``location`` itself and
    update relies on ``model_fields_set`` to tell "sent" from "omitted".
    """

    name: str | None = None
    location: str | None = None
    brochure: str | None = None
    image: str | None = None
    model3d: str | None = None
    available_apartments: int | None = None
    status: str | None = None


class PropertyCreate(PropertyInput):
    pass


class PropertyUpdate(PropertyInput):
    pass


class PropertyOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    name: str
    location: str
    brochure: str | None = None
    image: str | None = None
    model3d: str | None = None
    available_apartments: int
    status: str
    created_at: datetime
    updated_at: datetime


class Pagination(_CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool


class PropertyListResponse(_CamelModel):
    properties: list[PropertyOut]
    pagination: Pagination


class PropertyResponse(_CamelModel):
    property: PropertyOut


class PropertyMutationResponse(_CamelModel):
    message: str
    property: PropertyOut


class MessageResponse(_CamelModel):
    message: str
