"""Property model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin

DEFAULT_STATUS = "available"


class Property(TimestampMixin, Base):
    """A real-estate listing."""

    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid4()))
    name: Mapped[str] = mapped_column(String, nullable=False)
    location: Mapped[str] = mapped_column(String, nullable=False)
    brochure: Mapped[str | None] = mapped_column(String)
    image: Mapped[str | None] = mapped_column(String)
    model3d: Mapped[str | None] = mapped_column(String)
    available_apartments: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(String, default=DEFAULT_STATUS, nullable=False)

    def __repr__(self) -> str:
        return f"Property(id={self.id!r}, name={self.name!r})"
