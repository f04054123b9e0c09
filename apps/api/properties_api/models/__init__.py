"""Expose ORM models."""
from .base import Base
from .property import Property

__all__ = [
    "Base",
    "Property",
]
