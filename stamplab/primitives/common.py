"""
StampLab — Common Primitives

Shared base classes and utilities used across all systems.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field
from ulid import ULID


def new_id() -> str:
    """Generate a new ULID string. Time-sortable, globally unique."""
    return str(ULID())


def utc_now() -> datetime:
    """Current UTC time, timezone-aware."""
    return datetime.now(timezone.utc)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a score into [low, high]."""
    return max(low, min(high, value))


# ─── Base Models ──────────────────────────────────────────────────


class StampBaseModel(BaseModel):
    """Base model for all StampLab records."""

    model_config = {"populate_by_name": True, "from_attributes": True}


class FrozenModel(StampBaseModel):
    """Immutable value object. Derive new values with ``model_copy(update=...)``."""

    model_config = {"populate_by_name": True, "from_attributes": True, "frozen": True}


class Identified(StampBaseModel):
    """Mixin for models with ULID IDs."""

    id: str = Field(default_factory=new_id)


class Timestamped(StampBaseModel):
    """Mixin for models with creation timestamps."""

    created_at: datetime = Field(default_factory=utc_now)
