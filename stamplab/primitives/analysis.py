"""
StampLab — Analysis Records

Read-only snapshots of the records owned by the analysis store.
The UCCA engine reads these and never mutates them.
"""

from __future__ import annotations

from pydantic import Field

from stamplab.primitives.common import FrozenModel


class Controller(FrozenModel):
    """An entity that can issue control actions."""

    id: str
    name: str


class ControlAction(FrozenModel):
    """One instruction a controller may issue, e.g. verb="activate", object="pump"."""

    id: str
    controller_id: str
    verb: str
    object: str
    description: str = ""

    @property
    def label(self) -> str:
        return f"{self.verb} {self.object}"


class Hazard(FrozenModel):
    id: str
    title: str
    code: str = ""


class ExistingUCCA(FrozenModel):
    """An analyst-confirmed unsafe combination already recorded in the store."""

    id: str
    description: str
    code: str = ""
    context: str = ""
    hazard_ids: list[str] = Field(default_factory=list)
