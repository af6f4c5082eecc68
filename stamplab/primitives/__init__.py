from stamplab.primitives.analysis import (
    ControlAction,
    Controller,
    ExistingUCCA,
    Hazard,
)
from stamplab.primitives.common import (
    FrozenModel,
    Identified,
    StampBaseModel,
    Timestamped,
    clamp,
    new_id,
    utc_now,
)

__all__ = [
    "ControlAction",
    "Controller",
    "ExistingUCCA",
    "FrozenModel",
    "Hazard",
    "Identified",
    "StampBaseModel",
    "Timestamped",
    "clamp",
    "new_id",
    "utc_now",
]
