"""
StampLab — Configuration System

All configuration is Pydantic-validated and loaded from:
1. default.yaml (defaults)
2. Environment variables (overrides)

Every tunable parameter of the UCCA engine lives here.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ─── Sub-configs ──────────────────────────────────────────────────


class UCCAConfig(BaseModel):
    """
    Enumeration settings. Fixed for the lifetime of an enumerator.

    Type 1-2 candidates cover provided / not-provided combinations,
    Type 3-4 candidates cover timing and order. Abstraction 2a is the
    team (controller-class) level, 2b the explicit controller level.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    max_combination_size: int = Field(default=4, ge=2, le=6)
    enable_type_1_2: bool = True
    enable_type_3_4: bool = True
    enable_abstraction_2a: bool = True
    enable_abstraction_2b: bool = True
    risk_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    prioritize_by_hazards: bool = True
    # Reserved for temporal-logic extensions; not read by the pipeline yet.
    include_temporal_analysis: bool = True
    # Upper bound on generated + refined candidates per run
    max_candidates: int = Field(default=50_000, ge=1)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "console"  # "console" | "json"
    # Level for the "stamplab" logger namespace; None follows `level`.
    # DEBUG here exposes per-stage candidate counts without host noise.
    engine_level: str | None = None


# ─── Root Configuration ──────────────────────────────────────────


class StampLabConfig(BaseSettings):
    """
    Root configuration. Loads from YAML, overridable by env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="STAMPLAB_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    ucca: UCCAConfig = Field(default_factory=UCCAConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: str | Path | None = None) -> StampLabConfig:
    """
    Load configuration from YAML file, then apply environment variable overrides.
    """
    raw: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}

    overrides: dict[str, Any] = {}
    if level := os.environ.get("STAMPLAB_LOGGING__LEVEL"):
        overrides.setdefault("logging", {})["level"] = level
    if fmt := os.environ.get("STAMPLAB_LOGGING__FORMAT"):
        overrides.setdefault("logging", {})["format"] = fmt
    if max_size := os.environ.get("STAMPLAB_UCCA__MAX_COMBINATION_SIZE"):
        overrides.setdefault("ucca", {})["max_combination_size"] = int(max_size)
    if threshold := os.environ.get("STAMPLAB_UCCA__RISK_THRESHOLD"):
        overrides.setdefault("ucca", {})["risk_threshold"] = float(threshold)

    return StampLabConfig(**_deep_merge(raw, overrides))
