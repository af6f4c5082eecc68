"""
Tests for configuration loading and logging setup.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from stamplab.config import LoggingConfig, StampLabConfig, UCCAConfig, load_config
from stamplab.telemetry import setup_logging

DEFAULT_YAML = Path(__file__).resolve().parents[2] / "config" / "default.yaml"


class TestLoadConfig:
    def test_missing_path_gives_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "absent.yaml")
        assert config.ucca == UCCAConfig()
        assert config.logging.level == "INFO"

    def test_shipped_defaults_match_model(self):
        config = load_config(DEFAULT_YAML)
        assert config.ucca == UCCAConfig()
        assert config.logging == LoggingConfig()

    def test_yaml_values(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "ucca:\n  max_combination_size: 3\n  enable_abstraction_2a: false\n"
            "logging:\n  format: json\n"
        )
        config = load_config(path)
        assert config.ucca.max_combination_size == 3
        assert config.ucca.enable_abstraction_2a is False
        assert config.ucca.risk_threshold == 0.3
        assert config.logging.format == "json"

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = tmp_path / "config.yaml"
        path.write_text("ucca:\n  risk_threshold: 0.4\n")
        monkeypatch.setenv("STAMPLAB_UCCA__RISK_THRESHOLD", "0.6")
        monkeypatch.setenv("STAMPLAB_LOGGING__LEVEL", "DEBUG")
        config = load_config(path)
        assert config.ucca.risk_threshold == 0.6
        assert config.logging.level == "DEBUG"

    def test_out_of_range_value_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("ucca:\n  max_combination_size: 9\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_root_settings_defaults(self):
        config = StampLabConfig()
        assert config.ucca.max_candidates == 50_000


class TestSetupLogging:
    def test_configures_root_logger(self):
        root = logging.getLogger()
        engine = logging.getLogger("stamplab")
        saved_handlers, saved_level, saved_engine = root.handlers[:], root.level, engine.level
        try:
            setup_logging(LoggingConfig(level="debug", format="json"))
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        finally:
            structlog.reset_defaults()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            engine.setLevel(saved_engine)

    def test_unknown_level_falls_back_to_info(self):
        root = logging.getLogger()
        engine = logging.getLogger("stamplab")
        saved_handlers, saved_level, saved_engine = root.handlers[:], root.level, engine.level
        try:
            setup_logging(LoggingConfig(level="chatty"), include_callsite=True)
            assert root.level == logging.INFO
        finally:
            structlog.reset_defaults()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            engine.setLevel(saved_engine)

    def test_engine_level_independent_of_root(self):
        root = logging.getLogger()
        engine = logging.getLogger("stamplab")
        saved_handlers, saved_level, saved_engine = root.handlers[:], root.level, engine.level
        try:
            setup_logging(LoggingConfig(level="WARNING", engine_level="DEBUG"))
            assert root.level == logging.WARNING
            assert engine.level == logging.DEBUG
            assert logging.getLogger("stamplab.systems.ucca.pipeline").isEnabledFor(logging.DEBUG)
        finally:
            structlog.reset_defaults()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            engine.setLevel(saved_engine)

    def test_engine_level_defaults_to_root_level(self):
        root = logging.getLogger()
        engine = logging.getLogger("stamplab")
        saved_handlers, saved_level, saved_engine = root.handlers[:], root.level, engine.level
        try:
            setup_logging(LoggingConfig(level="ERROR"))
            assert engine.level == logging.ERROR
        finally:
            structlog.reset_defaults()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            engine.setLevel(saved_engine)
