"""
StampLab — Structured Logging

All logging via structlog. Engine events carry ``system="ucca"`` and a
``component``; hosts choose the renderer and can tune the engine's
verbosity apart from their own.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from stamplab.config import LoggingConfig

# Every engine module logs below this stdlib namespace.
ENGINE_LOGGER = "stamplab"


def _resolve_level(name: str) -> int:
    """Stdlib level for a config string; unknown names mean INFO."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _renderer(config: LoggingConfig) -> Any:
    if config.format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(config: LoggingConfig, *, include_callsite: bool = False) -> None:
    """
    Configure structlog over stdlib logging for the host application.

    The root logger follows ``config.level``; the ``stamplab`` namespace
    follows ``config.engine_level`` when set. Hosts that never call this
    keep structlog's defaults.
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if config.format == "json":
        # Console rendering prints tracebacks itself
        shared_processors.append(structlog.processors.format_exc_info)
    if include_callsite:
        shared_processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            )
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(config),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_resolve_level(config.level))

    engine_level = config.engine_level or config.level
    logging.getLogger(ENGINE_LOGGER).setLevel(_resolve_level(engine_level))
