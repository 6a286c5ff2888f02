from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, MutableMapping, cast

import structlog

if TYPE_CHECKING:
    from federalist_build.core.config import BuildConfig

# Event keys whose values are never written to the log.
SECRET_KEYS = frozenset({"access_token", "accessToken", "token", "authorization"})
REDACTED = "***"


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor that masks credential values in log events."""
    for key in SECRET_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def configure_logging(level: str = "INFO", json: bool = True) -> None:
    """Configure structlog for build and publish logging.

    Subprocess output is logged at ``DEBUG``; use that level to see the
    stdout/stderr of every build step.

    Args:
        level: Standard logging level string, e.g. "DEBUG", "INFO", "WARNING".
        json: If True, render log entries as JSON. If False, use coloured console output.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        redact_secrets,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def configure_logging_from_config(config: BuildConfig, json: bool = True) -> None:
    """Apply ``config.log_level`` (``FEDERALIST_LOG_LEVEL``) via :func:`configure_logging`."""
    configure_logging(config.log_level, json=json)


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound to *name* (usually ``__name__``)."""
    return cast(structlog.BoundLogger, structlog.get_logger(name))
