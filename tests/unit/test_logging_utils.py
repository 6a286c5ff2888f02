"""Tests for utils/logging.py — configure_logging, redact_secrets and get_logger."""
from __future__ import annotations

import logging

import structlog

from federalist_build.core.config import BuildConfig
from federalist_build.utils.logging import (
    REDACTED,
    configure_logging,
    configure_logging_from_config,
    get_logger,
    redact_secrets,
)


# ---------------------------------------------------------------------------
# configure_logging
# ---------------------------------------------------------------------------


def test_configure_logging_json_does_not_raise() -> None:
    configure_logging("INFO", json=True)


def test_configure_logging_console_does_not_raise() -> None:
    configure_logging("DEBUG", json=False)


def test_configure_logging_sets_root_level() -> None:
    configure_logging("WARNING", json=False)
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_unknown_level_falls_back_to_info() -> None:
    configure_logging("CHATTY")
    assert logging.getLogger().level == logging.INFO


def test_configure_logging_installs_single_handler() -> None:
    configure_logging("INFO")
    configure_logging("INFO")
    assert len(logging.getLogger().handlers) == 1


def test_configure_logging_from_config_uses_log_level(monkeypatch) -> None:
    monkeypatch.setenv("FEDERALIST_LOG_LEVEL", "ERROR")
    configure_logging_from_config(BuildConfig.from_env(), json=False)
    assert logging.getLogger().level == logging.ERROR


# ---------------------------------------------------------------------------
# redact_secrets
# ---------------------------------------------------------------------------


def test_redact_secrets_masks_token_keys() -> None:
    event = {"event": "x", "access_token": "abc", "accessToken": "def", "token": "ghi"}
    result = redact_secrets(None, "info", event)
    assert result["access_token"] == REDACTED
    assert result["accessToken"] == REDACTED
    assert result["token"] == REDACTED
    assert result["event"] == "x"


def test_redact_secrets_leaves_empty_values() -> None:
    result = redact_secrets(None, "info", {"access_token": ""})
    assert result["access_token"] == ""


def test_redact_secrets_ignores_other_keys() -> None:
    result = redact_secrets(None, "info", {"owner": "acme"})
    assert result == {"owner": "acme"}


# ---------------------------------------------------------------------------
# get_logger
# ---------------------------------------------------------------------------


def test_get_logger_returns_usable_logger() -> None:
    logger = get_logger("federalist_build.test")
    assert logger is not None
    logger.info("test_event", key="value")


def test_get_logger_is_structlog_logger() -> None:
    logger = get_logger(__name__)
    assert hasattr(logger, "bind")
    assert isinstance(structlog.get_config(), dict)
