"""Unit tests for the central logging setup."""

import logging

import pytest

from sportsnews.config import Settings
from sportsnews.infrastructure.logging import log_config


@pytest.fixture
def restore_levels():
    names = [""] + [name for group in log_config._CATEGORY_MAP.values() for name in group]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_category_levels_are_applied(monkeypatch, restore_levels):
    settings = Settings(
        _env_file=None,
        log_level="WARNING",
        log_level_http="ERROR",
        log_level_gateway="DEBUG",
    )
    monkeypatch.setattr(log_config, "get_settings", lambda: settings)

    applied = log_config.setup_logging()

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.ERROR
    assert logging.getLogger("httpcore").level == logging.ERROR
    assert logging.getLogger("sportsnews.infrastructure.supabase").level == logging.DEBUG
    assert applied["sportsnews.infrastructure.repositories"] == logging.DEBUG
    assert applied[""] == logging.WARNING


def test_unknown_level_name_falls_back_to_info():
    assert log_config._parse_level("verbose") == logging.INFO
    assert log_config._parse_level("debug") == logging.DEBUG
