"""
Tests for settings validation and logging setup.
"""

import logging

import pytest

from challenge_solver.config import Settings
from challenge_solver.utils.logger import LOGGER_NAME, configure_logging


def test_defaults_are_valid():
    settings = Settings()
    assert settings.api_port > 0
    assert settings.max_retries >= 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"retry_backoff": "random"},
        {"validation_mode": "lenient"},
        {"cache_backend": "memcached"},
        {"max_retries": 0},
        {"detail_batch_size": 50},
        {"page_delay": -1.0},
    ],
)
def test_invalid_settings_rejected(overrides):
    with pytest.raises(ValueError):
        Settings(**overrides)


def test_configure_logging_is_idempotent():
    """Test that repeated setup does not stack handlers."""
    logger = configure_logging("DEBUG")
    configure_logging("WARNING")

    assert logger is logging.getLogger(LOGGER_NAME)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
