import logging

import pytest

from jnum.core.config.settings import reset_config

# Disable all logging for tests to keep output clean
logging.disable(logging.CRITICAL)


@pytest.fixture(autouse=True)
def clean_global_config():
    """Ensure global config is reset before and after each test."""
    reset_config()
    yield
    reset_config()
