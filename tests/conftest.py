"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers the CLI attaches to the adf_convert logger between tests."""
    yield
    app_logger = logging.getLogger("adf_convert")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
