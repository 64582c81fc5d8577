"""Shared pytest fixtures and configuration."""

import logging

import pytest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


@pytest.fixture(autouse=True)
def reset_prlabeler_logger():
    """Drop handlers added by setup_logging so they don't outlive a test."""
    yield
    logger = logging.getLogger("prlabeler")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
