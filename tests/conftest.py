"""Shared pytest fixtures and configuration."""

import logging

import pytest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: runs against a live TeamForge server (local only)")


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so streams don't outlive a test."""
    yield
    for name in ("teamforge_tracker", "zeep.transports"):
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
