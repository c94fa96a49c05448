"""Fixtures for REST API tests."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from teamforge_tracker.api import create_app
from teamforge_tracker.provider import (
    CategoryFilter,
    CollabNetTrackerProvider,
    TeamForgeServices,
)

STATUS_FIELD = {
    "name": "Status",
    "fieldValues": [
        {"value": "Open", "valueClass": "Open"},
        {"value": "Closed", "valueClass": "Closed"},
    ],
}


@pytest.fixture
def services() -> MagicMock:
    """Create mock SOAP services with a working login."""
    services = MagicMock(spec=TeamForgeServices)
    services.login.return_value = "session-1"
    services.get_fields.return_value = [STATUS_FIELD]
    return services


@pytest.fixture
def category_filter() -> CategoryFilter:
    return CategoryFilter("proj1001", "tracker1002")


@pytest.fixture
def provider(services: MagicMock, category_filter: CategoryFilter) -> CollabNetTrackerProvider:
    """Create a provider backed by mocked services."""
    provider = CollabNetTrackerProvider(
        base_url="http://teamforge",
        username="builder",
        password="secret",
        release_field=None,
        category_filter=category_filter,
    )
    provider._services = services
    return provider


@pytest.fixture
def app(provider: CollabNetTrackerProvider) -> FastAPI:
    return create_app(tracker=provider)


@pytest.fixture
def client(app: FastAPI):
    """Create a test client; the lifespan installs the provider."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
