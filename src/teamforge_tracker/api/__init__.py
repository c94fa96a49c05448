"""REST API for teamforge-tracker."""

from teamforge_tracker.api.app import app, create_app
from teamforge_tracker.api.models import (
    APIResponse,
    CategoryResponse,
    IssueResponse,
    ProviderResponse,
    StatusResponse,
)

__all__ = [
    "APIResponse",
    "CategoryResponse",
    "IssueResponse",
    "ProviderResponse",
    "StatusResponse",
    "app",
    "create_app",
]
