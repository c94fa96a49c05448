"""TeamForge tracker provider - Manages CollabNet TeamForge artifacts over SOAP."""

from teamforge_tracker.provider.exceptions import (
    REMOTE_ERRORS,
    InvalidArgumentError,
    ProviderConfigurationError,
    ServiceUnavailableError,
    TrackerError,
)
from teamforge_tracker.provider.models import (
    CategoryFilter,
    IssueStatus,
    TrackerCategory,
    TrackerIssue,
)
from teamforge_tracker.provider.provider import CollabNetTrackerProvider
from teamforge_tracker.provider.services import TeamForgeServices
from teamforge_tracker.provider.urls import combine_paths

__all__ = [
    "REMOTE_ERRORS",
    "CategoryFilter",
    "CollabNetTrackerProvider",
    "InvalidArgumentError",
    "IssueStatus",
    "ProviderConfigurationError",
    "ServiceUnavailableError",
    "TeamForgeServices",
    "TrackerCategory",
    "TrackerError",
    "TrackerIssue",
    "combine_paths",
]
