"""Pydantic models for REST API."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from teamforge_tracker.provider import (
    CollabNetTrackerProvider,
    IssueStatus,
    TrackerCategory,
    TrackerIssue,
)

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Provider models


class ProviderResponse(BaseModel):
    """Response model describing the provider and its capabilities."""

    name: str
    description: str
    available: bool
    category_type_names: list[str]
    can_append_issue_descriptions: bool
    can_change_issue_statuses: bool
    can_close_issues: bool
    category_filter: list[str]


class ConnectionResponse(BaseModel):
    """Response model for a successful connection check."""

    connected: bool


# Category models


class CategoryResponse(BaseModel):
    """Response model for a project or tracker."""

    id: str
    name: str
    subcategories: list["CategoryResponse"] = Field(default_factory=list)


class StatusResponse(BaseModel):
    """Response model for a tracker status."""

    name: str
    status_class: str | None


# Issue models


class IssueResponse(BaseModel):
    """Response model for an issue."""

    id: str
    status: str
    title: str
    description: str
    release: str | None
    closed: bool
    url: str


class AppendDescriptionRequest(BaseModel):
    """Request model for appending to an issue description."""

    text: str


class ChangeStatusRequest(BaseModel):
    """Request model for changing an issue's status."""

    status: str = Field(..., min_length=1)


def provider_to_response(provider: CollabNetTrackerProvider) -> ProviderResponse:
    """Convert a provider to ProviderResponse."""
    return ProviderResponse(
        name=provider.NAME,
        description=provider.DESCRIPTION,
        available=provider.is_available(),
        category_type_names=list(provider.category_type_names),
        can_append_issue_descriptions=provider.can_append_issue_descriptions,
        can_change_issue_statuses=provider.can_change_issue_statuses,
        can_close_issues=provider.can_close_issues,
        category_filter=provider.category_filter.to_ids(),
    )


def category_to_response(category: TrackerCategory) -> CategoryResponse:
    """Convert a TrackerCategory (and its children) to CategoryResponse."""
    return CategoryResponse(
        id=category.id,
        name=category.name,
        subcategories=[category_to_response(c) for c in category.subcategories],
    )


def status_to_response(status: IssueStatus) -> StatusResponse:
    """Convert an IssueStatus to StatusResponse."""
    return StatusResponse(name=status.name, status_class=status.status_class)


def issue_to_response(issue: TrackerIssue, provider: CollabNetTrackerProvider) -> IssueResponse:
    """Convert a TrackerIssue to IssueResponse."""
    return IssueResponse(
        id=issue.id,
        status=issue.status,
        title=issue.title,
        description=issue.description,
        release=issue.release,
        closed=provider.is_issue_closed(issue),
        url=provider.get_issue_url(issue),
    )
