"""Issue endpoints."""

from fastapi import APIRouter, Query, status

from teamforge_tracker.api.dependencies import ProviderDep
from teamforge_tracker.api.models import (
    AppendDescriptionRequest,
    APIResponse,
    ChangeStatusRequest,
    IssueResponse,
    issue_to_response,
)

router = APIRouter(prefix="/issues", tags=["issues"])


@router.get("", response_model=APIResponse[list[IssueResponse]])
def list_issues(
    provider: ProviderDep,
    release: str = Query(..., description="Release title to list issues for"),
) -> APIResponse[list[IssueResponse]]:
    """List the configured tracker's issues for a release."""
    issues = provider.get_issues(release)
    return APIResponse(data=[issue_to_response(i, provider) for i in issues])


@router.post("/{issue_id}/description", status_code=status.HTTP_204_NO_CONTENT)
def append_description(
    issue_id: str, request: AppendDescriptionRequest, provider: ProviderDep
) -> None:
    """Append text to an issue's description."""
    provider.append_issue_description(issue_id, request.text)


@router.post("/{issue_id}/status", status_code=status.HTTP_204_NO_CONTENT)
def change_status(issue_id: str, request: ChangeStatusRequest, provider: ProviderDep) -> None:
    """Change an issue's status."""
    provider.change_issue_status(issue_id, request.status)


@router.post("/{issue_id}/close", status_code=status.HTTP_204_NO_CONTENT)
def close_issue(issue_id: str, provider: ProviderDep) -> None:
    """Close an issue."""
    provider.close_issue(issue_id)
