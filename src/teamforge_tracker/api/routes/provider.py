"""Provider information and connection endpoints."""

from fastapi import APIRouter

from teamforge_tracker.api.dependencies import ProviderDep
from teamforge_tracker.api.models import (
    APIResponse,
    ConnectionResponse,
    ProviderResponse,
    StatusResponse,
    provider_to_response,
    status_to_response,
)

router = APIRouter(tags=["provider"])


@router.get("/provider", response_model=APIResponse[ProviderResponse])
def get_provider_info(provider: ProviderDep) -> APIResponse[ProviderResponse]:
    """Describe the provider and what it supports."""
    return APIResponse(data=provider_to_response(provider))


@router.get("/connection", response_model=APIResponse[ConnectionResponse])
def validate_connection(provider: ProviderDep) -> APIResponse[ConnectionResponse]:
    """Log in and off TeamForge to check the configuration."""
    provider.validate_connection()
    return APIResponse(data=ConnectionResponse(connected=True))


@router.get("/statuses", response_model=APIResponse[list[StatusResponse]])
def list_statuses(provider: ProviderDep) -> APIResponse[list[StatusResponse]]:
    """List the statuses defined on the configured tracker."""
    statuses = provider.get_statuses()
    return APIResponse(data=[status_to_response(s) for s in statuses])
