"""Category (project and tracker) endpoints."""

from fastapi import APIRouter

from teamforge_tracker.api.dependencies import ProviderDep
from teamforge_tracker.api.models import APIResponse, CategoryResponse, category_to_response

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=APIResponse[list[CategoryResponse]])
def list_categories(provider: ProviderDep) -> APIResponse[list[CategoryResponse]]:
    """List all projects with their trackers."""
    categories = provider.get_categories()
    return APIResponse(data=[category_to_response(c) for c in categories])
