"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from teamforge_tracker.provider import CollabNetTrackerProvider

# Global provider instance (initialized on app startup)
_provider: CollabNetTrackerProvider | None = None


def init_provider(provider: CollabNetTrackerProvider) -> CollabNetTrackerProvider:
    """Initialize the global provider instance."""
    global _provider  # noqa: PLW0603
    _provider = provider
    return _provider


def close_provider() -> None:
    """Close the global provider instance."""
    global _provider  # noqa: PLW0603
    if _provider is not None:
        _provider.close()
        _provider = None


def get_provider() -> Generator[CollabNetTrackerProvider, None, None]:
    """Dependency that provides the provider instance."""
    if _provider is None:
        raise RuntimeError("Provider not initialized. Call init_provider() first.")
    yield _provider


# Type alias for dependency injection
ProviderDep = Annotated[CollabNetTrackerProvider, Depends(get_provider)]
