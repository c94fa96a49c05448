"""URL helpers for TeamForge endpoints."""

COLLABNET_SERVICE_PATH = "/ce-soap50/services/CollabNet"
TRACKER_APP_SERVICE_PATH = "/ce-soap50/services/TrackerApp"
FRS_APP_SERVICE_PATH = "/ce-soap50/services/FrsApp"
ISSUE_URL_FORMAT = "/sf/go/{issue_id}"


def combine_paths(base_url: str, relative_url: str) -> str:
    """Join a base URL and a relative path with exactly one slash between them.

    Args:
        base_url: Root URL, with or without a trailing slash
        relative_url: Path to append, with or without a leading slash

    Returns:
        Combined URL
    """
    if base_url.endswith("/"):
        if relative_url.startswith("/"):
            return base_url + relative_url[1:]
        return base_url + relative_url
    if relative_url.startswith("/"):
        return base_url + relative_url
    return f"{base_url}/{relative_url}"


def issue_url(base_url: str, issue_id: str) -> str:
    """Get the web URL of a TeamForge artifact."""
    return combine_paths(base_url, ISSUE_URL_FORMAT.format(issue_id=issue_id))
