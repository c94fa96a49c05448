"""CollabNetTrackerProvider - Manages issues in a CollabNet TeamForge tracker."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from teamforge_tracker.logging import describe_remote_error
from teamforge_tracker.provider.artifacts import get_field_value
from teamforge_tracker.provider.exceptions import (
    REMOTE_ERRORS,
    InvalidArgumentError,
    ProviderConfigurationError,
    ServiceUnavailableError,
)
from teamforge_tracker.provider.models import (
    CLOSED_STATUS_CLASS,
    CategoryFilter,
    IssueStatus,
    TrackerCategory,
    TrackerIssue,
)
from teamforge_tracker.provider.services import TeamForgeServices
from teamforge_tracker.provider.urls import issue_url

if TYPE_CHECKING:
    from collections.abc import Iterator

    from teamforge_tracker.config import TrackerConfig

logger = logging.getLogger("teamforge_tracker.provider")

DEFAULT_RELEASE_FIELD = "resolvedReleaseId"
STATUS_FIELD_NAME = "Status"
CLOSED_STATUS_NAME = "Closed"


class CollabNetTrackerProvider:
    """Issue tracker provider for CollabNet TeamForge.

    Every operation logs in, does its work through the CollabNet, TrackerApp
    and FrsApp SOAP services, and logs off again. Nothing is cached between
    operations except the service proxies.
    """

    NAME = "CollabNet TeamForge"
    DESCRIPTION = "Supports CollabNet TeamForge 5.3 and later."

    category_type_names = ("Project", "Tracker")
    can_append_issue_descriptions = True
    can_change_issue_statuses = True
    can_close_issues = True

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        release_field: str | None = DEFAULT_RELEASE_FIELD,
        category_filter: CategoryFilter | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the provider.

        Args:
            base_url: URL of the TeamForge server (e.g. "http://collabnet:8080")
            username: User to log in as
            password: Password for username
            release_field: Artifact field holding the release ID; empty or
                None lists issues without release filtering
            category_filter: Project and tracker the provider operates on
            timeout: Seconds to wait for each SOAP request
        """
        self.base_url = base_url
        self.username = username
        self.password = password
        self.release_field = release_field
        self.category_filter = category_filter or CategoryFilter()
        self.timeout = timeout
        self._services: TeamForgeServices | None = None

    @classmethod
    def from_config(cls, config: TrackerConfig) -> CollabNetTrackerProvider:
        """Create a provider from loaded configuration."""
        return cls(
            base_url=config.base_url,
            username=config.username,
            password=config.password,
            release_field=config.release_field,
            category_filter=config.category_filter,
            timeout=config.timeout,
        )

    def __str__(self) -> str:
        return "Connects to the issue tracking system of CollabNet TeamForge."

    @property
    def services(self) -> TeamForgeServices:
        """Get or create the SOAP service proxies."""
        if self._services is None:
            self._services = TeamForgeServices(self.base_url, timeout=self.timeout)
        return self._services

    def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._services is not None:
            self._services.close()
            self._services = None

    # Session handling

    def _login(self) -> str:
        """Log in to TeamForge.

        Returns:
            Session ID

        Raises:
            ServiceUnavailableError: If login fails for any reason or returns
                no session
        """
        try:
            session_id = self.services.login(self.username, self.password)
        except Exception as e:  # noqa: BLE001
            reason = describe_remote_error(e)
            logger.warning("Login to %s failed: %s", self.base_url, reason)
            raise ServiceUnavailableError(reason) from e

        if not session_id:
            logger.warning("Login to %s returned no session", self.base_url)
            raise ServiceUnavailableError(f"TeamForge at {self.base_url} returned no session")

        return session_id

    @contextmanager
    def session(self) -> Iterator[str]:
        """Log in for the duration of the block, always logging off afterwards.

        Yields:
            Session ID

        Raises:
            ServiceUnavailableError: If login fails
        """
        session_id = self._login()
        logger.debug("Logged in as %s", self.username)
        try:
            yield session_id
        finally:
            self.services.logoff(self.username, session_id)
            logger.debug("Logged off %s", self.username)

    def _require_tracker_id(self) -> str:
        tracker_id = self.category_filter.tracker_id
        if not tracker_id:
            raise ProviderConfigurationError("CollabNet issue tracker has not been specified.")
        return tracker_id

    @staticmethod
    def _require_issue_id(issue_id: str | None) -> str:
        if not issue_id:
            raise InvalidArgumentError("issue_id is required")
        return issue_id

    # Host-facing queries

    def is_available(self) -> bool:
        """Whether the provider can be used in this environment."""
        return True

    def validate_connection(self) -> None:
        """Log in and off once to check the configuration.

        Raises:
            ServiceUnavailableError: If TeamForge cannot be reached or the
                credentials are rejected
        """
        logger.info("Validating connection to %s", self.base_url)
        with self.session():
            pass
        logger.info("Connection to %s is valid", self.base_url)

    def get_issue_url(self, issue: TrackerIssue | None) -> str:
        """Get the web URL of an issue."""
        if issue is None:
            raise InvalidArgumentError("issue is required")
        return issue_url(self.base_url, issue.id)

    def is_issue_closed(self, issue: TrackerIssue) -> bool:
        """Whether the issue's status belongs to the Closed class."""
        return issue.is_closed

    # Listing

    def get_issues(self, release_number: str) -> list[TrackerIssue]:
        """Get the tracker's issues for a release.

        When a release field is configured, only artifacts whose release
        resolves to a release titled release_number are returned; otherwise
        every artifact in the tracker is.

        Args:
            release_number: Release title to match

        Returns:
            Issues in the order TeamForge lists them

        Raises:
            ProviderConfigurationError: If no tracker is specified
            ServiceUnavailableError: If login fails
        """
        tracker_id = self._require_tracker_id()
        logger.info("Listing issues in tracker %s for release %s", tracker_id, release_number)

        with self.session() as session_id:
            rows = self.services.get_artifact_list(session_id, tracker_id)

            issues = []
            for row in rows:
                if self.release_field:
                    data = self.services.get_artifact_data(session_id, row["id"])
                    release_id = get_field_value(data, self.release_field)
                    release_name = self._get_release_name(session_id, release_id)
                    logger.debug(
                        "Artifact %s has release %s (%s)", row["id"], release_id, release_name
                    )
                    if release_name != release_number:
                        continue

                issues.append(TrackerIssue.from_row(row, release_number))

        logger.info("Found %d issue(s) for release %s", len(issues), release_number)
        return issues

    def get_categories(self) -> list[TrackerCategory]:
        """Get all projects, each with its trackers as subcategories.

        Raises:
            ServiceUnavailableError: If login fails
        """
        logger.info("Listing projects and trackers")
        with self.session() as session_id:
            categories = []
            for project in self.services.get_project_list(session_id):
                trackers = [
                    TrackerCategory(id=tracker["id"], name=tracker.get("title") or "")
                    for tracker in self.services.get_tracker_list(session_id, project["id"])
                ]
                categories.append(
                    TrackerCategory(
                        id=project["id"],
                        name=project.get("title") or "",
                        subcategories=trackers,
                    )
                )

        logger.info("Found %d project(s)", len(categories))
        return categories

    def get_statuses(self) -> list[IssueStatus]:
        """Get the statuses defined on the configured tracker.

        Raises:
            ProviderConfigurationError: If no tracker is specified
            ServiceUnavailableError: If login fails
        """
        tracker_id = self._require_tracker_id()
        with self.session() as session_id:
            return self._get_available_statuses(session_id, tracker_id)

    # Updates

    def append_issue_description(self, issue_id: str, text_to_append: str) -> None:
        """Append text to an issue's description.

        Args:
            issue_id: Artifact ID
            text_to_append: Text to add; nothing is written if empty

        Raises:
            InvalidArgumentError: If issue_id is empty
            ServiceUnavailableError: If login fails
        """
        self._require_issue_id(issue_id)
        if not text_to_append:
            return

        logger.info("Appending to description of %s", issue_id)
        logger.debug("Appending %d character(s)", len(text_to_append))
        with self.session() as session_id:
            data = self.services.get_artifact_data(session_id, issue_id)
            data["description"] = (data.get("description") or "") + text_to_append
            self.services.set_artifact_data(session_id, data)

    def change_issue_status(self, issue_id: str, new_status: str) -> None:
        """Set an issue's status to one of the tracker's statuses.

        Args:
            issue_id: Artifact ID
            new_status: Exact name of the target status

        Raises:
            InvalidArgumentError: If issue_id is empty or new_status is not
                defined on the tracker
            ProviderConfigurationError: If no tracker is specified
            ServiceUnavailableError: If login fails
        """
        self._require_issue_id(issue_id)
        tracker_id = self._require_tracker_id()

        logger.info("Changing status of %s to %s", issue_id, new_status)
        with self.session() as session_id:
            statuses = self._get_available_statuses(session_id, tracker_id)
            match = next((s for s in statuses if s.name == new_status), None)
            if match is None:
                raise InvalidArgumentError("Invalid issue status.")

            self._set_status(session_id, issue_id, match)

    def close_issue(self, issue_id: str) -> None:
        """Move an issue to the tracker's closed status.

        Args:
            issue_id: Artifact ID

        Raises:
            InvalidArgumentError: If issue_id is empty
            ProviderConfigurationError: If no tracker is specified or the
                tracker has no closed status
            ServiceUnavailableError: If login fails
        """
        self._require_issue_id(issue_id)
        tracker_id = self._require_tracker_id()

        logger.info("Closing %s", issue_id)
        with self.session() as session_id:
            closed_status = self._get_closed_status(session_id, tracker_id)
            if closed_status is None:
                raise ProviderConfigurationError(
                    "The issue tracker does not have a closed status defined."
                )

            self._set_status(session_id, issue_id, closed_status)

    # Helpers

    def _set_status(self, session_id: str, issue_id: str, status: IssueStatus) -> None:
        data = self.services.get_artifact_data(session_id, issue_id)
        data["status"] = status.name
        data["statusClass"] = status.status_class
        self.services.set_artifact_data(session_id, data)
        logger.info("Set status of %s to %s", issue_id, status.name)

    def _get_release_name(self, session_id: str, release_id: str | None) -> str | None:
        """Resolve a release ID to its title.

        Lookup failures are reported as None: the release only narrows the
        issue list, so an unresolvable release excludes the artifact.
        """
        if not release_id:
            return None

        try:
            release: dict[str, Any] | None = self.services.get_release_data(session_id, release_id)
        except REMOTE_ERRORS as e:
            logger.warning(
                "Could not resolve release %s: %s", release_id, describe_remote_error(e)
            )
            return None

        if release is None:
            return None
        return release.get("title")

    def _get_available_statuses(self, session_id: str, tracker_id: str) -> list[IssueStatus]:
        """Get the values of the tracker's Status field."""
        for tracker_field in self.services.get_fields(session_id, tracker_id):
            if tracker_field.get("name") == STATUS_FIELD_NAME:
                return [
                    IssueStatus(name=value["value"], status_class=value.get("valueClass"))
                    for value in tracker_field.get("fieldValues") or []
                ]
        return []

    def _get_closed_status(self, session_id: str, tracker_id: str) -> IssueStatus | None:
        """Get the default closed status of a tracker, if it has one."""
        statuses = self._get_available_statuses(session_id, tracker_id)
        closed = [s for s in statuses if s.status_class == CLOSED_STATUS_CLASS]
        for status in closed:
            if status.name == CLOSED_STATUS_NAME:
                return status
        return closed[0] if closed else None
