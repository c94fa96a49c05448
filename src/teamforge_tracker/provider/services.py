"""SOAP proxies for the TeamForge CollabNet, TrackerApp and FrsApp services."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

import requests
from zeep import Client
from zeep.exceptions import Error as ZeepError
from zeep.helpers import serialize_object
from zeep.proxy import ServiceProxy
from zeep.transports import Transport

from teamforge_tracker.provider.urls import (
    COLLABNET_SERVICE_PATH,
    FRS_APP_SERVICE_PATH,
    TRACKER_APP_SERVICE_PATH,
    combine_paths,
)

logger = logging.getLogger("teamforge_tracker.services")


def _as_list(value: Any) -> list[Any]:
    """Normalize a serialized SOAP array to a list."""
    if value is None:
        return []
    if isinstance(value, dict):
        # SOAP-encoded arrays may arrive wrapped in an item element
        value = value.get("item")
        if value is None:
            return []
    if isinstance(value, list):
        return value
    return [value]


def _data_rows(result: Any) -> list[dict[str, Any]]:
    """Get the rows of a TeamForge *SoapList result as plain dicts."""
    data = serialize_object(result, dict)
    if data is None:
        return []
    if isinstance(data, dict):
        return _as_list(data.get("dataRows"))
    return _as_list(data)


class TeamForgeServices:
    """Proxies for the three TeamForge SOAP services.

    Results are flattened to plain dicts and lists so callers never handle
    zeep types. Proxies are created on first use and bound to endpoints under
    the configured base URL, regardless of the address advertised in the WSDL.
    """

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        """Initialize the service proxies.

        Args:
            base_url: URL of the TeamForge server (e.g. "http://collabnet:8080")
            timeout: Seconds to wait for WSDL loading and each SOAP operation

        Raises:
            ValueError: If base_url is not an http or https URL
        """
        if urlsplit(base_url).scheme not in ("http", "https"):
            raise ValueError(f"TeamForge URL must start with http:// or https://: {base_url!r}")
        self.base_url = base_url
        self.timeout = timeout
        self._http: requests.Session | None = None
        self._transport: Transport | None = None
        self._collabnet: ServiceProxy | None = None
        self._tracker_app: ServiceProxy | None = None
        self._frs_app: ServiceProxy | None = None

    @property
    def transport(self) -> Transport:
        """Get or create the HTTP transport shared by all proxies."""
        if self._transport is None:
            self._http = requests.Session()
            self._transport = Transport(
                session=self._http,
                timeout=self.timeout,
                operation_timeout=self.timeout,
            )
        return self._transport

    def close(self) -> None:
        """Close the HTTP session and drop the proxies."""
        if self._http is not None:
            self._http.close()
            self._http = None
        self._transport = None
        self._collabnet = None
        self._tracker_app = None
        self._frs_app = None

    def _bind(self, service_path: str) -> ServiceProxy:
        """Create a proxy for the service at the given path."""
        address = combine_paths(self.base_url, service_path)
        logger.debug("Loading WSDL for %s", address)
        client = Client(f"{address}?wsdl", transport=self.transport)
        binding_name = next(iter(client.wsdl.bindings), None)
        if binding_name is None:
            raise ZeepError(f"WSDL for {address} defines no SOAP binding")
        return client.create_service(binding_name, address)

    @property
    def collabnet(self) -> ServiceProxy:
        """Get the CollabNet (core) service proxy."""
        if self._collabnet is None:
            self._collabnet = self._bind(COLLABNET_SERVICE_PATH)
        return self._collabnet

    @property
    def tracker_app(self) -> ServiceProxy:
        """Get the TrackerApp service proxy."""
        if self._tracker_app is None:
            self._tracker_app = self._bind(TRACKER_APP_SERVICE_PATH)
        return self._tracker_app

    @property
    def frs_app(self) -> ServiceProxy:
        """Get the FrsApp (file release) service proxy."""
        if self._frs_app is None:
            self._frs_app = self._bind(FRS_APP_SERVICE_PATH)
        return self._frs_app

    # CollabNet

    def login(self, username: str, password: str) -> str | None:
        """Log in and return the session ID."""
        session_id = self.collabnet.login(username, password)
        return str(session_id) if session_id else None

    def logoff(self, username: str, session_id: str) -> None:
        """Invalidate a session."""
        self.collabnet.logoff(username, session_id)

    def get_project_list(self, session_id: str) -> list[dict[str, Any]]:
        """List the projects visible to the session user."""
        return _data_rows(self.collabnet.getProjectList(session_id))

    # TrackerApp

    def get_tracker_list(self, session_id: str, project_id: str) -> list[dict[str, Any]]:
        """List the trackers of a project."""
        return _data_rows(self.tracker_app.getTrackerList(session_id, project_id))

    def get_artifact_list(self, session_id: str, tracker_id: str) -> list[dict[str, Any]]:
        """List every artifact in a tracker, unfiltered."""
        return _data_rows(self.tracker_app.getArtifactList(session_id, tracker_id, []))

    def get_artifact_data(self, session_id: str, artifact_id: str) -> dict[str, Any]:
        """Get the full record of an artifact."""
        data = serialize_object(self.tracker_app.getArtifactData(session_id, artifact_id), dict)
        flex_fields = data.get("flexFields")
        if flex_fields:
            flex_fields["names"] = _as_list(flex_fields.get("names"))
            flex_fields["values"] = _as_list(flex_fields.get("values"))
            if "types" in flex_fields:
                flex_fields["types"] = _as_list(flex_fields.get("types"))
        return dict(data)

    def set_artifact_data(self, session_id: str, artifact: dict[str, Any]) -> None:
        """Write an artifact record back with no comment and no attachment."""
        self.tracker_app.setArtifactData(session_id, artifact, "", None, None, None)

    def get_fields(self, session_id: str, tracker_id: str) -> list[dict[str, Any]]:
        """Get the field definitions of a tracker."""
        result = self.tracker_app.getFields(session_id, tracker_id)
        fields = _as_list(serialize_object(result, dict))
        for tracker_field in fields:
            tracker_field["fieldValues"] = _as_list(tracker_field.get("fieldValues"))
        return fields

    # FrsApp

    def get_release_data(self, session_id: str, release_id: str) -> dict[str, Any] | None:
        """Get a release record, or None if TeamForge returned nothing."""
        data = serialize_object(self.frs_app.getReleaseData(session_id, release_id), dict)
        return dict(data) if data else None
