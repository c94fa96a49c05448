"""Custom exceptions for the TeamForge tracker provider."""

import requests
from zeep.exceptions import Error as ZeepError

# Raised by the SOAP stack for remote faults and transport failures. Outside of
# login these propagate to the caller unchanged.
REMOTE_ERRORS: tuple[type[Exception], ...] = (ZeepError, requests.RequestException)


class TrackerError(Exception):
    """Base exception for tracker provider errors."""


class ProviderConfigurationError(TrackerError):
    """Provider is missing configuration required by the operation."""


class ServiceUnavailableError(TrackerError):
    """TeamForge could not be reached or refused the login."""


class InvalidArgumentError(TrackerError, ValueError):
    """Argument is missing or does not match anything in the tracker."""
