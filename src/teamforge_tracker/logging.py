"""Logging setup for the teamforge-tracker CLI and API server.

Console output goes to stderr. The API server also keeps a rotating log file.
Every handler redacts passwords and session IDs, which appear in SOAP
envelopes and faults.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

from zeep.exceptions import Fault

ROOT_LOGGER = "teamforge_tracker"
# zeep logs full request and response envelopes here at DEBUG
SOAP_TRANSPORT_LOGGER = "zeep.transports"

LOG_FILE = "teamforge-tracker.log"
LEVEL_ENV_VAR = "TEAMFORGE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_XML_CREDENTIAL = re.compile(
    r"(<(?:\w+:)?(password|sessionId)\b[^>]*>).*?(</(?:\w+:)?\2>)", re.IGNORECASE | re.DOTALL
)
_KEY_VALUE_CREDENTIAL = re.compile(
    r"\b(password|sessionId)(\s*[=:]\s*)[^\s,&;<]+", re.IGNORECASE
)
_CREDENTIAL_PATTERNS = [
    (_XML_CREDENTIAL, r"\1[REDACTED]\3"),
    (_KEY_VALUE_CREDENTIAL, r"\1\2[REDACTED]"),
    (re.compile(r"\bBasic [A-Za-z0-9+/=]+"), "Basic [REDACTED]"),
]


def redact_credentials(text: str) -> str:
    """Replace passwords, session IDs and Basic credentials with [REDACTED]."""
    for pattern, replacement in _CREDENTIAL_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def describe_remote_error(error: BaseException, max_length: int = 500) -> str:
    """One-line, redacted summary of a SOAP fault or transport error.

    Faults are reported by their fault string and code; anything else by its
    message, or by its type name when the message is empty.
    """
    if isinstance(error, Fault):
        text = error.message or "SOAP fault"
        if error.code:
            text = f"{text} ({error.code})"
    else:
        text = str(error) or type(error).__name__

    text = redact_credentials(" ".join(text.split()))
    if len(text) > max_length:
        text = text[: max_length - 3] + "..."
    return text


class RedactingFilter(logging.Filter):
    """Redacts the formatted message of every record a handler emits."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact_credentials(record.getMessage())
        record.args = None
        return True


def setup_logging(
    verbose: bool = False,
    log_dir: str | Path | None = None,
    default_level: str = "WARNING",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Configure the teamforge_tracker logger.

    Args:
        verbose: Log at DEBUG and include zeep's SOAP envelope logging.
        log_dir: Also write a rotating teamforge-tracker.log here.
        default_level: Level when not verbose and TEAMFORGE_LOG_LEVEL is unset.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files to keep.

    Returns:
        The teamforge_tracker logger.
    """
    level_name = "DEBUG" if verbose else os.environ.get(LEVEL_ENV_VAR, default_level)
    level = getattr(logging, level_name.upper(), logging.WARNING)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_path = None
    if log_dir is not None:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / LOG_FILE
        handlers.append(
            RotatingFileHandler(
                log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(RedactingFilter())

    configured = [ROOT_LOGGER, SOAP_TRANSPORT_LOGGER] if verbose else [ROOT_LOGGER]
    for name in (ROOT_LOGGER, SOAP_TRANSPORT_LOGGER):
        target = logging.getLogger(name)
        for handler in target.handlers:
            handler.close()
        target.handlers.clear()
        if name in configured:
            target.setLevel(level)
            target.handlers.extend(handlers)
        else:
            target.setLevel(logging.NOTSET)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.debug("Logging at %s to %s", logging.getLevelName(level), log_path or "stderr")
    return logger
