"""
Error Handling - Exception taxonomy and recovery policies.

Every error raised by the filesystem or the index store is recovered
locally: the offending subtree is skipped, or the index falls back to
empty. This module decides how loudly each kind of failure is logged.
"""

import logging
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)


class FsIndexError(Exception):
    """Base exception for FSIndex errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class AccessError(FsIndexError):
    """Permission denied while enumerating a path."""
    pass


class NotFoundError(FsIndexError):
    """Path vanished (or is not a directory) between listing and traversal."""
    pass


class PersistenceError(FsIndexError):
    """Index file unreadable, unwritable or corrupt."""
    pass


class ErrorAction(Enum):
    """What to do when an error occurs."""
    SKIP = auto()           # Skip this item, continue processing
    ABORT = auto()          # Stop the current operation


@dataclass
class ErrorPolicy:
    """Policy for handling a specific error type."""
    action: ErrorAction
    log_level: int
    message_template: str = "{path}: {error}"


# Error type to policy mapping (first isinstance match wins)
ERROR_POLICIES: dict[type, ErrorPolicy] = {
    AccessError: ErrorPolicy(
        action=ErrorAction.SKIP,
        log_level=logging.WARNING,
        message_template="Access denied, skipping: {path}"
    ),
    NotFoundError: ErrorPolicy(
        action=ErrorAction.SKIP,
        log_level=logging.DEBUG,
        message_template="Path vanished, skipping: {path}"
    ),
    PersistenceError: ErrorPolicy(
        action=ErrorAction.SKIP,
        log_level=logging.WARNING,
        message_template="Index file problem: {path} - {error}"
    ),
}


def handle_error(
    error: Exception,
    path: Optional[str] = None,
    context: str = ""
) -> ErrorAction:
    """
    Log an error according to its policy and return the action to take.

    Args:
        error: The exception that occurred
        path: Path being processed (falls back to ``error.path``)
        context: Component name used as a log prefix

    Returns:
        The action to take
    """
    policy = None
    for error_type, p in ERROR_POLICIES.items():
        if isinstance(error, error_type):
            policy = p
            break

    if policy is None:
        policy = ErrorPolicy(
            action=ErrorAction.SKIP,
            log_level=logging.ERROR,
            message_template="Unexpected error: {path} - {error}"
        )

    if path is None:
        path = getattr(error, "path", None)
    message = policy.message_template.format(path=path or "<unknown>", error=str(error))
    if context:
        message = f"[{context}] {message}"

    logger.log(policy.log_level, message)

    return policy.action
