"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class ResourceUnavailableError(AppError):
    """
    Raised when a single remote fetch fails.

    Network errors, non-success statuses, malformed payloads and timeouts all
    map here. The resource type is kept for logging; no retry hint is carried.
    """

    def __init__(self, resource: str, link_id: str, reason: str, status_code: Optional[int] = None):
        self.resource = resource
        self.link_id = link_id
        self.reason = reason
        self.status_code = status_code
        super().__init__(
            f"{resource} unavailable for link {short_id(link_id)}: {reason}",
            code="RESOURCE_UNAVAILABLE",
        )


class AggregationError(AppError):
    """Raised when the strict summary path cannot fetch a required resource."""

    def __init__(self, link_id: str, failed: list[str]):
        self.link_id = link_id
        self.failed = failed
        super().__init__(
            f"Failed to aggregate financial data for link {short_id(link_id)}: "
            f"{', '.join(failed)} unavailable",
            code="AGGREGATION_FAILED",
        )


def short_id(identifier: str) -> str:
    """Shorten an identifier for log and error messages."""
    return identifier[:8]
