"""Service layer - aggregation and caching orchestration."""

from coach.services.summary_builder import build_summary
from coach.services.fan_out import (
    FanOutCoordinator,
    FetchOutcome,
    LinkFetchResult,
    DETAILED_RESOURCES,
    SUMMARY_RESOURCES,
)
from coach.services.context_cache import ContextCache
from coach.services.context_service import ContextService

__all__ = [
    "build_summary",
    "FanOutCoordinator",
    "FetchOutcome",
    "LinkFetchResult",
    "DETAILED_RESOURCES",
    "SUMMARY_RESOURCES",
    "ContextCache",
    "ContextService",
]
