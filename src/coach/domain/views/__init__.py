"""View models for service outputs."""

from coach.domain.views.summary import (
    FinancialSummary,
    CacheEntry,
    DetailedContextView,
)

__all__ = [
    "FinancialSummary",
    "CacheEntry",
    "DetailedContextView",
]
