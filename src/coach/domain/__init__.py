"""Domain layer - pure models with no I/O."""

from coach.domain.models import (
    Account,
    Transaction,
    Owner,
    IncomeStream,
    RecurringExpense,
    ProviderCredentials,
    DateRange,
    ResourceType,
    TransactionFlow,
)
from coach.domain.views import FinancialSummary, CacheEntry, DetailedContextView

__all__ = [
    "Account",
    "Transaction",
    "Owner",
    "IncomeStream",
    "RecurringExpense",
    "ProviderCredentials",
    "DateRange",
    "ResourceType",
    "TransactionFlow",
    "FinancialSummary",
    "CacheEntry",
    "DetailedContextView",
]
