"""View models for aggregation outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from coach.domain.models import (
    Account,
    Transaction,
    IncomeStream,
    RecurringExpense,
    ResourceType,
)


@dataclass(frozen=True)
class FinancialSummary:
    """
    Derived financial picture of one link.

    Recomputed from scratch on every aggregation, never patched.
    `total_balance` and `monthly_surplus` are derived on access from the
    embedded data so they cannot drift from it.
    """

    link_id: str
    generated_at: datetime
    monthly_income: Decimal
    monthly_fixed_expenses: Decimal
    monthly_variable_expenses: Decimal
    currency: str
    accounts: tuple[Account, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    income_streams: tuple[IncomeStream, ...] = ()
    recurring_expenses: tuple[RecurringExpense, ...] = ()

    @property
    def total_balance(self) -> Decimal:
        """Sum of available balances of the embedded accounts."""
        return sum((a.available_balance for a in self.accounts), Decimal("0"))

    @property
    def monthly_surplus(self) -> Decimal:
        """Income minus fixed and variable expenses; may be negative."""
        return self.monthly_income - self.monthly_fixed_expenses - self.monthly_variable_expenses


@dataclass(frozen=True)
class CacheEntry:
    """Cached summary for a link with its lifetime."""

    link_id: str
    summary: FinancialSummary
    owner_name: str
    cached_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Return True once `now` is past the expiry timestamp."""
        return now > self.expires_at


@dataclass
class DetailedContextView:
    """Aggregate view returned by a detailed context request."""

    link_id: str
    owner_name: str
    accounts: list[Account]
    transactions: list[Transaction]
    summary: FinancialSummary
    has_data: bool
    failed_resources: list[ResourceType] = field(default_factory=list)
    account_categories: dict[str, int] = field(default_factory=dict)
    accounts_by_category: dict[str, list[Account]] = field(default_factory=dict)
    context_line: str = ""
