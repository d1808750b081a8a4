"""Provider-derived cash flow streams (incomes and recurring expenses)."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class IncomeStream:
    """Income stream detected by the provider for an account."""

    income_id: str
    account_id: str
    monthly_average: Decimal = field(default_factory=lambda: Decimal("0"))
    frequency: str = ""
    currency: str = ""
    income_type: str = ""


@dataclass(frozen=True)
class RecurringExpense:
    """Recurring expense detected by the provider for an account."""

    expense_id: str
    account_id: str
    average_transaction_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    frequency: str = ""
    category: str = ""
    currency: str = ""
