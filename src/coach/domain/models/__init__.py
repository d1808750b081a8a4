"""Domain models package."""

from coach.domain.models.enums import ResourceType, TransactionFlow
from coach.domain.models.account import Account
from coach.domain.models.transaction import Transaction
from coach.domain.models.owner import Owner, select_owner_name
from coach.domain.models.cashflow import IncomeStream, RecurringExpense
from coach.domain.models.credentials import ProviderCredentials
from coach.domain.models.date_range import DateRange

__all__ = [
    "ResourceType",
    "TransactionFlow",
    "Account",
    "Transaction",
    "Owner",
    "select_owner_name",
    "IncomeStream",
    "RecurringExpense",
    "ProviderCredentials",
    "DateRange",
]
