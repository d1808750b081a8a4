"""Enumerations for domain models."""

from enum import Enum


class ResourceType(str, Enum):
    """Resource types fetched from the banking data provider."""

    ACCOUNTS = "accounts"
    TRANSACTIONS = "transactions"
    OWNERS = "owners"
    INCOMES = "incomes"
    RECURRING_EXPENSES = "recurring_expenses"


class TransactionFlow(str, Enum):
    """Direction of money movement as classified by the provider."""

    INFLOW = "INFLOW"
    OUTFLOW = "OUTFLOW"
