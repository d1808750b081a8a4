"""Conversion of Belvo JSON records into domain models."""

from decimal import Decimal
from typing import Any, Optional

from coach.core.timezone import parse_provider_date, parse_provider_datetime
from coach.domain.models import (
    Account,
    IncomeStream,
    Owner,
    RecurringExpense,
    ResourceType,
    Transaction,
)


def to_decimal(value: Any) -> Decimal:
    """
    Convert a JSON number (or numeric string) to Decimal; null is zero.

    Raises ValueError for NaN or infinite values.
    """
    if value is None:
        return Decimal("0")
    result = Decimal(str(value))
    if not result.is_finite():
        raise ValueError(f"amount is not finite: {value!r}")
    return result


def _as_record(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{what} is not an object: {value!r}")
    return value


def _reference_id(value: Any) -> str:
    """Related objects come either expanded (dict with id) or as a bare id."""
    if isinstance(value, dict):
        return str(value["id"])
    if value is None:
        return ""
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"unexpected reference: {value!r}")


def _institution_name(value: Any) -> str:
    if isinstance(value, dict):
        return value.get("display_name") or value.get("name") or ""
    return str(value or "")


def parse_account(record: dict, link_id: str) -> Account:
    record = _as_record(record, "record")
    balance = _as_record(record.get("balance") or {}, "balance")
    return Account(
        account_id=str(record["id"]),
        link_id=record.get("link") or link_id,
        category=record.get("category") or "",
        name=record.get("name") or "",
        currency=record.get("currency") or "",
        current_balance=to_decimal(balance.get("current")),
        available_balance=to_decimal(balance.get("available")),
        account_type=record.get("type") or "",
        institution=_institution_name(record.get("institution")),
        collected_at=parse_provider_datetime(record.get("collected_at")),
    )


def parse_transaction(record: dict, link_id: str) -> Transaction:
    record = _as_record(record, "record")
    return Transaction(
        transaction_id=str(record["id"]),
        account_id=_reference_id(record.get("account")),
        flow=record["type"],
        amount=to_decimal(record.get("amount")),
        currency=record.get("currency") or "",
        description=record.get("description") or "",
        accounting_date=parse_provider_date(
            record.get("accounting_date") or record.get("value_date")
        ),
        category=record.get("category"),
    )


def parse_owner(record: dict, link_id: str) -> Owner:
    record = _as_record(record, "record")
    return Owner(
        owner_id=str(record["id"]),
        link_id=record.get("link") or link_id,
        display_name=record.get("display_name") or "",
        full_name=record.get("full_name") or "",
        email=record.get("email"),
    )


def parse_income(record: dict, link_id: str) -> IncomeStream:
    record = _as_record(record, "record")
    return IncomeStream(
        income_id=str(record["id"]),
        account_id=_reference_id(record.get("account")),
        monthly_average=to_decimal(record.get("monthly_average")),
        frequency=record.get("frequency") or "",
        currency=record.get("currency") or "",
        income_type=record.get("income_type") or "",
    )


def parse_recurring_expense(record: dict, link_id: str) -> RecurringExpense:
    record = _as_record(record, "record")
    return RecurringExpense(
        expense_id=str(record["id"]),
        account_id=_reference_id(record.get("account")),
        average_transaction_amount=to_decimal(record.get("average_transaction_amount")),
        frequency=record.get("frequency") or "",
        category=record.get("category") or "",
        currency=record.get("currency") or "",
    )


PARSERS = {
    ResourceType.ACCOUNTS: parse_account,
    ResourceType.TRANSACTIONS: parse_transaction,
    ResourceType.OWNERS: parse_owner,
    ResourceType.INCOMES: parse_income,
    ResourceType.RECURRING_EXPENSES: parse_recurring_expense,
}


def unwrap_records(payload: Any) -> Optional[list]:
    """
    Return the record list of a response body.

    Some endpoints answer with a bare array, others with a paginated
    `{"results": [...]}` object. Anything else returns None.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        return payload["results"]
    return None
