"""Pydantic schemas for API request/response."""

from coach.api.schemas.context import (
    CredentialsRequest,
    AccountResponse,
    TransactionResponse,
    FinancialSummaryResponse,
    DetailedContextResponse,
    CachedContextResponse,
)

__all__ = [
    "CredentialsRequest",
    "AccountResponse",
    "TransactionResponse",
    "FinancialSummaryResponse",
    "DetailedContextResponse",
    "CachedContextResponse",
]
