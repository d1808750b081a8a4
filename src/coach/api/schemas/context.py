"""Pydantic schemas for financial context endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

from coach.domain.models import ProviderCredentials, TransactionFlow


class CredentialsRequest(BaseModel):
    """Request schema carrying provider credentials."""

    secret_id: str = Field(default="", description="Provider secret id")
    secret_key: str = Field(default="", description="Provider secret key")
    environment: Literal["sandbox", "production"] = "sandbox"

    def to_credentials(self) -> ProviderCredentials:
        return ProviderCredentials(
            secret_id=self.secret_id,
            secret_key=self.secret_key,
            environment=self.environment,
        )


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    account_id: str
    link_id: str
    category: str
    name: str
    currency: str
    current_balance: Decimal
    available_balance: Decimal
    account_type: str = ""
    institution: str = ""


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    transaction_id: str
    account_id: str
    flow: TransactionFlow
    amount: Decimal
    currency: str
    description: str = ""
    accounting_date: Optional[date] = None
    category: Optional[str] = None


class FinancialSummaryResponse(BaseModel):
    """Response schema for a derived financial summary."""

    model_config = {"from_attributes": True}

    link_id: str
    generated_at: datetime
    monthly_income: Decimal
    monthly_fixed_expenses: Decimal
    monthly_variable_expenses: Decimal
    monthly_surplus: Decimal
    total_balance: Decimal
    currency: str
    accounts: list[AccountResponse]
    transactions: list[TransactionResponse]


class DetailedContextResponse(BaseModel):
    """Response schema for a detailed link context."""

    link_id: str
    owner_name: str
    has_data: bool
    account_count: int
    transaction_count: int
    total_balance: Decimal
    currency: str
    accounts: list[AccountResponse]
    transactions: list[TransactionResponse]
    account_categories: dict[str, int]
    accounts_by_category: dict[str, list[AccountResponse]]
    failed_resources: list[str]
    financial_summary: FinancialSummaryResponse
    context_line: str


class CachedContextResponse(BaseModel):
    """Response schema for a cache lookup."""

    model_config = {"from_attributes": True}

    link_id: str
    owner_name: str
    cached_at: datetime
    expires_at: datetime
    summary: FinancialSummaryResponse
