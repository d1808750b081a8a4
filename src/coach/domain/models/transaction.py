"""Transaction domain model."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from coach.domain.models.enums import TransactionFlow


@dataclass(frozen=True)
class Transaction:
    """
    Transaction snapshot belonging to one account of a link.

    Amounts are unsigned; `flow` carries the direction.
    """

    transaction_id: str
    account_id: str
    flow: TransactionFlow
    amount: Decimal
    currency: str
    description: str = ""
    accounting_date: Optional[date] = None
    category: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.flow, str):
            object.__setattr__(self, "flow", TransactionFlow(self.flow.upper()))

    @property
    def is_inflow(self) -> bool:
        """Return True if money came into the account."""
        return self.flow == TransactionFlow.INFLOW

    @property
    def is_outflow(self) -> bool:
        """Return True if money left the account."""
        return self.flow == TransactionFlow.OUTFLOW
