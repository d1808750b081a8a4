"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Account:
    """
    Bank account snapshot as returned by the provider for one link.

    `available_balance` is what counts towards a summary's total balance;
    `current_balance` is kept for display.
    """

    account_id: str
    link_id: str
    category: str
    name: str
    currency: str
    current_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    available_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    account_type: str = ""
    institution: str = ""
    collected_at: Optional[datetime] = None
