"""Banking data providers module."""

from coach.providers.banking_data_provider import BankingDataProvider
from coach.providers.belvo_client import BelvoClient
from coach.providers.stub_provider import StubBankingDataProvider

__all__ = [
    "BankingDataProvider",
    "BelvoClient",
    "StubBankingDataProvider",
]
