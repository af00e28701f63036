"""
FundMe Funding Ledger

This module provides:
- Deposits validated against a USD minimum through a price feed
- Per-funder contribution tracking
- Owner-only withdrawal, in a direct and a storage-read-optimized variant
- Atomic rollback when the payout transfer fails
"""

from .models import (
    DepositRequest,
    WithdrawRequest,
    DepositResponse,
    WithdrawalResponse,
    LedgerState,
)
from .oracle import PriceOracle, MockV3Aggregator
from .accounts import AccountBook
from .service import (
    FundingLedger,
    LedgerServiceError,
    InsufficientValue,
    NotOwner,
    TransferFailed,
)

__all__ = [
    "DepositRequest",
    "WithdrawRequest",
    "DepositResponse",
    "WithdrawalResponse",
    "LedgerState",
    "PriceOracle",
    "MockV3Aggregator",
    "AccountBook",
    "FundingLedger",
    "LedgerServiceError",
    "InsufficientValue",
    "NotOwner",
    "TransferFailed",
]
