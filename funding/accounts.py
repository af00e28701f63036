"""External balances of the identities that interact with the ledger."""

import logging
from typing import Optional

from .models import WEI_PER_ETHER


logger = logging.getLogger(__name__)

DEV_ACCOUNT_BALANCE = 10_000 * WEI_PER_ETHER


class AccountError(Exception):
    pass


class BalanceTooLow(AccountError):
    pass


class TransferRejected(AccountError):
    pass


def dev_address(index: int) -> str:
    return "0x" + f"{0xf39f0000 + index:040x}"


class AccountBook:
    def __init__(self, balances: Optional[dict[str, int]] = None):
        self.balances: dict[str, int] = {a.lower(): v for a, v in (balances or {}).items()}
        self.rejecting: set[str] = set()

    @classmethod
    def with_dev_accounts(cls, count: int = 10, balance: int = DEV_ACCOUNT_BALANCE) -> "AccountBook":
        return cls({dev_address(i): balance for i in range(count)})

    @property
    def addresses(self) -> list[str]:
        return list(self.balances)

    def balance_of(self, address: str) -> int:
        return self.balances.get(address.lower(), 0)

    def set_balance(self, address: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("Balance cannot be negative")
        self.balances[address.lower()] = amount

    def debit(self, address: str, amount: int) -> None:
        address = address.lower()
        available = self.balance_of(address)
        if available < amount:
            raise BalanceTooLow(f"{address} holds {available} wei, needs {amount}")
        self.balances[address] = available - amount

    def send(self, recipient: str, amount: int) -> None:
        recipient = recipient.lower()
        if recipient in self.rejecting:
            raise TransferRejected(f"{recipient} rejected incoming transfer of {amount} wei")
        self.balances[recipient] = self.balance_of(recipient) + amount
        logger.debug("Sent %s wei to %s", amount, recipient)

    def reject_incoming(self, *addresses: str) -> None:
        self.rejecting.update(a.lower() for a in addresses)

    def accept_incoming(self, *addresses: str) -> None:
        self.rejecting.difference_update(a.lower() for a in addresses)
