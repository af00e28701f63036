import logging
import threading
from typing import Callable, Iterable, Optional

from .accounts import AccountBook, BalanceTooLow, TransferRejected
from .models import (
    DepositRequest,
    DepositResponse,
    LedgerState,
    WithdrawRequest,
    WithdrawalResponse,
    WEI_PER_ETHER,
)
from .oracle import PriceOracle, latest_rate, to_usd


logger = logging.getLogger(__name__)

MINIMUM_USD = 50 * WEI_PER_ETHER


class LedgerServiceError(Exception):
    pass


class InsufficientValue(LedgerServiceError):
    pass


class NotOwner(LedgerServiceError):
    pass


class TransferFailed(LedgerServiceError):
    pass


class InsufficientFunds(LedgerServiceError):
    pass


class InvalidPrice(LedgerServiceError):
    pass


class FunderNotFound(LedgerServiceError):
    pass


class LedgerStorage:
    """Persistent ledger state; counts the reads and clears a withdrawal costs."""

    def __init__(self):
        self.funders: list[str] = []
        self.address_to_amount_funded: dict[str, int] = {}
        self.balance: int = 0
        self.reads = 0
        self.clears = 0

    def funder_count(self) -> int:
        self.reads += 1
        return len(self.funders)

    def funder_at(self, index: int) -> str:
        self.reads += 1
        return self.funders[index]

    def load_funders(self) -> list[str]:
        self.reads += 1
        return list(self.funders)

    def clear_amount(self, address: str) -> None:
        self.clears += 1
        self.address_to_amount_funded.pop(address, None)

    def reset_counters(self) -> None:
        self.reads = 0
        self.clears = 0

    def snapshot(self) -> tuple[list[str], dict[str, int], int, int, int]:
        return list(self.funders), dict(self.address_to_amount_funded), self.balance, self.reads, self.clears

    def restore(self, saved: tuple[list[str], dict[str, int], int, int, int]) -> None:
        funders, amounts, balance, reads, clears = saved
        self.funders = list(funders)
        self.address_to_amount_funded = dict(amounts)
        self.balance = balance
        self.reads = reads
        self.clears = clears


class FundingLedger:
    def __init__(
        self,
        owner: str,
        price_feed: PriceOracle,
        accounts: Optional[AccountBook] = None,
        address: Optional[str] = None,
        storage: Optional[LedgerStorage] = None,
    ):
        self._owner = owner.lower()
        self.price_feed = price_feed
        self.accounts = accounts or AccountBook()
        self.address = address
        self.storage = storage or LedgerStorage()
        self._lock = threading.RLock()

    def deposit(self, request: DepositRequest) -> DepositResponse:
        with self._lock:
            quote = latest_rate(self.price_feed)
            if quote.value < 0:
                raise InvalidPrice(f"Price feed {self.price_feed.address} reported {quote.value}")

            usd_value = to_usd(request.amount, quote)
            if usd_value < MINIMUM_USD:
                logger.info(
                    "Rejected deposit of %s wei from %s: worth %s, minimum %s",
                    request.amount, request.caller, usd_value, MINIMUM_USD,
                )
                raise InsufficientValue("You need to spend more ETH!")

            try:
                self.accounts.debit(request.caller, request.amount)
            except BalanceTooLow as e:
                raise InsufficientFunds(str(e)) from e

            amounts = self.storage.address_to_amount_funded
            amounts[request.caller] = amounts.get(request.caller, 0) + request.amount
            self.storage.funders.append(request.caller)
            self.storage.balance += request.amount

            logger.info("Deposit of %s wei from %s accepted", request.amount, request.caller)
            return DepositResponse(
                caller=request.caller,
                amount=request.amount,
                usd_value=usd_value,
                contribution=amounts[request.caller],
                balance=self.storage.balance,
                funder_index=len(self.storage.funders) - 1,
                message="Deposit accepted",
            )

    def withdraw(self, request: WithdrawRequest) -> WithdrawalResponse:
        return self._withdraw(request, self._iter_funders_from_storage)

    def cheaper_withdraw(self, request: WithdrawRequest) -> WithdrawalResponse:
        return self._withdraw(request, self._iter_funders_from_memory)

    def _iter_funders_from_storage(self) -> Iterable[str]:
        index = 0
        while index < self.storage.funder_count():
            yield self.storage.funder_at(index)
            index += 1

    def _iter_funders_from_memory(self) -> Iterable[str]:
        funders = self.storage.load_funders()
        for funder in funders:
            yield funder

    def _withdraw(self, request: WithdrawRequest, traverse: Callable[[], Iterable[str]]) -> WithdrawalResponse:
        with self._lock:
            if request.caller != self._owner:
                raise NotOwner("FundMe__NotOwner")

            saved = self.storage.snapshot()
            self.storage.reset_counters()
            cleared = self._clear_ledger(traverse())
            amount = saved[2]

            try:
                self.accounts.send(self._owner, amount)
            except TransferRejected as e:
                self.storage.restore(saved)
                logger.warning("Withdrawal of %s wei rolled back: %s", amount, e)
                raise TransferFailed("Call failed") from e

            logger.info("Withdrew %s wei to %s, cleared %s funder entries", amount, self._owner, cleared)
            return WithdrawalResponse(
                owner=self._owner,
                amount=amount,
                funders_cleared=cleared,
                storage_reads=self.storage.reads,
                storage_clears=self.storage.clears,
                message="Withdrawal completed",
            )

    def _clear_ledger(self, funders: Iterable[str]) -> int:
        cleared = 0
        for funder in funders:
            self.storage.clear_amount(funder)
            cleared += 1
        self.storage.funders = []
        self.storage.balance = 0
        return cleared

    def get_owner(self) -> str:
        return self._owner

    def get_price_feed(self) -> str:
        return self.price_feed.address

    def get_version(self) -> int:
        return self.price_feed.version()

    def get_funder(self, index: int) -> str:
        with self._lock:
            if index < 0 or index >= len(self.storage.funders):
                raise FunderNotFound(f"No funder at index {index}")
            return self.storage.funders[index]

    def get_amount_funded(self, address: str) -> int:
        with self._lock:
            return self.storage.address_to_amount_funded.get(address.lower(), 0)

    def get_balance(self) -> int:
        with self._lock:
            return self.storage.balance

    def snapshot(self) -> LedgerState:
        with self._lock:
            return LedgerState(
                owner=self._owner,
                price_feed=self.price_feed.address,
                balance=self.storage.balance,
                funders=list(self.storage.funders),
                contributions=dict(self.storage.address_to_amount_funded),
            )
