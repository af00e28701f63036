"""
Price feeds for the funding ledger.

A price feed reports the ETH/USD rate the same way a Chainlink aggregator
does: an integer answer scaled by ``decimals()``, tagged with round data.
Production code binds a real feed; development networks and tests bind
``MockV3Aggregator``.
"""

import time
from datetime import datetime, timezone
from typing import Optional, Protocol, runtime_checkable

from .models import PriceQuote, RoundData, WEI_PER_ETHER


DECIMALS = 8
INITIAL_ANSWER = 2000 * 10**DECIMALS
PRICE_PRECISION = 18


@runtime_checkable
class PriceOracle(Protocol):
    address: str

    def decimals(self) -> int: ...

    def version(self) -> int: ...

    def description(self) -> str: ...

    def latest_round_data(self) -> RoundData: ...


class MockV3Aggregator:
    """In-process stand-in for an aggregator, driven by ``update_answer``."""

    def __init__(self, decimals: int = DECIMALS, initial_answer: int = INITIAL_ANSWER,
                 address: Optional[str] = None):
        self.address = (address or "0x" + "0" * 39 + "1").lower()
        self._decimals = decimals
        self.latest_answer = 0
        self.latest_timestamp = 0
        self.latest_round = 0
        self.answers: dict[int, int] = {}
        self.timestamps: dict[int, int] = {}
        self.started_at: dict[int, int] = {}
        self.update_answer(initial_answer)

    def decimals(self) -> int:
        return self._decimals

    def version(self) -> int:
        return 0

    def description(self) -> str:
        return "v0.6/tests/MockV3Aggregator.sol"

    def update_answer(self, answer: int) -> None:
        now = int(time.time())
        self.latest_answer = answer
        self.latest_timestamp = now
        self.latest_round += 1
        self.answers[self.latest_round] = answer
        self.timestamps[self.latest_round] = now
        self.started_at[self.latest_round] = now

    def update_round_data(self, round_id: int, answer: int, timestamp: int, started_at: int) -> None:
        self.latest_round = round_id
        self.latest_answer = answer
        self.latest_timestamp = timestamp
        self.answers[round_id] = answer
        self.timestamps[round_id] = timestamp
        self.started_at[round_id] = started_at

    def get_answer(self, round_id: int) -> int:
        return self.answers.get(round_id, 0)

    def get_timestamp(self, round_id: int) -> int:
        return self.timestamps.get(round_id, 0)

    def get_round_data(self, round_id: int) -> RoundData:
        return RoundData(
            round_id=round_id,
            answer=self.answers.get(round_id, 0),
            started_at=self.started_at.get(round_id, 0),
            updated_at=self.timestamps.get(round_id, 0),
            answered_in_round=round_id,
        )

    def latest_round_data(self) -> RoundData:
        return RoundData(
            round_id=self.latest_round,
            answer=self.latest_answer,
            started_at=self.started_at.get(self.latest_round, 0),
            updated_at=self.latest_timestamp,
            answered_in_round=self.latest_round,
        )


def latest_rate(feed: PriceOracle) -> PriceQuote:
    data = feed.latest_round_data()
    as_of = datetime.fromtimestamp(data.updated_at, tz=timezone.utc) if data.updated_at else None
    return PriceQuote(value=data.answer, decimals=feed.decimals(), as_of=as_of)


def scale_price(quote: PriceQuote) -> int:
    """Quote value rescaled to 18 decimals."""
    if quote.decimals <= PRICE_PRECISION:
        return quote.value * 10 ** (PRICE_PRECISION - quote.decimals)
    return quote.value // 10 ** (quote.decimals - PRICE_PRECISION)


def to_usd(eth_amount: int, quote: PriceQuote) -> int:
    """USD value (18 decimals) of ``eth_amount`` wei, rounded down."""
    return scale_price(quote) * eth_amount // WEI_PER_ETHER


def get_price(feed: PriceOracle) -> int:
    return scale_price(latest_rate(feed))


def get_conversion_rate(eth_amount: int, feed: PriceOracle) -> int:
    return to_usd(eth_amount, latest_rate(feed))
