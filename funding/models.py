from datetime import datetime
from typing import Annotated, Optional
from pydantic import BaseModel, Field, ConfigDict, AfterValidator


WEI_PER_ETHER = 10**18


def _normalize_address(value: str) -> str:
    return value.lower()


ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"

Address = Annotated[
    str,
    Field(pattern=ADDRESS_PATTERN, description="0x-prefixed 20 byte hex address"),
    AfterValidator(_normalize_address),
]


class DepositRequest(BaseModel):
    caller: Address
    amount: int = Field(..., ge=0, description="Attached value in wei")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "caller": "0x70997970c51812dc3a010c7d01b50e0d17dc79c8",
            "amount": 1000000000000000000,
        }
    })


class WithdrawRequest(BaseModel):
    caller: Address


class RoundData(BaseModel):
    round_id: int
    answer: int
    started_at: int
    updated_at: int
    answered_in_round: int


class PriceQuote(BaseModel):
    value: int
    decimals: int
    as_of: Optional[datetime] = None


class DepositResponse(BaseModel):
    caller: str
    amount: int
    usd_value: int
    contribution: int
    balance: int
    funder_index: int
    message: str


class WithdrawalResponse(BaseModel):
    owner: str
    amount: int
    funders_cleared: int
    storage_reads: int
    storage_clears: int
    message: str


class LedgerState(BaseModel):
    owner: str
    price_feed: str
    balance: int
    funders: list[str]
    contributions: dict[str, int]


class ContributionResponse(BaseModel):
    address: str
    amount: int


class FunderResponse(BaseModel):
    index: int
    address: str
