from typing import Annotated

from fastapi import FastAPI, HTTPException, Path, status
from fastapi.middleware.cors import CORSMiddleware

from deployments.registry import DeploymentRegistry

from .config import Settings, configure_logging
from .models import (
    DepositRequest, WithdrawRequest, DepositResponse, WithdrawalResponse,
    LedgerState, ContributionResponse, FunderResponse, ADDRESS_PATTERN,
)
from .service import (
    FundingLedger, LedgerServiceError, InsufficientValue, InsufficientFunds,
    InvalidPrice, NotOwner, TransferFailed, FunderNotFound,
)

settings = Settings.from_env()
configure_logging(settings.log_level)

app = FastAPI(
    title="FundMe Ledger API",
    description="Funding ledger with an oracle-enforced USD minimum and owner-only withdrawal",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

registry = DeploymentRegistry(settings)
registry.fixture("all")
ledger: FundingLedger = registry.get_contract("FundMe")


def _withdraw_error(e: LedgerServiceError) -> HTTPException:
    if isinstance(e, NotOwner):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if isinstance(e, TransferFailed):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@app.get("/health", tags=["System"])
def health_check():
    return {"status": "healthy", "service": "fundme-ledger", "network": settings.network}


@app.post("/deposit", response_model=DepositResponse, status_code=status.HTTP_201_CREATED, tags=["Funding"])
def deposit(request: DepositRequest) -> DepositResponse:
    try:
        return ledger.deposit(request)
    except InsufficientValue as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InsufficientFunds as e:
        raise HTTPException(status_code=status.HTTP_402_PAYMENT_REQUIRED, detail=str(e))
    except InvalidPrice as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@app.post("/withdraw", response_model=WithdrawalResponse, tags=["Withdrawal"])
def withdraw(request: WithdrawRequest) -> WithdrawalResponse:
    try:
        return ledger.withdraw(request)
    except LedgerServiceError as e:
        raise _withdraw_error(e)


@app.post("/cheaper-withdraw", response_model=WithdrawalResponse, tags=["Withdrawal"])
def cheaper_withdraw(request: WithdrawRequest) -> WithdrawalResponse:
    try:
        return ledger.cheaper_withdraw(request)
    except LedgerServiceError as e:
        raise _withdraw_error(e)


@app.get("/owner", tags=["Ledger"])
def get_owner():
    return {"owner": ledger.get_owner()}


@app.get("/price-feed", tags=["Ledger"])
def get_price_feed():
    return {"price_feed": ledger.get_price_feed(), "version": ledger.get_version()}


@app.get("/funders/{index}", response_model=FunderResponse, tags=["Ledger"])
def get_funder(index: int) -> FunderResponse:
    try:
        return FunderResponse(index=index, address=ledger.get_funder(index))
    except FunderNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@app.get("/contributions/{address}", response_model=ContributionResponse, tags=["Ledger"])
def get_contribution(address: Annotated[str, Path(pattern=ADDRESS_PATTERN)]) -> ContributionResponse:
    return ContributionResponse(address=address.lower(), amount=ledger.get_amount_funded(address))


@app.get("/state", response_model=LedgerState, tags=["Ledger"])
def get_state() -> LedgerState:
    return ledger.snapshot()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
