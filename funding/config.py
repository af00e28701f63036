import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


DEFAULT_NETWORK = "hardhat"
DEFAULT_CHAIN_ID = 31337


class Settings(BaseModel):
    network: str = DEFAULT_NETWORK
    chain_id: int = DEFAULT_CHAIN_ID
    block_confirmations: int = Field(default=1, ge=1)
    etherscan_api_key: Optional[str] = None
    log_level: str = "INFO"
    dev_accounts: int = Field(default=10, ge=2)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        load_dotenv(dotenv_path, override=False)
        return cls(
            network=os.getenv("FUNDME_NETWORK", DEFAULT_NETWORK),
            chain_id=int(os.getenv("FUNDME_CHAIN_ID", DEFAULT_CHAIN_ID)),
            block_confirmations=int(os.getenv("FUNDME_BLOCK_CONFIRMATIONS", 1)),
            etherscan_api_key=os.getenv("ETHERSCAN_API_KEY") or None,
            log_level=os.getenv("FUNDME_LOG_LEVEL", "INFO"),
            dev_accounts=int(os.getenv("FUNDME_DEV_ACCOUNTS", 10)),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
