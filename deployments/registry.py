import hashlib
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

from funding.accounts import AccountBook
from funding.config import Settings
from funding.oracle import PriceOracle

from .networks import is_development


logger = logging.getLogger(__name__)

FeedResolver = Callable[[str], PriceOracle]
Verifier = Callable[[str, list], None]


class DeploymentError(Exception):
    pass


class DeploymentNotFound(DeploymentError):
    pass


@dataclass
class Deployment:
    name: str
    address: str
    args: list
    network: str
    deployer: str
    instance: Any
    confirmations: int = 1
    deployed_at: datetime = field(default_factory=datetime.now)


def contract_address(deployer: str, nonce: int) -> str:
    digest = hashlib.sha256(f"{deployer.lower()}:{nonce}".encode()).hexdigest()
    return "0x" + digest[-40:]


class DeploymentRegistry:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        accounts: Optional[AccountBook] = None,
        feed_resolver: Optional[FeedResolver] = None,
        verifier: Optional[Verifier] = None,
    ):
        self.settings = settings or Settings()
        self.accounts = accounts or AccountBook.with_dev_accounts(self.settings.dev_accounts)
        self.feed_resolver = feed_resolver
        self.verifier = verifier
        self.deployments: dict[str, Deployment] = {}
        self._nonce = 0

        addresses = self.accounts.addresses
        if len(addresses) < 2:
            raise DeploymentError("At least two accounts are needed for deployer and user")
        self.named_accounts = {"deployer": addresses[0], "user": addresses[1]}

    @property
    def network(self) -> str:
        return self.settings.network

    @property
    def chain_id(self) -> int:
        return self.settings.chain_id

    @property
    def is_development(self) -> bool:
        return is_development(self.network)

    def deploy(self, name: str, factory: Callable[[str], Any], args: list,
               deployer: Optional[str] = None) -> Deployment:
        deployer = deployer or self.named_accounts["deployer"]
        address = contract_address(deployer, self._nonce)
        self._nonce += 1

        instance = factory(address)
        deployment = Deployment(
            name=name,
            address=address,
            args=list(args),
            network=self.network,
            deployer=deployer,
            instance=instance,
            confirmations=self.settings.block_confirmations,
        )
        self.deployments[name] = deployment
        logger.info("deployed %s at %s on %s (args=%s)", name, address, self.network, args)
        return deployment

    def get(self, name: str) -> Deployment:
        deployment = self.deployments.get(name)
        if deployment is None:
            raise DeploymentNotFound(f"No deployment found for: {name}")
        return deployment

    def get_contract(self, name: str) -> Any:
        return self.get(name).instance

    def fixture(self, *tags: str) -> dict[str, Deployment]:
        from .scripts import DEPLOY_SCRIPTS

        wanted = set(tags) or {"all"}
        for script in DEPLOY_SCRIPTS:
            if wanted & set(script.tags):
                logger.debug("running deploy script %s", script.id)
                script.run(self)
        return dict(self.deployments)

    def verify(self, address: str, args: list) -> None:
        if self.verifier is None:
            logger.info("No verifier configured, skipping verification of %s", address)
            return
        logger.info("Verifying contract %s...", address)
        try:
            self.verifier(address, args)
        except Exception as e:
            if "already verified" in str(e).lower():
                logger.info("%s is already verified", address)
                return
            raise
