"""
Deploy scripts, run in order by ``DeploymentRegistry.fixture``.

00-deploy-mocks puts a MockV3Aggregator on development networks so the
ledger has a price feed to bind. 01-deploy-fund-me resolves the feed for
the current network, deploys the ledger and, on public networks with an
Etherscan key configured, asks the verifier to check the source.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from funding.oracle import DECIMALS, INITIAL_ANSWER, MockV3Aggregator, PriceOracle
from funding.service import FundingLedger

from .networks import NETWORK_CONFIG
from .registry import DeploymentError, DeploymentRegistry


logger = logging.getLogger(__name__)


@dataclass
class DeployScript:
    id: str
    tags: tuple[str, ...]
    run: Callable[[DeploymentRegistry], None]


def deploy_mocks(registry: DeploymentRegistry) -> None:
    if not registry.is_development:
        return
    logger.info("Local network detected! Deploying mocks...")
    registry.deploy(
        "MockV3Aggregator",
        lambda address: MockV3Aggregator(DECIMALS, INITIAL_ANSWER, address=address),
        [DECIMALS, INITIAL_ANSWER],
    )
    logger.info("Mocks deployed!")


def resolve_price_feed(registry: DeploymentRegistry) -> PriceOracle:
    if registry.is_development:
        return registry.get_contract("MockV3Aggregator")

    config = NETWORK_CONFIG.get(registry.chain_id)
    if config is None:
        raise DeploymentError(f"No price feed configured for chain {registry.chain_id}")
    if registry.feed_resolver is None:
        raise DeploymentError(f"No feed resolver bound for network {registry.network}")
    return registry.feed_resolver(config["eth_usd_price_feed"])


def deploy_fund_me(registry: DeploymentRegistry) -> None:
    deployer = registry.named_accounts["deployer"]
    price_feed = resolve_price_feed(registry)
    args = [price_feed.address]

    deployment = registry.deploy(
        "FundMe",
        lambda address: FundingLedger(deployer, price_feed, accounts=registry.accounts, address=address),
        args,
        deployer=deployer,
    )

    if not registry.is_development and registry.settings.etherscan_api_key:
        registry.verify(deployment.address, args)

    logger.info("----------------------------------------------")


DEPLOY_SCRIPTS = [
    DeployScript(id="00-deploy-mocks", tags=("all", "mocks"), run=deploy_mocks),
    DeployScript(id="01-deploy-fund-me", tags=("all", "fundme"), run=deploy_fund_me),
]
