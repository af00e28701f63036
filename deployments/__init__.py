"""
Deployment Package

Resolves the price feed for a network and deploys the funding ledger,
falling back to a mock aggregator on development networks.
"""

from .networks import NETWORK_CONFIG, DEVELOPMENT_CHAINS, is_development
from .registry import (
    Deployment,
    DeploymentRegistry,
    DeploymentError,
    DeploymentNotFound,
)

__all__ = [
    "NETWORK_CONFIG",
    "DEVELOPMENT_CHAINS",
    "is_development",
    "Deployment",
    "DeploymentRegistry",
    "DeploymentError",
    "DeploymentNotFound",
]
