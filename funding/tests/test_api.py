"""
HTTP surface tests, one freshly deployed ledger per test.
"""

import pytest
from fastapi.testclient import TestClient

import funding.api as api_module
from deployments.registry import DeploymentRegistry
from funding.accounts import dev_address
from funding.config import Settings
from funding.models import WEI_PER_ETHER


OWNER = dev_address(0)
USER = dev_address(1)
ONE_ETH = WEI_PER_ETHER


@pytest.fixture
def registry(monkeypatch):
    registry = DeploymentRegistry(Settings(network="hardhat"))
    registry.fixture("all")
    monkeypatch.setattr(api_module, "ledger", registry.get_contract("FundMe"))
    return registry


@pytest.fixture
def client(registry):
    return TestClient(api_module.app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestDepositEndpoint:
    def test_deposit_created(self, client):
        response = client.post("/deposit", json={"caller": USER, "amount": ONE_ETH})

        assert response.status_code == 201
        body = response.json()
        assert body["contribution"] == ONE_ETH
        assert body["balance"] == ONE_ETH

    def test_deposit_below_minimum(self, client):
        response = client.post("/deposit", json={"caller": USER, "amount": ONE_ETH // 100})

        assert response.status_code == 400
        assert response.json()["detail"] == "You need to spend more ETH!"

    def test_deposit_without_funds(self, client):
        response = client.post("/deposit", json={"caller": "0x" + "ef" * 20, "amount": ONE_ETH})

        assert response.status_code == 402

    def test_malformed_address(self, client):
        response = client.post("/deposit", json={"caller": "not-an-address", "amount": ONE_ETH})

        assert response.status_code == 422

    def test_negative_amount(self, client):
        response = client.post("/deposit", json={"caller": USER, "amount": -1})

        assert response.status_code == 422


class TestWithdrawEndpoints:
    @pytest.mark.parametrize("path", ["/withdraw", "/cheaper-withdraw"])
    def test_owner_withdraws(self, client, registry, path):
        client.post("/deposit", json={"caller": USER, "amount": ONE_ETH})
        starting_owner_balance = registry.accounts.balance_of(OWNER)

        response = client.post(path, json={"caller": OWNER})

        assert response.status_code == 200
        assert response.json()["amount"] == ONE_ETH
        assert registry.accounts.balance_of(OWNER) == starting_owner_balance + ONE_ETH
        assert client.get("/state").json()["balance"] == 0

    @pytest.mark.parametrize("path", ["/withdraw", "/cheaper-withdraw"])
    def test_non_owner_forbidden(self, client, path):
        client.post("/deposit", json={"caller": USER, "amount": ONE_ETH})

        response = client.post(path, json={"caller": USER})

        assert response.status_code == 403
        assert client.get("/state").json()["balance"] == ONE_ETH

    def test_transfer_failure(self, client, registry):
        client.post("/deposit", json={"caller": USER, "amount": ONE_ETH})
        registry.accounts.reject_incoming(OWNER)

        response = client.post("/withdraw", json={"caller": OWNER})

        assert response.status_code == 502
        assert client.get("/state").json()["funders"] == [USER]


class TestReadEndpoints:
    def test_owner_and_price_feed(self, client, registry):
        assert client.get("/owner").json() == {"owner": OWNER}

        feed = registry.get("MockV3Aggregator")
        assert client.get("/price-feed").json() == {"price_feed": feed.address, "version": 0}

    def test_funders_and_contributions(self, client):
        client.post("/deposit", json={"caller": USER, "amount": ONE_ETH})

        assert client.get("/funders/0").json() == {"index": 0, "address": USER}
        assert client.get("/funders/1").status_code == 404
        assert client.get(f"/contributions/{USER}").json() == {"address": USER, "amount": ONE_ETH}

    def test_contribution_for_malformed_address(self, client):
        assert client.get("/contributions/not-an-address").status_code == 422
        assert client.get("/contributions/0x1234").status_code == 422
