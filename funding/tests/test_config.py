import pytest
from pydantic import ValidationError

from funding.config import Settings


class TestSettings:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FUNDME_NETWORK", "sepolia")
        monkeypatch.setenv("FUNDME_CHAIN_ID", "11155111")
        monkeypatch.setenv("FUNDME_BLOCK_CONFIRMATIONS", "6")
        monkeypatch.setenv("ETHERSCAN_API_KEY", "abc123")

        settings = Settings.from_env()

        assert settings.network == "sepolia"
        assert settings.chain_id == 11155111
        assert settings.block_confirmations == 6
        assert settings.etherscan_api_key == "abc123"

    def test_defaults_to_local_network(self, monkeypatch):
        for name in ("FUNDME_NETWORK", "FUNDME_CHAIN_ID", "ETHERSCAN_API_KEY"):
            # setenv first so teardown removes anything loaded during the test
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)

        settings = Settings.from_env()

        assert settings.network == "hardhat"
        assert settings.chain_id == 31337
        assert settings.etherscan_api_key is None

    def test_reads_dotenv_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FUNDME_NETWORK", "")
        monkeypatch.delenv("FUNDME_NETWORK")
        env_file = tmp_path / ".env"
        env_file.write_text("FUNDME_NETWORK=localhost\n")

        settings = Settings.from_env(str(env_file))

        assert settings.network == "localhost"

    def test_rejects_zero_confirmations(self):
        with pytest.raises(ValidationError):
            Settings(block_confirmations=0)
