import pytest

from forknet.config import Settings

ENV_VARS = (
    "ALCHEMY_APIKEY", "PORT", "USER_ADDRESS", "FORK_NETWORK", "FORK_BLOCK_NUMBER",
    "TRANSFER_DELAY_SECONDS", "ETH_TRANSFER_DELAY_SECONDS", "FAIL_ON_STDERR",
)

USER_ADDRESS = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so values written by load_dotenv are undone after the test
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def settings():
    return Settings(api_key="ABC", port="8545", user_address=USER_ADDRESS)
