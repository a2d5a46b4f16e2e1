import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from forknet.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PORT = "8545"
DEFAULT_FORK_NETWORK = "eth-mainnet"
DEFAULT_TRANSFER_DELAY = 2.0
DEFAULT_ETH_TRANSFER_DELAY = 5.0


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    port: str
    user_address: Optional[str]
    fork_network: str = DEFAULT_FORK_NETWORK
    fork_block_number: Optional[int] = None
    transfer_delay: float = DEFAULT_TRANSFER_DELAY
    eth_transfer_delay: float = DEFAULT_ETH_TRANSFER_DELAY
    fail_on_stderr: bool = True

    @property
    def rpc_url(self):
        return f"http://127.0.0.1:{self.port}"

    def require_api_key(self):
        if not self.api_key:
            raise ConfigError("ALCHEMY_APIKEY is not set")
        return self.api_key

    def require_user_address(self):
        if not self.user_address:
            raise ConfigError("USER_ADDRESS is not set")
        return self.user_address


def parse_delay(value):
    """Seconds to pause; raises ValueError unless a finite, non-negative number."""
    delay = float(value)
    if not math.isfinite(delay) or delay < 0:
        raise ValueError(f"delay must be a non-negative number of seconds, got {value!r}")
    return delay


def _delay_from_env(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return parse_delay(value)
    except ValueError as ex:
        logger.warning(f"{name} is invalid: {ex}, using {default}")
        return default


def load_settings(env_file=None):
    """
    Read settings from the environment, after loading a .env file.

    Without env_file the nearest .env from the working directory up is used.
    Variables already present in the environment win over the file.
    """
    if env_file is not None:
        if not os.path.isfile(env_file):
            raise ConfigError(f"env file {env_file} does not exist")
        load_dotenv(env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))

    port = os.environ.get('PORT') or DEFAULT_PORT
    if not port.isdigit():
        raise ConfigError(f"PORT must be a port number, got {port!r}")

    fork_block_number = None
    if os.environ.get('FORK_BLOCK_NUMBER'):
        try:
            fork_block_number = int(os.environ['FORK_BLOCK_NUMBER'])
        except ValueError as ex:
            raise ConfigError(f"FORK_BLOCK_NUMBER is not int: {ex}") from ex

    return Settings(
        api_key=os.environ.get('ALCHEMY_APIKEY'),
        port=port,
        user_address=os.environ.get('USER_ADDRESS'),
        fork_network=os.environ.get('FORK_NETWORK') or DEFAULT_FORK_NETWORK,
        fork_block_number=fork_block_number,
        transfer_delay=_delay_from_env('TRANSFER_DELAY_SECONDS', DEFAULT_TRANSFER_DELAY),
        eth_transfer_delay=_delay_from_env('ETH_TRANSFER_DELAY_SECONDS', DEFAULT_ETH_TRANSFER_DELAY),
        fail_on_stderr=os.environ.get('FAIL_ON_STDERR', '1').strip() == '1',
    )
