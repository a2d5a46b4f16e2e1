# Script for creating a .env file for forknet with a fresh user account
# Usage: forknet-gen-env > .env

import secrets

from eth_account import Account

from forknet.config import DEFAULT_ETH_TRANSFER_DELAY, DEFAULT_PORT, DEFAULT_TRANSFER_DELAY


def gen_key_address_pair():
    private_key = "0x" + secrets.token_hex(32)
    return Account.from_key(private_key).address, private_key


def env_template():
    address, private_key = gen_key_address_pair()
    lines = [
        "# Alchemy API key used for the fork url",
        "ALCHEMY_APIKEY=fill_me",
        "FORK_NETWORK=eth-mainnet",
        "# FORK_BLOCK_NUMBER=",
        f"PORT={DEFAULT_PORT}",
        "",
        "# Wallet receiving the transferred assets",
        f"# private key: {private_key}",
        f"USER_ADDRESS={address}",
        "",
        f"TRANSFER_DELAY_SECONDS={DEFAULT_TRANSFER_DELAY:g}",
        f"ETH_TRANSFER_DELAY_SECONDS={DEFAULT_ETH_TRANSFER_DELAY:g}",
        "# Set to 0 to only warn when cast writes to stderr",
        "FAIL_ON_STDERR=1",
    ]
    return "\n".join(lines)


def main():
    print(env_template())


if __name__ == "__main__":
    main()
