import argparse
import asyncio
import logging
import sys

from forknet.command import format_command, stream_command
from forknet.config import load_settings
from forknet.errors import CommandError, ConfigError

logger = logging.getLogger(__name__)


def fork_url(settings):
    return f"https://{settings.fork_network}.g.alchemy.com/v2/{settings.require_api_key()}"


def anvil_command(settings):
    command = ["anvil", "--fork-url", fork_url(settings), "--port", settings.port]
    if settings.fork_block_number is not None:
        command += ["--fork-block-number", str(settings.fork_block_number)]
    return command


async def launch(settings):
    # the node runs until it is killed, so this only returns on error
    command = anvil_command(settings)
    logger.info(f"Anvil network starting with endpoint: {settings.rpc_url}")
    logger.debug(format_command(command).replace(settings.api_key, "***"))
    try:
        await stream_command(command)
    except CommandError as ex:
        logger.error(f"Error: {ex}")


def main():
    parser = argparse.ArgumentParser(
        prog='forknet-launch',
        description='Start an anvil node forked from a live network')
    parser.add_argument('--env-file', dest="env_file", help='Path to the .env file', default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    try:
        settings = load_settings(args.env_file)
        settings.require_api_key()
    except ConfigError as ex:
        sys.exit(str(ex))

    asyncio.run(launch(settings))


if __name__ == "__main__":
    main()
