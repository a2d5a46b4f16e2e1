import argparse
import asyncio
import dataclasses
import logging
import sys

from forknet import cast
from forknet.command import format_command, run_command
from forknet.config import load_settings, parse_delay
from forknet.errors import CommandError, ConfigError, JobFileError
from forknet.jobs import Erc20Job, Erc721Job, EthJob, load_jobs

logger = logging.getLogger(__name__)


def delay_arg(value):
    try:
        return parse_delay(value)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(str(ex))


async def execute(settings, args):
    logger.info(f"Executing: {format_command(args)}")
    return await run_command(args, fail_on_stderr=settings.fail_on_stderr)


async def impersonate(settings, address):
    stdout = await execute(settings, cast.impersonate_command(address, settings.rpc_url))
    logger.info(f"Impersonate success: {stdout.strip()}")


async def impersonate_and_transfer_erc721(settings, job, to_address):
    try:
        await impersonate(settings, job.from_address)
        for token_id in job.token_ids:
            command = cast.erc721_transfer_command(
                job.contract_address, job.from_address, to_address, token_id, settings.rpc_url)
            stdout = await execute(settings, command)
            logger.info(f"Transfer success for token ID {token_id}: {stdout.strip()}")
            await asyncio.sleep(settings.transfer_delay)
    except CommandError as ex:
        logger.error(f"{job.name or job.contract_address} failed: {ex}")


async def get_stablecoin(settings, job, to_address):
    try:
        await impersonate(settings, job.from_address)
        command = cast.erc20_transfer_command(
            job.contract_address, job.from_address, to_address, job.amount, settings.rpc_url)
        stdout = await execute(settings, command)
        logger.info(f"Transfer success for contract {job.contract_address}: {stdout.strip()}")
        await asyncio.sleep(settings.transfer_delay)
    except CommandError as ex:
        logger.error(f"{job.name or job.contract_address} failed: {ex}")


async def transfer_eth(settings, job, to_address):
    try:
        command = cast.eth_transfer_command(
            job.from_address, job.private_key, to_address, job.amount_wei, settings.rpc_url)
        # keep the private key out of the log
        logger.info(f"Sending {job.amount_wei} wei from {job.from_address} to {to_address}")
        stdout = await run_command(command, fail_on_stderr=settings.fail_on_stderr)
        logger.info(f"Transfer success: {stdout.strip()}")
        await asyncio.sleep(settings.eth_transfer_delay)
    except CommandError as ex:
        logger.error(f"{job.name or 'eth transfer'} failed: {ex}")


async def transfer(settings, job, to_address):
    if isinstance(job, Erc721Job):
        await impersonate_and_transfer_erc721(settings, job, to_address)
    elif isinstance(job, Erc20Job):
        await get_stablecoin(settings, job, to_address)
    elif isinstance(job, EthJob):
        await transfer_eth(settings, job, to_address)
    else:
        raise TypeError(f"Unsupported job {job!r}")


async def run_jobs(settings, jobs):
    to_address = settings.require_user_address()
    for job in jobs:
        await transfer(settings, job, to_address)


def main():
    parser = argparse.ArgumentParser(
        prog='forknet-transfer',
        description='Impersonate holders on a local fork and move their assets to USER_ADDRESS')
    parser.add_argument('--env-file', dest="env_file", help='Path to the .env file', default=None)
    parser.add_argument('--jobs', help='JSON file with transfer jobs (default: bundled sample)', default=None)
    parser.add_argument('--delay', type=delay_arg, help='Seconds to wait after each token transfer', default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    try:
        settings = load_settings(args.env_file)
        if args.delay is not None:
            settings = dataclasses.replace(settings, transfer_delay=args.delay)
        settings.require_user_address()
        jobs = load_jobs(args.jobs)
    except (ConfigError, JobFileError) as ex:
        sys.exit(str(ex))

    asyncio.run(run_jobs(settings, jobs))
    sys.exit(0)


if __name__ == "__main__":
    main()
