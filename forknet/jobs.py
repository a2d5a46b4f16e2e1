import json
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from importlib import resources
from string import Template
from typing import Optional, Tuple

from eth_account import Account
from eth_utils import to_wei

from forknet.errors import JobFileError

DEFAULT_JOBS_FILE = "transfer_jobs.json"


@dataclass(frozen=True)
class Erc721Job:
    contract_address: str
    from_address: str
    token_ids: Tuple[int, ...]
    name: Optional[str] = None


@dataclass(frozen=True)
class Erc20Job:
    contract_address: str
    from_address: str
    amount: int
    name: Optional[str] = None


@dataclass(frozen=True)
class EthJob:
    private_key: str
    amount_wei: int
    name: Optional[str] = None

    @property
    def from_address(self):
        return Account.from_key(self.private_key).address


def _expand(entry, key, env):
    try:
        value = entry[key]
    except KeyError:
        raise JobFileError(f"Job {entry.get('name', entry.get('type'))!r} is missing {key!r}")
    if not isinstance(value, str):
        raise JobFileError(f"Job field {key!r} must be a string, got {value!r}")
    try:
        return Template(value).substitute(env)
    except KeyError as ex:
        raise JobFileError(f"Unresolved environment reference {ex} in {key!r}: {value}") from ex
    except ValueError as ex:
        raise JobFileError(f"Bad environment reference in {key!r}: {value}") from ex


def _int_field(entry, key):
    value = entry.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise JobFileError(f"Job field {key!r} must be a non-negative integer, got {value!r}")
    return value


def parse_job(entry, env):
    if not isinstance(entry, dict):
        raise JobFileError(f"Job entry must be an object, got {entry!r}")
    job_type = entry.get("type")
    name = entry.get("name")
    if job_type == "erc721":
        token_ids = entry.get("token_ids")
        if not isinstance(token_ids, list) or not token_ids:
            raise JobFileError(f"Job {name!r} needs a non-empty token_ids list")
        return Erc721Job(
            contract_address=_expand(entry, "contract", env),
            from_address=_expand(entry, "from", env),
            token_ids=tuple(_int_field({"token_id": t}, "token_id") for t in token_ids),
            name=name,
        )
    if job_type == "erc20":
        return Erc20Job(
            contract_address=_expand(entry, "contract", env),
            from_address=_expand(entry, "from", env),
            amount=_int_field(entry, "amount"),
            name=name,
        )
    if job_type == "eth":
        try:
            amount_ether = Decimal(str(entry["amount_ether"]))
            if not amount_ether.is_finite():
                raise ValueError(f"{amount_ether} is not a finite amount")
            amount_wei = to_wei(amount_ether, "ether")
        except (KeyError, InvalidOperation, ValueError, OverflowError) as ex:
            raise JobFileError(f"Job {name!r} needs a valid amount_ether: {ex}") from ex
        private_key = _expand(entry, "private_key", env)
        try:
            Account.from_key(private_key)
        except Exception as ex:
            raise JobFileError(f"Job {name!r} has an invalid private_key") from ex
        return EthJob(private_key=private_key, amount_wei=amount_wei, name=name)
    raise JobFileError(f"Unknown job type {job_type!r}")


def load_jobs(path=None, env=None):
    """
    Load transfer jobs from a JSON file, in file order.

    Without a path the sample file shipped with the package is used.
    """
    env = dict(os.environ) if env is None else env
    try:
        if path is None:
            text = resources.files("forknet").joinpath(DEFAULT_JOBS_FILE).read_text()
        else:
            with open(path, "r") as f:
                text = f.read()
        data = json.loads(text)
    except (OSError, json.JSONDecodeError) as ex:
        raise JobFileError(f"Cannot read job file {path or DEFAULT_JOBS_FILE}: {ex}") from ex

    if not isinstance(data, dict) or not isinstance(data.get("jobs"), list):
        raise JobFileError("Job file must contain a top level \"jobs\" list")
    return [parse_job(entry, env) for entry in data["jobs"]]
