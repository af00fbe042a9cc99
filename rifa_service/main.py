import functools
import json
import sys
from pathlib import Path

import click
import structlog
from eth_account import Account
from eth_utils import encode_hex, to_checksum_address
from web3 import HTTPProvider, Web3

from rifa_service import __version__
from rifa_service.constants import (
    CONTRACT_REAL_DIGITAL,
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TX_TIMEOUT,
)
from rifa_service.exceptions import ConfigurationError, InvalidInput
from rifa_service.ledger import ContractRegistry, LedgerClient
from rifa_service.orchestration import (
    ActionKind,
    PendingAction,
    TransactionOrchestrator,
    validate,
)
from rifa_service.utils.configuration import ServiceConfig

log = structlog.get_logger(__name__)


class WrongPassword(click.ClickException):
    """The keystore could not be decrypted, usually because of an invalid password."""


def ledger_options(func):
    """Decorator adding the options needed to talk to the ledger to a subcommand."""

    @click.option("--rpc-url", envvar="HARDHAT_RPC_URL", help="RPC endpoint of the ledger.")
    @click.option(
        "--token-address",
        envvar="CONTRACT_ADDRESS_REALDIGITAL",
        help="Address of the deployed RealDigital token.",
    )
    @click.option(
        "--artifacts-dir",
        envvar="ARTIFACTS_DIR",
        type=click.Path(exists=True, file_okay=False),
        default=None,
        help="Hardhat artifacts directory. Defaults to ./artifacts",
    )
    @click.option(
        "--tx-timeout",
        envvar="TX_TIMEOUT",
        type=int,
        default=None,
        help="Seconds to wait for a transaction to be mined.",
    )
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def get_password(password, password_file):
    if password_file:
        with open(password_file, "r") as f:
            password = f.read().strip()
    if password is None:
        password = click.prompt(text="Please enter your password", hide_input=True)
    return password


def load_account(keystore_file, password):
    """Decrypt the account stored in `keystore_file`.

    :raises WrongPassword: if the keystore can not be decrypted with `password`.
    """
    with open(keystore_file, "r") as keystore:
        try:
            encrypted = json.load(keystore)
        except ValueError:
            raise click.ClickException(f"{keystore_file} is not a JSON keystore file!")
    try:
        private_key = Account.decrypt(encrypted, password)
    except ValueError:
        raise WrongPassword(f"Could not decrypt {keystore_file} - wrong password?")
    account = Account.from_key(private_key)
    log.info("Using account", account=to_checksum_address(account.address))
    return account


@click.group()
@click.version_option(__version__)
def main():
    pass


@main.command(name="serve")
@ledger_options
@click.option("--private-key", envvar="PRIVATE_KEY", help="Private key of the operator wallet.")
@click.option("--host", default=DEFAULT_HOST, show_default=True)
@click.option("--port", default=DEFAULT_PORT, type=int, show_default=True)
@click.option("--log-file", default=None, help="Write logs to this file instead of stderr.")
def serve(rpc_url, token_address, artifacts_dir, tx_timeout, private_key, host, port, log_file):
    """Run the Rifa REST service, signing with the operator wallet."""
    from rifa_service.services.rifa.app import serve as serve_app

    try:
        config = ServiceConfig.from_env(
            rpc_url=rpc_url,
            operator_key=private_key,
            token_address=token_address,
            artifacts_dir=artifacts_dir,
            tx_timeout=tx_timeout,
            host=host,
            port=port,
        )
        serve_app(config, log_file=log_file)
    except ConfigurationError as e:
        raise click.ClickException(str(e))


@main.command(name="mint")
@ledger_options
@click.option("--to", "recipient", required=True, help="Address receiving the minted tokens.")
@click.option("--amount", required=True, help="Amount of tokens to mint, e.g. '100' or '2.5'.")
@click.option(
    "--keystore-file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Keystore of the account signing the mint.",
)
@click.option("--password", envvar="ACCOUNT_PASSWORD", default=None)
@click.option("--password-file", type=click.Path(exists=True, dir_okay=False), default=None)
def mint(
    rpc_url,
    token_address,
    artifacts_dir,
    tx_timeout,
    recipient,
    amount,
    keystore_file,
    password,
    password_file,
):
    """Mint RealDigital tokens, signed with your own account instead of the operator wallet."""
    if password and password_file:
        raise click.UsageError("--password and --password-file are mutually exclusive.")

    if not rpc_url:
        raise click.UsageError("An RPC url is required (--rpc-url or HARDHAT_RPC_URL).")
    if not token_address:
        raise click.UsageError(
            "The token address is required (--token-address or CONTRACT_ADDRESS_REALDIGITAL)."
        )

    # Validated before the keystore is unlocked.
    try:
        validate(PendingAction(ActionKind.MINT, {"recipient": recipient, "amount": amount}))
    except InvalidInput as e:
        raise click.BadParameter(str(e))

    try:
        registry = ContractRegistry.from_artifacts(
            Path(artifacts_dir or DEFAULT_ARTIFACTS_DIR), {CONTRACT_REAL_DIGITAL: token_address}
        )
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    account = load_account(keystore_file, get_password(password, password_file))
    ledger = LedgerClient(
        Web3(HTTPProvider(rpc_url)), account, timeout=tx_timeout or DEFAULT_TX_TIMEOUT
    )
    orchestrator = TransactionOrchestrator(ledger, registry)

    try:
        outcome = orchestrator.mint(recipient, amount)
    except InvalidInput as e:
        raise click.BadParameter(str(e))

    if not outcome.succeeded:
        click.secho(f"Minting failed: {outcome.failure.message}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"Tokens minted successfully! tx: {encode_hex(outcome.tx_hash)}", fg="green")
