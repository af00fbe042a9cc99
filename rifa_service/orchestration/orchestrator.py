"""Execute raffle and token actions on the ledger.

Each submitting action runs through the same sequence:

    1. validate the action locally (:func:`rifa_service.orchestration.preconditions.validate`),
    2. resolve the contract binding and build the call,
    3. sign and broadcast it via the :class:`LedgerClient`,
    4. block until the transaction is mined.

The result is a :class:`TransactionOutcome`, which is either confirmed or carries
the :exc:`TransactionFailed` that ended the sequence. Nothing is retried, and no
state is kept between calls: two concurrent `enter` calls for the same raffle are
both submitted, and the contract decides their fate.
"""
import timeit
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Union

import structlog
from web3.types import TxReceipt

from rifa_service.constants import CALL_EXCEPTION, CONTRACT_REAL_DIGITAL, CONTRACT_RIFA
from rifa_service.exceptions import DeploymentFailed, DeploymentReverted, TransactionFailed
from rifa_service.ledger import ContractRegistry, LedgerClient
from rifa_service.orchestration.preconditions import ActionKind, PendingAction, validate
from rifa_service.services.common.metrics import track_ledger_action
from rifa_service.utils import to_json_compatible
from rifa_service.utils.amounts import from_fixed_point

log = structlog.get_logger(__name__)

Amount = Union[str, int, Decimal]


@dataclass(frozen=True)
class RaffleInstance:
    address: str
    token_address: str
    max_entries: int
    #: entry price in the token's fixed-point representation.
    entry_price: int


@dataclass(frozen=True)
class TransactionOutcome:
    action: PendingAction
    succeeded: bool
    receipt: Optional[TxReceipt] = None
    failure: Optional[TransactionFailed] = None
    raffle: Optional[RaffleInstance] = None

    @property
    def tx_hash(self) -> Optional[str]:
        if self.receipt is not None:
            return self.receipt["transactionHash"]
        if self.failure is not None:
            return self.failure.tx_hash
        return None


class TransactionOrchestrator:
    """Translate raffle and token actions into confirmed ledger transactions.

    All transactions are signed by the identity the `ledger` client is bound to:
    the operator wallet for the REST service, or a user's own account for minting
    from the command line.
    """

    def __init__(self, ledger: LedgerClient, registry: ContractRegistry):
        self.ledger = ledger
        self.registry = registry

    @property
    def token_address(self) -> str:
        return self.registry.resolve(CONTRACT_REAL_DIGITAL).address

    def _action(self, kind: ActionKind, **parameters) -> PendingAction:
        return PendingAction(kind, parameters, submitter=self.ledger.address)

    def _contract(self, name: str, address: Optional[str] = None):
        return self.registry.resolve(name, address).contract(self.ledger.web3)

    def _execute(self, action: PendingAction, transaction) -> TransactionOutcome:
        """Submit `transaction` and wait for it to be mined."""
        log.debug("Executing action", kind=action.kind.value, parameters=action.parameters)
        started = timeit.default_timer()
        try:
            pending = self.ledger.transact(transaction)
            receipt = pending.wait()
        except TransactionFailed as failure:
            log.warning(
                "Action failed",
                kind=action.kind.value,
                code=failure.code,
                submitted=failure.submitted,
                reason=failure.message,
            )
            track_ledger_action(action.kind.value, failure.code or "UNKNOWN", started)
            return TransactionOutcome(action, succeeded=False, failure=failure)

        track_ledger_action(action.kind.value, "confirmed", started)
        log.info("Action confirmed", kind=action.kind.value, block_number=receipt["blockNumber"])
        return TransactionOutcome(action, succeeded=True, receipt=receipt)

    def deploy_raffle(
        self, max_entries: int, entry_price: Amount, token_address: Optional[str] = None
    ) -> TransactionOutcome:
        """Deploy a new Rifa contract bound to `token_address`.

        The token defaults to the configured RealDigital contract. On success,
        :attr:`TransactionOutcome.raffle` holds the deployed instance. On failure
        the outcome's failure is a :exc:`DeploymentReverted` if the deployment was mined
        but reverted, and a :exc:`DeploymentFailed` otherwise. This includes a broadcast
        deployment whose receipt did not arrive in time, which may still be mined later.

        :raises InvalidInput: if any of the constructor arguments is invalid.
        """
        action = self._action(
            ActionKind.DEPLOY_RAFFLE,
            token_address=token_address or self.token_address,
            max_entries=max_entries,
            entry_price=entry_price,
        )
        token, max_entries, price = validate(action).arguments

        factory = self.registry[CONTRACT_RIFA].contract(self.ledger.web3)
        outcome = self._execute(action, factory.constructor(token, max_entries, price))

        if not outcome.succeeded:
            cause = outcome.failure
            reverted = cause.submitted and cause.code == CALL_EXCEPTION
            error_cls = DeploymentReverted if reverted else DeploymentFailed
            failure = error_cls(
                cause.message, code=cause.code, submitted=cause.submitted, tx_hash=cause.tx_hash
            )
            failure.__cause__ = cause
            return TransactionOutcome(action, succeeded=False, failure=failure)

        raffle = RaffleInstance(
            address=outcome.receipt["contractAddress"],
            token_address=token,
            max_entries=max_entries,
            entry_price=price,
        )
        log.info("Raffle deployed", address=raffle.address, token=token, max_entries=max_entries)
        return TransactionOutcome(action, succeeded=True, receipt=outcome.receipt, raffle=raffle)

    def approve(self, raffle_address: str, amount: Amount) -> TransactionOutcome:
        """Allow the raffle at `raffle_address` to spend up to `amount` tokens.

        Any previous allowance is overwritten by the token contract.

        :raises InvalidInput: if the address or amount is invalid.
        """
        action = self._action(ActionKind.APPROVE, raffle_address=raffle_address, amount=amount)
        spender, raw_amount = validate(action).arguments
        token = self._contract(CONTRACT_REAL_DIGITAL)
        return self._execute(action, token.functions.approve(spender, raw_amount))

    def enter(self, raffle_address: str, entry_count: int) -> TransactionOutcome:
        """Buy `entry_count` entries of the raffle at `raffle_address`.

        The raffle must have been approved to spend the entries' price beforehand.

        :raises InvalidInput: if the address or entry count is invalid.
        """
        action = self._action(
            ActionKind.ENTER, raffle_address=raffle_address, entry_count=entry_count
        )
        (count,) = validate(action).arguments
        raffle = self._contract(CONTRACT_RIFA, raffle_address)
        return self._execute(action, raffle.functions.entrar(count))

    def mint(self, recipient: str, amount: Amount) -> TransactionOutcome:
        """Mint `amount` new tokens for `recipient`, signed by the ledger client's identity.

        :raises InvalidInput: if the recipient or amount is invalid.
        """
        action = self._action(ActionKind.MINT, recipient=recipient, amount=amount)
        to, raw_amount = validate(action).arguments
        token = self._contract(CONTRACT_REAL_DIGITAL)
        return self._execute(action, token.functions.mint(to, raw_amount))

    def entries(self, raffle_address: str) -> Any:
        """Return the entries recorded by the raffle at `raffle_address`.

        :raises TransactionFailed: if the ledger could not be read.
        """
        raffle = self._contract(CONTRACT_RIFA, raffle_address)
        return to_json_compatible(self.ledger.call(raffle.functions.getEntradas()))

    def accumulated_tokens(self, raffle_address: str) -> str:
        """Return the tokens accumulated by the raffle, as a decimal string.

        :raises TransactionFailed: if the ledger could not be read.
        """
        raffle = self._contract(CONTRACT_RIFA, raffle_address)
        return from_fixed_point(self.ledger.call(raffle.functions.TokensAcumulados()))
