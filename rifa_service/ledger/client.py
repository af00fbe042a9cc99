"""Thin adapter around :mod:`web3`, bound to a single signing identity.

Transactions are built, signed locally and broadcast by :meth:`LedgerClient.transact`,
which returns a :class:`PendingTransaction`. Waiting for its receipt is a separate
step, so a caller decides when to block.

Any error raised by :mod:`web3` is translated to a
:exc:`rifa_service.exceptions.TransactionFailed` carrying one of the failure codes
defined in :mod:`rifa_service.constants`.
"""
import threading
from typing import Any

import structlog
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import encode_hex
from web3 import HTTPProvider, Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception
from web3.types import TxReceipt

from rifa_service.constants import CALL_EXCEPTION, DEFAULT_TX_TIMEOUT, NETWORK_ERROR, TIMEOUT
from rifa_service.exceptions import TransactionFailed

log = structlog.get_logger(__name__)

#: Errors surfacing from the provider or transport layer.
NETWORK_ERRORS = (Web3Exception, ValueError, OSError)


def revert_message(error: ContractLogicError) -> str:
    return getattr(error, "message", None) or str(error)


class PendingTransaction:
    """Handle of a broadcast transaction which has not been awaited yet."""

    def __init__(self, client: "LedgerClient", tx_hash: bytes, transaction: dict):
        self.client = client
        self.tx_hash = tx_hash
        self.transaction = transaction

    @property
    def hex_hash(self) -> str:
        return encode_hex(self.tx_hash)

    def wait(self) -> TxReceipt:
        """Block until the transaction is mined and return its receipt.

        :raises TransactionFailed:
            with code `TIMEOUT` if no receipt arrived in time (the transaction may
            still be mined later), `CALL_EXCEPTION` if it reverted, or
            `NETWORK_ERROR` if the ledger could not be queried.
        """
        timeout = self.client.timeout
        try:
            receipt = self.client.web3.eth.wait_for_transaction_receipt(
                self.tx_hash, timeout=timeout
            )
        except TimeExhausted as e:
            raise TransactionFailed(
                f"Transaction {self.hex_hash} was not confirmed within {timeout} seconds, "
                "it may still be mined.",
                code=TIMEOUT,
                submitted=True,
                tx_hash=self.hex_hash,
            ) from e
        except NETWORK_ERRORS as e:
            raise TransactionFailed(
                str(e), code=NETWORK_ERROR, submitted=True, tx_hash=self.hex_hash
            ) from e

        if receipt["status"] == 0:
            reason = self.client.replay_for_revert_reason(self.transaction, receipt["blockNumber"])
            log.warning("Transaction reverted", tx_hash=self.hex_hash, reason=reason)
            raise TransactionFailed(
                reason, code=CALL_EXCEPTION, submitted=True, tx_hash=self.hex_hash
            )

        log.debug(
            "Transaction confirmed", tx_hash=self.hex_hash, block_number=receipt["blockNumber"]
        )
        return receipt


class LedgerClient:
    """Read contract state and submit signed transactions as `account`.

    Nonces are fetched and transactions broadcast while holding a lock, so that
    concurrent requests signed by the same account do not reuse a nonce. Waiting
    for receipts happens outside of the lock.
    """

    def __init__(self, web3: Web3, account: LocalAccount, timeout: int = DEFAULT_TX_TIMEOUT):
        self.web3 = web3
        self.account = account
        self.timeout = timeout
        self._nonce_lock = threading.Lock()

    @classmethod
    def from_private_key(
        cls, rpc_url: str, private_key: str, timeout: int = DEFAULT_TX_TIMEOUT
    ) -> "LedgerClient":
        web3 = Web3(HTTPProvider(rpc_url))
        return cls(web3, Account.from_key(private_key), timeout=timeout)

    @property
    def address(self) -> str:
        return self.account.address

    def call(self, function) -> Any:
        """Execute the read-only contract `function` against the latest block."""
        try:
            return function.call({"from": self.address})
        except ContractLogicError as e:
            raise TransactionFailed(revert_message(e), code=CALL_EXCEPTION) from e
        except NETWORK_ERRORS as e:
            raise TransactionFailed(str(e), code=NETWORK_ERROR) from e

    def transact(self, function) -> PendingTransaction:
        """Build, sign and broadcast a transaction for the contract `function`.

        `function` may be a bound contract function or a contract constructor.

        :raises TransactionFailed:
            with code `CALL_EXCEPTION` if simulating the transaction reverted, or
            `NETWORK_ERROR` if it could not be broadcast.
        """
        with self._nonce_lock:
            try:
                nonce = self.web3.eth.get_transaction_count(self.address, "pending")
                transaction = function.build_transaction({"from": self.address, "nonce": nonce})
                signed = self.account.sign_transaction(transaction)
                tx_hash = self.web3.eth.send_raw_transaction(signed.raw_transaction)
            except ContractLogicError as e:
                log.info("Transaction rejected by simulation", reason=revert_message(e))
                raise TransactionFailed(revert_message(e), code=CALL_EXCEPTION) from e
            except NETWORK_ERRORS as e:
                raise TransactionFailed(str(e), code=NETWORK_ERROR) from e

        pending = PendingTransaction(self, tx_hash, transaction)
        log.info(
            "Transaction submitted", tx_hash=pending.hex_hash, sender=self.address, nonce=nonce
        )
        return pending

    def replay_for_revert_reason(self, transaction: dict, block_number: int) -> str:
        """Re-run a reverted `transaction` as a call at `block_number` to obtain its reason."""
        call = {
            key: transaction[key] for key in ("from", "to", "data", "value") if key in transaction
        }
        try:
            self.web3.eth.call(call, block_identifier=block_number)
        except ContractLogicError as e:
            return revert_message(e)
        except NETWORK_ERRORS as e:
            log.debug("Could not replay reverted transaction", error=str(e))
        return "Transaction reverted without a reason."
