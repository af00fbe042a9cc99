from typing import Optional


class LedgerError(Exception):
    """Base class for failures reported by, or while talking to, the ledger."""


class TransactionFailed(LedgerError):
    """A call or transaction did not reach a successful, confirmed state.

    `code` is one of the failure codes in :mod:`rifa_service.constants`,
    `submitted` tells whether the transaction was broadcast before failing.
    """

    def __init__(
        self, message: str, code: Optional[str] = None, submitted: bool = False, tx_hash=None
    ):
        super(TransactionFailed, self).__init__(message)
        self.message = message
        self.code = code
        self.submitted = submitted
        self.tx_hash = tx_hash


class DeploymentFailed(TransactionFailed):
    """A raffle deployment failed without being executed on the ledger.

    A deployment which timed out after broadcast may still be mined later.
    """


class DeploymentReverted(TransactionFailed):
    """A raffle deployment was mined but reverted during execution."""
