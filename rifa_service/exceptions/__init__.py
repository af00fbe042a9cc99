from rifa_service.exceptions.config import ArtifactMissing, BindingNotFound, ConfigurationError
from rifa_service.exceptions.ledger import (
    DeploymentFailed,
    DeploymentReverted,
    LedgerError,
    TransactionFailed,
)
from rifa_service.exceptions.validation import InvalidInput

__all__ = [
    "ArtifactMissing",
    "BindingNotFound",
    "ConfigurationError",
    "DeploymentFailed",
    "DeploymentReverted",
    "InvalidInput",
    "LedgerError",
    "TransactionFailed",
]
