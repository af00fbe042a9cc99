from rifa_service.orchestration.classifier import ClassifiedError, ErrorKind, classify
from rifa_service.orchestration.orchestrator import (
    RaffleInstance,
    TransactionOrchestrator,
    TransactionOutcome,
)
from rifa_service.orchestration.preconditions import (
    ActionKind,
    PendingAction,
    ValidationResult,
    validate,
)

__all__ = [
    "ActionKind",
    "ClassifiedError",
    "ErrorKind",
    "PendingAction",
    "RaffleInstance",
    "TransactionOrchestrator",
    "TransactionOutcome",
    "ValidationResult",
    "classify",
    "validate",
]
