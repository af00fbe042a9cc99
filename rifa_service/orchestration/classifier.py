"""Map ledger failures to the errors reported to API clients.

The Rifa contract only signals failures through human readable revert strings,
so classification matches on the failure text. Rules are checked in the order of
:data:`CLASSIFICATION_RULES` and the first matching rule wins; revert strings are
substrings of the complete failure text, so more specific rules come first.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Tuple

from rifa_service.constants import (
    CALL_EXCEPTION,
    REVERT_ALREADY_DRAWN,
    REVERT_INSUFFICIENT_BALANCE,
)
from rifa_service.exceptions import TransactionFailed


class ErrorKind(Enum):
    ALREADY_DRAWN = "AlreadyDrawn"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    CALL_REJECTED = "CallRejected"
    UNCLASSIFIED = "Unclassified"


@dataclass(frozen=True)
class ClassifiedError:
    kind: ErrorKind
    message: str
    status_code: int


@dataclass(frozen=True)
class ClassificationRule:
    kind: ErrorKind
    matches: Callable[[TransactionFailed], bool]
    message: str
    status_code: int

    def apply(self) -> ClassifiedError:
        return ClassifiedError(self.kind, self.message, self.status_code)


def message_contains(text: str) -> Callable[[TransactionFailed], bool]:
    def matcher(failure: TransactionFailed) -> bool:
        return text in (failure.message or "")

    return matcher


def code_is(code: str) -> Callable[[TransactionFailed], bool]:
    def matcher(failure: TransactionFailed) -> bool:
        return failure.code == code

    return matcher


CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        ErrorKind.ALREADY_DRAWN,
        message_contains(REVERT_ALREADY_DRAWN),
        "O sorteio dessa rifa ja foi realizado",
        400,
    ),
    ClassificationRule(
        ErrorKind.INSUFFICIENT_BALANCE,
        message_contains(REVERT_INSUFFICIENT_BALANCE),
        "Saldo insuficiente para entrar na rifa.",
        400,
    ),
    ClassificationRule(
        ErrorKind.CALL_REJECTED,
        code_is(CALL_EXCEPTION),
        "Erro ao tentar executar a transação. Verifique os dados e tente novamente.",
        400,
    ),
)


def classify(failure: TransactionFailed) -> ClassifiedError:
    """Return the :class:`ClassifiedError` of the first rule matching `failure`.

    Failures matching no rule are `Unclassified`, passing the raw failure text through.
    """
    for rule in CLASSIFICATION_RULES:
        if rule.matches(failure):
            return rule.apply()
    return ClassifiedError(ErrorKind.UNCLASSIFIED, failure.message or str(failure), 500)
