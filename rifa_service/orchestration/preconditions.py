"""Local validation of actions, performed before anything is sent to the ledger.

:func:`validate` is pure: it neither mutates the action nor touches the network,
and returns the contract call arguments in their on-chain representation.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from eth_utils import is_address, to_checksum_address

from rifa_service.constants import UINT256_MAX
from rifa_service.exceptions import InvalidInput
from rifa_service.utils.amounts import to_fixed_point


class ActionKind(Enum):
    DEPLOY_RAFFLE = "DeployRaffle"
    APPROVE = "Approve"
    ENTER = "Enter"
    MINT = "Mint"


@dataclass(frozen=True)
class PendingAction:
    """A single requested ledger action. Lives for the duration of one request."""

    kind: ActionKind
    parameters: Dict[str, Any] = field(default_factory=dict)
    submitter: Optional[str] = None


@dataclass(frozen=True)
class ValidationResult:
    action: PendingAction
    #: positional arguments of the contract call, in on-chain representation.
    arguments: Tuple[Any, ...]


def require(parameters: dict, name: str) -> Any:
    value = parameters.get(name)
    if value is None or value == "":
        raise InvalidInput(f"{name} is required")
    return value


def account(parameters: dict, name: str) -> str:
    value = require(parameters, name)
    if not isinstance(value, str) or not is_address(value):
        raise InvalidInput(f"{name} must be a valid account address, got {value!r}")
    return to_checksum_address(value)


def positive_amount(parameters: dict, name: str) -> int:
    raw = to_fixed_point(require(parameters, name), field=name)
    if raw <= 0:
        raise InvalidInput(f"{name} must be greater than zero")
    if raw > UINT256_MAX:
        raise InvalidInput(f"{name} exceeds the largest representable token amount")
    return raw


def positive_integer(parameters: dict, name: str) -> int:
    value = require(parameters, name)
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer")
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidInput(f"{name} must be greater than zero")
    if value > UINT256_MAX:
        raise InvalidInput(f"{name} must be at most {UINT256_MAX}")
    return value


def deploy_raffle_arguments(parameters: dict) -> tuple:
    return (
        account(parameters, "token_address"),
        positive_integer(parameters, "max_entries"),
        positive_amount(parameters, "entry_price"),
    )


def approve_arguments(parameters: dict) -> tuple:
    # The raffle is the spender of the approved tokens.
    return account(parameters, "raffle_address"), positive_amount(parameters, "amount")


def enter_arguments(parameters: dict) -> tuple:
    account(parameters, "raffle_address")
    return (positive_integer(parameters, "entry_count"),)


def mint_arguments(parameters: dict) -> tuple:
    return account(parameters, "recipient"), positive_amount(parameters, "amount")


VALIDATORS: Dict[ActionKind, Callable[[dict], tuple]] = {
    ActionKind.DEPLOY_RAFFLE: deploy_raffle_arguments,
    ActionKind.APPROVE: approve_arguments,
    ActionKind.ENTER: enter_arguments,
    ActionKind.MINT: mint_arguments,
}


def validate(action: PendingAction) -> ValidationResult:
    """Check the locally verifiable preconditions of `action`.

    :raises InvalidInput: naming the first violated constraint.
    """
    return ValidationResult(action, VALIDATORS[action.kind](action.parameters))
