import pytest

from rifa_service.constants import CALL_EXCEPTION, NETWORK_ERROR, TIMEOUT
from rifa_service.exceptions import TransactionFailed
from rifa_service.orchestration.classifier import CLASSIFICATION_RULES, ErrorKind, classify


def failure(message, code=CALL_EXCEPTION):
    return TransactionFailed(message, code=code, submitted=True)


def test_already_drawn_raffle():
    error = classify(failure("execution reverted: O sorteio ja foi realizado"))
    assert error.kind is ErrorKind.ALREADY_DRAWN
    assert error.message == "O sorteio dessa rifa ja foi realizado"
    assert error.status_code == 400


def test_insufficient_balance():
    error = classify(failure("execution reverted: Saldo insuficiente"))
    assert error.kind is ErrorKind.INSUFFICIENT_BALANCE
    assert error.message == "Saldo insuficiente para entrar na rifa."
    assert error.status_code == 400


def test_already_drawn_takes_precedence_over_insufficient_balance():
    error = classify(failure("Saldo insuficiente; O sorteio ja foi realizado"))
    assert error.kind is ErrorKind.ALREADY_DRAWN


def test_insufficient_balance_does_not_need_the_draw_text():
    error = classify(failure("Saldo insuficiente, the raffle was drawn"))
    assert error.kind is ErrorKind.INSUFFICIENT_BALANCE


def test_revert_strings_match_independent_of_the_failure_code():
    error = classify(failure("O sorteio ja foi realizado", code=NETWORK_ERROR))
    assert error.kind is ErrorKind.ALREADY_DRAWN


def test_other_call_exceptions_are_rejected_calls():
    error = classify(failure("execution reverted: ERC20: insufficient allowance"))
    assert error.kind is ErrorKind.CALL_REJECTED
    assert error.message == (
        "Erro ao tentar executar a transação. Verifique os dados e tente novamente."
    )
    assert error.status_code == 400


@pytest.mark.parametrize("code", argvalues=[NETWORK_ERROR, TIMEOUT, None])
def test_everything_else_is_unclassified(code):
    error = classify(failure("connection refused", code=code))
    assert error.kind is ErrorKind.UNCLASSIFIED
    assert error.message == "connection refused"
    assert error.status_code == 500


def test_rule_order():
    assert [rule.kind for rule in CLASSIFICATION_RULES] == [
        ErrorKind.ALREADY_DRAWN,
        ErrorKind.INSUFFICIENT_BALANCE,
        ErrorKind.CALL_REJECTED,
    ]
