from unittest import mock

import pytest
from web3.exceptions import ContractLogicError, TimeExhausted

from rifa_service.constants import CALL_EXCEPTION, NETWORK_ERROR, TIMEOUT
from rifa_service.exceptions import TransactionFailed
from rifa_service.ledger import LedgerClient, PendingTransaction
from tests.unittests.constants import OPERATOR_ADDRESS, RAFFLE_ADDRESS

TX_HASH = b"\x12" * 32
BUILT_TX = {
    "from": OPERATOR_ADDRESS,
    "to": RAFFLE_ADDRESS,
    "data": "0xabcdef",
    "value": 0,
    "nonce": 7,
    "gas": 100000,
}


@pytest.fixture
def web3():
    w3 = mock.MagicMock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {"status": 1, "blockNumber": 10}
    return w3


@pytest.fixture
def account():
    acc = mock.Mock(address=OPERATOR_ADDRESS)
    acc.sign_transaction.return_value = mock.Mock(raw_transaction=b"signed")
    return acc


@pytest.fixture
def ledger_client(web3, account):
    return LedgerClient(web3, account, timeout=5)


@pytest.fixture
def function():
    func = mock.Mock()
    func.build_transaction.return_value = dict(BUILT_TX)
    return func


class TestTransact:
    def test_signs_and_sends_with_pending_nonce(self, ledger_client, web3, account, function):
        pending = ledger_client.transact(function)

        web3.eth.get_transaction_count.assert_called_once_with(OPERATOR_ADDRESS, "pending")
        function.build_transaction.assert_called_once_with({"from": OPERATOR_ADDRESS, "nonce": 7})
        account.sign_transaction.assert_called_once_with(BUILT_TX)
        web3.eth.send_raw_transaction.assert_called_once_with(b"signed")

        assert isinstance(pending, PendingTransaction)
        assert pending.tx_hash == TX_HASH
        assert pending.hex_hash == "0x" + "12" * 32

    def test_does_not_wait_for_the_receipt(self, ledger_client, web3, function):
        ledger_client.transact(function)
        web3.eth.wait_for_transaction_receipt.assert_not_called()

    def test_simulation_revert_is_a_call_exception(self, ledger_client, web3, function):
        function.build_transaction.side_effect = ContractLogicError(
            "execution reverted: Saldo insuficiente"
        )
        with pytest.raises(TransactionFailed) as exc_info:
            ledger_client.transact(function)

        assert exc_info.value.code == CALL_EXCEPTION
        assert exc_info.value.submitted is False
        assert "Saldo insuficiente" in exc_info.value.message
        web3.eth.send_raw_transaction.assert_not_called()

    def test_provider_errors_are_network_errors(self, ledger_client, web3, function):
        web3.eth.send_raw_transaction.side_effect = ConnectionError("connection refused")
        with pytest.raises(TransactionFailed) as exc_info:
            ledger_client.transact(function)

        assert exc_info.value.code == NETWORK_ERROR
        assert exc_info.value.submitted is False


class TestWait:
    def test_returns_the_receipt(self, ledger_client, web3, function):
        receipt = ledger_client.transact(function).wait()

        assert receipt == {"status": 1, "blockNumber": 10}
        web3.eth.wait_for_transaction_receipt.assert_called_once_with(TX_HASH, timeout=5)

    def test_timeout_is_reported_as_submitted(self, ledger_client, web3, function):
        web3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted("too slow")
        pending = ledger_client.transact(function)

        with pytest.raises(TransactionFailed) as exc_info:
            pending.wait()

        assert exc_info.value.code == TIMEOUT
        assert exc_info.value.submitted is True
        assert exc_info.value.tx_hash == pending.hex_hash

    def test_reverted_receipt_replays_the_call_for_its_reason(self, ledger_client, web3, function):
        web3.eth.wait_for_transaction_receipt.return_value = {"status": 0, "blockNumber": 10}
        web3.eth.call.side_effect = ContractLogicError(
            "execution reverted: O sorteio ja foi realizado"
        )

        with pytest.raises(TransactionFailed) as exc_info:
            ledger_client.transact(function).wait()

        web3.eth.call.assert_called_once_with(
            {"from": OPERATOR_ADDRESS, "to": RAFFLE_ADDRESS, "data": "0xabcdef", "value": 0},
            block_identifier=10,
        )
        assert exc_info.value.code == CALL_EXCEPTION
        assert exc_info.value.submitted is True
        assert "O sorteio ja foi realizado" in exc_info.value.message

    def test_reverted_receipt_without_reason(self, ledger_client, web3, function):
        web3.eth.wait_for_transaction_receipt.return_value = {"status": 0, "blockNumber": 10}
        web3.eth.call.return_value = b""

        with pytest.raises(TransactionFailed) as exc_info:
            ledger_client.transact(function).wait()
        assert exc_info.value.message == "Transaction reverted without a reason."


class TestCall:
    def test_returns_the_call_result(self, ledger_client, function):
        function.call.return_value = 1500
        assert ledger_client.call(function) == 1500
        function.call.assert_called_once_with({"from": OPERATOR_ADDRESS})

    def test_revert_is_a_call_exception(self, ledger_client, function):
        function.call.side_effect = ContractLogicError("execution reverted")
        with pytest.raises(TransactionFailed) as exc_info:
            ledger_client.call(function)
        assert exc_info.value.code == CALL_EXCEPTION

    def test_transport_errors_are_network_errors(self, ledger_client, function):
        function.call.side_effect = OSError("unreachable")
        with pytest.raises(TransactionFailed) as exc_info:
            ledger_client.call(function)
        assert exc_info.value.code == NETWORK_ERROR
