import json
from unittest import mock

import pytest
from web3 import Web3

from rifa_service.constants import CONTRACT_REAL_DIGITAL, CONTRACT_RIFA
from rifa_service.ledger import ContractRegistry, LedgerClient, PendingTransaction
from rifa_service.orchestration import TransactionOrchestrator
from rifa_service.services.rifa.app import create_app
from tests.unittests.constants import OPERATOR_ADDRESS, RAFFLE_ADDRESS, TOKEN_ADDRESS

REAL_DIGITAL_ABI = [
    {
        "type": "function",
        "name": "approve",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "value", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "mint",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "outputs": [],
    },
]

RIFA_ABI = [
    {
        "type": "constructor",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_token", "type": "address"},
            {"name": "_maxEntradas", "type": "uint256"},
            {"name": "_valorEntrada", "type": "uint256"},
        ],
    },
    {
        "type": "function",
        "name": "entrar",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "quantidade", "type": "uint256"}],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "getEntradas",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address[]"}],
    },
    {
        "type": "function",
        "name": "TokensAcumulados",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]


def write_artifact(artifacts_dir, name, abi, bytecode="0x6080604052"):
    path = artifacts_dir.joinpath("contracts", f"{name}.sol", f"{name}.json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"contractName": name, "abi": abi, "bytecode": bytecode}))
    return path


@pytest.fixture
def artifacts_dir(tmp_path):
    directory = tmp_path.joinpath("artifacts")
    write_artifact(directory, CONTRACT_REAL_DIGITAL, REAL_DIGITAL_ABI)
    write_artifact(directory, CONTRACT_RIFA, RIFA_ABI)
    return directory


@pytest.fixture
def registry(artifacts_dir):
    return ContractRegistry.from_artifacts(
        artifacts_dir, {CONTRACT_REAL_DIGITAL: TOKEN_ADDRESS, CONTRACT_RIFA: None}
    )


@pytest.fixture
def receipt():
    return {
        "transactionHash": b"\xab" * 32,
        "blockNumber": 42,
        "from": OPERATOR_ADDRESS,
        "to": RAFFLE_ADDRESS,
        "status": 1,
        "gasUsed": 51234,
        "contractAddress": None,
    }


@pytest.fixture
def pending_tx(receipt):
    pending = mock.Mock(spec=PendingTransaction)
    pending.wait.return_value = receipt
    return pending


@pytest.fixture
def ledger(pending_tx):
    """A :class:`LedgerClient` stand-in which never talks to a network.

    It carries a provider-less :class:`Web3` instance, so contract objects and
    calls can still be built from the ABIs.
    """
    client = mock.Mock(spec=LedgerClient)
    client.web3 = Web3()
    client.address = OPERATOR_ADDRESS
    client.transact.return_value = pending_tx
    return client


@pytest.fixture
def orchestrator(ledger, registry):
    return TransactionOrchestrator(ledger, registry)


@pytest.fixture
def app(orchestrator):
    return create_app(orchestrator, test_config={"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()
