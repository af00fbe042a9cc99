from pathlib import Path

import pytest

from rifa_service.constants import DEFAULT_TX_TIMEOUT
from rifa_service.exceptions import ConfigurationError
from rifa_service.utils.configuration import ServiceConfig
from tests.unittests.constants import TOKEN_ADDRESS

PRIVATE_KEY = "0x" + "4c" * 32


@pytest.fixture
def environ():
    return {
        "HARDHAT_RPC_URL": "http://127.0.0.1:8545",
        "PRIVATE_KEY": PRIVATE_KEY,
        "CONTRACT_ADDRESS_REALDIGITAL": TOKEN_ADDRESS.lower(),
    }


def test_from_env_reads_the_environment(environ):
    config = ServiceConfig.from_env(environ)

    assert config.rpc_url == "http://127.0.0.1:8545"
    assert config.operator_key == PRIVATE_KEY
    assert config.token_address == TOKEN_ADDRESS
    assert config.artifacts_dir == Path("artifacts")
    assert config.tx_timeout == DEFAULT_TX_TIMEOUT


def test_from_env_overrides_take_precedence(environ):
    config = ServiceConfig.from_env(environ, rpc_url="http://other:8545", port=5000, host=None)
    assert config.rpc_url == "http://other:8545"
    assert config.port == 5000
    assert config.host == "127.0.0.1"


@pytest.mark.parametrize(
    "key, value",
    argvalues=[
        ("HARDHAT_RPC_URL", ""),
        ("PRIVATE_KEY", ""),
        ("CONTRACT_ADDRESS_REALDIGITAL", "not-an-address"),
        ("CONTRACT_ADDRESS_REALDIGITAL", ""),
        ("TX_TIMEOUT", "soon"),
        ("TX_TIMEOUT", "0"),
    ],
)
def test_invalid_configuration_is_fatal(environ, key, value):
    environ[key] = value
    with pytest.raises(ConfigurationError):
        ServiceConfig.from_env(environ)


def test_config_is_immutable_and_hides_the_private_key(environ):
    config = ServiceConfig.from_env(environ)
    with pytest.raises(AttributeError):
        config.operator_key = "something else"
    assert PRIVATE_KEY not in repr(config)
