import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Union

import structlog
from eth_utils import is_address, to_checksum_address

from rifa_service.constants import (
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TX_TIMEOUT,
)
from rifa_service.exceptions.config import ConfigurationError

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ServiceConfig:
    """Process-wide, immutable service configuration.

    Built once at startup and handed to the components needing it; the operator
    identity derived from :attr:`.operator_key` is never changed afterwards.

    Environment variables::

        HARDHAT_RPC_URL                 RPC endpoint of the ledger
        PRIVATE_KEY                     private key of the operator wallet
        CONTRACT_ADDRESS_REALDIGITAL    address of the deployed RealDigital token
        ARTIFACTS_DIR                   Hardhat artifacts directory (default: ./artifacts)
        TX_TIMEOUT                      seconds to wait for a transaction receipt
    """

    rpc_url: str
    operator_key: str = field(repr=False)
    token_address: str
    artifacts_dir: Path = Path(DEFAULT_ARTIFACTS_DIR)
    tx_timeout: int = DEFAULT_TX_TIMEOUT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def __post_init__(self):
        self.assert_option(self.rpc_url, "An RPC url is required (HARDHAT_RPC_URL)!")
        self.assert_option(self.operator_key, "An operator private key is required (PRIVATE_KEY)!")
        self.assert_option(
            self.token_address and is_address(self.token_address),
            f"Invalid RealDigital address: {self.token_address!r} (CONTRACT_ADDRESS_REALDIGITAL)",
        )
        self.assert_option(
            isinstance(self.tx_timeout, int) and self.tx_timeout > 0,
            f"tx_timeout must be a positive integer, not {self.tx_timeout!r}",
        )
        # frozen dataclass - bypass __setattr__ for normalization.
        object.__setattr__(self, "token_address", to_checksum_address(self.token_address))
        object.__setattr__(self, "artifacts_dir", Path(self.artifacts_dir))

    @staticmethod
    def assert_option(expression, err: str):
        """Raise a :exc:`ConfigurationError` with message `err` if `expression` is falsy."""
        if not expression:
            raise ConfigurationError(err)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: Union[str, int, Path]
    ) -> "ServiceConfig":
        """Build the configuration from `environ`, defaulting to :data:`os.environ`.

        Keyword arguments whose value is not `None` take precedence over the environment.
        """
        environ = os.environ if environ is None else environ

        timeout = environ.get("TX_TIMEOUT", DEFAULT_TX_TIMEOUT)
        try:
            timeout = int(timeout)
        except ValueError:
            raise ConfigurationError(f"TX_TIMEOUT must be an integer, not {timeout!r}")

        params = {
            "rpc_url": environ.get("HARDHAT_RPC_URL", ""),
            "operator_key": environ.get("PRIVATE_KEY", ""),
            "token_address": environ.get("CONTRACT_ADDRESS_REALDIGITAL", ""),
            "artifacts_dir": Path(environ.get("ARTIFACTS_DIR", DEFAULT_ARTIFACTS_DIR)),
            "tx_timeout": timeout,
        }
        params.update({key: value for key, value in overrides.items() if value is not None})

        config = cls(**params)
        log.debug(
            "Loaded service configuration",
            rpc_url=config.rpc_url,
            token_address=config.token_address,
            artifacts_dir=str(config.artifacts_dir),
            tx_timeout=config.tx_timeout,
        )
        return config
