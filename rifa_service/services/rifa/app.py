"""Construct and run the Rifa Service's flask app."""
import logging
from typing import Mapping, Optional

import structlog
import waitress

from rifa_service.constants import CONTRACT_REAL_DIGITAL, CONTRACT_RIFA
from rifa_service.ledger import ContractRegistry, LedgerClient
from rifa_service.orchestration import TransactionOrchestrator
from rifa_service.services.common.factories import construct_flask_app
from rifa_service.services.rifa.blueprints import raffles_blueprint, tokens_blueprint
from rifa_service.utils.configuration import ServiceConfig

NAME = "Rifa-Service"

log = structlog.get_logger(__name__)


def create_app(orchestrator: TransactionOrchestrator, test_config: Optional[Mapping] = None):
    app = construct_flask_app(
        test_config=test_config, blueprints=(raffles_blueprint, tokens_blueprint)
    )
    app.config["orchestrator"] = orchestrator
    return app


def build_orchestrator(config: ServiceConfig) -> TransactionOrchestrator:
    """Load the contract registry and bind a ledger client to the operator wallet.

    :raises ConfigurationError: if an artifact or address is missing or invalid.
    """
    registry = ContractRegistry.from_artifacts(
        config.artifacts_dir, {CONTRACT_REAL_DIGITAL: config.token_address, CONTRACT_RIFA: None}
    )
    ledger = LedgerClient.from_private_key(
        config.rpc_url, config.operator_key, timeout=config.tx_timeout
    )
    log.info("Using operator wallet", operator=ledger.address, rpc_url=config.rpc_url)
    return TransactionOrchestrator(ledger, registry)


def serve(config: ServiceConfig, log_file: Optional[str] = None):
    from rifa_service import __version__

    logging.basicConfig(filename=log_file, filemode="a+", level=logging.DEBUG)

    log.info("Creating Rifa Flask App", version=__version__, name=NAME)
    app = create_app(build_orchestrator(config))

    log.info("Starting Rifa Service", host=config.host, port=config.port)
    waitress.serve(app, host=config.host, port=config.port)
