"""Create, enter and inspect raffles.

The following endpoints are supplied by this blueprint:

    * [POST] `/criar-rifa`
        Deploy a new raffle bound to the RealDigital token.

    * [POST] `/entrar`
        Buy entries of a raffle with the operator wallet's tokens. The raffle must
        have been approved to spend them beforehand (see `/approve`).

    * [GET] `/rifa/<address>/entradas`
        List the entries of the raffle at `address`. Malformed addresses
        are rejected with 400.

    * [GET] `/rifa/<address>/tokens-acumulados`
        Return the tokens accumulated by the raffle at `address`. Malformed
        addresses are rejected with 400.
"""
import structlog
from flask import Blueprint, current_app, jsonify, request

from rifa_service.exceptions import TransactionFailed
from rifa_service.orchestration import TransactionOrchestrator, classify
from rifa_service.services.common.factories import error_response
from rifa_service.services.common.metrics import REDMetricsTracker
from rifa_service.services.rifa.schemas.raffles import (
    AccumulatedTokensSchema,
    CreateRaffleSchema,
    EnterRaffleSchema,
    RaffleEntriesSchema,
)

raffles_blueprint = Blueprint("raffles_blueprint", __name__)

create_raffle_schema = CreateRaffleSchema()
enter_raffle_schema = EnterRaffleSchema()
raffle_entries_schema = RaffleEntriesSchema()
accumulated_tokens_schema = AccumulatedTokensSchema()

log = structlog.get_logger(__name__)


def get_orchestrator() -> TransactionOrchestrator:
    return current_app.config["orchestrator"]


@raffles_blueprint.route("/criar-rifa", methods=["POST"])
def create_raffle_view():
    """Deploy a new raffle contract.

    ---
    post:
      description: "Deploy a new raffle bound to the RealDigital token."
      parameters:
        - name: maxEntradas
          in: body
          required: true
          schema:
            type: integer

        - name: valorEntrada
          in: body
          required: true
          schema:
            type: string

      responses:
        200:
          description: "Address of the deployed raffle."
          content:
            application/json:
              schema: {$ref: '#/components/schemas/CreateRaffleSchema'}
        500:
          description: "The deployment failed or reverted."
    """
    handlers = {"POST": create_raffle}
    with REDMetricsTracker(request.method, "/criar-rifa"):
        return handlers[request.method]()


def create_raffle():
    data = create_raffle_schema.validate_and_deserialize(request.get_json(silent=True))
    log.info("Processing raffle deployment request", **data)

    outcome = get_orchestrator().deploy_raffle(data["max_entries"], data["entry_price"])
    if not outcome.succeeded:
        failure = outcome.failure
        log.error(
            "Raffle deployment failed",
            error=type(failure).__name__,
            code=failure.code,
            reason=failure.message,
        )
        return error_response("Erro ao criar a rifa", 500)

    dumped = create_raffle_schema.dump(
        {"message": "Rifa criada com sucesso!", "raffle_address": outcome.raffle.address}
    )
    return jsonify(dumped)


@raffles_blueprint.route("/entrar", methods=["POST"])
def enter_raffle_view():
    """Enter a raffle with the operator wallet.

    Failures reported by the raffle are mapped to `400 Bad Request` responses with
    a message explaining the problem; unexpected ledger errors yield a
    `500 Internal Server Error` carrying the raw failure message.

    ---
    post:
      description: "Buy entries of the raffle at `rifaAddress`."
      parameters:
        - name: rifaAddress
          in: body
          required: true
          schema:
            type: string

        - name: quantidadeRifas
          in: body
          required: true
          schema:
            type: integer

      responses:
        200:
          description: "Receipt of the mined transaction."
          content:
            application/json:
              schema: {$ref: '#/components/schemas/EnterRaffleSchema'}
        400:
          description: "The raffle rejected the entry, see `error`."
        500:
          description: "Unclassified ledger error."
    """
    with REDMetricsTracker(request.method, "/entrar"):
        data = enter_raffle_schema.validate_and_deserialize(request.get_json(silent=True))
        log.info("Processing raffle entry request", **data)

        outcome = get_orchestrator().enter(data["raffle_address"], data["entry_count"])
        if not outcome.succeeded:
            error = classify(outcome.failure)
            log.warning(
                "Raffle entry failed", kind=error.kind.value, reason=outcome.failure.message
            )
            return error_response(error.message, error.status_code)

        dumped = enter_raffle_schema.dump(
            {"message": "Você entrou na rifa com sucesso", "tx": outcome.receipt}
        )
        return jsonify(dumped)


@raffles_blueprint.route("/rifa/<address>/entradas", methods=["GET"])
def raffle_entries_view(address):
    """List the entries of the raffle at `address`.

    A malformed `address` is rejected with `400 Bad Request` before the ledger is
    queried; failing to read the raffle yields `500 Internal Server Error`.
    """
    with REDMetricsTracker(request.method, "/rifa/<address>/entradas"):
        try:
            entries = get_orchestrator().entries(address)
        except TransactionFailed as e:
            log.error("Could not read raffle entries", raffle=address, reason=e.message)
            return error_response("Erro ao obter as entradas da rifa", 500)
        return jsonify(raffle_entries_schema.dump({"entries": entries}))


@raffles_blueprint.route("/rifa/<address>/tokens-acumulados", methods=["GET"])
def accumulated_tokens_view(address):
    """Return the tokens accumulated by the raffle at `address` as a decimal string.

    Responds with `400 Bad Request` for a malformed `address`, and with
    `500 Internal Server Error` if the raffle could not be read.
    """
    with REDMetricsTracker(request.method, "/rifa/<address>/tokens-acumulados"):
        try:
            accumulated = get_orchestrator().accumulated_tokens(address)
        except TransactionFailed as e:
            log.error("Could not read accumulated tokens", raffle=address, reason=e.message)
            return error_response("Erro ao obter os tokens acumulados", 500)
        return jsonify(accumulated_tokens_schema.dump({"accumulated_tokens": accumulated}))
