"""Manage the RealDigital token allowance of raffles.

The following endpoints are supplied by this blueprint:

    * [POST] `/approve`
        Allow a raffle to spend up to `amount` of the operator wallet's tokens,
        replacing any previous allowance.
"""
import structlog
from flask import Blueprint, current_app, jsonify, request

from rifa_service.orchestration import classify
from rifa_service.services.common.factories import error_response
from rifa_service.services.common.metrics import REDMetricsTracker
from rifa_service.services.rifa.schemas.tokens import ApproveSchema

tokens_blueprint = Blueprint("tokens_blueprint", __name__)

approve_schema = ApproveSchema()

log = structlog.get_logger(__name__)


@tokens_blueprint.route("/approve", methods=["POST"])
def approve_view():
    """Approve a raffle to spend the operator wallet's tokens.

    ---
    post:
      description: "Approve the raffle at `rifaAddress` to spend `amount` tokens."
      parameters:
        - name: rifaAddress
          in: body
          required: true
          schema:
            type: string

        - name: amount
          in: body
          required: true
          schema:
            type: string

      responses:
        200:
          description: "Receipt of the mined approval."
          content:
            application/json:
              schema: {$ref: '#/components/schemas/ApproveSchema'}
        500:
          description: "The approval failed."
    """
    with REDMetricsTracker(request.method, "/approve"):
        data = approve_schema.validate_and_deserialize(request.get_json(silent=True))
        log.info("Processing approval request", **data)

        orchestrator = current_app.config["orchestrator"]
        outcome = orchestrator.approve(data["raffle_address"], data["amount"])
        if not outcome.succeeded:
            failure = outcome.failure
            log.warning(
                "Approval failed", kind=classify(failure).kind.value, reason=failure.message
            )
            return error_response(failure.message, 500)

        dumped = approve_schema.dump(
            {"message": "Aprovação realizada com sucesso", "tx": outcome.receipt}
        )
        return jsonify(dumped)
