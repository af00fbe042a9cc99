from flask import Blueprint, Response, current_app, jsonify

admin_blueprint = Blueprint("admin_view", __name__)


@admin_blueprint.route("/status")
def status_view() -> Response:
    """Return 200 OK as long as the app is responsive.

    If an orchestrator is attached, the address of the signing wallet is included.
    """
    orchestrator = current_app.config.get("orchestrator")
    if orchestrator is None:
        return Response(status=200)
    return jsonify({"operator": orchestrator.ledger.address})
