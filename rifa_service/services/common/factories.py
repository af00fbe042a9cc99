from typing import Iterable, Mapping, Optional, Tuple

import flask
import structlog
from flask import jsonify
from werkzeug.exceptions import HTTPException

from rifa_service.exceptions import InvalidInput
from rifa_service.services.common.blueprints import admin_blueprint, metrics_blueprint

log = structlog.get_logger(__name__)


def error_response(message: str, status: int) -> Tuple[flask.Response, int]:
    """JSON error body used for every failed request: ``{"error": <message>}``."""
    return jsonify({"error": message}), status


def attach_blueprints(app: flask.Flask, *blueprints: flask.Blueprint) -> flask.Flask:
    """Attach the given `blueprints` to the given `app` and return it."""
    for blueprint in blueprints:
        log.debug("Registering blueprint", blueprint=blueprint.name)
        app.register_blueprint(blueprint)
    return app


def register_error_handlers(app: flask.Flask) -> flask.Flask:
    """Render errors as JSON instead of werkzeug's HTML error pages."""

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return error_response(e.description, e.code)

    @app.errorhandler(InvalidInput)
    def handle_invalid_input(e: InvalidInput):
        log.info("Rejected invalid input", path=flask.request.path, reason=str(e))
        return error_response(str(e), e.status_code)

    return app


def construct_flask_app(
    test_config: Optional[Mapping] = None, blueprints: Iterable[flask.Blueprint] = ()
) -> flask.Flask:
    """Construct a flask app with the given blueprints registered.

    All constructed apps use the :var:`admin_blueprint` and :var:`metrics_blueprint`,
    and therefore have the following endpoints:

        `/metrics`
        Exposes prometheus compatible metrics.

        `/status`
        Returns 200 OK as long as the underlying flask app is responsive and running.
    """
    app = flask.Flask(__name__)
    if test_config is not None:
        app.config.from_mapping(test_config)

    attach_blueprints(app, admin_blueprint, metrics_blueprint, *blueprints)
    register_error_handlers(app)
    return app

