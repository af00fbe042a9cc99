from unittest import mock

import flask

from rifa_service.services.common.factories import construct_flask_app
from tests.unittests.constants import OPERATOR_ADDRESS


def test_status_without_orchestrator():
    client = construct_flask_app(test_config={"TESTING": True}).test_client()

    resp = client.get("/status")

    assert resp.status_code == 200


def test_status_reports_the_operator_wallet(client):
    resp = client.get("/status")

    assert resp.status_code == 200
    assert resp.get_json() == {"operator": OPERATOR_ADDRESS}


def test_metrics_endpoint_exposes_red_metrics(client):
    client.get("/status")
    client.post("/approve", json={})

    resp = client.get("/metrics")

    assert resp.status_code == 200
    assert resp.mimetype == "text/plain"
    text = resp.get_data(as_text=True)
    assert "rifa_http_requests_total" in text
    assert 'path="/approve"' in text


def test_http_errors_are_rendered_as_json(client):
    resp = client.get("/criar-rifa")

    assert resp.status_code == 405
    assert "error" in resp.get_json()


def test_blueprints_are_attached():
    blueprint = flask.Blueprint("extra_blueprint", __name__)
    app = construct_flask_app(blueprints=[blueprint])

    assert {"admin_view", "metrics_view", "extra_blueprint"} <= set(app.blueprints)


@mock.patch("rifa_service.services.common.metrics.HTTP_EXCEPTIONS_TOTAL")
def test_rejected_input_is_counted_as_exception(mock_counter, client):
    client.get("/rifa/not-a-raffle/entradas")

    mock_counter.labels.assert_called_once_with("GET", "/rifa/<address>/entradas")
    mock_counter.labels.return_value.inc.assert_called_once()
