import timeit
from unittest import mock

import pytest

from rifa_service.constants import TIMEOUT
from rifa_service.exceptions import TransactionFailed
from rifa_service.services.common.metrics import REDMetricsTracker, track_ledger_action
from tests.unittests.constants import RAFFLE_ADDRESS

metrics_module_path = "rifa_service.services.common.metrics"


@mock.patch(f"{metrics_module_path}.HTTP_REQUESTS_LATENCY")
@mock.patch(f"{metrics_module_path}.HTTP_EXCEPTIONS_TOTAL")
@mock.patch(f"{metrics_module_path}.HTTP_REQUESTS_TOTAL")
def test_tracker_counts_requests_and_latency(mock_requests, mock_exceptions, mock_latency):
    with REDMetricsTracker("POST", "/entrar"):
        pass

    mock_requests.labels.assert_called_once_with("POST", "/entrar")
    mock_requests.labels.return_value.inc.assert_called_once()
    mock_latency.labels.return_value.observe.assert_called_once()
    mock_exceptions.labels.assert_not_called()


@mock.patch(f"{metrics_module_path}.HTTP_REQUESTS_LATENCY")
@mock.patch(f"{metrics_module_path}.HTTP_EXCEPTIONS_TOTAL")
@mock.patch(f"{metrics_module_path}.HTTP_REQUESTS_TOTAL")
def test_tracker_counts_exceptions(mock_requests, mock_exceptions, mock_latency):
    with pytest.raises(RuntimeError):
        with REDMetricsTracker("GET", "/rifa/<address>/entradas"):
            raise RuntimeError

    mock_exceptions.labels.assert_called_once_with("GET", "/rifa/<address>/entradas")
    mock_exceptions.labels.return_value.inc.assert_called_once()
    mock_latency.labels.return_value.observe.assert_called_once()


@mock.patch(f"{metrics_module_path}.LEDGER_CONFIRMATION_LATENCY")
@mock.patch(f"{metrics_module_path}.LEDGER_ACTIONS_TOTAL")
def test_track_ledger_action(mock_actions, mock_latency):
    track_ledger_action("Enter", "TIMEOUT", timeit.default_timer())

    mock_actions.labels.assert_called_once_with("Enter", "TIMEOUT")
    mock_actions.labels.return_value.inc.assert_called_once()
    mock_latency.labels.assert_called_once_with("Enter")
    (elapsed,), _ = mock_latency.labels.return_value.observe.call_args
    assert elapsed >= 0


@mock.patch("rifa_service.orchestration.orchestrator.track_ledger_action")
def test_orchestrator_records_action_outcomes(mock_track, orchestrator, pending_tx):
    orchestrator.enter(RAFFLE_ADDRESS, 1)
    pending_tx.wait.side_effect = TransactionFailed("slow", code=TIMEOUT, submitted=True)
    orchestrator.enter(RAFFLE_ADDRESS, 1)

    assert [c.args[:2] for c in mock_track.call_args_list] == [
        ("Enter", "confirmed"),
        ("Enter", "TIMEOUT"),
    ]
