"""Delivery client tests with injected transports."""

import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from acct_gather_prometheus.runtime import DeliveryClient, DeliveryMetrics
from acct_gather_prometheus.schemas import DeliveryOperation

HOST = "http://collector:9091"
URL = "http://collector:9091/metrics/job/123/instance/node07"


class DummyResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


class RecordingTransport:
    """Fake transport returning a fixed status and remembering calls."""

    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text
        self.calls = []

    def __call__(self, method, url, body):
        self.calls.append((method, url, body))
        return DummyResponse(self.status_code, self.text)


def failing_transport(method, url, body):
    raise requests.ConnectionError("connection refused")


class TestUrls:
    """Target URL construction."""

    def test_instance_url(self):
        client = DeliveryClient(HOST, transport=RecordingTransport())
        assert client.instance_url(123, "node07") == URL

    def test_host_trailing_slash(self):
        client = DeliveryClient(HOST + "/", transport=RecordingTransport())
        assert client.instance_url(123, "node07") == URL

    def test_delete_targets_instance(self):
        transport = RecordingTransport()
        client = DeliveryClient(HOST, transport=transport)
        assert client.delete(123, "node07") is True
        assert transport.calls == [("DELETE", URL, None)]

    def test_push_posts_payload(self):
        transport = RecordingTransport()
        client = DeliveryClient(HOST, transport=transport)
        assert client.push(123, "node07", "cpu_pct 12.35\nrss_bytes 2048\n") is True
        assert transport.calls == [("POST", URL, b"cpu_pct 12.35\nrss_bytes 2048\n")]


class TestStatusHandling:
    """Success iff the collector answers 200-205."""

    @pytest.mark.parametrize("status", [200, 201, 202, 204, 205])
    def test_success_statuses(self, status):
        client = DeliveryClient(HOST, transport=RecordingTransport(status))
        assert client.push(1, "n", "a 1\n") is True
        assert client.delete(1, "n") is True

    @pytest.mark.parametrize("status", [199, 206, 301, 400, 404, 500, 503])
    def test_failure_statuses(self, status):
        client = DeliveryClient(HOST, transport=RecordingTransport(status))
        assert client.push(1, "n", "a 1\n") is False
        assert client.delete(1, "n") is False

    def test_transport_failure_never_raises(self):
        client = DeliveryClient(HOST, transport=failing_transport)
        assert client.push(1, "n", "a 1\n") is False
        assert client.delete(1, "n") is False

    @pytest.mark.parametrize(
        "error",
        [ConnectionRefusedError("refused"), TimeoutError("timed out"), OSError("network unreachable")],
    )
    def test_socket_errors_never_raise(self, error):
        metrics = DeliveryMetrics()
        client = DeliveryClient(HOST, transport=MagicMock(side_effect=error), metrics=metrics)
        assert client.push(1, "n", "a 1\n") is False
        assert client.delete(1, "n") is False
        assert metrics.failure_count() == 2
        assert all(r.status_code is None for r in metrics.records)

    def test_single_attempt_per_call(self):
        transport = RecordingTransport(500)
        client = DeliveryClient(HOST, transport=transport)
        client.push(1, "n", "a 1\n")
        assert len(transport.calls) == 1


class TestDiagnostics:
    """Logging of failures and timings."""

    def test_response_body_logged_when_verbose(self, caplog):
        client = DeliveryClient(HOST, verbose=True, transport=RecordingTransport(400, "text format parsing error\n\n"))
        with caplog.at_level(logging.DEBUG, logger="acct_gather_prometheus"):
            client.push(1, "n", "bad line\n")
        bodies = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
        assert bodies == ["push: response body: text format parsing error"]
        assert any("took" in r.getMessage() for r in caplog.records)

    def test_response_body_not_logged_by_default(self, caplog):
        client = DeliveryClient(HOST, transport=RecordingTransport(400, "error"))
        with caplog.at_level(logging.DEBUG, logger="acct_gather_prometheus"):
            client.push(1, "n", "bad line\n")
        assert not [r for r in caplog.records if r.levelno == logging.INFO]
        assert not any("took" in r.getMessage() for r in caplog.records)

    def test_every_push_failure_logged(self, caplog):
        client = DeliveryClient(HOST, transport=failing_transport)
        with caplog.at_level(logging.DEBUG, logger="acct_gather_prometheus"):
            for _ in range(3):
                client.push(1, "n", "a 1\n")
        failures = [r for r in caplog.records if "failed to send data" in r.getMessage()]
        assert len(failures) == 3

    def test_repeated_delete_failures_suppressed(self, caplog):
        client = DeliveryClient(HOST, transport=failing_transport, failure_log_interval=100)
        with caplog.at_level(logging.DEBUG, logger="acct_gather_prometheus"):
            for _ in range(150):
                client.delete(1, "n")
        failures = [r for r in caplog.records if "failed to send data" in r.getMessage()]
        assert len(failures) == 2  # attempts 1 and 101

    def test_delete_failure_counter_resets_on_success(self, caplog):
        transport = MagicMock(side_effect=[
            requests.ConnectionError("down"),
            requests.ConnectionError("down"),
            DummyResponse(202),
            requests.ConnectionError("down"),
        ])
        client = DeliveryClient(HOST, transport=transport, failure_log_interval=100)
        with caplog.at_level(logging.DEBUG, logger="acct_gather_prometheus"):
            for _ in range(4):
                client.delete(1, "n")
        failures = [r for r in caplog.records if "failed to send data" in r.getMessage()]
        assert len(failures) == 2


class TestDeliveryMetrics:
    """Delivery records kept for every request."""

    def test_records_outcomes(self):
        metrics = DeliveryMetrics()
        transport = MagicMock(side_effect=[DummyResponse(200), DummyResponse(500), requests.Timeout("slow")])
        client = DeliveryClient(HOST, transport=transport, metrics=metrics)

        client.push(123, "node07", "a 1\n")
        client.push(123, "node07", "a 2\n")
        client.delete(123, "node07")

        assert [r.status_code for r in metrics.records] == [200, 500, None]
        assert [r.success for r in metrics.records] == [True, False, False]
        assert metrics.records[2].operation == DeliveryOperation.DELETE
        assert metrics.records[2].error == "slow"
        assert all(r.url == URL for r in metrics.records)
        assert all(r.duration_ms >= 0 for r in metrics.records)
        assert metrics.failure_count() == 2
        assert metrics.failure_count(DeliveryOperation.PUSH) == 1

    def test_filtering(self):
        metrics = DeliveryMetrics()
        client = DeliveryClient(HOST, transport=RecordingTransport(200), metrics=metrics)
        client.push(1, "n", "a 1\n")
        client.delete(1, "n")
        assert len(metrics.get_records(operation=DeliveryOperation.PUSH)) == 1
        assert len(metrics.get_records(success=True)) == 2
        assert metrics.get_records(success=False) == []
        metrics.clear()
        assert len(metrics.records) == 0

    def test_records_are_bounded(self):
        metrics = DeliveryMetrics(max_records=5)
        client = DeliveryClient(HOST, transport=RecordingTransport(200), metrics=metrics)
        for job_id in range(50):
            client.push(job_id, "n", "a 1\n")
        assert len(metrics.records) == 5
        assert metrics.records[0].url == f"{HOST}/metrics/job/45/instance/n"
        assert metrics.records[-1].url == f"{HOST}/metrics/job/49/instance/n"

    def test_default_client_metrics_bounded(self):
        client = DeliveryClient(HOST, transport=RecordingTransport(200))
        for _ in range(client.metrics.max_records + 10):
            client.push(1, "n", "a 1\n")
        assert len(client.metrics.records) == client.metrics.max_records

    def test_invalid_max_records(self):
        with pytest.raises(ValueError, match="max_records"):
            DeliveryMetrics(max_records=0)

    def test_disabled_metrics(self):
        metrics = DeliveryMetrics(enabled=False)
        client = DeliveryClient(HOST, transport=RecordingTransport(200), metrics=metrics)
        client.push(1, "n", "a 1\n")
        assert len(metrics.records) == 0


class TestRequestsTransport:
    """Default transport over a pooled requests session."""

    def test_session_reused_and_closed(self):
        session = MagicMock()
        session.request.return_value = DummyResponse(200)
        with patch("acct_gather_prometheus.runtime.delivery_client.requests.Session", return_value=session) as factory:
            client = DeliveryClient(HOST, timeout=2.5)
            client.push(123, "node07", "a 1\n")
            client.delete(123, "node07")
            client.close()

        factory.assert_called_once_with()
        first, second = session.request.call_args_list
        assert first.args == ("POST", URL)
        assert first.kwargs["data"] == b"a 1\n"
        assert first.kwargs["timeout"] == 2.5
        assert first.kwargs["headers"]["Content-Type"].startswith("text/plain")
        assert second.args == ("DELETE", URL)
        assert second.kwargs["data"] is None
        session.close.assert_called_once_with()

    def test_request_exception_reported_as_failure(self):
        session = MagicMock()
        session.request.side_effect = requests.ConnectionError("refused")
        with patch("acct_gather_prometheus.runtime.delivery_client.requests.Session", return_value=session):
            client = DeliveryClient(HOST)
            assert client.push(1, "n", "a 1\n") is False
