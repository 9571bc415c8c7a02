"""HTTP delivery of samples to a Prometheus Pushgateway."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from acct_gather_prometheus.runtime.delivery_metrics import DeliveryMetrics
from acct_gather_prometheus.schemas import DEFAULT_TIMEOUT, DeliveryOperation

logger = logging.getLogger(__name__)

# (method, url, body) -> response exposing ``status_code`` and ``text``
Transport = Callable[[str, str, Optional[bytes]], Any]

SUCCESS_STATUS = range(200, 206)
CONTENT_TYPE = "text/plain; version=0.0.4"


class DeliveryClient:
    """Pushes sample payloads to the collector and deletes instance series.

    Every call is a single attempt: failures are logged at debug level and
    reported as ``False``, never raised. Repeated delete transport failures
    are only logged once every ``failure_log_interval`` attempts.
    """

    def __init__(
        self,
        host: str,
        timeout: float = DEFAULT_TIMEOUT,
        verbose: bool = False,
        transport: Transport | None = None,
        metrics: DeliveryMetrics | None = None,
        failure_log_interval: int = 100,
    ) -> None:
        self.host = host.rstrip("/")
        self.timeout = timeout
        self.verbose = verbose
        self.metrics = metrics or DeliveryMetrics()
        self.failure_log_interval = failure_log_interval
        self.transport = transport or self._requests_transport
        self._session: requests.Session | None = None
        self._error_counts: Dict[DeliveryOperation, int] = {op: 0 for op in DeliveryOperation}

    def instance_url(self, job_id: int, node_name: str) -> str:
        return f"{self.host}/metrics/job/{job_id}/instance/{node_name}"

    def push(self, job_id: int, node_name: str, payload: str) -> bool:
        """POST a sample payload to the instance's group."""
        body = payload.encode("utf-8") if payload else b""
        return self._send(DeliveryOperation.PUSH, "POST", self.instance_url(job_id, node_name), body)

    def delete(self, job_id: int, node_name: str) -> bool:
        """DELETE every series previously pushed for the instance."""
        return self._send(DeliveryOperation.DELETE, "DELETE", self.instance_url(job_id, node_name), None)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def _send(self, operation: DeliveryOperation, method: str, url: str, body: Optional[bytes]) -> bool:
        logger.debug("%s %s", method, url)
        start = time.perf_counter()
        status_code: Optional[int] = None
        error = ""

        try:
            response = self.transport(method, url, body)
        except (requests.RequestException, OSError) as exc:
            error = str(exc)
            success = False
            self._log_transport_failure(operation, exc)
        else:
            status_code = response.status_code
            success = status_code in SUCCESS_STATUS
            if success:
                logger.debug("%s: data write success", operation.value)
                self._error_counts[operation] = 0
            else:
                logger.debug("%s: data write failed, response code: %s", operation.value, status_code)
                if self.verbose:
                    text = (getattr(response, "text", None) or "").rstrip("\n")
                    logger.info("%s: response body: %s", operation.value, text)

        duration_ms = (time.perf_counter() - start) * 1000
        self.metrics.record(operation, url, success, duration_ms, status_code=status_code, error=error)
        if self.verbose:
            logger.debug("%s: took %.3f ms to send data", operation.value, duration_ms)
        return success

    def _log_transport_failure(self, operation: DeliveryOperation, exc: Exception) -> None:
        count = self._error_counts[operation]
        self._error_counts[operation] = count + 1
        if operation == DeliveryOperation.PUSH or count % self.failure_log_interval == 0:
            logger.debug("%s: failed to send data (discarded). Reason: %s", operation.value, exc)

    def _requests_transport(self, method: str, url: str, body: Optional[bytes]) -> Any:
        # One pooled session for the process lifetime
        if self._session is None:
            self._session = requests.Session()
        headers = {"Content-Type": CONTENT_TYPE} if body is not None else {}
        return self._session.request(method, url, data=body, headers=headers, timeout=self.timeout)
