"""Delivery metrics: outcome and latency of every request sent to the collector."""

from collections import deque
from datetime import datetime
from zoneinfo import ZoneInfo
from typing import Deque, List, Optional

from acct_gather_prometheus.schemas import DeliveryOperation, DeliveryRecord

DEFAULT_MAX_RECORDS = 1000


class DeliveryMetrics:
    """Collects the most recent delivery records; older ones are dropped."""

    def __init__(self, enabled: bool = True, max_records: int = DEFAULT_MAX_RECORDS):
        """Initialize delivery metrics.

        Args:
            enabled: When False, ``record`` is a no-op
            max_records: Number of most recent records retained
        """
        if max_records < 1:
            raise ValueError(f"max_records must be positive, got {max_records}")
        self.enabled = enabled
        self.max_records = max_records
        self.records: Deque[DeliveryRecord] = deque(maxlen=max_records)

    def record(
        self,
        operation: DeliveryOperation,
        url: str,
        success: bool,
        duration_ms: float,
        status_code: Optional[int] = None,
        error: str = ""
    ) -> None:
        """Record the outcome of one request.

        Args:
            operation: Push or delete
            url: Target URL
            success: Whether the collector accepted the request
            duration_ms: Wall-clock duration in milliseconds
            status_code: HTTP status, None when the transport failed
            error: Transport error text, if any
        """
        if not self.enabled:
            return

        self.records.append(DeliveryRecord(
            operation=operation,
            url=url,
            success=success,
            duration_ms=duration_ms,
            timestamp=datetime.now(ZoneInfo("UTC")).isoformat(),
            status_code=status_code,
            error=error
        ))

    def get_records(
        self,
        operation: Optional[DeliveryOperation] = None,
        success: Optional[bool] = None
    ) -> List[DeliveryRecord]:
        """Get delivery records with optional filtering.

        Args:
            operation: Optional operation filter
            success: Optional outcome filter

        Returns:
            List of matching records
        """
        records = list(self.records)

        if operation:
            records = [r for r in records if r.operation == operation]

        if success is not None:
            records = [r for r in records if r.success is success]

        return records

    def failure_count(self, operation: Optional[DeliveryOperation] = None) -> int:
        """Number of failed requests, optionally for one operation."""
        return len(self.get_records(operation=operation, success=False))

    def clear(self) -> None:
        """Clear all collected records."""
        self.records.clear()
