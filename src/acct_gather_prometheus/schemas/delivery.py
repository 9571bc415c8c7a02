"""Delivery record schema definitions."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DeliveryOperation(str, Enum):
    """HTTP operations issued against the collector."""
    PUSH = "push"  # POST of a sample payload
    DELETE = "delete"  # removal of an instance's series


@dataclass
class DeliveryRecord:
    """Outcome of a single request to the collector."""
    operation: DeliveryOperation
    url: str
    success: bool
    duration_ms: float
    timestamp: str  # ISO-8601
    status_code: Optional[int] = None  # None when the transport failed
    error: str = ""
