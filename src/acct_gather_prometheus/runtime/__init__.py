"""Runtime exports."""

from acct_gather_prometheus.runtime.context import ProfilerContext
from acct_gather_prometheus.runtime.delivery_client import DeliveryClient, Transport
from acct_gather_prometheus.runtime.delivery_metrics import DeliveryMetrics
from acct_gather_prometheus.runtime.encoder import encode
from acct_gather_prometheus.runtime.profile_state import ProfilingState
from acct_gather_prometheus.runtime.registry import SchemaRegistry

__all__ = [
    "ProfilerContext",
    "DeliveryClient",
    "Transport",
    "DeliveryMetrics",
    "encode",
    "ProfilingState",
    "SchemaRegistry",
]
