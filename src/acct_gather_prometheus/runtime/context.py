"""Per-process profiler context shared by every plugin hook."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from acct_gather_prometheus.runtime.delivery_client import DeliveryClient, Transport
from acct_gather_prometheus.runtime.delivery_metrics import DeliveryMetrics
from acct_gather_prometheus.runtime.profile_state import ProfilingState
from acct_gather_prometheus.runtime.registry import SchemaRegistry
from acct_gather_prometheus.schemas import PrometheusConfig, StepDescriptor


@dataclass
class ProfilerContext:
    """Configuration, schema registry, profiling state and delivery client of one worker."""

    config: PrometheusConfig
    client: DeliveryClient
    state: ProfilingState = field(default_factory=ProfilingState)
    registry: Optional[SchemaRegistry] = None
    step: Optional[StepDescriptor] = None

    def __post_init__(self):
        if self.registry is None:
            self.registry = SchemaRegistry(self.state)

    @classmethod
    def from_config(
        cls,
        config: PrometheusConfig,
        verbose: bool = False,
        transport: Transport | None = None,
        metrics: DeliveryMetrics | None = None,
    ) -> "ProfilerContext":
        client = DeliveryClient(
            config.host,
            timeout=config.timeout,
            verbose=verbose,
            transport=transport,
            metrics=metrics,
        )
        return cls(config=config, client=client)

    @property
    def metrics(self) -> DeliveryMetrics:
        return self.client.metrics

    def close(self) -> None:
        self.registry.clear()
        self.client.close()
