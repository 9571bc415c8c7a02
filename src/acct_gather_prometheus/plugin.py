"""Prometheus Pushgateway accounting profile plugin.

Registers sample tables announced by the task tracker, encodes each sample in
the Prometheus text format and pushes it to
``<host>/metrics/job/<job_id>/instance/<node_name>``. When a task ends the
instance's group is deleted from the gateway.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from acct_gather_prometheus import config_loader
from acct_gather_prometheus.exceptions import ProfilerError
from acct_gather_prometheus.runtime import ProfilerContext, Transport, encode
from acct_gather_prometheus.schemas import (
    SUCCESS,
    ConfigOption,
    ProfileCategory,
    ProfileInfo,
    ProfilePluginBase,
    SampleValue,
    StepDescriptor,
    profile_to_string,
)

logger = logging.getLogger(__name__)


class PrometheusProfilePlugin(ProfilePluginBase):
    """Host-facing plugin object; all state lives in its ProfilerContext."""

    plugin_name = "AcctGatherProfile prometheus plugin"
    plugin_type = config_loader.PLUGIN_TYPE

    def __init__(self, debug_flags: Iterable[str] = (), transport: Transport | None = None):
        """Initialize plugin.

        Args:
            debug_flags: Host debug flags; ``Profile`` enables verbose delivery diagnostics
            transport: Optional HTTP transport override (tests)
        """
        self.debug_flags = {flag.lower() for flag in debug_flags}
        self.transport = transport
        self.context: Optional[ProfilerContext] = None

    @property
    def verbose(self) -> bool:
        return "profile" in self.debug_flags

    # Configuration

    def conf_options(self) -> List[ConfigOption]:
        return config_loader.conf_options()

    def conf_set(self, table: Optional[Mapping[str, Any]]) -> None:
        config = config_loader.conf_set(table)
        if self.context is not None:
            self.context.close()
        self.context = ProfilerContext.from_config(config, verbose=self.verbose, transport=self.transport)
        logger.debug("%s loaded", self.plugin_name)

    def conf_values(self) -> List[Tuple[str, str]]:
        return config_loader.conf_values(self._require_context().config)

    def get(self, info_type: Union[ProfileInfo, str]) -> Any:
        context = self._require_context()
        try:
            info_type = ProfileInfo(info_type)
        except ValueError:
            logger.debug("%s: info_type %r invalid", self.plugin_type, info_type)
            return None

        if info_type == ProfileInfo.DIR:
            return context.config.host
        if info_type == ProfileInfo.DEFAULT:
            return context.config.default_category
        return context.state.running

    # Step and task lifecycle

    def node_step_start(self, step: StepDescriptor) -> int:
        context = self._require_context()
        logger.debug("%s: option --profile=%s", self.plugin_type, profile_to_string(step.profile))
        context.step = step
        context.state.resolve_profile(step, context.config)
        return SUCCESS

    def task_start(self, task_id: int) -> int:
        logger.debug("%s: task %s started with profile %s", self.plugin_type, task_id,
                     profile_to_string(self._require_context().state.running))
        return SUCCESS

    def task_end(self, task_pid: int) -> int:
        context = self._require_context()
        step = context.step
        if step is None:
            logger.debug("%s: task %s ended outside of a step", self.plugin_type, task_pid)
            return SUCCESS
        context.client.delete(step.job_id, step.node_name)
        return SUCCESS

    # Datasets and samples

    def create_dataset(self, name: str, parent: int, field_definitions: Sequence[Any]) -> int:
        return self._require_context().registry.create_table(name, field_definitions)

    def add_sample_data(
        self,
        handle: int,
        values: Sequence[SampleValue],
        timestamp: Optional[float] = None,
    ) -> int:
        """Encode a sample and push it to the gateway.

        The timestamp is accepted for interface compatibility but not sent:
        the Pushgateway rejects pushed samples that carry timestamps.
        Delivery failures are logged by the client and never reported here.

        Raises:
            UnknownTableError: If ``handle`` was not issued by ``create_dataset``
            SampleContractError: If ``values`` do not match the table schema
        """
        context = self._require_context()
        try:
            table = context.registry.get_table(handle)
            payload = encode(table, values)
            if context.step is None:
                raise ProfilerError("Sample received before node_step_start")
        except ProfilerError as exc:
            logger.error("%s: %s", self.plugin_type, exc)
            raise

        context.client.push(context.step.job_id, context.step.node_name, payload)
        return SUCCESS

    def is_active(self, category: Union[ProfileCategory, int]) -> bool:
        if self.context is None:
            return False
        return self.context.state.is_active(category)

    def fini(self) -> int:
        if self.context is not None:
            self.context.close()
        return SUCCESS

    def _require_context(self) -> ProfilerContext:
        if self.context is None:
            raise ProfilerError(f"{self.plugin_type} used before conf_set")
        return self.context
