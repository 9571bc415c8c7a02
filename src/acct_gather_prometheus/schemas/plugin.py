"""Profile plugin interface expected by the host."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .config import ConfigOption
from .profile import ProfileInfo
from .step import StepDescriptor


class ProfilePluginBase(ABC):
    """Base class for accounting profile plugins.

    The host drives the plugin through configuration hooks, step and task
    lifecycle notifications, and dataset/sample calls from the task tracker.
    All hooks are invoked from a single control thread.

    Hooks returning ``int`` use 0 for success and -1 for failure.
    """

    plugin_name: str = ""
    plugin_type: str = ""

    @abstractmethod
    def conf_options(self) -> List[ConfigOption]:
        """Declare the configuration keys this plugin accepts."""

    @abstractmethod
    def conf_set(self, table: Optional[Mapping[str, Any]]) -> None:
        """Receive parsed configuration; raise on fatal misconfiguration."""

    @abstractmethod
    def conf_values(self) -> List[Tuple[str, str]]:
        """Report the effective configuration as name/value pairs."""

    @abstractmethod
    def get(self, info_type: ProfileInfo) -> Any:
        """Read back host string, default profile or running profile."""

    @abstractmethod
    def node_step_start(self, step: StepDescriptor) -> int:
        """Latch the step and resolve its profile."""

    @abstractmethod
    def task_end(self, task_pid: int) -> int:
        """Called once when a task of the step completes."""

    @abstractmethod
    def create_dataset(self, name: str, parent: int, field_definitions: Sequence[Any]) -> int:
        """Register a dataset and return its handle, or -1."""

    @abstractmethod
    def add_sample_data(self, handle: int, values: Sequence[Any], timestamp: Optional[float] = None) -> int:
        """Record one sample for a registered dataset."""

    @abstractmethod
    def is_active(self, category: int) -> bool:
        """Whether samples of the given category should be gathered."""

    def node_step_end(self) -> int:
        """Called when the step ends. Default implementation does nothing."""
        return 0

    def child_forked(self) -> int:
        """Called in the child after the worker forks. Default does nothing."""
        return 0

    def task_start(self, task_id: int) -> int:
        """Called when a task of the step starts. Default does nothing."""
        return 0

    def create_group(self, name: str) -> int:
        """Groups are not supported; every dataset lives in one flat namespace."""
        return 0

    def fini(self) -> int:
        """Release resources when the plugin is unloaded."""
        return 0
