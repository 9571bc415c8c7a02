"""Profiling state controller: which categories are enabled for the running step."""

from __future__ import annotations

import logging
from typing import Union

from acct_gather_prometheus.schemas import (
    PrometheusConfig,
    ProfileCategory,
    StepDescriptor,
    coerce_profile,
    profile_to_string,
)

logger = logging.getLogger(__name__)


class ProfilingState:
    """Resolves and latches the running profile for a step.

    Resolution order at step start:
    1. an override already latched earlier in this process (sticky across steps)
    2. the profile explicitly requested by the job
    3. the configured default
    """

    def __init__(self, running: Union[ProfileCategory, int, str, None] = ProfileCategory.NOT_SET):
        self.running: ProfileCategory = coerce_profile(running)

    def resolve_profile(self, step: StepDescriptor, config: PrometheusConfig) -> ProfileCategory:
        """Resolve the running profile for ``step`` and latch it.

        Args:
            step: Descriptor of the step being started
            config: Effective plugin configuration (supplies the default)

        Returns:
            The latched running profile
        """
        if self.running != ProfileCategory.NOT_SET:
            profile = self.running
        elif step.profile >= ProfileCategory.NONE:
            profile = step.profile
        else:
            profile = config.default_category

        logger.debug(
            "Resolved profile %s for job %s on %s (requested %s)",
            profile_to_string(profile),
            step.job_id,
            step.node_name,
            profile_to_string(step.profile),
        )
        self.running = profile
        return profile

    @property
    def profiling(self) -> bool:
        """True when at least one category is collected."""
        return self.running > ProfileCategory.NONE

    def is_active(self, category: Union[ProfileCategory, int]) -> bool:
        """Check whether samples of ``category`` are collected.

        NOT_SET acts as a wildcard query: it is active whenever profiling is.
        """
        if not self.profiling:
            return False
        return category == ProfileCategory.NOT_SET or bool(self.running & category)

    def reset(self) -> None:
        """Forget the latched profile."""
        self.running = ProfileCategory.NOT_SET
