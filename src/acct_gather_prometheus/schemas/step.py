"""Job step descriptor handed over by the host at step start."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .profile import ProfileCategory, coerce_profile


@dataclass
class StepDescriptor:
    """Identity of the running step on this node and the profile the job asked for."""
    job_id: int
    node_name: str
    profile: Union[ProfileCategory, int, str, None] = field(default=ProfileCategory.NOT_SET)

    def __post_init__(self):
        self.job_id = int(self.job_id)
        if not self.node_name or not isinstance(self.node_name, str):
            raise ValueError("Step node_name required and must be string")
        self.profile = coerce_profile(self.profile)
