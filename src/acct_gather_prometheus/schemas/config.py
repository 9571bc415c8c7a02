"""Plugin configuration schemas."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import ConfigDict, Field, field_validator

from .base import SchemaBase
from .profile import ProfileCategory

HOST_KEY = "ProfilePrometheusHost"
DEFAULT_KEY = "ProfilePrometheusDefault"
TIMEOUT_KEY = "ProfilePrometheusTimeout"

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ConfigOption:
    """Declaration of one configuration key accepted by the plugin."""
    key: str
    value_type: type
    description: str = ""


class PrometheusConfig(SchemaBase):
    """Effective plugin configuration, read-only once loaded."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    default_profile: int = Field(default=int(ProfileCategory.ALL))
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        stripped = value.rstrip("/")
        if not stripped:
            raise ValueError("host must not be empty")
        return stripped

    @field_validator("default_profile")
    @classmethod
    def _reject_not_set(cls, value: int) -> int:
        if value == ProfileCategory.NOT_SET:
            raise ValueError("default profile can not be NotSet")
        return value

    @property
    def default_category(self) -> ProfileCategory:
        return ProfileCategory(self.default_profile)
