"""Schema exports."""

from .base import ERROR, SUCCESS, SchemaBase
from .config import (
    DEFAULT_KEY,
    DEFAULT_TIMEOUT,
    HOST_KEY,
    TIMEOUT_KEY,
    ConfigOption,
    PrometheusConfig,
)
from .dataset import UINT64_MAX, Double, FieldDefinition, FieldType, SampleValue, Table, UInt64
from .delivery import DeliveryOperation, DeliveryRecord
from .plugin import ProfilePluginBase
from .profile import (
    ProfileCategory,
    ProfileInfo,
    coerce_profile,
    profile_from_string,
    profile_to_string,
)
from .step import StepDescriptor

__all__ = [
    "ERROR",
    "SUCCESS",
    "SchemaBase",
    "DEFAULT_KEY",
    "DEFAULT_TIMEOUT",
    "HOST_KEY",
    "TIMEOUT_KEY",
    "ConfigOption",
    "PrometheusConfig",
    "UINT64_MAX",
    "Double",
    "FieldDefinition",
    "FieldType",
    "SampleValue",
    "Table",
    "UInt64",
    "DeliveryOperation",
    "DeliveryRecord",
    "ProfilePluginBase",
    "ProfileCategory",
    "ProfileInfo",
    "coerce_profile",
    "profile_from_string",
    "profile_to_string",
    "StepDescriptor",
]
