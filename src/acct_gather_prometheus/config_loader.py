"""Configuration loader for the Prometheus profiling plugin."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from acct_gather_prometheus.exceptions import ConfigFileError, ConfigurationError
from acct_gather_prometheus.schemas import (
    DEFAULT_KEY,
    DEFAULT_TIMEOUT,
    HOST_KEY,
    TIMEOUT_KEY,
    ConfigOption,
    PrometheusConfig,
    ProfileCategory,
    profile_from_string,
    profile_to_string,
)

logger = logging.getLogger(__name__)

PLUGIN_TYPE = "acct_gather_profile/prometheus"


def conf_options() -> List[ConfigOption]:
    """Configuration keys understood by the plugin."""
    return [
        ConfigOption(HOST_KEY, str, "Base URL of the Pushgateway (required)"),
        ConfigOption(DEFAULT_KEY, str, "Profile used when the job does not request one"),
        ConfigOption(TIMEOUT_KEY, float, "Per-request timeout in seconds"),
    ]


def conf_set(table: Optional[Mapping[str, Any]]) -> PrometheusConfig:
    """Build the effective configuration from a parsed key/value table.

    Raises:
        ConfigurationError: If the host is missing or a value is invalid
    """
    table = _canonical_keys(table or {})

    default_profile = ProfileCategory.ALL
    raw_default = table.get(DEFAULT_KEY)
    if raw_default is not None:
        default_profile = profile_from_string(str(raw_default))
        if default_profile == ProfileCategory.NOT_SET:
            raise ConfigurationError(
                DEFAULT_KEY,
                f"{DEFAULT_KEY} can not be set to {raw_default}, please specify a valid option",
            )

    timeout = DEFAULT_TIMEOUT
    raw_timeout = table.get(TIMEOUT_KEY)
    if raw_timeout is not None:
        try:
            timeout = float(raw_timeout)
        except (TypeError, ValueError):
            raise ConfigurationError(TIMEOUT_KEY, f"{raw_timeout!r} is not a number")
        if timeout <= 0:
            raise ConfigurationError(TIMEOUT_KEY, "timeout must be positive")

    host = table.get(HOST_KEY)
    if not host or not str(host).strip():
        raise ConfigurationError(
            HOST_KEY,
            f"No {HOST_KEY} in your acct_gather.conf file. "
            f"This is required to use the {PLUGIN_TYPE} plugin",
        )

    try:
        config = PrometheusConfig(host=str(host), default_profile=int(default_profile), timeout=timeout)
    except ValidationError as exc:
        raise ConfigurationError(HOST_KEY, str(exc))

    logger.debug("%s loaded (host=%s, default=%s)", PLUGIN_TYPE, config.host,
                 profile_to_string(config.default_profile))
    return config


def conf_values(config: PrometheusConfig) -> List[Tuple[str, str]]:
    """Effective configuration as name/value pairs for operator display."""
    return [
        (HOST_KEY, config.host),
        (DEFAULT_KEY, profile_to_string(config.default_profile)),
        (TIMEOUT_KEY, f"{config.timeout:g}"),
    ]


def load_conf_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read plugin options from a YAML file or an acct_gather.conf style file.

    Only declared option keys are returned (matched case-insensitively).

    Raises:
        ConfigFileError: If the file is missing or cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigFileError(path.name, "file not found")

    text = path.read_text()
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ConfigFileError(path.name, f"Invalid YAML: {e}")
        if not isinstance(data, dict):
            raise ConfigFileError(path.name, "Root must be a dict")
    else:
        data = _parse_key_values(path.name, text)

    return _canonical_keys(data)


def _parse_key_values(file_name: str, text: str) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.split("#", 1)[0].strip()
        if not line:
            continue
        key, sep, value = line.partition("=")
        if not sep or not key.strip():
            raise ConfigFileError(file_name, f"line {lineno}: expected Key=Value")
        data[key.strip()] = value.strip()
    return data


def _canonical_keys(table: Mapping[str, Any]) -> Dict[str, Any]:
    known = {option.key.lower(): option.key for option in conf_options()}
    result: Dict[str, Any] = {}
    for key, value in table.items():
        canonical = known.get(str(key).lower())
        if canonical is not None:
            result[canonical] = value
    return result
