"""Prometheus Pushgateway accounting profile plugin.

The public API surface is the plugin object plus the schema types exposed in
``acct_gather_prometheus.schemas``.
"""

__version__ = "0.1.0"

from acct_gather_prometheus.plugin import PrometheusProfilePlugin  # noqa: F401
from acct_gather_prometheus.schemas import *  # noqa: F401,F403
from acct_gather_prometheus.schemas import __all__ as SCHEMA_EXPORTS

__all__ = ["__version__", "PrometheusProfilePlugin"] + SCHEMA_EXPORTS
