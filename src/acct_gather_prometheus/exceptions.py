"""
Custom exception classes for the Prometheus profiling plugin.

This module defines structured exception types for configuration loading,
dataset definition and sample contract violations.
"""

from typing import Optional


class ProfilerError(Exception):
    """Base exception for all profiling plugin errors."""
    pass


class ConfigurationError(ProfilerError):
    """Fatal configuration problem; the host must abort startup."""

    def __init__(self, key: str, message: str):
        self.key = key
        self.message = message
        super().__init__(f"Invalid configuration for {key}: {message}")


class ConfigFileError(ProfilerError):
    """Error loading a configuration file."""

    def __init__(self, file_name: str, message: str):
        self.file_name = file_name
        self.message = message
        super().__init__(f"Error loading {file_name}: {message}")


class DatasetDefinitionError(ProfilerError):
    """A dataset field definition could not be understood."""

    def __init__(self, dataset: str, message: str):
        self.dataset = dataset
        self.message = message
        super().__init__(f"Invalid definition for dataset {dataset}: {message}")


class UnknownTableError(ProfilerError):
    """Table handle was never issued by the registry."""

    def __init__(self, handle: int, table_count: int):
        self.handle = handle
        self.table_count = table_count
        super().__init__(
            f"Unknown table handle {handle} ({table_count} tables registered)"
        )


class SampleContractError(ProfilerError):
    """Sample values do not match the table schema."""

    def __init__(self, table: str, message: str, field: Optional[str] = None):
        self.table = table
        self.field = field
        self.message = message
        if field:
            super().__init__(f"Sample for table {table} rejected at field {field}: {message}")
        else:
            super().__init__(f"Sample for table {table} rejected: {message}")
