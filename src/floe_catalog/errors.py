"""Custom exceptions for floe-catalog.

This module defines the exception hierarchy:
- FloeCatalogError (base)
- InvalidPartitionSpecError
- MetastoreConfigError
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from floe_catalog.partitions import PartitionSpecFailure

__all__ = [
    "FloeCatalogError",
    "InvalidPartitionSpecError",
    "MetastoreConfigError",
]


class FloeCatalogError(Exception):
    """Base exception for all floe catalog operations.

    Attributes:
        message: Human-readable error description.
        details: Optional additional context about the error.

    Example:
        >>> try:
        ...     get_ordered_partition_values({"a": "1"}, ["a", "b"], "__DEFAULT__")
        ... except FloeCatalogError as e:
        ...     print(f"Catalog error: {e}")
    """

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        """Initialize FloeCatalogError.

        Args:
            message: Human-readable error description.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details if present."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class InvalidPartitionSpecError(FloeCatalogError):
    """Partition spec does not match the table's partition keys.

    Raised when:
    - The spec has a different number of entries than there are partition keys
    - A partition key is missing from the spec

    Both causes share this exception type. The ``reason`` attribute tells
    them apart.

    Example:
        >>> try:
        ...     get_ordered_partition_values({"a": "1"}, ["a", "b"], "__DEFAULT__")
        ... except InvalidPartitionSpecError as e:
        ...     print(e.reason, e.partition_keys)
    """

    def __init__(
        self,
        *,
        partition_keys: Sequence[str],
        partition_spec: Mapping[str, str | None],
        catalog_name: str | None = None,
        table_path: str | None = None,
        reason: PartitionSpecFailure | None = None,
        missing_key: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize InvalidPartitionSpecError.

        Args:
            partition_keys: The expected partition keys, in declared order.
            partition_spec: The offending partition spec.
            catalog_name: Name of the catalog the table belongs to.
            table_path: Fully qualified table path (database.table).
            reason: Which validation step rejected the spec.
            missing_key: First partition key absent from the spec, if any.
            message: Optional custom error message.
        """
        if message is None:
            target = f" of table {table_path}" if table_path else ""
            message = (
                f"Partition spec {dict(partition_spec)} is invalid for partition "
                f"keys {list(partition_keys)}{target}"
            )
        details: dict[str, str] = {}
        if catalog_name:
            details["catalog"] = catalog_name
        if table_path:
            details["table"] = table_path
        if reason is not None:
            details["reason"] = reason.value
        if missing_key is not None:
            details["missing_key"] = missing_key
        super().__init__(message, details=details)
        self.partition_keys = list(partition_keys)
        self.partition_spec = dict(partition_spec)
        self.catalog_name = catalog_name
        self.table_path = table_path
        self.reason = reason
        self.missing_key = missing_key


class MetastoreConfigError(FloeCatalogError):
    """Metastore configuration carries an unusable value."""

    def __init__(
        self,
        message: str = "Invalid metastore configuration",
        *,
        key: str | None = None,
        value: str | None = None,
    ) -> None:
        """Initialize MetastoreConfigError.

        Args:
            message: Human-readable error description.
            key: The configuration property that was rejected.
            value: The rejected value.
        """
        details: dict[str, str] = {}
        if key:
            details["key"] = key
        if value is not None:
            details["value"] = value
        super().__init__(message, details=details)
        self.key = key
        self.value = value
