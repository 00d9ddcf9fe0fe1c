"""floe-catalog: partition metadata resolution for catalog-backed tables.

This package provides:
- Partition key derivation from PARTITIONED BY or table options
- Partition path rendering (plain or Hive-style ``key=value``)
- Partition spec validation and value ordering with default partition names
- Metastore settings supplying the default partition name

Example:
    >>> from floe_catalog import MetastoreConfig, get_ordered_partition_values
    >>> config = MetastoreConfig()
    >>> get_ordered_partition_values({"dt": "2024-01-01", "hh": None}, ["dt", "hh"], config)
    ['2024-01-01', '__HIVE_DEFAULT_PARTITION__']
"""

from __future__ import annotations

__version__ = "0.1.0"

# Public API exports
__all__ = [
    # Partition resolution
    "get_partition_keys",
    "get_table_partition_keys",
    "infer_partition_path",
    "validate_partition_spec",
    "get_ordered_partition_values",
    "partition_path_for",
    # Validation results
    "PartitionSpecFailure",
    "ValidPartitionSpec",
    "InvalidPartitionSpec",
    # Data models
    "ObjectPath",
    "CatalogTable",
    "CatalogPartitionSpec",
    "PARTITION_PATH_FIELD",
    # Metastore configuration
    "MetastoreConfig",
    "MetastoreConfigProvider",
    "StaticDefaultPartitionName",
    "is_embedded_metastore",
    # Observability
    "configure_logging",
    # Exceptions
    "FloeCatalogError",
    "InvalidPartitionSpecError",
    "MetastoreConfigError",
]


# Lazy imports keep ``import floe_catalog`` free of pydantic-settings and
# OpenTelemetry until a member is used.
def __getattr__(name: str) -> object:
    """Lazy import of public API members."""
    if name in (
        "get_partition_keys",
        "get_table_partition_keys",
        "infer_partition_path",
        "validate_partition_spec",
        "get_ordered_partition_values",
        "partition_path_for",
        "PartitionSpecFailure",
        "ValidPartitionSpec",
        "InvalidPartitionSpec",
    ):
        from floe_catalog import partitions as partitions_module

        return getattr(partitions_module, name)
    if name in ("ObjectPath", "CatalogTable", "CatalogPartitionSpec", "PARTITION_PATH_FIELD"):
        from floe_catalog import config as config_module

        return getattr(config_module, name)
    if name in (
        "MetastoreConfig",
        "MetastoreConfigProvider",
        "StaticDefaultPartitionName",
        "is_embedded_metastore",
    ):
        from floe_catalog import metastore as metastore_module

        return getattr(metastore_module, name)
    if name == "configure_logging":
        from floe_catalog.observability import configure_logging

        return configure_logging
    if name in ("FloeCatalogError", "InvalidPartitionSpecError", "MetastoreConfigError"):
        from floe_catalog import errors as errors_module

        return getattr(errors_module, name)
    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
