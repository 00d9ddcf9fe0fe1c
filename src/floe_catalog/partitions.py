"""Partition key derivation, partition paths and partition value ordering.

This module provides:
- get_partition_keys / get_table_partition_keys: partition columns of a table
- infer_partition_path: slash-joined partition path for a spec
- validate_partition_spec: tagged validation of a spec against partition keys
- get_ordered_partition_values: spec values reordered to the partition keys
- partition_path_for: key-ordered partition path for a table

All functions are pure: they read only their arguments and the default
partition name, and are safe to call from multiple threads.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field

from floe_catalog.config import (
    PARTITION_PATH_FIELD,
    CatalogPartitionSpec,
    CatalogTable,
    ObjectPath,
)
from floe_catalog.errors import InvalidPartitionSpecError
from floe_catalog.metastore import MetastoreConfig, MetastoreConfigProvider
from floe_catalog.observability import get_logger, partition_operation

PartitionSpecLike = Mapping[str, str | None] | CatalogPartitionSpec


class PartitionSpecFailure(str, Enum):
    """Why a partition spec was rejected.

    - SIZE_MISMATCH: spec and partition keys differ in length
    - MISSING_KEY: a partition key has no entry in the spec
    """

    SIZE_MISMATCH = "size_mismatch"
    MISSING_KEY = "missing_key"


class ValidPartitionSpec(BaseModel):
    """Spec accepted; values are ordered by partition key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: Literal["valid"] = "valid"
    values: list[str] = Field(default_factory=list)


class InvalidPartitionSpec(BaseModel):
    """Spec rejected.

    Attributes:
        reason: Which check failed.
        expected_size: Number of partition keys.
        actual_size: Number of entries in the spec.
        missing_key: First partition key absent from the spec (MISSING_KEY only).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: Literal["invalid"] = "invalid"
    reason: PartitionSpecFailure
    expected_size: int = Field(..., ge=0)
    actual_size: int = Field(..., ge=0)
    missing_key: str | None = None


PartitionSpecValidation = Annotated[
    ValidPartitionSpec | InvalidPartitionSpec,
    Discriminator("status"),
]
"""Outcome of validate_partition_spec, discriminated on ``status``."""


def _spec_mapping(partition_spec: PartitionSpecLike) -> Mapping[str, str | None]:
    if isinstance(partition_spec, CatalogPartitionSpec):
        return partition_spec.partition_spec
    return partition_spec


def _join_segments(
    hive_style_partitioning: bool,
    entries: Iterable[tuple[str, str | None]],
) -> str:
    segments: list[str] = []
    for key, value in entries:
        rendered = "null" if value is None else value
        segments.append(f"{key}={rendered}" if hive_style_partitioning else rendered)
    return "/".join(segments)


def get_partition_keys(
    table_is_partitioned: bool,
    declared_partition_keys: Sequence[str],
    options: Mapping[str, str],
) -> list[str]:
    """Return the partition keys of a table.

    Declared partition columns (PARTITIONED BY) always win over the
    ``partition.path.field`` option. The option value is split on ``,``
    as-is: segments are not trimmed and empty segments are kept, since
    keys are later matched by exact string.

    Args:
        table_is_partitioned: Whether the table declares partition columns.
        declared_partition_keys: Declared partition columns, in order.
        options: Table options.

    Returns:
        Partition keys in order, or an empty list.

    Example:
        >>> get_partition_keys(False, [], {"partition.path.field": "a,b,c"})
        ['a', 'b', 'c']
    """
    if table_is_partitioned:
        return list(declared_partition_keys)
    if PARTITION_PATH_FIELD in options:
        return options[PARTITION_PATH_FIELD].split(",")
    return []


def get_table_partition_keys(table: CatalogTable) -> list[str]:
    """Return the partition keys of a CatalogTable."""
    return get_partition_keys(table.is_partitioned, table.partition_keys, table.options)


def infer_partition_path(
    hive_style_partitioning: bool,
    partition_spec: PartitionSpecLike,
) -> str:
    """Render a partition spec as a slash-joined partition path.

    Entries are rendered in the spec's own iteration order; callers that
    need declared-key order should use partition_path_for. Keys and values
    are not escaped, so a ``/`` or ``=`` inside a value ends up verbatim in
    the path. A ``None`` value renders as ``null``.

    Args:
        hive_style_partitioning: Render ``key=value`` instead of ``value``.
        partition_spec: Partition key to value mapping.

    Returns:
        The partition path, or ``""`` for an empty spec.

    Example:
        >>> infer_partition_path(True, {"year": "2020", "month": "01"})
        'year=2020/month=01'
        >>> infer_partition_path(False, {"year": "2020", "month": "01"})
        '2020/01'
    """
    return _join_segments(hive_style_partitioning, _spec_mapping(partition_spec).items())


def validate_partition_spec(
    partition_spec: PartitionSpecLike,
    partition_keys: Sequence[str],
    default_partition_name: str,
) -> PartitionSpecValidation:
    """Check a spec against partition keys and order its values.

    The size check runs before the per-key membership check, so a spec with
    the right number of entries but a wrong key name is reported as
    MISSING_KEY, and one with too few or too many entries as SIZE_MISMATCH.

    Args:
        partition_spec: Partition key to value mapping.
        partition_keys: Partition keys in declared order.
        default_partition_name: Substituted for ``None`` values.

    Returns:
        ValidPartitionSpec with values in partition key order, or
        InvalidPartitionSpec describing the first failed check.
    """
    spec = _spec_mapping(partition_spec)
    if len(spec) != len(partition_keys):
        return InvalidPartitionSpec(
            reason=PartitionSpecFailure.SIZE_MISMATCH,
            expected_size=len(partition_keys),
            actual_size=len(spec),
        )

    values: list[str] = []
    for key in partition_keys:
        if key not in spec:
            return InvalidPartitionSpec(
                reason=PartitionSpecFailure.MISSING_KEY,
                expected_size=len(partition_keys),
                actual_size=len(spec),
                missing_key=key,
            )
        value = spec[key]
        values.append(default_partition_name if value is None else value)
    return ValidPartitionSpec(values=values)


def get_ordered_partition_values(
    partition_spec: PartitionSpecLike,
    partition_keys: Sequence[str],
    default_partition_name: str | MetastoreConfigProvider,
    *,
    catalog_name: str | None = None,
    table_path: ObjectPath | str | None = None,
) -> list[str]:
    """Return the spec's values re-arranged to follow the partition keys.

    ``None`` values are replaced by the default partition name.

    Args:
        partition_spec: Partition key to value mapping.
        partition_keys: Partition keys in declared order.
        default_partition_name: The default partition name, or a provider
            of it (e.g. MetastoreConfig).
        catalog_name: Catalog name, reported on failure.
        table_path: Table path, reported on failure.

    Returns:
        One value per partition key, in partition key order.

    Raises:
        InvalidPartitionSpecError: If the spec and keys differ in size, or a
            key is missing from the spec.

    Example:
        >>> get_ordered_partition_values({"a": "1", "b": None}, ["b", "a"], "__DEFAULT__")
        ['__DEFAULT__', '1']
    """
    if isinstance(default_partition_name, str):
        default_name = default_partition_name
    else:
        default_name = default_partition_name.default_partition_name()
    table = str(table_path) if table_path is not None else None
    keys = list(partition_keys)

    with partition_operation(
        "get_ordered_partition_values",
        catalog=catalog_name,
        table=table,
        partition_keys=keys,
    ):
        result = validate_partition_spec(partition_spec, keys, default_name)
        if isinstance(result, InvalidPartitionSpec):
            spec = _spec_mapping(partition_spec)
            get_logger().warning(
                "partition_spec_invalid",
                catalog=catalog_name,
                table=table,
                reason=result.reason.value,
                missing_key=result.missing_key,
                expected_size=result.expected_size,
                actual_size=result.actual_size,
            )
            raise InvalidPartitionSpecError(
                partition_keys=keys,
                partition_spec=spec,
                catalog_name=catalog_name,
                table_path=table,
                reason=result.reason,
                missing_key=result.missing_key,
            )
        return result.values


def partition_path_for(
    table: CatalogTable,
    partition_spec: PartitionSpecLike,
    config: MetastoreConfig,
    *,
    catalog_name: str | None = None,
    table_path: ObjectPath | str | None = None,
) -> str:
    """Render the partition path of a spec in the table's partition key order.

    Unlike infer_partition_path this does not depend on the spec's iteration
    order, and ``None`` values become the default partition name.

    Raises:
        InvalidPartitionSpecError: If the spec does not cover the table's
            partition keys exactly.

    Example:
        >>> partition_path_for(
        ...     CatalogTable(partition_keys=["year", "month"]),
        ...     {"month": "01", "year": "2020"},
        ...     MetastoreConfig(hive_style_partitioning=True),
        ... )
        'year=2020/month=01'
    """
    keys = get_table_partition_keys(table)
    values = get_ordered_partition_values(
        partition_spec,
        keys,
        config,
        catalog_name=catalog_name,
        table_path=table_path,
    )
    get_logger().debug("partition_keys_resolved", keys=keys, values=values)
    return _join_segments(config.hive_style_partitioning, zip(keys, values))
