"""Pydantic data models for floe-catalog.

This module provides:
- ObjectPath: Table identity within a catalog
- CatalogTable: Partitioning declaration and options of a table
- CatalogPartitionSpec: Partition key to value assignment
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

PARTITION_PATH_FIELD = "partition.path.field"
"""Table option listing partition fields (comma separated) for tables without PARTITIONED BY."""

HIVE_STYLE_PARTITIONING = "hoodie.datasource.write.hive_style_partitioning"
"""Metastore property toggling ``key=value`` partition path segments."""


class ObjectPath(BaseModel):
    """Path of a table in a catalog: database plus object name.

    Attributes:
        database_name: Database the table lives in.
        object_name: Table name without database prefix.

    Example:
        >>> path = ObjectPath(database_name="default", object_name="events")
        >>> str(path)
        'default.events'
        >>> ObjectPath.from_string("default.events")
        ObjectPath(database_name='default', object_name='events')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    database_name: str = Field(
        ...,
        min_length=1,
        description="Database name",
    )
    object_name: str = Field(
        ...,
        min_length=1,
        description="Table name",
    )

    def __str__(self) -> str:
        """Return the full name."""
        return f"{self.database_name}.{self.object_name}"

    @classmethod
    def from_string(cls, full_name: str) -> ObjectPath:
        """Parse an object path from ``database.object``.

        Raises:
            ValueError: If the name does not have exactly one dot.
        """
        parts = full_name.split(".")
        if len(parts) != 2:
            msg = f"Invalid object path: {full_name}. Expected 'database.object'"
            raise ValueError(msg)
        return cls(database_name=parts[0], object_name=parts[1])

    @field_validator("database_name", "object_name")
    @classmethod
    def validate_no_dots(cls, v: str) -> str:
        """Validate that name parts don't contain dots."""
        if "." in v:
            msg = f"Object path part cannot contain dots: {v}"
            raise ValueError(msg)
        return v


class CatalogTable(BaseModel):
    """Partitioning-relevant view of a catalog table definition.

    Attributes:
        partition_keys: Columns named in PARTITIONED BY, in declared order.
        options: Table options (WITH clause).

    Example:
        >>> table = CatalogTable(options={"partition.path.field": "dt,hh"})
        >>> table.is_partitioned
        False
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    partition_keys: list[str] = Field(
        default_factory=list,
        description="Declared partition columns in order",
    )
    options: dict[str, str] = Field(
        default_factory=dict,
        description="Table options",
    )

    @property
    def is_partitioned(self) -> bool:
        """True when the table declares partition columns natively."""
        return bool(self.partition_keys)


class CatalogPartitionSpec(BaseModel):
    """Assignment of values to partition keys identifying one partition.

    A ``None`` value means no explicit value was supplied; resolution
    substitutes the metastore's default partition name for it. Insertion
    order is preserved.

    Example:
        >>> spec = CatalogPartitionSpec(partition_spec={"dt": "2024-01-01", "hh": None})
        >>> list(spec.partition_spec)
        ['dt', 'hh']
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    partition_spec: dict[str, str | None] = Field(
        default_factory=dict,
        description="Partition key to value mapping",
    )
