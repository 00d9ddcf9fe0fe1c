"""Metastore configuration collaborator for partition resolution.

Partition resolution needs exactly one value from the metastore
configuration: the default partition name substituted for partition keys
without an explicit value. This module provides:
- MetastoreConfigProvider: the narrow protocol resolution depends on
- MetastoreConfig: settings model loaded from FLOE_METASTORE_* variables
- StaticDefaultPartitionName: provider wrapping a fixed name
- is_embedded_metastore: metastore mode detection
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from floe_catalog.config import HIVE_STYLE_PARTITIONING
from floe_catalog.errors import MetastoreConfigError

DEFAULT_PARTITION_NAME = "__HIVE_DEFAULT_PARTITION__"
"""Hive's stock name for NULL-valued partitions."""

METASTORE_URIS = "hive.metastore.uris"
DEFAULT_PARTITION_NAME_KEY = "hive.exec.default.partition.name"

_PROPERTY_FIELDS = {
    METASTORE_URIS: "uris",
    DEFAULT_PARTITION_NAME_KEY: "default_partition",
    HIVE_STYLE_PARTITIONING: "hive_style_partitioning",
}


@runtime_checkable
class MetastoreConfigProvider(Protocol):
    """Source of the default partition name."""

    def default_partition_name(self) -> str: ...


class MetastoreConfig(BaseSettings):
    """Metastore settings relevant to partition resolution.

    Can be loaded from environment variables with FLOE_METASTORE_ prefix.

    Attributes:
        uris: Thrift URIs of a remote metastore; empty for an embedded one.
        default_partition: Name substituted for partition keys without a value.
        hive_style_partitioning: Render partition paths as ``key=value`` segments.

    Example:
        >>> # From environment
        >>> config = MetastoreConfig()
        >>>
        >>> # Explicit
        >>> config = MetastoreConfig(
        ...     uris="thrift://metastore:9083",
        ...     hive_style_partitioning=True,
        ... )
        >>> config.default_partition_name()
        '__HIVE_DEFAULT_PARTITION__'
    """

    model_config = SettingsConfigDict(
        env_prefix="FLOE_METASTORE_",
        extra="ignore",
        frozen=True,
    )

    uris: str = Field(
        default="",
        description="Comma separated metastore thrift URIs (empty means embedded)",
    )
    default_partition: str = Field(
        default=DEFAULT_PARTITION_NAME,
        min_length=1,
        description="Name used for partitions whose key has no value",
    )
    hive_style_partitioning: bool = Field(
        default=False,
        description="Render partition path segments as key=value",
    )

    def default_partition_name(self) -> str:
        """Return the default partition name."""
        return self.default_partition

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> MetastoreConfig:
        """Build a config from Hive-style property keys.

        Recognised keys are ``hive.metastore.uris``,
        ``hive.exec.default.partition.name`` and
        ``hoodie.datasource.write.hive_style_partitioning``; anything else is
        ignored. Settings not present in ``properties`` fall back to the
        environment, then to defaults.

        Raises:
            MetastoreConfigError: If a recognised property has an unusable value.

        Example:
            >>> MetastoreConfig.from_properties(
            ...     {"hive.exec.default.partition.name": "__NULL__"}
            ... ).default_partition_name()
            '__NULL__'
        """
        kwargs = {
            field: properties[key] for key, field in _PROPERTY_FIELDS.items() if key in properties
        }
        try:
            return cls(**kwargs)  # type: ignore[arg-type]
        except ValidationError as exc:
            errors = exc.errors()
            field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else None
            key = next((k for k, f in _PROPERTY_FIELDS.items() if f == field), None)
            raise MetastoreConfigError(
                f"Invalid metastore property: {key or field}",
                key=key or field,
                value=properties.get(key) if key else None,
            ) from exc


class StaticDefaultPartitionName:
    """Provider returning a fixed default partition name."""

    def __init__(self, name: str = DEFAULT_PARTITION_NAME) -> None:
        self._name = name

    def default_partition_name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"StaticDefaultPartitionName({self._name!r})"


def is_embedded_metastore(config: MetastoreConfig) -> bool:
    """Check whether the metastore URIs are unset.

    Example:
        >>> is_embedded_metastore(MetastoreConfig(uris="  "))
        True
    """
    return not config.uris.strip()

