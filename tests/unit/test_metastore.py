"""Unit tests for metastore configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from floe_catalog.errors import MetastoreConfigError
from floe_catalog.metastore import (
    DEFAULT_PARTITION_NAME,
    MetastoreConfig,
    MetastoreConfigProvider,
    StaticDefaultPartitionName,
    is_embedded_metastore,
)


class TestMetastoreConfig:
    """Tests for MetastoreConfig settings."""

    def test_default_values(self) -> None:
        """Defaults describe an embedded metastore with Hive's default name."""
        config = MetastoreConfig()

        assert config.uris == ""
        assert config.default_partition_name() == DEFAULT_PARTITION_NAME
        assert config.hive_style_partitioning is False

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """FLOE_METASTORE_* variables populate the config."""
        monkeypatch.setenv("FLOE_METASTORE_URIS", "thrift://metastore:9083")
        monkeypatch.setenv("FLOE_METASTORE_DEFAULT_PARTITION", "__NULL__")
        monkeypatch.setenv("FLOE_METASTORE_HIVE_STYLE_PARTITIONING", "true")

        config = MetastoreConfig()

        assert config.uris == "thrift://metastore:9083"
        assert config.default_partition_name() == "__NULL__"
        assert config.hive_style_partitioning is True

    def test_explicit_overrides_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Explicit arguments take priority over the environment."""
        monkeypatch.setenv("FLOE_METASTORE_DEFAULT_PARTITION", "__ENV__")

        config = MetastoreConfig(default_partition="__ARG__")

        assert config.default_partition_name() == "__ARG__"

    def test_empty_default_partition_rejected(self) -> None:
        """An empty default partition name fails validation."""
        with pytest.raises(ValidationError):
            MetastoreConfig(default_partition="")

    def test_is_provider(self) -> None:
        """MetastoreConfig satisfies MetastoreConfigProvider."""
        assert isinstance(MetastoreConfig(), MetastoreConfigProvider)


class TestFromProperties:
    """Tests for MetastoreConfig.from_properties."""

    def test_recognised_keys(self) -> None:
        """Hive property keys map onto settings."""
        config = MetastoreConfig.from_properties(
            {
                "hive.metastore.uris": "thrift://a:9083,thrift://b:9083",
                "hive.exec.default.partition.name": "__NULL__",
                "hoodie.datasource.write.hive_style_partitioning": "TRUE",
            }
        )

        assert config.uris == "thrift://a:9083,thrift://b:9083"
        assert config.default_partition_name() == "__NULL__"
        assert config.hive_style_partitioning is True

    def test_unknown_keys_ignored(self) -> None:
        """Unrelated properties are ignored."""
        config = MetastoreConfig.from_properties({"hive.exec.parallel": "true"})

        assert config == MetastoreConfig()

    def test_false_flag(self) -> None:
        """The hive style flag accepts false."""
        config = MetastoreConfig.from_properties(
            {"hoodie.datasource.write.hive_style_partitioning": "False"}
        )

        assert config.hive_style_partitioning is False

    def test_invalid_flag(self) -> None:
        """Non boolean flag values raise MetastoreConfigError."""
        with pytest.raises(MetastoreConfigError) as exc_info:
            MetastoreConfig.from_properties(
                {"hoodie.datasource.write.hive_style_partitioning": "maybe"}
            )

        assert exc_info.value.key == "hoodie.datasource.write.hive_style_partitioning"
        assert exc_info.value.value == "maybe"
        assert isinstance(exc_info.value.__cause__, ValidationError)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("yes", True), ("TRUE", True), ("on", True), ("0", False), ("off", False)],
    )
    def test_flag_parsed_like_environment(
        self, monkeypatch: pytest.MonkeyPatch, text: str, expected: bool
    ) -> None:
        """Properties and FLOE_METASTORE_ variables read flag text alike."""
        monkeypatch.setenv("FLOE_METASTORE_HIVE_STYLE_PARTITIONING", text)
        from_env = MetastoreConfig()
        monkeypatch.delenv("FLOE_METASTORE_HIVE_STYLE_PARTITIONING")
        from_properties = MetastoreConfig.from_properties(
            {"hoodie.datasource.write.hive_style_partitioning": text}
        )

        assert from_env.hive_style_partitioning is expected
        assert from_properties.hive_style_partitioning is expected

    def test_invalid_flag_rejected_by_environment_too(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A flag text refused as a property is refused from the environment."""
        monkeypatch.setenv("FLOE_METASTORE_HIVE_STYLE_PARTITIONING", "maybe")

        with pytest.raises(ValidationError):
            MetastoreConfig()

    def test_empty_default_partition_name(self) -> None:
        """Empty default partition name raises MetastoreConfigError."""
        with pytest.raises(MetastoreConfigError) as exc_info:
            MetastoreConfig.from_properties({"hive.exec.default.partition.name": ""})

        assert exc_info.value.key == "hive.exec.default.partition.name"


class TestIsEmbeddedMetastore:
    """Tests for is_embedded_metastore."""

    @pytest.mark.parametrize("uris", ["", "   ", "\t\n"])
    def test_blank_uris_embedded(self, uris: str) -> None:
        """Blank URIs mean an embedded metastore."""
        assert is_embedded_metastore(MetastoreConfig(uris=uris)) is True

    def test_remote(self) -> None:
        """Configured URIs mean a remote metastore."""
        assert is_embedded_metastore(MetastoreConfig(uris="thrift://metastore:9083")) is False


class TestStaticDefaultPartitionName:
    """Tests for StaticDefaultPartitionName."""

    def test_default(self) -> None:
        """Defaults to Hive's default partition name."""
        assert StaticDefaultPartitionName().default_partition_name() == DEFAULT_PARTITION_NAME

    def test_custom(self) -> None:
        """Returns the given name."""
        provider = StaticDefaultPartitionName("__NULL__")

        assert provider.default_partition_name() == "__NULL__"
        assert isinstance(provider, MetastoreConfigProvider)
        assert repr(provider) == "StaticDefaultPartitionName('__NULL__')"
