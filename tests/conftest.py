"""Shared test fixtures for floe-catalog tests."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
import structlog

from floe_catalog import observability
from floe_catalog.config import CatalogTable, ObjectPath


@pytest.fixture(autouse=True)
def reset_observability() -> Iterator[None]:
    """Reset structlog configuration and cached logger/tracer between tests."""
    structlog.reset_defaults()
    observability._logger = None
    observability._tracer = None
    yield
    structlog.reset_defaults()
    observability._logger = None
    observability._tracer = None


@pytest.fixture(autouse=True)
def clean_metastore_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FLOE_METASTORE_* variables from the host out of tests."""
    for var in (
        "FLOE_METASTORE_URIS",
        "FLOE_METASTORE_DEFAULT_PARTITION",
        "FLOE_METASTORE_HIVE_STYLE_PARTITIONING",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def mock_tracer() -> Iterator[MagicMock]:
    """Patch the module tracer with a MagicMock."""
    tracer = MagicMock()
    with patch("floe_catalog.observability.get_tracer", return_value=tracer):
        yield tracer


@pytest.fixture
def events_table() -> CatalogTable:
    """Table partitioned by year and month."""
    return CatalogTable(partition_keys=["year", "month"], options={"connector": "hudi"})


@pytest.fixture
def events_path() -> ObjectPath:
    """Path of the events table."""
    return ObjectPath(database_name="default", object_name="events")
