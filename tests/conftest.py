"""Pytest configuration and shared fixtures for crate tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from cratemaker.domain import (
    Clearances,
    CrateGeometry,
    CrateGeometryComposer,
    MaterialOptions,
    ProductSpec,
)


# =============================================================================
# Product fixtures
# =============================================================================


@pytest.fixture
def small_product() -> ProductSpec:
    """40 x 30 x 50 in, 800 lb: 34 x 44 internal, 4x4 skids."""
    return ProductSpec(length=40.0, width=30.0, height=50.0, weight=800.0)


@pytest.fixture
def large_product() -> ProductSpec:
    """135 in cube at 10000 lb: 4x6 skids and multi-sheet panels."""
    return ProductSpec(length=135.0, width=135.0, height=135.0, weight=10000.0)


@pytest.fixture
def default_clearances() -> Clearances:
    return Clearances(side=2.0, end=2.0, top=3.0)


@pytest.fixture
def composer() -> CrateGeometryComposer:
    return CrateGeometryComposer()


@pytest.fixture
def small_crate(
    composer: CrateGeometryComposer,
    small_product: ProductSpec,
    default_clearances: Clearances,
) -> CrateGeometry:
    """Composed crate for the 40 x 30 x 50 in product."""
    return composer.compose(small_product, default_clearances, MaterialOptions())


@pytest.fixture
def large_crate(
    composer: CrateGeometryComposer,
    large_product: ProductSpec,
    default_clearances: Clearances,
) -> CrateGeometry:
    """Composed crate for the 135 in cube product."""
    return composer.compose(large_product, default_clearances, MaterialOptions())


# =============================================================================
# Configuration fixtures
# =============================================================================


@pytest.fixture
def minimal_config_data() -> dict[str, Any]:
    """Smallest valid configuration dictionary."""
    return {
        "schema_version": "1.0",
        "product": {"length": 40, "width": 30, "height": 50, "weight": 800},
    }


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a configuration dictionary to a JSON file and return its path."""

    def _write(data: dict[str, Any], name: str = "crate.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write
