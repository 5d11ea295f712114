# tests/unit/conftest.py
"""
Fixtures for unit tests: caches, settings and builders.

Tier markers are assigned per file; everything not listed as tier1 is tier2.
"""

from __future__ import annotations

import pytest

from modelgen.build import BuildCache, ContractBuilder
from modelgen.config import BuildSettings
from sample_components import TEST_VERSION


def pytest_collection_modifyitems(items):
    """Tier 1: pure logic. Tier 2: filesystem, compilation, CLI."""
    TIER1_PATTERNS = [
        "test_reflection",
        "test_filtering",
        "test_literals",
        "test_translator",
        "test_references",
        "test_synthesizer",
    ]

    for item in items:
        fspath = str(item.fspath)

        if "/unit/" not in fspath and "\\unit\\" not in fspath:
            continue

        has_tier = any(marker.name.startswith("tier") for marker in item.iter_markers())
        if has_tier:
            continue

        if any(pattern in fspath for pattern in TIER1_PATTERNS):
            item.add_marker(pytest.mark.tier1)
        else:
            item.add_marker(pytest.mark.tier2)


@pytest.fixture
def cache() -> BuildCache:
    cache = BuildCache()
    yield cache
    cache.clear()


@pytest.fixture
def output_path(tmp_path):
    """Artifact path whose stem is "App"."""
    return tmp_path / "out" / "App.py"


@pytest.fixture
def runtime_builder(cache) -> ContractBuilder:
    return ContractBuilder(cache, BuildSettings(runtime_mode=True), version=TEST_VERSION)


@pytest.fixture
def design_builder(cache) -> ContractBuilder:
    return ContractBuilder(cache, BuildSettings(runtime_mode=False), version=TEST_VERSION)
