from pathlib import Path

import pytest

from langtag.canonicalize import Canonicalizer
from langtag.registry.iana import IanaRegistry, load_registry


class TestRegistryData:
    TESTS_DATA_DIR: Path = Path(__file__).parent / "data"
    REGISTRY: Path = TESTS_DATA_DIR / "language-subtag-registry.txt"


@pytest.fixture(scope="session")
def registry_path() -> Path:
    assert TestRegistryData.REGISTRY.exists(), f"Missing test file: {TestRegistryData.REGISTRY}"
    return TestRegistryData.REGISTRY


@pytest.fixture(scope="session")
def iana_registry(registry_path: Path) -> IanaRegistry:
    return load_registry(registry_path)


@pytest.fixture
def canonicalizer(iana_registry: IanaRegistry) -> Canonicalizer:
    return Canonicalizer(iana_registry)
