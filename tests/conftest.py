"""
Pytest configuration and fixtures for gw2-build-codes tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing gw2_build_codes
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from .helpers import MockMetadataProvider, MockPaletteMapper, load_official_codes  # noqa: E402


# Configure anyio to only use asyncio (not trio)
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def mapper() -> MockPaletteMapper:
    """Offset-based palette mapper whose two directions are exact inverses."""
    return MockPaletteMapper()


@pytest.fixture
def metadata_provider() -> MockMetadataProvider:
    return MockMetadataProvider()


@pytest.fixture(scope="session")
def official_codes() -> dict:
    """Chat links copied from the game client, with their expected contents."""
    return load_official_codes()
