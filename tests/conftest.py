"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_music_atlas.dictionary import ChordDictionary


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in chord library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_music_atlas" / "dictionary" / "library"


@pytest.fixture(scope="session")
def chord_dictionary() -> ChordDictionary:
    """Dictionary built from the built-in library only."""
    return ChordDictionary.load()
