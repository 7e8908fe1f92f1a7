"""
Pydantic models for the theory engine.

This module provides:
- TriadPack: A key's scale and diatonic triads
- TransposedChord: One transposed chord token
- ParsedChord: Root + quality split of a chord token
- ChordDefinition: A dictionary chord with strict spelling
- ChordQualityDefinition: Degree formula for a chord quality
- SearchSuggestion: Autocomplete entry
- GuitarShape: A barre or triad grip
"""

from chuk_mcp_music_atlas.models.chord import (
    ChordDefinition,
    ChordQualityDefinition,
    SearchSuggestion,
)
from chuk_mcp_music_atlas.models.guitar import GuitarShape
from chuk_mcp_music_atlas.models.theory import ParsedChord, TransposedChord, TriadPack

__all__ = [
    "ChordDefinition",
    "ChordQualityDefinition",
    "GuitarShape",
    "ParsedChord",
    "SearchSuggestion",
    "TransposedChord",
    "TriadPack",
]
