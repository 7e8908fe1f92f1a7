"""
Chord dictionary - chord definitions with strict spellings, indexed for search.

Library chords are generated from quality formulas; project files in the
chord dataset format can add or replace chords by chord_id.
"""

from chuk_mcp_music_atlas.dictionary.loader import ChordLoader, build_chord
from chuk_mcp_music_atlas.dictionary.repository import ChordDictionary, ChordDictionaryError
from chuk_mcp_music_atlas.dictionary.spelling import (
    ChordDegree,
    enharmonic_alternate,
    spell_chord,
)

__all__ = [
    "ChordDegree",
    "ChordDictionary",
    "ChordDictionaryError",
    "ChordLoader",
    "build_chord",
    "enharmonic_alternate",
    "spell_chord",
]
