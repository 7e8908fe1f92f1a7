"""
Core theory engine - pure functions over plain data.

Leaf-first:
- pitch: Pitch-class arithmetic and note spelling
- keys: Major-scale, circle-of-fifths, relative-minor and signature tables
- scale: Named scale formulas
- chord: Triad qualities, roman numerals, progressions
- builder: Scale + diatonic triad packs for major, minor and modes
- parser: Search normalization and predictive chord-token parsing
- transpose: Progression transposition
- guitar: Barre and triad grips in standard tuning
"""

from chuk_mcp_music_atlas.core.pitch import (
    PitchClass,
    find_by_pitch_class,
    has_double_accidentals,
    interval,
    normalize_accidentals,
    note_to_pitch_class,
    pitch_class_to_note,
    raise_same_letter,
    should_show_alternate_spelling,
    simple_pitch_class,
)
from chuk_mcp_music_atlas.core.keys import (
    CIRCLE_OF_FIFTHS,
    KEY_SIGNATURES,
    MAJOR_SCALES,
    MODE_NAMES,
    RELATIVE_MINORS,
    MajorKey,
    key_signature_display,
    parent_major_for_mode,
    relative_major,
    relative_minor,
)
from chuk_mcp_music_atlas.core.scale import SCALE_FORMULAS, ScaleFormula, build_scale_notes
from chuk_mcp_music_atlas.core.chord import (
    PROGRESSIONS,
    TriadQuality,
    progression_chords,
    roman_to_chord,
)
from chuk_mcp_music_atlas.core.builder import (
    build_major_pack,
    build_minor_pack,
    build_mode_pack,
    build_pack,
)
from chuk_mcp_music_atlas.core.parser import normalize_search_query, parse_chord, parse_chord_name
from chuk_mcp_music_atlas.core.transpose import (
    ChordLookup,
    semitone_delta,
    transpose_progression,
)
from chuk_mcp_music_atlas.core.guitar import POSITION_BUCKETS, get_shapes_for

__all__ = [
    # Pitch
    "PitchClass",
    "find_by_pitch_class",
    "has_double_accidentals",
    "interval",
    "normalize_accidentals",
    "note_to_pitch_class",
    "pitch_class_to_note",
    "raise_same_letter",
    "should_show_alternate_spelling",
    "simple_pitch_class",
    # Keys
    "CIRCLE_OF_FIFTHS",
    "KEY_SIGNATURES",
    "MAJOR_SCALES",
    "MODE_NAMES",
    "RELATIVE_MINORS",
    "MajorKey",
    "key_signature_display",
    "parent_major_for_mode",
    "relative_major",
    "relative_minor",
    # Scales
    "SCALE_FORMULAS",
    "ScaleFormula",
    "build_scale_notes",
    # Chords
    "PROGRESSIONS",
    "TriadQuality",
    "progression_chords",
    "roman_to_chord",
    # Builder
    "build_major_pack",
    "build_minor_pack",
    "build_mode_pack",
    "build_pack",
    # Parser
    "normalize_search_query",
    "parse_chord",
    "parse_chord_name",
    # Transposition
    "ChordLookup",
    "semitone_delta",
    "transpose_progression",
    # Guitar
    "POSITION_BUCKETS",
    "get_shapes_for",
]
