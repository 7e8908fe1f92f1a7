"""
Constants and enums for the theory engine.

No magic strings - use enums for constrained selector values.
"""

from enum import Enum


class KeyView(str, Enum):
    """Which side of a circle-of-fifths key is being viewed."""

    MAJOR = "major"
    RELATIVE_MINOR = "relative_minor"


class MinorType(str, Enum):
    """
    Minor scale variants.

    Natural is the Aeolian rotation of the parent major.
    Harmonic raises the 7th, melodic raises the 6th and 7th.
    """

    NATURAL = "natural"
    HARMONIC = "harmonic"
    MELODIC = "melodic"

    @property
    def label(self) -> str:
        """Display label used in key names (e.g. 'Harmonic')."""
        return self.value.capitalize()


class ScaleName(str, Enum):
    """Named scale formulas."""

    MAJOR = "major"
    NATURAL_MINOR = "natural_minor"
    HARMONIC_MINOR = "harmonic_minor"
    MELODIC_MINOR = "melodic_minor"
    PENTATONIC_MAJOR = "pentatonic_major"
    PENTATONIC_MINOR = "pentatonic_minor"
    BLUES = "blues"
    WHOLE_TONE = "whole_tone"
    DIMINISHED_HW = "diminished_hw"
    DIMINISHED_WH = "diminished_wh"
    SPANISH_PHRYGIAN = "spanish_phrygian"


# Environment variable naming the project chord directory
CHORDS_DIR_ENV = "CHUK_MUSIC_ATLAS_CHORDS_DIR"

# Unicode accidentals and their ASCII forms, including the mis-decoded
# UTF-8 variants that show up in copy-pasted chord charts.
UNICODE_ACCIDENTALS: dict[str, str] = {
    "♯": "#",
    "♭": "b",
    "â™¯": "#",
    "â™­": "b",
}


class ErrorMessages:
    """Standardized error messages."""

    INVALID_NOTE = "Invalid note: '{note}'. Expected a letter A-G with an optional accidental."
    UNKNOWN_KEY = "Unknown key: '{key}'."
    UNKNOWN_SCALE = "Unknown scale: '{scale}'. Available: {available}."
    UNKNOWN_MODE = "Unknown mode: '{mode}'. Expected 0-6 or a mode name."
    UNKNOWN_PROGRESSION = "Progression '{name}' not found."
    CHORD_NOT_FOUND = "Chord '{name}' not found."
    NOT_A_CHORD = "'{token}' could not be parsed as a chord."
    NO_CHORD_DATA = "No chord data could be loaded from {paths}."
    INVALID_POSITION = "Invalid neck position: {position}. Available: {available}."
