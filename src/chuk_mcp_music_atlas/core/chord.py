"""
Chord primitives - TriadQuality, diatonic quality/roman tables, and
roman-numeral references.

Roman numerals are key-independent chord references: case gives the
quality (upper = major, lower = minor), ° marks diminished and + marks
augmented.
"""

from __future__ import annotations

import re
from enum import Enum

from chuk_mcp_music_atlas.constants import MinorType

from .keys import MAJOR_SCALES


class TriadQuality(str, Enum):
    """The four triad qualities that diatonic harmony produces."""

    MAJOR = "Major"
    MINOR = "Minor"
    DIMINISHED = "Diminished"
    AUGMENTED = "Augmented"

    @property
    def symbol(self) -> str:
        """Chord-name suffix for this quality ('' / 'm' / '°' / '+')."""
        return _QUALITY_SYMBOLS[self]

    @property
    def intervals(self) -> tuple[int, int, int]:
        """Semitones of root, third and fifth above the root."""
        return _QUALITY_INTERVALS[self]

    def chord_name(self, root: str) -> str:
        """Display name of a triad on root (e.g. 'Am', 'B°')."""
        return f"{root}{self.symbol}"


_QUALITY_SYMBOLS: dict[TriadQuality, str] = {
    TriadQuality.MAJOR: "",
    TriadQuality.MINOR: "m",
    TriadQuality.DIMINISHED: "°",
    TriadQuality.AUGMENTED: "+",
}

_QUALITY_INTERVALS: dict[TriadQuality, tuple[int, int, int]] = {
    TriadQuality.MAJOR: (0, 4, 7),
    TriadQuality.MINOR: (0, 3, 7),
    TriadQuality.DIMINISHED: (0, 3, 6),
    TriadQuality.AUGMENTED: (0, 4, 8),
}

_MAJ = TriadQuality.MAJOR
_MIN = TriadQuality.MINOR
_DIM = TriadQuality.DIMINISHED
_AUG = TriadQuality.AUGMENTED

MAJOR_QUALITIES: tuple[TriadQuality, ...] = (_MAJ, _MIN, _MIN, _MAJ, _MAJ, _MIN, _DIM)
MAJOR_ROMANS: tuple[str, ...] = ("I", "ii", "iii", "IV", "V", "vi", "vii°")

# Raising the 6th/7th alters the chords on ii, III, IV/iv, V/v, vi and vii
MINOR_QUALITIES: dict[MinorType, tuple[TriadQuality, ...]] = {
    MinorType.NATURAL: (_MIN, _DIM, _MAJ, _MIN, _MIN, _MAJ, _MAJ),
    MinorType.HARMONIC: (_MIN, _DIM, _AUG, _MIN, _MAJ, _MAJ, _DIM),
    MinorType.MELODIC: (_MIN, _MIN, _AUG, _MAJ, _MAJ, _DIM, _DIM),
}

MINOR_ROMANS: dict[MinorType, tuple[str, ...]] = {
    MinorType.NATURAL: ("i", "ii°", "III", "iv", "v", "VI", "VII"),
    MinorType.HARMONIC: ("i", "ii°", "III+", "iv", "V", "VI", "vii°"),
    MinorType.MELODIC: ("i", "ii", "III+", "IV", "V", "vi°", "vii°"),
}

_DEGREE_MAP: dict[str, int] = {"I": 0, "II": 1, "III": 2, "IV": 3, "V": 4, "VI": 5, "VII": 6}

_ROMAN_RE = re.compile(r"^(VII|VI|IV|V|III|II|I)([°o+]?)$", re.IGNORECASE)


def rotate(items: tuple | list, start: int) -> list:
    """Rotate a 7-element cycle so that index start comes first."""
    return [items[(i + start) % len(items)] for i in range(len(items))]


def stack_triad(scale: list[str] | tuple[str, ...], degree: int) -> tuple[str, str, str]:
    """Root, third and fifth of the triad built on a scale degree (0-based)."""
    return (scale[degree % 7], scale[(degree + 2) % 7], scale[(degree + 4) % 7])


def roman_quality(roman: str) -> TriadQuality | None:
    """Quality implied by a roman numeral's case and suffix, or None if it is not one."""
    match = _ROMAN_RE.match(roman.strip())
    if match is None:
        return None
    numeral, suffix = match.groups()
    if suffix in ("°", "o"):
        return TriadQuality.DIMINISHED
    if suffix == "+":
        return TriadQuality.AUGMENTED
    return TriadQuality.MINOR if numeral.islower() else TriadQuality.MAJOR


def roman_to_chord(roman: str, key: str) -> str:
    """
    Convert a roman numeral to a chord name in a major key.

    Unknown keys or numerals are returned unchanged.

    Examples:
        roman_to_chord("vi", "C") -> "Am"
        roman_to_chord("vii°", "G") -> "F#°"
    """
    scale = MAJOR_SCALES.get(key)
    match = _ROMAN_RE.match(roman.strip())
    quality = roman_quality(roman)
    if scale is None or match is None or quality is None:
        return roman
    root = scale[_DEGREE_MAP[match.group(1).upper()]]
    return quality.chord_name(root)


def progression_chords(romans: list[str], key: str) -> list[str]:
    """Resolve a list of roman numerals to chord names in a major key."""
    return [roman_to_chord(roman, key) for roman in romans]


# Common chord progressions by genre
PROGRESSIONS: dict[str, list[dict[str, object]]] = {
    "Pop/Rock": [
        {
            "name": "I - V - vi - IV",
            "roman": ["I", "V", "vi", "IV"],
            "description": "The most popular progression in modern pop music",
            "examples": ["Let It Be", "No Woman No Cry", "With or Without You"],
        },
        {
            "name": "I - IV - V",
            "roman": ["I", "IV", "V"],
            "description": "Classic rock and roll progression",
            "examples": ["La Bamba", "Twist and Shout", "Wild Thing"],
        },
        {
            "name": "vi - IV - I - V",
            "roman": ["vi", "IV", "I", "V"],
            "description": "Emotional pop progression",
            "examples": ["Despacito", "Grenade", "Africa"],
        },
        {
            "name": "I - vi - IV - V",
            "roman": ["I", "vi", "IV", "V"],
            "description": "50s doo-wop progression",
            "examples": ["Stand By Me", "Every Breath You Take"],
        },
    ],
    "Jazz": [
        {
            "name": "ii - V - I",
            "roman": ["ii", "V", "I"],
            "description": "The most important jazz progression",
            "examples": ["Autumn Leaves", "All The Things You Are"],
        },
        {
            "name": "I - vi - ii - V",
            "roman": ["I", "vi", "ii", "V"],
            "description": "Rhythm changes / turnaround",
            "examples": ["I Got Rhythm", "Anthropology"],
        },
        {
            "name": "iii - vi - ii - V",
            "roman": ["iii", "vi", "ii", "V"],
            "description": "Extended turnaround",
            "examples": ["Fly Me To The Moon"],
        },
    ],
    "Blues": [
        {
            "name": "12-Bar Blues",
            "roman": ["I", "I", "I", "I", "IV", "IV", "I", "I", "V", "IV", "I", "V"],
            "description": "Foundation of blues and rock",
            "examples": ["Sweet Home Chicago", "Pride and Joy"],
        },
        {
            "name": "Quick Change Blues",
            "roman": ["I", "IV", "I", "I", "IV", "IV", "I", "I", "V", "IV", "I", "V"],
            "description": "12-bar with early IV chord",
            "examples": ["Stormy Monday"],
        },
    ],
    "Classical": [
        {
            "name": "I - IV - V - I",
            "roman": ["I", "IV", "V", "I"],
            "description": "Authentic cadence progression",
            "examples": ["Countless classical pieces"],
        },
        {
            "name": "i - iv - V - i",
            "roman": ["i", "iv", "V", "i"],
            "description": "Minor key cadence",
            "examples": ["Toccata and Fugue in D minor"],
        },
    ],
}


def find_progression(name: str) -> dict[str, object] | None:
    """Find a progression by its name (case-insensitive) across all genres."""
    wanted = name.strip().lower()
    for progressions in PROGRESSIONS.values():
        for progression in progressions:
            if str(progression["name"]).lower() == wanted:
                return progression
    return None
