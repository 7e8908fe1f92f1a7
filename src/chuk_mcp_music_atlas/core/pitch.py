"""
Pitch primitives - PitchClass and note-spelling arithmetic.

A pitch class is one of the 12 chromatic pitches (octave-independent),
represented as 0-11 with C = 0. A note spelling is a letter A-G plus an
optional accidental (#, ##, b, bb). Several spellings share a pitch class
(enharmonic equivalents), so spelling is kept as a separate concern.

Parsing never raises: malformed input yields None and callers degrade
(skip the note, show an empty scale, pass a token through unchanged).
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from enum import IntEnum

from chuk_mcp_music_atlas.constants import UNICODE_ACCIDENTALS

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
_FLAT_NAMES: list[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

NATURAL_VALUES: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

_ACCIDENTAL_VALUES: dict[str, int] = {"bb": -2, "b": -1, "": 0, "#": 1, "##": 2}
_ACCIDENTAL_SUFFIXES: dict[int, str] = {v: k for k, v in _ACCIDENTAL_VALUES.items()}

# Double accidentals must be tried before single ones
_NOTE_RE = re.compile(r"^([A-Ga-g])((?:bb|##|b|#)?)$")
_SIMPLE_NOTE_RE = re.compile(r"^([A-Ga-g])([#b]?)$")


def normalize_pc(pc: int) -> int:
    """Fold any integer into 0-11."""
    return ((pc % 12) + 12) % 12


def normalize_accidentals(text: str) -> str:
    """Replace unicode sharp/flat symbols with '#' and 'b'."""
    for symbol, ascii_form in UNICODE_ACCIDENTALS.items():
        text = text.replace(symbol, ascii_form)
    return text


def accidental_suffix(alteration: int) -> str:
    """
    Encode a semitone alteration as an accidental suffix.

    -2..+2 map to bb, b, '', #, ##. Anything further out repeats the
    symbol (a triple sharp is '###').
    """
    if alteration in _ACCIDENTAL_SUFFIXES:
        return _ACCIDENTAL_SUFFIXES[alteration]
    return "#" * alteration if alteration > 0 else "b" * -alteration


def parse_note(raw: str) -> tuple[str, int] | None:
    """
    Split a note spelling into (upper-case letter, alteration).

    Returns None for anything that is not a letter A-G followed by at most
    one of ##, bb, # or b.
    """
    match = _NOTE_RE.match(raw.strip())
    if match is None:
        return None
    return match.group(1).upper(), _ACCIDENTAL_VALUES[match.group(2)]


def note_to_pitch_class(note: str) -> int | None:
    """
    Convert a note spelling to its pitch class (0-11).

    Handles double accidentals, so theoretical spellings like F## or Dbb
    resolve correctly. Returns None for invalid input.

    Examples:
        note_to_pitch_class("F#") -> 6
        note_to_pitch_class("Dbb") -> 0
        note_to_pitch_class("H") -> None
    """
    parsed = parse_note(note)
    if parsed is None:
        return None
    letter, alteration = parsed
    return normalize_pc(NATURAL_VALUES[letter] + alteration)


def simple_pitch_class(note: str) -> int | None:
    """
    Lightweight pitch-class lookup for display code.

    Accepts unicode accidentals but only single sharps/flats.
    """
    match = _SIMPLE_NOTE_RE.match(normalize_accidentals(note.strip()))
    if match is None:
        return None
    alteration = _ACCIDENTAL_VALUES[match.group(2)]
    return normalize_pc(NATURAL_VALUES[match.group(1).upper()] + alteration)


def pitch_class_to_note(pc: int, prefer_flats: bool = False) -> str:
    """Spell a pitch class with a single sharp or flat."""
    names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
    return names[normalize_pc(pc)]


def interval(root: str, note: str) -> int | None:
    """Ascending semitones (0-11) from root to note, or None if either is invalid."""
    root_pc = note_to_pitch_class(root)
    note_pc = note_to_pitch_class(note)
    if root_pc is None or note_pc is None:
        return None
    return normalize_pc(note_pc - root_pc)


def find_by_pitch_class(notes: Iterable[str], target_pc: int) -> str | None:
    """Return the first note whose pitch class matches target_pc."""
    for note in notes:
        if note_to_pitch_class(note) == target_pc:
            return note
    return None


def raise_same_letter(note: str, semitones: int) -> str:
    """
    Alter a note by some semitones while keeping its letter.

    This is what enforces strict theoretical spelling: raising G gives G#,
    never Ab. Unparseable notes are returned unchanged.

    Examples:
        raise_same_letter("G", 1) -> "G#"
        raise_same_letter("G#", 1) -> "G##"
        raise_same_letter("Ab", 1) -> "A"
    """
    parsed = parse_note(note)
    if parsed is None:
        return note
    letter, alteration = parsed
    return letter + accidental_suffix(alteration + semitones)


def has_double_accidentals(notes: Iterable[str]) -> bool:
    """True if any spelling contains ## or bb."""
    return any("##" in n or "bb" in n for n in notes)


def should_show_alternate_spelling(notes: Sequence[str], alt: Sequence[str] | None) -> bool:
    """
    Decide whether a "sounds like" enharmonic line is worth showing.

    Only when the strict spelling has a double accidental and the
    alternate spelling actually differs from it.
    """
    if not alt:
        return False
    if not has_double_accidentals(notes):
        return False
    if len(notes) != len(alt):
        return True
    return any(a != b for a, b in zip(notes, alt))


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent. Enharmonic equivalents share the same value
    (C# == Db == 1). Internally we use sharp names (Cs, Ds, etc.);
    spelling is a display concern handled by spell().
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass(normalize_pc(self.value + semitones))

    def interval_to(self, other: PitchClass) -> int:
        """Ascending semitones from this pitch class to another."""
        return normalize_pc(other.value - self.value)

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        return pitch_class_to_note(self.value, prefer_flats)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """
        Parse a pitch class from a spelling like 'C', 'C#', 'Db', 'F##'.

        Raises:
            ValueError: if the spelling is not a valid note
        """
        pc = note_to_pitch_class(normalize_accidentals(name))
        if pc is None:
            raise ValueError(f"Unknown pitch class: {name}")
        return cls(pc)
