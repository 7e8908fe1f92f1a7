"""
Strict chord spelling from degree formulas.

A degree such as "b7" fixes two things: the letter (seven letters up from
the root, counting the root as 1) and the pitch (the major-scale 7th
lowered a semitone). The accidental is whatever makes that letter land on
that pitch, so C#7#9 is spelled C# E# G# B D## rather than C# F G# B E.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chuk_mcp_music_atlas.core.keys import prefers_flats
from chuk_mcp_music_atlas.core.pitch import (
    NATURAL_VALUES,
    accidental_suffix,
    has_double_accidentals,
    normalize_pc,
    parse_note,
    pitch_class_to_note,
)

_LETTERS = "CDEFGAB"
_MAJOR_OFFSETS = (0, 2, 4, 5, 7, 9, 11)
_DEGREE_RE = re.compile(r"^(b{1,2}|#{1,2})?(\d{1,2})$")


@dataclass(frozen=True)
class ChordDegree:
    """
    A chord tone as a scale degree with optional alteration.

    Degree is 1-13 (9, 11 and 13 are compound 2, 4 and 6).
    Alteration is semitones: -1 = flat, +1 = sharp.
    """

    degree: int
    alteration: int = 0

    def __post_init__(self) -> None:
        if not 1 <= self.degree <= 13:
            raise ValueError(f"Chord degree must be 1-13, got {self.degree}")

    @property
    def semitones(self) -> int:
        """Semitones above the root (compound degrees add an octave)."""
        step = self.degree - 1
        return _MAJOR_OFFSETS[step % 7] + 12 * (step // 7) + self.alteration

    @property
    def letter_steps(self) -> int:
        """How many letters above the root this tone is spelled."""
        return (self.degree - 1) % 7

    def __str__(self) -> str:
        if self.alteration == 0:
            return str(self.degree)
        symbol = "#" if self.alteration > 0 else "b"
        return symbol * abs(self.alteration) + str(self.degree)

    @classmethod
    def parse(cls, text: str) -> ChordDegree:
        """
        Parse a degree like '5', 'b7', '#9' or 'bb7'.

        Raises:
            ValueError: if the text is not a degree
        """
        match = _DEGREE_RE.match(text.strip())
        if match is None:
            raise ValueError(f"Invalid chord degree: {text}")
        accidentals, number = match.groups()
        alteration = 0
        if accidentals:
            alteration = len(accidentals) if accidentals[0] == "#" else -len(accidentals)
        return cls(int(number), alteration)


def spell_tone(root: str, tone: ChordDegree) -> str | None:
    """Spell one chord tone above a root, keeping the degree's letter."""
    parsed = parse_note(root)
    if parsed is None:
        return None
    root_letter, root_alteration = parsed

    letter = _LETTERS[(_LETTERS.index(root_letter) + tone.letter_steps) % 7]
    target_pc = normalize_pc(NATURAL_VALUES[root_letter] + root_alteration + tone.semitones)
    alteration = normalize_pc(target_pc - NATURAL_VALUES[letter])
    if alteration > 6:
        alteration -= 12
    return letter + accidental_suffix(alteration)


def spell_chord(root: str, degrees: list[ChordDegree]) -> list[str]:
    """Strict spelling of every tone in the formula; [] if the root is invalid."""
    notes = [spell_tone(root, tone) for tone in degrees]
    if any(note is None for note in notes):
        return []
    return [note for note in notes if note is not None]


def enharmonic_alternate(root: str, degrees: list[ChordDegree]) -> list[str] | None:
    """
    Single-accidental "sounds like" spelling, only for double-accidental chords.

    Returns None when the strict spelling has no ## or bb.
    """
    strict = spell_chord(root, degrees)
    if not has_double_accidentals(strict):
        return None
    parsed = parse_note(root)
    if parsed is None:
        return None
    root_pc = NATURAL_VALUES[parsed[0]] + parsed[1]
    flats = prefers_flats(root) or "b" in root[1:]
    return [pitch_class_to_note(root_pc + tone.semitones, prefer_flats=flats) for tone in degrees]
