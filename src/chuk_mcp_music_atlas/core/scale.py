"""
Scale formulas - named scales as semitone offsets from the tonic.

Unlike the strict major-scale table in keys.py, these scales are spelled
with single accidentals only (sharps, or flats for flat keys), which is
what the scale browser shows for non-diatonic scales like blues or whole
tone.
"""

from __future__ import annotations

from dataclasses import dataclass

from chuk_mcp_music_atlas.constants import ScaleName

from .keys import prefers_flats
from .pitch import normalize_accidentals, note_to_pitch_class, pitch_class_to_note


@dataclass(frozen=True)
class ScaleFormula:
    """
    A scale defined by cumulative semitone offsets from its tonic.

    A major scale is (0, 2, 4, 5, 7, 9, 11). Offsets are strictly
    increasing and start at the tonic.

    Immutable and hashable.
    """

    offsets: tuple[int, ...]
    name: str
    display_name: str = ""

    def __post_init__(self) -> None:
        if not self.offsets or self.offsets[0] != 0:
            raise ValueError(f"Scale offsets must start at 0, got {self.offsets}")
        if any(b <= a for a, b in zip(self.offsets, self.offsets[1:])) or self.offsets[-1] > 11:
            raise ValueError(f"Scale offsets must increase within an octave, got {self.offsets}")

    @property
    def steps(self) -> tuple[int, ...]:
        """Semitone steps between consecutive degrees, including the return to the octave."""
        closed = (*self.offsets, 12)
        return tuple(b - a for a, b in zip(closed, closed[1:]))

    def spell(self, root: str) -> list[str]:
        """
        Spell the scale from a root note.

        Flat keys (F, Bb, Eb...) are spelled with flats, everything else
        with sharps. Returns [] if the root is not a valid note.
        """
        root = normalize_accidentals(root.strip())
        root_pc = note_to_pitch_class(root)
        if root_pc is None:
            return []
        flats = prefers_flats(root)
        return [
            pitch_class_to_note(root_pc + offset, prefer_flats=flats) for offset in self.offsets
        ]

    def __str__(self) -> str:
        return self.display_name or self.name


SCALE_FORMULAS: dict[ScaleName, ScaleFormula] = {
    ScaleName.MAJOR: ScaleFormula((0, 2, 4, 5, 7, 9, 11), "major", "Major"),
    ScaleName.NATURAL_MINOR: ScaleFormula(
        (0, 2, 3, 5, 7, 8, 10), "natural_minor", "Natural Minor"
    ),
    ScaleName.HARMONIC_MINOR: ScaleFormula(
        (0, 2, 3, 5, 7, 8, 11), "harmonic_minor", "Harmonic Minor"
    ),
    ScaleName.MELODIC_MINOR: ScaleFormula(
        (0, 2, 3, 5, 7, 9, 11), "melodic_minor", "Melodic Minor"
    ),
    ScaleName.PENTATONIC_MAJOR: ScaleFormula(
        (0, 2, 4, 7, 9), "pentatonic_major", "Major Pentatonic"
    ),
    ScaleName.PENTATONIC_MINOR: ScaleFormula(
        (0, 3, 5, 7, 10), "pentatonic_minor", "Minor Pentatonic"
    ),
    ScaleName.BLUES: ScaleFormula((0, 3, 5, 6, 7, 10), "blues", "Blues"),
    ScaleName.WHOLE_TONE: ScaleFormula((0, 2, 4, 6, 8, 10), "whole_tone", "Whole Tone"),
    ScaleName.DIMINISHED_HW: ScaleFormula(
        (0, 1, 3, 4, 6, 7, 9, 10), "diminished_hw", "Diminished (H-W)"
    ),
    ScaleName.DIMINISHED_WH: ScaleFormula(
        (0, 2, 3, 5, 6, 8, 9, 11), "diminished_wh", "Diminished (W-H)"
    ),
    ScaleName.SPANISH_PHRYGIAN: ScaleFormula(
        (0, 1, 4, 5, 7, 8, 10), "spanish_phrygian", "Spanish Phrygian"
    ),
}


def get_scale_formula(name: str | ScaleName) -> ScaleFormula | None:
    """Look up a scale formula by name ('blues', 'harmonic_minor', ...)."""
    try:
        return SCALE_FORMULAS[ScaleName(name)]
    except ValueError:
        return None


def build_scale_notes(root: str, scale_name: str | ScaleName) -> list[str]:
    """
    Build the note names of a named scale from a root.

    Returns [] for an unknown scale or an invalid root.

    Example:
        build_scale_notes("A", "pentatonic_minor") -> ["A", "C", "D", "E", "G"]
    """
    formula = get_scale_formula(scale_name)
    if formula is None:
        return []
    return formula.spell(root)
