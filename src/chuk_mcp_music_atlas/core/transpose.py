"""
Transposition - re-root a chord progression from one key to another.

Only the root of each chord moves; the quality suffix is carried over
verbatim. Transposition is best effort per token: anything that does not
parse as a chord comes back unchanged, and a chord the dictionary does not
know still comes back with its new name.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from chuk_mcp_music_atlas.models.theory import TransposedChord

from .keys import prefers_flats
from .parser import parse_chord
from .pitch import normalize_accidentals, normalize_pc, note_to_pitch_class, pitch_class_to_note

if TYPE_CHECKING:
    from chuk_mcp_music_atlas.models.chord import ChordDefinition

logger = logging.getLogger(__name__)


class ChordLookup(Protocol):
    """Anything that can resolve an exact chord name to its spelling."""

    def find_by_name(self, name: str) -> ChordDefinition | None: ...


def semitone_delta(from_key: str, to_key: str) -> int | None:
    """Ascending semitones from one key's tonic to another's, or None if either is invalid."""
    from_pc = note_to_pitch_class(normalize_accidentals(from_key.strip()))
    to_pc = note_to_pitch_class(normalize_accidentals(to_key.strip()))
    if from_pc is None or to_pc is None:
        return None
    return normalize_pc(to_pc - from_pc)


def transpose_chord_name(name: str, semitones: int, prefer_flats: bool = False) -> str | None:
    """
    Transpose a single chord name, or None if it does not parse.

    Example:
        transpose_chord_name("F#m7", 2) -> "G#m7"
    """
    parsed = parse_chord(name)
    if parsed is None:
        return None
    root_pc = note_to_pitch_class(parsed.root)
    if root_pc is None:
        return None
    new_root = pitch_class_to_note(root_pc + semitones, prefer_flats=prefer_flats)
    return new_root + parsed.quality


def transpose_progression(
    raw: str,
    from_key: str,
    to_key: str,
    lookup: ChordLookup | None = None,
) -> list[TransposedChord]:
    """
    Transpose a whitespace-separated chord progression.

    The destination key decides sharp or flat spelling (F, Bb, Eb, Ab, Db,
    Gb and Cb use flats). Each new chord name is looked up by exact name
    to fill in its notes.

    Args:
        raw: Progression text, e.g. "C G Am F"
        from_key: Current key tonic
        to_key: Destination key tonic
        lookup: Chord dictionary used to spell the transposed chords

    Returns:
        One TransposedChord per token, in order. Empty if the input is blank
        or either key is not a valid note.

    Example:
        [c.name for c in transpose_progression("C G Am F", "C", "D")]
        -> ["D", "A", "Bm", "G"]
    """
    raw = raw.strip()
    if not raw:
        return []

    delta = semitone_delta(from_key, to_key)
    if delta is None:
        logger.debug("Cannot transpose from %r to %r", from_key, to_key)
        return []

    flats = prefers_flats(to_key)
    results: list[TransposedChord] = []

    for token in normalize_accidentals(raw).split():
        new_name = transpose_chord_name(token, delta, prefer_flats=flats)
        if new_name is None:
            logger.debug("Passing through non-chord token %r", token)
            results.append(TransposedChord(name=token))
            continue

        definition = lookup.find_by_name(new_name) if lookup is not None else None
        if definition is None:
            results.append(TransposedChord(name=new_name))
            continue

        results.append(
            TransposedChord(
                name=new_name,
                notes=tuple(definition.notes),
                notes_enharmonic_alt=(
                    tuple(definition.notes_enharmonic_alt)
                    if definition.notes_enharmonic_alt is not None
                    else None
                ),
            )
        )

    return results
