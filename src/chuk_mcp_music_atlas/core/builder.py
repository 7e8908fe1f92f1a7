"""
Triad pack builder - a key's scale and its seven diatonic triads.

Three entry points, all pure functions of (root, selector):
- build_major_pack: strict major scale from the key table
- build_minor_pack: Aeolian rotation of the parent major, with the
  harmonic/melodic raises applied letter-preserving
- build_mode_pack: parent major rotated to any of the seven modes

Unknown or unresolvable input produces TriadPack.unknown(), never an error.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from chuk_mcp_music_atlas.constants import KeyView, MinorType
from chuk_mcp_music_atlas.models.theory import TriadPack

from .chord import (
    MAJOR_QUALITIES,
    MAJOR_ROMANS,
    MINOR_QUALITIES,
    MINOR_ROMANS,
    TriadQuality,
    rotate,
    stack_triad,
)
from .keys import MODE_NAMES, major_scale, parent_major_for_mode, relative_major, relative_minor
from .pitch import normalize_accidentals, raise_same_letter

logger = logging.getLogger(__name__)

# Natural minor starts on the 6th degree of its parent major
_AEOLIAN_INDEX = 5


def _assemble(
    key_label: str,
    scale: Sequence[str],
    roman: Sequence[str],
    qualities: Sequence[TriadQuality],
) -> TriadPack:
    """Stack triads on every degree and name them by quality."""
    notes = [stack_triad(scale, degree) for degree in range(7)]
    chord_names = [quality.chord_name(scale[i]) for i, quality in enumerate(qualities)]
    return TriadPack(
        key_label=key_label,
        scale=tuple(scale),
        roman=tuple(roman),
        chord_names=tuple(chord_names),
        notes=tuple(notes),
        qualities=tuple(qualities),
    )


def build_major_pack(key: str) -> TriadPack:
    """
    Build the pack for a major key.

    Example:
        build_major_pack("C").chord_names
        -> ("C", "Dm", "Em", "F", "G", "Am", "B°")
    """
    key = normalize_accidentals(key.strip())
    scale = major_scale(key)
    if not scale:
        logger.debug("No major scale for key %r", key)
        return TriadPack.unknown()
    return _assemble(f"{key} Major", scale, MAJOR_ROMANS, MAJOR_QUALITIES)


def build_minor_pack(key: str, minor_type: MinorType = MinorType.NATURAL) -> TriadPack:
    """
    Build the pack for a minor key.

    The harmonic variant raises the 7th degree, the melodic variant the
    6th and 7th. Raises keep the letter (G -> G#, never Ab).

    Example:
        build_minor_pack("A", MinorType.HARMONIC).scale
        -> ("A", "B", "C", "D", "E", "F", "G#")
    """
    key = normalize_accidentals(key.strip())
    minor_type = MinorType(minor_type)

    parent = relative_major(key)
    parent_scale = major_scale(parent) if parent else []
    if not parent_scale:
        logger.debug("No parent major for minor key %r", key)
        return TriadPack.unknown()

    scale = rotate(parent_scale, _AEOLIAN_INDEX)
    if minor_type in (MinorType.HARMONIC, MinorType.MELODIC):
        scale[6] = raise_same_letter(scale[6], 1)
    if minor_type == MinorType.MELODIC:
        scale[5] = raise_same_letter(scale[5], 1)

    return _assemble(
        f"{key} {minor_type.label} Minor",
        scale,
        MINOR_ROMANS[minor_type],
        MINOR_QUALITIES[minor_type],
    )


def build_mode_pack(root: str, mode_index: int, mode_name: str | None = None) -> TriadPack:
    """
    Build the pack for a diatonic mode.

    The mode inherits the major pattern rotated to its position: Dorian
    (index 1) starts on the ii chord, so its qualities run min, min, Maj...

    Args:
        root: Mode tonic (e.g. "D")
        mode_index: 0 (Ionian) to 6 (Locrian)
        mode_name: Label to use; defaults to the standard mode name

    Example:
        build_mode_pack("D", 1, "Dorian").scale
        -> ("D", "E", "F", "G", "A", "B", "C")
    """
    root = normalize_accidentals(root.strip())
    parent = parent_major_for_mode(root, mode_index)
    parent_scale = major_scale(parent) if parent else []
    if not parent_scale:
        logger.debug("No parent major for %r mode %d", root, mode_index)
        return TriadPack.unknown()

    name = mode_name or MODE_NAMES[mode_index]
    return _assemble(
        f"{root} {name}",
        rotate(parent_scale, mode_index),
        rotate(MAJOR_ROMANS, mode_index),
        rotate(MAJOR_QUALITIES, mode_index),
    )


def build_pack(
    selected_major_root: str,
    view: KeyView = KeyView.MAJOR,
    minor_type: MinorType = MinorType.NATURAL,
) -> TriadPack:
    """
    Build the pack for a circle-of-fifths selection.

    The selection is always a major root; the relative-minor view shows
    that key's relative minor in the chosen variant.
    """
    if KeyView(view) == KeyView.MAJOR:
        return build_major_pack(selected_major_root)

    minor_tonic = relative_minor(normalize_accidentals(selected_major_root.strip()))
    if minor_tonic is None:
        return TriadPack.unknown()
    return build_minor_pack(minor_tonic, minor_type)
