"""
Guitar grips - barre and triad shapes for a chord in standard tuning.

Grips are found on pitch classes, not spellings:
- E-shape and A-shape barres for major and minor chords
- 3-string triad grips on EAD, ADG, DGB and GBE in every inversion,
  one best grip per string set, inversion and neck position

String index 0 is the low E string.
"""

from __future__ import annotations

import logging

from chuk_mcp_music_atlas.models.guitar import MUTED, GuitarShape

from .chord import TriadQuality
from .pitch import normalize_accidentals, note_to_pitch_class

logger = logging.getLogger(__name__)

# E A D G B E
STANDARD_TUNING: tuple[int, ...] = (4, 9, 2, 7, 11, 4)
# E2 A2 D3 G3 B3 E4 as MIDI numbers, for checking voicings ascend
STANDARD_TUNING_MIDI: tuple[int, ...] = (40, 45, 50, 55, 59, 64)

POSITION_BUCKETS: tuple[int, ...] = (0, 5, 7, 9, 12)

TRIAD_STRING_SETS: dict[str, tuple[int, int, int]] = {
    "EAD": (0, 1, 2),
    "ADG": (1, 2, 3),
    "DGB": (2, 3, 4),
    "GBE": (3, 4, 5),
}

_INVERSION_LABELS = ("Root", "1st inv", "2nd inv")
_QUALITY_LABELS: dict[TriadQuality, str] = {
    TriadQuality.MAJOR: "",
    TriadQuality.MINOR: "m",
    TriadQuality.DIMINISHED: "dim",
    TriadQuality.AUGMENTED: "aug",
}


def triad_quality_for(quality: str) -> TriadQuality:
    """
    Reduce a chord quality suffix to the triad a grip has to sound.

    'dim'/'°' and 'aug'/'+' win; any other 'm' that is not part of 'maj'
    is minor; everything else (7, maj7, sus4, ...) is played as major.
    """
    q = quality.strip().lower()
    if "dim" in q or "°" in q:
        return TriadQuality.DIMINISHED
    if "aug" in q or "+" in q:
        return TriadQuality.AUGMENTED
    if "minor" in q or ("m" in q and "maj" not in q):
        return TriadQuality.MINOR
    return TriadQuality.MAJOR


def bucket_for_base_fret(base_fret: int) -> int:
    """Nearest neck position for a grip starting at base_fret."""
    if base_fret <= 1:
        return 0
    best = POSITION_BUCKETS[1]
    best_dist = abs(base_fret - best)
    for position in POSITION_BUCKETS[2:]:
        dist = abs(base_fret - position)
        if dist < best_dist:
            best, best_dist = position, dist
    return best


def nearest_fret(target_pc: int, string: int, min_fret: int = 0, max_fret: int = 12) -> int | None:
    """Lowest fret at or above min_fret where a string sounds target_pc."""
    for fret in range(min_fret, max_fret + 1):
        if (STANDARD_TUNING[string] + fret) % 12 == target_pc:
            return fret
    return None


def barre_grips(root_pc: int, quality: TriadQuality) -> list[GuitarShape]:
    """E-shape and A-shape barres; none for diminished or augmented chords."""
    if quality not in (TriadQuality.MAJOR, TriadQuality.MINOR):
        return []
    minor = quality is TriadQuality.MINOR
    suffix = " (m)" if minor else ""
    shapes = []

    f = nearest_fret(root_pc, string=0)
    if f is not None:
        frets = (f, f + 2, f + 2, f, f, f) if minor else (f, f + 2, f + 2, f + 1, f, f)
        shapes.append(
            GuitarShape(
                label=f"E-shape barre{suffix}",
                frets=frets,
                inversion=0,
                position_bucket=bucket_for_base_fret(f),
                string_set="EADGBE",
            )
        )

    f = nearest_fret(root_pc, string=1)
    if f is not None:
        frets = (MUTED, f, f + 2, f + 2, f + 1, f) if minor else (MUTED, f, f + 2, f + 2, f + 2, f)
        shapes.append(
            GuitarShape(
                label=f"A-shape barre{suffix}",
                frets=frets,
                inversion=0,
                position_bucket=bucket_for_base_fret(f),
                string_set="ADGBE",
            )
        )

    return shapes


def _search_triad_grip(
    strings: tuple[int, int, int],
    position: int,
    triad_pcs: set[int],
    bass_pc: int,
) -> tuple[int, ...] | None:
    """
    Best ascending grip of the triad on three strings near a position.

    The open position searches frets 0-5, others position to position+5
    with at most a 4-fret span. Lower span wins, then lower average fret,
    then closeness to the position.
    """
    min_fret = position
    max_fret = 5 if position == 0 else min(12, position + 5)
    s0, s1, s2 = strings

    def sounding(string: int, fret: int) -> tuple[int, int]:
        return (STANDARD_TUNING[string] + fret) % 12, STANDARD_TUNING_MIDI[string] + fret

    best: tuple[int, ...] | None = None
    best_score = float("inf")
    window = range(min_fret, max_fret + 1)

    for f0 in window:
        pc0, p0 = sounding(s0, f0)
        if pc0 != bass_pc:
            continue
        for f1 in window:
            pc1, p1 = sounding(s1, f1)
            if pc1 not in triad_pcs or p1 <= p0:
                continue
            for f2 in window:
                pc2, p2 = sounding(s2, f2)
                if pc2 not in triad_pcs or p2 <= p1:
                    continue
                if len({pc0, pc1, pc2}) != 3:
                    continue

                span = max(f0, f1, f2) - min(f0, f1, f2)
                if position != 0 and span > 4:
                    continue
                score = span * 10.0 + (f0 + f1 + f2) / 3.0
                if position != 0:
                    score += abs(min(f0, f1, f2) - position) * 0.5

                if score < best_score:
                    best_score = score
                    frets = [MUTED] * 6
                    frets[s0], frets[s1], frets[s2] = f0, f1, f2
                    best = tuple(frets)

    return best


def triad_grips(root_pc: int, quality: TriadQuality, position: int) -> list[GuitarShape]:
    """Triad grips for every string set and inversion at one neck position."""
    root_interval, third_interval, fifth_interval = quality.intervals
    chord_tones = [(root_pc + i) % 12 for i in (root_interval, third_interval, fifth_interval)]
    triad_pcs = set(chord_tones)
    quality_label = _QUALITY_LABELS[quality]
    position_label = "Open" if position == 0 else f"Pos {position}"

    shapes = []
    for set_name, strings in TRIAD_STRING_SETS.items():
        for inversion, bass_pc in enumerate(chord_tones):
            frets = _search_triad_grip(strings, position, triad_pcs, bass_pc)
            if frets is None:
                continue
            label = " • ".join(
                [
                    f"Triad {quality_label}".rstrip(),
                    set_name,
                    _INVERSION_LABELS[inversion],
                    position_label,
                ]
            )
            shapes.append(
                GuitarShape(
                    label=label,
                    frets=frets,
                    inversion=inversion,
                    position_bucket=position,
                    is_triad=True,
                    string_set=set_name,
                )
            )
    return shapes


def _shape_order(shape: GuitarShape) -> tuple:
    position = 999 if shape.position_bucket is None else shape.position_bucket
    return (position, shape.base_fret, not shape.is_triad, shape.label)


def get_shapes_for(root: str, quality: str = "") -> list[GuitarShape]:
    """
    Every grip for a chord, ordered by neck position.

    Within a position lower grips come first and triads before barres.

    Args:
        root: Root note name ('C', 'F#', 'Bb', 'C♯')
        quality: Chord quality suffix ('', 'm', 'dim', 'aug', 'm7', ...)

    Returns:
        Grips for the chord, or [] when the root is not a valid note
    """
    root_pc = note_to_pitch_class(normalize_accidentals(root.strip()))
    if root_pc is None:
        logger.debug("No guitar shapes for invalid root %r", root)
        return []

    triad = triad_quality_for(quality)
    shapes = barre_grips(root_pc, triad)
    for position in POSITION_BUCKETS:
        shapes.extend(triad_grips(root_pc, triad, position))
    return sorted(shapes, key=_shape_order)
