"""
Tests for guitar grips.

Tests cover:
- Quality reduction and neck-position bucketing
- E-shape and A-shape barre grips
- 3-string triad grips and their inversions
- The GuitarShape model
"""

import pytest
from pydantic import ValidationError

from chuk_mcp_music_atlas.core import TriadQuality, get_shapes_for, note_to_pitch_class
from chuk_mcp_music_atlas.core.guitar import (
    STANDARD_TUNING,
    STANDARD_TUNING_MIDI,
    TRIAD_STRING_SETS,
    barre_grips,
    bucket_for_base_fret,
    nearest_fret,
    triad_quality_for,
)
from chuk_mcp_music_atlas.models import GuitarShape


def sounding_pcs(shape: GuitarShape) -> list[int]:
    """Pitch classes of the played strings, low to high."""
    return [(STANDARD_TUNING[i] + shape.frets[i]) % 12 for i in shape.played_strings]


class TestHelpers:
    """Tests for quality reduction and fret helpers."""

    def test_triad_quality_for(self) -> None:
        """Extended qualities reduce to their triad."""
        assert triad_quality_for("") == TriadQuality.MAJOR
        assert triad_quality_for("maj7") == TriadQuality.MAJOR
        assert triad_quality_for("sus4") == TriadQuality.MAJOR
        assert triad_quality_for("m7") == TriadQuality.MINOR
        assert triad_quality_for("minor") == TriadQuality.MINOR
        assert triad_quality_for("dim7") == TriadQuality.DIMINISHED
        assert triad_quality_for("°") == TriadQuality.DIMINISHED
        assert triad_quality_for("+") == TriadQuality.AUGMENTED

    def test_bucket_for_base_fret(self) -> None:
        """Grips snap to the nearest neck position."""
        assert bucket_for_base_fret(0) == 0
        assert bucket_for_base_fret(1) == 0
        assert bucket_for_base_fret(3) == 5
        assert bucket_for_base_fret(8) == 7
        assert bucket_for_base_fret(10) == 9
        assert bucket_for_base_fret(11) == 12

    def test_nearest_fret(self) -> None:
        """Lowest fret sounding the pitch class."""
        assert nearest_fret(0, string=0) == 8
        assert nearest_fret(4, string=0) == 0
        assert nearest_fret(0, string=1) == 3
        assert nearest_fret(4, string=0, min_fret=1) == 12


class TestBarreGrips:
    """Tests for E-shape and A-shape barres."""

    def test_open_e_major(self) -> None:
        """The E-shape on E is the open E chord."""
        e_shape = barre_grips(4, TriadQuality.MAJOR)[0]
        assert e_shape.label == "E-shape barre"
        assert e_shape.frets == (0, 2, 2, 1, 0, 0)
        assert e_shape.position_bucket == 0

    def test_a_minor(self) -> None:
        """Am has an open A-shape and an E-shape at the 5th fret."""
        e_shape, a_shape = barre_grips(9, TriadQuality.MINOR)
        assert e_shape.label == "E-shape barre (m)"
        assert e_shape.frets == (5, 7, 7, 5, 5, 5)
        assert e_shape.position_bucket == 5
        assert a_shape.label == "A-shape barre (m)"
        assert a_shape.frets == (-1, 0, 2, 2, 1, 0)
        assert a_shape.base_fret == 0

    def test_c_major(self) -> None:
        """C barres sit at the 8th and 3rd frets."""
        e_shape, a_shape = barre_grips(0, TriadQuality.MAJOR)
        assert e_shape.frets == (8, 10, 10, 9, 8, 8)
        assert e_shape.position_bucket == 7
        assert a_shape.frets == (-1, 3, 5, 5, 5, 3)
        assert a_shape.position_bucket == 5

    def test_no_barres_for_dim_or_aug(self) -> None:
        """Diminished and augmented chords only get triads."""
        assert barre_grips(11, TriadQuality.DIMINISHED) == []
        assert barre_grips(0, TriadQuality.AUGMENTED) == []


class TestTriadGrips:
    """Tests for 3-string triad grips."""

    def test_c_major_open_on_top_strings(self) -> None:
        """Root-position C on G, B and E in the open position."""
        shapes = get_shapes_for("C")
        grip = next(s for s in shapes if s.label == "Triad • GBE • Root • Open")
        assert grip.frets == (-1, -1, -1, 5, 5, 3)
        assert grip.inversion == 0
        assert grip.is_triad

    def test_minor_labels(self) -> None:
        """Triad labels carry the quality."""
        triads = [s for s in get_shapes_for("A", "m") if s.is_triad]
        assert triads
        assert all(s.label.startswith("Triad m • ") for s in triads)

    @pytest.mark.parametrize(
        "root,quality",
        [("C", ""), ("F#", "m"), ("Bb", "dim"), ("E", "aug"), ("Db", "m7")],
    )
    def test_triads_are_valid_voicings(self, root: str, quality: str) -> None:
        """Every triad grip sounds the chord, ascending, with the right bass."""
        triad = triad_quality_for(quality)
        root_pc = note_to_pitch_class(root)
        tones = [(root_pc + i) % 12 for i in triad.intervals]

        triads = [s for s in get_shapes_for(root, quality) if s.is_triad]
        assert triads
        for shape in triads:
            strings = shape.played_strings
            assert tuple(strings) == TRIAD_STRING_SETS[shape.string_set]
            pcs = sounding_pcs(shape)
            assert set(pcs) == set(tones)
            assert pcs[0] == tones[shape.inversion]
            pitches = [STANDARD_TUNING_MIDI[i] + shape.frets[i] for i in strings]
            assert pitches == sorted(set(pitches))
            if shape.position_bucket:
                played = [shape.frets[i] for i in strings]
                assert max(played) - min(played) <= 4
                assert min(played) >= shape.position_bucket


class TestGetShapesFor:
    """Tests for get_shapes_for."""

    def test_ordered_by_position(self) -> None:
        """Positions never go backwards."""
        buckets = [s.position_bucket for s in get_shapes_for("G")]
        assert buckets == sorted(buckets)

    def test_triads_before_barres_at_same_fret(self) -> None:
        """Within a position and base fret, triads come first."""
        shapes = get_shapes_for("A", "m")
        for first, second in zip(shapes, shapes[1:]):
            if (first.position_bucket, first.base_fret) == (
                second.position_bucket,
                second.base_fret,
            ):
                assert first.is_triad or not second.is_triad

    def test_unicode_root(self) -> None:
        """Unicode accidentals are accepted."""
        assert get_shapes_for("C♯", "m") == get_shapes_for("C#", "m")

    def test_invalid_root(self) -> None:
        """Invalid roots give no grips."""
        assert get_shapes_for("H") == []
        assert get_shapes_for("") == []


class TestGuitarShapeModel:
    """Tests for the GuitarShape model."""

    def test_base_fret_and_dict(self) -> None:
        """Muted strings are ignored for the base fret."""
        shape = GuitarShape(label="x", frets=(-1, 3, 5, 5, 5, 3))
        assert shape.base_fret == 3
        data = shape.to_dict()
        assert data["frets"] == [-1, 3, 5, 5, 5, 3]
        assert data["base_fret"] == 3

    def test_fully_muted(self) -> None:
        """A fully muted shape has base fret 0."""
        assert GuitarShape(label="x", frets=(-1,) * 6).base_fret == 0

    def test_invalid_frets(self) -> None:
        """Six strings are required and frets cannot be below muted."""
        with pytest.raises(ValidationError):
            GuitarShape(label="x", frets=(0, 2, 2, 1, 0))
        with pytest.raises(ValidationError):
            GuitarShape(label="x", frets=(0, 2, 2, 1, 0, -2))
