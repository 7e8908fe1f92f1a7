"""
Tests for chord text parsing.

Tests cover:
- Search query normalization
- Predictive chord-token parsing ("gsh" -> G#)
- Dictionary lookup keys
"""

import pytest

from chuk_mcp_music_atlas.core import normalize_search_query, parse_chord
from chuk_mcp_music_atlas.core.parser import (
    ReplacementStyle,
    apply_predictive_patterns,
    normalize_lookup_key,
    parse_chord_name,
    predict_lookup_key,
    replace_words,
)


class TestSearchNormalization:
    """Tests for normalize_search_query."""

    def test_spelled_out_sharp(self) -> None:
        """Words collapse to chord symbols."""
        assert normalize_search_query("C sharp Minor") == "c#m"

    def test_separators_and_flat(self) -> None:
        """Hyphens and spaces are ignored."""
        assert normalize_search_query("b-flat major 7") == "bbmaj7"

    def test_unicode(self) -> None:
        """Unicode accidentals are folded."""
        assert normalize_search_query(" F♯ minor ") == "f#m"

    def test_joined_words(self) -> None:
        """Words without spaces collapse too."""
        assert normalize_search_query("Gflat diminished") == "gbdim"

    @pytest.mark.parametrize(
        "query",
        ["C sharp Minor", "b-flat major 7", "E flat augmented", "dsharpminor", "Am7"],
    )
    def test_idempotent(self, query: str) -> None:
        """Normalizing twice gives the same key."""
        once = normalize_search_query(query)
        assert normalize_search_query(once) == once


class TestPredictiveParsing:
    """Tests for parse_chord."""

    def test_partial_sharp(self) -> None:
        """'gsh' is G sharp."""
        parsed = parse_chord("gsh")
        assert parsed is not None
        assert parsed.root == "G#"
        assert parsed.quality == ""

    def test_partial_flat_with_quality(self) -> None:
        """'bfl7' is B flat 7."""
        parsed = parse_chord("bfl7")
        assert parsed is not None
        assert parsed.root == "Bb"
        assert parsed.quality == "7"
        assert parsed.name == "Bb7"

    def test_full_word_any_case(self) -> None:
        """The whole word 'sharp' is consumed."""
        parsed = parse_chord("cShArP")
        assert parsed is not None
        assert parsed.name == "C#"

    def test_symbols_pass_through(self) -> None:
        """Ordinary chord symbols keep their quality verbatim."""
        assert parse_chord("C#maj7") == ("C#", "maj7")
        assert parse_chord("Am") == ("A", "m")
        assert parse_chord("Dbmaj7") == ("Db", "maj7")

    def test_lower_case_root(self) -> None:
        """Lower-case roots are capitalized."""
        assert parse_chord("ab7") == ("Ab", "7")
        assert parse_chord("bb") == ("Bb", "")

    def test_not_a_chord(self) -> None:
        """Tokens that do not start with a note letter give None."""
        assert parse_chord("N.C.") is None
        assert parse_chord("|") is None
        assert parse_chord("") is None
        assert parse_chord("   ") is None

    def test_spelled_out_name(self) -> None:
        """Whole names in words parse without stray whitespace."""
        assert parse_chord_name("C sharp minor") == ("C#", "m")
        assert parse_chord_name("b flat major 7") == ("Bb", "maj7")
        assert parse_chord_name("Am7") == ("A", "m7")
        assert parse_chord_name("N.C.") is None

    def test_first_pattern_wins(self) -> None:
        """Only one predictive pattern applies."""
        assert apply_predictive_patterns("gs") == "G#"
        assert apply_predictive_patterns("gf") == "Gb"
        assert apply_predictive_patterns("xyz") == "xyz"


class TestLookupKeys:
    """Tests for dictionary lookup keys."""

    def test_normalize_lookup_key(self) -> None:
        """Keys are lower-case ASCII without whitespace."""
        assert normalize_lookup_key(" C♯ m7 ") == "c#m7"

    def test_predict_bare_accidental(self) -> None:
        """A half-typed accidental alone is expanded."""
        assert predict_lookup_key("gsh") == "g#"
        assert predict_lookup_key("E flat") == "eb"

    def test_predict_words(self) -> None:
        """Words map to index vocabulary."""
        assert predict_lookup_key("e flat minor") == "ebmin"
        assert predict_lookup_key("C major") == "cmaj"

    def test_replacement_styles_differ(self) -> None:
        """Minor is 'm' for search and 'min' for the index."""
        assert replace_words("minor", ReplacementStyle.SEARCH) == "m"
        assert replace_words("minor", ReplacementStyle.INDEX) == "min"
        assert replace_words("augmented", ReplacementStyle.SEARCH) == "+"
        assert replace_words("augmented", ReplacementStyle.TOKEN) == "aug"
