"""
Chord name parsing and normalization.

Three consumers turn free text into chord vocabulary, each with a slightly
different target style:

- search:  'C sharp Minor' -> 'c#m'       (lossy key for matching)
- token:   'bfl7'          -> ('Bb', '7')  (one chord token, root + quality)
- index:   'F# minor'      -> 'f#min'      (chord dictionary lookups)

They share one word-replacement table so the vocabularies cannot drift.

Music notation overloads 'b' as a letter and a flat, and 's'/'f' after a
letter may start "sharp"/"flat" or a quality ("sus"). The predictive
patterns are ordered and only the first match applies.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum

from chuk_mcp_music_atlas.models.theory import ParsedChord

from .pitch import normalize_accidentals


class ReplacementStyle(str, Enum):
    """Target vocabulary for word replacements."""

    SEARCH = "search"
    TOKEN = "token"
    INDEX = "index"


# Word -> replacement per style. Order matters: applied top to bottom.
WORD_REPLACEMENTS: dict[str, dict[ReplacementStyle, str]] = {
    "sharp": {ReplacementStyle.TOKEN: "#", ReplacementStyle.INDEX: "#"},
    "flat": {ReplacementStyle.TOKEN: "b", ReplacementStyle.INDEX: "b"},
    "major": {
        ReplacementStyle.SEARCH: "maj",
        ReplacementStyle.TOKEN: "maj",
        ReplacementStyle.INDEX: "maj",
    },
    "minor": {
        ReplacementStyle.SEARCH: "m",
        ReplacementStyle.TOKEN: "m",
        ReplacementStyle.INDEX: "min",
    },
    "diminished": {
        ReplacementStyle.SEARCH: "dim",
        ReplacementStyle.TOKEN: "dim",
        ReplacementStyle.INDEX: "dim",
    },
    "augmented": {
        ReplacementStyle.SEARCH: "+",
        ReplacementStyle.TOKEN: "aug",
        ReplacementStyle.INDEX: "aug",
    },
}


def replace_words(text: str, style: ReplacementStyle, ignore_case: bool = False) -> str:
    """Apply the shared word-replacement table in the given style."""
    flags = re.IGNORECASE if ignore_case else 0
    for word, targets in WORD_REPLACEMENTS.items():
        if style in targets:
            text = re.sub(re.escape(word), targets[style], text, flags=flags)
    return text


# ---------------------------------------------------------------------------
# Search normalization
# ---------------------------------------------------------------------------

_SEPARATORS_RE = re.compile(r"[\-_.,]+")
_WHITESPACE_RE = re.compile(r"\s+")
_SPACED_SHARP_RE = re.compile(r"\b([a-g])\s+sharp\b")
_SPACED_FLAT_RE = re.compile(r"\b([a-g])\s+flat\b")
_JOINED_SHARP_RE = re.compile(r"([a-g])sharp")
_JOINED_FLAT_RE = re.compile(r"([a-g])flat")


def _collapse_search_words(s: str) -> str:
    s = _JOINED_SHARP_RE.sub(r"\1#", s)
    s = _JOINED_FLAT_RE.sub(r"\1b", s)
    return replace_words(s, ReplacementStyle.SEARCH)


def normalize_search_query(query: str) -> str:
    """
    Normalize free text into a chord search key.

    Lossy on purpose: it only has to make equivalent queries collide.
    Idempotent: normalizing twice gives the same key.

    Examples:
        normalize_search_query("C sharp Minor") -> "c#m"
        normalize_search_query("b-flat major 7") -> "bbmaj7"
    """
    s = normalize_accidentals(query.strip().lower())
    s = _SEPARATORS_RE.sub(" ", s)
    s = _WHITESPACE_RE.sub(" ", s)
    s = _SPACED_SHARP_RE.sub(r"\1#", s)
    s = _SPACED_FLAT_RE.sub(r"\1b", s)
    s = s.replace(" ", "")

    # Every replacement shortens the string, so this terminates
    while True:
        collapsed = _collapse_search_words(s)
        if collapsed == s:
            return s
        s = collapsed


# ---------------------------------------------------------------------------
# Predictive chord-token parsing
# ---------------------------------------------------------------------------

# Longest completion first so "csharp" consumes the whole word.
_PREDICTIVE_PATTERNS: list[tuple[re.Pattern[str], Callable[[re.Match[str]], str]]] = [
    # "gs", "gsh", "gsha", "gshar", "gsharp" -> "G#"
    (
        re.compile(r"^([a-g])s(?:harp|har|ha|h)?(.*)$", re.DOTALL),
        lambda m: f"{m.group(1).upper()}#{m.group(2)}",
    ),
    # "gf", "gfl", "gfla", "gflat" -> "Gb"
    (
        re.compile(r"^([a-g])f(?:lat|la|l)?(.*)$", re.DOTALL),
        lambda m: f"{m.group(1).upper()}b{m.group(2)}",
    ),
    # "g sharp"
    (
        re.compile(r"^([a-g])\s*sharp(.*)$", re.DOTALL),
        lambda m: f"{m.group(1).upper()}#{m.group(2)}",
    ),
    # "g flat"
    (
        re.compile(r"^([a-g])\s*flat(.*)$", re.DOTALL),
        lambda m: f"{m.group(1).upper()}b{m.group(2)}",
    ),
]

_CHORD_RE = re.compile(r"^([a-gA-G](?:bb|##|b|#)?)(.*)$", re.DOTALL)


def apply_predictive_patterns(token: str) -> str:
    """
    Expand partially typed accidentals ('gsh' -> 'G#', 'bfl7' -> 'Bb7').

    Patterns are matched against the lower-cased token; only the first
    matching pattern applies. Tokens that match nothing are returned as is.
    """
    lowered = token.lower()
    for pattern, build in _PREDICTIVE_PATTERNS:
        match = pattern.match(lowered)
        if match is not None:
            return build(match)
    return token


def normalize_chord_token(token: str) -> str:
    """Predictive expansion followed by token-style word replacements."""
    s = normalize_accidentals(token.strip())
    s = apply_predictive_patterns(s)
    return replace_words(s, ReplacementStyle.TOKEN, ignore_case=True)


def parse_chord(token: str) -> ParsedChord | None:
    """
    Split one chord token into root and quality.

    The root is returned as an upper-case letter plus lower-case
    accidentals; the quality is the remainder, verbatim. Returns None if
    the token is empty or does not start with a note letter, in which case
    callers pass the token through untouched.

    Examples:
        parse_chord("gsh") -> ParsedChord("G#", "")
        parse_chord("bfl7") -> ParsedChord("Bb", "7")
        parse_chord("C#maj7") -> ParsedChord("C#", "maj7")
        parse_chord("N.C.") -> None
    """
    normalized = normalize_chord_token(token)
    if not normalized:
        return None

    match = _CHORD_RE.match(normalized)
    if match is None:
        return None

    raw_root, quality = match.groups()
    root = raw_root[0].upper() + raw_root[1:].lower()
    return ParsedChord(root, quality)


def parse_chord_name(text: str) -> ParsedChord | None:
    """
    Parse a whole chord name, which may be spelled out in words.

    Like parse_chord, but whitespace left between the words of the
    quality is dropped: "C sharp minor" -> ParsedChord("C#", "m").
    """
    parsed = parse_chord(text)
    if parsed is None:
        return None
    return ParsedChord(parsed.root, _WHITESPACE_RE.sub("", parsed.quality))


# ---------------------------------------------------------------------------
# Dictionary lookup keys
# ---------------------------------------------------------------------------

_LOOKUP_PREDICTIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^([a-g])s(?:harp|har|ha|h)?$"), r"\1#"),
    (re.compile(r"^([a-g])f(?:lat|la|l)?$"), r"\1b"),
    (re.compile(r"^([a-g])\s*sharp$"), r"\1#"),
    (re.compile(r"^([a-g])\s*flat$"), r"\1b"),
]


def normalize_lookup_key(text: str) -> str:
    """Dictionary key form: trimmed, lower-case, ASCII accidentals, no whitespace."""
    return _WHITESPACE_RE.sub("", normalize_accidentals(text.strip().lower()))


def predict_lookup_key(text: str) -> str:
    """
    Lookup key with a bare partially typed accidental expanded.

    Only whole-query forms like 'gsh' or 'e flat' are expanded here, since
    the dictionary also uses this for prefix matching.
    """
    key = normalize_lookup_key(text)
    for pattern, replacement in _LOOKUP_PREDICTIVE_PATTERNS:
        if pattern.match(key):
            key = pattern.sub(replacement, key)
            break
    return replace_words(key, ReplacementStyle.INDEX)
