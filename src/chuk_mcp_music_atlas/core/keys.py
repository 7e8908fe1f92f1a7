"""
Key tables - major-scale spellings, circle of fifths, relative minors,
key signatures and modes.

Everything here is immutable process-wide data plus plain lookups.
Unknown keys never raise: lookups return None or an empty list and the
builders turn that into an "Unknown" pack.
"""

from __future__ import annotations

from dataclasses import dataclass

from .pitch import normalize_accidentals, note_to_pitch_class, pitch_class_to_note

# Strict major scales (includes E#/B#/Cb/Fb where theory requires them).
MAJOR_SCALES: dict[str, tuple[str, ...]] = {
    "C": ("C", "D", "E", "F", "G", "A", "B"),
    "G": ("G", "A", "B", "C", "D", "E", "F#"),
    "D": ("D", "E", "F#", "G", "A", "B", "C#"),
    "A": ("A", "B", "C#", "D", "E", "F#", "G#"),
    "E": ("E", "F#", "G#", "A", "B", "C#", "D#"),
    "B": ("B", "C#", "D#", "E", "F#", "G#", "A#"),
    "F#": ("F#", "G#", "A#", "B", "C#", "D#", "E#"),
    "C#": ("C#", "D#", "E#", "F#", "G#", "A#", "B#"),
    "F": ("F", "G", "A", "Bb", "C", "D", "E"),
    "Bb": ("Bb", "C", "D", "Eb", "F", "G", "A"),
    "Eb": ("Eb", "F", "G", "Ab", "Bb", "C", "D"),
    "Ab": ("Ab", "Bb", "C", "Db", "Eb", "F", "G"),
    "Db": ("Db", "Eb", "F", "Gb", "Ab", "Bb", "C"),
    "Gb": ("Gb", "Ab", "Bb", "Cb", "Db", "Eb", "F"),
    "Cb": ("Cb", "Db", "Eb", "Fb", "Gb", "Ab", "Bb"),
}

# Clockwise, one spelling per pitch class
CIRCLE_OF_FIFTHS: tuple[str, ...] = (
    "C", "G", "D", "A", "E", "B", "F#", "C#", "Ab", "Eb", "Bb", "F",
)  # fmt: skip

RELATIVE_MINORS: dict[str, str] = {
    "C": "A",
    "G": "E",
    "D": "B",
    "A": "F#",
    "E": "C#",
    "B": "G#",
    "F#": "D#",
    "C#": "A#",
    "F": "D",
    "Bb": "G",
    "Eb": "C",
    "Ab": "F",
}

# Positive = sharps, negative = flats
KEY_SIGNATURES: dict[str, int] = {
    "C": 0,
    "G": 1, "D": 2, "A": 3, "E": 4, "B": 5, "F#": 6, "C#": 7,
    "F": -1, "Bb": -2, "Eb": -3, "Ab": -4, "Db": -5, "Gb": -6, "Cb": -7,
}  # fmt: skip

# Destination keys that are spelled with flats when transposing
FLAT_KEYS: frozenset[str] = frozenset({"F", "Bb", "Eb", "Ab", "Db", "Gb", "Cb"})

# W-W-H-W-W-W-H: step from each mode's tonic to the next one
MODE_INTERVALS: tuple[int, ...] = (2, 2, 1, 2, 2, 2, 1)

MODE_NAMES: tuple[str, ...] = (
    "Ionian",
    "Dorian",
    "Phrygian",
    "Lydian",
    "Mixolydian",
    "Aeolian",
    "Locrian",
)

MODE_CHARACTERISTICS: dict[str, dict[str, str]] = {
    "Ionian": {
        "mood": "Happy, Bright, Stable",
        "family": "Major",
        "color": "Bright",
        "usage": "Pop, Classical, Happy songs",
        "character": "The standard major scale. Sounds resolved and complete.",
    },
    "Dorian": {
        "mood": "Jazzy, Soulful, Sophisticated",
        "family": "Minor",
        "color": "Warm",
        "usage": "Jazz, Funk, Soul, Folk",
        "character": "Minor with a raised 6th. Less sad than natural minor.",
    },
    "Phrygian": {
        "mood": "Spanish, Dark, Exotic",
        "family": "Minor",
        "color": "Dark",
        "usage": "Flamenco, Metal, Middle Eastern",
        "character": "The flat 2nd gives it a distinctive Spanish flavor.",
    },
    "Lydian": {
        "mood": "Dreamy, Floating, Mystical",
        "family": "Major",
        "color": "Ethereal",
        "usage": "Film scores, Progressive rock, Jazz",
        "character": "The raised 4th creates a sense of wonder and suspension.",
    },
    "Mixolydian": {
        "mood": "Bluesy, Rock, Laid-back",
        "family": "Major",
        "color": "Warm",
        "usage": "Rock, Blues, Country, Folk",
        "character": "Major with a flat 7th. Classic rock sound.",
    },
    "Aeolian": {
        "mood": "Sad, Melancholic, Natural",
        "family": "Minor",
        "color": "Dark",
        "usage": "Pop ballads, Rock, Classical",
        "character": "The natural minor scale. Straightforward sad sound.",
    },
    "Locrian": {
        "mood": "Unstable, Tense, Dissonant",
        "family": "Diminished",
        "color": "Very Dark",
        "usage": "Jazz, Metal, Experimental",
        "character": "Rarely used as a key center due to the diminished tonic.",
    },
}


def major_scale(key: str) -> list[str]:
    """Strict major scale for a key, or [] if the key is not in the table."""
    return list(MAJOR_SCALES.get(key, ()))


def prefers_flats(key: str) -> bool:
    """Whether notes in this key should be spelled with flats."""
    return normalize_accidentals(key.strip()) in FLAT_KEYS


def key_signature_display(key: str) -> str:
    """Formatted key signature (e.g. '2♯' or '3♭'); '—' for none or unknown."""
    signature = KEY_SIGNATURES.get(key)
    if not signature:
        return "—"
    if signature > 0:
        return f"{signature}♯"
    return f"{abs(signature)}♭"


def relative_minor(major_key: str) -> str | None:
    """
    Relative-minor tonic of a major key.

    Uses the relative-minor table, falling back to the 6th degree of the
    strict major scale for keys outside the circle (Db, Gb, Cb).
    """
    if major_key in RELATIVE_MINORS:
        return RELATIVE_MINORS[major_key]
    scale = MAJOR_SCALES.get(major_key)
    return scale[5] if scale else None


def relative_major(minor_key: str) -> str | None:
    """Parent major of a minor tonic (reverse of relative_minor)."""
    for major, minor in RELATIVE_MINORS.items():
        if minor == minor_key:
            return major
    for major, scale in MAJOR_SCALES.items():
        if scale[5] == minor_key:
            return major
    return None


def parent_major_for_mode(root: str, mode_index: int) -> str | None:
    """
    Find the major key whose rotation by mode_index starts on root.

    Walks back from the root by the sum of the mode steps that precede it
    (D Dorian walks back 2 semitones to C). Among the table spellings of
    that pitch class, the one whose rotated scale starts on the root's own
    spelling wins (F# Ionian is F#, not Gb). Otherwise the flat spelling is
    preferred, then the sharp one; Ab Phrygian has no such parent (Fb is
    not in the table) and falls back to E, whose scale spells it G#.
    """
    root_pc = note_to_pitch_class(root)
    if root_pc is None or not 0 <= mode_index < len(MODE_INTERVALS):
        return None

    parent_pc = (root_pc - sum(MODE_INTERVALS[:mode_index])) % 12
    candidates = [pitch_class_to_note(parent_pc, prefer_flats=prefer) for prefer in (True, False)]
    candidates += [
        tonic
        for tonic in MAJOR_SCALES
        if note_to_pitch_class(tonic) == parent_pc and tonic not in candidates
    ]
    candidates = [tonic for tonic in candidates if tonic in MAJOR_SCALES]

    for tonic in candidates:
        if MAJOR_SCALES[tonic][mode_index] == root:
            return tonic
    return candidates[0] if candidates else None


def circle_position(key: str) -> int | None:
    """Clockwise position (0-11) of a key on the circle of fifths, by pitch class."""
    pc = note_to_pitch_class(key)
    if pc is None:
        return None
    for position, tonic in enumerate(CIRCLE_OF_FIFTHS):
        if note_to_pitch_class(tonic) == pc:
            return position
    return None


@dataclass(frozen=True)
class MajorKey:
    """
    A major key identified by its tonic spelling.

    Examples:
        MajorKey.lookup("G").signature == 1
        MajorKey.lookup("Bb").relative_minor == "G"
    """

    tonic: str
    scale: tuple[str, ...]
    signature: int
    relative_minor: str | None
    circle_position: int | None

    @property
    def signature_display(self) -> str:
        """Formatted key signature (e.g. '2♯')."""
        return key_signature_display(self.tonic)

    @property
    def prefers_flats(self) -> bool:
        """Whether this key spells accidentals with flats."""
        return self.tonic in FLAT_KEYS

    def __str__(self) -> str:
        return f"{self.tonic} major"

    @classmethod
    def lookup(cls, tonic: str) -> MajorKey | None:
        """Build the key for a tonic spelling, or None if it is not a table key."""
        tonic = normalize_accidentals(tonic.strip())
        if tonic not in MAJOR_SCALES:
            return None
        return cls(
            tonic=tonic,
            scale=MAJOR_SCALES[tonic],
            signature=KEY_SIGNATURES[tonic],
            relative_minor=relative_minor(tonic),
            circle_position=circle_position(tonic),
        )

    @classmethod
    def all(cls) -> list[MajorKey]:
        """Every key in the major-scale table."""
        return [key for key in (cls.lookup(t) for t in MAJOR_SCALES) if key is not None]
