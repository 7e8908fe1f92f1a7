#!/usr/bin/env python3
"""
Example: Chord dictionary search and transposition.

Shows strict spellings with their "sounds like" alternates, predictive
and enharmonic lookup, autocomplete suggestions, and transposing a
progression with the dictionary filling in the notes. Ends with guitar
grips for a chord.

Usage:
    python examples/chord_search.py
"""

from chuk_mcp_music_atlas.core import get_shapes_for, transpose_progression
from chuk_mcp_music_atlas.dictionary import ChordDictionary


def main() -> None:
    """Demonstrate the chord dictionary."""
    print("CHUK Music Atlas Chord Dictionary Demo")
    print("=" * 40)
    print()

    dictionary = ChordDictionary.load()
    print(f"Loaded {len(dictionary)} chords")
    print(f"Categories: {', '.join(dictionary.get_categories())}")
    print()

    # Strict spelling and the alternate line
    for name in ("C#7#9", "Cdim7", "Gmaj7"):
        chord = dictionary.find_by_name(name)
        if chord is None:
            continue
        line = f"  {chord.display_name:<7} {' '.join(chord.notes)}"
        if chord.needs_alternate_spelling and chord.notes_enharmonic_alt:
            line += f"  (sounds like {' '.join(chord.notes_enharmonic_alt)})"
        print(line)
    print()

    # Forgiving lookup
    for query in ("gsh", "bfl7", "Cbm", "e flat minor"):
        chord = dictionary.find_by_name(query)
        print(f"  {query!r:<16} -> {chord.display_name if chord else 'not found'}")
    print()

    # Autocomplete
    for query in ("g", "gs", "cb"):
        suggestions = dictionary.get_suggestions(query, limit=5)
        print(f"  {query!r}: " + ", ".join(f"{s.text} ({s.hint})" for s in suggestions))
    print()

    # Transposition
    progression = "C Am F G7 | Cmaj7"
    for to_key in ("D", "Eb"):
        chords = transpose_progression(progression, "C", to_key, lookup=dictionary)
        print(f"{progression} -> {to_key}:")
        for chord in chords:
            notes = " ".join(chord.notes) if chord.notes else "-"
            print(f"  {chord.name:<7} {notes}")
    print()

    # Guitar grips
    print("Am grips (low E to high E, x = muted):")
    for shape in get_shapes_for("A", "m")[:6]:
        frets = " ".join("x" if f < 0 else str(f) for f in shape.frets)
        print(f"  {frets:<18} {shape.label}")


if __name__ == "__main__":
    main()
