#!/usr/bin/env python3
"""
Example: Exploring keys, modes and progressions.

Walks the circle of fifths, builds triad packs for a major key and its
relative minor variants, rotates a key through its modes, and resolves a
few common progressions.

Usage:
    python examples/explore_keys.py
"""

from chuk_mcp_music_atlas.constants import KeyView, MinorType
from chuk_mcp_music_atlas.core import (
    MODE_NAMES,
    MajorKey,
    build_mode_pack,
    build_pack,
    build_scale_notes,
    progression_chords,
)
from chuk_mcp_music_atlas.core.chord import find_progression


def show_pack(title: str, pack) -> None:
    print(f"{title}: {pack.key_label}")
    print("  " + "  ".join(f"{r:>5}" for r in pack.roman))
    print("  " + "  ".join(f"{c:>5}" for c in pack.chord_names))


def main() -> None:
    """Demonstrate the theory engine."""
    print("CHUK Music Atlas Key Explorer")
    print("=" * 40)
    print()

    # Circle of fifths
    print("Major keys:")
    for key in sorted(MajorKey.all(), key=lambda k: k.signature):
        print(f"  {key.tonic:<3} {key.signature_display:<3} relative minor: {key.relative_minor}")
    print()

    # One key, three minor variants
    show_pack("Major", build_pack("E"))
    for minor_type in MinorType:
        show_pack(minor_type.label, build_pack("E", KeyView.RELATIVE_MINOR, minor_type))
    print()

    # Modes of C
    print("Modes of C major:")
    for index, name in enumerate(MODE_NAMES):
        root = build_pack("C").scale[index]
        pack = build_mode_pack(root, index)
        print(f"  {name:<11} {' '.join(pack.scale)}")
    print()

    # Scales beyond the diatonic ones
    for scale in ("blues", "whole_tone", "spanish_phrygian"):
        print(f"A {scale}: {' '.join(build_scale_notes('A', scale))}")
    print()

    # Progressions
    for name in ("I - V - vi - IV", "ii - V - I", "12-Bar Blues"):
        progression = find_progression(name)
        if progression is None:
            continue
        romans = [str(r) for r in progression["roman"]]  # type: ignore[attr-defined]
        print(f"{name} in Bb: {' '.join(progression_chords(romans, 'Bb'))}")


if __name__ == "__main__":
    main()
