"""
Theory value models - what the builders and the transposer hand back.

These are plain frozen values built fresh on every query, meant to be
consumed directly by a presentation layer or serialized by the MCP tools.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from pydantic import BaseModel, Field

from chuk_mcp_music_atlas.core.chord import TriadQuality
from chuk_mcp_music_atlas.core.pitch import should_show_alternate_spelling


class ParsedChord(NamedTuple):
    """A chord token split into its root spelling and the verbatim quality suffix."""

    root: str
    quality: str

    @property
    def name(self) -> str:
        return f"{self.root}{self.quality}"


class TriadPack(BaseModel):
    """
    A key's scale plus its seven diatonic triads.

    Every sequence field has seven entries, index 0 being the tonic, or
    none at all for the "Unknown" pack.
    """

    key_label: str = Field(..., description="Display label, e.g. 'A Harmonic Minor'")
    scale: tuple[str, ...] = Field(default=(), description="Seven scale spellings")
    roman: tuple[str, ...] = Field(default=(), description="Roman numeral per degree")
    chord_names: tuple[str, ...] = Field(default=(), description="Display chord name per degree")
    notes: tuple[tuple[str, str, str], ...] = Field(
        default=(), description="Root, third and fifth of each triad"
    )
    qualities: tuple[TriadQuality, ...] = Field(default=(), description="Quality per degree")

    model_config = {"frozen": True}

    @classmethod
    def unknown(cls) -> TriadPack:
        """The empty pack returned for unknown or unresolvable keys."""
        return cls(key_label="Unknown")

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to render."""
        return not self.scale

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "key_label": self.key_label,
            "scale": list(self.scale),
            "roman": list(self.roman),
            "chord_names": list(self.chord_names),
            "notes": [list(triad) for triad in self.notes],
            "qualities": [q.value for q in self.qualities],
        }


class TransposedChord(BaseModel):
    """One transposed token: the new chord name and its spelled notes, if known."""

    name: str = Field(..., description="Transposed chord name, or the token unchanged")
    notes: tuple[str, ...] = Field(default=(), description="Strict note spelling")
    notes_enharmonic_alt: tuple[str, ...] | None = Field(
        default=None, description="Optional 'sounds like' spelling"
    )

    model_config = {"frozen": True}

    @property
    def show_alternate(self) -> bool:
        """Whether the 'sounds like' line is worth displaying."""
        return should_show_alternate_spelling(self.notes, self.notes_enharmonic_alt)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "name": self.name,
            "notes": list(self.notes),
            "notes_enharmonic_alt": (
                list(self.notes_enharmonic_alt) if self.notes_enharmonic_alt is not None else None
            ),
            "show_alternate": self.show_alternate,
        }
