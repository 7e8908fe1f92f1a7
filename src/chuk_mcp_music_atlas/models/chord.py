"""
Chord dictionary models.

ChordDefinition keeps the field names of the chord dataset files
(chord_id, formula_semitones, notes_enharmonic_alt...) so project data in
that format loads without translation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_music_atlas.core.pitch import has_double_accidentals


class ChordQualityDefinition(BaseModel):
    """
    A chord quality described by scale-degree formula.

    Degrees are written the way a chord chart reads: "1", "3", "5",
    "b7", "#9", "bb7". The degree number fixes the letter, the prefix
    fixes the accidental, so spelling stays strict (C#7#9 contains D##).
    """

    quality_id: str = Field(..., description="Stable id, e.g. 'maj7'")
    name: str = Field(..., description="Human-readable name, e.g. 'Major 7'")
    symbol: str = Field("", description="Suffix appended to the root in display names")
    degrees: list[str] = Field(..., min_length=1, description="Degree formula from the root")
    aliases: list[str] = Field(default_factory=list, description="Alternative suffixes")
    category: str | None = Field(None, description="Filter category, e.g. 'triad'")

    model_config = {"frozen": True}


class ChordDefinition(BaseModel):
    """A concrete chord on a root with its strict spelling."""

    chord_id: str = Field(..., description="Unique id, e.g. 'C#_maj7'")
    root: str = Field(..., description="Root spelling")
    quality: str = Field(..., description="Quality id")
    formula_semitones: list[int] = Field(default_factory=list, description="Semitones from root")
    display_name: str = Field("", description="Display name, e.g. 'C#maj7'")
    notes: list[str] = Field(default_factory=list, description="Strict spelling (may use ## / bb)")
    notes_enharmonic_alt: list[str] | None = Field(
        None, description="'Sounds like' spelling, only set when notes use ## / bb"
    )
    aliases: list[str] = Field(default_factory=list, description="Alternative names")
    search_tokens: list[str] = Field(default_factory=list, description="Extra search phrases")
    category: str | None = Field(None, description="Filter category")

    model_config = {"frozen": True}

    @property
    def needs_alternate_spelling(self) -> bool:
        """True when the strict spelling contains a double accidental."""
        return has_double_accidentals(self.notes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return self.model_dump()


class SearchSuggestion(BaseModel):
    """An autocomplete entry: the text to insert and a hint to show beside it."""

    text: str
    hint: str

    model_config = {"frozen": True}
