"""
Guitar grip model - one playable shape in standard tuning.

Frets are listed low E to high E; -1 marks a muted string and 0 an open one.
Grips work on pitch classes only, so they carry no note spellings.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

MUTED = -1


class GuitarShape(BaseModel):
    """A barre or triad grip for a chord."""

    label: str = Field(..., description="Grip label, e.g. 'E-shape barre (m)'")
    frets: tuple[int, ...] = Field(..., description="Fret per string, low E first (-1 = muted)")
    inversion: int | None = Field(
        default=None, description="0 = root position, 1 = 1st, 2 = 2nd inversion"
    )
    position_bucket: int | None = Field(default=None, description="Neck position (0, 5, 7, 9, 12)")
    is_triad: bool = Field(default=False, description="True for 3-string triad grips")
    string_set: str | None = Field(default=None, description="Strings used, e.g. 'DGB'")

    model_config = {"frozen": True}

    @field_validator("frets")
    @classmethod
    def validate_frets(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Six strings, each muted or on a fret."""
        if len(v) != 6:
            raise ValueError(f"Expected 6 strings, got {len(v)}")
        if any(f < MUTED for f in v):
            raise ValueError(f"Invalid fret in {v}")
        return v

    @property
    def base_fret(self) -> int:
        """Lowest played fret (0 for open or fully muted shapes)."""
        played = [f for f in self.frets if f != MUTED]
        return min(played) if played else 0

    @property
    def played_strings(self) -> list[int]:
        return [i for i, f in enumerate(self.frets) if f != MUTED]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "label": self.label,
            "frets": list(self.frets),
            "base_fret": self.base_fret,
            "inversion": self.inversion,
            "position_bucket": self.position_bucket,
            "is_triad": self.is_triad,
            "string_set": self.string_set,
        }
