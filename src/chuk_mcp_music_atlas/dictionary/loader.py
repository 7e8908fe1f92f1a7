"""
Chord data loader - builds chord definitions from the library and project.

Chords can come from:
1. Built-in library (qualities.yaml expanded over its roots)
2. Project chord files (*.yaml / *.json lists of chord definitions)

Project chords replace library chords with the same chord_id.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_music_atlas.models.chord import ChordDefinition, ChordQualityDefinition

from .spelling import ChordDegree, enharmonic_alternate, spell_chord

logger = logging.getLogger(__name__)

DEFAULT_LIBRARY_PATH = Path(__file__).parent / "library"
QUALITIES_FILE = "qualities.yaml"

_PROJECT_PATTERNS = ("*.yaml", "*.yml", "*.json")


def spoken_root(root: str) -> str:
    """'C#' -> 'C sharp', 'Bb' -> 'B flat'."""
    accidentals = root[1:].replace("#", " sharp").replace("b", " flat")
    return f"{root[0]}{accidentals}"


def build_chord(root: str, quality: ChordQualityDefinition) -> ChordDefinition:
    """
    Expand one quality on one root into a chord definition.

    Raises:
        ValueError: if the quality's degree formula is malformed
    """
    degrees = [ChordDegree.parse(d) for d in quality.degrees]
    display_name = f"{root}{quality.symbol}"
    return ChordDefinition(
        chord_id=f"{root}_{quality.quality_id}",
        root=root,
        quality=quality.quality_id,
        formula_semitones=[d.semitones for d in degrees],
        display_name=display_name,
        notes=spell_chord(root, degrees),
        notes_enharmonic_alt=enharmonic_alternate(root, degrees),
        aliases=[f"{root}{alias}" for alias in quality.aliases],
        search_tokens=[
            f"{root} {quality.name}",
            f"{spoken_root(root)} {quality.name}",
        ],
        category=quality.category,
    )


class ChordLoader:
    """
    Discovers and loads chord definitions.

    The library describes qualities once and expands them over a list of
    roots; project files list concrete chords in the dataset format.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the chord loader.

        Args:
            library_path: Directory containing qualities.yaml
            project_path: Directory of project chord files
        """
        self.library_path = library_path or DEFAULT_LIBRARY_PATH
        self.project_path = project_path

    def load_qualities(self) -> tuple[list[str], list[ChordQualityDefinition]]:
        """Load the library roots and quality definitions."""
        path = self.library_path / QUALITIES_FILE
        if not path.exists():
            logger.warning("Chord quality library not found: %s", path)
            return [], []

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        roots = [str(r) for r in data.get("roots", [])]
        qualities = []
        for entry in data.get("qualities", []):
            try:
                qualities.append(ChordQualityDefinition(**self._stringify(entry)))
            except ValidationError as e:
                logger.warning("Skipping invalid quality %r: %s", entry.get("quality_id"), e)
        return roots, qualities

    def load_library(self) -> list[ChordDefinition]:
        """Expand every library quality over every library root."""
        roots, qualities = self.load_qualities()
        chords = []
        for quality in qualities:
            for root in roots:
                try:
                    chords.append(build_chord(root, quality))
                except ValueError as e:
                    logger.warning("Skipping %s%s: %s", root, quality.symbol, e)
        return chords

    def load_project(self) -> list[ChordDefinition]:
        """Load concrete chord definitions from the project directory."""
        if not self.project_path or not self.project_path.exists():
            return []

        chords: list[ChordDefinition] = []
        for pattern in _PROJECT_PATTERNS:
            for path in sorted(self.project_path.glob(pattern)):
                chords.extend(self.load_file(path))
        return chords

    def load_file(self, path: Path) -> list[ChordDefinition]:
        """
        Load chord definitions from one YAML or JSON file.

        The file holds a list of chord objects (or a mapping with a
        'chords' list). Unreadable files and invalid entries are skipped
        with a warning.
        """
        try:
            with open(path, encoding="utf-8") as f:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            logger.warning("Could not read chord file %s: %s", path, e)
            return []

        if isinstance(data, dict):
            data = data.get("chords", [])
        if not isinstance(data, list):
            logger.warning("Chord file %s must contain a list of chords", path)
            return []

        chords = []
        for entry in data:
            try:
                chords.append(ChordDefinition.model_validate(entry))
            except ValidationError as e:
                logger.warning("Skipping invalid chord in %s: %s", path, e)
        return chords

    def load_all(self) -> list[ChordDefinition]:
        """Library chords with project chords layered on top, by chord_id."""
        merged: dict[str, ChordDefinition] = {}
        for chord in self.load_library():
            merged[chord.chord_id] = chord
        for chord in self.load_project():
            merged[chord.chord_id] = chord
        logger.debug("Loaded %d chord definitions", len(merged))
        return list(merged.values())

    def _stringify(self, entry: dict[str, Any]) -> dict[str, Any]:
        """YAML reads bare 5, 7, 13 as ints; quality ids and symbols are strings."""
        data = dict(entry)
        for field in ("quality_id", "symbol"):
            if field in data and data[field] is not None:
                data[field] = str(data[field])
        for field in ("degrees", "aliases"):
            if field in data:
                data[field] = [str(v) for v in data[field]]
        return data
