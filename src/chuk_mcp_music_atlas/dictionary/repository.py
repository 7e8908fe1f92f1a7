"""
Chord dictionary - indexed lookup, search and autocomplete over chords.

Three indexes are built once at construction:
- alias: normalized display name / alias / search phrase -> chord
- prefix: every prefix of those keys -> chords (for incremental typing)
- enharmonic: the same keys with the root respelled (cb <-> b, c# <-> db)

Display names are indexed first and never overwritten, so an enharmonic
respelling can not shadow the chord whose real name it is.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from chuk_mcp_music_atlas.constants import ErrorMessages
from chuk_mcp_music_atlas.core.parser import normalize_lookup_key, predict_lookup_key
from chuk_mcp_music_atlas.models.chord import ChordDefinition, SearchSuggestion

from .loader import ChordLoader

logger = logging.getLogger(__name__)


class ChordDictionaryError(Exception):
    """Raised when no chord data can be loaded."""


# Respelled roots, keyed and valued by lower-case normalized spelling
ENHARMONIC_ROOTS: dict[str, str] = {
    "cb": "b", "fb": "e",
    "b#": "c", "e#": "f",
    "c#": "db", "db": "c#",
    "d#": "eb", "eb": "d#",
    "f#": "gb", "gb": "f#",
    "g#": "ab", "ab": "g#",
    "a#": "bb", "bb": "a#",
}  # fmt: skip

# Lower is more common; unlisted qualities rank 20
QUALITY_PRIORITY: dict[str, int] = {
    "maj": 0, "min": 1, "7": 2, "m7": 3, "maj7": 4,
    "dim": 5, "aug": 6, "sus4": 7, "sus2": 8,
    "9": 9, "m9": 10, "maj9": 11,
}  # fmt: skip

# Quality spellings tried in place of the one in the query
_QUALITY_EXPANSIONS: dict[str, tuple[str, ...]] = {
    "maj": ("major", ""),
    "min": ("minor", "m", "-"),
    "m": ("min", "minor", "-"),
    "dim": ("diminished", "°", "o"),
    "aug": ("augmented", "+"),
    "7": ("dom7", "dominant7"),
    "maj7": ("major7", "Δ7"),
    "min7": ("minor7", "m7", "-7"),
}

_NOTE_LETTER_RE = re.compile(r"^[a-g]$")
_SHARP_TYPING_RE = re.compile(r"^([a-g])s(?:harp|har|ha|h)?$")
_FLAT_TYPING_RE = re.compile(r"^([a-g])f(?:lat|la|l)?$")


def split_root(key: str) -> tuple[str, str]:
    """Split a normalized key into root ('c', 'c#', 'db') and the rest."""
    if len(key) >= 2 and key[1] in "#b":
        return key[:2], key[2:]
    return key[:1], key[1:]


def enharmonic_keys(key: str) -> list[str]:
    """The key with its root respelled every way the enharmonic table allows."""
    if not key:
        return []
    root, rest = split_root(key)
    keys = []
    if root in ENHARMONIC_ROOTS:
        keys.append(ENHARMONIC_ROOTS[root] + rest)
    for spelled, target in ENHARMONIC_ROOTS.items():
        if target == root and spelled + rest not in keys:
            keys.append(spelled + rest)
    return keys


def expand_query(key: str) -> list[str]:
    """Alternative spellings of a normalized query for fuzzy matching."""
    expansions = []
    for quality, alternatives in _QUALITY_EXPANSIONS.items():
        if quality in key:
            expansions.extend(key.replace(quality, alt, 1) for alt in alternatives)

    if _NOTE_LETTER_RE.match(key):
        expansions.extend(
            f"{key}{suffix}" for suffix in ("maj", "min", "7", "m", "m7", "maj7", "#", "b")
        )

    if len(key) == 2 and _NOTE_LETTER_RE.match(key[0]):
        # "bf" is already B flat
        if key[1] == "s":
            expansions.append(f"{key[0]}#")
        elif key[1] == "f" and key[0] != "b":
            expansions.append(f"{key[0]}b")

    return expansions


class ChordDictionary:
    """
    Searchable collection of chord definitions.

    Also satisfies the ChordLookup protocol used by the transposer.
    """

    def __init__(self, chords: Iterable[ChordDefinition]):
        self._chords: list[ChordDefinition] = list(chords)
        self._by_alias: dict[str, ChordDefinition] = {}
        self._by_prefix: dict[str, dict[str, ChordDefinition]] = {}
        self._build_indexes()

    @classmethod
    def load(
        cls,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ) -> ChordDictionary:
        """
        Load library and project chords into a dictionary.

        Raises:
            ChordDictionaryError: if no chord definitions were found
        """
        chords = ChordLoader(library_path, project_path).load_all()
        if not chords:
            paths = ", ".join(str(p) for p in (library_path, project_path) if p is not None)
            raise ChordDictionaryError(
                ErrorMessages.NO_CHORD_DATA.format(paths=paths or "the built-in library")
            )
        logger.info("Chord dictionary loaded with %d chords", len(chords))
        return cls(chords)

    def __len__(self) -> int:
        return len(self._chords)

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def _build_indexes(self) -> None:
        self._by_alias.clear()
        self._by_prefix.clear()

        for chord in self._chords:
            self._index(chord, chord.display_name, overwrite=True)

        for chord in self._chords:
            for alias in [*chord.aliases, *chord.search_tokens]:
                self._index(chord, alias)
            self._index_prefixes(chord, normalize_lookup_key(chord.root))

        for chord in self._chords:
            self._index_enharmonics(chord)

    def _index(self, chord: ChordDefinition, text: str, overwrite: bool = False) -> None:
        key = normalize_lookup_key(text)
        if not key:
            return
        if overwrite:
            self._by_alias[key] = chord
        else:
            self._by_alias.setdefault(key, chord)
        self._index_prefixes(chord, key)

    def _index_prefixes(self, chord: ChordDefinition, key: str) -> None:
        for end in range(1, len(key) + 1):
            self._by_prefix.setdefault(key[:end], {}).setdefault(chord.chord_id, chord)

    def _index_enharmonics(self, chord: ChordDefinition) -> None:
        root = normalize_lookup_key(chord.root)
        display = normalize_lookup_key(chord.display_name)
        quality = display[len(root) :] if display.startswith(root) else ""
        for key in enharmonic_keys(root):
            self._index(chord, key + quality)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_all(self) -> list[ChordDefinition]:
        return list(self._chords)

    def find_by_alias(self, query: str) -> ChordDefinition | None:
        """Exact lookup by display name, alias, search phrase or respelling."""
        return self._by_alias.get(normalize_lookup_key(query))

    def find_by_name(self, name: str) -> ChordDefinition | None:
        """
        Resolve a chord name, tolerating partial typing and respelled roots.

        Tries the exact key, then the predictive form ('gsh' -> 'g#',
        'e flat minor' -> 'ebmin'), then enharmonic respellings.
        """
        exact = self.find_by_alias(name)
        if exact is not None:
            return exact

        predicted = self._by_alias.get(predict_lookup_key(name))
        if predicted is not None:
            return predicted

        for key in enharmonic_keys(normalize_lookup_key(name)):
            match = self._by_alias.get(key)
            if match is not None:
                return match
        return None

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, query: str, limit: int = 50) -> list[ChordDefinition]:
        """
        Ranked search for a free-text query.

        Candidates are gathered from exact keys, enharmonic respellings,
        prefixes, query expansions and finally substring matches, then
        sorted: exact display-name match, display names starting with the
        query, shorter names, common qualities, alphabetical.

        Example:
            [c.display_name for c in dictionary.search("gsh")[:2]]
            -> ["G#", "G#m"]
        """
        if not query.strip():
            return []

        normalized = normalize_lookup_key(query)
        predicted = predict_lookup_key(query)
        results: dict[str, ChordDefinition] = {}

        def add(chord: ChordDefinition | None) -> None:
            if chord is not None and len(results) < limit:
                results.setdefault(chord.chord_id, chord)

        def add_prefix(prefix: str) -> None:
            for chord in self._by_prefix.get(prefix, {}).values():
                if len(results) >= limit:
                    break
                add(chord)

        add(self._by_alias.get(normalized))
        add(self._by_alias.get(predicted))

        for key in enharmonic_keys(normalized):
            add(self._by_alias.get(key))

        add_prefix(normalized)
        add_prefix(predicted)

        for expansion in expand_query(normalized):
            if len(results) >= limit:
                break
            add(self._by_alias.get(expansion))
            add_prefix(expansion)

        if len(results) < limit:
            for chord in self._chords:
                if len(results) >= limit:
                    break
                if chord.chord_id in results:
                    continue
                texts = [chord.display_name, *chord.search_tokens]
                if any(normalized in normalize_lookup_key(text) for text in texts):
                    add(chord)

        return self._sort_by_relevance(list(results.values()), predicted)

    def _sort_by_relevance(
        self, chords: list[ChordDefinition], query: str
    ) -> list[ChordDefinition]:
        def rank(chord: ChordDefinition) -> tuple[bool, bool, int, int, str]:
            name = normalize_lookup_key(chord.display_name)
            return (
                name != query,
                not name.startswith(query),
                len(name),
                QUALITY_PRIORITY.get(chord.quality, 20),
                name,
            )

        return sorted(chords, key=rank)

    def get_suggestions(self, query: str, limit: int = 8) -> list[SearchSuggestion]:
        """
        Autocomplete entries for partial input.

        Typing hints come first (a bare letter, a half-typed 'sharp' or
        'flat', an enharmonic root), followed by search results with
        their notes as the hint.
        """
        q = query.strip().lower()
        if not q:
            return []

        suggestions: list[SearchSuggestion] = []
        seen: set[str] = set()

        def suggest(text: str, hint: str) -> None:
            if len(suggestions) >= limit or text.lower() in seen:
                return
            seen.add(text.lower())
            suggestions.append(SearchSuggestion(text=text, hint=hint))

        if _NOTE_LETTER_RE.match(q):
            note = q.upper()
            suggest(note, f"{note} major triad")
            suggest(f"{note}m", f"{note} minor triad")
            suggest(f"{note}7", f"{note} dominant 7th")
            suggest(f"{note}#", f"{note} sharp")
            suggest(f"{note}b", f"{note} flat")

        sharp = _SHARP_TYPING_RE.match(q)
        if sharp is not None:
            root = sharp.group(1).upper()
            suggest(f"{root}#", f"{root} sharp")
            suggest(f"{root}#m", f"{root} sharp minor")
            suggest(f"{root}#7", f"{root} sharp dominant 7")

        flat = _FLAT_TYPING_RE.match(q)
        if flat is not None:
            root = flat.group(1).upper()
            suggest(f"{root}b", f"{root} flat")
            suggest(f"{root}bm", f"{root} flat minor")
            suggest(f"{root}b7", f"{root} flat dominant 7")

        if len(q) >= 2 and q[:2] in ENHARMONIC_ROOTS:
            spelled, rest = q[:2], q[2:]
            target = ENHARMONIC_ROOTS[spelled]
            suggest(
                f"{target[0].upper()}{target[1:]}{rest}",
                f"{spelled[0].upper()}{spelled[1:]} = {target[0].upper()}{target[1:]} (enharmonic)",
            )

        remaining = limit - len(suggestions)
        if remaining > 0:
            for chord in self.search(q, limit=remaining):
                suggest(chord.display_name, " - ".join(chord.notes))

        return suggestions

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def get_categories(self) -> list[str]:
        """Sorted distinct non-empty categories."""
        return sorted({c.category for c in self._chords if c.category})

    def get_by_category(self, category: str) -> list[ChordDefinition]:
        return [c for c in self._chords if c.category == category]

    def get_by_root(self, root: str) -> list[ChordDefinition]:
        """Chords on a root or its enharmonic respelling ('Db' also finds C#)."""
        key = normalize_lookup_key(root)
        respelled = ENHARMONIC_ROOTS.get(key)
        return [
            c for c in self._chords if normalize_lookup_key(c.root) in (key, respelled)
        ]
