"""
Chord tools - MCP tools for chord lookup, search and transposition.

Tools for parsing typed chord tokens, looking chords up in the chord
dictionary, autocomplete suggestions, and transposing progressions.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_music_atlas.constants import ErrorMessages
from chuk_mcp_music_atlas.core import (
    normalize_accidentals,
    normalize_search_query,
    note_to_pitch_class,
    parse_chord_name,
    semitone_delta,
    transpose_progression,
)
from chuk_mcp_music_atlas.dictionary import ChordDictionary

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_chord_tools(mcp: ChukMCPServer, dictionary: ChordDictionary) -> dict[str, Any]:
    """
    Register chord lookup and transposition tools with the MCP server.

    Args:
        mcp: The MCP server instance
        dictionary: The chord dictionary

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_parse_chord(token: str) -> str:
        """
        Split a typed chord token into root and quality.

        Understands partially typed accidentals ("gsh" = G#, "bfl7" = Bb7)
        and spelled-out words ("C sharp minor").

        Args:
            token: Chord token as typed

        Returns:
            JSON string with root, quality and full chord name

        Example:
            music_parse_chord(token="bfl7")
        """
        try:
            parsed = parse_chord_name(token)
            if parsed is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.NOT_A_CHORD.format(token=token)}
                )

            return json.dumps(
                {
                    "status": "success",
                    "root": parsed.root,
                    "quality": parsed.quality,
                    "name": parsed.name,
                }
            )
        except Exception as e:
            logger.exception("Failed to parse chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_parse_chord"] = music_parse_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_normalize_query(query: str) -> str:
        """
        Normalize free text into a chord search key.

        Args:
            query: Free text, e.g. "C sharp Minor"

        Returns:
            JSON string with the normalized key

        Example:
            music_normalize_query(query="b-flat major 7")
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "query": query,
                    "normalized": normalize_search_query(query),
                }
            )
        except Exception as e:
            logger.exception("Failed to normalize query")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_normalize_query"] = music_normalize_query

    @mcp.tool  # type: ignore[arg-type]
    async def music_find_chord(name: str) -> str:
        """
        Look up one chord by name.

        Accepts display names, aliases, partially typed accidentals and
        enharmonic roots ("Cbm" finds Bm).

        Args:
            name: Chord name

        Returns:
            JSON string with the chord definition, including strict
            notes and an optional "sounds like" spelling

        Example:
            music_find_chord(name="C#7#9")
        """
        try:
            chord = dictionary.find_by_name(name)
            if chord is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.CHORD_NOT_FOUND.format(name=name)}
                )

            return json.dumps(
                {
                    "status": "success",
                    "chord": chord.to_dict(),
                    "show_alternate": chord.needs_alternate_spelling,
                }
            )
        except Exception as e:
            logger.exception("Failed to find chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_find_chord"] = music_find_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_search_chords(
        query: str | None = None,
        category: str | None = None,
        root: str | None = None,
        limit: int = 20,
    ) -> str:
        """
        Search the chord dictionary.

        With a query, results are ranked by relevance. Category and root
        filters narrow the results (or list everything matching them when
        there is no query).

        Args:
            query: Optional free-text query
            category: Optional category ('triad', 'seventh', 'dominant'...)
            root: Optional root (enharmonic roots match too)
            limit: Maximum results

        Returns:
            JSON string with matching chords and the available categories

        Example:
            music_search_chords(query="fsharp m", limit=5)
        """
        try:
            if query:
                chords = dictionary.search(query, limit=max(limit, 50))
            elif root:
                chords = dictionary.get_by_root(root)
            elif category:
                chords = dictionary.get_by_category(category)
            else:
                chords = dictionary.get_all()

            if category:
                chords = [c for c in chords if c.category == category]
            if root:
                allowed = {c.chord_id for c in dictionary.get_by_root(root)}
                chords = [c for c in chords if c.chord_id in allowed]

            chords = chords[: max(limit, 0)]
            return json.dumps(
                {
                    "status": "success",
                    "chords": [
                        {
                            "name": c.display_name,
                            "notes": c.notes,
                            "notes_enharmonic_alt": c.notes_enharmonic_alt,
                            "category": c.category,
                        }
                        for c in chords
                    ],
                    "count": len(chords),
                    "categories": dictionary.get_categories(),
                }
            )
        except Exception as e:
            logger.exception("Failed to search chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_search_chords"] = music_search_chords

    @mcp.tool  # type: ignore[arg-type]
    async def music_suggest_chords(query: str, limit: int = 8) -> str:
        """
        Autocomplete suggestions for partial chord input.

        Args:
            query: Partial input, e.g. "gs" or "cb"
            limit: Maximum suggestions

        Returns:
            JSON string with suggestion text and hints

        Example:
            music_suggest_chords(query="gs")
        """
        try:
            suggestions = dictionary.get_suggestions(query, limit=limit)
            return json.dumps(
                {
                    "status": "success",
                    "suggestions": [s.model_dump() for s in suggestions],
                    "count": len(suggestions),
                }
            )
        except Exception as e:
            logger.exception("Failed to suggest chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_suggest_chords"] = music_suggest_chords

    @mcp.tool  # type: ignore[arg-type]
    async def music_transpose(progression: str, from_key: str, to_key: str) -> str:
        """
        Transpose a chord progression to another key.

        Tokens that are not chords are passed through unchanged. Chords
        are spelled from the dictionary when it knows them.

        Args:
            progression: Space-separated chords, e.g. "C G Am F"
            from_key: Current key tonic
            to_key: Destination key tonic (flat keys spell with flats)

        Returns:
            JSON string with the transposed chords and their notes

        Example:
            music_transpose(progression="C G Am F", from_key="C", to_key="Eb")
        """
        try:
            for key in (from_key, to_key):
                if note_to_pitch_class(normalize_accidentals(key.strip())) is None:
                    return json.dumps(
                        {"status": "error", "message": ErrorMessages.INVALID_NOTE.format(note=key)}
                    )

            chords = transpose_progression(progression, from_key, to_key, lookup=dictionary)
            return json.dumps(
                {
                    "status": "success",
                    "from_key": from_key,
                    "to_key": to_key,
                    "semitones": semitone_delta(from_key, to_key),
                    "chords": [c.to_dict() for c in chords],
                }
            )
        except Exception as e:
            logger.exception("Failed to transpose progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_transpose"] = music_transpose

    return tools
