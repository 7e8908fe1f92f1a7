"""
Key tools - MCP tools for keys, modes, scales and progressions.

Tools for browsing the circle of fifths, building triad packs for major,
minor and modal keys, spelling named scales, and resolving common
progressions in a key.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_music_atlas.constants import ErrorMessages, KeyView, MinorType, ScaleName
from chuk_mcp_music_atlas.core import (
    MODE_NAMES,
    PROGRESSIONS,
    SCALE_FORMULAS,
    MajorKey,
    build_mode_pack,
    build_pack,
    build_scale_notes,
    progression_chords,
)
from chuk_mcp_music_atlas.core.chord import find_progression
from chuk_mcp_music_atlas.core.keys import MODE_CHARACTERISTICS

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def resolve_mode(mode: str) -> int | None:
    """Mode index from '0'-'6' or a mode name ('dorian')."""
    text = mode.strip()
    if text.isdigit():
        index = int(text)
        return index if 0 <= index < len(MODE_NAMES) else None
    for index, name in enumerate(MODE_NAMES):
        if name.lower() == text.lower():
            return index
    return None


def register_key_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register key, mode, scale and progression tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_list_keys() -> str:
        """
        List the major keys around the circle of fifths.

        Returns every key in the major-scale table with its signature and
        relative minor.

        Returns:
            JSON string with list of key summaries

        Example:
            music_list_keys()
        """
        try:
            keys = sorted(
                MajorKey.all(),
                key=lambda k: (12 if k.circle_position is None else k.circle_position, k.signature),
            )
            return json.dumps(
                {
                    "status": "success",
                    "keys": [
                        {
                            "tonic": k.tonic,
                            "signature": k.signature_display,
                            "relative_minor": k.relative_minor,
                            "circle_position": k.circle_position,
                        }
                        for k in keys
                    ],
                    "count": len(keys),
                }
            )
        except Exception as e:
            logger.exception("Failed to list keys")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_list_keys"] = music_list_keys

    @mcp.tool  # type: ignore[arg-type]
    async def music_describe_key(key: str) -> str:
        """
        Get details for a major key.

        Args:
            key: Major key tonic (e.g. "Eb", "F#")

        Returns:
            JSON string with scale, signature, relative minor and
            whether the key spells with flats

        Example:
            music_describe_key(key="Eb")
        """
        try:
            major = MajorKey.lookup(key)
            if major is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.UNKNOWN_KEY.format(key=key)}
                )

            return json.dumps(
                {
                    "status": "success",
                    "key": {
                        "tonic": major.tonic,
                        "name": str(major),
                        "scale": list(major.scale),
                        "signature": major.signature,
                        "signature_display": major.signature_display,
                        "relative_minor": major.relative_minor,
                        "circle_position": major.circle_position,
                        "prefers_flats": major.prefers_flats,
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to describe key")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_describe_key"] = music_describe_key

    @mcp.tool  # type: ignore[arg-type]
    async def music_build_pack(
        key: str,
        view: str = "major",
        minor_type: str = "natural",
    ) -> str:
        """
        Build the scale and diatonic triads for a circle-of-fifths key.

        Args:
            key: Selected major root (e.g. "C")
            view: 'major' or 'relative_minor'
            minor_type: 'natural', 'harmonic' or 'melodic' (relative minor view only)

        Returns:
            JSON string with the key label, scale, roman numerals, chord
            names, triad notes and qualities

        Example:
            music_build_pack(key="C", view="relative_minor", minor_type="harmonic")
        """
        try:
            pack = build_pack(key, KeyView(view), MinorType(minor_type))
            if pack.is_empty:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.UNKNOWN_KEY.format(key=key)}
                )
            return json.dumps({"status": "success", "pack": pack.to_dict()})
        except Exception as e:
            logger.exception("Failed to build pack")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_build_pack"] = music_build_pack

    @mcp.tool  # type: ignore[arg-type]
    async def music_build_mode(root: str, mode: str) -> str:
        """
        Build the scale and triads for a mode on a root.

        Args:
            root: Mode tonic (e.g. "D")
            mode: Mode name ('dorian') or index 0-6 (0 = Ionian)

        Returns:
            JSON string with the pack and the mode's character notes

        Example:
            music_build_mode(root="D", mode="dorian")
        """
        try:
            index = resolve_mode(mode)
            if index is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.UNKNOWN_MODE.format(mode=mode)}
                )

            pack = build_mode_pack(root, index)
            if pack.is_empty:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.UNKNOWN_KEY.format(key=root)}
                )

            name = MODE_NAMES[index]
            return json.dumps(
                {
                    "status": "success",
                    "mode": name,
                    "pack": pack.to_dict(),
                    "characteristics": MODE_CHARACTERISTICS.get(name, {}),
                }
            )
        except Exception as e:
            logger.exception("Failed to build mode")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_build_mode"] = music_build_mode

    @mcp.tool  # type: ignore[arg-type]
    async def music_build_scale(root: str, scale: str) -> str:
        """
        Spell a named scale on a root.

        Args:
            root: Scale root (e.g. "A")
            scale: Scale name, e.g. 'pentatonic_minor', 'blues', 'whole_tone'

        Returns:
            JSON string with the scale notes

        Example:
            music_build_scale(root="A", scale="blues")
        """
        try:
            try:
                scale_name = ScaleName(scale)
            except ValueError:
                available = ", ".join(s.value for s in ScaleName)
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.UNKNOWN_SCALE.format(
                            scale=scale, available=available
                        ),
                    }
                )

            notes = build_scale_notes(root, scale_name)
            if not notes:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.INVALID_NOTE.format(note=root)}
                )

            return json.dumps(
                {
                    "status": "success",
                    "root": root,
                    "scale": scale_name.value,
                    "display_name": SCALE_FORMULAS[scale_name].display_name,
                    "notes": notes,
                }
            )
        except Exception as e:
            logger.exception("Failed to build scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_build_scale"] = music_build_scale

    @mcp.tool  # type: ignore[arg-type]
    async def music_list_progressions(genre: str | None = None) -> str:
        """
        List common chord progressions by genre.

        Args:
            genre: Optional genre filter ('Pop/Rock', 'Jazz', 'Blues', 'Classical')

        Returns:
            JSON string with progressions grouped by genre

        Example:
            music_list_progressions(genre="Jazz")
        """
        try:
            groups = {
                name: progressions
                for name, progressions in PROGRESSIONS.items()
                if genre is None or name.lower() == genre.lower()
            }
            return json.dumps(
                {
                    "status": "success",
                    "progressions": groups,
                    "count": sum(len(p) for p in groups.values()),
                }
            )
        except Exception as e:
            logger.exception("Failed to list progressions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_list_progressions"] = music_list_progressions

    @mcp.tool  # type: ignore[arg-type]
    async def music_progression_chords(
        key: str,
        name: str | None = None,
        roman: str | None = None,
    ) -> str:
        """
        Resolve a progression to chord names in a major key.

        Either name a known progression or pass roman numerals directly.

        Args:
            key: Major key tonic (e.g. "G")
            name: Progression name (e.g. "ii - V - I")
            roman: Space-separated roman numerals (e.g. "I vi IV V")

        Returns:
            JSON string with the roman numerals and chord names

        Example:
            music_progression_chords(key="G", name="I - V - vi - IV")
        """
        try:
            major = MajorKey.lookup(key)
            if major is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.UNKNOWN_KEY.format(key=key)}
                )

            if name is not None:
                progression = find_progression(name)
                if progression is None:
                    return json.dumps(
                        {
                            "status": "error",
                            "message": ErrorMessages.UNKNOWN_PROGRESSION.format(name=name),
                        }
                    )
                romans = [str(r) for r in progression["roman"]]  # type: ignore[attr-defined]
            else:
                romans = (roman or "").split()

            return json.dumps(
                {
                    "status": "success",
                    "key": major.tonic,
                    "roman": romans,
                    "chords": progression_chords(romans, major.tonic),
                }
            )
        except Exception as e:
            logger.exception("Failed to resolve progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_progression_chords"] = music_progression_chords

    return tools
