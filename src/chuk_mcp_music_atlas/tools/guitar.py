"""
Guitar tools - MCP tools for chord grips in standard tuning.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_music_atlas.constants import ErrorMessages
from chuk_mcp_music_atlas.core import POSITION_BUCKETS, get_shapes_for, parse_chord_name

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_guitar_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register guitar grip tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_guitar_shapes(
        chord: str,
        position: int | None = None,
        triads_only: bool = False,
    ) -> str:
        """
        Guitar grips for a chord: E/A-shape barres and 3-string triads.

        Extended chords are played as their triad (Cmaj7 as C, Am7 as Am).
        Frets run low E to high E, with -1 for a muted string.

        Args:
            chord: Chord name, e.g. "Am", "F#", "Bb dim"
            position: Optional neck position (0, 5, 7, 9 or 12)
            triads_only: Leave out the barre grips

        Returns:
            JSON string with the grips, ordered by position

        Example:
            music_guitar_shapes(chord="Am", position=5)
        """
        try:
            parsed = parse_chord_name(chord)
            if parsed is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.NOT_A_CHORD.format(token=chord)}
                )
            if position is not None and position not in POSITION_BUCKETS:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.INVALID_POSITION.format(
                            position=position,
                            available=", ".join(str(p) for p in POSITION_BUCKETS),
                        ),
                    }
                )

            shapes = get_shapes_for(parsed.root, parsed.quality)
            if position is not None:
                shapes = [s for s in shapes if s.position_bucket == position]
            if triads_only:
                shapes = [s for s in shapes if s.is_triad]

            return json.dumps(
                {
                    "status": "success",
                    "chord": parsed.name,
                    "tuning": "EADGBE",
                    "shapes": [s.to_dict() for s in shapes],
                    "count": len(shapes),
                }
            )
        except Exception as e:
            logger.exception("Failed to find guitar shapes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_guitar_shapes"] = music_guitar_shapes

    return tools
