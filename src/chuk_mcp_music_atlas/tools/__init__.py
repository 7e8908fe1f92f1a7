"""
MCP tool implementations.

Tools are organized by domain:
- keys - Keys, modes, scales and progressions
- chords - Chord parsing, dictionary lookup, search and transposition
- guitar - Barre and triad grips
"""

from chuk_mcp_music_atlas.tools.chords import register_chord_tools
from chuk_mcp_music_atlas.tools.guitar import register_guitar_tools
from chuk_mcp_music_atlas.tools.keys import register_key_tools

__all__ = [
    "register_chord_tools",
    "register_guitar_tools",
    "register_key_tools",
]
