#!/usr/bin/env python3
"""
Async Music Atlas MCP Server using chuk-mcp-server

This server provides MCP tools for exploring music theory: keys on the
circle of fifths, diatonic triads, modes, scales, and a searchable chord
dictionary with strict spellings.

The server provides tools for:
- Browsing major keys, signatures and relative minors
- Building scale + triad packs for major, minor (natural, harmonic,
  melodic) and modal keys
- Spelling named scales and resolving common progressions in a key
- Looking up and searching chords, with predictive and enharmonic input
- Transposing chord progressions between keys
- Guitar barre and triad grips for a chord
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_music_atlas.constants import CHORDS_DIR_ENV
from chuk_mcp_music_atlas.dictionary import ChordDictionary
from chuk_mcp_music_atlas.tools import (
    register_chord_tools,
    register_guitar_tools,
    register_key_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-music-atlas")

# Paths - project chord files default to ./chords in the working directory
BASE_PATH = Path.cwd()
CHORDS_DIR = Path(os.environ.get(CHORDS_DIR_ENV, BASE_PATH / "chords"))
LIBRARY_PATH = Path(__file__).parent / "dictionary" / "library"

# Load the chord dictionary
chord_dictionary = ChordDictionary.load(
    library_path=LIBRARY_PATH,
    project_path=CHORDS_DIR,
)

# Register all tools
key_tools = register_key_tools(mcp)
chord_tools = register_chord_tools(mcp, chord_dictionary)
guitar_tools = register_guitar_tools(mcp)

# Export tool functions for direct access
music_list_keys = key_tools["music_list_keys"]
music_describe_key = key_tools["music_describe_key"]
music_build_pack = key_tools["music_build_pack"]
music_build_mode = key_tools["music_build_mode"]
music_build_scale = key_tools["music_build_scale"]
music_list_progressions = key_tools["music_list_progressions"]
music_progression_chords = key_tools["music_progression_chords"]

music_parse_chord = chord_tools["music_parse_chord"]
music_normalize_query = chord_tools["music_normalize_query"]
music_find_chord = chord_tools["music_find_chord"]
music_search_chords = chord_tools["music_search_chords"]
music_suggest_chords = chord_tools["music_suggest_chords"]
music_transpose = chord_tools["music_transpose"]

music_guitar_shapes = guitar_tools["music_guitar_shapes"]

logger.info("CHUK Music Atlas MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Chords dir: {CHORDS_DIR}")
logger.info(f"  Chords loaded: {len(chord_dictionary)}")
