"""
CHUK Music Atlas - a music theory engine served over MCP.

Pitch-class arithmetic, key/scale/chord construction, roman numerals,
predictive chord-name parsing, transposition and a searchable chord
dictionary.
"""

__version__ = "0.1.0"
