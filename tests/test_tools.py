"""
Tests for MCP tools.

Tests the MCP tool implementations for keys, modes, scales, progressions,
chord lookup and transposition.
"""

import json

import pytest

from chuk_mcp_music_atlas.dictionary import ChordDictionary
from chuk_mcp_music_atlas.server import build_parser
from chuk_mcp_music_atlas.tools.chords import register_chord_tools
from chuk_mcp_music_atlas.tools.guitar import register_guitar_tools
from chuk_mcp_music_atlas.tools.keys import register_key_tools, resolve_mode


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def key_tools() -> dict:
    """Key tools registered on a mock server."""
    return register_key_tools(MockMCPServer("test"))


@pytest.fixture
def guitar_tools() -> dict:
    """Guitar tools registered on a mock server."""
    return register_guitar_tools(MockMCPServer("test"))


@pytest.fixture
def chord_tools(chord_dictionary: ChordDictionary) -> dict:
    """Chord tools registered on a mock server."""
    return register_chord_tools(MockMCPServer("test"), chord_dictionary)


class TestRegistration:
    """Tests for tool registration."""

    def test_tools_are_registered_on_server(self, chord_dictionary: ChordDictionary) -> None:
        """Every returned tool is also registered with the server."""
        mcp = MockMCPServer("test")
        tools = {
            **register_key_tools(mcp),
            **register_chord_tools(mcp, chord_dictionary),
            **register_guitar_tools(mcp),
        }
        assert set(tools) == set(mcp.tools)
        assert len(tools) == 14

    def test_resolve_mode(self) -> None:
        """Modes resolve by name or index."""
        assert resolve_mode("dorian") == 1
        assert resolve_mode("Locrian") == 6
        assert resolve_mode("0") == 0
        assert resolve_mode("7") is None
        assert resolve_mode("bebop") is None


class TestKeyTools:
    """Tests for key tools."""

    @pytest.mark.asyncio
    async def test_list_keys(self, key_tools: dict) -> None:
        """All keys are listed starting from C."""
        data = json.loads(await key_tools["music_list_keys"]())
        assert data["status"] == "success"
        assert data["count"] == 15
        assert data["keys"][0]["tonic"] == "C"

    @pytest.mark.asyncio
    async def test_describe_key(self, key_tools: dict) -> None:
        """Describe a flat key."""
        data = json.loads(await key_tools["music_describe_key"](key="Eb"))
        assert data["status"] == "success"
        assert data["key"]["signature_display"] == "3♭"
        assert data["key"]["relative_minor"] == "C"
        assert data["key"]["prefers_flats"] is True

    @pytest.mark.asyncio
    async def test_describe_unknown_key(self, key_tools: dict) -> None:
        """Unknown keys are an error."""
        data = json.loads(await key_tools["music_describe_key"](key="H"))
        assert data["status"] == "error"
        assert "Unknown key" in data["message"]

    @pytest.mark.asyncio
    async def test_build_pack(self, key_tools: dict) -> None:
        """Relative harmonic minor of C."""
        result = await key_tools["music_build_pack"](
            key="C",
            view="relative_minor",
            minor_type="harmonic",
        )
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["pack"]["key_label"] == "A Harmonic Minor"
        assert data["pack"]["scale"][-1] == "G#"

    @pytest.mark.asyncio
    async def test_build_pack_bad_view(self, key_tools: dict) -> None:
        """Invalid selectors are reported as errors."""
        data = json.loads(await key_tools["music_build_pack"](key="C", view="sideways"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_build_pack_unknown_key(self, key_tools: dict) -> None:
        """Unknown keys are an error."""
        data = json.loads(await key_tools["music_build_pack"](key="Xb"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_build_mode(self, key_tools: dict) -> None:
        """D Dorian with its characteristics."""
        data = json.loads(await key_tools["music_build_mode"](root="D", mode="dorian"))
        assert data["status"] == "success"
        assert data["mode"] == "Dorian"
        assert data["pack"]["scale"] == ["D", "E", "F", "G", "A", "B", "C"]
        assert data["characteristics"]["family"] == "Minor"

    @pytest.mark.asyncio
    async def test_build_mode_unknown(self, key_tools: dict) -> None:
        """Unknown modes are an error."""
        data = json.loads(await key_tools["music_build_mode"](root="D", mode="9"))
        assert data["status"] == "error"
        assert "Unknown mode" in data["message"]

    @pytest.mark.asyncio
    async def test_build_scale(self, key_tools: dict) -> None:
        """A minor pentatonic."""
        data = json.loads(
            await key_tools["music_build_scale"](root="A", scale="pentatonic_minor")
        )
        assert data["status"] == "success"
        assert data["notes"] == ["A", "C", "D", "E", "G"]
        assert data["display_name"] == "Minor Pentatonic"

    @pytest.mark.asyncio
    async def test_build_scale_unknown(self, key_tools: dict) -> None:
        """Unknown scales list what is available."""
        data = json.loads(await key_tools["music_build_scale"](root="A", scale="bogus"))
        assert data["status"] == "error"
        assert "blues" in data["message"]

    @pytest.mark.asyncio
    async def test_build_scale_bad_root(self, key_tools: dict) -> None:
        """Invalid roots are an error."""
        data = json.loads(await key_tools["music_build_scale"](root="H", scale="major"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_list_progressions(self, key_tools: dict) -> None:
        """Progressions can be filtered by genre."""
        data = json.loads(await key_tools["music_list_progressions"](genre="jazz"))
        assert data["status"] == "success"
        assert list(data["progressions"]) == ["Jazz"]
        assert data["count"] == 3

    @pytest.mark.asyncio
    async def test_progression_by_name(self, key_tools: dict) -> None:
        """Named progressions resolve in a key."""
        data = json.loads(
            await key_tools["music_progression_chords"](key="G", name="I - V - vi - IV")
        )
        assert data["status"] == "success"
        assert data["chords"] == ["G", "D", "Em", "C"]

    @pytest.mark.asyncio
    async def test_progression_by_roman(self, key_tools: dict) -> None:
        """Roman numerals resolve directly."""
        data = json.loads(await key_tools["music_progression_chords"](key="C", roman="ii V I"))
        assert data["chords"] == ["Dm", "G", "C"]

    @pytest.mark.asyncio
    async def test_progression_unknown(self, key_tools: dict) -> None:
        """Unknown progressions and keys are errors."""
        data = json.loads(await key_tools["music_progression_chords"](key="C", name="nope"))
        assert data["status"] == "error"
        data = json.loads(await key_tools["music_progression_chords"](key="H", roman="I"))
        assert data["status"] == "error"


class TestChordTools:
    """Tests for chord tools."""

    @pytest.mark.asyncio
    async def test_parse_chord(self, chord_tools: dict) -> None:
        """Half-typed tokens parse."""
        data = json.loads(await chord_tools["music_parse_chord"](token="bfl7"))
        assert data["status"] == "success"
        assert data["root"] == "Bb"
        assert data["quality"] == "7"
        assert data["name"] == "Bb7"

    @pytest.mark.asyncio
    async def test_parse_spelled_out_chord(self, chord_tools: dict) -> None:
        """Names written in words come back as compact symbols."""
        data = json.loads(await chord_tools["music_parse_chord"](token="C sharp minor"))
        assert data["status"] == "success"
        assert data["quality"] == "m"
        assert data["name"] == "C#m"

    @pytest.mark.asyncio
    async def test_parse_not_a_chord(self, chord_tools: dict) -> None:
        """Non-chords are an error."""
        data = json.loads(await chord_tools["music_parse_chord"](token="N.C."))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_normalize_query(self, chord_tools: dict) -> None:
        """Queries normalize to a search key."""
        data = json.loads(await chord_tools["music_normalize_query"](query="C sharp Minor"))
        assert data["normalized"] == "c#m"

    @pytest.mark.asyncio
    async def test_find_chord(self, chord_tools: dict) -> None:
        """A double-sharp chord carries its alternate spelling."""
        data = json.loads(await chord_tools["music_find_chord"](name="C#7#9"))
        assert data["status"] == "success"
        assert data["chord"]["notes"] == ["C#", "E#", "G#", "B", "D##"]
        assert data["show_alternate"] is True

    @pytest.mark.asyncio
    async def test_find_chord_missing(self, chord_tools: dict) -> None:
        """Unknown chords are an error."""
        data = json.loads(await chord_tools["music_find_chord"](name="Hm"))
        assert data["status"] == "error"
        assert "not found" in data["message"]

    @pytest.mark.asyncio
    async def test_search_chords(self, chord_tools: dict) -> None:
        """Search ranks the intended chord first."""
        data = json.loads(await chord_tools["music_search_chords"](query="gsh", limit=5))
        assert data["status"] == "success"
        assert data["count"] <= 5
        assert data["chords"][0]["name"] == "G#"
        assert "triad" in data["categories"]

    @pytest.mark.asyncio
    async def test_search_by_filters(self, chord_tools: dict) -> None:
        """Filters without a query list matching chords."""
        data = json.loads(
            await chord_tools["music_search_chords"](category="triad", root="C")
        )
        assert data["count"] == 4
        assert {c["name"] for c in data["chords"]} == {"C", "Cm", "Cdim", "Caug"}

    @pytest.mark.asyncio
    async def test_search_negative_limit(self, chord_tools: dict) -> None:
        """A negative limit returns nothing."""
        data = json.loads(await chord_tools["music_search_chords"](query="C", limit=-1))
        assert data["status"] == "success"
        assert data["chords"] == []
        assert data["count"] == 0

    @pytest.mark.asyncio
    async def test_suggest_chords(self, chord_tools: dict) -> None:
        """Suggestions for sharp typing."""
        data = json.loads(await chord_tools["music_suggest_chords"](query="gs"))
        assert data["status"] == "success"
        assert data["suggestions"][0] == {"text": "G#", "hint": "G sharp"}

    @pytest.mark.asyncio
    async def test_transpose(self, chord_tools: dict) -> None:
        """Transposed chords are spelled from the dictionary."""
        result = await chord_tools["music_transpose"](
            progression="C G Am F",
            from_key="C",
            to_key="D",
        )
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["semitones"] == 2
        assert [c["name"] for c in data["chords"]] == ["D", "A", "Bm", "G"]
        assert data["chords"][0]["notes"] == ["D", "F#", "A"]
        assert data["chords"][2]["notes"] == ["B", "D", "F#"]

    @pytest.mark.asyncio
    async def test_transpose_invalid_key(self, chord_tools: dict) -> None:
        """Invalid keys are an error."""
        data = json.loads(
            await chord_tools["music_transpose"](progression="C G", from_key="H", to_key="D")
        )
        assert data["status"] == "error"
        assert "Invalid note" in data["message"]


class TestGuitarTools:
    """Tests for guitar tools."""

    @pytest.mark.asyncio
    async def test_open_position(self, guitar_tools: dict) -> None:
        """The open position of Am includes the open A-shape."""
        data = json.loads(await guitar_tools["music_guitar_shapes"](chord="Am", position=0))
        assert data["status"] == "success"
        assert data["chord"] == "Am"
        assert data["count"] == len(data["shapes"])
        assert all(s["position_bucket"] == 0 for s in data["shapes"])
        assert [-1, 0, 2, 2, 1, 0] in [s["frets"] for s in data["shapes"]]

    @pytest.mark.asyncio
    async def test_triads_only(self, guitar_tools: dict) -> None:
        """Barres can be left out, and spelled-out names are accepted."""
        result = await guitar_tools["music_guitar_shapes"](
            chord="C sharp minor",
            triads_only=True,
        )
        data = json.loads(result)
        assert data["chord"] == "C#m"
        assert data["count"] > 0
        assert all(s["is_triad"] for s in data["shapes"])

    @pytest.mark.asyncio
    async def test_invalid_position(self, guitar_tools: dict) -> None:
        """Positions outside the neck buckets are an error."""
        data = json.loads(await guitar_tools["music_guitar_shapes"](chord="C", position=3))
        assert data["status"] == "error"
        assert "Invalid neck position" in data["message"]

    @pytest.mark.asyncio
    async def test_not_a_chord(self, guitar_tools: dict) -> None:
        """Non-chords are an error."""
        data = json.loads(await guitar_tools["music_guitar_shapes"](chord="N.C."))
        assert data["status"] == "error"

class TestServerArguments:
    """Tests for the command line parser."""

    def test_defaults(self) -> None:
        """Stdio on port 8000 with the working-directory chords."""
        args = build_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.port == 8000
        assert args.chords_dir is None
        assert args.debug is False

    def test_http_with_chords_dir(self) -> None:
        """Options for an http server with project chords."""
        args = build_parser().parse_args(
            ["--transport", "http", "--port", "9000", "--chords-dir", "my_chords"]
        )
        assert args.transport == "http"
        assert args.port == 9000
        assert args.chords_dir == "my_chords"
