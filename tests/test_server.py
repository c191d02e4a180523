"""Tests for the header8583_mcp.server tool functions."""
import json

from header8583_mcp.server import (
    iso8583_decode_bitmap,
    iso8583_describe_mti,
    iso8583_lookup_tables,
    iso8583_parse,
)

NETWORK_MSG = (
    "0800823A000020000000840000000000000004200906139000010906130420042003"
    "ÉÉÉ001"
)
SINGLE_MSG = "02007230000000000000164111111111111111000000000000010000"


class TestParseTool:
    def test_text_report(self) -> None:
        out = iso8583_parse(SINGLE_MSG)
        assert out.startswith("ISO 8583 Header: 0200")
        assert "Financial messages" in out
        assert "Primary bitmap:" in out
        assert "Secondary bitmap:" not in out
        assert "Fields      : 2, 3, 4, 7, 11, 12" in out

    def test_text_report_chain(self) -> None:
        out = iso8583_parse(NETWORK_MSG)
        assert "Bitmaps     : 3" in out
        assert "Tertiary bitmap:" in out
        assert "Network management message" in out

    def test_json(self) -> None:
        data = json.loads(iso8583_parse(SINGLE_MSG, output="json"))
        assert data["MTI"] == "0200"
        assert data["class"] == "Financial messages"
        assert len(data["bitmaps"]) == 1
        assert "err" not in data

    def test_json_error(self) -> None:
        data = json.loads(iso8583_parse("12", output="json"))
        assert data == {"err": "MTI value not valid."}

    def test_text_error(self) -> None:
        assert iso8583_parse("") == (
            "ERROR: ISO message cannot be empty. [EmptyMessage]"
        )

    def test_unknown_output(self) -> None:
        assert iso8583_parse(SINGLE_MSG, output="xml").startswith("ERROR:")

    def test_cap(self) -> None:
        out = iso8583_parse(NETWORK_MSG, max_bitmaps=2)
        assert out.startswith("ERROR:")
        assert "TooManyBitmaps" in out

    def test_negative_cap_is_unbounded(self) -> None:
        assert "Bitmaps     : 3" in iso8583_parse(NETWORK_MSG, max_bitmaps=-1)


class TestDescribeMtiTool:
    def test_describe(self) -> None:
        out = iso8583_describe_mti("1814")
        assert out.startswith("MTI 1814")
        assert "ISO 8583:1993" in out
        assert "Network management message" in out
        assert "Request response" in out
        assert "Other" in out

    def test_invalid(self) -> None:
        assert iso8583_describe_mti("0807") == (
            "ERROR: Message origin not valid. [InvalidOrigin]"
        )


class TestDecodeBitmapTool:
    def test_chain(self) -> None:
        out = iso8583_decode_bitmap("F23A4001084182020000004000000000")
        assert out.startswith("Bitmap chain (2 bitmaps):")
        assert "Secondary bitmap:" in out
        assert "Fields      : 90" in out

    def test_single(self) -> None:
        out = iso8583_decode_bitmap(" 7230000000000000 ")
        assert out.startswith("Bitmap chain (1 bitmap):")

    def test_not_hex(self) -> None:
        out = iso8583_decode_bitmap("72300000000000XY")
        assert out == "ERROR: Bitmap(s) not valid: non hex. [BitmapNotHex]"

    def test_too_short(self) -> None:
        assert "BitmapTooShort" in iso8583_decode_bitmap("")

    def test_no_fields(self) -> None:
        out = iso8583_decode_bitmap("0" * 16)
        assert "Fields      : <none>" in out
        assert "Continues   : No" in out

    def test_label_after_tertiary(self) -> None:
        chain = ("8" + "0" * 15) * 3 + "0" * 16
        out = iso8583_decode_bitmap(chain)
        assert out.startswith("Bitmap chain (4 bitmaps):")
        assert "Tertiary bitmap:" in out
        assert "  Bitmap #4:" in out


class TestLookupTablesTool:
    def test_lists_positions(self) -> None:
        out = iso8583_lookup_tables()
        assert "Position 1 - version:" in out
        assert "Position 4 - origin:" in out
        assert "4 : Other" in out


class TestLauncher:
    def test_runs_server_main(self) -> None:
        import run_server
        from header8583_mcp import server

        assert run_server.main is server.main
