"""
Header8583-MCP Server

MCP server exposing ISO 8583 header decoding as tools. Decodes the Message
Type Indicator into its version/class/function/origin meaning and lists the
data element numbers declared present by the bitmap chain.

Copyright (C) 2025 Garland Glessner (gglessner@gmail.com)

This program is free software: you can redistribute it and/or modify it under
the terms of the GNU General Public License as published by the Free Software
Foundation, either version 3 of the License, or (at your option) any later version.

This program is distributed in the hope that it will be useful, but WITHOUT ANY
WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A
PARTICULAR PURPOSE. See the GNU General Public License for more details.

You should have received a copy of the GNU General Public License along with
this program. If not, see <https://www.gnu.org/licenses/>.
"""

import json
from typing import List

from mcp.server.fastmcp import FastMCP

from header8583_mcp.models import Bitmap, ParseError, ParseResult
from header8583_mcp.parser import decode_bitmap_chain, describe_mti, parse_message
from header8583_mcp.tables import MTI_POSITIONS

# ========== Configuration ==========

SERVER_NAME = "Header8583-MCP"
OUTPUT_FORMATS = ("text", "json")
DEFAULT_MAX_BITMAPS = 0  # 0 = follow the chain until the input runs out

# ========== Create MCP Server ==========

mcp = FastMCP(
    SERVER_NAME,
    instructions=(
        "Header8583-MCP decodes the header of ISO 8583 payment messages "
        "given as ASCII text: the 4-digit MTI and the hex bitmap chain. "
        "Use iso8583_parse on a full message to get the MTI meaning and the "
        "list of data element numbers present. Use iso8583_describe_mti or "
        "iso8583_decode_bitmap to inspect one part on its own, and "
        "iso8583_lookup_tables to see every known MTI digit. Data element "
        "values themselves are not decoded."
    )
)


# ========== Helpers ==========

def _limit(max_bitmaps: int):
    """Map the tool-level cap (0 or negative = none) to the parser's."""
    return max_bitmaps if max_bitmaps > 0 else None


def _format_fields(fields: List[int]) -> str:
    """Render field numbers as a comma separated list."""
    if not fields:
        return "<none>"
    return ', '.join(str(num) for num in fields)


def _render_bitmaps(bitmaps: List[Bitmap]) -> List[str]:
    labels = ["Primary bitmap", "Secondary bitmap", "Tertiary bitmap"]
    lines = []
    for bitmap in bitmaps:
        label = (
            labels[bitmap.index] if bitmap.index < len(labels)
            else f"Bitmap #{bitmap.index + 1}"
        )
        lines.append(f"  {label}:")
        lines.append(f"    Hex         : {bitmap.hexadecimal}")
        lines.append(f"    Binary      : {bitmap.binary}")
        lines.append(
            f"    Continues   : {'Yes' if bitmap.has_continuation else 'No'}"
        )
        lines.append(f"    Fields      : {_format_fields(bitmap.fields)}")
        lines.append("")
    return lines


def _render_text(result: ParseResult) -> str:
    """Render a successful ParseResult as an aligned text report."""
    lines = [
        f"ISO 8583 Header: {result.mti}",
        f"{'=' * 50}",
        f"  MTI         : {result.mti}",
        f"  Version     : {result.version}",
        f"  Class       : {result.message_class}",
        f"  Function    : {result.function}",
        f"  Origin      : {result.origin}",
        f"",
        f"  Bitmaps     : {len(result.bitmaps)}",
        f"  Fields      : {_format_fields(result.fields)}",
        f"",
    ]
    lines.extend(_render_bitmaps(result.bitmaps))
    return '\n'.join(lines).rstrip()


def _render_error(error: ParseError) -> str:
    return f"ERROR: {error.message} [{error.kind.value}]"


# =====================================================================
#  HEADER DECODING TOOLS
# =====================================================================

@mcp.tool()
def iso8583_parse(
    message: str,
    output: str = "text",
    max_bitmaps: int = DEFAULT_MAX_BITMAPS
) -> str:
    """Decode the header of an ISO 8583 message.

    Resolves the MTI into version, message class, function and origin, then
    decodes the primary bitmap and any chained secondary/tertiary bitmaps.
    Data elements after the bitmaps are ignored.

    Args:
        message: Raw message text, e.g. "0800823A0000200000..."
        output: "text" for a readable report, "json" for structured output
        max_bitmaps: Maximum number of chained bitmaps to accept
                     (default: 0 = no limit)
    """
    if output not in OUTPUT_FORMATS:
        return f"ERROR: output must be one of {', '.join(OUTPUT_FORMATS)}"

    result = parse_message(message, max_bitmaps=_limit(max_bitmaps))

    if output == "json":
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if not result.ok:
        return _render_error(result.error)
    return _render_text(result)


@mcp.tool()
def iso8583_describe_mti(mti: str) -> str:
    """Explain a 4-digit Message Type Indicator.

    Only the first four characters are used, so a full message may be
    passed as well.

    Args:
        mti: The MTI, e.g. "0200" or "1420"
    """
    resolved = describe_mti(mti)
    if isinstance(resolved, ParseError):
        return _render_error(resolved)

    return '\n'.join([
        f"MTI {resolved['MTI']}",
        f"{'=' * 50}",
        f"  Version     : {resolved['version']}",
        f"  Class       : {resolved['class']}",
        f"  Function    : {resolved['function']}",
        f"  Origin      : {resolved['origin']}",
    ])


@mcp.tool()
def iso8583_decode_bitmap(
    bitmap_hex: str,
    max_bitmaps: int = DEFAULT_MAX_BITMAPS
) -> str:
    """Decode a bare hex bitmap chain (no MTI in front).

    Reads 16 hex characters per bitmap and keeps reading while bit 1 of
    the last bitmap is set.

    Args:
        bitmap_hex: Hex bitmap text, e.g. "F23A400108418202"
        max_bitmaps: Maximum number of chained bitmaps to accept
                     (default: 0 = no limit)
    """
    bitmaps = decode_bitmap_chain(
        (bitmap_hex or "").strip(), start=0, max_bitmaps=_limit(max_bitmaps)
    )
    if isinstance(bitmaps, ParseError):
        return _render_error(bitmaps)

    fields = [num for bitmap in bitmaps for num in bitmap.fields]
    lines = [
        f"Bitmap chain ({len(bitmaps)} "
        f"bitmap{'s' if len(bitmaps) != 1 else ''}):",
        f"  Fields      : {_format_fields(fields)}",
        "",
    ]
    lines.extend(_render_bitmaps(bitmaps))
    return '\n'.join(lines).rstrip()


@mcp.tool()
def iso8583_lookup_tables() -> str:
    """List every known MTI digit for version, class, function and origin."""
    lines = ["MTI Lookup Tables:\n"]
    for position, (name, table) in enumerate(MTI_POSITIONS):
        lines.append(f"  Position {position + 1} - {name}:")
        for digit, description in table.items():
            lines.append(f"    {digit} : {description}")
        lines.append("")
    return '\n'.join(lines).rstrip()


# =====================================================================
#  ENTRY POINT
# =====================================================================

def main():
    """Start the Header8583-MCP server with stdio transport."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
