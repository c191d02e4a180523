"""
Header8583-MCP Header Parser

Decodes the fixed-format header of an ISO 8583 message: the 4-digit Message
Type Indicator and the chain of 64-bit bitmaps that follows it. Data element
values are not decoded.

Each stage returns either its value or a ParseError, and HeaderParser runs
the stages in order, stopping at the first error.

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

import string
from typing import Any, Dict, List, Optional, Union

from header8583_mcp.models import (
    Bitmap, ErrorKind, ParseError, ParseResult, ParseState
)
from header8583_mcp.tables import MTI_POSITIONS


MTI_LENGTH = 4
BITMAP_HEX_LENGTH = 16
BITMAP_BITS = 64

_HEX_DIGITS = frozenset(string.hexdigits)

_MTI_ERRORS = {
    'version': (ErrorKind.INVALID_VERSION, "Message version not valid."),
    'class': (ErrorKind.INVALID_CLASS, "Message class not valid."),
    'function': (ErrorKind.INVALID_FUNCTION, "Message function not valid."),
    'origin': (ErrorKind.INVALID_ORIGIN, "Message origin not valid."),
}


def normalize_input(raw_message: Any) -> str:
    """Coerce the caller's input to a trimmed string.

    None, and any object that cannot be rendered as text, become "" and
    therefore parse as an empty message.
    """
    if raw_message is None:
        return ""
    try:
        text = str(raw_message)
    except Exception:
        return ""
    return text.strip()


# =====================================================================
#  HEADER VALIDATION
# =====================================================================

def validate_header(raw: str) -> Union[str, ParseError]:
    """Check the message is non-empty and slice out the MTI.

    Args:
        raw: Trimmed message text

    Returns:
        The 4-character MTI, or a ParseError
    """
    if not raw:
        return ParseError(ErrorKind.EMPTY_MESSAGE, "ISO message cannot be empty.")

    mti = raw[:MTI_LENGTH]
    if len(mti) != MTI_LENGTH:
        return ParseError(ErrorKind.INVALID_MTI, "MTI value not valid.")
    return mti


# =====================================================================
#  MTI SEMANTICS
# =====================================================================

def resolve_mti(mti: str) -> Union[Dict[str, str], ParseError]:
    """Look up each MTI digit in its description table.

    Positions are checked in order version, class, function, origin and
    the first unknown digit ends resolution.

    Returns:
        Dict keyed 'version', 'class', 'function', 'origin', or a ParseError
    """
    descriptions = {}
    for position, (name, table) in enumerate(MTI_POSITIONS):
        description = table.get(mti[position])
        if description is None:
            kind, message = _MTI_ERRORS[name]
            return ParseError(kind, message)
        descriptions[name] = description
    return descriptions


# =====================================================================
#  BITMAP CHAIN
# =====================================================================

def hex_to_binary(hex_text: str) -> str:
    """Expand hex text to a binary string, 4 bits per character.

    The caller must have validated every character as a hex digit.
    """
    return ''.join(format(int(ch, 16), '04b') for ch in hex_text)


def decode_bitmap(hex_text: str, index: int = 0) -> Union[Bitmap, ParseError]:
    """Decode one 16-character bitmap block.

    Args:
        hex_text: The block's hex characters
        index: Position of the block in the chain; shifts field numbers
               by 64 per block

    Returns:
        The decoded Bitmap, or a ParseError
    """
    if len(hex_text) != BITMAP_HEX_LENGTH:
        return ParseError(
            ErrorKind.BITMAP_TOO_SHORT, "Bitmap(s) not valid: too short."
        )
    if not all(ch in _HEX_DIGITS for ch in hex_text):
        return ParseError(
            ErrorKind.BITMAP_NOT_HEX, "Bitmap(s) not valid: non hex."
        )

    binary = hex_to_binary(hex_text)
    base = index * BITMAP_BITS
    # Bit 1 flags the next bitmap and is never a field
    fields = [
        base + i + 1
        for i, bit in enumerate(binary)
        if bit == '1' and i > 0
    ]
    return Bitmap(index=index, hexadecimal=hex_text, binary=binary,
                  fields=fields)


def decode_bitmap_chain(raw: str, start: int = MTI_LENGTH,
                        max_bitmaps: Optional[int] = None
                        ) -> Union[List[Bitmap], ParseError]:
    """Decode the primary bitmap and every bitmap chained after it.

    Block k is read from ``start + 16*k``. Decoding continues while the
    most recent block has bit 1 set, so at least one block is always read.

    Args:
        raw: Trimmed message text
        start: Offset of the primary bitmap (after the MTI by default)
        max_bitmaps: Optional cap on chain length; None, 0 or a negative
                     value means unbounded

    Returns:
        List of Bitmap in wire order, or a ParseError
    """
    bitmaps: List[Bitmap] = []
    while True:
        offset = start + BITMAP_HEX_LENGTH * len(bitmaps)
        bitmap = decode_bitmap(
            raw[offset:offset + BITMAP_HEX_LENGTH], index=len(bitmaps)
        )
        if isinstance(bitmap, ParseError):
            return bitmap
        bitmaps.append(bitmap)

        if not bitmap.has_continuation:
            return bitmaps
        if max_bitmaps is not None and 0 < max_bitmaps <= len(bitmaps):
            return ParseError(
                ErrorKind.TOO_MANY_BITMAPS,
                f"Bitmap(s) not valid: more than {max_bitmaps} chained."
            )


# =====================================================================
#  PIPELINE
# =====================================================================

class HeaderParser:
    """Runs header validation, MTI resolution and bitmap decoding for one
    message.

    A parser instance handles a single message. ``parse()`` always returns
    a ParseResult and records the final pipeline state in ``state``.
    """

    def __init__(self, raw_message: Any, max_bitmaps: Optional[int] = None):
        self.raw = normalize_input(raw_message)
        self.max_bitmaps = max_bitmaps
        self.state = ParseState.NOT_STARTED
        self.result: Optional[ParseResult] = None

    def _fail(self, error: ParseError) -> ParseResult:
        self.state = ParseState.FAILED
        self.result = ParseResult.failure(error)
        return self.result

    def parse(self) -> ParseResult:
        """Run the pipeline once; later calls return the stored result."""
        if self.result is not None:
            return self.result

        self.state = ParseState.VALIDATING
        mti = validate_header(self.raw)
        if isinstance(mti, ParseError):
            return self._fail(mti)

        self.state = ParseState.RESOLVING_MTI
        descriptions = resolve_mti(mti)
        if isinstance(descriptions, ParseError):
            return self._fail(descriptions)

        self.state = ParseState.DECODING_BITMAPS
        bitmaps = decode_bitmap_chain(self.raw, max_bitmaps=self.max_bitmaps)
        if isinstance(bitmaps, ParseError):
            return self._fail(bitmaps)

        self.state = ParseState.SUCCEEDED
        self.result = ParseResult.success(self.raw, mti, descriptions, bitmaps)
        return self.result


def parse_message(raw_message: Any,
                  max_bitmaps: Optional[int] = None) -> ParseResult:
    """Parse an ISO 8583 message header. Never raises on bad input."""
    return HeaderParser(raw_message, max_bitmaps=max_bitmaps).parse()


def describe_mti(mti: Any) -> Union[Dict[str, str], ParseError]:
    """Validate and resolve an MTI without touching any bitmap.

    Only the first four characters of the trimmed input are considered.
    """
    checked = validate_header(normalize_input(mti))
    if isinstance(checked, ParseError):
        return checked
    resolved = resolve_mti(checked)
    if isinstance(resolved, ParseError):
        return resolved
    return dict(resolved, MTI=checked)
