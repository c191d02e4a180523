"""
Header8583-MCP Result Types

Typed values produced by the header pipeline: the error taxonomy, decoded
bitmap blocks, and the aggregate parse result.

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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(Enum):
    """Reason a header could not be decoded."""

    EMPTY_MESSAGE = "EmptyMessage"
    INVALID_MTI = "InvalidMTI"
    INVALID_VERSION = "InvalidVersion"
    INVALID_CLASS = "InvalidClass"
    INVALID_FUNCTION = "InvalidFunction"
    INVALID_ORIGIN = "InvalidOrigin"
    BITMAP_TOO_SHORT = "BitmapTooShort"
    BITMAP_NOT_HEX = "BitmapNotHex"
    TOO_MANY_BITMAPS = "TooManyBitmaps"


class ParseState(Enum):
    """Progress of a single parse through the pipeline."""

    NOT_STARTED = "not_started"
    VALIDATING = "validating"
    RESOLVING_MTI = "resolving_mti"
    DECODING_BITMAPS = "decoding_bitmaps"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ParseError:
    """A terminal pipeline failure."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Bitmap:
    """One decoded 64-bit bitmap block.

    Attributes:
        index: Position of the block in the chain (0 = primary)
        hexadecimal: The 16 hex characters as they appeared on the wire
        binary: 64-character expansion of the hex text
        fields: Field numbers flagged present by this block, ascending
    """

    index: int
    hexadecimal: str
    binary: str
    fields: List[int] = field(default_factory=list)

    @property
    def has_continuation(self) -> bool:
        """True when bit 1 announces a further chained bitmap."""
        return self.binary[0] == '1'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hexadecimal': self.hexadecimal,
            'binary': self.binary,
            'fields': list(self.fields),
        }


@dataclass(frozen=True)
class ParseResult:
    """Outcome of one header parse.

    Either every header attribute is populated and ``error`` is None, or
    ``error`` is set and every other attribute is None. Use ``success()``
    and ``failure()`` rather than the constructor.
    """

    raw: Optional[str] = None
    mti: Optional[str] = None
    version: Optional[str] = None
    message_class: Optional[str] = None
    function: Optional[str] = None
    origin: Optional[str] = None
    bitmaps: Optional[List[Bitmap]] = None
    error: Optional[ParseError] = None

    @classmethod
    def success(cls, raw: str, mti: str, descriptions: Dict[str, str],
                bitmaps: List[Bitmap]) -> "ParseResult":
        return cls(
            raw=raw,
            mti=mti,
            version=descriptions['version'],
            message_class=descriptions['class'],
            function=descriptions['function'],
            origin=descriptions['origin'],
            bitmaps=list(bitmaps),
        )

    @classmethod
    def failure(cls, error: ParseError) -> "ParseResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def fields(self) -> List[int]:
        """All field numbers present across the bitmap chain, in order."""
        if not self.bitmaps:
            return []
        return [num for bitmap in self.bitmaps for num in bitmap.fields]

    def to_dict(self) -> Dict[str, Any]:
        """Render as a plain dict.

        Success uses the keys raw, MTI, version, class, function, origin
        and bitmaps. Failure is a single ``{"err": description}`` entry.
        """
        if self.error is not None:
            return {'err': self.error.message}
        return {
            'raw': self.raw,
            'MTI': self.mti,
            'version': self.version,
            'class': self.message_class,
            'function': self.function,
            'origin': self.origin,
            'bitmaps': [b.to_dict() for b in self.bitmaps],
        }
