"""
Header8583-MCP Lookup Tables

Static descriptions for the four digit positions of an ISO 8583 Message
Type Indicator. The tables are read-only and shared by every parse.

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

from types import MappingProxyType
from typing import Mapping


VERSIONS: Mapping[str, str] = MappingProxyType({
    '0': "ISO 8583:1987",
    '1': "ISO 8583:1993",
    '2': "ISO 8583:2003",
    '3': "Reserved by ISO",
    '4': "Reserved by ISO",
    '5': "Reserved by ISO",
    '6': "Reserved by ISO",
    '7': "Reserved by ISO",
    '8': "National use",
    '9': "Private use",
})

CLASSES: Mapping[str, str] = MappingProxyType({
    '0': "Reserved by ISO",
    '1': "Authorization message",
    '2': "Financial messages",
    '3': "File actions message",
    '4': "Reversal and chargeback messages",
    '5': "Reconciliation message",
    '6': "Administrative message",
    '7': "Fee collection messages",
    '8': "Network management message",
    '9': "Reserved by ISO",
})

FUNCTIONS: Mapping[str, str] = MappingProxyType({
    '0': "Request",
    '1': "Request response",
    '2': "Advice",
    '3': "Advice response",
    '4': "Notification",
    '5': "Notification acknowledgement",
    '6': "Instruction",
    '7': "Instruction acknowledgement",
    '8': "Reserved for ISO use",
    '9': "Reserved for ISO use",
})

# Digits 5-9 are undefined for the origin position
ORIGINS: Mapping[str, str] = MappingProxyType({
    '0': "Acquirer",
    '1': "Acquirer repeat",
    '2': "Issuer",
    '3': "Issuer repeat",
    '4': "Other",
})

# MTI position -> (name, table), in resolution order
MTI_POSITIONS = (
    ('version', VERSIONS),
    ('class', CLASSES),
    ('function', FUNCTIONS),
    ('origin', ORIGINS),
)
