# binary.py
# Byte-level helpers shared by the uplink decoder and the downlink encoder.

from __future__ import annotations
import struct
from typing import Iterable, Sequence, Union

ByteSeq = Union[bytes, bytearray, memoryview, Sequence[int]]

ALARM_TYPES: dict[int, str] = {
    1: "SOS",
    2: "FIRE",
    3: "SOS",
}

# 00: AS923-1, 01: AU915, 02: EU868, 03: KR920, 04: IN865, 05: US915, 06: RU864
LORAWAN_REGIONS: dict[int, str] = {
    0: "AS923-1",
    1: "AU915",
    2: "EU868",
    3: "KR920",
    4: "IN865",
    5: "US915",
    6: "RU864",
}

NOT_AVAILABLE = "N/A"

_UINT_FORMATS = {1: ">B", 2: ">H", 4: ">I"}


class FrameDecodeError(ValueError):
    """Raised when a byte slice cannot be reconstructed into a number."""


def reverse_byte_order(seq: ByteSeq) -> bytes:
    """Return a copy of *seq* with the byte order flipped (LE <-> BE)."""

    return bytes(reversed(bytes(seq)))


def bytes_to_unsigned_int(seq: ByteSeq) -> int:
    """Big-endian unsigned integer from a 1, 2 or 4 byte slice."""

    raw = bytes(seq)
    if not raw:
        raise FrameDecodeError("Byte array must have at least one element.")
    fmt = _UINT_FORMATS.get(len(raw))
    if fmt is None:
        raise FrameDecodeError("Byte array length must be 1, 2, or 4 bytes to convert to an integer.")
    return struct.unpack(fmt, raw)[0]


def bytes_to_float64_le(seq: ByteSeq) -> float:
    """Little-endian IEEE-754 double.

    Short slices are written into a zeroed 8-byte buffer, so missing
    high-order bytes read as zero.
    """

    raw = bytes(seq)
    if not raw:
        raise FrameDecodeError("Byte array must have at least one element.")
    if len(raw) > 8:
        raise FrameDecodeError(f"A double holds 8 bytes, got {len(raw)}")
    return struct.unpack("<d", raw.ljust(8, b"\x00"))[0]


def format_mac(seq: ByteSeq) -> str:
    """Render a 6-byte little-endian MAC as ``aa:bb:cc:dd:ee:ff``."""

    raw = bytes(seq)
    if len(raw) != 6:
        raise FrameDecodeError(f"MAC address must be 6 bytes, got {len(raw)}")
    return ":".join(f"{b:02x}" for b in reverse_byte_order(raw))


def alarm_type(code: int) -> str:
    return ALARM_TYPES.get(code, NOT_AVAILABLE)


def lorawan_region(code: int) -> str:
    return LORAWAN_REGIONS.get(code, NOT_AVAILABLE)


def firmware_broadcast_mode(code: int) -> str:
    """Beacon firmware mode flags: bit 0 scan/broadcast, bit 1 green/red."""

    scan_mode = "SCAN" if code & 0x01 else "BROADCAST"
    color_mode = "GREEN" if code & 0x02 else "RED"
    return f"{scan_mode}, {color_mode}"


def string_to_bytes(text: str) -> bytes:
    # one byte per character; anything outside ASCII raises UnicodeEncodeError (a ValueError)
    return text.encode("ascii")


def flatten(parts: Iterable[Union[bytes, int]]) -> bytes:
    """Join byte segments and single byte codes into one payload."""

    out = bytearray()
    for part in parts:
        if isinstance(part, int):
            out.append(part)
        else:
            out.extend(part)
    return bytes(out)
