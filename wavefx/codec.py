# wavefx/codec.py
# Fixed-width integer <-> byte group conversions used by the WAV container.

from typing import Literal

Endianness = Literal["little", "big"]


def read_u16(data: bytes, byteorder: Endianness = "little") -> int:
    """Decode a 2-byte group as an unsigned 16-bit integer."""
    return int.from_bytes(data[:2], byteorder, signed=False)


def read_u32(data: bytes, byteorder: Endianness = "little") -> int:
    """Decode a 4-byte group as an unsigned 32-bit integer."""
    return int.from_bytes(data[:4], byteorder, signed=False)


def read_i16(data: bytes, byteorder: Endianness = "little") -> int:
    """Decode a 2-byte group as a signed (two's complement) 16-bit integer."""
    return int.from_bytes(data[:2], byteorder, signed=True)


def write_u16(value: int, byteorder: Endianness = "little") -> bytes:
    return (value & 0xFFFF).to_bytes(2, byteorder, signed=False)


def write_u32(value: int, byteorder: Endianness = "little") -> bytes:
    return (value & 0xFFFFFFFF).to_bytes(4, byteorder, signed=False)


def write_i16(value: int, byteorder: Endianness = "little") -> bytes:
    # Wrap into the signed range so the conversion is total
    wrapped: int = ((value + 0x8000) & 0xFFFF) - 0x8000
    return wrapped.to_bytes(2, byteorder, signed=True)


def tag_value(tag: bytes) -> int:
    """Numeric value of a 4-byte ASCII chunk tag, read big-endian."""
    return read_u32(tag, "big")


# Chunk tags as big-endian numbers
RIFF: int = tag_value(b"RIFF")
WAVE: int = tag_value(b"WAVE")
FMT: int = tag_value(b"fmt ")
DATA: int = tag_value(b"data")
