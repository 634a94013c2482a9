"""
Helpers for reading the fixed-width fields of serialized keys
"""
from io import BytesIO

from .exceptions import ReadError

__all__ = ["SERIALIZED", "get_stream", "read_stream", "read_big_int", "at_end"]

SERIALIZED = bytes | bytearray | BytesIO


def get_stream(byte_stream: SERIALIZED) -> BytesIO:
    if isinstance(byte_stream, BytesIO):
        return byte_stream
    if isinstance(byte_stream, (bytes, bytearray)):
        return BytesIO(bytes(byte_stream))
    raise TypeError(f"Expected bytes or BytesIO, received {type(byte_stream).__name__}")


def read_stream(stream: BytesIO, length: int, field: str = "data") -> bytes:
    """
    Read exactly `length` bytes for the named field
    """
    data = stream.read(length)
    if len(data) < length:
        raise ReadError(f"Insufficient data for {field}: expected {length} bytes, received {len(data)}")
    return data


def read_big_int(stream: BytesIO, length: int, field: str = "data") -> int:
    return int.from_bytes(read_stream(stream, length, field), "big")


def at_end(stream: BytesIO) -> bool:
    """True if nothing is left to read. Consumes a byte otherwise."""
    return not stream.read(1)
