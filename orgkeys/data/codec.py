"""
Methods for Base58 and Base58Check encoding and decoding
"""
from orgkeys.core import DataEncodingError, XKEYS
from orgkeys.cryptography import hash256

__all__ = ["encode_base58", "decode_base58", "encode_base58check", "decode_base58check"]

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX = {char: i for i, char in enumerate(BASE58_ALPHABET)}
CHECKSUM_LENGTH = XKEYS.CHECKSUM_LENGTH


def encode_base58(data: bytes) -> str:
    """
    We return the base58 encoding of the given bytes data
    """
    n = int.from_bytes(data, byteorder="big")
    encoded = []
    while n > 0:
        n, remainder = divmod(n, 58)
        encoded.append(BASE58_ALPHABET[remainder])

    # Each leading zero byte becomes a leading '1'
    leading_zeros = len(data) - len(data.lstrip(b'\x00'))
    return "1" * leading_zeros + "".join(reversed(encoded))


def decode_base58(data: str) -> bytes:
    """
    Given a base58 encoded string, return the underlying bytes
    """
    total = 0
    for char in data:
        try:
            total = total * 58 + _BASE58_INDEX[char]
        except KeyError:
            raise DataEncodingError(f"Invalid base58 character: {char!r}") from None

    decoded = total.to_bytes((total.bit_length() + 7) // 8, "big")
    leading_ones = len(data) - len(data.lstrip("1"))
    return b'\x00' * leading_ones + decoded


def encode_base58check(data: bytes) -> str:
    """
    Given bytes data, we return the base58 encoding along with checksum
    """
    checksum = hash256(data)[:CHECKSUM_LENGTH]
    return encode_base58(data + checksum)


def decode_base58check(data: str) -> bytes:
    """
    Decode a Base58Check string and return the payload with the checksum stripped.
    Raise DataEncodingError if the checksum fails
    """
    decoded = decode_base58(data)
    if len(decoded) < CHECKSUM_LENGTH:
        raise DataEncodingError("Base58Check data shorter than its checksum")

    payload, checksum = decoded[:-CHECKSUM_LENGTH], decoded[-CHECKSUM_LENGTH:]
    if hash256(payload)[:CHECKSUM_LENGTH] != checksum:
        raise DataEncodingError("Decoded checksum does not equal given checksum")
    return payload
