"""
Ethereum address encoding

An address is the last 20 bytes of Keccak-256 over the 64-byte uncompressed public point (without the 0x04 prefix),
rendered as 0x-prefixed hex with the EIP-55 mixed-case checksum.
"""
import re

from orgkeys.core import DataEncodingError, ETH
from orgkeys.cryptography import PubKey, keccak256

__all__ = ["pubkey_to_address", "to_checksum_address", "is_checksum_address"]

_HEX_ADDRESS = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")


def to_checksum_address(address: str | bytes) -> str:
    """
    Apply EIP-55: a hex letter is uppercased when the matching nibble of keccak256(lowercase hex) is >= 8
    """
    if isinstance(address, bytes):
        if len(address) != ETH.ADDRESS_BYTES:
            raise DataEncodingError(f"Address must be {ETH.ADDRESS_BYTES} bytes")
        hex_address = address.hex()
    else:
        if not _HEX_ADDRESS.match(address):
            raise DataEncodingError(f"Not a hex address: {address}")
        hex_address = address.lower().removeprefix(ETH.PREFIX)

    address_hash = keccak256(hex_address.encode("ascii")).hex()
    checksummed = "".join(
        char.upper() if int(address_hash[i], 16) >= 8 else char
        for i, char in enumerate(hex_address)
    )
    return ETH.PREFIX + checksummed


def is_checksum_address(address: str) -> bool:
    if not _HEX_ADDRESS.match(address) or not address.startswith(ETH.PREFIX):
        return False
    return to_checksum_address(address) == address


def pubkey_to_address(pubkey: bytes | PubKey) -> str:
    """
    Accepts a PubKey or its compressed/uncompressed serialization
    """
    if not isinstance(pubkey, PubKey):
        pubkey = PubKey.from_bytes(pubkey)
    digest = keccak256(pubkey.uncompressed()[1:])
    return to_checksum_address(digest[-ETH.ADDRESS_BYTES:])
