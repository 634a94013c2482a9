"""
The reference constants for derivation, encoding and seeds
"""
from typing import Final

__all__ = ["ECC", "WALLET", "XKEYS", "ORG", "ETH"]


class ECC:
    COORD_BYTES: Final[int] = 32
    PRIVKEY_BYTES: Final[int] = 32
    COMPRESSED_BYTES: Final[int] = 33


class WALLET:
    """
    BIP39 parameters. Allowed strengths are entropy bit lengths, mapping to 12/15/18/21/24 word phrases
    """
    LANGUAGE: Final[str] = "english"
    STRENGTHS: Final[tuple] = (128, 160, 192, 224, 256)
    DEFAULT_STRENGTH: Final[int] = 128


class XKEYS:
    """
    Constants related to the extended public and private keys
    """
    SEED_KEY: Final[bytes] = b'Bitcoin seed'
    CHAIN_LENGTH: Final[int] = 32
    FINGERPRINT_LENGTH: Final[int] = 4
    SERIAL_LENGTH: Final[int] = 78
    CHECKSUM_LENGTH: Final[int] = 4
    MAX_DEPTH: Final[int] = 255

    # BIP32 seed bounds (128 to 512 bits)
    MIN_SEED_BYTES: Final[int] = 16
    MAX_SEED_BYTES: Final[int] = 64

    # Version bytes for different key types
    MAINNET_PRIVATE: Final[bytes] = bytes.fromhex("0488ade4")
    MAINNET_PUBLIC: Final[bytes] = bytes.fromhex("0488b21e")
    TESTNET_PRIVATE: Final[bytes] = bytes.fromhex("04358394")
    TESTNET_PUBLIC: Final[bytes] = bytes.fromhex("043587cf")

    # Hardened derivation threshold
    HARDENED_OFFSET: Final[int] = 0x80000000
    MAX_INDEX: Final[int] = 0xffffffff


class ORG:
    """
    Prefixes for the organizational index hashes and the fixed BIP44 levels of the path templates
    """
    ENTITY_PREFIX: Final[str] = "ENTITY:"
    DEPARTMENT_PREFIX: Final[str] = "DEPT:"
    ROLE_PREFIX: Final[str] = "ROLE:"
    SEPARATOR: Final[str] = ":"
    INDEX_BYTES: Final[int] = 4

    PURPOSE: Final[int] = 44
    COIN_TYPE: Final[int] = 60  # Ether
    CHANGE: Final[int] = 0


class ETH:
    """
    Ethereum address format
    """
    PREFIX: Final[str] = "0x"
    ADDRESS_BYTES: Final[int] = 20
