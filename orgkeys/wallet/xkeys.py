"""
Extended Keys (xpub/xprv)
Implements BIP32 hierarchical deterministic key derivation and the versioned Base58Check serialization

    version (4) || depth (1) || parent fingerprint (4) || child number (4) || chain code (32) || key data (33)

Private key data is serialized as 0x00 || 32-byte scalar, public key data as the 33-byte compressed point.
"""
import json
from dataclasses import dataclass
from functools import cached_property
from io import BytesIO

from orgkeys.core import ECC, XKEYS, ECCError, ExtendedKeyError, HardenedFromPublicOnlyError, InvalidSeedError, \
    PrimitiveFailureError, at_end, get_stream, read_stream, read_big_int
from orgkeys.cryptography import SECP256K1, PubKey, hash160, hmac_sha512
from orgkeys.data import decode_base58check, encode_base58check
from orgkeys.wallet.indices import DerivationIndex

__all__ = ["ExtendedKey"]

PRIVATE_VERSIONS = {XKEYS.MAINNET_PRIVATE: XKEYS.MAINNET_PUBLIC, XKEYS.TESTNET_PRIVATE: XKEYS.TESTNET_PUBLIC}
PUBLIC_VERSIONS = set(PRIVATE_VERSIONS.values())
ORDER = SECP256K1.order
NULL_FINGERPRINT = b'\x00' * XKEYS.FINGERPRINT_LENGTH


@dataclass(frozen=True, eq=False, repr=False)
class ExtendedKey:
    """
    Immutable BIP32 extended key. Deriving a child returns a new ExtendedKey and leaves the parent untouched.

    Args:
        key_data: 32-byte private scalar or 33-byte compressed public key
        chain_code: 32-byte chain code
        depth: Depth in the tree, 0 for the master key
        parent_fingerprint: First 4 bytes of HASH160 of the parent public key
        child_number: Index this key was derived at
        version: Version bytes, which also decide xprv vs xpub and mainnet vs testnet
    """
    key_data: bytes
    chain_code: bytes
    depth: int
    parent_fingerprint: bytes
    child_number: int
    version: bytes = XKEYS.MAINNET_PRIVATE

    def __post_init__(self):
        if len(self.chain_code) != XKEYS.CHAIN_LENGTH:
            raise ExtendedKeyError("Chain code must be 32 bytes")
        if len(self.parent_fingerprint) != XKEYS.FINGERPRINT_LENGTH:
            raise ExtendedKeyError("Parent fingerprint must be 4 bytes")
        if not 0 <= self.depth <= XKEYS.MAX_DEPTH:
            raise ExtendedKeyError(f"Depth {self.depth} outside [0, {XKEYS.MAX_DEPTH}]")
        DerivationIndex.from_raw(self.child_number)

        if self.version in PRIVATE_VERSIONS:
            if len(self.key_data) != ECC.PRIVKEY_BYTES:
                raise ExtendedKeyError("Private extended key requires 32 bytes of key data")
            if not 0 < int.from_bytes(self.key_data, "big") < ORDER:
                raise ExtendedKeyError("Private key outside [1, n-1]")
        elif self.version in PUBLIC_VERSIONS:
            if len(self.key_data) != ECC.COMPRESSED_BYTES or self.key_data[0] not in (2, 3):
                raise ExtendedKeyError("Public extended key requires a 33-byte compressed public key")
        else:
            raise ExtendedKeyError(f"Unknown extended key version: {self.version.hex()}")

    # --- OVERRIDES --- #
    def __eq__(self, other) -> bool:
        """
        Two ExtendedKey objects are equal if and only if their serialized bytes are equal
        """
        if not isinstance(other, ExtendedKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        # Never render private key material
        kind = "xprv" if self.is_private else "xpub"
        return (f"ExtendedKey({kind}, depth={self.depth}, child_number={self.child_number}, "
                f"fingerprint={self.fingerprint().hex()})")

    # --- CONSTRUCTORS --- #
    @classmethod
    def from_master_seed(cls, seed: bytes, testnet: bool = False) -> "ExtendedKey":
        """
        BIP32 master key: I = HMAC-SHA512(key="Bitcoin seed", data=seed), private key = I_L, chain code = I_R
        """
        if not isinstance(seed, (bytes, bytearray)):
            raise InvalidSeedError(f"Seed must be bytes, received {type(seed).__name__}")
        if not XKEYS.MIN_SEED_BYTES <= len(seed) <= XKEYS.MAX_SEED_BYTES:
            raise InvalidSeedError(
                f"Seed must be between {XKEYS.MIN_SEED_BYTES} and {XKEYS.MAX_SEED_BYTES} bytes, got {len(seed)}")

        seed_hash = hmac_sha512(key=XKEYS.SEED_KEY, message=bytes(seed))
        privkey, chain_code = seed_hash[:32], seed_hash[32:]
        if not 0 < int.from_bytes(privkey, "big") < ORDER:
            raise InvalidSeedError("Seed produces an invalid master key")

        version = XKEYS.TESTNET_PRIVATE if testnet else XKEYS.MAINNET_PRIVATE
        return cls(privkey, chain_code, depth=0, parent_fingerprint=NULL_FINGERPRINT, child_number=0,
                   version=version)

    @classmethod
    def from_serial(cls, byte_stream: bytes | BytesIO) -> "ExtendedKey":
        """
        Parse the 78-byte serialization (no checksum)
        """
        stream = get_stream(byte_stream)

        version = read_stream(stream, 4, "version")
        depth = read_big_int(stream, 1, "depth")
        parent_fingerprint = read_stream(stream, 4, "parent_fingerprint")
        child_number = read_big_int(stream, 4, "child_number")
        chain_code = read_stream(stream, 32, "chain_code")
        key_data = read_stream(stream, 33, "key_data")
        if not at_end(stream):
            raise ExtendedKeyError("Trailing data after extended key")

        if version in PRIVATE_VERSIONS:
            if key_data[0] != 0:
                raise ExtendedKeyError("Private key data must be prefixed with 0x00")
            key_data = key_data[1:]
        elif version in PUBLIC_VERSIONS:
            # Point must decompress onto the curve
            try:
                PubKey.from_bytes(key_data)
            except ECCError as e:
                raise ExtendedKeyError(f"Invalid public key in extended key: {e}") from e

        if depth == 0 and (parent_fingerprint != NULL_FINGERPRINT or child_number != 0):
            raise ExtendedKeyError("Master key with non-zero parent fingerprint or child number")

        return cls(key_data, chain_code, depth, parent_fingerprint, child_number, version)

    @classmethod
    def from_base58(cls, serialized: str) -> "ExtendedKey":
        """
        Given an xprv/xpub string, we verify the checksum and parse the payload
        """
        payload = decode_base58check(serialized)
        if len(payload) != XKEYS.SERIAL_LENGTH:
            raise ExtendedKeyError(
                f"Extended key payload must be {XKEYS.SERIAL_LENGTH} bytes, received {len(payload)}")
        return cls.from_serial(payload)

    # --- PROPERTIES --- #
    @property
    def is_private(self) -> bool:
        return self.version in PRIVATE_VERSIONS

    @property
    def is_public(self) -> bool:
        return not self.is_private

    @property
    def is_testnet(self) -> bool:
        return self.version in (XKEYS.TESTNET_PRIVATE, XKEYS.TESTNET_PUBLIC)

    @cached_property
    def pubkey(self) -> PubKey:
        if self.is_private:
            return PubKey(int.from_bytes(self.key_data, "big"))
        return PubKey.from_bytes(self.key_data)

    @property
    def public_key(self) -> bytes:
        """Compressed SEC1 public key"""
        return self.key_data if self.is_public else self.pubkey.compressed()

    @property
    def private_key(self) -> bytes:
        if not self.is_private:
            raise ExtendedKeyError("Public extended key holds no private key")
        return self.key_data

    # --- METHODS --- #
    def to_bytes(self) -> bytes:
        key_data = b'\x00' + self.key_data if self.is_private else self.key_data
        return b''.join([
            self.version,
            self.depth.to_bytes(1, "big"),
            self.parent_fingerprint,
            self.child_number.to_bytes(4, "big"),
            self.chain_code,
            key_data
        ])

    def to_base58(self) -> str:
        """The xprv.../xpub... string"""
        return encode_base58check(self.to_bytes())

    def identifier(self) -> bytes:
        return hash160(self.public_key)

    def fingerprint(self) -> bytes:
        return self.identifier()[:XKEYS.FINGERPRINT_LENGTH]

    def to_public(self) -> "ExtendedKey":
        """
        Strip the private scalar, keeping chain code, position and the public point
        """
        if self.is_public:
            return self
        return ExtendedKey(
            key_data=self.public_key,
            chain_code=self.chain_code,
            depth=self.depth,
            parent_fingerprint=self.parent_fingerprint,
            child_number=self.child_number,
            version=PRIVATE_VERSIONS[self.version]
        )

    def derive_child(self, index: int) -> "ExtendedKey":
        """
        Derive the child at the given index. Hardened indices need the private key.
        """
        index = DerivationIndex.from_raw(index)
        if self.depth == XKEYS.MAX_DEPTH:
            raise ExtendedKeyError("Maximum depth reached")

        if index.is_hardened:
            if self.is_public:
                raise HardenedFromPublicOnlyError(f"Cannot derive hardened child {index} from a public key")
            data = b'\x00' + self.key_data + index.to_bytes(4, "big")
        else:
            data = self.public_key + index.to_bytes(4, "big")

        key_hash = hmac_sha512(key=self.chain_code, message=data)
        tweak, child_chain_code = int.from_bytes(key_hash[:32], "big"), key_hash[32:]

        # BIP32 would skip to the next index here. We report the failure instead.
        if tweak >= ORDER:
            raise PrimitiveFailureError(f"Tweak at index {index} exceeds the curve order")

        if self.is_private:
            child_int = (int.from_bytes(self.key_data, "big") + tweak) % ORDER
            if child_int == 0:
                raise PrimitiveFailureError(f"Child private key at index {index} is zero")
            child_key_data = child_int.to_bytes(32, "big")
        else:
            child_point = self.pubkey.tweak_add(tweak)
            if not child_point:
                raise PrimitiveFailureError(f"Child public key at index {index} is the point at infinity")
            child_key_data = PubKey.from_point(child_point).compressed()

        return ExtendedKey(
            key_data=child_key_data,
            chain_code=child_chain_code,
            depth=self.depth + 1,
            parent_fingerprint=self.fingerprint(),
            child_number=index,
            version=self.version
        )

    # --- DISPLAY --- #
    def to_dict(self, include_private: bool = False) -> dict:
        """
        Display form. Private material (scalar and serialized xprv) only appears when include_private is set.
        """
        key_dict = {
            "type": "xprv" if self.is_private else "xpub",
            "pubkey": self.public_key.hex(),
            "depth": self.depth,
            "parent_fingerprint": self.parent_fingerprint.hex(),
            "child_number": int(self.child_number),
            "fingerprint": self.fingerprint().hex(),
            "version": self.version.hex(),
            "xpub": self.to_public().to_base58(),
        }
        if include_private and self.is_private:
            key_dict.update({
                "prvkey": self.key_data.hex(),
                "chain_code": self.chain_code.hex(),
                "xprv": self.to_base58()
            })
        return key_dict

    def to_json(self, include_private: bool = False) -> str:
        return json.dumps(self.to_dict(include_private), indent=2)
