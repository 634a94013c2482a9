"""
The custom exceptions used throughout orgkeys
"""
__all__ = ["ReadError", "StreamError", "DataEncodingError", "ECCError", "ECCPrivateKeyError", "ExtendedKeyError",
           "InvalidSeedError", "InvalidIndexTypeError", "HardenedFromPublicOnlyError", "PrimitiveFailureError",
           "PathError"]


class DataEncodingError(Exception):
    """
    For use in encoding/decoding algorithms
    """
    pass


class StreamError(Exception):
    """
    Catchall for stream errors
    """
    pass


class ReadError(StreamError):
    """
    For when trying to read data of length n from the stream and receiving data of length < n
    """
    pass


class ECCError(StreamError):
    """
    For use when deserializing pubkeys
    """
    pass


class ECCPrivateKeyError(Exception):
    """
    For if the private key is out of bounds
    """
    pass


class ExtendedKeyError(Exception):
    """Custom exception for extended key operations"""
    pass


class InvalidSeedError(ExtendedKeyError):
    """
    Seed bytes outside the BIP32 length bounds, a seed yielding an unusable master key, or a mnemonic failing its
    checksum
    """
    pass


class InvalidIndexTypeError(ExtendedKeyError):
    """
    A derivation index (or count) that is not an unsigned 32-bit integer, or lies outside its declared range
    """
    pass


class HardenedFromPublicOnlyError(ExtendedKeyError):
    """
    Raised when a hardened child is requested from a public extended key. Callers should treat this as a security
    violation and abort, never as a transient condition.
    """
    pass


class PrimitiveFailureError(ExtendedKeyError):
    """
    The child key derivation produced an invalid key (tweak >= curve order, zero scalar or point at infinity)
    """
    pass


class PathError(ExtendedKeyError):
    """
    For empty or malformed derivation paths, or templates missing an organizational level
    """
    pass
