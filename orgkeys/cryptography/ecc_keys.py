"""
The PubKey class - the public point of a secp256k1 private key, along with methods for serialization
"""
from orgkeys.core import ECC, ECCPrivateKeyError, ECCError, SERIALIZED, at_end, get_stream, read_stream, \
    read_big_int
from orgkeys.cryptography.ecc import EllipticCurve, SECP256K1, Point

__all__ = ["PubKey"]
BYTE_LEN = ECC.COORD_BYTES


class PubKey:
    __slots__ = ("point", "curve")

    def __init__(self, private_key: int, curve: EllipticCurve = SECP256K1):
        priv_key = private_key % curve.order
        if priv_key == 0:
            raise ECCPrivateKeyError("Private key = 0 modulo the order of the curve")

        self.curve = curve
        self.point = curve.multiply_generator(priv_key)

    def __eq__(self, other):
        if not isinstance(other, PubKey):
            return False
        return self.point == other.point

    def __hash__(self):
        return hash(self.point.tuple)

    def __repr__(self):
        return f"PubKey({self.compressed().hex()})"

    @classmethod
    def from_point(cls, point: Point, curve: EllipticCurve = SECP256K1):
        if not point:
            raise ECCError("Point at infinity is not a valid public key")
        if not curve.is_point_on_curve(point):
            raise ECCError("Given point is not on the curve")

        # Bypass __init__: there is no private key to multiply
        instance = cls.__new__(cls)
        instance.curve = curve
        instance.point = point
        return instance

    @classmethod
    def from_bytes(cls, byte_stream: SERIALIZED, curve: EllipticCurve = SECP256K1):
        """
        Parse a 33-byte compressed or 65-byte uncompressed SEC1 public key
        """
        stream = get_stream(byte_stream)
        type_byte = read_stream(stream, 1, "pubkey_type")
        x_int = read_big_int(stream, BYTE_LEN, "pubkey_x")

        if type_byte in (b'\x02', b'\x03'):
            try:
                y_int = curve.find_y_from_x(x_int, odd=type_byte == b'\x03')
            except ValueError as e:
                raise ECCError(f"Compressed pubkey x coordinate not on curve: {x_int:#x}") from e
        elif type_byte == b'\x04':
            y_int = read_big_int(stream, BYTE_LEN, "pubkey_y")
        else:
            raise ECCError("Unidentified type byte for Public Key")

        if not at_end(stream):
            raise ECCError("Trailing data after public key")

        return cls.from_point(Point(x_int, y_int), curve)

    def _x_bytes(self):
        return self.point.x.to_bytes(BYTE_LEN, 'big')

    def _y_bytes(self):
        return self.point.y.to_bytes(BYTE_LEN, 'big')

    def uncompressed(self) -> bytes:
        """Return the serialized 65-byte pubkey"""
        return b''.join([b'\x04', self._x_bytes(), self._y_bytes()])

    def compressed(self) -> bytes:
        """Returns the serialized 33-byte compressed pubkey"""
        prefix = b'\x02' if self.point.y % 2 == 0 else b'\x03'
        return prefix + self._x_bytes()

    def tweak_add(self, tweak: int) -> Point:
        """
        Return point + tweak * G. May be the point at infinity, which callers must check.
        """
        return self.curve.add_points(self.point, self.curve.multiply_generator(tweak))
