"""
Typed derivation indices and the mapping from organizational names to hardened tree indices

Each organizational level is hashed with SHA-256 under its own prefix. The first four digest bytes, read big-endian
and forced into the hardened range, give the tree index:

    entity      SHA256("ENTITY:" + entity)
    department  SHA256("DEPT:" + hex(entity digest) + ":" + department)
    role        SHA256("ROLE:" + hex(department digest) + ":" + role)

Chaining the parent digest means a department index cannot be computed without knowing the entity name, and equal
department names under different entities map to unrelated indices. Collisions are not detected; collision
resistance rests entirely on the hash.
"""
from dataclasses import dataclass
from typing import Optional

from orgkeys.core import InvalidIndexTypeError, ORG, XKEYS
from orgkeys.cryptography import sha256

__all__ = ["DerivationIndex", "OrgUnit", "OrgIndices", "entity_digest", "entity_index", "department_digest",
           "department_index", "role_digest", "role_index", "standalone_department_index", "derive_indices"]

HARDENED_OFFSET = XKEYS.HARDENED_OFFSET
MAX_INDEX = XKEYS.MAX_INDEX


class DerivationIndex(int):
    """
    An unsigned 32-bit child index. Values in [0, 2^31) are normal, values in [2^31, 2^32) are hardened.

    Construct through DerivationIndex.hardened, DerivationIndex.normal or DerivationIndex.from_raw. Every constructor
    range-checks, so a DerivationIndex instance always holds a valid u32.
    """

    def __new__(cls, value: int):
        # bool is an int subclass but never a meaningful index
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidIndexTypeError(f"Derivation index must be an integer, received {type(value).__name__}")
        if not 0 <= value <= MAX_INDEX:
            raise InvalidIndexTypeError(f"Derivation index {value} outside the unsigned 32-bit range")
        return super().__new__(cls, value)

    @classmethod
    def from_raw(cls, value: int) -> "DerivationIndex":
        """Accept any u32, hardened bit included"""
        if isinstance(value, cls):
            return value
        return cls(value)

    @classmethod
    def hardened(cls, value: int) -> "DerivationIndex":
        """Hardened index for the level number value, e.g. hardened(44) -> 44'"""
        cls._check_level(value)
        return cls(value | HARDENED_OFFSET)

    @classmethod
    def normal(cls, value: int) -> "DerivationIndex":
        cls._check_level(value)
        return cls(value)

    @staticmethod
    def _check_level(value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidIndexTypeError(f"Derivation index must be an integer, received {type(value).__name__}")
        if not 0 <= value < HARDENED_OFFSET:
            raise InvalidIndexTypeError(f"Index level {value} must lie in [0, 2^31)")

    @property
    def is_hardened(self) -> bool:
        return self >= HARDENED_OFFSET

    @property
    def level(self) -> int:
        """The index with the hardened bit cleared"""
        return int(self) & ~HARDENED_OFFSET

    def __str__(self):
        return f"{self.level}'" if self.is_hardened else str(int(self))

    def __repr__(self):
        return f"DerivationIndex({self})"


@dataclass(frozen=True)
class OrgUnit:
    """
    Caller-supplied organizational identifiers. Names are taken as given; empty strings are valid.
    """
    entity: str
    department: str
    role: Optional[str] = None


@dataclass(frozen=True)
class OrgIndices:
    entity: DerivationIndex
    department: DerivationIndex
    role: Optional[DerivationIndex] = None


def _digest(*parts: str) -> bytes:
    return sha256("".join(parts).encode("utf-8"))


def _index_from_digest(digest: bytes) -> DerivationIndex:
    return DerivationIndex(int.from_bytes(digest[:ORG.INDEX_BYTES], "big") | HARDENED_OFFSET)


def entity_digest(entity_name: str) -> bytes:
    return _digest(ORG.ENTITY_PREFIX, entity_name)


def entity_index(entity_name: str) -> DerivationIndex:
    return _index_from_digest(entity_digest(entity_name))


def department_digest(entity_hash: bytes, department_name: str) -> bytes:
    return _digest(ORG.DEPARTMENT_PREFIX, entity_hash.hex(), ORG.SEPARATOR, department_name)


def department_index(entity_hash: bytes, department_name: str) -> DerivationIndex:
    return _index_from_digest(department_digest(entity_hash, department_name))


def role_digest(department_hash: bytes, role_name: str) -> bytes:
    return _digest(ORG.ROLE_PREFIX, department_hash.hex(), ORG.SEPARATOR, role_name)


def role_index(department_hash: bytes, role_name: str) -> DerivationIndex:
    return _index_from_digest(role_digest(department_hash, role_name))


def standalone_department_index(department_name: str) -> DerivationIndex:
    """
    Department index for organizations without an entity layer: SHA256("DEPT:" + department)
    """
    return _index_from_digest(_digest(ORG.DEPARTMENT_PREFIX, department_name))


def derive_indices(unit: OrgUnit) -> OrgIndices:
    e_hash = entity_digest(unit.entity)
    d_hash = department_digest(e_hash, unit.department)
    return OrgIndices(
        entity=_index_from_digest(e_hash),
        department=_index_from_digest(d_hash),
        role=role_index(d_hash, unit.role) if unit.role is not None else None
    )
