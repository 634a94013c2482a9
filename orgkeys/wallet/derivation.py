"""
DerivationPath values and the path templates mapping an organizational unit onto the key tree
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from orgkeys.core import ORG, PathError
from orgkeys.wallet.indices import DerivationIndex, OrgUnit, derive_indices, standalone_department_index

__all__ = ["DerivationPath", "PathTemplate", "resolve_template", "build_path"]

H = DerivationIndex.hardened
N = DerivationIndex.normal


@dataclass(frozen=True)
class DerivationPath:
    """
    Non-empty ordered sequence of DerivationIndex values. A path is an ancestor of every path it prefixes.
    """
    indices: tuple

    def __post_init__(self):
        indices = tuple(DerivationIndex.from_raw(i) for i in self.indices)
        if not indices:
            raise PathError("Derivation path must contain at least one index")
        object.__setattr__(self, "indices", indices)

    @classmethod
    def of(cls, *indices: int) -> "DerivationPath":
        return cls(tuple(indices))

    @classmethod
    def from_string(cls, path: str) -> "DerivationPath":
        """
        Parse "m/44'/60'/0'/0/0". A trailing ' or h marks a hardened level.
        """
        parts = path.strip().split("/")
        if parts[0] != "m":
            raise PathError("Path must start with 'm'")
        if len(parts) == 1:
            raise PathError("Derivation path must contain at least one index")

        indices = []
        for part in parts[1:]:
            hardened = part.endswith(("'", "h", "H"))
            digits = part[:-1] if hardened else part
            if not (digits.isascii() and digits.isdigit()):
                raise PathError(f"Malformed path element: {part!r}")
            indices.append(H(int(digits)) if hardened else N(int(digits)))
        return cls(tuple(indices))

    def __iter__(self):
        return iter(self.indices)

    def __len__(self):
        return len(self.indices)

    def __getitem__(self, item):
        return self.indices[item]

    def __str__(self):
        return "/".join(["m", *(str(i) for i in self.indices)])

    @property
    def parent(self) -> Optional["DerivationPath"]:
        """Path one level up, or None for a single-level path"""
        return DerivationPath(self.indices[:-1]) if len(self.indices) > 1 else None

    def child(self, index: int) -> "DerivationPath":
        return DerivationPath(self.indices + (DerivationIndex.from_raw(index),))

    def is_ancestor_of(self, other: "DerivationPath") -> bool:
        return len(self) < len(other) and other.indices[:len(self)] == self.indices

    @property
    def public_from(self) -> int:
        """
        Position after the last hardened index. Everything from this position on can be derived from the public key
        of the node at that depth.
        """
        for position in range(len(self.indices), 0, -1):
            if self.indices[position - 1].is_hardened:
                return position
        return 0


class PathTemplate(Enum):
    """
    Selectable path policies. The caller states which one applies; nothing is auto-detected.

        STANDARD        m/44'/60'/entity'/dept'/account
        ROLE_EXTENDED   m/60'/entity'/dept'/role'/account   (no BIP44 purpose level, not wallet interoperable)
        SIMPLIFIED      m/44'/60'/dept'/0/account           (no entity level; 0 sits in the BIP44 change slot)
    """
    STANDARD = "standard"
    ROLE_EXTENDED = "roleExtended"
    SIMPLIFIED = "simplified"

    @classmethod
    def from_name(cls, name: str) -> "PathTemplate":
        try:
            return cls(name)
        except ValueError:
            raise PathError(f"Unknown path template {name!r}. Expected one of {[t.value for t in cls]}") from None

    def parent_path(self, unit: OrgUnit) -> DerivationPath:
        """
        The path of the node directly above the account level. Its public key is the audit export for this template.
        """
        match self:
            case PathTemplate.STANDARD:
                indices = derive_indices(unit)
                levels = (H(ORG.PURPOSE), H(ORG.COIN_TYPE), indices.entity, indices.department)
            case PathTemplate.ROLE_EXTENDED:
                if unit.role is None:
                    raise PathError("The roleExtended template requires a role name")
                indices = derive_indices(unit)
                levels = (H(ORG.COIN_TYPE), indices.entity, indices.department, indices.role)
            case PathTemplate.SIMPLIFIED:
                levels = (H(ORG.PURPOSE), H(ORG.COIN_TYPE), standalone_department_index(unit.department),
                          N(ORG.CHANGE))
        return DerivationPath(levels)

    def path(self, unit: OrgUnit, account_index: int) -> DerivationPath:
        return self.parent_path(unit).child(N(account_index))


def resolve_template(template: PathTemplate | str) -> PathTemplate:
    """Accept a PathTemplate or its tag name ("standard", "roleExtended", "simplified")"""
    if isinstance(template, PathTemplate):
        return template
    if isinstance(template, str):
        return PathTemplate.from_name(template)
    raise PathError(f"Expected a PathTemplate or template name, received {type(template).__name__}")


def build_path(template: PathTemplate | str, unit: OrgUnit, account_index: int) -> DerivationPath:
    return resolve_template(template).path(unit, account_index)
