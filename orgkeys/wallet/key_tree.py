"""
KeyTree - walks a DerivationPath from a root ExtendedKey, one CKD step per index

This is the only place the derivation layer calls into the elliptic curve primitive. Every failure is raised
synchronously and never retried: derivation is pure, so the same inputs always fail the same way.
"""
from typing import Iterable

from orgkeys.core import get_logger
from orgkeys.wallet.derivation import DerivationPath
from orgkeys.wallet.xkeys import ExtendedKey

__all__ = ["KeyTree"]

logger = get_logger(__name__)


class KeyTree:

    @staticmethod
    def derive(root: ExtendedKey, path: DerivationPath | Iterable[int]) -> ExtendedKey:
        """
        Apply each index of the path in order, starting from root.

        Raises:
            InvalidIndexTypeError: an element is not an unsigned 32-bit integer
            HardenedFromPublicOnlyError: a hardened element is reached while holding a public key
            PrimitiveFailureError: a step yields an invalid child key
        """
        if not isinstance(path, DerivationPath):
            path = DerivationPath(tuple(path))

        key = root
        for index in path:
            key = key.derive_child(index)

        logger.debug(f"Derived {'private' if key.is_private else 'public'} key at {path}")
        return key

    @staticmethod
    def derive_public(root: ExtendedKey, path: DerivationPath | Iterable[int]) -> ExtendedKey:
        """Derive, then strip the private scalar before returning"""
        return KeyTree.derive(root, path).to_public()
