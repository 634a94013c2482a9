"""
AuditExporter - the public-key side of the key tree

Organizational levels are hardened and account indices are not. An auditor holding a department xpub can therefore
enumerate every account address under that department, but can derive neither the department private key nor any
sibling department: public-only derivation cannot cross a hardened index.
"""
from typing import Callable, Optional

from orgkeys.core import ORG, XKEYS, ExtendedKeyError, HardenedFromPublicOnlyError, InvalidIndexTypeError, get_logger
from orgkeys.data import pubkey_to_address
from orgkeys.wallet.derivation import DerivationPath, PathTemplate, resolve_template
from orgkeys.wallet.indices import DerivationIndex, OrgUnit, entity_index
from orgkeys.wallet.key_tree import KeyTree
from orgkeys.wallet.xkeys import ExtendedKey

__all__ = ["AuditExporter"]

logger = get_logger(__name__)

H = DerivationIndex.hardened


class AuditExporter:
    """
    Args:
        address_encoder: Maps a compressed public key to a chain address. Must match the AccountFactory's encoder
            for enumerated addresses to line up with generated accounts.
    """

    def __init__(self, address_encoder: Callable[[bytes], str] = pubkey_to_address):
        self.address_encoder = address_encoder

    # --- EXPORT --- #
    def export_public_key(self, root: ExtendedKey, unit: OrgUnit,
                          template: PathTemplate | str = PathTemplate.STANDARD) -> ExtendedKey:
        """
        Public key of the node directly above the account level for the given template. The private root is needed
        for the hardened steps; only the neutered key leaves this method.
        """
        path = resolve_template(template).parent_path(unit)
        xpub = KeyTree.derive_public(root, path)
        logger.info(f"Exported audit key at {path} with fingerprint {xpub.fingerprint().hex()}")
        return xpub

    def export_department_public_key(self, root: ExtendedKey, entity_name: str, department_name: str) -> ExtendedKey:
        """xpub at m/44'/60'/entity'/department'"""
        return self.export_public_key(root, OrgUnit(entity_name, department_name))

    def export_role_public_key(self, root: ExtendedKey, entity_name: str, department_name: str,
                               role_name: str) -> ExtendedKey:
        """xpub at m/60'/entity'/department'/role' - the department export, one level deeper"""
        return self.export_public_key(root, OrgUnit(entity_name, department_name, role_name),
                                      PathTemplate.ROLE_EXTENDED)

    def export_entity_public_key(self, root: ExtendedKey, entity_name: str) -> ExtendedKey:
        """
        xpub at m/44'/60'/entity'. Departments below it are hardened, so this key identifies the entity but cannot
        enumerate its accounts.
        """
        path = DerivationPath.of(H(ORG.PURPOSE), H(ORG.COIN_TYPE), entity_index(entity_name))
        xpub = KeyTree.derive_public(root, path)
        logger.info(f"Exported entity key at {path} with fingerprint {xpub.fingerprint().hex()}")
        return xpub

    # --- ENUMERATION --- #
    def enumerate_addresses(self, public_key: ExtendedKey, count: int, start: int = 0) -> list[str]:
        """
        Addresses of children start..start+count-1, derived in the public domain only.

        Raises:
            ExtendedKeyError: a private extended key was supplied
            InvalidIndexTypeError: negative count or start
            HardenedFromPublicOnlyError: the range reaches the hardened indices
        """
        if public_key.is_private:
            raise ExtendedKeyError("Enumeration accepts public extended keys only")
        for name, value in (("count", count), ("start", start)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidIndexTypeError(f"{name} must be a non-negative integer, received {value!r}")
        if start + count > XKEYS.HARDENED_OFFSET:
            raise HardenedFromPublicOnlyError(
                f"Enumerating {count} addresses from {start} crosses into the hardened index range")

        addresses = [self.address_encoder(public_key.derive_child(i).public_key) for i in range(start, start + count)]
        logger.info(f"Enumerated {count} addresses from audit key {public_key.fingerprint().hex()}")
        return addresses

    def find_account_index(self, public_key: ExtendedKey, address: str, search_limit: int) -> Optional[int]:
        """
        Index of the first child in [0, search_limit) whose address matches (case-insensitive), else None
        """
        target = address.lower()
        for index, candidate in enumerate(self.enumerate_addresses(public_key, search_limit)):
            if candidate.lower() == target:
                return index
        return None
