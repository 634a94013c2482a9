"""
The Account value and the AccountFactory - the private-key side of the key tree
"""
import json
from dataclasses import dataclass, field
from typing import Callable

from orgkeys.core import XKEYS, InvalidIndexTypeError, get_logger
from orgkeys.data import pubkey_to_address
from orgkeys.wallet.derivation import DerivationPath, PathTemplate, build_path, resolve_template
from orgkeys.wallet.indices import DerivationIndex, OrgUnit
from orgkeys.wallet.key_tree import KeyTree
from orgkeys.wallet.xkeys import ExtendedKey

__all__ = ["Account", "AccountFactory"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class Account:
    """
    Terminal artifact of a derivation. The private key is handed to the caller and nowhere else.
    """
    path: DerivationPath
    private_key: bytes = field(repr=False)
    address: str

    @property
    def index(self) -> int:
        return self.path[-1].level

    def to_dict(self, include_private: bool = False) -> dict:
        account_dict = {
            "path": str(self.path),
            "address": self.address,
        }
        if include_private:
            account_dict.update({"private_key": self.private_key.hex()})
        return account_dict

    def to_json(self, include_private: bool = False) -> str:
        return json.dumps(self.to_dict(include_private), indent=2)


class AccountFactory:
    """
    Derives accounts for organizational units. Holds no key material: the root is passed into every call, so
    several independent trees can be served by one factory.

    Args:
        address_encoder: Maps a compressed public key to a chain address. Defaults to EIP-55 Ethereum addresses.
    """

    def __init__(self, address_encoder: Callable[[bytes], str] = pubkey_to_address):
        self.address_encoder = address_encoder

    def _account(self, leaf: ExtendedKey, path: DerivationPath) -> Account:
        return Account(path=path, private_key=leaf.private_key, address=self.address_encoder(leaf.public_key))

    def generate_account(self, root: ExtendedKey, entity_name: str, department_name: str,
                         account_index: int) -> Account:
        """
        Account at m/44'/60'/entity'/department'/account_index
        """
        return self.account_for(root, OrgUnit(entity_name, department_name), account_index)

    def account_for(self, root: ExtendedKey, unit: OrgUnit, account_index: int,
                    template: PathTemplate | str = PathTemplate.STANDARD) -> Account:
        path = build_path(template, unit, account_index)
        leaf = KeyTree.derive(root, path)
        logger.info(f"Generated account at {path}")
        return self._account(leaf, path)

    def generate_accounts(self, root: ExtendedKey, unit: OrgUnit, count: int, start: int = 0,
                          template: PathTemplate | str = PathTemplate.STANDARD) -> list[Account]:
        """
        Sibling accounts start..start+count-1. The department node is derived once; each account is a single
        non-hardened step below it.
        """
        for name, value in (("count", count), ("start", start)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidIndexTypeError(f"Account {name} must be a non-negative integer, received {value!r}")
        if start + count > XKEYS.HARDENED_OFFSET:
            raise InvalidIndexTypeError(f"Accounts {start}..{start + count - 1} exceed the normal index range")

        parent_path = resolve_template(template).parent_path(unit)
        parent = KeyTree.derive(root, parent_path)

        accounts = []
        for offset in range(count):
            index = DerivationIndex.normal(start + offset)
            accounts.append(self._account(parent.derive_child(index), parent_path.child(index)))

        logger.info(f"Generated {count} accounts under {parent_path}")
        return accounts
