"""
orgkeys - deterministic treasury key derivation for account-model chains

Maps an organizational hierarchy (entity -> department -> account, optionally role) onto a BIP32 key tree rooted in a
single master seed.
"""
from orgkeys.wallet import *

__version__ = "0.1.0"
