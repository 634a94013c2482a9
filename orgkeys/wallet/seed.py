"""
Seed handling - the single entry point from secret material to a root ExtendedKey

Mnemonic generation, wordlist checks and the PBKDF2 stretch are delegated to the `mnemonic` package (BIP39 reference
implementation). The returned root is an ordinary immutable value; callers pass it explicitly into every derivation.
"""
from mnemonic import Mnemonic

from orgkeys.core import WALLET, InvalidSeedError, get_logger
from orgkeys.wallet.xkeys import ExtendedKey

__all__ = ["generate_mnemonic", "seed_from_mnemonic", "root_from_seed", "root_from_mnemonic"]

logger = get_logger(__name__)


def _phrase(phrase: str | list) -> str:
    return " ".join(phrase) if isinstance(phrase, (list, tuple)) else phrase.strip()


def generate_mnemonic(strength: int = WALLET.DEFAULT_STRENGTH, language: str = WALLET.LANGUAGE) -> str:
    """
    Return a fresh BIP39 phrase. Strength is the entropy bit length (128 -> 12 words, 256 -> 24 words)
    """
    if strength not in WALLET.STRENGTHS:
        raise InvalidSeedError(f"Entropy strength {strength} not BIP39 compliant. Must be one of {WALLET.STRENGTHS}")
    return Mnemonic(language).generate(strength=strength)


def seed_from_mnemonic(phrase: str | list, passphrase: str = "", language: str = WALLET.LANGUAGE,
                       validate: bool = True) -> bytes:
    """
    BIP39 seed: PBKDF2-HMAC-SHA512(phrase, "mnemonic" + passphrase, 2048 rounds, 64 bytes)
    """
    phrase = _phrase(phrase)
    if validate and not Mnemonic(language).check(phrase):
        raise InvalidSeedError("Mnemonic phrase fails BIP39 wordlist or checksum validation")
    return Mnemonic.to_seed(phrase, passphrase=passphrase)


def root_from_seed(seed: bytes, testnet: bool = False) -> ExtendedKey:
    """
    Master private ExtendedKey for the seed. Raises InvalidSeedError for seeds outside 16..64 bytes.
    """
    root = ExtendedKey.from_master_seed(seed, testnet=testnet)
    logger.debug(f"Initialized root key with fingerprint {root.fingerprint().hex()}")
    return root


def root_from_mnemonic(phrase: str | list, passphrase: str = "", testnet: bool = False) -> ExtendedKey:
    return root_from_seed(seed_from_mnemonic(phrase, passphrase), testnet=testnet)
