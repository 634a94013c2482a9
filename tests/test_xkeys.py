"""
Tests for extended keys
"""
from random import randint
from secrets import token_bytes, randbelow

import pytest

from orgkeys.core import XKEYS, DataEncodingError, ExtendedKeyError, HardenedFromPublicOnlyError, \
    InvalidIndexTypeError, InvalidSeedError, PrimitiveFailureError
from orgkeys.cryptography import SECP256K1
from orgkeys.data import encode_base58check
from orgkeys.wallet import ExtendedKey, root_from_seed
from orgkeys.wallet import xkeys

# BIP32 test vector 1
TV1_MASTER_XPRV = \
    "xprv9s21ZrQH143K3QTDL4LXw2F7HEK3wJUD2nW2nRk4stbPy6cq3jPPqjiChkVvvNKmPGJxWUtg6LAF1yjtyq8eYPoDadbFfbMXaEUw7FGMGs"
TV1_MASTER_XPUB = \
    "xpub661MyMwAqRbcFtXgS5sYJABqqG9YLmC4Q1Rdap9gSE8NqtwybGhePY2gZ29ESFjqJoCu1Rupje8YtGqsefD265TMg7usUDFdp6W1EGMcet8"
TV1_0H_XPRV = \
    "xprv9uHRZZhk6KAJC1avXpDAp4MDc3sQKNxDiPvvkX8Br5ngLNv1TxvUxt4cV1rGL5hj6KCesnDYUhd7oWgT11eZG7XnxHrnYeSvkzY7d2bhkJ7"
TV1_0H_XPUB = \
    "xpub68Gmy5EdvgibQVfPdqkBBCHxA5htiqg55crXYuXoQRKfDBFA1WEjWgP6LHhwBZeNK1VTsfTFUHCdrfp1bgwQ9xv5ski8PX9rL2dZXvgGDnw"
TV1_0H_1_XPRV = \
    "xprv9wTYmMFdV23N2TdNG573QoEsfRrWKQgWeibmLntzniatZvR9BmLnvSxqu53Kw1UmYPxLgboyZQaXwTCg8MSY3H2EU4pWcQDnRnrVA1xe8fs"
TV1_0H_1_XPUB = \
    "xpub6ASuArnXKPbfEwhqN6e3mwBcDTgzisQN1wXN9BJcM47sSikHjJf3UFHKkNAWbWMiGj7Wf5uMash7SyYq527Hqck2AxYysAA7xmALppuCkwQ"
TV1_MASTER_PRIVKEY = "e8f32e723decf4051aefac8e2c93c9c5b214313817cdb01a1494b917c8436b35"
TV1_MASTER_CHAIN_CODE = "873dff81c02f525623fd1fe5167eac3a55a049de3d314bb42ee227ffed37d508"
TV1_MASTER_FINGERPRINT = "3442193e"

HARDENED = XKEYS.HARDENED_OFFSET


def get_random_xprv(hardened: bool = False) -> ExtendedKey:
    """
    We return a random XPRV key. The child number depends on the hardened boolean.
    """
    child_number = randint(HARDENED, XKEYS.MAX_INDEX) if hardened else randbelow(HARDENED)
    key_data = (randbelow(SECP256K1.order - 1) + 1).to_bytes(32, "big")
    return ExtendedKey(key_data, token_bytes(32), randint(1, XKEYS.MAX_DEPTH - 1), token_bytes(4), child_number)


def test_master_key_vector(tv1_root):
    assert tv1_root.key_data.hex() == TV1_MASTER_PRIVKEY
    assert tv1_root.chain_code.hex() == TV1_MASTER_CHAIN_CODE
    assert tv1_root.to_base58() == TV1_MASTER_XPRV
    assert tv1_root.to_public().to_base58() == TV1_MASTER_XPUB
    assert tv1_root.fingerprint().hex() == TV1_MASTER_FINGERPRINT


def test_child_derivation_vector(tv1_root):
    child = tv1_root.derive_child(HARDENED)
    assert child.to_base58() == TV1_0H_XPRV
    assert child.to_public().to_base58() == TV1_0H_XPUB
    assert child.parent_fingerprint.hex() == TV1_MASTER_FINGERPRINT

    grandchild = child.derive_child(1)
    assert grandchild.to_base58() == TV1_0H_1_XPRV
    assert grandchild.to_public().to_base58() == TV1_0H_1_XPUB

    # Normal child reached from the public parent alone
    assert ExtendedKey.from_base58(TV1_0H_XPUB).derive_child(1).to_base58() == TV1_0H_1_XPUB


def test_vector_parsing():
    for serialized in (TV1_MASTER_XPRV, TV1_MASTER_XPUB, TV1_0H_XPRV, TV1_0H_XPUB, TV1_0H_1_XPRV, TV1_0H_1_XPUB):
        assert ExtendedKey.from_base58(serialized).to_base58() == serialized


def test_xprv_recovery():
    """
    For normal and hardened XPRV keys, we verify recovery from serial and from base58
    """
    for hardened in (False, True):
        random_xprv = get_random_xprv(hardened)
        assert ExtendedKey.from_serial(random_xprv.to_bytes()) == random_xprv, "Failed to reconstruct from serial"
        assert ExtendedKey.from_base58(random_xprv.to_base58()) == random_xprv, "Failed to reconstruct from base58"


def test_xpub_recovery():
    random_xpub = get_random_xprv().to_public()
    recovered = ExtendedKey.from_base58(random_xpub.to_base58())
    assert recovered == random_xpub, "Failed to reconstruct random XPUB from base58"
    assert recovered.is_public
    assert recovered.child_number == random_xpub.child_number
    assert recovered.depth == random_xpub.depth


def test_public_derivation_matches_private():
    xprv = get_random_xprv()
    xpub = xprv.to_public()
    for index in (0, 1, randbelow(HARDENED)):
        assert xprv.derive_child(index).to_public() == xpub.derive_child(index)


def test_derivation_leaves_parent_unchanged(tv1_root):
    before = tv1_root.to_bytes()
    tv1_root.derive_child(0)
    tv1_root.derive_child(HARDENED + 5)
    assert tv1_root.to_bytes() == before
    with pytest.raises(AttributeError):
        tv1_root.depth = 3


def test_hardened_from_public_only(tv1_root):
    xpub = tv1_root.to_public()
    for index in (HARDENED, HARDENED + 1, randint(HARDENED, XKEYS.MAX_INDEX), XKEYS.MAX_INDEX):
        with pytest.raises(HardenedFromPublicOnlyError):
            xpub.derive_child(index)


@pytest.mark.parametrize("bad_index", [-1, 2 ** 32, "0", 0.5])
def test_invalid_child_index(tv1_root, bad_index):
    with pytest.raises(InvalidIndexTypeError):
        tv1_root.derive_child(bad_index)


def test_primitive_failure(tv1_root, monkeypatch):
    """
    A tweak at or above the curve order is reported, not skipped
    """
    monkeypatch.setattr(xkeys, "hmac_sha512", lambda key, message: b'\xff' * 64)
    with pytest.raises(PrimitiveFailureError):
        tv1_root.derive_child(0)
    with pytest.raises(PrimitiveFailureError):
        tv1_root.to_public().derive_child(0)


def test_zero_child_is_primitive_failure(tv1_root, monkeypatch):
    # Tweak equal to n - k gives a zero child scalar
    tweak = (SECP256K1.order - int.from_bytes(tv1_root.key_data, "big")).to_bytes(32, "big")
    monkeypatch.setattr(xkeys, "hmac_sha512", lambda key, message: tweak + bytes(32))
    with pytest.raises(PrimitiveFailureError):
        tv1_root.derive_child(HARDENED)


def test_seed_bounds():
    with pytest.raises(InvalidSeedError):
        root_from_seed(token_bytes(15))
    with pytest.raises(InvalidSeedError):
        root_from_seed(token_bytes(65))
    with pytest.raises(InvalidSeedError):
        root_from_seed("000102030405060708090a0b0c0d0e0f")

    assert root_from_seed(token_bytes(16)).depth == 0
    assert root_from_seed(token_bytes(64)).is_private


def test_testnet_versions():
    root = root_from_seed(token_bytes(32), testnet=True)
    assert root.is_testnet
    assert root.to_base58().startswith("tprv")
    assert root.to_public().to_base58().startswith("tpub")


def test_private_material_not_displayed(tv1_root):
    assert TV1_MASTER_PRIVKEY not in repr(tv1_root)
    assert "prvkey" not in tv1_root.to_dict()
    assert TV1_MASTER_XPRV not in tv1_root.to_json()
    assert tv1_root.to_dict(include_private=True)["xprv"] == TV1_MASTER_XPRV


def test_malformed_serializations(tv1_root):
    with pytest.raises(DataEncodingError):
        ExtendedKey.from_base58(TV1_MASTER_XPUB[:-1] + "1")

    serial = tv1_root.to_bytes()
    with pytest.raises(ExtendedKeyError):
        ExtendedKey.from_serial(b'\xde\xad\xbe\xef' + serial[4:])
    with pytest.raises(ExtendedKeyError):
        ExtendedKey.from_serial(serial[:45] + b'\x01' + serial[46:])
    with pytest.raises(ExtendedKeyError):
        # Master depth with a non-zero parent fingerprint
        ExtendedKey.from_serial(serial[:5] + b'\x01\x02\x03\x04' + serial[9:])
    with pytest.raises(ExtendedKeyError):
        ExtendedKey(tv1_root.key_data, token_bytes(31), 0, bytes(4), 0)
    with pytest.raises(ExtendedKeyError):
        tv1_root.to_public().private_key


def test_base58_payload_length(tv1_root):
    """
    A valid base58check string of the wrong length is not an extended key
    """
    serial = tv1_root.to_bytes()
    assert len(serial) == XKEYS.SERIAL_LENGTH
    for payload in (serial[:-1], serial + b'\x00'):
        with pytest.raises(ExtendedKeyError):
            ExtendedKey.from_base58(encode_base58check(payload))
