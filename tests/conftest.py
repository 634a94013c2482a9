"""
Fixtures used in the tests
"""
import pytest

from orgkeys.cryptography import SECP256K1
from orgkeys.wallet import AccountFactory, AuditExporter, root_from_seed
from tests.utility import TREASURY_SEED, TV1_SEED


@pytest.fixture()
def curve():
    return SECP256K1


@pytest.fixture(scope="session")
def tv1_root():
    return root_from_seed(TV1_SEED)


@pytest.fixture(scope="session")
def root():
    return root_from_seed(TREASURY_SEED)


@pytest.fixture(scope="session")
def factory():
    return AccountFactory()


@pytest.fixture(scope="session")
def exporter():
    return AuditExporter()
