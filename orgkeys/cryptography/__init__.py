"""
Elliptic curve cryptography and hash functions
"""
# cryptography/__init__.py
from orgkeys.cryptography.ecc import *
from orgkeys.cryptography.ecc_keys import *
from orgkeys.cryptography.hash_functions import *
