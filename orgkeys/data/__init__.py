"""
Encoding methods: Base58Check for extended keys and EIP-55 addresses for the target chain
"""
# data/__init__.py
from orgkeys.data.codec import *
from orgkeys.data.eth_address import *
