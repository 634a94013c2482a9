"""
All classes and methods which map an organization onto the key tree
"""
# wallet/__init__.py
from orgkeys.wallet.accounts import *
from orgkeys.wallet.audit import *
from orgkeys.wallet.derivation import *
from orgkeys.wallet.indices import *
from orgkeys.wallet.key_tree import *
from orgkeys.wallet.seed import *
from orgkeys.wallet.xkeys import *
