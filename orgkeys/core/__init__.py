"""
Contains the core elements that are used within orgkeys

Core:
    -Provides the reference constants for derivation, encoding and seeds
    -Provides custom exceptions for the various orgkeys elements
    -Provides byte stream helpers and logging
"""
# core/__init__.py
from orgkeys.core.byte_stream import *
from orgkeys.core.exceptions import *
from orgkeys.core.formats import *
from orgkeys.core.logging import *
