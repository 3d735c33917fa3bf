"""
DbcForge - CAN database (DBC) toolkit

Parses DBC files into an immutable document model, renders documents back to
canonical DBC text, and packs/unpacks signal values in CAN frame payloads.

This is the main package for DbcForge, which extends the core DSL framework
with the DBC grammar and data model.
"""

__version__ = "1.0.0"
__author__ = "DbcForge Development Team"
__description__ = "DbcForge - Grammar-driven parser, serializer and signal codec for CAN DBC files"

from .src import *  # noqa: F401,F403
from .src import __all__ as _src_all
from .src.dbc_codec import decode_signal, encode_signal
from .src.dbc_generator import generate_dbc
from .src.dbc_parser import parse_dbc, parse_dbc_partial

# Format-neutral names for the main operations
parse = parse_dbc
parse_partial = parse_dbc_partial
serialize = generate_dbc
decode = decode_signal
encode = encode_signal

__all__ = list(_src_all) + [
    "parse",
    "parse_partial",
    "serialize",
    "decode",
    "encode",
]
