"""iniread: a read-only INI parser with typed lookups."""

import sys

from iniread.accessors import (
    READERS,
    Lookup,
    Status,
    read_bool,
    read_double,
    read_float,
    read_int,
    read_int8,
    read_int16,
    read_int32,
    read_int64,
    read_ipv4_addr,
    read_str,
    read_strn,
    read_uint8,
    read_uint16,
    read_uint32,
    read_uint64,
    read_unsigned,
)
from iniread.convert import IPv4Endpoint
from iniread.document import GLOBAL_SECTION, Document, Section
from iniread.parser import INIParser, load, loads
from iniread.pretty import dump, pretty_print

assert sys.version_info >= (3, 10), "Python 3.10 or greater is required."

__all__ = [
    "GLOBAL_SECTION",
    "READERS",
    "Document",
    "INIParser",
    "IPv4Endpoint",
    "Lookup",
    "Section",
    "Status",
    "dump",
    "load",
    "loads",
    "pretty_print",
    "read_bool",
    "read_double",
    "read_float",
    "read_int",
    "read_int8",
    "read_int16",
    "read_int32",
    "read_int64",
    "read_ipv4_addr",
    "read_str",
    "read_strn",
    "read_uint8",
    "read_uint16",
    "read_uint32",
    "read_uint64",
    "read_unsigned",
]
