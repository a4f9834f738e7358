"""Typed lookups on a parsed Document.

Every reader takes (document, section, key, ...) plus a default and returns a
Lookup whose status is one of:

* Status.FOUND (0): the key exists and its value converted cleanly,
* Status.DEFAULT (1): the section or key is missing, value is the default,
* Status.ERROR (-1): bad arguments, or the value exists but does not convert.

A value that exists but cannot be converted never falls back to the default.
"""

import codecs
from dataclasses import dataclass
from enum import IntEnum
from functools import partial
from typing import Any, Callable

from iniread.convert import parse_bool, parse_float, parse_integer, parse_ipv4_endpoint, truncate_to_buffer
from iniread.document import Document
from iniread.logger import logger


class Status(IntEnum):
    FOUND = 0
    DEFAULT = 1
    ERROR = -1


@dataclass(frozen=True)
class Lookup:
    status: Status
    value: Any = None
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.status is Status.FOUND

    def __bool__(self) -> bool:
        return self.found

    def __int__(self) -> int:
        return int(self.status)


def _error(msg: str) -> Lookup:
    logger.debug(msg)
    return Lookup(Status.ERROR, error=msg)


def _raw(document, section, key) -> tuple[str | None, Lookup | None]:
    """Return the raw value, or a Lookup describing why there is none."""
    if not isinstance(document, Document) or document.released:
        return None, _error(f"Invalid document: {document!r}")
    if section is not None and not isinstance(section, str):
        return None, _error(f"Invalid section name: {section!r}")
    if not isinstance(key, str):
        return None, _error(f"Invalid key name: {key!r}")

    found = document.section(section)
    if found is None or key not in found:
        return None, None
    return found.get(key), None


def _read(document, section, key, default, convert: Callable[[str], Any]) -> Lookup:
    raw, failed = _raw(document, section, key)
    if failed is not None:
        return failed
    if raw is None:
        return Lookup(Status.DEFAULT, default)
    try:
        return Lookup(Status.FOUND, convert(raw))
    except ValueError as e:
        return _error(f"[{section or ''}] {key}: {e}")


def read_str(document: Document, section: str | None, key: str, default: str | None = None) -> Lookup:
    return _read(document, section, key, default, str)


def read_strn(
    document: Document,
    section: str | None,
    key: str,
    buffer: bytearray,
    default: str | None = None,
    encoding: str = "utf-8",
) -> Lookup:
    """Copy the value into the caller's fixed-size buffer.

    The buffer receives at most len(buffer) - 1 bytes followed by zeros. The
    returned Lookup carries the text that fit.
    """
    if not isinstance(buffer, bytearray) or len(buffer) == 0:
        return _error(f"Invalid buffer: {buffer!r}")
    if default is not None and not isinstance(default, str):
        return _error(f"Invalid default string: {default!r}")

    result = read_str(document, section, key, default)
    if result.status is Status.ERROR:
        return result

    value = result.value or ""
    try:
        data = truncate_to_buffer(value, len(buffer), encoding)
        truncated = len(value.encode(encoding, errors="surrogateescape")) >= len(buffer)
        # a multibyte character cut by the buffer end stays out of the text
        decoder = codecs.getincrementaldecoder(encoding)(errors="surrogateescape")
        text = decoder.decode(data.rstrip(b"\0"), final=not truncated)
    except (LookupError, ValueError) as e:
        return _error(f"[{section or ''}] {key}: {e}")

    buffer[:] = data
    return Lookup(result.status, text)


def read_integer(
    document: Document, section: str | None, key: str, default: int = 0, bits: int = 32, signed: bool = True
) -> Lookup:
    return _read(document, section, key, default, partial(parse_integer, bits=bits, signed=signed))


def _integer_reader(bits: int, signed: bool):
    def reader(document: Document, section: str | None, key: str, default: int = 0) -> Lookup:
        return read_integer(document, section, key, default, bits, signed)

    reader.__name__ = f"read_{'' if signed else 'u'}int{bits}"
    reader.__doc__ = f"Read a {'signed' if signed else 'unsigned'} {bits}-bit integer."
    return reader


INTEGER_TYPES: dict[str, tuple[int, bool]] = {
    "int8": (8, True),
    "uint8": (8, False),
    "int16": (16, True),
    "uint16": (16, False),
    "int32": (32, True),
    "uint32": (32, False),
    "int64": (64, True),
    "uint64": (64, False),
    "int": (32, True),
    "unsigned": (32, False),
}

read_int8 = _integer_reader(*INTEGER_TYPES["int8"])
read_uint8 = _integer_reader(*INTEGER_TYPES["uint8"])
read_int16 = _integer_reader(*INTEGER_TYPES["int16"])
read_uint16 = _integer_reader(*INTEGER_TYPES["uint16"])
read_int32 = _integer_reader(*INTEGER_TYPES["int32"])
read_uint32 = _integer_reader(*INTEGER_TYPES["uint32"])
read_int64 = _integer_reader(*INTEGER_TYPES["int64"])
read_uint64 = _integer_reader(*INTEGER_TYPES["uint64"])
read_int = read_int32
read_unsigned = read_uint32


def read_float(document: Document, section: str | None, key: str, default: float = 0.0) -> Lookup:
    return _read(document, section, key, default, partial(parse_float, single=True))


def read_double(document: Document, section: str | None, key: str, default: float = 0.0) -> Lookup:
    return _read(document, section, key, default, parse_float)


def read_bool(document: Document, section: str | None, key: str, default: bool = False) -> Lookup:
    result = _read(document, section, key, default, parse_bool)
    if result.status is Status.FOUND and result.value is None:
        # neither "true" nor "false": the default stands
        return Lookup(Status.DEFAULT, default)
    return result


def read_ipv4_addr(document: Document, section: str | None, key: str, default: str | None = None) -> Lookup:
    """Read an "ip:port" or "ip port" value.

    The default is address text as well and goes through the same parsing, so
    a malformed default is reported as an error.
    """
    raw, failed = _raw(document, section, key)
    if failed is not None:
        return failed

    status = Status.FOUND
    if raw is None:
        if not isinstance(default, str):
            return _error(f"Invalid default address: {default!r}")
        raw, status = default, Status.DEFAULT

    try:
        return Lookup(status, parse_ipv4_endpoint(raw))
    except ValueError as e:
        return _error(f"[{section or ''}] {key}: {e}")


READERS: dict[str, Callable[..., Lookup]] = {
    "str": read_str,
    "int": read_int,
    "unsigned": read_unsigned,
    "int8": read_int8,
    "uint8": read_uint8,
    "int16": read_int16,
    "uint16": read_uint16,
    "int32": read_int32,
    "uint32": read_uint32,
    "int64": read_int64,
    "uint64": read_uint64,
    "float": read_float,
    "double": read_double,
    "bool": read_bool,
    "ipv4": read_ipv4_addr,
}
