"""Conversions from raw INI values to typed values.

Every helper raises ValueError when the text does not describe a value of the
requested type, including numbers that do not fit the requested width.
"""

import ipaddress
import math
import re
import struct
from typing import NamedTuple

INTEGER_WIDTHS = (8, 16, 32, 64)

_INTEGER = re.compile(r"([+-]?)(?:0[xX]([0-9a-fA-F]+)|(0[0-7]*)|([1-9][0-9]*))")
_FLOAT_SPECIAL = re.compile(r"[+-]?(inf|infinity|nan)", re.IGNORECASE)


class IPv4Endpoint(NamedTuple):
    address: ipaddress.IPv4Address
    port: int

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


def integer_range(bits: int, signed: bool) -> tuple[int, int]:
    if bits not in INTEGER_WIDTHS:
        raise ValueError(f"Unsupported integer width: {bits}")
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def parse_integer(text: str, bits: int = 32, signed: bool = True) -> int:
    """Parse text as an integer, detecting the base from its prefix.

    0x/0X selects hexadecimal, a leading 0 selects octal and anything else is
    decimal, so "0x1A", "032" and "26" are all 26.
    """
    low, high = integer_range(bits, signed)
    match = _INTEGER.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"Invalid integer: {text!r}")

    sign, hexadecimal, octal, decimal = match.groups()
    if hexadecimal is not None:
        value = int(hexadecimal, 16)
    elif octal is not None:
        value = int(octal, 8)
    else:
        value = int(decimal, 10)
    if sign == "-":
        value = -value

    if not low <= value <= high:
        kind = "int" if signed else "uint"
        raise ValueError(f"Value {text!r} out of range for {kind}{bits}")
    return value


def parse_float(text: str, single: bool = False) -> float:
    text = text.strip()
    if "_" in text:
        raise ValueError(f"Invalid floating point value: {text!r}")
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"Invalid floating point value: {text!r}") from None

    special = _FLOAT_SPECIAL.fullmatch(text) is not None
    if math.isinf(value) and not special:
        raise ValueError(f"Value {text!r} out of range for double")

    if single:
        try:
            value = struct.unpack("f", struct.pack("f", value))[0]
        except OverflowError:
            raise ValueError(f"Value {text!r} out of range for float") from None
        if math.isinf(value) and not special:
            raise ValueError(f"Value {text!r} out of range for float")
    return value


def parse_bool(text: str) -> bool | None:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_ipv4_endpoint(text: str) -> IPv4Endpoint:
    """Parse "ip:port" or "ip port" into an IPv4Endpoint."""
    text = text.strip()
    if ":" in text:
        host, _, port = text.partition(":")
    else:
        parts = text.split(None, 1)
        if len(parts) != 2:
            raise ValueError(f"Invalid IPv4 address and port: {text!r}")
        host, port = parts

    try:
        address = ipaddress.IPv4Address(host.strip())
    except ipaddress.AddressValueError as e:
        raise ValueError(f"Invalid IPv4 address {host.strip()!r}: {e}") from e

    return IPv4Endpoint(address, parse_integer(port, 16, signed=False))


def truncate_to_buffer(value: str, size: int, encoding: str = "utf-8") -> bytes:
    """Encode value for a fixed buffer of size bytes.

    At most size - 1 bytes of the value are kept; the rest of the buffer, the
    terminator included, is zero filled.
    """
    if size < 1:
        raise ValueError(f"Buffer size must be positive: {size}")
    data = value.encode(encoding, errors="surrogateescape")[: size - 1]
    return data.ljust(size, b"\0")
