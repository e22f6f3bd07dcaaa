#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core functionality for NetCalc - IPv4 subnet calculations.

Pure business logic: converts addresses and prefixes to 32-bit integers,
derives the network address, gateway and subnet mask, and checks that a
host IP belongs to the given network.
"""
import dataclasses
import functools
import logging
import sys
import time
from typing import Dict, Optional, Tuple


# Global configuration
DEBUG_MODE = False

LOG_FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)s]: (%(name)s.%(funcName)s) - %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'

MAX_ADDRESS = 0xFFFFFFFF
MAX_PREFIX = 32

DNS1 = "8.8.8.8"
DNS2 = "8.8.4.4"

PREDEFINED_NETWORKS = [
    ("Network1/CIDR", "192.168.1.0/27"),
    ("Network2/CIDR", "192.168.10.20/24"),
]

FIELD_LABELS = {
    "network": "Network",
    "ip": "IP",
}


def setup_logging(debug: bool = False) -> None:
    """Setup logging with optional debug mode."""
    global DEBUG_MODE
    DEBUG_MODE = debug

    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        handlers=[logging.StreamHandler(sys.stderr)],
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        force=True
    )


logger = logging.getLogger(__name__)


def debug_log(func):
    """Decorator for debug logging with timing."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not DEBUG_MODE:
            return func(*args, **kwargs)

        start_time = time.time()
        logger.debug(f"Entering {func.__name__} with args={args}, kwargs={kwargs}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed = (time.time() - start_time) * 1000
            logger.debug(f"Exception in {func.__name__} after {elapsed:.2f}ms: {e}")
            raise
        elapsed = (time.time() - start_time) * 1000
        logger.debug(f"Exiting {func.__name__} in {elapsed:.2f}ms with result={result}")
        return result
    return wrapper


class CalcError(ValueError):
    """
    Base class for every rejected calculation.

    Attributes:
        kind: error kind name (e.g. "MissingCidr")
        message: human-readable message without field label
        field: input the error came from ("network", "ip") or None
    """

    default_message = "Calculation failed"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def with_field(self, field: str) -> "CalcError":
        """Return a copy of this error tagged with the input it came from."""
        return type(self)(self.message, field=field)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"error": str(self), "kind": self.kind, "field": self.field}

    def __str__(self) -> str:
        if self.field in FIELD_LABELS:
            return f"{FIELD_LABELS[self.field]}: {self.message}"
        return self.message


class MissingCidr(CalcError):
    default_message = "Network must be in CIDR format, e.g. 192.168.100.0/24"


class InvalidCidr(CalcError):
    default_message = "CIDR must be between 0 and 32"


class InvalidFormat(CalcError):
    default_message = "Invalid IP format"


class OutOfRange(CalcError):
    default_message = "IP parts must be 0-255"


class AddressOutOfRange(CalcError):
    default_message = "IP is not in the specified network range"


@dataclasses.dataclass(frozen=True)
class CalculationResult:
    """Outcome of a single successful calculation."""
    network_address: str
    ip: str
    gateway: str
    subnet_mask: str
    dns1: str = DNS1
    dns2: str = DNS2

    def to_dict(self) -> Dict[str, str]:
        return dataclasses.asdict(self)

    def clipboard_text(self) -> str:
        return format_clipboard_text(self)


def _is_decimal(text: str) -> bool:
    # str.isdigit() alone accepts non-ASCII digits such as '²'
    return text.isascii() and text.isdigit()


def _decimal_value(text: str, max_digits: int) -> Optional[int]:
    """Value of an ASCII decimal string, None if not decimal or too long."""
    if not _is_decimal(text):
        return None
    # leading zeros are allowed ('010' is 10) and do not count
    digits = text.lstrip('0') or '0'
    if len(digits) > max_digits:
        return None
    return int(digits)


@debug_log
def parse_address(text: str) -> int:
    """
    Convert a dotted-decimal IPv4 string to a 32-bit unsigned integer.

    Args:
        text: address such as "192.168.1.10"

    Returns:
        Integer with the first octet as the most significant byte

    Raises:
        InvalidFormat: if there are not exactly four non-empty parts
        OutOfRange: if any part is not a decimal number in [0, 255]
    """
    parts = text.strip().split('.')
    if len(parts) != 4 or any(part == '' for part in parts):
        raise InvalidFormat()

    value = 0
    for part in parts:
        octet = _decimal_value(part, 3)
        if octet is None or octet > 255:
            raise OutOfRange()
        value = (value << 8) | octet
    return value


def format_address(value: int) -> str:
    """Convert a 32-bit unsigned integer to dotted-decimal notation."""
    return '.'.join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))


@debug_log
def parse_prefix(text: str) -> int:
    """Parse a CIDR prefix (0-32). Return int or raise InvalidCidr."""
    prefix = _decimal_value(text.strip(), 2)
    if prefix is None or prefix > MAX_PREFIX:
        raise InvalidCidr()
    return prefix


def cidr_to_mask_int(cidr: int) -> int:
    """
    Convert a CIDR prefix length to its 32-bit network mask.

    /0 gives 0 (every address matches), /32 gives 0xFFFFFFFF (host route).
    """
    if not 0 <= cidr <= MAX_PREFIX:
        raise InvalidCidr()
    return ~((1 << (MAX_PREFIX - cidr)) - 1) & MAX_ADDRESS


def cidr_to_mask_string(cidr: int) -> str:
    """CIDR to subnet mask string (e.g. 24 -> 255.255.255.0)."""
    return format_address(cidr_to_mask_int(cidr))


def network_address(ip_int: int, mask_int: int) -> int:
    return ip_int & mask_int


def gateway(network_int: int) -> int:
    """
    Gateway is the network address plus one.

    The top of the address space wraps around: 255.255.255.255 gives 0.0.0.0.
    """
    return (network_int + 1) & MAX_ADDRESS


def in_network(ip_int: int, mask_int: int, network_int: int) -> bool:
    return (ip_int & mask_int) == network_int


def format_clipboard_text(result: CalculationResult) -> str:
    """Render a result as the plain text block used for clipboard copy."""
    text = f"""
IP: {result.ip}
Gateway: {result.gateway}
Subnet: {result.subnet_mask}
DNS1: {result.dns1}
DNS2: {result.dns2}
"""
    return text.strip()


@debug_log
def split_network(network_cidr_text: str) -> Tuple[str, int]:
    """
    Split "A.B.C.D/CIDR" into the address part and the validated prefix.

    Raises:
        MissingCidr: if the text does not contain exactly one '/'
        InvalidCidr: if the prefix is not an integer in [0, 32]
    """
    if network_cidr_text.count('/') != 1:
        raise MissingCidr()

    address_part, prefix_part = network_cidr_text.split('/')
    return address_part, parse_prefix(prefix_part)


def _parse_field(text: str, field: str) -> int:
    try:
        return parse_address(text)
    except CalcError as e:
        raise e.with_field(field) from e


@debug_log
def calculate(network_cidr_text: str, ip_text: str) -> CalculationResult:
    """
    Compute subnet facts for a host IP inside a network.

    The network/CIDR field is authoritative: the network address is the
    network field's address masked by the prefix, never derived from the
    host IP.

    Args:
        network_cidr_text: network in CIDR notation (e.g. "192.168.1.0/27")
        ip_text: host IPv4 address (e.g. "192.168.1.10")

    Returns:
        CalculationResult with network address, gateway, mask and DNS servers

    Raises:
        MissingCidr, InvalidCidr: if the network text is malformed
        InvalidFormat, OutOfRange: if either address is malformed
        AddressOutOfRange: if the IP does not belong to the network
    """
    address_part, prefix = split_network(network_cidr_text)

    network_ip = _parse_field(address_part, "network")
    host_ip = _parse_field(ip_text, "ip")

    mask = cidr_to_mask_int(prefix)
    network = network_address(network_ip, mask)

    if not in_network(host_ip, mask, network):
        logger.info(f"{ip_text} is outside {format_address(network)}/{prefix}")
        raise AddressOutOfRange()

    return CalculationResult(
        network_address=f"{format_address(network)}/{prefix}",
        ip=ip_text,
        gateway=format_address(gateway(network)),
        subnet_mask=format_address(mask),
    )
