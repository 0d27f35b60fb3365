"""Conversion between bytes and space-separated hex text"""

import logging
import re

from ok_uart import _exceptions

log = logging.getLogger("ok_uart.hexcodec")

_SEPARATOR_RE = re.compile(r"[\s:]+")
_BYTE_RE = re.compile(r"[0-9A-Fa-f]{2}")


def decode_hex(text: str) -> bytes:
    """Parses hex digit pairs like "A1 b2:C3", ignoring whitespace and colons"""

    digits = _SEPARATOR_RE.sub("", text)
    if len(digits) % 2:
        message = f"Odd number of hex digits ({len(digits)}) in {text!r}"
        raise _exceptions.InvalidHexInput(message, fragment=digits)

    out = bytearray()
    for pos in range(0, len(digits), 2):
        pair = digits[pos : pos + 2]
        if not _BYTE_RE.fullmatch(pair):
            message = f"Bad hex byte {pair!r} in {text!r}"
            raise _exceptions.InvalidHexInput(message, fragment=pair)
        out.append(int(pair, 16))

    log.debug("Decoded %d hex digits -> %db", len(digits), len(out))
    return bytes(out)


def encode_hex(data: bytes | bytearray) -> str:
    """Formats bytes as uppercase hex pairs separated by single spaces"""

    return bytes(data).hex(" ").upper()
