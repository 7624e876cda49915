"""
Hex parsing helpers for domain separators and pattern words.
"""

from __future__ import annotations
import string

from .errors import DomainWidthError, HexDecodeError, LengthOverflowError
from .types import WORD_MASK, get_profile

_HEX_DIGITS = frozenset(string.hexdigits)


def strip_prefix(text: str) -> str:
    text = text.strip()
    if text[:2] in ('0x', '0X'):
        return text[2:]
    return text


def hex_to_bytes(text: str, width: int) -> bytes:
    """
    Decode a hex string into a width-byte buffer.

    The decoded bytes are left-aligned and zero-padded on the right, so
    '0x41424344' with width 32 gives 41 42 43 44 followed by 28 zero bytes.
    Strings that decode to more than width bytes are rejected rather than
    truncated.
    """
    digits = strip_prefix(text)
    if len(digits) % 2:
        raise HexDecodeError(f"Hex string has odd length {len(digits)}: {text!r}")
    bad = sorted(set(digits) - _HEX_DIGITS)
    if bad:
        raise HexDecodeError(f"Non-hex characters {''.join(bad)!r} in {text!r}")

    data = bytes.fromhex(digits)
    if len(data) > width:
        raise DomainWidthError(f"Hex string decodes to {len(data)} bytes, buffer holds {width}")
    return data.ljust(width, b'\x00')


def domain_separator_from_hex(text: str, profile) -> bytes:
    """Decode a separator sized for the given profile."""
    return hex_to_bytes(text, get_profile(profile).width)


def parse_word(text: str) -> int:
    """Parse a pattern word written in hex ('0x80000003') or decimal ('3')."""
    raw = text.strip()
    try:
        if raw[:2] in ('0x', '0X'):
            value = int(raw[2:], 16)
        else:
            value = int(raw, 10)
    except ValueError:
        raise HexDecodeError(f"Not a pattern word: {text!r}") from None
    if value < 0 or value > WORD_MASK:
        raise LengthOverflowError(f"Pattern word {text!r} does not fit in 32 bits")
    return value
