"""
Tests for hex parsing of domain separators and pattern words.
"""

import pytest

from safetag.errors import DomainWidthError, HexDecodeError, LengthOverflowError
from safetag.hexutil import (
    domain_separator_from_hex, hex_to_bytes, parse_word, strip_prefix,
)


class TestHexToBytes:

    def test_left_aligned_zero_padded(self):
        assert hex_to_bytes('0x4142', 4) == b'AB\x00\x00'

    def test_prefix_optional(self):
        assert hex_to_bytes('4142', 4) == hex_to_bytes('0x4142', 4)
        assert hex_to_bytes('0X4142', 4) == hex_to_bytes('0x4142', 4)

    def test_exact_width(self):
        assert hex_to_bytes('0x' + 'ff' * 32, 32) == b'\xff' * 32

    def test_empty_gives_zero_buffer(self):
        assert hex_to_bytes('0x', 8) == bytes(8)
        assert hex_to_bytes('', 8) == bytes(8)

    def test_mixed_case(self):
        assert hex_to_bytes('0xAbCd', 2) == b'\xab\xcd'

    def test_odd_length(self):
        with pytest.raises(HexDecodeError):
            hex_to_bytes('0x414', 32)

    def test_non_hex(self):
        with pytest.raises(HexDecodeError):
            hex_to_bytes('0xzz', 32)

    def test_too_long_not_truncated(self):
        with pytest.raises(DomainWidthError):
            hex_to_bytes('41' * 33, 32)

    def test_profile_width(self):
        assert len(domain_separator_from_hex('0x41424344', 'safe-32')) == 32
        assert len(domain_separator_from_hex('0x41424344', 'safe-64')) == 64

    def test_strip_prefix(self):
        assert strip_prefix('  0xab ') == 'ab'
        assert strip_prefix('ab') == 'ab'


class TestParseWord:

    def test_hex(self):
        assert parse_word('0x80000003') == 0x80000003

    def test_decimal(self):
        assert parse_word('3') == 3
        assert parse_word('0') == 0

    def test_too_wide(self):
        with pytest.raises(LengthOverflowError):
            parse_word('0x100000000')

    def test_negative(self):
        with pytest.raises(LengthOverflowError):
            parse_word('-1')

    def test_garbage(self):
        with pytest.raises(HexDecodeError):
            parse_word('abc')
        with pytest.raises(HexDecodeError):
            parse_word('0x')
