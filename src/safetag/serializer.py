"""
Canonical Serializer

TAG_INPUT = WORD_0 ‖ WORD_1 ‖ ... ‖ WORD_n-1 ‖ DOMAIN_SEPARATOR

Each WORD is the big-endian 4-byte encoding of one aggregated operation
(bit 31 = ABSORB flag, bits 0-30 = length). The domain separator follows
verbatim: no length prefix, no padding beyond its own bytes.

The word region carries no count. Parsing therefore needs the profile,
whose width says where the separator starts.
"""

from __future__ import annotations
import struct
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .errors import TagInputError
from .pattern import aggregate, decode_word, encode_word, is_canonical
from .types import DomainProfile, Operation, get_profile

WORD_SIZE = 4


# =============================================================================
# TAG INPUT STRUCTURE
# =============================================================================

@dataclass(frozen=True)
class TagInput:
    """
    The hash input for a SAFE tag.

    operations must already be aggregated, and the separator width is not
    known here. Callers holding a raw pattern use build_input(), which
    aggregates and checks the width against a profile.
    """
    operations: Tuple[Operation, ...]
    domain_separator: bytes

    def __post_init__(self):
        operations = tuple(self.operations)
        if not is_canonical(list(operations)):
            raise TagInputError(f"Operations are not aggregated: {list(operations)}")
        object.__setattr__(self, 'operations', operations)
        object.__setattr__(self, 'domain_separator', bytes(self.domain_separator))

    def to_bytes(self) -> bytes:
        """Produce the canonical byte string."""
        words = b''.join(struct.pack('>I', encode_word(op)) for op in self.operations)
        return words + self.domain_separator

    @classmethod
    def from_bytes(cls, data: bytes, profile) -> 'TagInput':
        """Parse a canonical byte string produced for the given profile."""
        profile = get_profile(profile)
        if len(data) < profile.width:
            raise TagInputError(
                f"Input is {len(data)} bytes, shorter than the "
                f"{profile.width}-byte domain separator of {profile.name!r}"
            )
        split = len(data) - profile.width
        if split % WORD_SIZE:
            raise TagInputError(
                f"Word region is {split} bytes, not a multiple of {WORD_SIZE}"
            )
        operations = tuple(
            decode_word(word)
            for (word,) in struct.iter_unpack('>I', data[:split])
        )
        return cls(operations=operations, domain_separator=bytes(data[split:]))

    @property
    def words(self) -> List[int]:
        return [encode_word(op) for op in self.operations]


# =============================================================================
# SERIALIZATION
# =============================================================================

def build_input(
    operations: Iterable[Operation],
    domain_separator: bytes,
    profile: DomainProfile,
) -> TagInput:
    """Aggregate a decoded pattern and pair it with a checked separator."""
    profile = get_profile(profile)
    separator = profile.check(domain_separator)
    return TagInput(operations=tuple(aggregate(operations)), domain_separator=separator)


def serialize(
    operations: Iterable[Operation],
    domain_separator: bytes,
    profile: DomainProfile,
) -> bytes:
    """Aggregate, encode and append the domain separator."""
    return build_input(operations, domain_separator, profile).to_bytes()
