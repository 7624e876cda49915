"""
SAFE Tag: The Complete Construction

    Tag = Trunc128(SHA-256(Ser(Aggregate(Decode(pattern))) ‖ DS))

Decode turns the caller's IO pattern into Operations (explicit-flag words
or alternating lengths), Aggregate merges runs, Ser renders big-endian
words and appends the domain separator, and the first 16 bytes of the
SHA-256 digest are read as a big-endian integer.

SHA-256 is part of the interoperability contract: every implementation
targeting the same sponge must hash with it.

Collision sources, if Tag(p, ds) = Tag(p', ds'):
1. p and p' aggregate to the same canonical pattern and ds = ds', or
2. SHA-256 collided on distinct inputs, or
3. truncation to 128 bits collided (birthday bound at 2^64)
"""

from __future__ import annotations
import hashlib
import logging
from typing import Iterable, List

from .pattern import decode_lengths, decode_words
from .serializer import TagInput, build_input
from .types import DomainProfile, Operation, get_profile

logger = logging.getLogger(__name__)

TAG_SIZE = 16  # 128 bits
TAG_BITS = TAG_SIZE * 8


# =============================================================================
# TAG HASHER
# =============================================================================

def hash_to_tag(data: bytes) -> int:
    """SHA-256 of data, truncated to the first 16 bytes, big-endian."""
    digest = hashlib.sha256(data).digest()
    return int.from_bytes(digest[:TAG_SIZE], 'big')


def tag_to_bytes(tag: int) -> bytes:
    """Big-endian 16-byte form of a tag."""
    return tag.to_bytes(TAG_SIZE, 'big')


def format_tag(tag: int, prefix: bool = False) -> str:
    """Render a tag as 32 lowercase hex digits, zero padded."""
    text = '%032x' % tag
    return '0x' + text if prefix else text


# =============================================================================
# SAFE TAG MAIN CLASS
# =============================================================================

class SafeTag:
    """
    Tag computation bound to one domain-separator profile.

    Usage:
        tagger = SafeTag('safe-32')

        # Explicit-flag words
        tag = tagger.tag([0x80000003, 0x00000001], separator)

        # Alternating lengths (ABSORB, SQUEEZE, ABSORB, ...)
        tag = tagger.tag_lengths([3, 1], separator)

    Instances hold no mutable state and may be shared between threads.
    """

    def __init__(self, profile):
        """
        Args:
            profile: DomainProfile or registered profile name. There is no
                default; the width is a deployment decision.
        """
        self.profile: DomainProfile = get_profile(profile)

    def __repr__(self) -> str:
        return f"SafeTag(profile={self.profile.name!r})"

    def build_input(self, operations: Iterable[Operation], domain_separator: bytes) -> TagInput:
        return build_input(operations, domain_separator, self.profile)

    def serialize(self, operations: Iterable[Operation], domain_separator: bytes) -> bytes:
        """Canonical hash input for a decoded pattern."""
        return self.build_input(operations, domain_separator).to_bytes()

    def tag_operations(self, operations: Iterable[Operation], domain_separator: bytes) -> int:
        """
        Compute the tag of a decoded pattern.

        Raises:
            DomainWidthError: separator width does not match the profile
            LengthOverflowError: an aggregated length exceeds 31 bits
        """
        tag_input = self.build_input(operations, domain_separator)
        data = tag_input.to_bytes()
        tag = hash_to_tag(data)
        logger.debug(
            "profile=%s pattern=%r input_len=%d tag=%s",
            self.profile.name, list(tag_input.operations), len(data), format_tag(tag),
        )
        return tag

    def tag(self, words: Iterable[int], domain_separator: bytes) -> int:
        """Tag of an explicit-flag pattern."""
        return self.tag_operations(decode_words(words), domain_separator)

    def tag_lengths(self, lengths: Iterable[int], domain_separator: bytes) -> int:
        """Tag of an alternating-index pattern."""
        return self.tag_operations(decode_lengths(lengths), domain_separator)

    def tag_hex(self, words: Iterable[int], domain_separator: bytes, prefix: bool = False) -> str:
        return format_tag(self.tag(words, domain_separator), prefix=prefix)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def compute_tag(io_pattern: Iterable[int], domain_separator: bytes, profile) -> int:
    """
    Compute the SAFE tag of an explicit-flag IO pattern.

    Args:
        io_pattern: 32-bit words, MSB set for ABSORB, low 31 bits = length
        domain_separator: separator bytes, exactly profile.width long
        profile: DomainProfile or registered name ('safe-32', 'safe-64')

    Returns:
        The 128-bit tag as an int
    """
    return SafeTag(profile).tag(io_pattern, domain_separator)


def compute_tag_from_lengths(lengths: Iterable[int], domain_separator: bytes, profile) -> int:
    """Compute the SAFE tag of an alternating-index IO pattern."""
    return SafeTag(profile).tag_lengths(lengths, domain_separator)


def compute_tag_from_operations(
    operations: Iterable[Operation],
    domain_separator: bytes,
    profile,
) -> int:
    """Compute the SAFE tag of an already decoded pattern."""
    return SafeTag(profile).tag_operations(operations, domain_separator)


def explain(operations: Iterable[Operation], domain_separator: bytes, profile) -> List[str]:
    """Human-readable breakdown of each stage, used by the CLI."""
    tag_input = build_input(operations, domain_separator, get_profile(profile))
    data = tag_input.to_bytes()
    return [
        f"aggregated: {list(tag_input.operations)}",
        f"words:      {' '.join('%08x' % w for w in tag_input.words) or '(none)'}",
        f"input:      {data.hex()}",
        f"tag:        {format_tag(hash_to_tag(data), prefix=True)}",
    ]
