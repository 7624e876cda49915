"""
Type System and Profile Registry for SAFE tags

An IO pattern is a sequence of sponge calls. Each call is an Operation:
a kind (ABSORB or SQUEEZE) and a length counted in field elements.

Domain separators have a fixed width per deployment profile. Profiles are
registered by name so that call sites state the width they expect instead
of relying on a global default.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List

from .errors import (
    LengthOverflowError, UnknownProfileError, DomainWidthError, OperationKindError,
)


# =============================================================================
# OPERATION KINDS (Flag registry)
# =============================================================================

ABSORB_FLAG = 0x80000000
SQUEEZE_FLAG = 0x00000000

LENGTH_MASK = 0x7FFFFFFF
MAX_LENGTH = LENGTH_MASK
WORD_MASK = 0xFFFFFFFF


class OpKind(IntEnum):
    """
    Sponge operation kinds.
    The value of each kind is the flag it sets in bit 31 of an encoded word.
    """
    SQUEEZE = SQUEEZE_FLAG
    ABSORB = ABSORB_FLAG

    @property
    def flag(self) -> int:
        return int(self)

    @classmethod
    def from_word(cls, word: int) -> 'OpKind':
        """Kind selected by the most significant bit of a 32-bit word."""
        return cls.ABSORB if word & ABSORB_FLAG else cls.SQUEEZE

    @classmethod
    def for_index(cls, index: int) -> 'OpKind':
        """Kind implied by position in an alternating-index pattern."""
        return cls.ABSORB if index % 2 == 0 else cls.SQUEEZE


@dataclass(frozen=True)
class Operation:
    """
    A single sponge call: kind and length in field elements.

    Lengths must fit in 31 bits since the encoded word reserves bit 31
    for the kind flag.
    """
    kind: OpKind
    length: int

    def __post_init__(self):
        # Accept raw flag values (ABSORB_FLAG, SQUEEZE_FLAG) and store the enum
        if isinstance(self.kind, bool):
            raise OperationKindError(f"Operation kind must be an OpKind, got {self.kind!r}")
        try:
            kind = OpKind(self.kind)
        except ValueError:
            raise OperationKindError(
                f"Operation kind {self.kind!r} is neither ABSORB nor SQUEEZE"
            ) from None
        object.__setattr__(self, 'kind', kind)

        if not isinstance(self.length, int) or isinstance(self.length, bool):
            raise TypeError(f"Operation length must be int, got {type(self.length).__name__}")
        if self.length < 0:
            raise LengthOverflowError(f"Operation length must be non-negative, got {self.length}")
        if self.length > MAX_LENGTH:
            raise LengthOverflowError(
                f"Operation length {self.length} exceeds 31-bit maximum {MAX_LENGTH}"
            )

    @classmethod
    def absorb(cls, length: int) -> 'Operation':
        return cls(OpKind.ABSORB, length)

    @classmethod
    def squeeze(cls, length: int) -> 'Operation':
        return cls(OpKind.SQUEEZE, length)

    @property
    def is_absorb(self) -> bool:
        return self.kind is OpKind.ABSORB

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.length})"


# =============================================================================
# DOMAIN SEPARATOR PROFILES
# =============================================================================

@dataclass(frozen=True)
class DomainProfile:
    """
    A deployment profile fixing the domain separator width in bytes.

    Profiles with different widths are not interchangeable: a separator
    built for one is rejected by the other.
    """
    name: str
    width: int

    def __post_init__(self):
        if self.width <= 0:
            raise ValueError(f"Profile width must be positive, got {self.width}")

    def check(self, domain_separator: bytes) -> bytes:
        """Return the separator as bytes if its width matches this profile."""
        data = bytes(domain_separator)
        if len(data) != self.width:
            raise DomainWidthError(
                f"Domain separator is {len(data)} bytes, "
                f"profile {self.name!r} requires {self.width}"
            )
        return data


SAFE_32 = DomainProfile('safe-32', 32)
SAFE_64 = DomainProfile('safe-64', 64)

_PROFILES: Dict[str, DomainProfile] = {
    SAFE_32.name: SAFE_32,
    SAFE_64.name: SAFE_64,
}


def register_profile(profile: DomainProfile) -> DomainProfile:
    """Add a profile to the registry. Re-registering a name with a different width fails."""
    existing = _PROFILES.get(profile.name)
    if existing is not None and existing != profile:
        raise ValueError(
            f"Profile {profile.name!r} already registered with width {existing.width}"
        )
    _PROFILES[profile.name] = profile
    return profile


def get_profile(profile) -> DomainProfile:
    """Resolve a DomainProfile or a registered profile name."""
    if isinstance(profile, DomainProfile):
        return profile
    try:
        return _PROFILES[profile]
    except (KeyError, TypeError):
        raise UnknownProfileError(
            f"Unknown profile {profile!r}; known profiles: {', '.join(profile_names())}"
        ) from None


def profile_names() -> List[str]:
    return sorted(_PROFILES)
