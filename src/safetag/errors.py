"""
Error taxonomy for SAFE tag computation.

Every error is a caller contract violation and derives from ValueError,
so code that already guards tag computation with ValueError keeps working.
"""


class SafeTagError(ValueError):
    """Base class for all safetag errors."""


class LengthOverflowError(SafeTagError):
    """An operation length or word does not fit the 31-bit length field."""


class DomainWidthError(SafeTagError):
    """A domain separator does not have the width its profile requires."""


class UnknownProfileError(SafeTagError):
    """A profile name is not registered."""


class HexDecodeError(SafeTagError):
    """A hex string is malformed (odd length or non-hex characters)."""


class TagInputError(SafeTagError):
    """A serialized tag input cannot be parsed."""


class OperationKindError(SafeTagError):
    """An operation kind is neither ABSORB nor SQUEEZE."""
