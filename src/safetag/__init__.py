"""
safetag: SAFE sponge tags from IO patterns

Tag = Trunc128(SHA-256(Ser(Aggregate(pattern)) ‖ domain_separator))

- Decode the IO pattern (explicit-flag words or alternating lengths)
- Merge consecutive calls of the same kind, drop zero lengths
- Serialize as big-endian 32-bit words followed by the domain separator
- Hash with SHA-256 and keep the first 128 bits, big-endian

Usage:
    from safetag import compute_tag, compute_tag_from_lengths, format_tag
    from safetag import domain_separator_from_hex

    ds = domain_separator_from_hex('0x41424344', 'safe-32')
    tag = compute_tag([0x80000003, 0x00000001], ds, 'safe-32')
    print(format_tag(tag))

    # Same tag, alternating-index encoding
    assert compute_tag_from_lengths([3, 1], ds, 'safe-32') == tag

    # Bound to one profile
    from safetag import SafeTag
    tagger = SafeTag('safe-64')
"""

# Types
from .types import (
    OpKind,
    Operation,
    DomainProfile,
    SAFE_32,
    SAFE_64,
    ABSORB_FLAG,
    SQUEEZE_FLAG,
    MAX_LENGTH,
    get_profile,
    register_profile,
    profile_names,
)

# Errors
from .errors import (
    SafeTagError,
    LengthOverflowError,
    DomainWidthError,
    UnknownProfileError,
    HexDecodeError,
    TagInputError,
    OperationKindError,
)

# Aggregation
from .pattern import (
    decode_words,
    decode_lengths,
    aggregate,
    aggregate_words,
    aggregate_lengths,
    encode_word,
    encode_words,
)

# Serialization
from .serializer import build_input, serialize

# Main API
from .tag import (
    SafeTag,
    compute_tag,
    compute_tag_from_lengths,
    compute_tag_from_operations,
    hash_to_tag,
    format_tag,
    tag_to_bytes,
)

# Hex helpers
from .hexutil import hex_to_bytes, domain_separator_from_hex

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Types
    "OpKind",
    "Operation",
    "DomainProfile",
    "SAFE_32",
    "SAFE_64",
    "ABSORB_FLAG",
    "SQUEEZE_FLAG",
    "MAX_LENGTH",
    "get_profile",
    "register_profile",
    "profile_names",
    # Errors
    "SafeTagError",
    "LengthOverflowError",
    "DomainWidthError",
    "UnknownProfileError",
    "HexDecodeError",
    "TagInputError",
    "OperationKindError",
    # Aggregation
    "decode_words",
    "decode_lengths",
    "aggregate",
    "aggregate_words",
    "aggregate_lengths",
    "encode_word",
    "encode_words",
    # Serialization
    "build_input",
    "serialize",
    # Main API
    "SafeTag",
    "compute_tag",
    "compute_tag_from_lengths",
    "compute_tag_from_operations",
    "hash_to_tag",
    "format_tag",
    "tag_to_bytes",
    # Hex helpers
    "hex_to_bytes",
    "domain_separator_from_hex",
]
