"""
Pattern Aggregator

Two front-ends decode an IO pattern into Operations:

- decode_words:   explicit-flag 32-bit words (MSB = ABSORB, low 31 bits = length)
- decode_lengths: plain lengths, kind taken from position (even = ABSORB)

Both feed the same aggregator, which merges consecutive calls of the same
kind and drops zero-length calls. The aggregated sequence is the canonical
form: two patterns with the same canonical form get the same tag.

    [ABSORB(1), ABSORB(1), SQUEEZE(1)]  ->  [ABSORB(2), SQUEEZE(1)]
    [ABSORB(0), SQUEEZE(1)]             ->  [SQUEEZE(1)]
"""

from __future__ import annotations
import logging
from typing import Iterable, List

from .errors import LengthOverflowError
from .types import (
    Operation, OpKind, LENGTH_MASK, MAX_LENGTH, WORD_MASK,
)

logger = logging.getLogger(__name__)


# =============================================================================
# DECODERS
# =============================================================================

def decode_word(word: int) -> Operation:
    """Decode one explicit-flag word into an Operation."""
    if word < 0 or word > WORD_MASK:
        raise LengthOverflowError(f"Pattern word {word:#x} does not fit in 32 bits")
    return Operation(OpKind.from_word(word), word & LENGTH_MASK)


def decode_words(words: Iterable[int]) -> List[Operation]:
    """Decode an explicit-flag IO pattern."""
    return [decode_word(word) for word in words]


def decode_lengths(lengths: Iterable[int]) -> List[Operation]:
    """
    Decode an alternating-index IO pattern.

    lengths[0] is an ABSORB, lengths[1] a SQUEEZE, and so on. Lengths must
    fit in 31 bits; anything larger would collide with the kind flag.
    """
    return [
        Operation(OpKind.for_index(index), length)
        for index, length in enumerate(lengths)
    ]


# =============================================================================
# AGGREGATION
# =============================================================================

def _flushed(kind: OpKind, total: int) -> Operation:
    if total > MAX_LENGTH:
        raise LengthOverflowError(
            f"Aggregated {kind.name} length {total} exceeds 31-bit maximum {MAX_LENGTH}"
        )
    return Operation(kind, total)


def aggregate(operations: Iterable[Operation]) -> List[Operation]:
    """
    Merge consecutive operations of the same kind and drop zero lengths.

    Keeps one running sum per kind and the kind that was last active. A
    change of kind flushes the other kind's run (if nonzero) and starts a
    new run. Remaining runs are flushed once the input is exhausted.

    The result never holds two adjacent entries of the same kind, so
    aggregate(aggregate(ops)) == aggregate(ops).
    """
    result: List[Operation] = []
    absorb_sum = 0
    squeeze_sum = 0
    last_was_absorb = False

    for op in operations:
        if op.length == 0:
            continue

        if op.is_absorb:
            if last_was_absorb:
                absorb_sum += op.length
            else:
                if squeeze_sum > 0:
                    result.append(_flushed(OpKind.SQUEEZE, squeeze_sum))
                    squeeze_sum = 0
                absorb_sum = op.length
            last_was_absorb = True
        else:
            if not last_was_absorb:
                squeeze_sum += op.length
            else:
                if absorb_sum > 0:
                    result.append(_flushed(OpKind.ABSORB, absorb_sum))
                    absorb_sum = 0
                squeeze_sum = op.length
            last_was_absorb = False

    if absorb_sum > 0:
        result.append(_flushed(OpKind.ABSORB, absorb_sum))
    if squeeze_sum > 0:
        result.append(_flushed(OpKind.SQUEEZE, squeeze_sum))

    return result


def aggregate_words(words: Iterable[int]) -> List[Operation]:
    """Decode and aggregate an explicit-flag pattern."""
    return aggregate(decode_words(words))


def aggregate_lengths(lengths: Iterable[int]) -> List[Operation]:
    """Decode and aggregate an alternating-index pattern."""
    return aggregate(decode_lengths(lengths))


def is_canonical(operations: List[Operation]) -> bool:
    """True if no entry is empty and no two neighbours share a kind."""
    if any(op.length == 0 for op in operations):
        return False
    return all(a.kind is not b.kind for a, b in zip(operations, operations[1:]))


# =============================================================================
# WORD ENCODING
# =============================================================================

def encode_word(op: Operation) -> int:
    """Encode an Operation as a 32-bit word: kind flag in bit 31, length below."""
    if op.length > MAX_LENGTH:
        raise LengthOverflowError(
            f"Operation length {op.length} exceeds 31-bit maximum {MAX_LENGTH}"
        )
    return op.kind.flag | op.length


def encode_words(operations: Iterable[Operation]) -> List[int]:
    return [encode_word(op) for op in operations]
