"""
Example Vectors and Conformance Runner

The vectors cover the behaviours that any SAFE tag implementation must
agree on:

1. Basic ABSORB/SQUEEZE patterns under both separator widths
2. Merge equivalence: [ABSORB(1), ABSORB(1), SQUEEZE(1)] == [ABSORB(2), SQUEEZE(1)]
3. Zero elision: [ABSORB(0), SQUEEZE(1)] == [SQUEEZE(1)]
4. Domain sensitivity: one pattern, two separators, two tags
5. Encoding equivalence: alternating lengths agree with explicit-flag words

Expected tags are first-16-bytes of SHA-256 over the canonical input.
"""

from __future__ import annotations
import hashlib
import json
import logging
import time
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from .hexutil import domain_separator_from_hex
from .tag import SafeTag, format_tag

logger = logging.getLogger(__name__)

WORDS = 'words'
LENGTHS = 'lengths'


# =============================================================================
# VECTOR DEFINITIONS
# =============================================================================

@dataclass(frozen=True)
class TagVector:
    """A named example: pattern, separator, profile and expectations."""
    name: str
    description: str
    pattern: List[int]
    domain_hex: str
    profile: str
    encoding: str = WORDS
    expected: Optional[str] = None
    same_as: Optional[str] = None
    differs_from: Optional[str] = None

    def compute(self) -> int:
        tagger = SafeTag(self.profile)
        separator = domain_separator_from_hex(self.domain_hex, self.profile)
        if self.encoding == LENGTHS:
            return tagger.tag_lengths(self.pattern, separator)
        return tagger.tag(self.pattern, separator)

    def pattern_text(self) -> str:
        if self.encoding == LENGTHS:
            return '[' + ', '.join(str(n) for n in self.pattern) + ']'
        return '[' + ', '.join('0x%08x' % w for w in self.pattern) + ']'


DEFAULT_VECTORS: List[TagVector] = [
    TagVector(
        name='basic',
        description='ABSORB(3), SQUEEZE(1)',
        pattern=[0x80000003, 0x00000001],
        domain_hex='0x41424344',
        profile='safe-64',
        expected='0ea2aa7e178caa74de1f91e83ad43a81',
    ),
    TagVector(
        name='merkle',
        description='ABSORB(1), ABSORB(1), SQUEEZE(1)',
        pattern=[0x80000001, 0x80000001, 0x00000001],
        domain_hex='0x41424344',
        profile='safe-64',
        expected='08e2da1eb5257f918e9c15b5605a3516',
    ),
    TagVector(
        name='commitment',
        description='ABSORB(3), SQUEEZE(1)',
        pattern=[0x80000003, 0x00000001],
        domain_hex='0x41424344',
        profile='safe-32',
        expected='66b7880be9effaf179c219aa02103ffb',
    ),
    TagVector(
        name='multi_squeeze',
        description='ABSORB(3), SQUEEZE(2)',
        pattern=[0x80000003, 0x00000002],
        domain_hex='0x41424344',
        profile='safe-32',
        expected='9b996aea6640542b9dac8fc397295f18',
    ),
    TagVector(
        name='zero_length',
        description='ABSORB(0), SQUEEZE(1)',
        pattern=[0x80000000, 0x00000001],
        domain_hex='0x41424344',
        profile='safe-32',
        expected='1eb47cd624d2a23f7d26746492a6f9f6',
    ),
    TagVector(
        name='squeeze_only',
        description='SQUEEZE(1)',
        pattern=[0x00000001],
        domain_hex='0x41424344',
        profile='safe-32',
        same_as='zero_length',
    ),
    TagVector(
        name='other_domain',
        description='ABSORB(3), SQUEEZE(1) under a different separator',
        pattern=[0x80000003, 0x00000001],
        domain_hex='0x42434445',
        profile='safe-32',
        expected='d8ce0d88595fad34bb02efd5a7c6b035',
        differs_from='commitment',
    ),
    TagVector(
        name='aggregation',
        description='ABSORB(3), ABSORB(3), SQUEEZE(3) -> ABSORB(6), SQUEEZE(3)',
        pattern=[0x80000003, 0x80000003, 0x00000003],
        domain_hex='0x4142',
        profile='safe-64',
        expected='1d2a0ee68d0d5f059fcc63ef2e77fdbc',
    ),
    TagVector(
        name='interleaved',
        description='ABSORB(2), SQUEEZE(2), ABSORB(2)',
        pattern=[0x80000002, 0x00000002, 0x80000002],
        domain_hex='0x41424344',
        profile='safe-32',
        expected='ce3bb9ee4b2d41c42e9cdda38afe8b6a',
    ),
    TagVector(
        name='merge_raw',
        description='ABSORB(1), ABSORB(1), SQUEEZE(1)',
        pattern=[0x80000001, 0x80000001, 0x00000001],
        domain_hex='0x41424344',
        profile='safe-32',
        expected='af01d5d39751a2eb3d24d0c27c9553a7',
    ),
    TagVector(
        name='merge_aggregated',
        description='ABSORB(2), SQUEEZE(1)',
        pattern=[0x80000002, 0x00000001],
        domain_hex='0x41424344',
        profile='safe-32',
        same_as='merge_raw',
    ),
    TagVector(
        name='merge_lengths',
        description='lengths [1, 0, 1, 1] -> ABSORB(2), SQUEEZE(1)',
        pattern=[1, 0, 1, 1],
        domain_hex='0x41424344',
        profile='safe-32',
        encoding=LENGTHS,
        same_as='merge_raw',
    ),
]


# =============================================================================
# RUNNER
# =============================================================================

@dataclass
class VectorResult:
    """Result of a single vector."""
    name: str
    description: str
    encoding: str
    pattern: str
    domain_hex: str
    profile: str
    tag: str
    passed: bool
    details: str = ""


@dataclass
class VectorReport:
    """Full run over a vector set."""
    timestamp: str
    total: int
    passed: int
    failed: int
    results: List[VectorResult] = field(default_factory=list)
    vectors_hash: str = ""

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'total': self.total,
            'passed': self.passed,
            'failed': self.failed,
            'results': [asdict(r) for r in self.results],
            'vectors_hash': self.vectors_hash,
        }


class VectorRunner:
    """
    Computes every vector and checks it against its expected tag and its
    same_as / differs_from relations.
    """

    def __init__(self, vectors: Optional[List[TagVector]] = None):
        self.vectors = list(DEFAULT_VECTORS if vectors is None else vectors)

    def run(self) -> VectorReport:
        tags: Dict[str, int] = {v.name: v.compute() for v in self.vectors}
        results = [self._check(v, tags) for v in self.vectors]
        passed = sum(1 for r in results if r.passed)

        report = VectorReport(
            timestamp=time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            total=len(results),
            passed=passed,
            failed=len(results) - passed,
            results=results,
            vectors_hash=self.vectors_hash(),
        )
        logger.debug("vector run: %d/%d passed", report.passed, report.total)
        return report

    def _check(self, vector: TagVector, tags: Dict[str, int]) -> VectorResult:
        tag = tags[vector.name]
        problems: List[str] = []

        if vector.expected is not None and format_tag(tag) != vector.expected:
            problems.append(f"expected {vector.expected}")
        if vector.same_as is not None:
            if vector.same_as not in tags:
                problems.append(f"unknown vector {vector.same_as!r}")
            elif tags[vector.same_as] != tag:
                problems.append(f"differs from {vector.same_as}")
        if vector.differs_from is not None:
            if vector.differs_from not in tags:
                problems.append(f"unknown vector {vector.differs_from!r}")
            elif tags[vector.differs_from] == tag:
                problems.append(f"collides with {vector.differs_from}")

        return VectorResult(
            name=vector.name,
            description=vector.description,
            encoding=vector.encoding,
            pattern=vector.pattern_text(),
            domain_hex=vector.domain_hex,
            profile=vector.profile,
            tag=format_tag(tag),
            passed=not problems,
            details='; '.join(problems),
        )

    def vectors_json(self) -> str:
        return json.dumps([asdict(v) for v in self.vectors], indent=2, sort_keys=True)

    def vectors_hash(self) -> str:
        return hashlib.sha256(self.vectors_json().encode('utf-8')).hexdigest()

    def write(self, output_dir: Path, report: VectorReport) -> Path:
        """Write vectors.json and report.json; return the report path."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        with open(output_dir / 'vectors.json', 'w') as f:
            f.write(self.vectors_json())

        report_path = output_dir / 'report.json'
        with open(report_path, 'w') as f:
            json.dump(report.to_dict(), f, indent=2)
        return report_path
