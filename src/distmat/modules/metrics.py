"""Pairwise scoring metrics for aligned sequences."""

import logging
from enum import Enum
from typing import Callable, FrozenSet, Union

import numpy as np

from distmat.core.types import GAP
from distmat.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Biochemically similar amino acid pairs, matched in either order
SIMILAR_PAIRS: FrozenSet[FrozenSet[str]] = frozenset(
    frozenset(pair) for pair in
    ("RK", "DE", "ND", "QE", "QN", "ST", "SA", "VI", "IL", "LM", "FY")
)


def is_similar(a: str, b: str) -> bool:
    """Return True if two distinct residues belong to the similarity set."""
    return frozenset((a, b)) in SIMILAR_PAIRS


def hamming(a: str, b: str) -> int:
    """
    Count positions where two aligned sequences differ.

    Gaps are compared like any other character.

    Args:
        a: First aligned sequence
        b: Second aligned sequence

    Returns:
        Number of mismatching positions
    """
    return sum(1 for char_a, char_b in zip(a, b) if char_a != char_b)


def _gap_compressed_percentage(
    a: str,
    b: str,
    is_match: Callable[[str, str], bool]
) -> float:
    """
    Scan an aligned pair counting a run of indel columns as one difference.

    Args:
        a: First aligned sequence
        b: Second aligned sequence
        is_match: Decides whether two non-gap residues count as matched

    Returns:
        Matched columns as a percentage of effective alignment length
    """
    matched_len = 0
    total_len = 0
    is_indel = False

    for char_a, char_b in zip(a, b):
        if char_a == GAP and char_b == GAP:
            # Empty column, does not end an indel run
            continue
        elif char_a == GAP or char_b == GAP:
            if not is_indel:
                is_indel = True
                total_len += 1
        elif is_match(char_a, char_b):
            matched_len += 1
            total_len += 1
            is_indel = False
        else:
            total_len += 1
            is_indel = False

    if total_len == 0:
        logger.debug("Alignment pair has no informative columns, scoring as 0.0")
        return 0.0

    return matched_len * 100.0 / total_len


def _identical(a: str, b: str) -> bool:
    return a == b


def _identical_or_similar(a: str, b: str) -> bool:
    return a == b or is_similar(a, b)


def identity(a: str, b: str) -> float:
    """
    Gap-compressed percent identity of two aligned sequences.

    Columns where both sequences are gapped are ignored, and consecutive
    columns with a gap in one sequence count as a single difference.
    Returns 0.0 when no column is informative.
    """
    return _gap_compressed_percentage(a, b, _identical)


def similarity(a: str, b: str) -> float:
    """
    Gap-compressed percent similarity of two aligned sequences.

    Same as identity, but residue pairs in SIMILAR_PAIRS also count as matched.
    """
    return _gap_compressed_percentage(a, b, _identical_or_similar)


class Metric(Enum):
    """Available distance metrics."""
    HAMMING = "hamming"
    IDENTITY = "identity"
    SIMILARITY = "similarity"

    @classmethod
    def from_name(cls, name: Union[str, "Metric"]) -> "Metric":
        """Resolve a metric from its command line name."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ConfigurationError(f"Unknown distance method '{name}' (choose from: {choices})")

    @property
    def diag_fill(self) -> Union[int, float]:
        """Value placed on the matrix diagonal (self comparison)."""
        return 0 if self is Metric.HAMMING else 100.0

    @property
    def dtype(self) -> type:
        return np.int64 if self is Metric.HAMMING else np.float64

    def __call__(self, a: str, b: str) -> Union[int, float]:
        return _SCORERS[self](a, b)


_SCORERS = {
    Metric.HAMMING: hamming,
    Metric.IDENTITY: identity,
    Metric.SIMILARITY: similarity,
}
