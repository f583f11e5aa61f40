"""Core data types and structures for distance matrix computation."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

GAP = "-"


@dataclass(frozen=True)
class SequenceRecord:
    """Named aligned sequence read from the input alignment."""
    name: str
    sequence: str
    description: str = ""

    def __len__(self) -> int:
        return len(self.sequence)


@dataclass(frozen=True)
class EngineConfig:
    """Concurrency policy for the pairwise engine."""
    threads: int = 0  # <= 0 means all physical cores
    chunksize: Optional[int] = None
    parallel_threshold: int = 500


@dataclass
class ValidationResult:
    """Result of validation operation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)
