"""Parallel evaluation of a metric over all unordered sequence pairs."""

import logging
import math
import multiprocessing
from concurrent.futures import ProcessPoolExecutor
from itertools import combinations
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import psutil

from distmat.core.types import EngineConfig, SequenceRecord
from distmat.modules.metrics import Metric

logger = logging.getLogger(__name__)

MetricLike = Union[Metric, Callable[[str, str], Union[int, float]]]

# Per-process state installed by the pool initializer
_worker_sequences: Optional[List[str]] = None
_worker_metric: Optional[MetricLike] = None


def _init_worker(sequences: List[str], metric: MetricLike) -> None:
    global _worker_sequences, _worker_metric
    _worker_sequences = sequences
    _worker_metric = metric


def _score_pair(pair: Tuple[int, int]) -> Union[int, float]:
    i, j = pair
    return _worker_metric(_worker_sequences[i], _worker_sequences[j])


def pair_indices(n: int) -> Iterator[Tuple[int, int]]:
    """
    Enumerate unordered index pairs in row-major triangular order.

    Yields (0, 1), (0, 2), ..., (0, n-1), (1, 2), ..., (n-2, n-1).
    """
    return combinations(range(n), 2)


def physical_core_count() -> int:
    """Number of physical CPU cores, falling back to logical cores."""
    cores = psutil.cpu_count(logical=False)
    if not cores:
        cores = multiprocessing.cpu_count()
    return cores


def resolve_thread_count(requested: Optional[int]) -> int:
    """
    Clamp a requested worker count to the available physical cores.

    Args:
        requested: Requested number of workers; None, zero, negative or
            more than the physical core count selects all physical cores

    Returns:
        Number of workers to use
    """
    max_cpus = physical_core_count()
    if requested is None or requested <= 0 or requested > max_cpus:
        return max_cpus
    return requested


class PairwiseEngine:
    """
    Evaluates a metric on every unordered pair of sequences.

    Results always come back in canonical pair order (see pair_indices)
    whatever order the workers finish in.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self.threads = resolve_thread_count(self.config.threads)

    def compute(
        self,
        sequences: Sequence[Union[str, SequenceRecord]],
        metric: MetricLike
    ) -> np.ndarray:
        """
        Compute the condensed pairwise score vector.

        Args:
            sequences: Aligned sequences (strings or SequenceRecord objects)
            metric: Metric member or a picklable function of two sequences

        Returns:
            Read-only 1-D array of length N*(N-1)/2 in canonical pair order
        """
        seqs = [s.sequence if isinstance(s, SequenceRecord) else str(s) for s in sequences]
        pairs = list(pair_indices(len(seqs)))
        dtype = metric.dtype if isinstance(metric, Metric) else None

        if not pairs:
            scores = []
        elif self.threads == 1 or len(pairs) < self.config.parallel_threshold:
            logger.debug(f"Scoring {len(pairs)} pairs sequentially")
            scores = [metric(seqs[i], seqs[j]) for i, j in pairs]
        else:
            scores = self._compute_parallel(seqs, pairs, metric)

        condensed = np.asarray(scores, dtype=dtype)
        condensed.setflags(write=False)
        return condensed

    def _compute_parallel(
        self,
        seqs: List[str],
        pairs: List[Tuple[int, int]],
        metric: MetricLike
    ) -> List[Union[int, float]]:
        chunksize = self.config.chunksize or max(1, math.ceil(len(pairs) / (self.threads * 4)))
        logger.info(
            f"Scoring {len(pairs)} pairs in parallel using {self.threads} processes "
            f"(chunksize {chunksize})"
        )

        with ProcessPoolExecutor(
            max_workers=self.threads,
            initializer=_init_worker,
            initargs=(seqs, metric)
        ) as executor:
            # Executor.map yields in submission order
            return list(executor.map(_score_pair, pairs, chunksize=chunksize))


def pairwise_distances(
    sequences: Sequence[Union[str, SequenceRecord]],
    metric: MetricLike,
    threads: int = 0
) -> np.ndarray:
    """Compute the condensed vector with a default engine configuration."""
    return PairwiseEngine(EngineConfig(threads=threads)).compute(sequences, metric)
