"""
Pairwise Distance Matrices for Aligned Sequences

Computes all-pairs hamming, gap-compressed identity and similarity matrices
over a multiple sequence alignment, spreading the pairs across CPU cores.
"""

__version__ = "0.1.0"
__author__ = "Distmat Developers"

from .core.types import EngineConfig, SequenceRecord
from .modules.metrics import Metric, hamming, identity, similarity

# Convenience re-exports for direct functional use
from .modules.engine import PairwiseEngine, pair_indices, pairwise_distances
from .modules.assembly import condensed_index, condensed_to_matrix, infer_matrix_size
from .modules.fasta import read_fasta
