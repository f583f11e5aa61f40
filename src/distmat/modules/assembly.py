"""Reconstruction of dense symmetric matrices from condensed vectors."""

import logging
import math
from typing import Sequence, Union

import numpy as np
import pandas as pd

from distmat.core.exceptions import MatrixShapeError, ValidationError

logger = logging.getLogger(__name__)

SIZE_TOLERANCE = 1e-6


def infer_matrix_size(length: int) -> int:
    """
    Solve N*(N-1)/2 == length for the matrix dimension N.

    Args:
        length: Number of elements in a condensed vector

    Returns:
        Matrix dimension N

    Raises:
        MatrixShapeError: length is not a triangular number
    """
    n = (1.0 + math.sqrt(1 + 8 * length)) / 2.0
    if abs(n - round(n)) >= SIZE_TOLERANCE:
        raise MatrixShapeError(
            f"Condensed vector of length {length} does not correspond to a square matrix",
            length=length
        )
    return int(round(n))


def condensed_index(i: int, j: int, n: int) -> int:
    """Position of pair (i, j) in a condensed vector for an n x n matrix."""
    if i == j:
        raise ValueError(f"Diagonal element ({i}, {j}) has no condensed index")
    if i > j:
        i, j = j, i
    if j >= n or i < 0:
        raise IndexError(f"Pair ({i}, {j}) out of range for a {n} x {n} matrix")
    return n * i - i * (i + 1) // 2 + (j - i - 1)


def condensed_to_matrix(
    condensed: Union[Sequence, np.ndarray],
    diag_fill: Union[int, float]
) -> np.ndarray:
    """
    Expand a condensed pairwise vector into a dense symmetric matrix.

    Both (i, j) and (j, i) are written from the same element, so the result
    is exactly symmetric.

    Args:
        condensed: Scores in canonical pair order
        diag_fill: Value for the diagonal

    Returns:
        Read-only N x N array

    Raises:
        MatrixShapeError: Vector length is not N*(N-1)/2 for any N
    """
    condensed = np.asarray(condensed)
    n = infer_matrix_size(len(condensed))

    result = np.full((n, n), diag_fill, dtype=np.result_type(condensed, diag_fill))
    k = 0
    for i in range(n):
        for j in range(i + 1, n):
            result[i, j] = condensed[k]
            result[j, i] = condensed[k]
            k += 1

    result.setflags(write=False)
    logger.debug(f"Assembled {n} x {n} matrix from {len(condensed)} pairwise values")
    return result


def matrix_to_frame(matrix: np.ndarray, names: Sequence[str]) -> pd.DataFrame:
    """
    Label a square matrix with sequence names.

    Raises:
        ValidationError: Number of names differs from the matrix size
    """
    if matrix.shape != (len(names), len(names)):
        raise ValidationError(
            f"{len(names)} sequence names do not match a matrix of shape {matrix.shape}"
        )
    frame = pd.DataFrame(matrix, index=list(names), columns=list(names))
    frame.index.name = "seqs"
    return frame
