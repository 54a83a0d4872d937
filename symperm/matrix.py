"""
matrix: permutation matrices as numpy arrays.

The matrix of a permutation p of [1, n] has a single 1 in each column j, in row p(j). With this convention the map
p -> M(p) is a homomorphism, M(p) M(q) = M(pq), and M(p) sends the coordinate vector e_j to e_{p(j)}.
"""
from __future__ import annotations

import numpy as np
import numpy.typing as npt

from .errors import InvalidPermutationMatrixError
from .permutations import Permutation, PermutationBase


def to_matrix(perm: PermutationBase) -> npt.NDArray:
    """
    The n x n permutation matrix of perm, with integer entries.

    >>> to_matrix(Permutation([3, 1, 2])).tolist()
    [[0, 1, 0], [0, 0, 1], [1, 0, 0]]
    """
    word = perm.to_permutation().data
    n = len(word)
    M = np.zeros((n, n), dtype=int)
    M[np.asarray(word, dtype=int) - 1, np.arange(n)] = 1
    return M


def from_matrix(matrix: npt.ArrayLike) -> Permutation:
    """
    Recover a permutation from its matrix. The matrix must be square with 0/1 entries and exactly one 1 in every row
    and every column.

    >>> from_matrix([[0, 1, 0], [0, 0, 1], [1, 0, 0]])
    Permutation([3, 1, 2])
    """
    M = np.asarray(matrix)
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        raise InvalidPermutationMatrixError(f"A permutation matrix must be square, got shape {M.shape}")
    if not np.all((M == 0) | (M == 1)):
        raise InvalidPermutationMatrixError("A permutation matrix must have 0/1 entries")
    if not (np.all(M.sum(axis=0) == 1) and np.all(M.sum(axis=1) == 1)):
        raise InvalidPermutationMatrixError("A permutation matrix must have a single 1 in each row and column")

    if M.shape[0] == 0:
        return Permutation([])

    return Permutation([int(i) + 1 for i in np.argmax(M, axis=0)])
