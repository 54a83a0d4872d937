from .compiled import CompiledPermutation
from .coxeter import CoxeterDecomposition, decompose, recompose, reduce
from .errors import (
    ArgumentError,
    DegreeMismatchError,
    InvalidCyclesError,
    InvalidPermutationError,
    InvalidPermutationMatrixError,
    NoSquareRootError,
    PermutationError,
    PermutationIndexError,
    RankError,
)
from .generate import PermGen, derangements
from .matrix import from_matrix, to_matrix
from .permutations import Permutation, PermutationBase, compose_all
from .roots import sqrt
from .sampling import ewens_permutation, random_permutation

__all__ = [
    "ArgumentError",
    "CompiledPermutation",
    "CoxeterDecomposition",
    "DegreeMismatchError",
    "InvalidCyclesError",
    "InvalidPermutationError",
    "InvalidPermutationMatrixError",
    "NoSquareRootError",
    "PermGen",
    "Permutation",
    "PermutationBase",
    "PermutationError",
    "PermutationIndexError",
    "RankError",
    "compose_all",
    "decompose",
    "derangements",
    "ewens_permutation",
    "from_matrix",
    "random_permutation",
    "recompose",
    "reduce",
    "sqrt",
    "to_matrix",
]
