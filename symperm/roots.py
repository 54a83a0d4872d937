"""
roots: square roots of permutations.

Squaring an odd cycle gives another cycle of the same length, and squaring a cycle of even length 2m splits it into
two m-cycles. So p has a square root exactly when, for every even length, p has an even number of cycles of that
length. A root is built by weaving: each odd cycle is woven with itself, and even cycles of equal length are
paired off and interleaved.
"""
from __future__ import annotations

from typing import Sequence

from .errors import NoSquareRootError
from .permutations import Permutation


def weave(cycle: Sequence[int]) -> tuple[int, ...]:
    """
    The cycle whose square is the given cycle of odd length, found by stepping through it (L + 1) / 2 places at a
    time.

    >>> weave((1, 2, 3, 4, 5))
    (1, 4, 2, 5, 3)
    """
    L = len(cycle)
    assert L % 2 == 1, f"Cannot weave the even-length cycle {cycle} with itself"
    half = (L + 1) // 2
    return tuple(cycle[(i * half) % L] for i in range(L))


def interleave(a: Sequence[int], b: Sequence[int]) -> tuple[int, ...]:
    """
    The cycle whose square is the product of two disjoint cycles of the same length.

    >>> interleave((1, 2), (3, 4))
    (1, 3, 2, 4)
    """
    assert len(a) == len(b), f"Cycles {a} and {b} have different lengths"
    return tuple(x for pair in zip(a, b) for x in pair)


def sqrt(perm: Permutation) -> Permutation:
    """
    Return a permutation q such that q * q == perm. There may be other square roots besides the one returned.

    >>> sqrt(Permutation([2, 1, 4, 3]))
    Permutation([3, 4, 2, 1])
    >>> sqrt(Permutation([2, 1]))
    Traceback (most recent call last):
    ...
    symperm.errors.NoSquareRootError: (1,2) does not have a square root
    """
    cycles = sorted(perm.cycles(), key=len)
    roots = []
    i = 0
    while i < len(cycles):
        cycle = cycles[i]
        if len(cycle) % 2 == 1:
            roots.append(weave(cycle))
            i += 1
        elif i + 1 < len(cycles) and len(cycles[i + 1]) == len(cycle):
            roots.append(interleave(cycle, cycles[i + 1]))
            i += 2
        else:
            raise NoSquareRootError(f"{perm} does not have a square root")

    return Permutation.from_cycles(len(perm), roots)
