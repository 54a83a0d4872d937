"""
generate: iterating over permutations, either all of S_n or those satisfying per-position constraints.

A constraint is an allow-list: for each position k in [1, n], the values which p(k) may take. Every permutation in
the Cartesian product of the allow-lists is produced, in product order. For example the derangements of [1, 3],
the permutations without fixed points, are

>>> [p.as_list() for p in derangements(3)]
[[2, 3, 1], [3, 1, 2]]
"""
from __future__ import annotations

import itertools
import math
from typing import Iterator, Mapping, Sequence, Union

from .errors import ArgumentError
from .permutations import Permutation

Allow = Union[Sequence[Sequence[int]], Mapping[int, Sequence[int]]]


def all_allow(n: int) -> dict[int, list[int]]:
    """The allow-list permitting every value at every position."""
    return {k: list(range(1, n + 1)) for k in range(1, n + 1)}


def deranged_allow(n: int) -> dict[int, list[int]]:
    """
    The allow-list forbidding fixed points.

    >>> deranged_allow(3)
    {1: [2, 3], 2: [1, 3], 3: [1, 2]}
    """
    return {k: [v for v in range(1, n + 1) if v != k] for k in range(1, n + 1)}


def _allow_lists(allow: Allow) -> list[tuple[int, ...]]:
    if isinstance(allow, Mapping):
        n = max(allow.keys(), default=0)
        missing = [k for k in range(1, n + 1) if k not in allow]
        if missing:
            raise ArgumentError(f"Allow-list has no entry for positions {missing}")
        return [tuple(allow[k]) for k in range(1, n + 1)]

    return [tuple(values) for values in allow]


class PermGen:
    """
    An iterable over permutations. PermGen(n) runs over all of S_n in lexicographic order, so that the k-th permutation
    produced is Permutation.nth(n, k). PermGen(allow) runs over the permutations p with p(k) in allow[k]. Each call to
    iter() starts again from the beginning.

    >>> [str(p) for p in PermGen(3)]
    ['(1)(2)(3)', '(1)(2,3)', '(1,2)(3)', '(1,2,3)', '(1,3,2)', '(1,3)(2)']
    >>> [p.as_list() for p in PermGen([[1, 2], [1, 2, 3], [3]])]
    [[1, 2, 3], [2, 1, 3]]
    """
    def __init__(self, spec: Union[int, Allow]):
        if isinstance(spec, int):
            if spec < 0:
                raise ArgumentError(f"Degree must be nonnegative, got {spec}")
            self.n = spec
            self.allow = None
        else:
            self.allow = _allow_lists(spec)
            self.n = len(self.allow)

    def __iter__(self) -> Iterator[Permutation]:
        if self.allow is None:
            return (Permutation(list(word)) for word in itertools.permutations(range(1, self.n + 1)))

        return (Permutation(word) for word in self._search())

    def __len__(self) -> int:
        if self.allow is None:
            return math.factorial(self.n)

        return sum(1 for _ in self._search())

    def _search(self) -> Iterator[list[int]]:
        """
        Depth-first search through the allow-lists, abandoning a branch as soon as a value repeats or leaves [1, n].
        This visits the surviving words in the same order as filtering itertools.product(*allow).
        """
        n = self.n
        allow = self.allow
        word: list[int] = []
        used = [False] * (n + 1)

        def extend(k: int) -> Iterator[list[int]]:
            if k == n:
                yield list(word)
                return

            for v in allow[k]:
                if 1 <= v <= n and not used[v]:
                    used[v] = True
                    word.append(v)
                    yield from extend(k + 1)
                    word.pop()
                    used[v] = False

        return extend(0)


def derangements(n: int) -> PermGen:
    return PermGen(deranged_allow(n))
