"""
Functions for working with permutations of the integers [1, n].

The formats for working with permutations are:
- Word notation, where the permutation x is represented by the array [x(1), ..., x(n)]. Most functions
  expect to be given a permutation in word form (where the exact type of the object may be any sequence),
  and will return permutations in word form as a tuple.
- Cycle notation, a list of disjoint cycles, where each cycle (a, b, c, ...) says that x(a) = b, x(b) = c, and so
  on, wrapping around at the end.

The Permutation class wraps a word, checks that it really is a bijection, and gives the usual group operations.
Words index positions from 1, so x(k) lives at word[k - 1].
"""
from __future__ import annotations

import abc
import dataclasses
import functools
import math
import operator
import random
from typing import Callable, Iterable, Iterator, Optional, Sequence

import numpy as np
import numpy.typing as npt

from .errors import (
    ArgumentError,
    DegreeMismatchError,
    InvalidCyclesError,
    InvalidPermutationError,
    PermutationIndexError,
    RankError,
)


def is_permutation(word: Sequence[int]) -> bool:
    """
    Check that word is a permutation of the integers [1, n] where n = len(word).

    >>> words = [(), (1, 2), (1, 3), (1, 1, 3), (3, 2, 1)]
    >>> [is_permutation(word) for word in words]
    [True, True, False, False, True]
    """

    if len(word) == 0:
        return True

    # To try to avoid allocating when checking short permutations, first check that all entries lie in [1, n], and then
    # bitwise-or them into a bitmask of their union. This should be 2^(n+1) - 2 (all 1's except bit 0), and any duplicate
    # will cause a zero to appear somewhere.
    if min(word) != 1 or max(word) != len(word):
        return False

    mask = functools.reduce(operator.or_, (1 << x for x in word), 0)
    return mask == 2**(len(word) + 1) - 2


def identity(n: int) -> tuple[int, ...]:
    """
    The identity permutation of S_n.

    >>> [identity(n) for n in [0, 1, 2, 3]]
    [(), (1,), (1, 2), (1, 2, 3)]
    """
    if n < 0:
        raise ArgumentError(f"Degree must be nonnegative, got {n}")
    return tuple(range(1, n + 1))


def is_identity(perm: Sequence[int]) -> bool:
    return all(perm[i] == i + 1 for i in range(len(perm)))


def transposition(n: int, i: int, j: int) -> tuple[int, ...]:
    """
    The transposition (ij) in S_n.

    >>> transposition(4, 1, 3)
    (3, 2, 1, 4)
    """
    if n < 0:
        raise ArgumentError(f"Degree must be nonnegative, got {n}")
    if not (1 <= i <= n and 1 <= j <= n):
        raise PermutationIndexError(f"Transposition ({i} {j}) does not lie in S_{n}")
    if i == j:
        raise ArgumentError(f"Transposition needs two distinct points, got ({i} {j})")

    perm = list(range(1, n + 1))
    perm[i - 1], perm[j - 1] = perm[j - 1], perm[i - 1]
    return tuple(perm)


def nth_permutation(n: int, k: int) -> tuple[int, ...]:
    """
    The k-th permutation of [1, n] in lexicographic order, counting from k = 1. The digits of k - 1 in the factorial
    number system (its Lehmer code) say which of the unused values to take next.

    >>> nth_permutation(3, 1), nth_permutation(3, 4), nth_permutation(3, 6)
    ((1, 2, 3), (2, 3, 1), (3, 2, 1))
    >>> nth_permutation(6, 701)
    (6, 5, 1, 4, 2, 3)
    """
    if n < 0:
        raise ArgumentError(f"Degree must be nonnegative, got {n}")
    if not 1 <= k <= math.factorial(n):
        raise RankError(f"Rank {k} is outside the range [1, {n}!]")

    k -= 1
    unused = list(range(1, n + 1))
    word = []
    for i in range(n, 0, -1):
        digit, k = divmod(k, math.factorial(i - 1))
        word.append(unused.pop(digit))

    return tuple(word)


def rank(perm: Sequence[int]) -> int:
    """
    The position of a permutation in lexicographic order, counting from 1. This inverts nth_permutation.

    >>> rank((1, 2, 3)), rank((2, 3, 1)), rank((6, 5, 1, 4, 2, 3))
    (1, 4, 701)
    """
    n = len(perm)
    unused = list(range(1, n + 1))
    result = 0
    for i, x in enumerate(perm):
        digit = unused.index(x)
        result += digit * math.factorial(n - i - 1)
        unused.pop(digit)

    return result + 1


def disjoint_cycles(perm: Sequence[int]) -> list[tuple[int, ...]]:
    """
    Return a list of disjoint cycles which make up the permutation. Cycles are ordered so that the
    cycles containing the lowest elements come first, and the order within a cycle is then
    traversal order starting from the lowest element.

    >>> disjoint_cycles([3, 4, 2, 1])
    [(1, 3, 2, 4)]
    >>> disjoint_cycles([4, 1, 3, 2, 6, 5])
    [(1, 4, 2), (3,), (5, 6)]
    >>> disjoint_cycles([])
    []
    """
    cycles = []
    visited = [False] * len(perm)
    for i in range(1, len(perm) + 1):
        if visited[i - 1]:
            continue

        cycle = []
        pos = i
        while True:
            cycle.append(pos)
            visited[pos - 1] = True
            pos = perm[pos - 1]
            if pos == i:
                break

        cycles.append(tuple(cycle))

    return cycles


def cycle_type(perm: Sequence[int]) -> tuple[int, ...]:
    """
    Return the cycle type of a permutation, the lengths of the disjoint cycles in decreasing order.

    >>> cycle_type(())
    ()
    >>> cycle_type((1, 2, 3))
    (1, 1, 1)
    >>> cycle_type((2, 1, 3))
    (2, 1)
    >>> cycle_type((3, 1, 2))
    (3,)
    """
    return tuple(sorted((len(cycle) for cycle in disjoint_cycles(perm)), reverse=True))


def cycle_string(perm: Sequence[int]) -> str:
    """
    Disjoint cycle notation, including fixed points. The empty permutation is written ().

    >>> cycle_string([4, 1, 3, 2, 6, 5])
    '(1,4,2)(3)(5,6)'
    >>> cycle_string([])
    '()'
    """
    if len(perm) == 0:
        return "()"

    return "".join("(" + ",".join(map(str, cycle)) + ")" for cycle in disjoint_cycles(perm))


def parity(perm: Sequence[int]) -> int:
    """
    Calculate the parity of the permutation, i.e. its length mod 2.

    >>> parity((1, 2, 3))
    0
    >>> parity((2, 1, 3))
    1
    >>> parity((3, 1, 2))
    0
    >>> parity(())
    0
    """

    # A cycle of length L is a product of L - 1 transpositions, so summing over cycles gives n minus the number
    # of cycles.
    return (len(perm) - len(disjoint_cycles(perm))) % 2


def sign(perm: Sequence[int]) -> int:
    """
    The sign of the permutation: +1 if it is even, -1 if it is odd.

    >>> sign((2, 3, 4, 1)), sign((3, 4, 1, 2))
    (-1, 1)
    """
    return -1 if parity(perm) else 1


def order(perm: Sequence[int]) -> int:
    """
    The order of the permutation, the least common multiple of its cycle lengths.

    >>> order((2, 3, 1, 6, 7, 8, 5, 4, 9))
    6
    >>> order(())
    1
    """
    return functools.reduce(math.lcm, cycle_type(perm), 1)


def length(perm: Sequence[int]) -> int:
    """
    Calculate the length of a permutation, i.e. the number of inversions. Currently this is the O(n^2) straightforward
    method, which is fine for small permutations.

    >>> length(())
    0
    >>> length((1, 2, 3))
    0
    >>> length((3, 2, 1))
    3
    """

    return sum(1 for i in range(len(perm)) for j in range(i+1, len(perm)) if perm[i] > perm[j])


def fixed_points(perm: Sequence[int]) -> list[int]:
    """
    >>> fixed_points((1, 3, 5, 2, 4, 6))
    [1, 6]
    """
    return [k for k in range(1, len(perm) + 1) if perm[k - 1] == k]


def inverse(perm: Sequence[int]) -> tuple[int, ...]:
    """
    The inverse of a permutation.

    >>> inverse((3, 1, 2))
    (2, 3, 1)
    >>> inverse(())
    ()
    """
    inv = [0] * len(perm)
    for i, pi in enumerate(perm, start=1):
        inv[pi - 1] = i

    return tuple(inv)


def compose(x: Sequence[int], y: Sequence[int]) -> tuple[int, ...]:
    """
    Compose two permutations (x, y) -> xy. This composition is right-to-left, i.e. the result applies y, then x.

    >>> compose((2, 3, 1), (2, 1, 3))
    (3, 2, 1)
    """
    if len(x) != len(y):
        raise DegreeMismatchError(f"Cannot compose permutations of different degrees {len(x)} and {len(y)}")

    return tuple(x[j - 1] for j in y)


def power(perm: Sequence[int], m: int) -> tuple[int, ...]:
    """
    Raise a permutation to an integer power by repeated squaring, using O(log |m|) compositions.

    >>> power((2, 3, 1), 2), power((2, 3, 1), -1), power((2, 3, 1), 3)
    ((3, 1, 2), (3, 1, 2), (1, 2, 3))
    """
    if m == 0:
        return identity(len(perm))
    if m < 0:
        return power(inverse(perm), -m)
    if m == 1:
        return tuple(perm)

    half = power(perm, m // 2)
    square = compose(half, half)
    return square if m % 2 == 0 else compose(perm, square)


def longest_monotone(perm: Sequence[int], cmp: Callable[[int, int], bool] = operator.lt) -> tuple[int, ...]:
    """
    Find a longest subsequence of the word whose consecutive entries all satisfy cmp. Among the longest, this is the
    one starting at the first possible position, and then at each step taking the first possible next position.

    >>> longest_monotone((1, 3, 5, 2, 4, 6))
    (1, 3, 5, 6)
    >>> longest_monotone((1, 3, 5, 2, 4, 6), operator.gt)
    (3, 2)
    """
    n = len(perm)
    if n == 0:
        return ()

    # scores[k] is the length of the longest good subsequence starting at position k.
    scores = [1] * n
    for k in range(n - 2, -1, -1):
        for i in range(k + 1, n):
            if cmp(perm[k], perm[i]) and scores[k] <= scores[i]:
                scores[k] = scores[i] + 1

    pos = scores.index(max(scores))
    seq = [perm[pos]]
    while scores[pos] > 1:
        pos = next(
            i for i in range(pos + 1, n)
            if scores[i] == scores[pos] - 1 and cmp(perm[pos], perm[i])
        )
        seq.append(perm[pos])

    return tuple(seq)


def extend(perm: Sequence[int], new_n: int) -> tuple[int, ...]:
    """
    The permutation of [1, new_n] agreeing with perm on [1, n] and fixing everything else.

    >>> extend((2, 1), 4)
    (2, 1, 3, 4)
    """
    if new_n < len(perm):
        raise ArgumentError(f"Requested degree {new_n} is smaller than the permutation's degree {len(perm)}")

    return (*perm, *range(len(perm) + 1, new_n + 1))


def from_cycles(n: Optional[int], cycles: Iterable[Sequence[int]]) -> tuple[int, ...]:
    """
    Build the word of a permutation from its disjoint cycles, which must cover [1, n] exactly once (fixed points
    included). If n is None, it is taken to be the number of elements listed.

    >>> from_cycles(6, [(1, 4, 2), (3,), (5, 6)])
    (4, 1, 3, 2, 6, 5)
    >>> from_cycles(None, [])
    ()
    """
    cycles = [tuple(cycle) for cycle in cycles]
    elements = [x for cycle in cycles for x in cycle]
    if n is None:
        n = len(elements)

    if any(len(cycle) == 0 for cycle in cycles) or sorted(elements) != list(range(1, n + 1)):
        raise InvalidCyclesError(f"Cycles {cycles} do not partition [1, {n}]")

    word = [0] * n
    for cycle in cycles:
        for i, x in enumerate(cycle):
            word[x - 1] = cycle[(i + 1) % len(cycle)]

    return tuple(word)


class PermutationBase(abc.ABC):
    """
    The common interface of the two permutation representations: Permutation, which stores the word, and
    CompiledPermutation, which stores an encoding tuned for applying the permutation to vectors. These two are the
    only implementations.
    """

    @abc.abstractmethod
    def __len__(self) -> int:
        """The degree n."""

    @abc.abstractmethod
    def __getitem__(self, k: int) -> int:
        """Evaluate the permutation at k, for 1 <= k <= n."""

    @abc.abstractmethod
    def inv(self) -> PermutationBase:
        """The inverse, in the same representation."""

    @abc.abstractmethod
    def to_permutation(self) -> Permutation:
        ...

    @abc.abstractmethod
    def compile(self):
        ...

    @property
    def degree(self) -> int:
        return len(self)

    def __call__(self, k: int) -> int:
        return self[k]

    def _check_index(self, k: int) -> int:
        k = operator.index(k)
        if not 1 <= k <= len(self):
            raise PermutationIndexError(f"Index {k} is outside [1, {len(self)}]")
        return k


@functools.total_ordering
@dataclasses.dataclass(eq=True)
class Permutation(PermutationBase):
    """
    A bijection of [1, n], stored as its word [p(1), ..., p(n)]. Permutations are treated as values: every
    operation returns a new Permutation, apart from apply_transposition_inplace. Evaluation is 1-based, so p[1] is
    the image of 1.

    >>> p = Permutation([4, 1, 3, 2, 6, 5])
    >>> p
    Permutation([4, 1, 3, 2, 6, 5])
    >>> print(p)
    (1,4,2)(3)(5,6)
    >>> p[2]
    1
    """
    data: list[int]

    def __post_init__(self):
        try:
            self.data = [operator.index(x) for x in self.data]
        except TypeError as exc:
            raise InvalidPermutationError(f"Permutation entries must be integers, got {self.data!r}") from exc

        if not is_permutation(self.data):
            raise InvalidPermutationError(f"{self.data} is not a permutation of [1, {len(self.data)}]")

    # Construction.

    @classmethod
    def identity(cls, n: int):
        return cls(list(identity(n)))

    @classmethod
    def nth(cls, n: int, k: int):
        """The k-th permutation of [1, n] in lexicographic order, for 1 <= k <= n!."""
        return cls(list(nth_permutation(n, k)))

    @classmethod
    def transposition(cls, n: int, a: int, b: int):
        return cls(list(transposition(n, a, b)))

    @classmethod
    def from_cycles(cls, n: Optional[int], cycles: Iterable[Sequence[int]]):
        return cls(list(from_cycles(n, cycles)))

    @classmethod
    def random(cls, n: int, rng: Optional[random.Random] = None):
        """A uniformly random permutation of [1, n]."""
        word = list(identity(n))
        (rng or random).shuffle(word)
        return cls(word)

    @classmethod
    def from_matrix(cls, matrix: npt.ArrayLike):
        from .matrix import from_matrix
        return from_matrix(matrix)

    # Views.

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, k: int) -> int:
        return self.data[self._check_index(k) - 1]

    def __iter__(self) -> Iterator[int]:
        return iter(self.data)

    def __hash__(self):
        return hash(tuple(self.data))

    def __lt__(self, other):
        if not isinstance(other, Permutation):
            return NotImplemented
        return (len(self.data), self.data) < (len(other.data), other.data)

    def __repr__(self):
        return f"Permutation({self.data})"

    def __str__(self):
        return cycle_string(self.data)

    def as_list(self) -> list[int]:
        return list(self.data)

    def as_dict(self) -> dict[int, int]:
        return {k: pk for k, pk in enumerate(self.data, start=1)}

    def two_row(self) -> npt.NDArray:
        """
        The two-line notation as a 2 x n array, with [1, ..., n] on top.

        >>> Permutation([3, 1, 2]).two_row().tolist()
        [[1, 2, 3], [3, 1, 2]]
        """
        return np.array([list(range(1, len(self) + 1)), self.data], dtype=int).reshape(2, len(self))

    def to_matrix(self) -> npt.NDArray:
        from .matrix import to_matrix
        return to_matrix(self)

    def cycles(self) -> list[tuple[int, ...]]:
        return disjoint_cycles(self.data)

    def cycle_type(self) -> tuple[int, ...]:
        return cycle_type(self.data)

    def cycle_string(self) -> str:
        return cycle_string(self.data)

    def fixed_points(self) -> list[int]:
        return fixed_points(self.data)

    def is_identity(self) -> bool:
        return is_identity(self.data)

    def rank(self) -> int:
        return rank(self.data)

    def length(self) -> int:
        return length(self.data)

    def parity(self) -> int:
        return parity(self.data)

    def sign(self) -> int:
        return sign(self.data)

    def order(self) -> int:
        return order(self.data)

    def longest_increasing(self) -> list[int]:
        return list(longest_monotone(self.data, operator.lt))

    def longest_decreasing(self) -> list[int]:
        return list(longest_monotone(self.data, operator.gt))

    # Operations returning new permutations.

    def inv(self):
        return Permutation(list(inverse(self.data)))

    def __mul__(self, other):
        if isinstance(other, Permutation):
            return Permutation(list(compose(self.data, other.data)))

        return NotImplemented

    def __pow__(self, m: int):
        return Permutation(list(power(self.data, m)))

    def reverse(self):
        return Permutation(self.data[::-1])

    def extend(self, new_n: int):
        return Permutation(list(extend(self.data, new_n)))

    def apply_transposition(self, i: int, j: int):
        """Swap the entries at positions i and j, i.e. multiply on the right by the transposition (i j)."""
        return Permutation(list(self.data)).apply_transposition_inplace(i, j)

    def apply_transposition_inplace(self, i: int, j: int):
        """
        Swap the entries at positions i and j of this permutation, and return it. This mutates the permutation (and
        so changes its hash), so callers sharing it must arrange exclusive access themselves.
        """
        i, j = self._check_index(i), self._check_index(j)
        if i == j:
            raise ArgumentError(f"Transposition needs two distinct points, got ({i} {j})")

        self.data[i - 1], self.data[j - 1] = self.data[j - 1], self.data[i - 1]
        return self

    # Conversions to the other representations.

    def to_permutation(self):
        return self

    def compile(self):
        from .compiled import CompiledPermutation
        return CompiledPermutation.encode(self)

    def coxeter(self):
        from .coxeter import decompose
        return decompose(self)


def compose_all(*perms: Permutation) -> Permutation:
    """
    Compose one or more permutations right-to-left, so that the last one is applied first. A single permutation is
    returned unchanged.
    """
    if len(perms) == 0:
        raise ArgumentError("Need at least one permutation to compose")

    return functools.reduce(operator.mul, perms)
