"""
coxeter: expressions for permutations in the Coxeter generators s_1, ..., s_{n-1} of S_n, where s_t is the
adjacent transposition (t, t+1).

A word [t_1, ..., t_m] stands for the product s_{t_1} s_{t_2} ... s_{t_m}. Multiplying a permutation on the right by
s_t swaps its entries at positions t and t+1, so a word can be evaluated by starting from the identity and swapping
entries left to right.

Words are kept in a normal form produced by reduce(), which applies the rewriting rules

    t t                -> (empty)        s_t squares to the identity,
    a b                -> b a            when |a - b| >= 2 and a > b, since disjoint generators commute,
    x y x y x y        -> (empty)        when |x - y| = 1, since (s_x s_{x+1})^3 is the identity,

until none of them applies. The braid rule is only tried once the first two rules have stopped firing, so it
always sees a word sorted as far as commutation allows. This is a canonical form for the procedure, not a minimal-length search: two words
related by commutations reduce to the same normal form, but words related only by the braid move s_x s_y s_x =
s_y s_x s_y in general do not.
"""
from __future__ import annotations

import dataclasses
import logging
import operator
from typing import Iterator, Sequence, Union

from .errors import ArgumentError, DegreeMismatchError
from .permutations import Permutation, PermutationBase

logger = logging.getLogger(__name__)


def bubble_word(perm: Sequence[int]) -> tuple[int, ...]:
    """
    Bubble-sort the word of a permutation with repeated left-to-right passes, recording the position t of every
    adjacent swap, and return the recorded positions reversed. Sorting multiplies by s_t on the right each time, so
    perm s_{t_1} ... s_{t_m} = id and perm = s_{t_m} ... s_{t_1}. One swap happens per inversion.

    >>> bubble_word((3, 1, 2))
    (2, 1)
    >>> bubble_word((3, 2, 1))
    (1, 2, 1)
    >>> bubble_word((1, 2, 3))
    ()
    """
    word = list(perm)
    swaps = []
    swapped = True
    while swapped:
        swapped = False
        for t in range(1, len(word)):
            if word[t - 1] > word[t]:
                word[t - 1], word[t] = word[t], word[t - 1]
                swaps.append(t)
                swapped = True

    # Ensure that we ended up sorting the array.
    assert all(i == x for i, x in enumerate(word, start=1))

    return tuple(reversed(swaps))


def from_cox(n: int, seq: Sequence[int]) -> tuple[int, ...]:
    """
    Recover the word of a permutation from a sequence in the Coxeter generators.

    >>> from_cox(3, (2, 1))
    (3, 1, 2)
    >>> from_cox(4, ())
    (1, 2, 3, 4)
    """
    assert all(1 <= s < n for s in seq)
    word = list(range(1, n + 1))
    for s in seq:
        word[s - 1], word[s] = word[s], word[s - 1]

    return tuple(word)


def _is_braid_cycle(terms: Sequence[int], i: int) -> bool:
    """Whether terms[i:i+6] has the form x y x y x y with |x - y| = 1."""
    if i + 6 > len(terms):
        return False

    x, y = terms[i], terms[i + 1]
    return abs(x - y) == 1 and all(terms[i + j] == (x, y)[j % 2] for j in range(2, 6))


def _settle(terms: list[int]) -> None:
    """Apply cancellation and commutation in place until neither fires."""
    i = 0
    while i < len(terms) - 1:
        a, b = terms[i], terms[i + 1]
        if a == b:
            del terms[i:i + 2]
        elif a > b + 1:
            terms[i], terms[i + 1] = b, a
        else:
            i += 1
            continue

        i = max(i - 1, 0)


def reduce(terms: Sequence[int]) -> tuple[int, ...]:
    """
    Rewrite a word in the Coxeter generators into normal form, see the module docstring. Cancellation and
    commutation are applied until neither fires, and only then is the first braid window deleted. This repeats
    until the settled word has no braid window left, so the braid rule only ever sees commutation-sorted words.

    >>> reduce([1, 1])
    ()
    >>> reduce([3, 1])
    (1, 3)
    >>> reduce([4, 1, 2])
    (1, 2, 4)
    >>> reduce([2, 1, 2, 1, 2, 1, 3])
    (3,)
    >>> reduce([1, 3, 3, 1])
    ()
    >>> reduce([1, 2, 1, 2, 1, 2, 4, 2]) == reduce([1, 2, 1, 2, 1, 4, 2, 2])
    True
    """
    terms = list(terms)
    passes = 0
    while True:
        passes += 1
        _settle(terms)
        i = next((i for i in range(len(terms) - 5) if _is_braid_cycle(terms, i)), None)
        if i is None:
            break
        del terms[i:i + 6]

    logger.debug("Reduced a word to %d terms in %d passes", len(terms), passes)
    return tuple(terms)


@dataclasses.dataclass(frozen=True)
class CoxeterDecomposition:
    """
    A permutation of [1, n] as a reduced word in the Coxeter generators. The terms are reduced on construction, so
    two decompositions are equal exactly when their normal forms agree.

    >>> d = CoxeterDecomposition(4, (3, 1, 2, 2))
    >>> d.terms
    (1, 3)
    >>> d.to_permutation()
    Permutation([2, 1, 4, 3])
    """
    n: int
    terms: tuple[int, ...] = ()

    def __post_init__(self):
        if self.n < 0:
            raise ArgumentError(f"Degree must be nonnegative, got {self.n}")

        terms = tuple(operator.index(t) for t in self.terms)
        bad = [t for t in terms if not 1 <= t < self.n]
        if bad:
            raise ArgumentError(f"Coxeter generators of S_{self.n} are numbered [1, {self.n - 1}], got {bad}")

        object.__setattr__(self, 'terms', reduce(terms))

    @classmethod
    def identity(cls, n: int):
        return cls(n, ())

    @classmethod
    def generator(cls, n: int, t: int):
        """The adjacent transposition s_t = (t, t+1)."""
        return cls(n, (t,))

    @classmethod
    def from_permutation(cls, perm: PermutationBase):
        return decompose(perm)

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self) -> Iterator[int]:
        return iter(self.terms)

    def to_permutation(self) -> Permutation:
        return recompose(self)

    def __mul__(self, other: Union[CoxeterDecomposition, int]):
        if isinstance(other, int):
            return CoxeterDecomposition(self.n, (*self.terms, other))

        if isinstance(other, CoxeterDecomposition):
            if self.n != other.n:
                raise DegreeMismatchError(f"Cannot compose decompositions of different degrees {self.n} and {other.n}")
            return CoxeterDecomposition(self.n, (*self.terms, *other.terms))

        return NotImplemented

    def inv(self):
        """
        The reversed word, reduced again. It represents the inverse permutation, but since the braid move is not
        among the rewriting rules, d * d.inv() is not always the empty word; compare with to_permutation().
        """
        return CoxeterDecomposition(self.n, self.terms[::-1])

    def _repr_latex_(self):
        if not self.terms:
            return r'$\mathrm{id}$'
        return '$' + ' '.join(f's_{{{t}}}' for t in self.terms) + '$'


def decompose(perm: PermutationBase) -> CoxeterDecomposition:
    """
    Decompose a permutation into the Coxeter generators.

    >>> decompose(Permutation([2, 1, 4, 3])).terms
    (1, 3)
    >>> decompose(Permutation([3, 2, 1])).terms
    (1, 2, 1)
    """
    word = perm.to_permutation().data
    return CoxeterDecomposition(len(word), bubble_word(word))


def recompose(decomp: CoxeterDecomposition) -> Permutation:
    """Multiply out a decomposition, recovering the permutation."""
    return Permutation(list(from_cox(decomp.n, decomp.terms)))
