"""
compiled: a permutation encoded for fast repeated in-place application to data vectors.

The encoding of a permutation p of [1, n] is a flat list of positions made of two regions:

- The cycles region lists every cycle of length 3 or more, each as the chain a, p(a), p(p(a)), ... starting from
  its smallest element and followed by a 0 terminator. If there are no such cycles the region is a lone 0.
- The swaps region lists the 2-cycles as pairs of positions.

For example,

    [3, 1, 2]                     -> [1, 3, 2, 0]
    [3, 2, 1]                     -> [0, 1, 3]
    [3, 4, 1, 2]                  -> [0, 2, 4, 1, 3]
    [1, 2, 3, 4]                  -> [0]
    [2, 3, 1, 5, 4]               -> [1, 2, 3, 0, 4, 5]
    []                            -> []

The encoder works in a buffer of capacity n + n // 3 + 1, writing cycles forwards from the front and swaps
backwards from the end, and then closes the gap. Applying the encoding reads the swaps from the end of the buffer
until it meets the terminating 0 of the cycles region, then rotates each cycle using a single temporary.
"""
from __future__ import annotations

import dataclasses
import logging
import operator
from typing import MutableSequence, Sequence, TypeVar, Union

from .errors import ArgumentError, DegreeMismatchError, InvalidPermutationError
from .permutations import Permutation, PermutationBase

logger = logging.getLogger(__name__)

V = TypeVar('V', bound=MutableSequence)


def encode(perm: list[int]) -> list[int]:
    """
    Encode the word of a permutation, zeroing perm as it is read. Raises InvalidPermutationError as soon as a chain
    leaves [1, n], runs into an entry which has already been read, or fails to close up.

    >>> encode([3, 1, 2])
    [1, 3, 2, 0]
    >>> encode([1, 4, 8, 2, 6, 5, 7, 3])
    [0, 5, 6, 3, 8, 2, 4]
    """
    n = len(perm)
    if n <= 2:
        return _encode_small(perm)

    def read(pos: int) -> int:
        x = perm[pos - 1]
        perm[pos - 1] = 0
        return x

    def fail():
        return InvalidPermutationError("Input is not a permutation")

    out = [0] * (n + n // 3 + 1)
    cycle_i = 0           # Next free slot of the cycles region out[:cycle_i].
    swap_i = len(out)     # Start of the swaps region out[swap_i:].
    unread = n
    start = 1
    while True:
        unread -= 1
        head = read(start)
        if start < head <= n:
            unread -= 1
            nxt = read(head)
            if nxt == start:
                assert cycle_i <= swap_i - 2
                swap_i -= 2
                out[swap_i] = start
                out[swap_i + 1] = head
            elif start < nxt <= n:
                out[cycle_i] = start
                out[cycle_i + 1] = head
                cycle_i += 2
                while True:
                    assert cycle_i < swap_i
                    out[cycle_i] = nxt
                    cycle_i += 1
                    unread -= 1
                    nxt = read(nxt)
                    if not start < nxt <= n:
                        break

                # The chain must have come back to where it started, rather than falling out of range or onto an
                # entry that was already read.
                if nxt != start:
                    raise fail()

                assert cycle_i < swap_i
                out[cycle_i] = 0
                cycle_i += 1
            else:
                raise fail()
        elif head != start:
            raise fail()

        if unread == 0:
            break

        # The next unread position; an earlier chain may have consumed some of the positions after start.
        start = next((pos for pos in range(start + 1, n + 1) if perm[pos - 1] != 0), 0)
        if start == 0:
            raise fail()

    if cycle_i == 0:
        out[0] = 0
        cycle_i = 1

    logger.debug("Encoded a permutation of degree %d into %d cycle and %d swap slots", n, cycle_i, len(out) - swap_i)
    return out[:cycle_i] + out[swap_i:]


def _encode_small(perm: list[int]) -> list[int]:
    """Degrees 0, 1 and 2, where the only permutations are the identities and the swap (1 2)."""
    word = list(perm)
    perm[:] = [0] * len(perm)
    if word == []:
        return []
    if word == [1] or word == [1, 2]:
        return [0]
    if word == [2, 1]:
        return [0, 1, 2]

    raise InvalidPermutationError(f"{word} is not a permutation of [1, {len(word)}]")


def _cycles_end(data: Sequence[int]) -> int:
    """The index of the 0 terminating the cycles region; the swap pairs lie strictly after it."""
    i = len(data) - 1
    while i > 0 and data[i] > 0:
        i -= 2

    assert data[i] == 0
    return i


def _is_encoding(n: int, data: Sequence[int]) -> bool:
    """
    Whether data has the layout of an encoding for degree n: positions in [1, n], each used at most once, swap pairs
    after a 0 which closes a cycles region of nonempty chains.
    """
    if n == 0 or not data:
        return n == 0 and not data

    positions = [x for x in data if x != 0]
    if not all(1 <= x <= n for x in positions) or len(set(positions)) != len(positions):
        return False

    i = len(data) - 1
    while i > 0 and data[i] > 0:
        i -= 2
    if data[i] != 0:
        return False

    # No empty chains: a chain starts at the front or after a terminator, and never on a 0.
    return i == 0 or all(data[j] != 0 for j in range(i + 1) if j == 0 or data[j - 1] == 0)


@dataclasses.dataclass(frozen=True)
class CompiledPermutation(PermutationBase):
    """
    A permutation compiled for applying to many vectors. Build one with encode() or encode_consuming(), or by
    calling compile() on a Permutation.

    >>> cp = CompiledPermutation.encode([3, 1, 2])
    >>> cp.data
    (1, 3, 2, 0)
    >>> cp.apply(['a', 'b', 'c'])
    ['c', 'a', 'b']
    """
    n: int
    data: tuple[int, ...]

    def __post_init__(self):
        if self.n < 0:
            raise ArgumentError(f"Degree must be nonnegative, got {self.n}")

        data = tuple(operator.index(x) for x in self.data)
        object.__setattr__(self, 'data', data)
        if not _is_encoding(self.n, data):
            raise InvalidPermutationError(f"{data} is not the encoding of a permutation of [1, {self.n}]")

    @classmethod
    def encode(cls, perm: Union[PermutationBase, Sequence[int]]):
        """Compile a permutation or word. The argument is left untouched."""
        if isinstance(perm, PermutationBase):
            perm = perm.to_permutation().data

        try:
            word = [operator.index(x) for x in perm]
        except TypeError as exc:
            raise InvalidPermutationError(f"Permutation entries must be integers, got {perm!r}") from exc

        return cls(len(word), tuple(encode(word)))

    @classmethod
    def encode_consuming(cls, buffer: list[int]):
        """
        Compile a word held in a list owned by the caller, without copying it first. The list is overwritten with
        zeros (partially so, if the word turns out not to be a permutation).
        """
        # The buffer is not copied, so the entries are checked where they stand.
        try:
            for x in buffer:
                operator.index(x)
        except TypeError as exc:
            raise InvalidPermutationError(f"Permutation entries must be integers, got {buffer!r}") from exc

        return cls(len(buffer), tuple(encode(buffer)))

    @classmethod
    def from_permutation(cls, perm: Permutation):
        return cls.encode(perm)

    def __len__(self) -> int:
        return self.n

    def __getitem__(self, k: int) -> int:
        k = self._check_index(k)
        data = self.data
        end = _cycles_end(data) if data else 0

        for i in range(end + 1, len(data), 2):
            if data[i] == k:
                return data[i + 1]
            if data[i + 1] == k:
                return data[i]

        head = 0
        for i in range(end):
            if i == 0 or data[i - 1] == 0:
                head = data[i]
            if data[i] == k:
                return data[i + 1] if data[i + 1] != 0 else head

        return k

    def apply(self, vector: V) -> V:
        """
        Permute a vector in place, so that afterwards vector[k - 1] holds what was at vector[p(k) - 1]. This is the
        same as reindexing by the word, vector[:] = [vector[x - 1] for x in p]. Returns the vector.
        """
        if len(vector) != self.n:
            raise DegreeMismatchError(f"Cannot apply a permutation of degree {self.n} to a vector of length {len(vector)}")

        data = self.data
        i = len(data) - 1
        while i > 0 and data[i] > 0:
            a, b = data[i - 1] - 1, data[i] - 1
            vector[a], vector[b] = vector[b], vector[a]
            i -= 2

        j = 0
        while j < i:
            c = data[j]
            first = vector[c - 1]
            j += 1
            while data[j] != 0:
                d = data[j]
                vector[c - 1] = vector[d - 1]
                c = d
                j += 1
            vector[c - 1] = first
            j += 1

        return vector

    def inv(self):
        """
        The inverse, found by reversing the cycles region. Reversal turns each chain around and keeps the 0
        terminators between chains; the swaps are their own inverses.
        """
        if self.n <= 2:
            return self

        end = _cycles_end(self.data)
        return CompiledPermutation(self.n, (*self.data[end - 1::-1], *self.data[end:]) if end else self.data)

    def cycles(self) -> list[tuple[int, ...]]:
        """
        The nontrivial cycles recorded in the encoding: the swaps in the order they are applied, then the longer
        cycles.

        >>> CompiledPermutation.encode([2, 1, 5, 3, 4]).cycles()
        [(1, 2), (3, 5, 4)]
        """
        data = self.data
        if not data:
            return []

        end = _cycles_end(data)
        out = [(data[i - 1], data[i]) for i in range(len(data) - 1, end, -2)]

        cycle = []
        for x in data[:end]:
            if x == 0:
                out.append(tuple(cycle))
                cycle = []
            else:
                cycle.append(x)
        if cycle:
            out.append(tuple(cycle))

        return out

    def to_permutation(self) -> Permutation:
        return Permutation(self.apply(list(range(1, self.n + 1))))

    def compile(self):
        return self
