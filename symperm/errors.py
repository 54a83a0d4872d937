"""
Exceptions raised by symperm. Every error derives from PermutationError, and also from the builtin
exception a caller would naturally expect (ValueError or IndexError), so either can be caught.
"""


class PermutationError(Exception):
    """Base class for all errors raised by this package."""


class InvalidPermutationError(PermutationError, ValueError):
    """The data is not a bijection of 1..n."""


class InvalidCyclesError(InvalidPermutationError):
    """A list of cycles does not partition 1..n."""


class InvalidPermutationMatrixError(InvalidPermutationError):
    """A matrix is not a square 0/1 matrix with a single 1 in each row and column."""


class DegreeMismatchError(PermutationError, ValueError):
    """Two objects which must have the same degree do not."""


class PermutationIndexError(PermutationError, IndexError):
    """An index lies outside 1..n."""


class RankError(PermutationError, ValueError):
    """A rank lies outside 1..n!."""


class ArgumentError(PermutationError, ValueError):
    """Malformed arguments to a constructor or operation."""


class NoSquareRootError(PermutationError, ValueError):
    """The permutation has no square root."""
