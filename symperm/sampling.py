"""
sampling: random permutations.

Every function takes an optional random.Random instance, so results can be reproduced from a seed. Without one,
the module-level generator of the random module is used.
"""
from __future__ import annotations

import random
from typing import Optional

from .errors import ArgumentError
from .permutations import Permutation


def random_permutation(n: int, rng: Optional[random.Random] = None) -> Permutation:
    """A uniformly random permutation of [1, n]."""
    return Permutation.random(n, rng)


def ewens_permutation(n: int, theta: float, rng: Optional[random.Random] = None) -> Permutation:
    """
    A random permutation of [1, n] from the Ewens distribution with parameter theta, under which the probability
    of p is proportional to theta^c(p), c(p) being the number of cycles of p. theta = 1 is the uniform distribution,
    and theta = 0 only produces n-cycles.

    The sample is built by the Chinese restaurant process: element m either starts a new cycle, with probability
    theta / (theta + m - 1), or is inserted after a uniformly chosen earlier element in its cycle.

    >>> ewens_permutation(5, 0, random.Random(0)).cycle_type()
    (5,)
    """
    if n < 0:
        raise ArgumentError(f"Degree must be nonnegative, got {n}")
    if theta < 0:
        raise ArgumentError(f"The Ewens parameter must be nonnegative, got {theta}")

    rng = rng or random
    word = list(range(1, n + 1))
    for m in range(2, n + 1):
        if rng.random() >= theta / (theta + m - 1):
            i = rng.randrange(m - 1)
            word[m - 1], word[i] = word[i], word[m - 1]

    return Permutation(word)
