import pytest
from hypothesis import given, strategies as st

from symperm import NoSquareRootError, Permutation, sqrt


@st.composite
def permutations(draw, max_n=12):
    n = draw(st.integers(min_value=0, max_value=max_n))
    return Permutation(draw(st.permutations(range(1, n + 1))))


def test_known_roots():
    for p in [
        Permutation([]),
        Permutation([1]),
        Permutation([2, 3, 1]),
        Permutation([2, 1, 4, 3]),
        Permutation.from_cycles(9, [(1, 5), (2, 7), (3, 4), (6, 8), (9,)]),
        Permutation.from_cycles(9, [(1, 5, 2, 7), (3, 4, 6, 8), (9,)]),
    ]:
        q = sqrt(p)
        assert q * q == p

    assert sqrt(Permutation([])) == Permutation([])


@pytest.mark.parametrize("p", [
    Permutation([2, 1]),
    Permutation([2, 3, 4, 1]),
    Permutation.from_cycles(6, [(1, 2), (3, 4), (5, 6)]),
    Permutation.from_cycles(6, [(1, 2), (3, 4, 5, 6)]),
])
def test_no_root(p):
    with pytest.raises(NoSquareRootError):
        sqrt(p)


@given(permutations())
def test_square_has_root(p):
    square = p * p
    q = sqrt(square)
    assert q * q == square
