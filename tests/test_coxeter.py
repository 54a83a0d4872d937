import unittest

from hypothesis import given, strategies as st

from symperm import (
    ArgumentError,
    CoxeterDecomposition,
    DegreeMismatchError,
    Permutation,
    decompose,
    recompose,
    reduce,
)
from symperm.coxeter import bubble_word, from_cox


@st.composite
def permutations(draw, max_n=9):
    n = draw(st.integers(min_value=0, max_value=max_n))
    return Permutation(draw(st.permutations(range(1, n + 1))))


@st.composite
def words(draw, max_n=7, max_len=20):
    n = draw(st.integers(min_value=2, max_value=max_n))
    return n, draw(st.lists(st.integers(min_value=1, max_value=n - 1), max_size=max_len))


class TestReduce(unittest.TestCase):
    def test_cancellation(self):
        self.assertEqual((), reduce([2, 2]))
        self.assertEqual((), reduce([1, 3, 3, 1]))
        self.assertEqual((1,), reduce([1, 2, 2]))

    def test_commutation(self):
        self.assertEqual((1, 3), reduce([3, 1]))
        self.assertEqual((1, 2, 4), reduce([4, 1, 2]))
        self.assertEqual((2, 1), reduce([2, 1]))
        self.assertEqual((1, 3, 5), reduce([5, 3, 1]))

    def test_braid(self):
        self.assertEqual((), reduce([2, 1, 2, 1, 2, 1]))
        self.assertEqual((), reduce([1, 2, 1, 2, 1, 2]))
        self.assertEqual((3,), reduce([3, 2, 3, 2, 3, 2, 3]))
        self.assertEqual((1, 2, 1, 2, 1), reduce([1, 2, 1, 2, 1]))

    def test_rules_combine(self):
        # The 4 has to commute out of the way before the braid relation can fire.
        self.assertEqual((4,), reduce([2, 1, 2, 4, 1, 2, 1]))

    def test_braid_waits_for_commutation(self):
        self.assertEqual((1, 2, 1, 2, 1, 4), reduce([1, 2, 1, 2, 1, 4, 2, 2]))
        self.assertEqual((1, 2, 1, 2, 1, 4), reduce([1, 2, 1, 2, 1, 2, 4, 2]))
        self.assertEqual(reduce([2, 3, 2, 3, 2, 1, 3]), reduce([2, 3, 2, 3, 2, 3, 1]))


class TestDecomposition(unittest.TestCase):
    def test_decompose(self):
        self.assertEqual((2, 1), decompose(Permutation([3, 1, 2])).terms)
        self.assertEqual((1, 3), decompose(Permutation([2, 1, 4, 3])).terms)
        self.assertEqual((1, 2, 1), decompose(Permutation([3, 2, 1])).terms)
        self.assertEqual((), decompose(Permutation.identity(5)).terms)
        self.assertEqual(CoxeterDecomposition(0), decompose(Permutation([])))

    def test_recompose(self):
        self.assertEqual(Permutation.identity(4), recompose(CoxeterDecomposition(4)))
        self.assertEqual(Permutation([1, 3, 2]), CoxeterDecomposition.generator(3, 2).to_permutation())
        self.assertEqual(Permutation([3, 1, 2]), recompose(CoxeterDecomposition(3, (2, 1))))

    def test_equality_is_on_reduced_terms(self):
        self.assertEqual(CoxeterDecomposition(5, (4, 1, 2)), CoxeterDecomposition(5, (1, 2, 4)))
        self.assertEqual(CoxeterDecomposition(5, (3, 3)), CoxeterDecomposition.identity(5))
        self.assertNotEqual(CoxeterDecomposition(4, (1,)), CoxeterDecomposition(5, (1,)))

    def test_products(self):
        s1 = CoxeterDecomposition.generator(3, 1)
        s2 = CoxeterDecomposition.generator(3, 2)
        self.assertEqual(CoxeterDecomposition(3, (1, 2)), s1 * s2)
        self.assertEqual(CoxeterDecomposition.identity(3), s1 * 1)
        self.assertEqual(CoxeterDecomposition.identity(3), s1 * s2 * s1 * s2 * s1 * s2)
        self.assertEqual((s1 * s2).to_permutation(), s1.to_permutation() * s2.to_permutation())

        with self.assertRaises(DegreeMismatchError):
            s1 * CoxeterDecomposition.generator(4, 1)

    def test_inverse(self):
        d = decompose(Permutation([2, 4, 1, 3]))
        self.assertEqual(d.to_permutation().inv(), d.inv().to_permutation())
        self.assertTrue((d * d.inv()).to_permutation().is_identity())

        # Without the braid move among the rules, a word times its inverse need not reduce to the empty word.
        e = CoxeterDecomposition(5, (2, 4, 3, 2, 3, 2, 3))
        self.assertEqual((4,), e.inv().terms)
        self.assertEqual((2, 4, 3, 2, 3, 2, 3, 4), (e * e.inv()).terms)
        self.assertTrue((e * e.inv()).to_permutation().is_identity())

    def test_bad_terms(self):
        with self.assertRaises(ArgumentError):
            CoxeterDecomposition(3, (3,))
        with self.assertRaises(ArgumentError):
            CoxeterDecomposition(3, (0,))
        with self.assertRaises(ArgumentError):
            CoxeterDecomposition(1, (1,))

    def test_latex(self):
        self.assertEqual(r'$\mathrm{id}$', CoxeterDecomposition(3)._repr_latex_())
        self.assertEqual('$s_{2} s_{1}$', CoxeterDecomposition(3, (2, 1))._repr_latex_())


@given(permutations())
def test_decompose_recompose(p):
    d = p.coxeter()
    assert d.n == len(p)
    assert recompose(d) == p
    assert len(d) == p.length()


@given(permutations())
def test_bubble_word_counts_inversions(p):
    word = bubble_word(p.data)
    assert len(word) == p.length()
    assert Permutation(list(from_cox(len(p), word))) == p


@given(words())
def test_reduce_preserves_the_element_and_is_idempotent(nw):
    n, word = nw
    reduced = reduce(word)
    assert reduce(reduced) == reduced
    assert from_cox(n, reduced) == from_cox(n, word)
    assert all(a != b and not a > b + 1 for a, b in zip(reduced, reduced[1:]))


@given(permutations(), st.lists(st.integers(min_value=0, max_value=100), max_size=40))
def test_commuting_words_reduce_identically(p, moves):
    terms = list(p.coxeter().terms)
    for move in moves:
        if len(terms) < 2:
            break
        i = move % (len(terms) - 1)
        if abs(terms[i] - terms[i + 1]) >= 2:
            terms[i], terms[i + 1] = terms[i + 1], terms[i]

    assert reduce(terms) == p.coxeter().terms
    assert CoxeterDecomposition(len(p), terms) == decompose(p)


@given(permutations(max_n=6), permutations(max_n=6))
def test_products_agree_with_permutations(p, q):
    if len(p) != len(q):
        return
    assert (p.coxeter() * q.coxeter()).to_permutation() == p * q


@given(words(), st.lists(st.integers(min_value=0, max_value=100), max_size=40))
def test_arbitrary_commuted_words_reduce_identically(nw, moves):
    n, word = nw
    commuted = list(word)
    for move in moves:
        if len(commuted) < 2:
            break
        i = move % (len(commuted) - 1)
        if abs(commuted[i] - commuted[i + 1]) >= 2:
            commuted[i], commuted[i + 1] = commuted[i + 1], commuted[i]

    assert reduce(commuted) == reduce(word)
    assert CoxeterDecomposition(n, commuted) == CoxeterDecomposition(n, word)
