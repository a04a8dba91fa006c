"""
Unit tests for the number theory helpers.

Tests cover:
- gcd and modpow identities
- Continued fraction convergents and their cut-offs
- Register sizing
"""
from fractions import Fraction

import pytest

from shor_backend.shor_runner.number_theory import (
    MAX_EXPANSION_STEPS,
    Convergent,
    continued_fraction_convergents,
    gcd,
    modpow,
    multiplicative_order,
    register_qubits,
    work_register_bits,
)


class TestGcd:
    """Tests for gcd."""

    @pytest.mark.parametrize("a,b", [(0, 0), (12, 18), (17, 5), (100, 75), (2 ** 89 - 1, 2 ** 61 - 1)])
    def test_symmetric(self, a, b):
        assert gcd(a, b) == gcd(b, a)

    @pytest.mark.parametrize("a", [0, 1, 7, 15, 10 ** 30])
    def test_zero_is_identity(self, a):
        assert gcd(a, 0) == a

    def test_known_values(self):
        assert gcd(4, 15) == 1
        assert gcd(3, 15) == 3
        assert gcd(21, 14) == 7

    def test_big_integers(self):
        p, q, r = 1000000007, 998244353, 2 ** 61 - 1
        assert gcd(p * r, q * r) == r

    def test_pure(self):
        assert gcd(462, 1071) == gcd(462, 1071) == 21


class TestModpow:
    """Tests for modpow."""

    @pytest.mark.parametrize("m", [1, 2, 15, 97, 10 ** 20])
    def test_zero_exponent(self, m):
        assert modpow(5, 0, m) == 1 % m

    @pytest.mark.parametrize("a,e", [(0, 0), (3, 7), (10 ** 12, 99)])
    def test_modulus_one(self, a, e):
        assert modpow(a, e, 1) == 0

    @pytest.mark.parametrize("a,e,m", [(4, 1, 15), (2, 10, 1000), (7, 560, 561), (123456789, 2 ** 40, 10 ** 9 + 7)])
    def test_matches_builtin(self, a, e, m):
        assert modpow(a, e, m) == pow(a, e, m)

    def test_result_in_range(self):
        for a in range(0, 40):
            assert 0 <= modpow(a, 13, 21) < 21

    def test_invalid_arguments(self):
        with pytest.raises(ValueError, match="Modulus"):
            modpow(2, 3, 0)
        with pytest.raises(ValueError, match="Exponent"):
            modpow(2, -1, 5)

    def test_pure(self):
        assert modpow(7, 4, 15) == modpow(7, 4, 15) == 1


class TestContinuedFractions:
    """Tests for continued_fraction_convergents."""

    def test_half(self):
        assert continued_fraction_convergents(128, 256) == [
            Convergent(0, 0, 1),
            Convergent(2, 1, 2),
        ]

    def test_exact_table_for_85_over_512(self):
        assert continued_fraction_convergents(85, 512) == [
            Convergent(0, 0, 1),
            Convergent(6, 1, 6),
            Convergent(42, 42, 253),
            Convergent(2, 85, 512),
        ]

    def test_zero_numerator(self):
        assert continued_fraction_convergents(0, 256) == [Convergent(0, 0, 1)]

    @pytest.mark.parametrize("c,q", [(5, 8), (85, 512), (2 ** 34 - 1, 2 ** 34)])
    def test_denominators_stay_within_register(self, c, q):
        assert all(0 < conv.denominator <= q for conv in continued_fraction_convergents(c, q))

    def test_last_convergent_equals_fraction(self):
        convergents = continued_fraction_convergents(170, 512)
        last = convergents[-1]
        assert Fraction(last.numerator, last.denominator) == Fraction(170, 512)

    @pytest.mark.parametrize("c,q", [(5, 8), (85, 512), (170, 512), (12345, 2 ** 17), (2 ** 33 - 7, 2 ** 34)])
    def test_denominators_increase(self, c, q):
        denominators = [conv.denominator for conv in continued_fraction_convergents(c, q)]
        # q_0 = q_1 = 1 when c/q > 1/2, strictly increasing afterwards
        assert denominators[0] <= denominators[1]
        assert all(b > a for a, b in zip(denominators[1:], denominators[2:]))

    @pytest.mark.parametrize("c,q", [(85, 512), (12345, 2 ** 17), (987654321, 2 ** 34)])
    def test_error_non_increasing(self, c, q):
        target = Fraction(c, q)
        errors = [
            abs(Fraction(conv.numerator, conv.denominator) - target)
            for conv in continued_fraction_convergents(c, q)
        ]
        assert all(later <= earlier for earlier, later in zip(errors, errors[1:]))

    def test_iteration_cap(self):
        # Consecutive Fibonacci numbers give all-ones expansions, the longest possible
        fib = [1, 1]
        while len(fib) < 60:
            fib.append(fib[-1] + fib[-2])
        convergents = continued_fraction_convergents(fib[-2], fib[-1])
        assert len(convergents) == MAX_EXPANSION_STEPS


class TestRegisterSizing:
    """Tests for qubit counts."""

    @pytest.mark.parametrize("n,t", [(3, 4), (15, 8), (21, 9), (91, 14), (100000, 34)])
    def test_register_qubits(self, n, t):
        assert register_qubits(n) == t

    @pytest.mark.parametrize("n,bits", [(3, 2), (15, 4), (21, 5), (16, 4)])
    def test_work_register_bits(self, n, bits):
        assert work_register_bits(n) == bits

    def test_order(self):
        assert multiplicative_order(4, 15) == 2
        assert multiplicative_order(2, 21) == 6
        assert multiplicative_order(7, 15) == 4
