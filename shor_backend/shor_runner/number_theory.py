"""
Number theory helpers for the classical half of Shor's algorithm.

All functions work on plain Python integers, so they stay exact for any
size of N.
"""

from collections import namedtuple

# Safety cap on the continued fraction expansion
MAX_EXPANSION_STEPS = 30

Convergent = namedtuple("Convergent", ["a", "numerator", "denominator"])


def gcd(a, b):
    """Greatest common divisor of two non-negative integers (Euclid)."""
    while b:
        a, b = b, a % b
    return a


def modpow(base, exponent, modulus):
    """
    Compute base**exponent mod modulus by square-and-multiply.

    Args:
        base (int): Base value
        exponent (int): Non-negative exponent
        modulus (int): Modulus, at least 1

    Returns:
        int: Result in the range [0, modulus)
    """
    if modulus < 1:
        raise ValueError("Modulus must be at least 1")
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")

    result = 1 % modulus
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result


def continued_fraction_convergents(c, q):
    """
    Expand c/q as a continued fraction and collect its convergents.

    Uses the recurrences p_k = a_k*p_{k-1} + p_{k-2} and
    q_k = a_k*q_{k-1} + q_{k-2}, seeded with p_{-1}=1, p_{-2}=0,
    q_{-1}=0, q_{-2}=1.

    The expansion stops when the remainder reaches zero, when a denominator
    would exceed q (that convergent is dropped), or after
    MAX_EXPANSION_STEPS terms.

    Args:
        c (int): Numerator, typically the measured value
        q (int): Denominator, typically the register size 2^t

    Returns:
        list[Convergent]: Convergents in expansion order
    """
    convergents = []
    num, den = c, q
    p_prev2, p_prev1 = 0, 1
    q_prev2, q_prev1 = 1, 0

    for _ in range(MAX_EXPANSION_STEPS):
        if den == 0:
            break
        a = num // den
        num, den = den, num % den

        p_k = a * p_prev1 + p_prev2
        q_k = a * q_prev1 + q_prev2

        # Past the register size the approximation is useless
        if q_k > q:
            break

        convergents.append(Convergent(a, p_k, q_k))

        p_prev2, p_prev1 = p_prev1, p_k
        q_prev2, q_prev1 = q_prev1, q_k

    return convergents


def multiplicative_order(base, n):
    """
    Smallest r >= 1 with base**r = 1 (mod n), found by repeated multiplication.

    Only terminates when gcd(base, n) == 1; callers must check first.
    """
    r = 1
    value = base % n
    while value != 1:
        value = (value * base) % n
        r += 1
    return r


def register_qubits(n):
    """Counting register width t = ceil(2 * log2(n)), computed exactly."""
    if n < 2:
        raise ValueError("n must be at least 2")
    return (n * n - 1).bit_length()


def work_register_bits(n):
    """Bits needed to hold values mod n, ceil(log2(n))."""
    if n < 2:
        raise ValueError("n must be at least 2")
    return (n - 1).bit_length()
