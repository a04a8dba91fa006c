"""
Attempt sequencer for the simulated Shor's algorithm.

run_factorization_attempts(n) validates n and returns a FactorizationSession,
an iterator that advances one sub-step per next() call and yields an
AttemptRecord snapshot after each:

    1. pick a random base a in [2, n-1]
    2. gcd(a, n); a shared factor ends the session successfully
    3. fake the quantum measurement c ~ s*q/r (r found classically)
    4. continued fractions of c/q -> period candidate
    5. verify the candidate (odd? a^(r/2) = -1 mod n?)
    6. gcd(a^(r/2) +- 1, n) -> factors

Failed attempts are emitted and followed by a fresh base, up to
max_attempts. Iteration simply stops when the budget runs out.
"""

import logging
from enum import Enum

from shor_backend.shor_runner.attempt import (
    AttemptRecord,
    AttemptStatus,
    ErrorKind,
    InvalidInput,
)
from shor_backend.shor_runner.number_theory import (
    continued_fraction_convergents,
    gcd,
    modpow,
    multiplicative_order,
    register_qubits,
)
from shor_backend.shor_runner.random_source import get_random_source

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 10


class _Stage(Enum):
    PICK_BASE = "pick_base"
    CHECK_GCD = "check_gcd"
    MEASURE = "measure"
    RECOVER_PERIOD = "recover_period"
    VERIFY = "verify"
    REJECT_PERIOD = "reject_period"
    EXTRACT_FACTORS = "extract_factors"
    DONE = "done"


def select_period_candidate(convergents, n):
    """Denominator of the last convergent with 0 < d < n, or None."""
    candidate = None
    for conv in convergents:
        if 0 < conv.denominator < n:
            candidate = conv.denominator
    return candidate


def synthesize_measurement(base, n, rng):
    """
    Fake the quantum measurement for base a modulo n.

    The true period r is computed classically and only used here to pick
    c = floor(s * q / r) for a random s in [1, r-1]. When r == 1 the range
    is empty and s = 0.

    Returns:
        tuple: (c, q, t)
    """
    r = multiplicative_order(base, n)
    t = register_qubits(n)
    q = 2 ** t
    s = rng.randint(1, r - 1) if r > 1 else 0
    logger.debug("Hidden period for a=%d mod %d is %d (s=%d)", base, n, r, s)
    return (s * q) // r, q, t


class FactorizationSession:
    """
    Pull-based iterator over the snapshots of one factoring session.

    Args:
        n (int): Odd integer greater than 1
        rng (RandomSource): Source for base and measurement draws
        max_attempts (int): Attempt ceiling
    """

    def __init__(self, n, rng, max_attempts=MAX_ATTEMPTS):
        self.n = n
        self.max_attempts = max_attempts
        self._rng = rng
        self._stage = _Stage.PICK_BASE
        self._attempt_count = 0
        self._current = None
        self._rejection = None
        self._term = None
        self.factors = None
        self.attempts = []

    def __iter__(self):
        return self

    def __next__(self):
        if self._stage is _Stage.DONE:
            raise StopIteration

        if self._stage is _Stage.PICK_BASE:
            if self._attempt_count >= self.max_attempts:
                self._stage = _Stage.DONE
                logger.info(
                    "No factors of %d found after %d attempts", self.n, self._attempt_count
                )
                raise StopIteration
            return self._pick_base()

        step = {
            _Stage.CHECK_GCD: self._check_gcd,
            _Stage.MEASURE: self._measure,
            _Stage.RECOVER_PERIOD: self._recover_period,
            _Stage.VERIFY: self._verify,
            _Stage.REJECT_PERIOD: self._reject_period,
            _Stage.EXTRACT_FACTORS: self._extract_factors,
        }[self._stage]
        return step()

    @property
    def finished(self):
        return self._stage is _Stage.DONE

    @property
    def exhausted(self):
        """True once the session ended without finding factors."""
        return self.finished and self.factors is None

    # ---- steps ----
    def _emit(self, record):
        self._current = record
        self.attempts[-1] = record
        if record.status is AttemptStatus.SUCCESS:
            self.factors = record.factors
            self._stage = _Stage.DONE
            logger.info(
                "Attempt #%d factored %d = %d x %d",
                record.id, self.n, record.factors[0], record.factors[1],
            )
        elif record.status is AttemptStatus.FAILED:
            self._stage = _Stage.PICK_BASE
            logger.debug("Attempt #%d failed: %s", record.id, record.error.value)
        return record

    def _pick_base(self):
        base = self._rng.randint(2, self.n - 1)
        self._attempt_count += 1
        self._term = None
        self._rejection = None
        self.attempts.append(None)
        logger.debug("Attempt #%d on n=%d with base %d", self._attempt_count, self.n, base)
        self._stage = _Stage.CHECK_GCD
        return self._emit(AttemptRecord.start(self._attempt_count, self.n, base))

    def _check_gcd(self):
        record = self._current
        g = gcd(record.base, self.n)
        record = record.with_gcd_check(g)
        if g > 1:
            return self._emit(record.succeed(g))
        self._stage = _Stage.MEASURE
        return self._emit(record)

    def _measure(self):
        record = self._current
        c, q, t = synthesize_measurement(record.base, self.n, self._rng)
        self._stage = _Stage.RECOVER_PERIOD
        return self._emit(record.with_measurement(c, q, t))

    def _recover_period(self):
        record = self._current
        measurement = record.measurement
        convergents = continued_fraction_convergents(measurement.c, measurement.q)
        candidate = select_period_candidate(convergents, self.n)
        if candidate is None:
            return self._emit(record.fail(ErrorKind.NO_PERIOD_CANDIDATE))
        self._stage = _Stage.VERIFY
        return self._emit(record.with_period(convergents, candidate))

    def _verify(self):
        record = self._current
        period = record.period
        is_odd = period % 2 != 0
        is_trivial = False
        if not is_odd:
            self._term = modpow(record.base, period // 2, self.n)
            is_trivial = (self._term + 1) % self.n == 0

        if is_odd:
            self._rejection = ErrorKind.ODD_PERIOD
        elif is_trivial:
            self._rejection = ErrorKind.TRIVIAL_VERIFICATION
        self._stage = _Stage.REJECT_PERIOD if self._rejection else _Stage.EXTRACT_FACTORS
        return self._emit(record.with_verification(is_odd, is_trivial))

    def _reject_period(self):
        return self._emit(self._current.fail(self._rejection))

    def _extract_factors(self):
        record = self._current
        term = self._term
        p1 = gcd(term - 1, self.n)
        p2 = gcd(term + 1, self.n)
        record = record.with_factorization(term, p1, p2)
        if 1 < p1 < self.n:
            return self._emit(record.succeed(p1))
        if 1 < p2 < self.n:
            return self._emit(record.succeed(p2))
        return self._emit(record.fail(ErrorKind.TRIVIAL_FACTORS))


def validate_modulus(n):
    """Raise InvalidInput unless n is an odd integer greater than 1."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidInput(f"n must be an integer, got {type(n).__name__}")
    if n <= 1:
        raise InvalidInput(f"n must be greater than 1, got {n}")
    if n % 2 == 0:
        raise InvalidInput(f"n must be odd, got {n}")
    return n


def run_factorization_attempts(n, rng=None, max_attempts=None):
    """
    Start a factoring session for n.

    Args:
        n (int): Odd integer greater than 1
        rng (RandomSource, optional): Defaults to an unseeded numpy source
        max_attempts (int, optional): Defaults to MAX_ATTEMPTS

    Returns:
        FactorizationSession: Lazy iterator of AttemptRecord snapshots

    Raises:
        InvalidInput: If n <= 1 or n is even; raised before any record exists
    """
    validate_modulus(n)
    if max_attempts is None:
        max_attempts = MAX_ATTEMPTS
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    if rng is None:
        rng = get_random_source()
    return FactorizationSession(n, rng, max_attempts=max_attempts)
