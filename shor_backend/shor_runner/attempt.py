"""
Progress records emitted by the factorization sequencer.

An AttemptRecord is an immutable snapshot. Each sub-step of an attempt
produces a new snapshot through one of the transition methods below, which
only accept fields in order:

    base -> gcd_check -> measurement -> convergents/period
         -> verification -> factorization -> factors | error

A transition made out of order, or on a record that already reached a
terminal status, raises RuntimeError.
"""

from collections import namedtuple
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from shor_backend.shor_runner.number_theory import Convergent

Measurement = namedtuple("Measurement", ["c", "q", "t"])
Verification = namedtuple("Verification", ["is_odd", "is_trivial"])
Factorization = namedtuple("Factorization", ["term", "p1", "p2"])


class InvalidInput(ValueError):
    """Raised when a session is asked to factor n <= 1 or an even n."""


class AttemptStatus(str, Enum):
    RUNNING = "running"
    FAILED = "failed"
    SUCCESS = "success"


class ErrorKind(str, Enum):
    """Stable failure kinds stored on failed attempts."""

    NO_PERIOD_CANDIDATE = "no suitable period candidate"
    ODD_PERIOD = "period is odd"
    TRIVIAL_VERIFICATION = "trivial result"
    TRIVIAL_FACTORS = "trivial factors"


@dataclass(frozen=True)
class AttemptRecord:
    id: int
    n: int
    base: int
    status: AttemptStatus = AttemptStatus.RUNNING
    gcd_check: Optional[int] = None
    measurement: Optional[Measurement] = None
    convergents: Optional[Tuple[Convergent, ...]] = None
    period_candidate: Optional[int] = None
    period: Optional[int] = None
    verification: Optional[Verification] = None
    factorization: Optional[Factorization] = None
    factors: Optional[Tuple[int, int]] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def start(cls, attempt_id, n, base):
        if attempt_id < 1:
            raise ValueError("Attempt ids start at 1")
        if not 2 <= base <= n - 1:
            raise ValueError(f"Base {base} outside [2, {n - 1}]")
        return cls(id=attempt_id, n=n, base=base)

    @property
    def is_terminal(self):
        return self.status is not AttemptStatus.RUNNING

    def _require(self, ready, step):
        if self.is_terminal:
            raise RuntimeError(f"Attempt #{self.id} is already {self.status.value}")
        if not ready:
            raise RuntimeError(f"Attempt #{self.id}: {step} set out of order")

    # ---- sub-step transitions ----
    def with_gcd_check(self, g):
        self._require(self.gcd_check is None, "gcd check")
        return replace(self, gcd_check=g)

    def with_measurement(self, c, q, t):
        self._require(self.gcd_check is not None and self.measurement is None, "measurement")
        return replace(self, measurement=Measurement(c, q, t))

    def with_period(self, convergents, candidate):
        self._require(self.measurement is not None and self.convergents is None, "period")
        return replace(
            self,
            convergents=tuple(Convergent(*conv) for conv in convergents),
            period_candidate=candidate,
            period=candidate,
        )

    def with_verification(self, is_odd, is_trivial):
        self._require(self.period is not None and self.verification is None, "verification")
        return replace(self, verification=Verification(bool(is_odd), bool(is_trivial)))

    def with_factorization(self, term, p1, p2):
        self._require(
            self.verification is not None and self.factorization is None, "factorization"
        )
        return replace(self, factorization=Factorization(term, p1, p2))

    # ---- terminal transitions ----
    def succeed(self, factor):
        """Finish successfully with the non-trivial divisor `factor` of n."""
        self._require(self.gcd_check is not None, "factors")
        if not 1 < factor < self.n or self.n % factor:
            raise ValueError(f"{factor} is not a non-trivial factor of {self.n}")
        return replace(
            self, status=AttemptStatus.SUCCESS, factors=(factor, self.n // factor)
        )

    def fail(self, kind):
        self._require(self.gcd_check is not None, "error")
        return replace(self, status=AttemptStatus.FAILED, error=ErrorKind(kind))

    def to_dict(self):
        """JSON-friendly view; fields not reached yet are left out."""
        data = {
            "id": self.id,
            "n": self.n,
            "base": self.base,
            "status": self.status.value,
        }
        if self.gcd_check is not None:
            data["gcdCheck"] = self.gcd_check
        if self.measurement is not None:
            data["measurement"] = self.measurement._asdict()
        if self.convergents is not None:
            data["convergents"] = [conv._asdict() for conv in self.convergents]
        if self.period_candidate is not None:
            data["periodCandidate"] = self.period_candidate
        if self.period is not None:
            data["period"] = self.period
        if self.verification is not None:
            data["verification"] = {
                "isOdd": self.verification.is_odd,
                "isTrivial": self.verification.is_trivial,
            }
        if self.factorization is not None:
            data["factorization"] = self.factorization._asdict()
        if self.factors is not None:
            data["factors"] = list(self.factors)
        if self.error is not None:
            data["error"] = self.error.value
        return data
