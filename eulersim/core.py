"""
core.py
=======

Core data structures for the EulerSim package.

This module provides the plain value types every other module works with:
the run configuration, the per-step sample record, and the ODE strategy
object that the integrator evaluates.

Classes:
    Sample:            One time-indexed record of approximate value,
                       exact value and their absolute difference
    RunConfig:         Start/end time, step count and initial value of a run
    ScalarODE:         Right-hand side f(t, y) paired with its exact solution
    EulerSimError:     Base class for all package errors
    ConfigurationError, OutputError, TableFormatError

Author: EulerSim
Version: 1.0.0
"""

import math
import numbers
from dataclasses import dataclass
from typing import Callable, Tuple


# =========================
# Errors
# =========================

class EulerSimError(Exception):
    """Base class for every error raised by eulersim."""


class ConfigurationError(EulerSimError, ValueError):
    """Raised when a RunConfig is rejected before integration starts."""


class OutputError(EulerSimError, RuntimeError):
    """Raised when an output artifact (table or chart) cannot be written."""


class TableFormatError(EulerSimError, ValueError):
    """Raised when a solution table does not have the expected layout."""


class DivergenceError(EulerSimError, ArithmeticError):
    """Raised when a run produced NaN or infinite values."""


# =========================
# Sample Record
# =========================

@dataclass(frozen=True)
class Sample:
    """
    One record of an integration run.

    Attributes:
        t (float):        Independent variable (seconds).
        approx_y (float): Euler estimate of y(t).
        exact_y (float):  Closed-form value of y(t).
        error (float):    |exact_y - approx_y|.

    Example:
        >>> s = Sample(t=0.0, approx_y=1.0, exact_y=1.0, error=0.0)
        >>> s.as_row()
        (0.0, 1.0, 1.0, 0.0)
    """
    t: float
    approx_y: float
    exact_y: float
    error: float

    def as_row(self) -> Tuple[float, float, float, float]:
        return (self.t, self.approx_y, self.exact_y, self.error)


# =========================
# ODE Strategy
# =========================

RightHandSide = Callable[[float, float], float]
ExactSolution = Callable[[float], float]


@dataclass(frozen=True)
class ScalarODE:
    """
    A scalar first-order ODE dy/dt = rhs(t, y) together with its
    closed-form solution.

    The integrator only ever calls ``rhs`` and ``exact_solution``; swapping
    in another ScalarODE changes the problem without touching the loop.

    Attributes:
        rhs:            Pure function f(t, y) -> dy/dt.
        exact_solution: Pure function t -> y(t), valid for the initial value
                        the problem was solved for.
        name:           Human-readable description used in banners.
    """
    rhs: RightHandSide
    exact_solution: ExactSolution
    name: str = "dy/dt = f(t, y)"


# =========================
# Run Configuration
# =========================

@dataclass
class RunConfig:
    """
    Parameters of one fixed-step integration run.

    Attributes:
        start_time (float):   a, first sampled time.
        end_time (float):     b, last sampled time (up to rounding).
        step_count (int):     n, number of Euler steps (n + 1 samples).
        initial_value (float): y0, state at t = a.

    Example:
        >>> cfg = RunConfig(end_time=2.0, step_count=4)
        >>> cfg.step_size
        0.5
    """
    start_time: float = 0.0
    end_time: float = 5.0
    step_count: int = 1000
    initial_value: float = 1.0

    @property
    def step_size(self) -> float:
        """Fixed increment h = (b - a) / n."""
        return (self.end_time - self.start_time) / self.step_count

    @property
    def sample_count(self) -> int:
        return self.step_count + 1

    def validate(self) -> "RunConfig":
        """
        Reject configurations that would produce degenerate output.

        Returns:
            self, so calls can be chained.

        Raises:
            ConfigurationError: If step_count is not an integer >= 1, any of
                the float fields is not finite, end_time <= start_time, the
                step size overflows, or the step size is too small to move t.
        """
        validate_step_count(self.step_count)
        validate_finite(self.start_time, "start_time")
        validate_finite(self.end_time, "end_time")
        validate_finite(self.initial_value, "initial_value")
        if self.end_time <= self.start_time:
            raise ConfigurationError(
                f"end_time must be greater than start_time, "
                f"but got start_time={self.start_time}, end_time={self.end_time}"
            )

        h = self.step_size
        if not math.isfinite(h):
            raise ConfigurationError(
                f"end_time - start_time overflows, "
                f"start_time={self.start_time}, end_time={self.end_time}"
            )
        # t must advance at the largest magnitude it reaches
        t_max = max(abs(self.start_time), abs(self.end_time))
        if t_max + h == t_max:
            raise ConfigurationError(
                f"step_count={self.step_count} gives step size {h}, which is below "
                f"the floating-point resolution of t near {t_max}"
            )
        return self


# =========================
# Validation Helpers
# =========================

def validate_step_count(step_count) -> None:
    """
    Raises:
        ConfigurationError: If step_count is not an integer >= 1. Any
            numbers.Integral (e.g. numpy.int64) is accepted, bool is not.
    """
    if isinstance(step_count, bool) or not isinstance(step_count, numbers.Integral):
        raise ConfigurationError(
            f"step_count must be an integer, but got {step_count!r}"
        )
    if step_count < 1:
        raise ConfigurationError(
            f"step_count must be at least 1, but got {step_count}"
        )


def validate_finite(value, field: str) -> None:
    """
    Raises:
        ConfigurationError: If value is not a finite real number.
    """
    try:
        finite = math.isfinite(value)
    except TypeError:
        raise ConfigurationError(f"{field} must be a number, but got {value!r}")
    if not finite:
        raise ConfigurationError(f"{field} must be finite, but got {value}")


# =========================
# Module Metadata
# =========================

__all__ = [
    'EulerSimError',
    'ConfigurationError',
    'OutputError',
    'TableFormatError',
    'DivergenceError',
    'Sample',
    'ScalarODE',
    'RightHandSide',
    'ExactSolution',
    'RunConfig',
    'validate_step_count',
    'validate_finite',
]

__version__ = '1.0.0'
__author__ = 'EulerSim'
