"""
Fixed-Step Euler Integrator
===========================

Overview:
---------
This module advances a scalar ODE dy/dt = f(t, y) with the explicit
(forward) Euler method and records, at every sampled time, the numerical
estimate next to the closed-form solution and their absolute difference.

Key Concepts:
-------------
1. **ScalarODE strategy**:
   - The integrator is given the right-hand side and the exact solution as
     a ScalarODE; the loop itself knows nothing about the formulas.

2. **Sampling**:
   - A run over [a, b] with n steps produces exactly n + 1 Samples, the
     first one being the initial condition at t = a.
   - The step size h = (b - a) / n is computed once. Time advances by
     repeated addition of h, so the last sample sits at a + n*h, equal to b
     up to floating-point rounding.

3. **Recording**:
   - SolutionScope collects the Samples of a run, much like an
     oscilloscope, and exposes each column as a NumPy array.
   - IntegrationStats summarises the run (errors, timing).

How It Works:
-------------
    t = a, y = y0
    for i in 0..n:
        exact_y = exact(t)
        emit Sample(t, y, exact_y, |exact_y - y|)
        if i < n:
            y = y + h * f(t, y)
            t = t + h

Typical Workflow:
-----------------
1. Build a RunConfig (defaults: a=0, b=5, n=1000, y0=1).
2. ``scope = EulerIntegrator().run(config)``
3. Hand ``scope`` to write_table() / render_chart().

Author: EulerSim
Version: 1.0.0
"""
import time
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from .core import DivergenceError, RunConfig, Sample, ScalarODE
from .problems import COS_FORCING


# =========================
# Run Statistics
# =========================

@dataclass
class IntegrationStats:
    """
    Summary of a completed integration run.

    Populated by EulerIntegrator.run() and available on the returned scope.

    Attributes:
        total_steps (int):     Number of Euler updates performed (n).
        sample_count (int):    Number of Samples recorded (n + 1).
        step_size (float):     Fixed step h.
        compute_time (float):  Wall-clock time (seconds) of the loop.
        avg_step_time (float): compute_time / total_steps.
        max_error (float):     Largest |exact_y - approx_y| over the run.
        final_error (float):   |exact_y - approx_y| at the last sample.

    Example:
        >>> scope = EulerIntegrator().run(RunConfig())
        >>> print(f"max error {scope.stats.max_error:.3e}")
    """
    total_steps: int = 0
    sample_count: int = 0
    step_size: float = 0.0
    compute_time: float = 0.0
    avg_step_time: float = 0.0
    max_error: float = 0.0
    final_error: float = 0.0


# =========================
# Solution Recorder
# =========================

class SolutionScope:
    """
    Recorder for the Samples of one integration run.

    Samples are appended in the order the integrator produces them and are
    never modified afterwards. Columns can be pulled out as NumPy arrays
    for plotting or analysis.

    Attributes:
        config (RunConfig):       The configuration the run was made with.
        stats (IntegrationStats): Filled in by EulerIntegrator.run().

    Example:
        >>> scope = EulerIntegrator().run(RunConfig(step_count=10))
        >>> t = scope.get_signal("t")
        >>> y = scope.get_signal("approx_y")
        >>> len(scope)
        11
    """

    SIGNALS = ('t', 'approx_y', 'exact_y', 'error')

    def __init__(self, config: RunConfig) -> None:
        self.config = config
        self.stats = IntegrationStats()
        self._samples: List[Sample] = []

    def record(self, sample: Sample) -> None:
        self._samples.append(sample)

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return tuple(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __getitem__(self, index):
        return self._samples[index]

    def get_signal(self, name: str) -> np.ndarray:
        """
        Retrieve one column of the run as a float64 array.

        Args:
            name: One of ``"t"``, ``"approx_y"``, ``"exact_y"``, ``"error"``.

        Returns:
            np.ndarray of shape (n + 1,).

        Raises:
            KeyError: If name is not a recorded signal.
        """
        if name not in self.SIGNALS:
            raise KeyError(
                f"Unknown signal '{name}'. Available: {', '.join(self.SIGNALS)}"
            )
        return np.array([getattr(s, name) for s in self._samples], dtype=np.float64)

    def get_signals(self) -> Dict[str, np.ndarray]:
        return {name: self.get_signal(name) for name in self.SIGNALS}

    def y_bounds(self) -> Tuple[float, float]:
        """(min, max) over every approx_y and exact_y value of the run."""
        values = np.concatenate([self.get_signal('approx_y'), self.get_signal('exact_y')])
        return float(values.min()), float(values.max())

    def max_error(self) -> float:
        return max(s.error for s in self._samples)

    def final_error(self) -> float:
        return self._samples[-1].error

    def is_finite(self) -> bool:
        return all(np.isfinite(s.as_row()).all() for s in self._samples)

    def check_finite(self) -> "SolutionScope":
        """
        Make sure every recorded value is finite.

        Forward Euler is unstable once h is too large for the problem
        (h > 2 for dy/dt = cos(t) - y); the estimate then overflows to
        inf and NaN.

        Returns:
            self, so calls can be chained.

        Raises:
            DivergenceError: Naming the first sample holding a NaN or inf.
        """
        for i, s in enumerate(self._samples):
            if not np.isfinite(s.as_row()).all():
                raise DivergenceError(
                    f"Integration diverged at sample {i} (t={s.t}): "
                    f"approx_y={s.approx_y}, exact_y={s.exact_y}. "
                    f"Reduce the step size h={self.config.step_size} "
                    f"by increasing step_count."
                )
        return self


# =========================
# Euler Integrator
# =========================

class EulerIntegrator:
    """
    Explicit fixed-step Euler integrator for a scalar ODE.

    Attributes:
        ode (ScalarODE): Right-hand side and exact solution being integrated.
                         Defaults to dy/dt = cos(t) - y.

    Example:
        >>> integrator = EulerIntegrator()
        >>> scope = integrator.run(RunConfig(), verbose=True)
        >>> scope[1].t
        0.005
    """

    def __init__(self, ode: ScalarODE = COS_FORCING) -> None:
        self.ode = ode

    def step(self, t: float, y: float, h: float) -> Tuple[float, float]:
        """
        One Euler update.

        Returns:
            (y + h * f(t, y), t + h)
        """
        return y + h * self.ode.rhs(t, y), t + h

    def iter_samples(self, config: RunConfig) -> Iterator[Sample]:
        """
        Lazily produce the n + 1 Samples of a run.

        The configuration is validated before the first Sample is yielded.

        Raises:
            ConfigurationError: If config is invalid.
        """
        config.validate()
        n = int(config.step_count)
        h = float(config.step_size)
        exact = self.ode.exact_solution

        # Validation happens eagerly; only the loop is deferred
        return self._generate(config.start_time, float(config.initial_value), h, n, exact)

    def _generate(self, t, y, h, n, exact) -> Iterator[Sample]:
        t = float(t)
        for i in range(n + 1):
            exact_y = exact(t)
            yield Sample(t=t, approx_y=y, exact_y=exact_y, error=abs(exact_y - y))
            if i < n:
                y, t = self.step(t, y, h)

    def run(self, config: Optional[RunConfig] = None, verbose: bool = False,
            progress_bar: bool = False) -> SolutionScope:
        """
        Integrate from start_time to end_time and record every Sample.

        Args:
            config:       Run parameters. Defaults to RunConfig().
            verbose:      If True, print a configuration banner before the
                          run and a summary afterwards.
            progress_bar: If True, print a ``Progress: xx.x%`` line that
                          updates in place every 5 % of the run.

        Returns:
            SolutionScope holding the n + 1 Samples and IntegrationStats.

        Raises:
            ConfigurationError: If config is invalid. Nothing is printed or
                recorded in that case.
        """
        config = config if config is not None else RunConfig()
        samples = self.iter_samples(config)
        scope = SolutionScope(config)
        n = int(config.step_count)

        if verbose:
            print(f"\n{'=' * 70}")
            print(f"EulerSim")
            print(f"{'=' * 70}")
            print(f"  Problem:        {self.ode.name}")
            print(f"  Time span:      [{config.start_time}, {config.end_time}] s")
            print(f"  Steps:          {n}")
            print(f"  Step size:      {config.step_size} s")
            print(f"  Initial value:  {config.initial_value}")
            print(f"{'=' * 70}\n")

        start_time = time.time()
        report_every = max(1, n // 20)

        for i, sample in enumerate(samples):
            scope.record(sample)
            if progress_bar and i % report_every == 0:
                print(f"  Progress: {(i / n) * 100:5.1f}%", end='\r')

        end_time = time.time()

        stats = scope.stats
        stats.total_steps = n
        stats.sample_count = len(scope)
        stats.step_size = config.step_size
        stats.compute_time = end_time - start_time
        stats.avg_step_time = stats.compute_time / n
        stats.max_error = scope.max_error()
        stats.final_error = scope.final_error()

        if progress_bar:
            print(f"  Progress: 100.0%")
        if verbose:
            print_summary(scope)

        return scope


def print_summary(scope: SolutionScope) -> None:
    """Print the error and timing figures of a finished run."""
    stats = scope.stats
    last = scope[-1]
    print(f"\n✓ Integration complete")
    print(f"  Samples:        {stats.sample_count}")
    print(f"  Final time:     {last.t}")
    print(f"  Euler y(b):     {last.approx_y:.15g}")
    print(f"  Exact y(b):     {last.exact_y:.15g}")
    print(f"  Final error:    {stats.final_error:.6e}")
    print(f"  Max error:      {stats.max_error:.6e}")
    print(f"  Compute time:   {stats.compute_time * 1e3:.3f} ms\n")


__all__ = [
    'IntegrationStats',
    'SolutionScope',
    'EulerIntegrator',
    'print_summary',
]
