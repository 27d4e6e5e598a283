"""
problems.py
===========

Closed-form test problems for the Euler integrator.

The package ships a single problem, a linear ODE driven by a cosine:

    dy/dt = cos(t) - y,        y(0) = 1

whose exact solution is

    y(t) = 0.5 * (cos(t) + sin(t)) + 0.5 * exp(-t)

Both functions are pure and return Python floats so that samples built from
them serialise with full 64-bit precision.

Author: EulerSim
Version: 1.0.0
"""

import numpy as np

from .core import ScalarODE


def cos_forcing_rhs(t: float, y: float) -> float:
    """Right-hand side f(t, y) = cos(t) - y."""
    return float(np.cos(t) - y)


def cos_forcing_exact(t: float) -> float:
    """Exact solution of dy/dt = cos(t) - y with y(0) = 1."""
    return float(0.5 * (np.cos(t) + np.sin(t)) + 0.5 * np.exp(-t))


COS_FORCING = ScalarODE(
    rhs=cos_forcing_rhs,
    exact_solution=cos_forcing_exact,
    name="dy/dt = cos(t) - y",
)


__all__ = [
    'cos_forcing_rhs',
    'cos_forcing_exact',
    'COS_FORCING',
]
