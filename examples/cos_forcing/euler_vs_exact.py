"""
euler_vs_exact.py
=================
EulerSim — Example: Forward Euler vs Exact Solution

Category:
    Numerical Integration / Error Analysis

Purpose:
    Integrates dy/dt = cos(t) - y from t = 0 to t = 5 with forward Euler,
    writes the comparison table and chart, then repeats the run with
    increasing step counts to show first-order convergence: halving h
    roughly halves the error at t = 5.

Signal Description:
    f(t, y)  = cos(t) - y
    y(t)     = 0.5 · (cos t + sin t) + 0.5 · exp(-t)
    y(0)     = 1

Parameters:
    Start time  = 0.0 s
    End time    = 5.0 s
    Steps       = 1000   (h = 0.005 s)

Expected Behavior:
    • The Euler curve tracks the exact solution closely.
    • The convergence table shows the error ratio approaching 2.

Run:
    python euler_vs_exact.py

"""

import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Make the local eulersim package importable when running from any directory.
# ---------------------------------------------------------------------------
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from eulersim import EulerIntegrator, RunConfig, render_chart, write_table


def convergence_table(integrator, step_counts):
    """Print final and max error for each step count."""
    print("\n" + "=" * 70)
    print("CONVERGENCE")
    print("=" * 70)
    print(f"{'n':>8s} {'h':>12s} {'error(b)':>14s} {'max error':>14s} {'ratio':>8s}")

    previous = None
    for n in step_counts:
        scope = integrator.run(RunConfig(step_count=n))
        final = scope.final_error()
        ratio = f"{previous / final:8.3f}" if previous else f"{'-':>8s}"
        print(f"{n:8d} {scope.config.step_size:12.6f} {final:14.6e} {scope.max_error():14.6e} {ratio}")
        previous = final
    print("=" * 70 + "\n")


if __name__ == "__main__":
    print("\n" + "=" * 70)
    print("EXAMPLE: Forward Euler vs Exact Solution")
    print("=" * 70)

    out_dir = Path(__file__).parent
    integrator = EulerIntegrator()

    scope = integrator.run(RunConfig(), verbose=True, progress_bar=True)

    csv_path = write_table(scope, out_dir / "solution.csv")
    print(f"Data saved to {csv_path}")

    plot_path = render_chart(scope, out_dir / "plot.png")
    print(f"✅ Plot saved as {plot_path}")

    convergence_table(integrator, [125, 250, 500, 1000, 2000, 4000])

    print("Complete")
