"""
chart.py
========

Line chart comparing the Euler approximation with the exact solution.

Two series share one axes:
    (t, approx_y)  labelled "Euler", blue
    (t, exact_y)   labelled "Exact", green

The horizontal axis spans [start_time, end_time] of the run and the
vertical axis spans the min/max over both series, so both curves are fully
visible. Figures are built on matplotlib's Figure class directly (Agg
canvas), which renders without a display.

Author: EulerSim
Version: 1.0.0
"""

from pathlib import Path
from typing import Tuple, Union

from matplotlib.figure import Figure

from .core import OutputError, RunConfig
from .integrator import SolutionScope


TITLE = "Euler vs Exact Solution"
EULER_STYLE = dict(label='Euler', color='b', linewidth=1.5)
EXACT_STYLE = dict(label='Exact', color='g', linewidth=1.5)


def _y_limits(scope: SolutionScope) -> Tuple[float, float]:
    y_min, y_max = scope.check_finite().y_bounds()
    if y_min == y_max:
        # Flat solution; matplotlib rejects a zero-height range
        pad = abs(y_min) * 1e-6 or 1e-6
        return y_min - pad, y_max + pad
    return y_min, y_max


def build_figure(scope: SolutionScope, config: RunConfig = None,
                 size: Tuple[int, int] = (900, 600), dpi: int = 100) -> Figure:
    """
    Build the comparison chart for a finished run.

    Args:
        scope:  Recorded samples of the run.
        config: Run parameters; defaults to scope.config. Only start_time
                and end_time are used (x limits).
        size:   Image size in pixels (width, height).
        dpi:    Resolution used to convert size to inches.

    Returns:
        matplotlib.figure.Figure with a single axes.

    Raises:
        DivergenceError: If the run holds NaN or infinite values, which
            matplotlib cannot place on an axis.
    """
    config = config if config is not None else scope.config
    t = scope.get_signal('t')

    fig = Figure(figsize=(size[0] / dpi, size[1] / dpi), dpi=dpi)
    ax = fig.subplots()

    ax.plot(t, scope.get_signal('approx_y'), **EULER_STYLE)
    ax.plot(t, scope.get_signal('exact_y'), **EXACT_STYLE)

    ax.set_xlim(config.start_time, config.end_time)
    ax.set_ylim(*_y_limits(scope))

    ax.set_title(TITLE, fontsize=14, fontweight='bold')
    ax.set_xlabel("t [s]", fontsize=12)
    ax.set_ylabel("y(t)", fontsize=12)
    ax.grid(True, linestyle='--', alpha=0.7)
    ax.legend(loc='upper right', framealpha=0.8, edgecolor='black')

    fig.tight_layout()
    return fig


def render_chart(scope: SolutionScope, path: Union[str, Path], config: RunConfig = None,
                 size: Tuple[int, int] = (900, 600), dpi: int = 100) -> Path:
    """
    Render the comparison chart to an image file.

    The image format follows the file extension (PNG for ``plot.png``).

    Raises:
        OutputError: If the image cannot be written.
    """
    path = Path(path)
    fig = build_figure(scope, config, size=size, dpi=dpi)
    try:
        fig.savefig(path, dpi=dpi)
    except OSError as e:
        raise OutputError(f"Cannot write chart to '{path}': {e}") from e
    return path


__all__ = [
    'TITLE',
    'build_figure',
    'render_chart',
]
