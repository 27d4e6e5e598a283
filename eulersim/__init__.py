# EulerSim — forward Euler integration of a scalar ODE against its exact solution.
#
# Usage:
#   from eulersim import EulerIntegrator, RunConfig, write_table, render_chart
#
#   scope = EulerIntegrator().run(RunConfig(step_count=1000))
#   write_table(scope, "solution.csv")
#   render_chart(scope, "plot.png")
#
# Precision:
#   All values are 64-bit Python floats; tables round-trip exactly.

from .core import *
from .problems import *
from .integrator import *
from .table_writer import *
from .chart import *

__version__ = '1.0.0'
__author__ = 'EulerSim'
