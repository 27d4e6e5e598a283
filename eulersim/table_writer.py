"""
table_writer.py
===============

CSV serialisation of integration results.

File layout:
    t,euler_y,exact_y,error
    0.0,1.0,1.0,0.0
    0.005,1.0,1.0000124...,1.24...e-05
    ...

One row per Sample, in the order the integrator produced them. Values are
written with ``repr()``, the shortest decimal text that parses back to the
identical 64-bit float, so read_table(write_table(...)) is exact.

Author: EulerSim
Version: 1.0.0
"""

import csv
from pathlib import Path
from typing import Iterable, List, Union

from .core import OutputError, Sample, TableFormatError


HEADER = ('t', 'euler_y', 'exact_y', 'error')

PathLike = Union[str, Path]


def format_value(value: float) -> str:
    return repr(float(value))


def write_table(samples: Iterable[Sample], path: PathLike) -> Path:
    """
    Write samples to a comma-separated file.

    Args:
        samples: Samples in production order (a SolutionScope works too).
        path:    Destination file. Parent directories must exist.

    Returns:
        The path written, as a Path.

    Raises:
        OutputError: If the file cannot be opened or written.
    """
    path = Path(path)
    try:
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(HEADER)
            for sample in samples:
                writer.writerow([format_value(v) for v in sample.as_row()])
    except OSError as e:
        raise OutputError(f"Cannot write table to '{path}': {e}") from e
    return path


def read_table(path: PathLike) -> List[Sample]:
    """
    Parse a file produced by write_table() back into Samples.

    Raises:
        TableFormatError: If the header or a row does not match the layout.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    samples = []
    with open(path, newline='') as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None or tuple(h.strip() for h in header) != HEADER:
            raise TableFormatError(
                f"{path}: expected header {','.join(HEADER)}, but got {header}"
            )
        for line_no, row in enumerate(reader, start=2):
            if len(row) != len(HEADER):
                raise TableFormatError(
                    f"{path}:{line_no}: expected {len(HEADER)} fields, but got {len(row)}"
                )
            try:
                t, approx_y, exact_y, error = (float(v) for v in row)
            except ValueError:
                raise TableFormatError(f"{path}:{line_no}: non-numeric field in {row}")
            samples.append(Sample(t=t, approx_y=approx_y, exact_y=exact_y, error=error))
    return samples


__all__ = [
    'HEADER',
    'format_value',
    'write_table',
    'read_table',
]
