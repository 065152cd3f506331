"""Console rendering of band storage and vectors, for debugging."""

from __future__ import annotations

import numpy as np

from pybandldlt.backend._array_api import array_namespace
from pybandldlt.banded._reconstruct import expand
from pybandldlt.banded._storage import BandedStorage

WIDTH = 10


def _fmt(value, width: int, digits: int) -> str:
    return f"{float(value):>{width}.{digits}g}"


def format_rows(rows, *, width: int = WIDTH, digits: int = 6) -> str:
    """Render a 2-D array as fixed-width columns, one line per row."""
    rows = np.atleast_2d(np.asarray(rows))
    return "\n".join(
        " ".join(_fmt(v, width, digits) for v in row) for row in rows
    )


def print_band(storage: BandedStorage, *, width: int = WIDTH, digits: int = 6) -> None:
    """Print the raw (n, k) band array, padding slots included."""
    band = storage.xp.to_numpy(storage.band)
    if storage.bandwidth == 0:
        print("(empty band)\n")
        return
    print(format_rows(band, width=width, digits=digits) + "\n")


def print_matrix(storage: BandedStorage, *, width: int = WIDTH, digits: int = 6) -> None:
    """Print the dense symmetric matrix held by the storage."""
    dense = storage.xp.to_numpy(expand(storage))
    print(format_rows(dense, width=width, digits=digits) + "\n")


def print_vector(v, *, name: str | None = None, width: int = WIDTH, digits: int = 6) -> None:
    """Print a vector, one value per line."""
    values = np.asarray(array_namespace(v).to_numpy(v)).ravel()
    if name:
        print(f"{name}:")
    for value in values:
        print(_fmt(value, width, digits))
    print()
