"""Loading band systems from whitespace-delimited text files.

File layout (one system = four files):

- dimensions: ``n k`` (two integers);
- band: n rows of k values, in the slot layout of :class:`BandedStorage`;
- diagonal: n values;
- right-hand side: n values.

Dimension and vector files are read as a stream of whitespace-separated
values, so any mix of spaces and line breaks is accepted. A file
that is missing raises ``FileNotFoundError``; a file with the wrong
number of values raises ``ValueError``. Nothing is truncated or padded.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pybandldlt.backend._array_api import Precision, get_precision
from pybandldlt.banded._storage import BandedStorage


def _open_text(path: str | Path) -> tuple[Path, str]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    return path, path.read_text()


def _read_values(path: str | Path) -> NDArray:
    """Read every whitespace-separated token of a file as one float64 vector."""
    path, text = _open_text(path)
    try:
        values = pd.to_numeric(pd.Series(text.split(), dtype=object), errors="raise")
    except (TypeError, ValueError) as e:
        raise ValueError(f"Malformed data file {path}: {e}") from e
    return values.to_numpy(dtype=np.float64)


def _read_table(path: str | Path) -> NDArray:
    """Read a whitespace-delimited numeric table as a float64 array."""
    path, text = _open_text(path)

    widths = {len(line.split()) for line in text.splitlines() if line.strip()}
    if len(widths) > 1:
        raise ValueError(
            f"Malformed data file {path}: ragged rows with {sorted(widths)} fields"
        )

    try:
        df = pd.read_csv(path, sep=r"\s+", header=None, dtype=np.float64)
    except pd.errors.EmptyDataError:
        return np.zeros((0, 0), dtype=np.float64)
    except (pd.errors.ParserError, ValueError) as e:
        raise ValueError(f"Malformed data file {path}: {e}") from e

    values = df.to_numpy(dtype=np.float64)
    if np.isnan(values).any():
        raise ValueError(f"Malformed data file {path}: NaN or missing values")
    return values


def load_dimensions(path: str | Path) -> tuple[int, int]:
    """Read the matrix order n and half-bandwidth k.

    Returns
    -------
    n, bandwidth : int
    """
    values = _read_values(path)
    if values.size != 2:
        raise ValueError(
            f"Dimension file {path} must hold exactly 2 values (n, k), got {values.size}"
        )
    if not np.all(values == np.round(values)):
        raise ValueError(f"Dimension file {path} must hold integers, got {values.tolist()}")

    n, bandwidth = int(values[0]), int(values[1])
    if n <= 0 or bandwidth < 0:
        raise ValueError(
            f"Dimension file {path}: need n > 0 and k >= 0, got n={n}, k={bandwidth}"
        )
    return n, bandwidth


def load_band(
    path: str | Path,
    n: int,
    bandwidth: int,
    *,
    precision: str | Precision | None = None,
) -> NDArray:
    """Read the (n, k) sub-diagonal band, row-major.

    For ``bandwidth == 0`` the file must exist but its content is ignored.
    """
    dtype = np.dtype(get_precision(precision).storage)
    values = _read_table(path)
    if bandwidth == 0:
        return np.zeros((n, 0), dtype=dtype)
    if values.shape != (n, bandwidth):
        raise ValueError(
            f"Band file {path} must hold {n} rows of {bandwidth} values, "
            f"got shape {values.shape}"
        )
    return values.astype(dtype)


def load_vector(
    path: str | Path,
    n: int,
    *,
    precision: str | Precision | None = None,
) -> NDArray:
    """Read exactly n values."""
    dtype = np.dtype(get_precision(precision).storage)
    values = _read_values(path)
    if values.size != n:
        raise ValueError(f"Vector file {path} must hold {n} values, got {values.size}")
    return values.astype(dtype)


def load_system(
    dims_path: str | Path,
    band_path: str | Path,
    diag_path: str | Path,
    rhs_path: str | Path,
    *,
    precision: str | Precision | None = None,
    xp=None,
) -> tuple[BandedStorage, NDArray]:
    """Load a complete band system A x = f.

    Returns
    -------
    storage : BandedStorage
        The matrix A, unfactored.
    f : ndarray, shape (n,)
        Right-hand side.
    """
    precision = get_precision(precision)
    n, bandwidth = load_dimensions(dims_path)
    band = load_band(band_path, n, bandwidth, precision=precision)
    diag = load_vector(diag_path, n, precision=precision)
    f = load_vector(rhs_path, n, precision=precision)

    storage = BandedStorage(n, bandwidth, precision=precision, xp=xp)
    storage.load(band, diag)
    return storage, f
