"""Writing solution vectors."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd

from pybandldlt.backend._array_api import Precision, array_namespace, get_precision


def write_solution(
    path: str | Path,
    x,
    *,
    digits: int | None = None,
    precision: str | Precision | None = None,
) -> Path:
    """Write a solution vector, one fixed-point value per line.

    Parameters
    ----------
    path : str or Path
        Output file; parent directories must exist.
    x : array-like, shape (n,)
        Solution vector (NumPy array or torch tensor).
    digits : int or None
        Digits after the decimal point. Defaults to the precision's digit
        count (7 for single/mixed, 15 for double).
    precision : str, Precision or None
        Precision policy used to pick ``digits``.

    Returns
    -------
    path : Path
    """
    path = Path(path)
    if digits is None:
        digits = get_precision(precision).digits

    values = np.asarray(array_namespace(x).to_numpy(x))
    if values.ndim != 1:
        raise ValueError(f"x must be 1-dimensional, got shape {values.shape}")

    if values.dtype == np.longdouble:
        # pandas formats through float64; keep the extra digits
        values = np.array(
            [
                np.format_float_positional(v, precision=digits, unique=False, trim="k")
                for v in values
            ],
            dtype=object,
        )

    pd.DataFrame({"x": values}).to_csv(
        path,
        header=False,
        index=False,
        float_format=f"%.{digits}f",
        lineterminator="\n",
    )
    return path
