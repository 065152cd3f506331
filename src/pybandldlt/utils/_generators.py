"""Synthetic band systems for accuracy and stability experiments."""

from __future__ import annotations

import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from pybandldlt.backend._array_api import Precision, get_precision
from pybandldlt.banded._storage import BandedStorage


def hilbert_band(
    n: int,
    bandwidth: int,
    *,
    precision: str | Precision | None = None,
    xp=None,
) -> tuple[BandedStorage, NDArray]:
    """Hilbert matrix H[i, j] = 1 / (i + j + 1) truncated to a band.

    The right-hand side is the row sum of the truncated matrix, so the
    exact solution is the all-ones vector. Hilbert matrices are badly
    conditioned, which makes the error growth with n and with the
    storage precision easy to observe.

    Returns
    -------
    storage : BandedStorage
        Truncated Hilbert matrix, unfactored.
    f : ndarray, shape (n,)
        Right-hand side with solution ``np.ones(n)``.
    """
    H = scipy.linalg.hilbert(n)
    i, j = np.indices(H.shape)
    H[np.abs(i - j) > bandwidth] = 0.0

    storage = BandedStorage.from_dense(H, bandwidth, precision=precision, xp=xp)
    dtype = np.dtype(get_precision(precision).storage)
    f = H.sum(axis=1).astype(dtype)
    return storage, f


def random_spd_band(
    n: int,
    bandwidth: int,
    *,
    seed: int | None = None,
    precision: str | Precision | None = None,
    xp=None,
) -> BandedStorage:
    """Random symmetric positive definite band matrix.

    Off-diagonal entries are uniform on [-1, 1]; each diagonal entry
    exceeds the absolute row sum by one, so the matrix is strictly
    diagonally dominant and hence SPD.
    """
    rng = np.random.default_rng(seed)
    A = np.zeros((n, n), dtype=np.float64)
    for d in range(1, bandwidth + 1):
        if d >= n:
            break
        vals = rng.uniform(-1.0, 1.0, size=n - d)
        A[np.arange(d, n), np.arange(n - d)] = vals
        A[np.arange(n - d), np.arange(d, n)] = vals
    A[np.diag_indices(n)] = np.abs(A).sum(axis=1) + 1.0
    return BandedStorage.from_dense(A, bandwidth, precision=precision, xp=xp)
