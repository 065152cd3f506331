"""Banded LDLT decomposition.

Factorizes a symmetric band matrix A = L D L^T, with L unit lower
triangular of the same half-bandwidth k and D diagonal, in O(n k^2)
operations. L and D overwrite the band storage of A.

No pivoting is performed: the factorization exists when every leading
principal minor of A is nonzero, which holds for symmetric positive
definite matrices. A pivot D[i] that is zero, tiny or non-finite raises
:class:`SingularMatrixError` instead of dividing through to Inf/NaN.
"""

from __future__ import annotations

import math
import time

import numpy as np

from pybandldlt.banded._storage import BandedStorage


class SingularMatrixError(np.linalg.LinAlgError):
    """Raised when a pivot of the LDLT factorization vanishes.

    Attributes
    ----------
    index : int
        Row at which the factorization broke down.
    pivot : float
        The offending value of D[index].
    tol : float
        Threshold that |D[index]| had to exceed.
    """

    def __init__(self, index: int, pivot: float, tol: float):
        self.index = index
        self.pivot = pivot
        self.tol = tol
        super().__init__(
            f"Matrix is not LDLT-decomposable without pivoting: "
            f"pivot D[{index}] = {pivot!r} (tolerance {tol:.3g})"
        )


def factorize(
    storage: BandedStorage,
    *,
    pivot_tol: float | None = None,
    overwrite: bool = True,
    verbose: int = 0,
) -> BandedStorage:
    """Compute the banded LDLT decomposition.

    For each row i, in order::

        D[i]   = A[i, i] - sum_m L[i, m]^2 D[m]
        L[j, i] = (A[j, i] - sum_m L[j, m] L[i, m] D[m]) / D[i],  i < j <= i + k

    where m runs over the columns shared by the bands of the rows involved.
    Sums are carried in the accumulation dtype of the storage precision.

    Parameters
    ----------
    storage : BandedStorage
        Unfactored symmetric band matrix.
    pivot_tol : float or None
        Pivots with ``|D[i]| <= pivot_tol`` are rejected. When None the
        tolerance is ``eps * |A[i, i]|`` for the storage dtype.
    overwrite : bool
        If True, L and D replace A in ``storage``. Otherwise the input is
        left untouched and a factored copy is returned.
    verbose : int
        0=silent, 2=report timing.

    Returns
    -------
    factor : BandedStorage
        Storage holding L (strict lower band) and D (diagonal).

    Raises
    ------
    SingularMatrixError
        If a pivot is zero, below tolerance or not finite.
    ValueError
        If the storage is already factored.
    """
    if storage.factored:
        raise ValueError("Storage is already factored; reload the matrix first")

    start_time = time.time()
    fac = storage if overwrite else storage.copy()

    xp = fac.xp
    n, k = fac.n, fac.bandwidth
    band, diag = fac.band, fac.diag
    acc = xp.dtype(fac.precision.accum)
    eps = xp.eps(fac.dtype)

    for i in range(n):
        lo = max(0, i - k)

        # Row i of L against D, shared by every update below
        L_i = xp.astype(band[i, k - i + lo:k], acc)
        LD_i = L_i * xp.astype(diag[lo:i], acc)

        a_ii = float(diag[i])
        diag[i] = xp.astype(diag[i], acc) - xp.sum(L_i * LD_i)
        d_i = float(diag[i])

        tol = pivot_tol if pivot_tol is not None else eps * abs(a_ii)
        if not math.isfinite(d_i) or abs(d_i) <= tol:
            raise SingularMatrixError(i, d_i, tol)

        pivot = xp.astype(diag[i], acc)
        for j in range(i + 1, min(n - 1, i + k) + 1):
            lo_j = max(lo, j - k)
            s = k - j
            L_j = xp.astype(band[j, s + lo_j:s + i], acc)
            band[j, s + i] = (
                xp.astype(band[j, s + i], acc) - xp.sum(L_j * LD_i[lo_j - lo:])
            ) / pivot

    fac.factored = True

    if verbose >= 2:
        elapsed = time.time() - start_time
        print(f"  LDLT factorization: n={n}, k={k} ({elapsed:.3f}s)")

    return fac
