"""Dense views and products of band storage, for verification.

None of these run on the solve path. ``expand`` and ``multiply`` read the
storage as the symmetric matrix it currently holds (A before
factorization). ``recompose`` multiplies a factored storage back out into
L D L^T.
"""

from __future__ import annotations

from pybandldlt.banded._storage import BandedStorage


def expand(storage: BandedStorage):
    """Dense symmetric (n, n) matrix of the stored band and diagonal.

    Only the lower band is read; the upper triangle is its mirror, so the
    result is symmetric whatever the storage holds.
    """
    xp = storage.xp
    n, k = storage.n, storage.bandwidth
    dense = xp.zeros((n, n), dtype=storage.dtype)
    for i in range(n):
        dense[i, i] = storage.diag[i]
        lo = max(0, i - k)
        if lo < i:
            row = storage.band[i, k - i + lo:k]
            dense[i, lo:i] = row
            dense[lo:i, i] = row
    return dense


def expand_lower(storage: BandedStorage):
    """Dense unit lower-triangular L of a factored storage."""
    xp = storage.xp
    n, k = storage.n, storage.bandwidth
    L = xp.eye(n, dtype=storage.dtype)
    for i in range(1, n):
        lo = max(0, i - k)
        L[i, lo:i] = storage.band[i, k - i + lo:k]
    return L


def recompose(storage: BandedStorage):
    """Dense L D L^T from a factored storage.

    For a successful factorization this reproduces the original matrix A
    to rounding error.
    """
    if not storage.factored:
        raise ValueError("recompose() needs a factored storage; use expand() for A")
    xp = storage.xp
    acc = xp.dtype(storage.precision.accum)
    L = xp.astype(expand_lower(storage), acc)
    D = xp.astype(storage.diag, acc)
    A = xp.matmul(L * D, xp.transpose(L))
    return xp.astype(A, storage.dtype)


def multiply(storage: BandedStorage, x):
    """Compute A x without forming the dense matrix.

    Each stored entry L[i, j] (j < i) contributes twice: to row i through
    x[j], and to row j through x[i].
    """
    xp = storage.xp
    n, k = storage.n, storage.bandwidth
    acc = xp.dtype(storage.precision.accum)
    x = xp.astype(xp.array(x, dtype=storage.dtype), acc)
    if x.ndim != 1 or x.shape[0] != n:
        raise ValueError(f"x must have shape ({n},), got {tuple(x.shape)}")

    y = xp.astype(storage.diag, acc) * x
    for i in range(1, n):
        lo = max(0, i - k)
        row = xp.astype(storage.band[i, k - i + lo:k], acc)
        y[i] = y[i] + xp.sum(row * x[lo:i])
        y[lo:i] = y[lo:i] + row * x[i]
    return xp.astype(y, storage.dtype)


def residual_norm(storage: BandedStorage, x, f, *, relative: bool = False) -> float:
    """Euclidean norm of A x - f, optionally relative to ||f||.

    ``storage`` must hold A (unfactored).
    """
    if storage.factored:
        raise ValueError("residual_norm() needs the original matrix, not its factorization")
    xp = storage.xp
    acc = xp.dtype(storage.precision.accum)
    f = xp.astype(xp.array(f, dtype=storage.dtype), acc)
    r = xp.astype(multiply(storage, x), acc) - f
    res = float(xp.norm(r))
    if relative:
        f_norm = float(xp.norm(f))
        if f_norm > 0.0:
            res /= f_norm
    return res
