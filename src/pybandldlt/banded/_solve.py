"""Triangular solves against a banded LDLT factorization.

Solving A x = f with A = L D L^T runs three substitutions in order:

1. forward:  L y = f     (sequential in i, ascending)
2. diagonal: D z = y     (independent per i, one vectorized division)
3. backward: L^T x = z   (sequential in i, descending)

Each phase is exposed separately; :func:`solve` chains them.
"""

from __future__ import annotations

from pybandldlt.banded._storage import BandedStorage


def _check_factored(storage: BandedStorage) -> None:
    if not storage.factored:
        raise ValueError("Storage must be factored before solving; call factorize() first")


def _as_vector(storage: BandedStorage, v, name: str, overwrite: bool):
    xp = storage.xp
    if overwrite and xp.is_array(v) and v.dtype == storage.dtype:
        out = v
    else:
        out = xp.array(v, dtype=storage.dtype)
    if out.ndim != 1 or out.shape[0] != storage.n:
        raise ValueError(
            f"{name} must have shape ({storage.n},), got {tuple(out.shape)}"
        )
    return out


def forward_substitution(storage: BandedStorage, f, *, overwrite_b: bool = False):
    """Solve L y = f.

    Parameters
    ----------
    storage : BandedStorage
        Factored storage.
    f : array-like, shape (n,)
        Right-hand side.
    overwrite_b : bool
        Reuse ``f`` as the output buffer when it already has the storage
        dtype and backend.

    Returns
    -------
    y : array, shape (n,)
    """
    _check_factored(storage)
    xp = storage.xp
    y = _as_vector(storage, f, "f", overwrite_b)
    band, n, k = storage.band, storage.n, storage.bandwidth
    acc = xp.dtype(storage.precision.accum)

    for i in range(1, n):
        lo = max(0, i - k)
        L_i = xp.astype(band[i, k - i + lo:k], acc)
        y[i] = xp.astype(y[i], acc) - xp.sum(L_i * xp.astype(y[lo:i], acc))
    return y


def diagonal_substitution(storage: BandedStorage, y, *, overwrite_b: bool = False):
    """Solve D z = y."""
    _check_factored(storage)
    xp = storage.xp
    z = _as_vector(storage, y, "y", overwrite_b)
    acc = xp.dtype(storage.precision.accum)
    z[...] = xp.astype(z, acc) / xp.astype(storage.diag, acc)
    return z


def backward_substitution(storage: BandedStorage, z, *, overwrite_b: bool = False):
    """Solve L^T x = z.

    Row i of L^T is column i of L, i.e. the entries L[j, i] for
    ``i < j <= i + k``. In the band they sit on an anti-diagonal: slot
    ``k - (j - i)`` of row j.
    """
    _check_factored(storage)
    xp = storage.xp
    x = _as_vector(storage, z, "z", overwrite_b)
    band, n, k = storage.band, storage.n, storage.bandwidth
    acc = xp.dtype(storage.precision.accum)

    for i in range(n - 2, -1, -1):
        hi = min(n - 1, i + k)
        rows = xp.arange(i + 1, hi + 1, dtype=xp.int64)
        slots = xp.arange(k - 1, k - 1 - (hi - i), -1, dtype=xp.int64)
        L_col = xp.astype(band[rows, slots], acc)
        x[i] = xp.astype(x[i], acc) - xp.sum(L_col * xp.astype(x[i + 1:hi + 1], acc))
    return x


def solve(storage: BandedStorage, f, *, overwrite_b: bool = False):
    """Solve A x = f using a factored band storage.

    Parameters
    ----------
    storage : BandedStorage
        Output of :func:`factorize`.
    f : array-like, shape (n,)
        Right-hand side.
    overwrite_b : bool
        If True and ``f`` is an array of the storage dtype, the solution
        overwrites ``f``; y and z share the same buffer.

    Returns
    -------
    x : array, shape (n,)

    Examples
    --------
    >>> A = BandedStorage.from_arrays([[0.0], [2.0], [1.0]], [4.0, 5.0, 6.0])
    >>> x = solve(factorize(A), [1.0, 2.0, 3.0])
    """
    y = forward_substitution(storage, f, overwrite_b=overwrite_b)
    z = diagonal_substitution(storage, y, overwrite_b=True)
    return backward_substitution(storage, z, overwrite_b=True)
