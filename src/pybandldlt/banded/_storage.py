"""Compact storage for symmetric band matrices.

A symmetric matrix A of order n and half-bandwidth k is kept as

- ``band``: an (n, k) array holding the strictly-lower band, row by row;
- ``diag``: an (n,) array holding the main diagonal.

Entry (row, col) with ``1 <= row - col <= k`` lives in
``band[row, k - row + col]``, so the last column of ``band`` is the first
sub-diagonal and ``band[row, 0]`` is the entry furthest from the diagonal.
Slots with ``col < 0`` (the top-left triangle of ``band``) are padding.
The upper band is never stored; it is read by mirroring.

Examples
--------
n = 4, k = 2::

    A = [[d0  .   .   . ]          band = [[ *    *  ]
         [a10 d1  .   . ]                  [ *    a10]
         [a20 a21 d2  . ]                  [a20  a21]
         [ 0  a31 a32 d3]]                 [a31  a32]]
"""

from __future__ import annotations

from typing import Any

from pybandldlt.backend._array_api import (
    Precision,
    array_namespace,
    get_backend,
    get_precision,
)


class BandedStorage:
    """Symmetric band matrix in (band, diag) form.

    Parameters
    ----------
    n : int
        Matrix order, > 0.
    bandwidth : int
        Half-bandwidth k >= 0: number of sub-diagonals kept.
    precision : str, Precision or None
        Precision policy; the process default when None.
    xp : backend, optional
        Array backend; the process default when None.

    Attributes
    ----------
    band : array, shape (n, bandwidth)
        Sub-diagonal entries of A, or of L after factorization.
    diag : array, shape (n,)
        Diagonal of A, or of D after factorization.
    factored : bool
        True once ``band``/``diag`` hold L and D.
    """

    def __init__(
        self,
        n: int,
        bandwidth: int,
        *,
        precision: str | Precision | None = None,
        xp: Any = None,
    ):
        n = int(n)
        bandwidth = int(bandwidth)
        if n <= 0:
            raise ValueError(f"Matrix order must be positive, got n={n}")
        if bandwidth < 0:
            raise ValueError(f"Bandwidth must be non-negative, got {bandwidth}")

        self.n = n
        self.bandwidth = bandwidth
        self.precision = get_precision(precision)
        self.xp = xp if xp is not None else get_backend()
        self.dtype = self.xp.dtype(self.precision.storage)
        self.band = self.xp.zeros((n, bandwidth), dtype=self.dtype)
        self.diag = self.xp.zeros((n,), dtype=self.dtype)
        self.factored = False

    # --- Construction ---
    @classmethod
    def from_arrays(
        cls,
        band,
        diag,
        *,
        precision: str | Precision | None = None,
        xp: Any = None,
    ) -> BandedStorage:
        """Build a storage from externally supplied band and diagonal arrays.

        Parameters
        ----------
        band : array-like, shape (n, k)
            Sub-diagonal band, row-major, in the slot layout described in
            the module docstring.
        diag : array-like, shape (n,)
            Main diagonal.

        Raises
        ------
        ValueError
            If the shapes disagree.
        """
        if xp is None:
            xp = array_namespace(band, diag)
        diag_arr = xp.array(diag)
        if diag_arr.ndim != 1:
            raise ValueError(f"diag must be 1-dimensional, got shape {tuple(diag_arr.shape)}")
        n = diag_arr.shape[0]

        band_arr = xp.array(band)
        if band_arr.ndim == 1 and band_arr.shape[0] == 0:
            band_arr = xp.reshape(band_arr, (n, 0))
        if band_arr.ndim != 2 or band_arr.shape[0] != n:
            raise ValueError(
                f"band must have shape (n, k) with n={n}, got {tuple(band_arr.shape)}"
            )

        storage = cls(n, band_arr.shape[1], precision=precision, xp=xp)
        storage.load(band_arr, diag_arr)
        return storage

    @classmethod
    def from_dense(
        cls,
        A,
        bandwidth: int,
        *,
        precision: str | Precision | None = None,
        xp: Any = None,
    ) -> BandedStorage:
        """Pack the lower band of a dense symmetric matrix.

        Entries of ``A`` outside the band are ignored.
        """
        if xp is None:
            xp = array_namespace(A)
        A = xp.array(A)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise ValueError(f"A must be square, got shape {tuple(A.shape)}")

        n = A.shape[0]
        storage = cls(n, bandwidth, precision=precision, xp=xp)
        k = storage.bandwidth
        for i in range(n):
            storage.diag[i] = A[i, i]
            lo = max(0, i - k)
            if lo < i:
                storage.band[i, k - i + lo:k] = xp.astype(A[i, lo:i], storage.dtype)
        return storage

    def load(self, band, diag) -> None:
        """Re-populate the storage in place and mark it unfactored.

        Loading the same values twice gives bit-identical storage, which is
        how a factored storage is reset to the original matrix.
        """
        band = self.xp.array(band, dtype=self.dtype)
        diag = self.xp.array(diag, dtype=self.dtype)
        if tuple(band.shape) != (self.n, self.bandwidth):
            raise ValueError(
                f"band must have shape {(self.n, self.bandwidth)}, "
                f"got {tuple(band.shape)}"
            )
        if tuple(diag.shape) != (self.n,):
            raise ValueError(f"diag must have shape {(self.n,)}, got {tuple(diag.shape)}")

        self.band[...] = band
        self.diag[...] = diag
        self.factored = False

    def copy(self) -> BandedStorage:
        """Deep copy, keeping precision, backend and factored state."""
        other = BandedStorage(
            self.n, self.bandwidth, precision=self.precision, xp=self.xp
        )
        other.band = self.xp.copy(self.band)
        other.diag = self.xp.copy(self.diag)
        other.factored = self.factored
        return other

    # --- Index mapping ---
    def index(self, row: int, col: int) -> int:
        """Slot in ``band[row]`` holding entry (row, col).

        Upper-band queries (col > row) are answered for the mirrored entry,
        so the returned slot belongs to row ``max(row, col)``. Only valid
        for ``1 <= |row - col| <= k``; the diagonal is held in ``diag``.
        """
        if col > row:
            row, col = col, row
        return self.bandwidth - row + col

    def in_band(self, row: int, col: int) -> bool:
        """True if (row, col) may hold a nonzero entry."""
        return abs(row - col) <= self.bandwidth

    def get(self, row: int, col: int) -> float:
        """Entry (row, col) of the stored symmetric matrix; 0.0 outside the band."""
        if col > row:
            row, col = col, row
        if row == col:
            return float(self.diag[row])
        if row - col > self.bandwidth:
            return 0.0
        return float(self.band[row, self.index(row, col)])

    def set(self, row: int, col: int, value: float) -> None:
        """Write entry (row, col), and thereby its mirror (col, row)."""
        if col > row:
            row, col = col, row
        if row == col:
            self.diag[row] = value
            return
        if row - col > self.bandwidth:
            raise ValueError(
                f"Entry ({row}, {col}) is outside the band (k={self.bandwidth})"
            )
        self.band[row, self.index(row, col)] = value

    def __repr__(self) -> str:
        state = "factored" if self.factored else "unfactored"
        return (
            f"BandedStorage(n={self.n}, bandwidth={self.bandwidth}, "
            f"precision={self.precision.name!r}, backend={self.xp.name!r}, {state})"
        )
