"""Band LDLT solver: the main user-facing interface.

Wraps the load -> factorize -> solve -> verify sequence for a single
symmetric band system A x = f.
"""

from __future__ import annotations

import time
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from pybandldlt.backend._array_api import get_backend
from pybandldlt.banded._factorize import factorize
from pybandldlt.banded._reconstruct import residual_norm
from pybandldlt.banded._solve import solve
from pybandldlt.banded._storage import BandedStorage
from pybandldlt.io._data_loader import load_system
from pybandldlt.solver._base import BaseSolver
from pybandldlt.solver._control import SolverControl
from pybandldlt.solver._results import SolveResult
from pybandldlt.utils._validation import bandwidth_of, check_square, check_symmetric


class BandLDLTSolver(BaseSolver):
    """Solve a symmetric band system by LDLT factorization.

    A pristine copy of A is kept, so the residual can be checked after an
    in-place factorization and ``fit`` can be called again.

    Parameters
    ----------
    storage : BandedStorage
        The matrix A, unfactored.
    rhs : array-like, shape (n,)
        Right-hand side f.
    control : SolverControl or None
        Solve control structure.

    Examples
    --------
    >>> solver = BandLDLTSolver.from_files(
    ...     "data/input.txt", "data/AL.txt", "data/D.txt", "data/F.txt",
    ...     control=SolverControl(precision="double"),
    ... )
    >>> result = solver.fit()
    >>> result.to_file("data/X.txt")
    """

    def __init__(
        self,
        storage: BandedStorage,
        rhs,
        control: SolverControl | None = None,
    ):
        self.control = control or SolverControl()
        if storage.factored:
            raise ValueError("BandLDLTSolver needs the unfactored matrix")

        self.storage = storage
        self.n = storage.n
        self.bandwidth = storage.bandwidth
        self.rhs = storage.xp.array(rhs, dtype=storage.dtype)
        if self.rhs.ndim != 1 or self.rhs.shape[0] != self.n:
            raise ValueError(
                f"rhs must have shape ({self.n},), got {tuple(self.rhs.shape)}"
            )
        self._original = storage.copy()

    @classmethod
    def from_files(
        cls,
        dims_path: str | Path,
        band_path: str | Path,
        diag_path: str | Path,
        rhs_path: str | Path,
        control: SolverControl | None = None,
    ) -> BandLDLTSolver:
        """Load the system from the four text files (see ``pybandldlt.io``)."""
        control = control or SolverControl()
        storage, f = load_system(
            dims_path,
            band_path,
            diag_path,
            rhs_path,
            precision=control.precision,
            xp=get_backend(control.backend),
        )
        return cls(storage, f, control)

    @classmethod
    def from_dense(
        cls,
        A: NDArray,
        rhs: NDArray,
        bandwidth: int | None = None,
        control: SolverControl | None = None,
    ) -> BandLDLTSolver:
        """Build the solver from a dense symmetric matrix.

        The bandwidth is detected from the nonzero pattern when not given.
        """
        control = control or SolverControl()
        A = np.asarray(A, dtype=np.float64)
        check_square(A)
        if not check_symmetric(A):
            raise ValueError("A must be symmetric")
        if bandwidth is None:
            bandwidth = bandwidth_of(A)

        storage = BandedStorage.from_dense(
            A,
            bandwidth,
            precision=control.precision,
            xp=get_backend(control.backend),
        )
        return cls(storage, rhs, control)

    def fit(self) -> SolveResult:
        """Factorize A and solve A x = f.

        Returns
        -------
        result : SolveResult

        Raises
        ------
        SingularMatrixError
            If A has a vanishing pivot.
        """
        control = self.control

        if self.storage.factored:
            # Previous in-place fit: reload A before factorizing again
            self.storage.load(self._original.band, self._original.diag)

        if control.verbose >= 1:
            print(
                f"Solving band system with n={self.n}, k={self.bandwidth} "
                f"({self.storage.precision.name} precision, "
                f"{self.storage.xp.name} backend)"
            )

        start_time = time.time()
        factor = factorize(
            self.storage,
            pivot_tol=control.pivot_tol,
            overwrite=control.overwrite,
            verbose=control.verbose,
        )
        factor_time = time.time() - start_time

        start_time = time.time()
        x = solve(factor, self.rhs)
        solve_time = time.time() - start_time
        if control.verbose >= 2:
            print(f"  Triangular solves ({solve_time:.3f}s)")

        res = None
        if control.check_residual:
            res = residual_norm(self._original, x, self.rhs, relative=True)

        if control.verbose >= 1:
            msg = f"  Solved in {factor_time + solve_time:.3f}s"
            if res is not None:
                msg += f", relative residual {res:.3e}"
            print(msg)

        return SolveResult(
            x=x,
            factor=factor,
            residual_norm=res,
            n=self.n,
            bandwidth=self.bandwidth,
            precision=self.storage.precision.name,
            factor_time=factor_time,
            solve_time=solve_time,
            control=control,
        )

    def restore(self) -> BandedStorage:
        """Return a fresh copy of the original, unfactored matrix."""
        return self._original.copy()
