"""Band LDLT solve results structure."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pybandldlt.banded._storage import BandedStorage
from pybandldlt.io._writer import write_solution
from pybandldlt.solver._control import SolverControl


@dataclass
class SolveResult:
    """Results from a band LDLT solve.

    Attributes
    ----------
    x : array, shape (n,)
        Solution vector, in the backend of the storage.
    factor : BandedStorage
        Factored storage (L in the band, D on the diagonal).
    residual_norm : float or None
        ||A x - f|| / ||f||, or None if not computed.
    n : int
        Matrix order.
    bandwidth : int
        Half-bandwidth.
    precision : str
        Precision policy name.
    factor_time : float
        Seconds spent factorizing.
    solve_time : float
        Seconds spent in the three substitutions.
    control : SolverControl
        Control structure used.
    """

    x: Any
    factor: BandedStorage
    residual_norm: float | None
    n: int
    bandwidth: int
    precision: str
    factor_time: float
    solve_time: float
    control: SolverControl

    @property
    def pivots(self) -> NDArray:
        """Diagonal D of the factorization as a NumPy array."""
        return np.asarray(self.factor.xp.to_numpy(self.factor.diag))

    def to_numpy(self) -> NDArray:
        """Solution as a NumPy array."""
        return np.asarray(self.factor.xp.to_numpy(self.x))

    def to_frame(self) -> pd.DataFrame:
        """Solution and pivots, indexed by row (as float64)."""
        return pd.DataFrame(
            {
                "x": self.to_numpy().astype(np.float64),
                "D": self.pivots.astype(np.float64),
            },
            index=pd.RangeIndex(self.n, name="i"),
        )

    def to_file(self, path: str | Path) -> Path:
        """Write the solution, one value per line."""
        return write_solution(path, self.x, precision=self.precision)

    def summary(self, max_rows: int = 10) -> None:
        """Print a short report of the solve."""
        print("=" * 60)
        print("  Band LDLT solve")
        print("=" * 60)
        print(f"  Order n:            {self.n}")
        print(f"  Half-bandwidth k:   {self.bandwidth}")
        print(f"  Precision:          {self.precision}")
        print(f"  Factorization time: {self.factor_time:.4f}s")
        print(f"  Solve time:         {self.solve_time:.4f}s")
        if self.residual_norm is not None:
            print(f"  Relative residual:  {self.residual_norm:.3e}")
        pivots = self.pivots
        print(f"  min |D|:            {np.min(np.abs(pivots)):.3e}")
        print(f"  Negative pivots:    {int(np.sum(pivots < 0))}")
        print("-" * 60)
        with pd.option_context("display.max_rows", max_rows):
            print(self.to_frame())
        print("=" * 60)
