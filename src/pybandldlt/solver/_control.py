"""Band LDLT solver control structure.

Collects the per-run settings of :class:`BandLDLTSolver`: precision,
backend, pivot tolerance, verification and verbosity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass
class SolverControl:
    """Control structure for a band LDLT solve.

    Attributes
    ----------
    precision : str or None
        "single", "double", "mixed" or "extended". None uses the process
        default (see ``pybandldlt.backend.set_precision``).
    backend : str or None
        "numpy" or "torch". None uses the process default.
    pivot_tol : float or None
        Absolute pivot tolerance. None means ``eps * |A[i, i]|``.
    overwrite : bool
        If True, factorize the input storage in place (L and D replace A).
        If False, factorize a copy and keep A for verification.
    check_residual : bool
        If True, compute ||A x - f|| / ||f|| after solving.
    verbose : int
        Verbosity: 0=silent, 1=summary, 2=per-phase timing.
    """

    precision: Literal["single", "double", "mixed", "extended"] | None = None
    backend: Literal["numpy", "torch"] | None = None
    pivot_tol: float | None = None
    overwrite: bool = False
    check_residual: bool = True
    verbose: int = 1
