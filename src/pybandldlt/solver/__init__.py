"""High-level band LDLT solver."""

from pybandldlt.solver._control import SolverControl
from pybandldlt.solver._results import SolveResult
from pybandldlt.solver._solver import BandLDLTSolver

__all__ = ["SolverControl", "SolveResult", "BandLDLTSolver"]
