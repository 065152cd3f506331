"""Banded symmetric storage, LDLT factorization and triangular solves."""

from pybandldlt.banded._storage import BandedStorage
from pybandldlt.banded._factorize import SingularMatrixError, factorize
from pybandldlt.banded._solve import (
    backward_substitution,
    diagonal_substitution,
    forward_substitution,
    solve,
)
from pybandldlt.banded._reconstruct import (
    expand,
    expand_lower,
    multiply,
    recompose,
    residual_norm,
)

__all__ = [
    "BandedStorage",
    "factorize",
    "SingularMatrixError",
    "forward_substitution",
    "diagonal_substitution",
    "backward_substitution",
    "solve",
    "expand",
    "expand_lower",
    "recompose",
    "multiply",
    "residual_norm",
]
