"""Utility functions."""

from pybandldlt.utils._generators import hilbert_band, random_spd_band
from pybandldlt.utils._report import print_band, print_matrix, print_vector
from pybandldlt.utils._seeds import set_seed
from pybandldlt.utils._validation import (
    bandwidth_of,
    check_banded,
    check_positive_definite,
    check_symmetric,
)

__all__ = [
    "set_seed",
    "check_symmetric",
    "check_positive_definite",
    "check_banded",
    "bandwidth_of",
    "hilbert_band",
    "random_spd_band",
    "print_band",
    "print_matrix",
    "print_vector",
]
