"""Reading band systems from text files and writing solutions."""

from pybandldlt.io._data_loader import (
    load_band,
    load_dimensions,
    load_system,
    load_vector,
)
from pybandldlt.io._writer import write_solution

__all__ = [
    "load_dimensions",
    "load_band",
    "load_vector",
    "load_system",
    "write_solution",
]
