"""Backend and precision selection for NumPy/PyTorch band storage."""

from pybandldlt.backend._array_api import (
    PRECISIONS,
    Precision,
    array_namespace,
    get_backend,
    get_precision,
    set_backend,
    set_precision,
)

__all__ = [
    "get_backend",
    "set_backend",
    "array_namespace",
    "Precision",
    "PRECISIONS",
    "get_precision",
    "set_precision",
]
