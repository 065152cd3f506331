"""Backend and precision selection.

Two process-wide defaults live here: the array backend (NumPy or PyTorch)
that band storages are allocated in, and the floating-point precision
policy. A precision names a storage dtype, used for the band/diagonal and
for every vector, and an accumulation dtype, used for the inner sums of the
factorization and substitutions. ``"mixed"`` stores single precision but
accumulates in double.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np

BackendName = Literal["numpy", "torch"]
PrecisionName = Literal["single", "double", "mixed", "extended"]

_DEFAULT_BACKEND: BackendName = "numpy"
_DEFAULT_PRECISION: PrecisionName = "double"

# Cached backend instances
_backends: dict[str, Any] = {}


@dataclass(frozen=True)
class Precision:
    """Floating-point policy for storage, accumulation and output.

    Attributes
    ----------
    name : str
        Policy name.
    storage : str
        dtype name of the band, diagonal and vectors.
    accum : str
        dtype name used for summations.
    digits : int
        Decimal digits written for each solution value.
    """

    name: str
    storage: str
    accum: str
    digits: int


PRECISIONS: dict[str, Precision] = {
    "single": Precision("single", "float32", "float32", 7),
    "double": Precision("double", "float64", "float64", 15),
    "mixed": Precision("mixed", "float32", "float64", 7),
    "extended": Precision("extended", "longdouble", "longdouble", 18),
}


def get_backend(name: BackendName | None = None) -> Any:
    """Return a backend namespace providing array operations.

    Parameters
    ----------
    name : {"numpy", "torch"} or None
        Backend name. If None, returns the current default backend.

    Returns
    -------
    backend : NumpyBackend or TorchBackend
        Object exposing array creation/manipulation functions.
    """
    if name is None:
        name = _DEFAULT_BACKEND

    if name not in _backends:
        if name == "numpy":
            from pybandldlt.backend._numpy_backend import NumpyBackend
            _backends[name] = NumpyBackend()
        elif name == "torch":
            from pybandldlt.backend._torch_backend import TorchBackend
            _backends[name] = TorchBackend()
        else:
            raise ValueError(f"Unknown backend: {name!r}. Use 'numpy' or 'torch'.")

    return _backends[name]


def set_backend(name: BackendName) -> None:
    """Set the default backend globally.

    Parameters
    ----------
    name : {"numpy", "torch"}
        Backend used for new band storages when ``xp`` is not provided.
    """
    global _DEFAULT_BACKEND
    if name not in ("numpy", "torch"):
        raise ValueError(f"Unknown backend: {name!r}. Use 'numpy' or 'torch'.")
    _DEFAULT_BACKEND = name


def get_precision(name: PrecisionName | Precision | None = None) -> Precision:
    """Resolve a precision policy.

    Parameters
    ----------
    name : str, Precision or None
        Policy name or instance. If None, returns the current default.

    Returns
    -------
    precision : Precision
    """
    if isinstance(name, Precision):
        return name
    if name is None:
        name = _DEFAULT_PRECISION
    if name not in PRECISIONS:
        raise ValueError(
            f"Unknown precision: {name!r}. Use one of {sorted(PRECISIONS)}."
        )
    return PRECISIONS[name]


def set_precision(name: PrecisionName) -> None:
    """Set the default precision policy globally.

    Meant to be called once at start-up, before any storage is built;
    storages keep the policy they were created with.
    """
    global _DEFAULT_PRECISION
    if name not in PRECISIONS:
        raise ValueError(
            f"Unknown precision: {name!r}. Use one of {sorted(PRECISIONS)}."
        )
    _DEFAULT_PRECISION = name


def array_namespace(*arrays: Any) -> Any:
    """Infer the backend from the input arrays.

    If any array is a PyTorch tensor, returns the torch backend.
    Otherwise returns the numpy backend.
    """
    for arr in arrays:
        if arr is None:
            continue
        if type(arr).__module__.startswith("torch"):
            return get_backend("torch")
        if isinstance(arr, np.ndarray):
            return get_backend("numpy")

    return get_backend()
