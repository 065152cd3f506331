"""NumPy + SciPy backend implementation."""

from __future__ import annotations

import numpy as np
import scipy.linalg


class NumpyBackend:
    """Backend wrapping NumPy + SciPy for array operations."""

    name = "numpy"
    float32 = np.float32
    float64 = np.float64
    longdouble = np.longdouble
    int64 = np.int64

    @staticmethod
    def dtype(name):
        """Map a precision dtype name ("float32", ...) to a NumPy dtype."""
        try:
            return {
                "float32": np.float32,
                "float64": np.float64,
                "longdouble": np.longdouble,
            }[name]
        except KeyError:
            raise ValueError(f"Unsupported dtype for numpy backend: {name!r}") from None

    @staticmethod
    def eps(dtype):
        return float(np.finfo(dtype).eps)

    # --- Array creation ---
    @staticmethod
    def array(data, dtype=None):
        return np.array(data, dtype=dtype)

    @staticmethod
    def zeros(shape, dtype=np.float64):
        return np.zeros(shape, dtype=dtype)

    @staticmethod
    def eye(n, dtype=np.float64):
        return np.eye(n, dtype=dtype)

    @staticmethod
    def arange(start, stop=None, step=1, dtype=None):
        if stop is None:
            return np.arange(start, dtype=dtype)
        return np.arange(start, stop, step, dtype=dtype)

    # --- Array manipulation ---
    @staticmethod
    def copy(a):
        return np.copy(a)

    @staticmethod
    def reshape(a, shape):
        return np.reshape(a, shape)

    @staticmethod
    def transpose(a):
        return a.T

    # --- Math operations ---
    @staticmethod
    def sum(a, axis=None):
        return np.sum(a, axis=axis)

    # --- Linear algebra ---
    @staticmethod
    def matmul(a, b):
        return a @ b

    @staticmethod
    def norm(a, ord=None, axis=None):
        # scipy.linalg.norm has no longdouble kernels
        if a.dtype == np.longdouble:
            return np.linalg.norm(a, ord=ord, axis=axis)
        return scipy.linalg.norm(a, ord=ord, axis=axis)

    # --- Type checking ---
    @staticmethod
    def is_array(x):
        return isinstance(x, np.ndarray)

    @staticmethod
    def to_numpy(x):
        return np.asarray(x)

    @staticmethod
    def astype(x, dtype):
        return x.astype(dtype)
