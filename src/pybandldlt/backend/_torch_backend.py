"""PyTorch backend implementation (optional dependency)."""

from __future__ import annotations

from typing import Any


def _import_torch():
    """Lazy import of torch."""
    try:
        import torch
        return torch
    except ImportError as e:
        raise ImportError(
            "PyTorch is required for the torch backend. "
            "Install it with: pip install pybandldlt[torch]"
        ) from e


class TorchBackend:
    """Backend wrapping PyTorch for array operations with GPU support."""

    name = "torch"

    def __init__(self, device: str = "cpu", dtype: Any = None):
        self._torch = _import_torch()
        self.device = device
        self.float32 = self._torch.float32
        self.float64 = self._torch.float64
        self.int64 = self._torch.int64
        self._default_dtype = dtype or self._torch.float64

    def dtype(self, name):
        """Map a precision dtype name to a torch dtype (no extended precision)."""
        if name == "float32":
            return self._torch.float32
        if name == "float64":
            return self._torch.float64
        raise ValueError(
            f"Unsupported dtype for torch backend: {name!r}. "
            "Use the 'single', 'double' or 'mixed' precision."
        )

    def eps(self, dtype):
        return float(self._torch.finfo(dtype).eps)

    # --- Array creation ---
    def array(self, data, dtype=None):
        dtype = dtype or self._default_dtype
        if isinstance(data, self._torch.Tensor):
            return data.to(device=self.device, dtype=dtype).clone()
        return self._torch.tensor(data, dtype=dtype, device=self.device)

    def zeros(self, shape, dtype=None):
        dtype = dtype or self._default_dtype
        return self._torch.zeros(shape, dtype=dtype, device=self.device)

    def eye(self, n, dtype=None):
        dtype = dtype or self._default_dtype
        return self._torch.eye(n, dtype=dtype, device=self.device)

    def arange(self, start, stop=None, step=1, dtype=None):
        dtype = dtype or self.int64
        if stop is None:
            return self._torch.arange(start, dtype=dtype, device=self.device)
        return self._torch.arange(start, stop, step, dtype=dtype, device=self.device)

    # --- Array manipulation ---
    def copy(self, a):
        return a.clone()

    def reshape(self, a, shape):
        return a.reshape(shape)

    def transpose(self, a):
        if a.dim() < 2:
            return a
        return a.T

    # --- Math operations ---
    def sum(self, a, axis=None):
        if axis is None:
            return a.sum()
        return a.sum(dim=axis)

    # --- Linear algebra ---
    def matmul(self, a, b):
        return a @ b

    def norm(self, a, ord=None, axis=None):
        return self._torch.linalg.norm(a, ord=ord, dim=axis)

    # --- Type checking ---
    def is_array(self, x):
        return isinstance(x, self._torch.Tensor)

    def to_numpy(self, x):
        if isinstance(x, self._torch.Tensor):
            return x.detach().cpu().numpy()
        import numpy as np
        return np.asarray(x)

    def astype(self, x, dtype):
        return x.to(dtype=dtype)
