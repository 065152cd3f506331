"""Base solver abstract class."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseSolver(ABC):
    """Abstract base class for pybandldlt solvers."""

    @abstractmethod
    def fit(self):
        """Factorize the matrix and solve for the right-hand side."""
        ...

    @abstractmethod
    def restore(self):
        """Return the original, unfactored matrix."""
        ...
