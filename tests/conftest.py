"""Shared test fixtures for pybandldlt."""

from __future__ import annotations

import numpy as np
import pytest

from pybandldlt.backend import get_backend
from pybandldlt.banded import BandedStorage


@pytest.fixture
def xp_numpy():
    """NumPy backend fixture."""
    return get_backend("numpy")


@pytest.fixture
def xp_torch():
    """PyTorch backend fixture (skips if torch not installed)."""
    pytest.importorskip("torch")
    return get_backend("torch")


@pytest.fixture(params=["numpy"])
def xp(request):
    """Parametrized backend fixture (numpy only by default)."""
    if request.param == "torch":
        pytest.importorskip("torch")
    return get_backend(request.param)


@pytest.fixture
def tridiag_3x3():
    """3x3 tridiagonal system with hand-computed factorization.

    A = [[4, 2, 0],
         [2, 5, 1],
         [0, 1, 6]],  f = [1, 2, 3]

    D = [4, 4, 5.75], L[1, 0] = 0.5, L[2, 1] = 0.25,
    x = [11/92, 6/23, 21/46].
    """
    band = np.array([[0.0], [2.0], [1.0]])
    diag = np.array([4.0, 5.0, 6.0])
    f = np.array([1.0, 2.0, 3.0])
    return band, diag, f


@pytest.fixture
def tridiag_storage(tridiag_3x3):
    band, diag, _ = tridiag_3x3
    return BandedStorage.from_arrays(band, diag)


@pytest.fixture
def pd_5x5_k2():
    """5x5 symmetric positive-definite pentadiagonal matrix."""
    return np.array([[6.0, 2.0, 1.0, 0.0, 0.0],
                     [2.0, 7.0, 2.0, 1.0, 0.0],
                     [1.0, 2.0, 8.0, 2.0, 1.0],
                     [0.0, 1.0, 2.0, 7.0, 2.0],
                     [0.0, 0.0, 1.0, 2.0, 6.0]])


@pytest.fixture
def system_files(tmp_path, tridiag_3x3):
    """The 3x3 tridiagonal system written as the four input files."""
    band, diag, f = tridiag_3x3
    paths = {
        "dims": tmp_path / "input.txt",
        "band": tmp_path / "AL.txt",
        "diag": tmp_path / "D.txt",
        "rhs": tmp_path / "F.txt",
    }
    paths["dims"].write_text("3 1\n")
    paths["band"].write_text("\n".join(" ".join(str(v) for v in row) for row in band) + "\n")
    paths["diag"].write_text("\n".join(str(v) for v in diag) + "\n")
    paths["rhs"].write_text(" ".join(str(v) for v in f) + "\n")
    return paths


@pytest.fixture
def lower_banded():
    """Pack a dense matrix into SciPy's lower banded layout (solveh_banded)."""

    def pack(A, k):
        n = A.shape[0]
        ab = np.zeros((k + 1, n))
        for d in range(k + 1):
            ab[d, : n - d] = np.diagonal(A, -d)
        return ab

    return pack
