"""Tests for dense expansion, band matrix-vector products and recomposition."""

from __future__ import annotations

import numpy as np
import pytest

from pybandldlt.banded import (
    BandedStorage,
    expand,
    factorize,
    multiply,
    recompose,
    residual_norm,
    solve,
)
from pybandldlt.utils import random_spd_band


class TestExpand:
    def test_tridiagonal(self, tridiag_storage):
        np.testing.assert_array_equal(
            expand(tridiag_storage),
            [[4.0, 2.0, 0.0], [2.0, 5.0, 1.0], [0.0, 1.0, 6.0]],
        )

    def test_roundtrip_from_dense(self, pd_5x5_k2):
        storage = BandedStorage.from_dense(pd_5x5_k2, 2)
        np.testing.assert_array_equal(expand(storage), pd_5x5_k2)

    def test_padding_ignored(self):
        band = np.array([[9.0, 9.0], [9.0, 1.0], [2.0, 3.0]])
        storage = BandedStorage.from_arrays(band, [1.0, 1.0, 1.0])
        np.testing.assert_array_equal(
            expand(storage),
            [[1.0, 1.0, 2.0], [1.0, 1.0, 3.0], [2.0, 3.0, 1.0]],
        )

    @pytest.mark.parametrize("n, k", [(1, 0), (4, 0), (6, 2), (5, 4), (3, 5)])
    def test_symmetric_for_arbitrary_content(self, n, k):
        rng = np.random.default_rng(n + 10 * k)
        storage = BandedStorage.from_arrays(rng.standard_normal((n, k)), rng.standard_normal(n))
        A = expand(storage)
        np.testing.assert_array_equal(A, A.T)

    def test_symmetric_after_factorization(self):
        storage = random_spd_band(8, 3, seed=0)
        factorize(storage)
        A = expand(storage)
        np.testing.assert_array_equal(A, A.T)


class TestMultiply:
    def test_matches_dense(self, pd_5x5_k2):
        storage = BandedStorage.from_dense(pd_5x5_k2, 2)
        x = np.array([1.0, -2.0, 0.5, 3.0, -1.0])
        np.testing.assert_allclose(multiply(storage, x), pd_5x5_k2 @ x, atol=1e-14)

    def test_identity_probe_recovers_columns(self):
        storage = random_spd_band(7, 2, seed=5)
        A = expand(storage)
        for j in range(7):
            e = np.zeros(7)
            e[j] = 1.0
            np.testing.assert_allclose(multiply(storage, e), A[:, j], atol=1e-15)

    def test_zero_bandwidth(self):
        storage = BandedStorage.from_arrays(np.zeros((3, 0)), [1.0, 2.0, 3.0])
        np.testing.assert_allclose(multiply(storage, [1.0, 1.0, 1.0]), [1.0, 2.0, 3.0])

    def test_wrong_length(self, tridiag_storage):
        with pytest.raises(ValueError):
            multiply(tridiag_storage, [1.0, 2.0])


class TestRecompose:
    def test_tridiagonal(self, tridiag_storage):
        A = expand(tridiag_storage)
        factorize(tridiag_storage)
        np.testing.assert_allclose(recompose(tridiag_storage), A, atol=1e-14)

    def test_requires_factored(self, tridiag_storage):
        with pytest.raises(ValueError):
            recompose(tridiag_storage)


class TestResidualNorm:
    def test_exact_solution(self, tridiag_storage, tridiag_3x3):
        f = tridiag_3x3[2]
        fac = factorize(tridiag_storage, overwrite=False)
        x = solve(fac, f)
        assert residual_norm(tridiag_storage, x, f) < 1e-14
        assert residual_norm(tridiag_storage, x, f, relative=True) < 1e-14

    def test_known_residual(self, tridiag_storage):
        # A @ 0 - f = -f
        f = np.array([3.0, 4.0, 0.0])
        assert residual_norm(tridiag_storage, np.zeros(3), f) == pytest.approx(5.0)
        assert residual_norm(tridiag_storage, np.zeros(3), f, relative=True) == pytest.approx(1.0)

    def test_rejects_factored_storage(self, tridiag_storage):
        factorize(tridiag_storage)
        with pytest.raises(ValueError):
            residual_norm(tridiag_storage, np.zeros(3), np.ones(3))
