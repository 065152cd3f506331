"""Tests for banded LDLT factorization."""

from __future__ import annotations

import numpy as np
import pytest
import scipy.linalg

from pybandldlt.banded import (
    BandedStorage,
    SingularMatrixError,
    expand,
    expand_lower,
    factorize,
    recompose,
)
from pybandldlt.utils import random_spd_band


class TestFactorizeTridiagonal:
    def test_pivots(self, tridiag_storage):
        factorize(tridiag_storage)
        np.testing.assert_allclose(tridiag_storage.diag, [4.0, 4.0, 5.75])

    def test_multipliers(self, tridiag_storage):
        factorize(tridiag_storage)
        assert tridiag_storage.band[1, 0] == pytest.approx(0.5)
        assert tridiag_storage.band[2, 0] == pytest.approx(0.25)

    def test_padding_untouched(self, tridiag_storage):
        factorize(tridiag_storage)
        assert tridiag_storage.band[0, 0] == 0.0

    def test_in_place_returns_same_object(self, tridiag_storage):
        fac = factorize(tridiag_storage)
        assert fac is tridiag_storage
        assert fac.factored

    def test_copy_leaves_input(self, tridiag_storage):
        fac = factorize(tridiag_storage, overwrite=False)
        assert fac is not tridiag_storage
        assert not tridiag_storage.factored
        np.testing.assert_array_equal(tridiag_storage.diag, [4.0, 5.0, 6.0])
        np.testing.assert_allclose(fac.diag, [4.0, 4.0, 5.75])

    def test_refactorize_raises(self, tridiag_storage):
        factorize(tridiag_storage)
        with pytest.raises(ValueError):
            factorize(tridiag_storage)


class TestFactorizeAgainstDense:
    def test_matches_cholesky(self, pd_5x5_k2):
        storage = BandedStorage.from_dense(pd_5x5_k2, 2)
        factorize(storage)

        C = scipy.linalg.cholesky(pd_5x5_k2, lower=True)
        d = np.diag(C)
        np.testing.assert_allclose(storage.diag, d**2, rtol=1e-12)
        np.testing.assert_allclose(expand_lower(storage), C / d, atol=1e-12)

    def test_reconstruction_identity(self, pd_5x5_k2):
        storage = BandedStorage.from_dense(pd_5x5_k2, 2)
        factorize(storage)
        np.testing.assert_allclose(recompose(storage), pd_5x5_k2, atol=1e-12)

    @pytest.mark.parametrize("n, k", [(1, 0), (6, 1), (12, 3), (30, 5), (8, 7), (5, 9)])
    def test_random_spd(self, n, k):
        storage = random_spd_band(n, k, seed=n + k)
        A = expand(storage)
        factorize(storage)
        np.testing.assert_allclose(recompose(storage), A, atol=1e-10)
        assert np.all(storage.diag > 0)

    def test_factor_keeps_band_structure(self):
        storage = random_spd_band(10, 2, seed=3)
        factorize(storage)
        L = expand_lower(storage)
        i, j = np.indices(L.shape)
        assert np.all(L[(i - j) > 2] == 0.0)
        np.testing.assert_array_equal(np.diag(L), np.ones(10))


class TestZeroBandwidth:
    def test_pivots_are_diagonal(self):
        storage = BandedStorage.from_arrays(np.zeros((4, 0)), [2.0, 3.0, 5.0, 7.0])
        factorize(storage)
        np.testing.assert_array_equal(storage.diag, [2.0, 3.0, 5.0, 7.0])


class TestSingularity:
    def test_zero_leading_pivot(self):
        storage = BandedStorage.from_arrays([[0.0], [1.0]], [0.0, 1.0])
        with pytest.raises(SingularMatrixError) as exc_info:
            factorize(storage)
        assert exc_info.value.index == 0

    def test_singular_matrix(self):
        # [[1, 1], [1, 1]]
        storage = BandedStorage.from_arrays([[0.0], [1.0]], [1.0, 1.0])
        with pytest.raises(SingularMatrixError) as exc_info:
            factorize(storage)
        assert exc_info.value.index == 1
        assert exc_info.value.pivot == 0.0

    def test_is_linalg_error(self):
        storage = BandedStorage.from_arrays([[0.0], [1.0]], [1.0, 1.0])
        with pytest.raises(np.linalg.LinAlgError):
            factorize(storage)

    def test_nan_pivot(self):
        storage = BandedStorage.from_arrays([[0.0], [1.0]], [np.nan, 1.0])
        with pytest.raises(SingularMatrixError):
            factorize(storage)

    def test_custom_tolerance(self, tridiag_storage):
        with pytest.raises(SingularMatrixError) as exc_info:
            factorize(tridiag_storage, pivot_tol=4.5)
        assert exc_info.value.index == 0
        assert exc_info.value.tol == 4.5
        assert exc_info.value.pivot == 4.0

    def test_indefinite_but_decomposable(self):
        # [[1, 2], [2, 1]] -> D = [1, -3]
        storage = BandedStorage.from_arrays([[0.0], [2.0]], [1.0, 1.0])
        factorize(storage)
        np.testing.assert_allclose(storage.diag, [1.0, -3.0])


class TestPrecision:
    def test_single(self, pd_5x5_k2):
        storage = BandedStorage.from_dense(pd_5x5_k2, 2, precision="single")
        factorize(storage)
        assert storage.diag.dtype == np.float32
        np.testing.assert_allclose(recompose(storage), pd_5x5_k2, atol=1e-5)

    def test_mixed_accumulates_in_double(self, pd_5x5_k2):
        storage = BandedStorage.from_dense(pd_5x5_k2, 2, precision="mixed")
        factorize(storage)
        assert storage.band.dtype == np.float32
        np.testing.assert_allclose(recompose(storage), pd_5x5_k2, atol=1e-5)

    def test_extended(self, tridiag_3x3):
        band, diag, _ = tridiag_3x3
        storage = BandedStorage.from_arrays(band, diag, precision="extended")
        factorize(storage)
        assert storage.diag.dtype == np.longdouble
        np.testing.assert_allclose(storage.diag.astype(np.float64), [4.0, 4.0, 5.75])


class TestVerbose:
    def test_verbose_reports_timing(self, tridiag_storage, capsys):
        factorize(tridiag_storage, verbose=2)
        assert "LDLT factorization: n=3, k=1" in capsys.readouterr().out

    def test_silent_by_default(self, tridiag_storage, capsys):
        factorize(tridiag_storage)
        assert capsys.readouterr().out == ""
