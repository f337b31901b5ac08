"""Tests for averaging, thermodynamics and unit conversion."""
from math import exp

import numpy as np
import pytest
import scipy.constants

from mcstat import Averager, Histogram, canonical_averages, kelvin_to_beta
from mcstat.common import kelvin_to_rydberg


class TestAverager:
    def test_statistics(self):
        averager = Averager()
        averager.add_samples([1.0, 2.0, 3.0])
        averager.add_samples([5.0, 7.0, 9.0])
        assert averager.number_of_samples == 6
        assert averager.mean == pytest.approx(4.5)
        assert averager.variance == pytest.approx(np.var([1, 2, 3, 5, 7, 9],
                                                         ddof=1))
        # Series means 2 and 7.
        assert averager.standard_error == pytest.approx(2.5)

    def test_vector_samples(self):
        averager = Averager()
        averager.add_samples([[1.0, 10.0], [3.0, 30.0]])
        assert np.allclose(averager.mean, [2.0, 20.0])

    def test_insufficient_data(self):
        averager = Averager()
        with pytest.raises(Exception):
            averager.mean
        averager.add_samples([1.0])
        with pytest.raises(Exception):
            averager.variance
        with pytest.raises(Exception):
            averager.standard_error
        with pytest.raises(Exception):
            averager.add_samples([])


class TestCanonicalAverages:
    def test_two_level_system(self):
        log_dos = Histogram(values={0: 0.0, 1: np.log(3.0)})
        betas = [0.0, 1.0, 2.0]
        averages = canonical_averages(log_dos, betas)
        for i, beta in enumerate(betas):
            weight = 3.0 * exp(-beta)
            mean = weight / (1.0 + weight)
            assert averages["energy"][i] == pytest.approx(mean)
            assert averages["energy_variance"][i] == \
                pytest.approx(mean * (1.0 - mean))
            assert averages["heat_capacity"][i] == \
                pytest.approx(beta**2 * mean * (1.0 - mean))
        assert np.isnan(averages["free_energy"][0])
        assert averages["free_energy"][1] == \
            pytest.approx(-np.log(1.0 + 3.0 * exp(-1.0)))

    def test_large_values_do_not_overflow(self):
        log_dos = Histogram(values={-100: 0.0, 0: 2000.0, 100: 0.0})
        averages = canonical_averages(log_dos, [0.5])
        assert np.isfinite(averages["energy"][0])


class TestConverters:
    def test_units(self):
        beta_eV = kelvin_to_beta(300.0)
        beta_J = kelvin_to_beta(300.0, "J")
        assert beta_J * scipy.constants.e == pytest.approx(beta_eV,
                                                           rel=1e-5)
        assert kelvin_to_beta(300.0, "Ry") == \
            pytest.approx(1.0 / kelvin_to_rydberg(300.0))

    def test_invalid(self):
        with pytest.raises(ValueError):
            kelvin_to_beta(0.0)
        with pytest.raises(Exception):
            kelvin_to_beta(300.0, "Hartree")
