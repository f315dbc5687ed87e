"""
tests/test_boltzmann.py – Parallel / anti-parallel population ratio.
====================================================================

Run with:  pytest tests/ -v
"""

import numpy as np
import pytest
import sys, os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
from relaxsim.boltzmann import population_ratio, log_temperatures, TemperatureSweep, ratio_at
from relaxsim.errors import InvalidPhysicalParameter

h = 6.626e-34
k = 1.3805e-23
dE = h * 42.58e6 * 1.5          # hydrogen at 1.5 T


class TestPopulationRatio:
    def test_room_temperature(self):
        r = population_ratio(dE, k, 300.0)
        assert np.isclose(r, np.exp(-dE / (k * 300.0)))
        assert 0.99998 < r < 1.0

    def test_strictly_increasing_in_T(self):
        T = np.logspace(-3, 4, 200)
        r = population_ratio(dE, k, T)
        assert np.all(np.diff(r) > 0)

    def test_bounded(self):
        r = population_ratio(dE, k, np.logspace(-2, 6, 100))
        assert np.all(r > 0) and np.all(r <= 1)

    def test_high_temperature_limit(self):
        assert np.isclose(population_ratio(dE, k, 1e9), 1.0, atol=1e-9)

    def test_low_temperature_limit(self):
        assert population_ratio(dE, k, 1e-4) < 1e-6

    def test_zero_energy_gives_one(self):
        assert population_ratio(0.0, k, 300.0) == 1.0

    @pytest.mark.parametrize("T", [0.0, -10.0])
    def test_invalid_temperature(self, T):
        with pytest.raises(InvalidPhysicalParameter) as exc:
            population_ratio(dE, k, T)
        assert exc.value.name == "temperature"
        assert exc.value.value == T

    def test_negative_energy(self):
        with pytest.raises(InvalidPhysicalParameter):
            population_ratio(-dE, k, 300.0)


class TestTemperatureSweep:
    def test_log_spacing(self):
        T = log_temperatures(1e-3, 10 ** 2.5, 50)
        assert len(T) == 50
        assert np.isclose(T[0], 1e-3) and np.isclose(T[-1], 10 ** 2.5)
        assert np.allclose(np.diff(np.log10(T)), 5.5 / 49)

    def test_yields_pairs(self):
        sweep = TemperatureSweep(dE, k)
        pairs = list(sweep)
        assert len(pairs) == len(sweep) == 50
        T0, r0 = pairs[0]
        assert np.isclose(r0, population_ratio(dE, k, T0))

    def test_restartable(self):
        sweep = TemperatureSweep(dE, k, n=10)
        assert list(sweep) == list(sweep)

    def test_lazy(self):
        it = iter(TemperatureSweep(dE, k, n=5))
        assert next(it)[0] == pytest.approx(1e-3)

    def test_as_arrays_matches_iteration(self):
        sweep = TemperatureSweep(dE, k, n=20)
        T, r = sweep.as_arrays()
        assert np.allclose(r, [ratio for _, ratio in sweep])
        assert np.all(np.diff(r) >= 0)

    def test_ratio_at_body_temperature(self):
        sweep = TemperatureSweep(dE, k)
        assert np.isclose(ratio_at(sweep, 310.15), np.exp(-dE / (k * 310.15)))

    def test_bad_range(self):
        with pytest.raises(ValueError):
            TemperatureSweep(dE, k, t_min=10.0, t_max=1.0)

    def test_zero_t_min(self):
        with pytest.raises(InvalidPhysicalParameter):
            TemperatureSweep(dE, k, t_min=0.0)
