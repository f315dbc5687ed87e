"""
tests/test_constants.py – Physical constants, field conditions, tissue tables.
==============================================================================

Run with:  pytest tests/ -v
"""

import numpy as np
import pytest
import sys, os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
from relaxsim.constants import (
    PhysicalConstants, FieldCondition, tissue_times, GYROMAGNETIC_RATIOS,
)
from relaxsim.errors import InvalidPhysicalParameter


class TestPhysicalConstants:
    def test_defaults(self):
        c = PhysicalConstants()
        assert c.planck == 6.626e-34
        assert c.boltzmann == 1.3805e-23
        assert c.gyromagnetic_ratio("hydrogen") == 42.58e6
        assert c.gyromagnetic_ratio("sodium") == 11.27e6

    def test_frozen(self):
        c = PhysicalConstants()
        with pytest.raises(AttributeError):
            c.planck = 1.0

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            PhysicalConstants().gyromagnetic["hydrogen"] = 1.0
        with pytest.raises(TypeError):
            GYROMAGNETIC_RATIOS["helium"] = 1.0

    def test_custom_nuclide(self):
        c = PhysicalConstants(gyromagnetic={"phosphorus": 17.24e6})
        assert c.gyromagnetic_ratio("phosphorus") == 17.24e6

    def test_unknown_nuclide(self):
        with pytest.raises(KeyError, match="known"):
            PhysicalConstants().gyromagnetic_ratio("unobtainium")

    def test_invalid_constant(self):
        with pytest.raises(InvalidPhysicalParameter):
            PhysicalConstants(planck=0.0)


class TestFieldCondition:
    def test_larmor(self):
        assert np.isclose(FieldCondition(B0=1.5).larmor_frequency(), 63.87e6)

    def test_sodium_larmor(self):
        assert np.isclose(FieldCondition(B0=3.0).larmor_frequency(nuclide="sodium"), 33.81e6)

    def test_transition_energy(self):
        assert np.isclose(FieldCondition(B0=1.5).transition_energy(), 6.626e-34 * 63.87e6)

    def test_population_ratio_room(self):
        r = FieldCondition(B0=1.5, temperature=300.0).population_ratio()
        dE = 6.626e-34 * 42.58e6 * 1.5
        assert np.isclose(r, np.exp(-dE / (1.3805e-23 * 300.0)))

    def test_colder_means_more_aligned(self):
        warm = FieldCondition(B0=3.0, temperature=310.0).population_ratio()
        cold = FieldCondition(B0=3.0, temperature=290.0).population_ratio()
        assert cold < warm < 1.0

    @pytest.mark.parametrize("kwargs", [dict(B0=0.0), dict(B0=-3.0), dict(B0=1.5, temperature=0.0)])
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidPhysicalParameter):
            FieldCondition(**kwargs)


class TestTissueTimes:
    def test_white_1_5T(self):
        assert tissue_times("white", 1.5) == (0.64, 0.08)

    def test_gray_3T(self):
        assert tissue_times("gray", 3) == (1.20, 0.11)

    def test_t2_much_shorter_than_t1(self):
        for tissue in ("white", "gray"):
            for field in (1.5, 3.0, 4.0):
                T1, T2 = tissue_times(tissue, field)
                assert T2 < T1 / 5

    def test_unknown_tissue(self):
        with pytest.raises(KeyError):
            tissue_times("csf")

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            tissue_times("white", 7.0)
