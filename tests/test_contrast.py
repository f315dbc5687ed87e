"""
tests/test_contrast.py – Difference / ratio contrast between two tissues.
=========================================================================

Run with:  pytest tests/ -v
"""

import warnings

import numpy as np
import pytest
import sys, os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
from relaxsim.contrast import evaluate_contrast, optimal_contrast_time, ContrastProfile
from relaxsim.core import time_axis, recover, decay, RelaxationCurve
from relaxsim.errors import ShapeMismatch, DivisionSingularity, InvalidPhysicalParameter


@pytest.fixture
def t2_axis():
    return time_axis(0.3, 0.01, t_start=0.01)


@pytest.fixture
def t1_axis():
    return time_axis(6.0, 0.02, t_start=0.02)


class TestEvaluateContrast:
    def test_t2_scenario_peak(self, t2_axis):
        white = decay(1.0, 0.08, t2_axis, label="white")
        gray = decay(1.0, 0.11, t2_axis, label="gray")
        profile = evaluate_contrast(gray, white)
        assert 0.08 <= profile.argmax_difference <= 0.10
        assert np.isclose(profile.argmax_difference, 0.09)

    def test_t2_values(self, t2_axis):
        white = decay(1.0, 0.08, t2_axis)
        gray = decay(1.0, 0.11, t2_axis)
        profile = evaluate_contrast(white, gray)
        idx = np.argmin(np.abs(t2_axis - 0.08))
        assert np.isclose(profile.difference[idx], abs(np.exp(-1) - np.exp(-0.08 / 0.11)))
        assert np.isclose(profile.ratio[idx], np.exp(-1) / np.exp(-0.08 / 0.11))

    def test_t2_ratio_keeps_falling(self, t2_axis):
        """gray / white grows with time, so the ratio peaks at the last sample."""
        white = decay(1.0, 0.08, t2_axis)
        gray = decay(1.0, 0.11, t2_axis)
        profile = evaluate_contrast(gray, white)
        assert np.isclose(profile.argmax_ratio, t2_axis[-1])

    def test_t1_scenario(self, t1_axis):
        white = recover(1.0, 0.64, t1_axis)
        gray = recover(1.0, 0.88, t1_axis)
        profile = evaluate_contrast(white, gray)
        idx = np.argmin(np.abs(t1_axis - 0.8))
        assert np.isclose(profile.difference[idx], 0.1164, atol=1e-4)
        assert abs(profile.argmax_difference - optimal_contrast_time(0.64, 0.88)) <= 0.02
        # white recovers first, so its ratio to gray is largest at the earliest time
        assert profile.argmax_ratio == t1_axis[0]
        assert np.all(profile.ratio >= 1.0)

    def test_difference_symmetric(self, t2_axis):
        a = decay(1.0, 0.08, t2_axis)
        b = decay(1.0, 0.11, t2_axis)
        assert np.array_equal(evaluate_contrast(a, b).difference,
                              evaluate_contrast(b, a).difference)

    def test_tie_breaks_to_earliest(self):
        t = np.array([0.1, 0.2, 0.3, 0.4])
        a = RelaxationCurve(t, [1.0, 0.8, 0.8, 0.2], "T2", 1.0)
        b = RelaxationCurve(t, [1.0, 0.4, 0.4, 0.1], "T2", 1.0)
        profile = evaluate_contrast(a, b)
        assert profile.argmax_difference == 0.2
        assert profile.argmax_ratio == 0.2

    def test_identical_curves(self, t2_axis):
        a = decay(1.0, 0.08, t2_axis)
        profile = evaluate_contrast(a, a)
        assert np.all(profile.difference == 0.0)
        assert np.allclose(profile.ratio, 1.0)
        assert profile.argmax_difference == t2_axis[0]

    def test_returns_profile(self, t2_axis):
        a = decay(1.0, 0.08, t2_axis)
        profile = evaluate_contrast(a, decay(2.0, 0.08, t2_axis))
        assert isinstance(profile, ContrastProfile)
        assert np.allclose(profile.ratio, 0.5)
        assert np.isclose(profile.max_ratio, 0.5)
        assert np.isclose(profile.max_difference, profile.difference.max())


class TestZeroDenominator:
    def test_nan_and_warning(self):
        t = time_axis(1.0, 0.1)          # starts at 0, so recovery starts at 0
        white = recover(1.0, 0.64, t)
        gray = recover(1.0, 0.88, t)
        with pytest.warns(DivisionSingularity):
            profile = evaluate_contrast(white, gray)
        assert np.isnan(profile.ratio[0])
        assert not np.any(np.isnan(profile.ratio[1:]))
        assert profile.argmax_ratio == pytest.approx(0.1)

    def test_all_zero_denominator(self):
        t = np.array([0.0, 1.0])
        a = RelaxationCurve(t, [1.0, 1.0], "T2", 1.0)
        b = RelaxationCurve(t, [0.0, 0.0], "T2", 1.0)
        with pytest.warns(DivisionSingularity):
            profile = evaluate_contrast(a, b)
        assert np.isnan(profile.argmax_ratio)
        assert np.isnan(profile.max_ratio)

    def test_no_warning_when_denominator_positive(self, t2_axis):
        a = decay(1.0, 0.08, t2_axis)
        b = decay(1.0, 0.11, t2_axis)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            evaluate_contrast(a, b)


class TestShapeMismatch:
    def test_different_lengths(self):
        a = decay(1.0, 0.08, time_axis(0.3, 0.01, t_start=0.01))
        b = decay(1.0, 0.11, time_axis(0.2, 0.01, t_start=0.01))
        with pytest.raises(ShapeMismatch) as exc:
            evaluate_contrast(a, b)
        assert exc.value.shape_a == (30,)
        assert exc.value.shape_b == (20,)

    def test_same_length_different_times(self):
        a = decay(1.0, 0.08, np.array([0.1, 0.2, 0.3]))
        b = decay(1.0, 0.11, np.array([0.1, 0.2, 0.4]))
        with pytest.raises(ShapeMismatch):
            evaluate_contrast(a, b)


class TestOptimalContrastTime:
    def test_t1_white_gray(self):
        assert np.isclose(optimal_contrast_time(0.64, 0.88), 0.7473, atol=1e-3)

    def test_t2_white_gray(self):
        assert np.isclose(optimal_contrast_time(0.08, 0.11), 0.0934, atol=1e-3)

    def test_symmetric(self):
        assert np.isclose(optimal_contrast_time(0.64, 0.88), optimal_contrast_time(0.88, 0.64))

    def test_is_a_maximum(self):
        Ta, Tb = 0.64, 0.88
        t_star = optimal_contrast_time(Ta, Tb)
        f = lambda t: abs(np.exp(-t / Ta) - np.exp(-t / Tb))
        assert f(t_star) > f(t_star * 0.95) and f(t_star) > f(t_star * 1.05)

    def test_equal_constants(self):
        with pytest.raises(ValueError):
            optimal_contrast_time(0.5, 0.5)

    def test_invalid(self):
        with pytest.raises(InvalidPhysicalParameter):
            optimal_contrast_time(0.0, 0.5)
