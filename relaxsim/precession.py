"""
precession.py - Larmor precession, spin energy and excitation.
==============================================================

A nucleus with net spin placed in a steady field B0 precesses at the
Larmor frequency

    v = γ · B0            (Hz, γ in Hz/T)

and the energy carried by that precession (the Zeeman splitting between
the parallel and anti-parallel states) is

    ΔE = h · v            (J)

Excitation is modelled as an instantaneous rotation of the net
magnetisation vector (hard-pulse approximation).  No pulse timing.
"""

from __future__ import annotations

import numpy as np

from .errors import require_positive


# ===========================================================================
# Frequency and energy
# ===========================================================================

def larmor_frequency(gamma, B0):
    """Larmor (precession) frequency v = γ · B0 in Hz.

    Parameters
    ----------
    gamma : float or array   gyromagnetic ratio (Hz / Tesla), > 0
    B0    : float or array   main field strength (Tesla), > 0

    Returns
    -------
    float or np.ndarray
        For hydrogen at 1.5 T: 42.58e6 * 1.5 = 63.87 MHz.

    Raises
    ------
    InvalidPhysicalParameter
        If gamma or B0 is non-positive or non-finite.
    """
    gamma = require_positive("gamma", gamma)
    B0 = require_positive("B0", B0)
    v = gamma * B0
    return float(v) if v.ndim == 0 else v


def angular_frequency(gamma, B0):
    """Larmor angular frequency ω₀ = 2π γ B0 in rad/s."""
    return 2 * np.pi * larmor_frequency(gamma, B0)


def transition_energy(planck, frequency):
    """Energy of a precessing spin, ΔE = h · v (Joules)."""
    planck = require_positive("planck", planck)
    frequency = require_positive("frequency", frequency)
    E = planck * frequency
    return float(E) if E.ndim == 0 else E


# ===========================================================================
# Excitation (rotation about a coordinate axis)
# ===========================================================================

_AXES = {'x': (1.0, 0.0, 0.0), 'y': (0.0, 1.0, 0.0), 'z': (0.0, 0.0, 1.0)}


def _rotation(axis: str, theta: float) -> np.ndarray:
    """Rodrigues matrix R = I + sin θ K + (1 - cos θ) K² for a unit axis."""
    ux, uy, uz = _AXES[axis]
    K = np.array([[0.0, -uz,  uy],
                  [ uz, 0.0, -ux],
                  [-uy,  ux, 0.0]])
    return np.eye(3) + np.sin(theta) * K + (1 - np.cos(theta)) * (K @ K)


def apply_pulse(
    M: np.ndarray,
    axis: str = 'y',
    angle: float = np.pi / 2,
) -> np.ndarray:
    """Rotate magnetisation M by *angle* around *axis* (instantaneous pulse).

    Parameters
    ----------
    M     : (3,) array  magnetisation [Mx, My, Mz]
    axis  : str         'x', 'y' or 'z'
    angle : float       rotation angle in radians

    Returns
    -------
    (3,) np.ndarray

    Examples
    --------
    >>> apply_pulse(np.array([0., 0., 1.]), axis='y', angle=np.pi/2).round(12)
    array([1., 0., 0.])
    """
    M = np.asarray(M, dtype=float)
    if M.shape != (3,):
        raise ValueError(f"M must have shape (3,), got {M.shape}")
    if axis not in _AXES:
        raise ValueError(f"axis must be one of {list(_AXES)}, got '{axis}'")
    return _rotation(axis, angle) @ M


def tip_back_trajectory(n_steps: int = 10) -> np.ndarray:
    """Points on the quarter arc from +x back up to +z.

    x = cos θ, y = 0, z = sin θ for θ = (π/2)·(0..n_steps)/n_steps.
    Shows the excited vector returning towards the main field axis.

    Returns
    -------
    (n_steps + 1, 3) np.ndarray
    """
    if n_steps < 1:
        raise ValueError(f"n_steps must be >= 1, got {n_steps}")
    theta = (np.pi / 2) * np.arange(n_steps + 1) / n_steps
    return np.column_stack([np.cos(theta), np.zeros_like(theta), np.sin(theta)])
