"""
core.py - Relaxation curves and time axes.
==========================================

T1 (longitudinal, spin-lattice) recovery after excitation:
    Mz(t) = M0 · (1 - exp(-t / T1))

T2 (transverse, spin-spin) decay from dephasing:
    M⊥(t) = M0 · exp(-t / T2)

Both are pure element-wise transforms of a caller-supplied time vector.
Each call returns freshly allocated arrays, so curves for different
tissues never alias.

The phenomenological Bloch equations with relaxation are also integrated
numerically (scipy RK45) as a cross-check of the closed forms:

    dMx/dt = +ω·My  -  Mx/T2
    dMy/dt = -ω·Mx  -  My/T2
    dMz/dt =        - (Mz - M0)/T1

    Key invariants:
      M(0) = [M0, 0, 0]  →  Mz(t) = M0(1 - e^{-t/T1}),  |M⊥|(t) = M0·e^{-t/T2}
      M(0) = [0, 0, M0]  →  nothing moves (equilibrium)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np
from scipy.integrate import solve_ivp

from .errors import ShapeMismatch, require_non_negative, require_positive

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Time axis
# ---------------------------------------------------------------------------

def time_axis(t_max: float, dt: float, t_start: float = 0.0) -> np.ndarray:
    """Return evenly-spaced times from *t_start* to *t_max* inclusive.

    Parameters
    ----------
    t_max : float
        End time (seconds in the tutorial scripts).
    dt : float
        Time step.
    t_start : float
        First sample (default 0).  The tutorial uses ``t_start = dt``.

    Returns
    -------
    np.ndarray
        Shape ``(N,)`` with ``t[i] = t_start + i*dt``.

    Examples
    --------
    >>> time_axis(0.3, 0.01, t_start=0.01).shape
    (30,)
    """
    if t_max <= 0:
        raise ValueError(f"t_max must be positive, got {t_max}")
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    if t_start < 0 or t_start > t_max:
        raise ValueError(f"t_start must lie in [0, t_max], got {t_start}")
    n = int(np.floor((t_max - t_start) / dt + 1e-9)) + 1
    return t_start + dt * np.arange(n)


# ---------------------------------------------------------------------------
# Closed-form relaxation
# ---------------------------------------------------------------------------

def t1_recovery(t, T1: float, M0: float = 1.0) -> np.ndarray:
    """Longitudinal recovery Mz(t) = M0 · (1 - exp(-t / T1)).

    Parameters
    ----------
    t  : array-like   time points, t >= 0 (same units as T1)
    T1 : float        longitudinal relaxation time, > 0
    M0 : float        equilibrium magnetisation, >= 0

    Returns
    -------
    np.ndarray
        Values in [0, M0], non-decreasing in t.  Mz(T1) = M0·(1 - 1/e).

    Raises
    ------
    InvalidPhysicalParameter
        If T1 <= 0, M0 < 0 or any t < 0.
    """
    t = require_non_negative("t", t)
    T1 = float(require_positive("T1", T1))
    M0 = float(require_non_negative("M0", M0))
    return M0 * -np.expm1(-t / T1)


def t2_decay(t, T2: float, M0: float = 1.0) -> np.ndarray:
    """Transverse decay M⊥(t) = M0 · exp(-t / T2).

    Raises
    ------
    InvalidPhysicalParameter
        If T2 <= 0, M0 < 0 or any t < 0.
    """
    t = require_non_negative("t", t)
    T2 = float(require_positive("T2", T2))
    M0 = float(require_non_negative("M0", M0))
    return M0 * np.exp(-t / T2)


# ---------------------------------------------------------------------------
# Curves
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class RelaxationCurve:
    """One tissue's magnetisation over time for one mechanism (T1 or T2).

    ``time`` is strictly increasing and both arrays are read-only.
    Magnetisation stays within [0, M0]; T1 curves never fall and T2
    curves never rise.
    Iterating yields ``(time, magnetisation)`` pairs.
    """

    time: np.ndarray
    magnetization: np.ndarray
    mechanism: str
    time_constant: float
    M0: float = 1.0
    label: Optional[str] = None

    def __post_init__(self):
        t = np.array(self.time, dtype=float)
        m = np.array(self.magnetization, dtype=float)
        if t.ndim != 1 or m.ndim != 1:
            raise ValueError("time and magnetization must be 1-D")
        if t.shape != m.shape:
            raise ShapeMismatch(
                f"time has {t.shape[0]} samples but magnetization has {m.shape[0]}",
                t.shape, m.shape,
            )
        if t.size == 0:
            raise ValueError("a curve needs at least one sample")
        if np.any(np.diff(t) <= 0):
            raise ValueError("time values must be strictly increasing")
        if self.mechanism not in ("T1", "T2"):
            raise ValueError(f"mechanism must be 'T1' or 'T2', got {self.mechanism!r}")
        M0 = float(require_non_negative("M0", self.M0))
        tol = 1e-12 * max(M0, 1.0)
        if np.any(m < -tol) or np.any(m > M0 + tol):
            raise ValueError(f"magnetization must lie in [0, M0={M0}]")
        step = np.diff(m)
        if self.mechanism == "T1" and np.any(step < -tol):
            raise ValueError("T1 recovery must be non-decreasing in time")
        if self.mechanism == "T2" and np.any(step > tol):
            raise ValueError("T2 decay must be non-increasing in time")
        object.__setattr__(self, "M0", M0)
        t.setflags(write=False)
        m.setflags(write=False)
        object.__setattr__(self, "time", t)
        object.__setattr__(self, "magnetization", m)

    def __len__(self) -> int:
        return self.time.shape[0]

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return zip(self.time.tolist(), self.magnetization.tolist())

    def value_at(self, time: float) -> float:
        """Magnetisation at the sample nearest to *time*."""
        idx = int(np.argmin(np.abs(self.time - time)))
        return float(self.magnetization[idx])


def recover(M0: float, T1: float, t, label: Optional[str] = None) -> RelaxationCurve:
    """T1 recovery curve ``M0·(1 - exp(-t/T1))`` over the time vector *t*."""
    return RelaxationCurve(
        time=t,
        magnetization=t1_recovery(t, T1, M0),
        mechanism="T1",
        time_constant=float(T1),
        M0=float(M0),
        label=label,
    )


def decay(M0: float, T2: float, t, label: Optional[str] = None) -> RelaxationCurve:
    """T2 decay curve ``M0·exp(-t/T2)`` over the time vector *t*."""
    return RelaxationCurve(
        time=t,
        magnetization=t2_decay(t, T2, M0),
        mechanism="T2",
        time_constant=float(T2),
        M0=float(M0),
        label=label,
    )


# ---------------------------------------------------------------------------
# Bloch equations with relaxation (numerical cross-check)
# ---------------------------------------------------------------------------

def relaxation_rhs(
    t: float,
    M: np.ndarray,
    omega: float,
    T1: float,
    T2: float,
    M0: float,
) -> np.ndarray:
    """Right-hand side of the Bloch equations for a field along z.

    Parameters
    ----------
    t     : float        current time (unused, required by solve_ivp)
    M     : (3,) array   magnetisation [Mx, My, Mz]
    omega : float        precession (offset) frequency, rad / time unit
    T1    : float        longitudinal relaxation time
    T2    : float        transverse relaxation time
    M0    : float        equilibrium magnetisation

    Returns
    -------
    dMdt : (3,) np.ndarray
    """
    Mx, My, Mz = M
    dMx = omega * My - Mx / T2
    dMy = -omega * Mx - My / T2
    dMz = -(Mz - M0) / T1
    return np.array([dMx, dMy, dMz])


def simulate_relaxation(
    M_init,
    T1: float,
    T2: float,
    M0: float,
    t,
    omega: float = 0.0,
    method: str = "RK45",
    rtol: float = 1e-8,
    atol: float = 1e-10,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Integrate the relaxation Bloch equations from 0 over the times *t*.

    ``omega = 0`` is the rotating frame on resonance, where the transverse
    vector just shrinks; non-zero omega adds precession.

    Returns
    -------
    t, Mx, My, Mz : np.ndarray, shape (N,) each

    Raises
    ------
    InvalidPhysicalParameter
        T1, T2 <= 0, M0 < 0, or negative times.
    ValueError
        T2 > T1 (dephasing cannot be slower than recovery), or times
        not strictly increasing.
    RuntimeError
        If the ODE solver fails.
    """
    M_init = np.asarray(M_init, dtype=float)
    T1 = float(require_positive("T1", T1))
    T2 = float(require_positive("T2", T2))
    M0 = float(require_non_negative("M0", M0))
    t = require_non_negative("t", t)
    if T2 > T1:
        raise ValueError(f"T2 ({T2}) cannot exceed T1 ({T1})")
    if t.ndim != 1 or t.size == 0 or np.any(np.diff(t) <= 0):
        raise ValueError("t must be a non-empty, strictly increasing 1-D array")

    t_end = float(t[-1]) if t[-1] > 0 else 1e-12
    logger.debug("Integrating relaxation over %d samples up to t=%g (T1=%g, T2=%g).",
                 t.size, t_end, T1, T2)

    sol = solve_ivp(
        fun=relaxation_rhs,
        t_span=(0.0, t_end),
        y0=M_init,
        method=method,
        t_eval=np.clip(t, 0.0, t_end),
        args=(omega, T1, T2, M0),
        rtol=rtol,
        atol=atol,
    )

    if not sol.success:
        raise RuntimeError(f"solve_ivp failed: {sol.message}")

    return sol.t, sol.y[0], sol.y[1], sol.y[2]
