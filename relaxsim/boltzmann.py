"""
boltzmann.py - Parallel / anti-parallel spin populations.
=========================================================

At equilibrium the ratio of dipoles in the high (anti-parallel) and low
(parallel) energy states follows Boltzmann's law:

    N_high / N_low = exp(-ΔE / (k·T))

The ratio lies in (0, 1]: it tends to 0 as T → 0⁺ and to 1 as T → ∞.
At room temperature and clinical field strengths the two populations
differ by only a few parts per million.
"""

from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np

from .errors import require_non_negative, require_positive


def population_ratio(energy, boltzmann, temperature):
    """High/low energy population ratio exp(-ΔE / (k·T)).

    Parameters
    ----------
    energy      : float or array   transition energy ΔE (J), >= 0
    boltzmann   : float            Boltzmann's constant (J / K), > 0
    temperature : float or array   temperature (K), > 0

    Returns
    -------
    float or np.ndarray with values in (0, 1]

    Raises
    ------
    InvalidPhysicalParameter
        For T <= 0 (the ratio is undefined at absolute zero), negative
        energy or non-positive k.
    """
    energy = require_non_negative("energy", energy)
    boltzmann = require_positive("boltzmann", boltzmann)
    temperature = require_positive("temperature", temperature)
    r = np.exp(-energy / (boltzmann * temperature))
    return float(r) if r.ndim == 0 else r


def log_temperatures(t_min: float = 1e-3, t_max: float = 10 ** 2.5, n: int = 50) -> np.ndarray:
    """Logarithmically spaced temperatures from *t_min* to *t_max* inclusive."""
    require_positive("t_min", t_min)
    require_positive("t_max", t_max)
    if t_max <= t_min:
        raise ValueError(f"t_max ({t_max}) must exceed t_min ({t_min})")
    if n < 2:
        raise ValueError(f"n must be >= 2, got {n}")
    return np.logspace(np.log10(t_min), np.log10(t_max), n)


class TemperatureSweep:
    """Lazy, restartable sequence of ``(T, ratio)`` pairs.

    Nothing is evaluated until iteration; every ``iter()`` starts from the
    coldest temperature again, so the same sweep can feed several plots.

    >>> sweep = TemperatureSweep(energy=4.2e-26, boltzmann=1.3805e-23)
    >>> len(sweep)
    50
    >>> T, r = next(iter(sweep))
    """

    def __init__(self, energy: float, boltzmann: float,
                 t_min: float = 1e-3, t_max: float = 10 ** 2.5, n: int = 50):
        self.energy = float(require_non_negative("energy", energy))
        self.boltzmann = float(require_positive("boltzmann", boltzmann))
        self.temperatures = log_temperatures(t_min, t_max, n)
        self.temperatures.setflags(write=False)

    def __len__(self) -> int:
        return len(self.temperatures)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        for T in self.temperatures:
            yield float(T), population_ratio(self.energy, self.boltzmann, T)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Evaluate the whole sweep at once: ``(temperatures, ratios)``."""
        ratios = population_ratio(self.energy, self.boltzmann, self.temperatures)
        return self.temperatures.copy(), np.asarray(ratios)

    def __repr__(self) -> str:
        return (f"TemperatureSweep(energy={self.energy!r}, boltzmann={self.boltzmann!r}, "
                f"t_min={self.temperatures[0]!r}, t_max={self.temperatures[-1]!r}, "
                f"n={len(self)})")


def ratio_at(sweep: TemperatureSweep, temperature: float) -> float:
    """Ratio at *temperature* using the sweep's energy and constant.

    Useful for locating a particular temperature (e.g. body temperature)
    on a plotted sweep.
    """
    return population_ratio(sweep.energy, sweep.boltzmann, temperature)
