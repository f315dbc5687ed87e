"""
constants.py - Physical constants, field conditions and tissue tables.
======================================================================

Values are the ones used throughout the tutorial scripts:

    h      = 6.626e-34   J·s       Planck's constant
    k      = 1.3805e-23  J/K       Boltzmann's constant
    γ(1H)  = 42.58e6     Hz/T      hydrogen
    γ(23Na)= 11.27e6     Hz/T      sodium

Tissue relaxation times (seconds) from Jezzard & Clare, ch. 3 of the
Oxford fMRI book:

    Tissue   T1 (1.5T, 3.0T, 4T)    T2 (1.5T, 3.0T, 4T)
    white    0.64, 0.86, 1.04       0.08, 0.08, 0.05
    gray     0.88, 1.20, 1.40       0.08, 0.11, 0.05
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from .errors import require_positive
from . import boltzmann, precession


PLANCK = 6.626e-34             # J s
BOLTZMANN = 1.3805e-23         # J / K
ROOM_TEMPERATURE = 300.0       # K
BODY_TEMPERATURE = 310.15      # K

GYROMAGNETIC_RATIOS: Mapping[str, float] = MappingProxyType({
    "hydrogen": 42.58e6,       # Hz / T
    "sodium":   11.27e6,
})

# (T1, T2) in seconds, keyed by tissue then field strength in Tesla
TISSUE_RELAXATION: Mapping[str, Mapping[float, Tuple[float, float]]] = MappingProxyType({
    "white": MappingProxyType({1.5: (0.64, 0.08), 3.0: (0.86, 0.08), 4.0: (1.04, 0.05)}),
    "gray":  MappingProxyType({1.5: (0.88, 0.08), 3.0: (1.20, 0.11), 4.0: (1.40, 0.05)}),
})


def tissue_times(tissue: str, field_strength: float = 1.5) -> Tuple[float, float]:
    """Return ``(T1, T2)`` in seconds for *tissue* at *field_strength* Tesla.

    Raises
    ------
    KeyError
        If the tissue or field strength is not tabulated.
    """
    try:
        by_field = TISSUE_RELAXATION[tissue]
    except KeyError:
        raise KeyError(
            f"unknown tissue {tissue!r}; known: {sorted(TISSUE_RELAXATION)}"
        ) from None
    try:
        return by_field[float(field_strength)]
    except KeyError:
        raise KeyError(
            f"no {tissue} values at {field_strength} T; known: {sorted(by_field)}"
        ) from None


@dataclass(frozen=True)
class PhysicalConstants:
    """Immutable bundle of the constants every model call needs.

    Parameters
    ----------
    planck      : float            Planck's constant (J s)
    boltzmann   : float            Boltzmann's constant (J / K)
    gyromagnetic: Mapping          nuclide → gyromagnetic ratio (Hz / T)
    """

    planck: float = PLANCK
    boltzmann: float = BOLTZMANN
    gyromagnetic: Mapping[str, float] = field(default_factory=lambda: GYROMAGNETIC_RATIOS)

    def __post_init__(self):
        require_positive("planck", self.planck)
        require_positive("boltzmann", self.boltzmann)
        for nuclide, gamma in self.gyromagnetic.items():
            require_positive(f"gyromagnetic[{nuclide!r}]", gamma)
        object.__setattr__(self, "gyromagnetic", MappingProxyType(dict(self.gyromagnetic)))

    def gyromagnetic_ratio(self, nuclide: str = "hydrogen") -> float:
        try:
            return self.gyromagnetic[nuclide]
        except KeyError:
            raise KeyError(
                f"unknown nuclide {nuclide!r}; known: {sorted(self.gyromagnetic)}"
            ) from None


@dataclass(frozen=True)
class FieldCondition:
    """Main field strength B0 (Tesla) and sample temperature (Kelvin)."""

    B0: float
    temperature: float = ROOM_TEMPERATURE

    def __post_init__(self):
        require_positive("B0", self.B0)
        require_positive("temperature", self.temperature)

    def larmor_frequency(self, constants: PhysicalConstants = PhysicalConstants(),
                         nuclide: str = "hydrogen") -> float:
        return float(precession.larmor_frequency(constants.gyromagnetic_ratio(nuclide), self.B0))

    def transition_energy(self, constants: PhysicalConstants = PhysicalConstants(),
                          nuclide: str = "hydrogen") -> float:
        return float(precession.transition_energy(
            constants.planck, self.larmor_frequency(constants, nuclide)))

    def population_ratio(self, constants: PhysicalConstants = PhysicalConstants(),
                         nuclide: str = "hydrogen") -> float:
        """High/low energy population ratio for this field and temperature."""
        return float(boltzmann.population_ratio(
            self.transition_energy(constants, nuclide),
            constants.boltzmann,
            self.temperature,
        ))
