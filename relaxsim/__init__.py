"""MR relaxation models: Larmor precession, Boltzmann populations, T1/T2
relaxation, phase dispersion and tissue contrast.

The plotting helpers live in :mod:`relaxsim.visualization` and are not
imported here, so the models can be used without a display backend.
"""

from .errors import InvalidPhysicalParameter, ShapeMismatch, DivisionSingularity
from .constants import PhysicalConstants, FieldCondition, tissue_times
from .precession import larmor_frequency, angular_frequency, transition_energy, apply_pulse
from .boltzmann import population_ratio, TemperatureSweep
from .core import time_axis, t1_recovery, t2_decay, recover, decay, RelaxationCurve
from .ensemble import ensemble_magnetization, SpinEnsemble, make_ensemble, simulate_dephasing
from .contrast import ContrastProfile, evaluate_contrast, optimal_contrast_time

__version__ = "0.1.0"
