"""
examples/run_spin_energy.py
===========================
Larmor frequency, spin energy and the Boltzmann distribution, followed by
the excitation pictures (equilibrium, tipped, returning to z).

Usage:
    python examples/run_spin_energy.py
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
import matplotlib; matplotlib.use("Agg")
import numpy as np

from relaxsim.constants import PhysicalConstants, FieldCondition, BODY_TEMPERATURE
from relaxsim.boltzmann import TemperatureSweep, ratio_at
from relaxsim.precession import apply_pulse, tip_back_trajectory
from relaxsim.visualization import plot_boltzmann_curve, plot_magnetization_vectors

OUT       = os.path.dirname(__file__)
constants = PhysicalConstants()
field     = FieldCondition(B0=1.5, temperature=300.0)

# ── Spin velocity ────────────────────────────────────────────────────────────
v = field.larmor_frequency(constants)
print("=== Spin velocity ===")
print(f"  The resonant frequency of spins in hydrogen is {v / 1e6:.4f} (MHz) "
      f"at {field.B0:.2f} Tesla")
print("\n  Question 1: what are the units of the Larmor frequency?  The")
print("  gyromagnetic constant of sodium is 11.27e6 Hz/Tesla; compute its")
print("  Larmor frequency in a 3T magnet.")

# ── Spin energy ──────────────────────────────────────────────────────────────
E = field.transition_energy(constants)
print("\n=== Spin energy ===")
print(f"  E = h·v = {E:.4e}")
print("\n  Question 2: what are the units of E?")

# ── Boltzmann distribution ───────────────────────────────────────────────────
ratio = field.population_ratio(constants)
print("\n=== Boltzmann distribution ===")
print(f"  Ratio of dipoles in the high vs. low energy state:  {ratio:e}")

sweep = TemperatureSweep(E, constants.boltzmann)
T, r  = sweep.as_arrays()
r_body = ratio_at(sweep, BODY_TEMPERATURE)
plot_boltzmann_curve(
    T, r,
    mark_temperature=BODY_TEMPERATURE, mark_ratio=r_body,
    save_path=os.path.join(OUT, "boltzmann_ratio.png"),
)
print("  Plot saved → examples/boltzmann_ratio.png")
print("\n  Question 3: where is human body temperature on the graph?  What is")
print("  the ratio there?  Would it matter if we kept the room cooler?")

# ── Excitation ───────────────────────────────────────────────────────────────
M_eq      = np.array([0.0, 0.0, 1.0])
M_excited = apply_pulse(M_eq, axis="y", angle=np.pi / 2)
print("\n=== Excitation ===")
print(f"  equilibrium {M_eq}  →  after a 90° pulse {M_excited.round(6)}")

plot_magnetization_vectors(M_eq, color="#D7191C", title="Z-magnetization",
                           save_path=os.path.join(OUT, "z_magnetization.png"))
plot_magnetization_vectors(M_excited, title="Excited magnetization", elev=90, azim=0,
                           save_path=os.path.join(OUT, "excited_magnetization.png"))
plot_magnetization_vectors(tip_back_trajectory(10),
                           title="Magnetization returns towards the z-axis",
                           save_path=os.path.join(OUT, "return_to_z.png"))
print("  Plots saved → examples/z_magnetization.png, excited_magnetization.png, return_to_z.png")
