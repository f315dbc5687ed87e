"""
examples/run_t1_contrast.py
===========================
T1 recovery of white and gray matter, their difference and ratio, and
the two-beaker movie (clean and noisy).

Usage:
    python examples/run_t1_contrast.py
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
import matplotlib; matplotlib.use("Agg")
import numpy as np

from relaxsim.constants import tissue_times
from relaxsim.core import time_axis, recover
from relaxsim.contrast import evaluate_contrast, optimal_contrast_time
from relaxsim.phantom import beaker_movie, movie_times, MOVIE_NOISE_STD
from relaxsim.visualization import plot_relaxation_curves, plot_contrast, animate_beakers

OUT  = os.path.dirname(__file__)
M0   = 1.0
SEED = 0

T1_white, _ = tissue_times("white", 1.5)
T1_gray,  _ = tissue_times("gray", 1.5)
t = time_axis(6.0, 0.02, t_start=0.02)     # seconds

# ── Recovery curves ──────────────────────────────────────────────────────────
gray  = recover(M0, T1_gray,  t, label="Gray")
white = recover(M0, T1_white, t, label="White")

print("=== T1 tissue contrast ===")
print(f"  T1 white = {T1_white} s,  T1 gray = {T1_gray} s")
print(f"  Mz(0.8 s): white {white.value_at(0.8):.4f}   gray {gray.value_at(0.8):.4f}")

plot_relaxation_curves([gray, white], title="T1 WM & GM",
                       save_path=os.path.join(OUT, "t1_curves.png"))

# ── Contrast ─────────────────────────────────────────────────────────────────
profile = evaluate_contrast(white, gray)
print(f"  Largest difference {profile.max_difference:.4f} at t = {profile.argmax_difference:.2f} s"
      f"  (analytic optimum {optimal_contrast_time(T1_white, T1_gray):.3f} s)")
print(f"  Largest ratio      {profile.max_ratio:.4f} at t = {profile.argmax_ratio:.2f} s")
plot_contrast(profile, title="T1  WM - GM",
              save_path=os.path.join(OUT, "t1_contrast.png"))
print("  Plots saved → examples/t1_curves.png, examples/t1_contrast.png")

print("\n  Question 4: to optimise the signal-to-noise ratio between these two")
print("  materials, at what time would you measure the T1 recovery?")
print("  Question 5: look up the T1 of cerebro-spinal fluid and plot its")
print("  recovery.  When would you measure to maximise white/CSF contrast?")

# ── Two-beaker movie ─────────────────────────────────────────────────────────
times = movie_times()
clean = beaker_movie(times, (T1_white, T1_gray), M0=M0)
noisy = beaker_movie(times, (T1_white, T1_gray), M0=M0,
                     noise_std=MOVIE_NOISE_STD, rng=np.random.default_rng(SEED))
animate_beakers(clean, times, save_path=os.path.join(OUT, "t1_movie.gif"))
animate_beakers(noisy, times, save_path=os.path.join(OUT, "t1_movie_noise.gif"))
print("\n  Movies saved → examples/t1_movie.gif, examples/t1_movie_noise.gif")

print("\n  Question 6: instead of the difference, look at the ratio of MzW and MzG.")
print("    a) When is the ratio the biggest?")
print("    b) Why would we measure when the difference, rather than the ratio,")
print("       is biggest?")
