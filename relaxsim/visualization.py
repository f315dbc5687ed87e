"""
visualization.py - Figures and animations for the relaxation models.
====================================================================

Presentation layer only: every function takes arrays or value objects
produced by the models and draws them.  Nothing here computes physics.

  - plot_boltzmann_curve       : population ratio vs temperature (log x)
  - plot_magnetization_vectors : 3-D view of net magnetisation positions
  - plot_relaxation_curves     : overlay of T1 or T2 curves
  - plot_contrast              : difference and ratio panels with peaks
  - plot_spin_ensembles        : spins in the (x, y) plane + angle histograms
  - plot_dephasing             : ensemble |M|(t) against exp(-t/T2)
  - animate_beakers            : two-beaker T1 movie
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
import matplotlib.ticker as ticker
from mpl_toolkits.mplot3d import Axes3D          # noqa: F401 (registers 3d projection)

from .contrast import ContrastProfile
from .core import RelaxationCurve
from .ensemble import SpinEnsemble

_COLORS = ["#2C7BB6", "#D7191C", "#1A9641", "#9B2226", "#F4A261", "#6A994E"]


def _finish(fig: plt.Figure, save_path: Optional[str]) -> plt.Figure:
    fig.patch.set_facecolor("white")
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig


def _style(ax, xlabel: str, ylabel: str, title: str) -> None:
    ax.set_xlabel(xlabel, fontsize=11)
    ax.set_ylabel(ylabel, fontsize=11)
    ax.set_title(title, fontsize=11)
    ax.grid(True, linestyle="--", alpha=0.4)
    ax.set_facecolor("#F9F9F9")


# ---------------------------------------------------------------------------
# Boltzmann
# ---------------------------------------------------------------------------

def plot_boltzmann_curve(
    temperatures: np.ndarray,
    ratios: np.ndarray,
    mark_temperature: Optional[float] = None,
    mark_ratio: Optional[float] = None,
    title: str = "Boltzmann population ratio",
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Semilog-x plot of high/low energy ratio against temperature.

    Pass ``mark_temperature`` and ``mark_ratio`` (e.g. body temperature and
    its ratio) to highlight one point on the curve.
    """
    fig, ax = plt.subplots(figsize=(8, 4.5))
    ax.semilogx(temperatures, ratios, color=_COLORS[0], linewidth=2.2)
    if mark_temperature is not None and mark_ratio is not None:
        ax.plot(mark_temperature, mark_ratio, "o", color=_COLORS[1], markersize=8, zorder=5,
                label=f"T = {mark_temperature:g} K")
        ax.legend(loc="lower right", fontsize=9, framealpha=0.85)
    ax.set_ylim(0, 1.1)
    ax.yaxis.set_major_formatter(ticker.FormatStrFormatter("%.2f"))
    _style(ax, "Temperature  (K)", "Ratio of high/low energy state dipoles", title)
    return _finish(fig, save_path)


# ---------------------------------------------------------------------------
# Magnetisation vectors
# ---------------------------------------------------------------------------

def _draw_axes(ax) -> None:
    """Unit x, y, z reference lines through the origin."""
    for xyz in ((1, 0, 0), (0, 1, 0), (0, 0, 1)):
        seg = np.array([[-v for v in xyz], list(xyz)]).T
        ax.plot(*seg, color="#555555", lw=1.0)


def plot_magnetization_vectors(
    points: np.ndarray,
    color: str = "#1A9641",
    title: str = "Net magnetisation",
    elev: float = 30,
    azim: float = 332.5,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Mark one or more magnetisation positions in 3-D.

    Parameters
    ----------
    points : (3,) or (K, 3) array   e.g. [0, 0, 1] at equilibrium, [1, 0, 0]
                                    after excitation, or the arc from
                                    :func:`relaxsim.precession.tip_back_trajectory`
    elev, azim : viewing angle; ``elev=90, azim=0`` looks down the z-axis
    """
    points = np.atleast_2d(np.asarray(points, dtype=float))
    fig = plt.figure(figsize=(6.5, 6))
    ax = fig.add_subplot(111, projection="3d")
    _draw_axes(ax)
    ax.scatter(points[:, 0], points[:, 1], points[:, 2], s=40, color=color,
               depthshade=False)
    ax.set_xlim(-2, 2)
    ax.set_ylim(-2, 2)
    ax.set_zlim(-2, 2)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    ax.set_title(title, fontsize=12, fontweight="bold")
    ax.view_init(elev=elev, azim=azim)
    return _finish(fig, save_path)


# ---------------------------------------------------------------------------
# Relaxation and contrast
# ---------------------------------------------------------------------------

def plot_relaxation_curves(
    curves: Sequence[RelaxationCurve],
    title: Optional[str] = None,
    time_unit: str = "s",
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Overlay several curves (T1 recovery or T2 decay) on one axis."""
    if not curves:
        raise ValueError("nothing to plot")
    fig, ax = plt.subplots(figsize=(8, 4.5))
    for i, curve in enumerate(curves):
        label = curve.label or f"{curve.mechanism} = {curve.time_constant:g} {time_unit}"
        ax.plot(curve.time, curve.magnetization, color=_COLORS[i % len(_COLORS)],
                linestyle="-" if i % 2 == 0 else "--", linewidth=2.0, label=label)
    mechanism = curves[0].mechanism
    ylabel = ("Longitudinal magnetization (T1)" if mechanism == "T1"
              else "Transverse magnetization (T2)")
    ax.legend(fontsize=9, framealpha=0.85)
    _style(ax, f"Time  ({time_unit})", ylabel, title or f"{mechanism} relaxation")
    return _finish(fig, save_path)


def plot_contrast(
    profile: ContrastProfile,
    title: str = "Tissue contrast",
    time_unit: str = "s",
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Two panels: |a - b| and a / b over time, with each peak marked."""
    fig, (ax_d, ax_r) = plt.subplots(1, 2, figsize=(12, 4.5), sharex=True)
    fig.suptitle(title, fontsize=13, fontweight="bold")

    ax_d.plot(profile.time, profile.difference, color=_COLORS[0], lw=2.0)
    ax_d.axvline(profile.argmax_difference, color=_COLORS[2], ls=":", lw=1.2,
                 label=f"peak at {profile.argmax_difference:.3g} {time_unit}")
    ax_d.legend(fontsize=9, framealpha=0.85)
    _style(ax_d, f"Time  ({time_unit})", "Magnetization difference", "Difference")

    ax_r.plot(profile.time, profile.ratio, color=_COLORS[1], lw=2.0)
    if not np.isnan(profile.argmax_ratio):
        ax_r.axvline(profile.argmax_ratio, color=_COLORS[2], ls=":", lw=1.2,
                     label=f"peak at {profile.argmax_ratio:.3g} {time_unit}")
        ax_r.legend(fontsize=9, framealpha=0.85)
    _style(ax_r, f"Time  ({time_unit})", "Magnetization ratio", "Ratio")
    return _finish(fig, save_path)


# ---------------------------------------------------------------------------
# Spin ensembles and dephasing
# ---------------------------------------------------------------------------

def plot_spin_ensembles(
    ensembles: Mapping[str, SpinEnsemble],
    bins: int = 20,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Top row: spins in the (x, y) plane.  Bottom row: angle histograms."""
    n = len(ensembles)
    if n == 0:
        raise ValueError("nothing to plot")
    fig, axes = plt.subplots(2, n, figsize=(4 * n, 7.5), squeeze=False)
    for col, (name, ens) in enumerate(ensembles.items()):
        ax_xy, ax_h = axes[0, col], axes[1, col]
        spins = ens.spins
        ax_xy.plot(spins[:, 0], spins[:, 1], "o", ms=3, alpha=0.5, color=_COLORS[0])
        ax_xy.set_xlim(-2, 2)
        ax_xy.set_ylim(-2, 2)
        ax_xy.set_aspect("equal")
        _style(ax_xy, "x", "y", f"{name}:  |M| = {ens.net_magnetization:.3f}")

        ax_h.hist(ens.angles, bins=bins, color=_COLORS[3], alpha=0.8)
        ax_h.set_xlim(0, 2 * np.pi)
        _style(ax_h, "Angle  (rad)", "Number of spins", "")
    return _finish(fig, save_path)


def plot_dephasing(
    t: np.ndarray,
    M: np.ndarray,
    T2: Optional[float] = None,
    time_unit: str = "s",
    title: str = "Dephasing ensemble",
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Simulated ensemble magnetisation, optionally against exp(-t/T2)."""
    fig, ax = plt.subplots(figsize=(8, 4.5))
    ax.plot(t, M, "o", ms=4, color=_COLORS[3], label=r"ensemble $|M|(t)$")
    if T2 is not None:
        ax.plot(t, np.exp(-np.asarray(t) / T2), "--", color=_COLORS[0], lw=1.6,
                label=rf"$e^{{-t/T_2}}$  ($T_2$={T2} {time_unit})")
    ax.set_ylim(-0.05, 1.10)
    ax.legend(fontsize=9, framealpha=0.85)
    _style(ax, f"Time  ({time_unit})", "Net magnetization", title)
    return _finish(fig, save_path)


# ---------------------------------------------------------------------------
# Animation
# ---------------------------------------------------------------------------

def animate_beakers(
    frames: np.ndarray,
    times: Sequence[float],
    interval: int = 400,
    labels: Sequence[str] = ("Beaker 1", "Beaker 2"),
    save_path: Optional[str] = None,
    writer: str = "pillow",
) -> animation.FuncAnimation:
    """Animate a stack of two-beaker frames from :func:`relaxsim.phantom.beaker_movie`.

    Frames are shown in gray scale over [0, 1]; a line separates the beakers.
    """
    frames = np.asarray(frames)
    if frames.ndim != 3 or len(frames) != len(times):
        raise ValueError("frames must be (n_frames, rows, cols) with one time per frame")
    n, rows, cols = frames.shape
    half = rows / 2

    fig, ax = plt.subplots(figsize=(5, 7))
    im = ax.imshow(frames[0], cmap="gray", vmin=0.0, vmax=1.0)
    ax.axhline(half - 0.5, color="#FFAA00", lw=1.0)
    ax.text(-0.5, half / 2, labels[0], ha="right", va="center", fontsize=9)
    ax.text(-0.5, 1.5 * half, labels[1], ha="right", va="center", fontsize=9)
    time_text = ax.text(cols + 1, half, "", va="center", fontsize=10)
    ax.set_xticks([])
    ax.set_yticks([])

    def _update(frame):
        im.set_data(frames[frame])
        time_text.set_text(f"Time: {times[frame]:.2f} sec")
        return im, time_text

    anim = animation.FuncAnimation(fig, _update, frames=n, interval=interval, blit=False)

    if save_path:
        anim.save(save_path, writer=writer, fps=max(1, 1000 // interval), dpi=100)

    return anim
