"""
phantom.py - Synthetic two-beaker T1 images.
============================================

Two adjacent beakers hold materials with different T1.  An image taken
at time t after excitation has every pixel of beaker j at

    M0 · (1 - exp(-t / T1_j))   (+ optional Gaussian noise)

and the two beakers are stacked vertically (beaker 1 on top).  A
sequence of such frames shows the brightness of each beaker recovering
at its own rate.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from .core import t1_recovery, time_axis
from .ensemble import RandomSource
from .errors import require_non_negative

logger = logging.getLogger(__name__)

BEAKER_SHAPE = (32, 32)
MOVIE_NOISE_STD = 0.05


def movie_times() -> np.ndarray:
    """Frame times of the tutorial movie: 0.001 s to 4 s in 0.1 s steps."""
    return time_axis(4.0, 0.1, t_start=0.001)


def beaker_image(
    t: float,
    T1_pair: Sequence[float],
    M0: float = 1.0,
    shape: Tuple[int, int] = BEAKER_SHAPE,
    noise_std: float = 0.0,
    rng: RandomSource = None,
) -> np.ndarray:
    """Image of both beakers at time *t*.

    Parameters
    ----------
    t         : float                time after excitation, >= 0
    T1_pair   : (T1_top, T1_bottom)  T1 of each beaker
    M0        : float                steady-state magnetisation
    shape     : (rows, cols)         size of one beaker
    noise_std : float                std of additive Gaussian noise (0 = clean)
    rng       : Generator, int or None

    Returns
    -------
    (2*rows, cols) np.ndarray
    """
    if len(T1_pair) != 2:
        raise ValueError(f"T1_pair must hold exactly two values, got {len(T1_pair)}")
    noise_std = float(require_non_negative("noise_std", noise_std))
    rows, cols = shape
    if rows < 1 or cols < 1:
        raise ValueError(f"shape must be positive, got {shape}")

    levels = [float(t1_recovery(t, T1, M0)) for T1 in T1_pair]
    img = np.vstack([np.full((rows, cols), level) for level in levels])
    if noise_std > 0:
        rng = np.random.default_rng(rng)
        img = img + rng.normal(0.0, noise_std, img.shape)
    return img


def beaker_movie(
    times,
    T1_pair: Sequence[float],
    M0: float = 1.0,
    shape: Tuple[int, int] = BEAKER_SHAPE,
    noise_std: float = 0.0,
    rng: RandomSource = None,
) -> np.ndarray:
    """Stack of :func:`beaker_image` frames, one per entry of *times*.

    Returns
    -------
    (n_frames, 2*rows, cols) np.ndarray
    """
    times = require_non_negative("times", times).ravel()
    if times.size == 0:
        raise ValueError("times must contain at least one frame")
    # one generator for the whole movie so frames get independent noise
    rng = np.random.default_rng(rng)
    logger.info("Synthesising %d beaker frames (T1 = %s, noise std %g).",
                times.size, tuple(T1_pair), noise_std)
    return np.stack([
        beaker_image(t, T1_pair, M0=M0, shape=shape, noise_std=noise_std, rng=rng)
        for t in times
    ])
