"""
Trajectory Analytics
====================
Read-only projections of a SimulationResult for consumers:

1. Chart series — decimated (time, height, horizontal distance) samples.
2. Playback — positions at arbitrary clock times, interpolated on the
   sample times so a renderer can seek into the path.
"""

import numpy as np
from scipy.interpolate import interp1d
from typing import Dict

from .integrator import ProjectileState, SimulationResult


CHART_DECIMATION = 5   # keep every 5th sample for charting


def horizontal_distance(state: ProjectileState) -> float:
    """Ground distance of a state from the launch point (m)."""
    return state.position.horizontal_norm()


def chart_series(result: SimulationResult,
                 every: int = CHART_DECIMATION) -> Dict[str, np.ndarray]:
    """
    Decimated chart data: every `every`-th sample starting at index 0.

    Returns dict with keys 'time', 'height', 'distance'.
    """
    if every < 1:
        raise ValueError(f"every must be >= 1, got {every}")

    samples = result.path[::every]
    return {
        'time': np.array([s.time for s in samples]),
        'height': np.array([s.position.y for s in samples]),
        'distance': np.array([horizontal_distance(s) for s in samples]),
    }


def playback_positions(result: SimulationResult, times) -> np.ndarray:
    """
    Positions at the given clock times, shape (len(times), 3).

    Linear interpolation between samples; times outside the flight are
    clamped to the launch / impact positions.
    """
    times = np.atleast_1d(np.asarray(times, dtype=float))
    positions = result.positions

    if len(result.path) == 1:
        return np.repeat(positions, len(times), axis=0)

    interp = interp1d(
        result.time, positions,
        axis=0,
        kind='linear',
        bounds_error=False,
        fill_value=(positions[0], positions[-1]),
        assume_sorted=True,
    )
    return interp(times)


def playback_frames(result: SimulationResult, fps: float = 30.0):
    """
    Uniform playback clock from launch to impact.

    Returns (times, positions) where times runs from 0 to time_of_flight
    at `fps` frames per simulated second (the impact time is always the
    last frame).
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")

    t_end = result.time_of_flight
    n_frames = max(2, int(np.ceil(t_end * fps)) + 1)
    times = np.linspace(0.0, t_end, n_frames)
    return times, playback_positions(result, times)
