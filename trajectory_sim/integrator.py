"""
Numerical Integration Engine
=============================
Fixed-step 4th-order Runge-Kutta integration of the equations of motion:

    dx/dt = v
    dv/dt = a(v)   (from forces.acceleration)

The projectile starts at LAUNCH_HEIGHT above a flat ground plane and is
stepped until it drops below y = 0 or MAX_FLIGHT_TIME elapses. The first
sample at or below the ground is kept as the impact state; its position
may lie up to one step under the ground plane.

Output: SimulationResult dataclass with the full state history.
"""

import logging
import numpy as np
from dataclasses import dataclass
from functools import cached_property
from typing import Tuple

from .forces import acceleration
from .params import PhysicsParams, validate_params
from .vector import Vector3

log = logging.getLogger(__name__)


# ── Integration constants ─────────────────────────────────────────────────
LAUNCH_HEIGHT   = 1.5     # m   hand / shoulder / muzzle height
TIME_STEP       = 0.01    # s
MAX_FLIGHT_TIME = 60.0    # s   ceiling for non-returning trajectories


@dataclass(frozen=True)
class ProjectileState:
    """Snapshot of projectile state at one instant."""
    position: Vector3   # m
    velocity: Vector3   # m/s
    time: float         # s since launch

    @property
    def speed(self) -> float:
        return self.velocity.norm()

    @property
    def height(self) -> float:
        return self.position.y

    @property
    def horizontal_distance(self) -> float:
        """Ground distance from the launch point (m)."""
        return self.position.horizontal_norm()


@dataclass(frozen=True)
class SimulationResult:
    """Complete trajectory output."""
    path: Tuple[ProjectileState, ...]
    max_range: float          # m, horizontal distance at impact
    max_height: float         # m, highest y recorded before impact
    time_of_flight: float     # s
    impact_velocity: float    # m/s, speed at impact
    params: PhysicsParams
    dt: float

    @property
    def launch_state(self) -> ProjectileState:
        return self.path[0]

    @property
    def impact_state(self) -> ProjectileState:
        return self.path[-1]

    # ── Array views for plotting / analytics ──────────────────────────────
    @cached_property
    def time(self) -> np.ndarray:
        return np.array([s.time for s in self.path])

    @cached_property
    def positions(self) -> np.ndarray:
        """Shape (N, 3) array of positions."""
        return np.array([s.position.as_array() for s in self.path])

    @cached_property
    def velocities(self) -> np.ndarray:
        """Shape (N, 3) array of velocities."""
        return np.array([s.velocity.as_array() for s in self.path])

    @property
    def x(self) -> np.ndarray:
        return self.positions[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.positions[:, 1]

    @property
    def z(self) -> np.ndarray:
        return self.positions[:, 2]

    @property
    def vx(self) -> np.ndarray:
        return self.velocities[:, 0]

    @property
    def vy(self) -> np.ndarray:
        return self.velocities[:, 1]

    @property
    def vz(self) -> np.ndarray:
        return self.velocities[:, 2]

    @property
    def speed(self) -> np.ndarray:
        return np.linalg.norm(self.velocities, axis=1)

    @property
    def horizontal_distance(self) -> np.ndarray:
        return np.hypot(self.x, self.z)

    @property
    def hit_ground(self) -> bool:
        """False when the run was cut off by the flight-time ceiling."""
        return self.impact_state.position.y < 0

    def summary(self) -> str:
        """Human-readable summary string."""
        p = self.params
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY                                  ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Launch vel   : {p.initial_velocity:>10.1f} m/s{'':<22s} ║",
            f"║  Elevation    : {p.launch_angle:>10.1f} °{'':<24s} ║",
            f"║  Azimuth      : {p.launch_azimuth:>10.1f} °{'':<24s} ║",
            f"║  Mass         : {p.mass:>10.3f} kg{'':<23s} ║",
            f"║  Timestep     : {self.dt:<36.4f} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Range        : {self.max_range:>10.2f} m{'':<24s} ║",
            f"║  Max height   : {self.max_height:>10.2f} m{'':<24s} ║",
            f"║  Flight time  : {self.time_of_flight:>10.2f} s{'':<24s} ║",
            f"║  Impact vel   : {self.impact_velocity:>10.2f} m/s{'':<22s} ║",
            f"║  Samples      : {len(self.path):>10d}{'':<26s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def launch_state(params: PhysicsParams) -> ProjectileState:
    """State at t = 0: launch height, velocity along the launch direction."""
    return ProjectileState(
        position=Vector3(0.0, LAUNCH_HEIGHT, 0.0),
        velocity=params.initial_velocity_vector(),
        time=0.0,
    )


def rk4_step(position: Vector3, velocity: Vector3, params: PhysicsParams,
             dt: float) -> Tuple[Vector3, Vector3]:
    """
    One coupled RK4 step for x'' = a(x').

    Velocity is advanced with the four acceleration samples and position
    with the four velocity samples the accelerations were taken at.
    """
    k1v = acceleration(velocity, params)
    k1x = velocity

    k2x = velocity + k1v * (dt / 2)
    k2v = acceleration(k2x, params)

    k3x = velocity + k2v * (dt / 2)
    k3v = acceleration(k3x, params)

    k4x = velocity + k3v * dt
    k4v = acceleration(k4x, params)

    next_vel = velocity + (k1v + k2v * 2 + k3v * 2 + k4v) * (dt / 6)
    next_pos = position + (k1x + k2x * 2 + k3x * 2 + k4x) * (dt / 6)
    return next_pos, next_vel


def step(state: ProjectileState, params: PhysicsParams,
         dt: float = TIME_STEP) -> ProjectileState:
    """Advance one state by dt, returning a new state."""
    pos, vel = rk4_step(state.position, state.velocity, params, dt)
    return ProjectileState(position=pos, velocity=vel, time=state.time + dt)


def simulate(params: PhysicsParams, *, dt: float = TIME_STEP,
             max_time: float = MAX_FLIGHT_TIME) -> SimulationResult:
    """
    Integrate a full flight from launch to impact.

    Parameters
    ----------
    params : PhysicsParams
        Launch configuration. Validated first; a non-positive mass or
        non-finite input raises ConfigurationError.
    dt, max_time : float
        Step size and flight-time ceiling. Only tests should override these.

    Returns
    -------
    SimulationResult
        path[0] is the launch state, path[-1] the first sample at or below
        the ground (or the sample at the time ceiling).
    """
    validate_params(params)
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")

    state = launch_state(params)
    path = []
    max_height = 0.0

    while state.position.y >= 0 and state.time < max_time:
        path.append(state)
        if state.position.y > max_height:
            max_height = state.position.y
        state = step(state, params, dt)

    # impact sample, not counted towards max_height
    path.append(state)

    log.debug("simulated %d steps, t=%.2f s, y_final=%.4f m",
              len(path) - 1, state.time, state.position.y)

    return SimulationResult(
        path=tuple(path),
        max_range=state.position.horizontal_norm(),
        max_height=max_height,
        time_of_flight=state.time,
        impact_velocity=state.velocity.norm(),
        params=params,
        dt=dt,
    )
