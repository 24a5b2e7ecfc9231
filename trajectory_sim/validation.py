"""
Validation Against Closed-Form Kinematics
=========================================
With air density zero the only force is gravity, and the trajectory is
the textbook parabola launched from height h:

    t_f   = (v_y + sqrt(v_y² + 2 g h)) / g
    y_max = h + v_y² / 2g            (v_y > 0)
    R     = v_h · t_f
    |v|   = sqrt(v0² + 2 g (h - y))  (energy conservation)

RK4 integrates constant acceleration exactly, so the only deviations are
floating-point round-off and the sampling of the loop: the apex is only
seen at sample times and impact overshoots the ground by up to one step.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .integrator import LAUNCH_HEIGHT, simulate, SimulationResult
from .params import PhysicsParams
from .vector import Vector3


def _check_gravity(gravity: float):
    if gravity <= 0:
        raise ValueError(
            f"Closed-form flight needs positive gravity, got {gravity}"
        )


def analytic_time_of_flight(params: PhysicsParams,
                            height: float = LAUNCH_HEIGHT) -> float:
    """Time (s) to fall from launch height to y = 0 in vacuum."""
    _check_gravity(params.gravity)
    vy = params.initial_velocity_vector().y
    g = params.gravity
    return (vy + math.sqrt(vy * vy + 2.0 * g * height)) / g


def analytic_max_height(params: PhysicsParams,
                        height: float = LAUNCH_HEIGHT) -> float:
    """Apex height (m) in vacuum; the launch height when fired downward."""
    _check_gravity(params.gravity)
    vy = max(params.initial_velocity_vector().y, 0.0)
    return height + vy * vy / (2.0 * params.gravity)


def analytic_range(params: PhysicsParams,
                   height: float = LAUNCH_HEIGHT) -> float:
    """Horizontal distance (m) at the ground crossing in vacuum."""
    v_h = params.initial_velocity_vector().horizontal_norm()
    return v_h * analytic_time_of_flight(params, height)


def analytic_impact_speed(params: PhysicsParams,
                          height: float = LAUNCH_HEIGHT,
                          final_height: float = 0.0) -> float:
    """Speed (m/s) at `final_height` from energy conservation."""
    _check_gravity(params.gravity)
    v0 = params.initial_velocity
    return math.sqrt(v0 * v0 + 2.0 * params.gravity * (height - final_height))


def vacuum(params: PhysicsParams) -> PhysicsParams:
    """Same launch with drag, wind and spin switched off."""
    return params.replace(air_density=0.0, wind_speed=Vector3.zero(),
                          spin=Vector3.zero())


@dataclass
class ValidationResult:
    """Result of one simulation-vs-closed-form comparison."""
    launch_angle: float
    ref_range: float
    sim_range: float
    range_error_pct: float
    ref_max_height: float
    sim_max_height: float
    height_error_pct: float
    ref_tof: float
    sim_tof: float
    tof_error_pct: float
    ref_impact_speed: float     # energy-consistent at the sim's final height
    sim_impact_speed: float
    impact_error_pct: float


def _pct(sim: float, ref: float) -> float:
    return 100.0 * (sim - ref) / ref if ref != 0 else 0.0


def compare(result: SimulationResult) -> ValidationResult:
    """Compare a drag-free simulation result with the closed form."""
    params = result.params
    ref_range = analytic_range(params)
    ref_height = analytic_max_height(params)
    ref_tof = analytic_time_of_flight(params)
    ref_speed = analytic_impact_speed(
        params, final_height=result.impact_state.position.y)

    return ValidationResult(
        launch_angle=params.launch_angle,
        ref_range=ref_range,
        sim_range=result.max_range,
        range_error_pct=_pct(result.max_range, ref_range),
        ref_max_height=ref_height,
        sim_max_height=result.max_height,
        height_error_pct=_pct(result.max_height, ref_height),
        ref_tof=ref_tof,
        sim_tof=result.time_of_flight,
        tof_error_pct=_pct(result.time_of_flight, ref_tof),
        ref_impact_speed=ref_speed,
        sim_impact_speed=result.impact_velocity,
        impact_error_pct=_pct(result.impact_velocity, ref_speed),
    )


def validate_against_analytic(params: PhysicsParams,
                              verbose: bool = True) -> ValidationResult:
    """
    Run the simulator without air and compare against closed form.
    """
    result = simulate(vacuum(params))
    vr = compare(result)

    if verbose:
        print(f"  θ={vr.launch_angle:>6.1f}°  "
              f"R {vr.sim_range:>9.2f} / {vr.ref_range:>9.2f} m ({vr.range_error_pct:+.3f}%)  "
              f"H {vr.sim_max_height:>8.2f} / {vr.ref_max_height:>8.2f} m ({vr.height_error_pct:+.4f}%)  "
              f"T {vr.sim_tof:>6.2f} / {vr.ref_tof:>6.2f} s")
    return vr


def run_all_validations(params: PhysicsParams = None,
                        angles: Sequence[float] = (15.0, 30.0, 45.0, 60.0, 75.0),
                        verbose: bool = True) -> List[ValidationResult]:
    """Sweep launch angles for one drag-free configuration."""
    if params is None:
        params = PhysicsParams(initial_velocity=50.0)

    if verbose:
        print(f"\n{'='*75}")
        print(f"  VALIDATION: closed-form vacuum trajectory")
        print(f"  v0 = {params.initial_velocity} m/s | g = {params.gravity} m/s² "
              f"| h = {LAUNCH_HEIGHT} m")
        print(f"{'='*75}")

    results = [
        validate_against_analytic(params.replace(launch_angle=float(a)),
                                  verbose=verbose)
        for a in angles
    ]

    if verbose:
        stats = error_stats(results)
        print("-" * 75)
        print(f"  Mean absolute errors — Range: {stats['range']:.3f}% | "
              f"Height: {stats['height']:.5f}% | Time: {stats['tof']:.3f}%")
        status = "✓ PASS" if stats['height'] < 0.01 else "✗ CHECK INTEGRATOR"
        print(f"  Status: {status}")
        print(f"{'='*75}\n")

    return results


def error_stats(results: List[ValidationResult]) -> Dict[str, float]:
    """Mean absolute percent errors over a validation sweep."""
    return {
        'range': float(np.mean([abs(r.range_error_pct) for r in results])),
        'height': float(np.mean([abs(r.height_error_pct) for r in results])),
        'tof': float(np.mean([abs(r.tof_error_pct) for r in results])),
        'impact': float(np.mean([abs(r.impact_error_pct) for r in results])),
    }
