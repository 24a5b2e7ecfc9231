"""
Force Model
===========
Computes every force acting on the projectile at one instant:
  - Gravity
  - Aerodynamic drag (quadratic, relative to the moving air mass)
  - Magnus force from spin

All forces depend only on the instantaneous velocity and the (fixed)
parameter set, so the acceleration can be evaluated at any RK4 stage
without a position argument.

Drag uses the velocity relative to the wind; the Magnus cross product
uses the ground-frame velocity. Wind does not rotate the spin frame in
this model.
"""

from .params import PhysicsParams
from .vector import Vector3


# ── Aerodynamic constants ─────────────────────────────────────────────────
MAGNUS_COEFFICIENT = 1.0   # dimensionless, S = C_M · ρ · r³


def gravity_force(params: PhysicsParams) -> Vector3:
    """Weight vector (0, -g·m, 0) in newtons."""
    return Vector3(0.0, -params.gravity * params.mass, 0.0)


def drag_force(velocity: Vector3, params: PhysicsParams) -> Vector3:
    """
    Compute aerodynamic drag force vector (N).

    F_drag = -½ ρ |v_rel|² Cd A v̂_rel,   v_rel = v - wind

    Parameters
    ----------
    velocity : Vector3
        Ground-frame projectile velocity (m/s)
    params : PhysicsParams
        Supplies air density, Cd, radius and wind

    Returns
    -------
    Vector3
        Drag force (N). Exactly zero when the projectile moves with the
        air mass.
    """
    v_rel = velocity - params.wind_speed
    speed_sq = v_rel.norm_sq()
    speed = v_rel.norm()
    if speed == 0:
        return Vector3.zero()

    magnitude = (0.5 * params.air_density * speed_sq
                 * params.drag_coefficient * params.cross_section_area)
    return Vector3(
        -magnitude * (v_rel.x / speed),
        -magnitude * (v_rel.y / speed),
        -magnitude * (v_rel.z / speed),
    )


def magnus_strength(params: PhysicsParams) -> float:
    """S = C_M · ρ · r³ (kg)."""
    r = params.radius
    return MAGNUS_COEFFICIENT * params.air_density * (r * r * r)


def magnus_force(velocity: Vector3, params: PhysicsParams) -> Vector3:
    """
    Spin-induced lift, F = S (ω × v).

    Uses the ground-frame velocity, not the wind-relative one.
    """
    return params.spin.cross(velocity) * magnus_strength(params)


def total_force(velocity: Vector3, params: PhysicsParams) -> Vector3:
    return (gravity_force(params)
            + drag_force(velocity, params)
            + magnus_force(velocity, params))


def acceleration(velocity: Vector3, params: PhysicsParams) -> Vector3:
    """
    Acceleration (m/s²) of the projectile at the given velocity.

    a = (F_gravity + F_drag + F_magnus) / m
    """
    return total_force(velocity, params) / params.mass
