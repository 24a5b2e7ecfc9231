"""
Physics Parameters
==================
Defines the PhysicsParams dataclass: one complete, immutable launch
configuration (environment + projectile + launch geometry).

Units:
  gravity           m/s²
  air_density       kg/m³
  wind_speed        m/s    (velocity of the air mass)
  mass              kg
  radius            m
  drag_coefficient  dimensionless
  initial_velocity  m/s    (speed along the launch direction)
  launch_angle      degrees above horizontal (signed)
  launch_azimuth    degrees around the vertical axis (0 = +x, 90 = +z)
  spin              rad/s  (angular velocity, Magnus effect)
"""

import math
import numpy as np
from dataclasses import dataclass, field, fields, replace as dc_replace

from .vector import Vector3


class ConfigurationError(ValueError):
    """Raised when a parameter set cannot be simulated."""


# camelCase keys used by the browser front-end and its JSON payloads
_CAMEL_KEYS = {
    'airDensity': 'air_density',
    'windSpeed': 'wind_speed',
    'dragCoefficient': 'drag_coefficient',
    'initialVelocity': 'initial_velocity',
    'launchAngle': 'launch_angle',
    'launchAzimuth': 'launch_azimuth',
}

_VECTOR_FIELDS = ('wind_speed', 'spin')


@dataclass(frozen=True)
class PhysicsParams:
    gravity: float = 9.81
    air_density: float = 1.225
    wind_speed: Vector3 = field(default_factory=Vector3.zero)
    mass: float = 1.0
    radius: float = 0.05
    drag_coefficient: float = 0.47
    initial_velocity: float = 50.0
    launch_angle: float = 45.0
    launch_azimuth: float = 0.0
    spin: Vector3 = field(default_factory=Vector3.zero)

    @property
    def cross_section_area(self) -> float:
        """Reference area π r² (m²)."""
        return math.pi * self.radius * self.radius

    def initial_velocity_vector(self) -> Vector3:
        """
        Convert launch speed + angles to a velocity vector.
        """
        elev = self.launch_angle * np.pi / 180
        azim = self.launch_azimuth * np.pi / 180

        vx = self.initial_velocity * np.cos(elev) * np.cos(azim)
        vy = self.initial_velocity * np.sin(elev)
        vz = self.initial_velocity * np.cos(elev) * np.sin(azim)
        return Vector3(float(vx), float(vy), float(vz))

    def replace(self, **changes) -> 'PhysicsParams':
        """Copy with some fields changed."""
        return dc_replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict) -> 'PhysicsParams':
        """
        Build from a plain dict. Accepts snake_case or camelCase keys;
        vector fields may be dicts with x/y/z or 3-element lists.
        Missing keys take the dataclass defaults.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                raise ConfigurationError(
                    f"Unknown parameter '{key}'. Available: {sorted(known)}"
                )
            if name in _VECTOR_FIELDS:
                if isinstance(value, Vector3):
                    kwargs[name] = value
                elif isinstance(value, dict):
                    kwargs[name] = Vector3.from_dict(value)
                else:
                    kwargs[name] = Vector3.from_array(value)
            else:
                kwargs[name] = float(value)
        return cls(**kwargs)

    def to_dict(self) -> dict:
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = value.to_dict() if isinstance(value, Vector3) else value
        return out


def validate_params(params: PhysicsParams) -> None:
    """
    Reject parameter sets the integrator cannot handle.

    Mass must be finite and strictly positive (force is divided by it
    every step) and every numeric input must be finite. Physical ranges
    such as negative gravity are deliberately accepted.
    """
    for f in fields(params):
        value = getattr(params, f.name)
        if isinstance(value, Vector3):
            if not value.is_finite():
                raise ConfigurationError(
                    f"{f.name} must have finite components, got {value}"
                )
        elif not math.isfinite(value):
            raise ConfigurationError(f"{f.name} must be finite, got {value}")

    if params.mass <= 0:
        raise ConfigurationError(
            f"mass must be positive, got {params.mass} kg"
        )
