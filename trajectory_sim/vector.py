"""
Vector3 Value Type
==================
Immutable 3-component vector used for position, velocity, wind, spin
and force.

Coordinate system:
  x = downrange (horizontal)
  y = height    (vertical, up positive)
  z = crossrange (horizontal, lateral)

Every operation returns a new Vector3; nothing is mutated in place.
Components are kept as plain Python floats so arithmetic stays scalar
IEEE-754 double math.
"""

import math
import numpy as np
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> 'Vector3':
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, arr) -> 'Vector3':
        """Build from any length-3 sequence or numpy array."""
        if len(arr) != 3:
            raise ValueError(f"Expected 3 components, got {len(arr)}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    @classmethod
    def from_dict(cls, data: dict) -> 'Vector3':
        return cls(float(data.get('x', 0.0)),
                   float(data.get('y', 0.0)),
                   float(data.get('z', 0.0)))

    def to_dict(self) -> dict:
        return {'x': self.x, 'y': self.y, 'z': self.z}

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    # ── Arithmetic ────────────────────────────────────────────────────────
    def __add__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> 'Vector3':
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, k: float) -> 'Vector3':
        return Vector3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> 'Vector3':
        return Vector3(self.x / k, self.y / k, self.z / k)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    # ── Products & norms ──────────────────────────────────────────────────
    def dot(self, other: 'Vector3') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vector3') -> 'Vector3':
        """Right-handed cross product self × other."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm_sq(self) -> float:
        # x*x rather than x**2: float ** overflows with an exception
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.norm_sq())

    def horizontal_norm(self) -> float:
        """Length of the projection onto the ground (x-z) plane."""
        return math.sqrt(self.x * self.x + self.z * self.z)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)
