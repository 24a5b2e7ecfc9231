"""
Launch Presets
==============
Default parameter sets for the four launch modes offered by the control
surface. Wind is still air in every preset.
"""

from enum import Enum
from typing import Dict, Union

from .params import PhysicsParams
from .vector import Vector3


class LaunchMode(str, Enum):
    GUN = 'GUN'
    CANNON = 'CANNON'
    KICK = 'KICK'
    THROW = 'THROW'


DEFAULTS: Dict[LaunchMode, PhysicsParams] = {
    # 9 mm pistol round, rifling spin about the launch-frame z axis
    LaunchMode.GUN: PhysicsParams(
        gravity=9.81,
        air_density=1.225,
        mass=0.008,
        radius=0.0045,
        drag_coefficient=0.295,
        initial_velocity=350.0,
        launch_angle=5.0,
        launch_azimuth=0.0,
        spin=Vector3(0.0, 0.0, 500.0),
    ),
    # 10 kg round shot
    LaunchMode.CANNON: PhysicsParams(
        gravity=9.81,
        air_density=1.225,
        mass=10.0,
        radius=0.1,
        drag_coefficient=0.47,
        initial_velocity=150.0,
        launch_angle=45.0,
        launch_azimuth=0.0,
        spin=Vector3(0.0, 0.0, 0.0),
    ),
    # Football, curved kick
    LaunchMode.KICK: PhysicsParams(
        gravity=9.81,
        air_density=1.225,
        mass=0.45,
        radius=0.11,
        drag_coefficient=0.25,
        initial_velocity=25.0,
        launch_angle=30.0,
        launch_azimuth=0.0,
        spin=Vector3(0.0, 10.0, 5.0),
    ),
    # Baseball with backspin
    LaunchMode.THROW: PhysicsParams(
        gravity=9.81,
        air_density=1.225,
        mass=0.145,
        radius=0.037,
        drag_coefficient=0.3,
        initial_velocity=40.0,
        launch_angle=15.0,
        launch_azimuth=0.0,
        spin=Vector3(50.0, 0.0, 0.0),
    ),
}


# Ranges offered by the interactive controls. Informational only: the
# integrator accepts values outside them.
UI_LIMITS = {
    'gravity': (0.0, 25.0),
    'air_density': (0.0, 2.0),
    'initial_velocity': (1.0, 1000.0),
    'launch_angle': (-90.0, 90.0),
    'launch_azimuth': (0.0, 360.0),
}


def get_preset(mode: Union[LaunchMode, str]) -> PhysicsParams:
    """Return the default parameters for a launch mode (enum or name)."""
    if isinstance(mode, LaunchMode):
        return DEFAULTS[mode]
    key = str(mode).upper()
    if key not in LaunchMode.__members__:
        raise ValueError(
            f"Unknown launch mode '{mode}'. "
            f"Available: {[m.value for m in LaunchMode]}"
        )
    return DEFAULTS[LaunchMode[key]]
