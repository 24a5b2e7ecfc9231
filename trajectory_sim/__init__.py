"""
Projectile Trajectory Simulator
===============================
Fixed-step RK4 simulation of a projectile launched from a fixed height
over flat ground, under:
  - Gravity
  - Quadratic aerodynamic drag relative to the wind
  - Magnus force from spin

Produces the time-sampled path plus range, peak height, flight time and
impact speed. Also ships launch presets, chart/playback analytics,
closed-form validation, matplotlib plots and a fallible narrative
wrapper for an external text-generation service.
"""

from .vector import Vector3
from .params import PhysicsParams, ConfigurationError, validate_params
from .forces import (
    MAGNUS_COEFFICIENT, gravity_force, drag_force, magnus_force,
    total_force, acceleration,
)
from .integrator import (
    LAUNCH_HEIGHT, TIME_STEP, MAX_FLIGHT_TIME,
    ProjectileState, SimulationResult, rk4_step, simulate,
)
from .presets import LaunchMode, DEFAULTS, UI_LIMITS, get_preset
from .analytics import (
    chart_series, horizontal_distance, playback_positions, playback_frames,
)
from .validation import (
    validate_against_analytic, run_all_validations, ValidationResult,
)
from .narrative import (
    TrajectoryNarrator, build_prompt, gemini_backend, FALLBACK_MESSAGE,
)

__version__ = "1.0.0"
__all__ = [
    'Vector3', 'PhysicsParams', 'ConfigurationError', 'validate_params',
    'MAGNUS_COEFFICIENT', 'gravity_force', 'drag_force', 'magnus_force',
    'total_force', 'acceleration',
    'LAUNCH_HEIGHT', 'TIME_STEP', 'MAX_FLIGHT_TIME',
    'ProjectileState', 'SimulationResult', 'rk4_step', 'simulate',
    'LaunchMode', 'DEFAULTS', 'UI_LIMITS', 'get_preset',
    'chart_series', 'horizontal_distance', 'playback_positions',
    'playback_frames',
    'validate_against_analytic', 'run_all_validations', 'ValidationResult',
    'TrajectoryNarrator', 'build_prompt', 'gemini_backend', 'FALLBACK_MESSAGE',
]
