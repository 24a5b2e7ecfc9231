#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  PROJECTILE TRAJECTORY SIMULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the complete simulation pipeline:
    1. Launch mode presets (all 4 modes)
    2. Reference trajectory for the selected mode (RK4)
    3. Validation against closed-form vacuum kinematics
    4. Wind effects
    5. Spin (Magnus) effects
    6. Chart series
    7. Full dashboard + 3D path
    8. Animated trajectory GIF
    9. Flight narrative

  All outputs saved to outputs/ directory.

  Usage:
    python main.py                       # Run everything (cannon preset)
    python main.py --mode kick           # Reference run with another preset
    python main.py --params launch.json  # Override preset fields from JSON
    python main.py --quick               # Skip animation (faster)

  Set GEMINI_API_KEY (with the `gemini` extra installed) for phase 9 commentary.
═══════════════════════════════════════════════════════════════════════════════
"""

import argparse
import json
import logging
import os
import sys
import time

from trajectory_sim.params import PhysicsParams, ConfigurationError, validate_params
from trajectory_sim.vector import Vector3
from trajectory_sim.presets import LaunchMode, DEFAULTS, get_preset
from trajectory_sim.integrator import simulate
from trajectory_sim.analytics import chart_series
from trajectory_sim.validation import run_all_validations
from trajectory_sim.narrative import TrajectoryNarrator, gemini_backend
from trajectory_sim.visualization import (
    plot_trajectory, plot_top_view, plot_path_3d, plot_mode_comparison,
    plot_dashboard, create_trajectory_animation, ensure_output_dir,
)

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

# Gemini credentials for the flight narrative (optional)
API_KEY_ENV = "GEMINI_API_KEY"


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║     PROJECTILE TRAJECTORY SIMULATOR                                   ║
║     ─────────────────────────────────────────────────────             ║
║     Physics: Gravity · Drag · Wind · Magnus                           ║
║     Method: RK4, dt = 0.01 s │ Validated against closed form          ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Projectile trajectory simulator")
    parser.add_argument('--mode', default='cannon',
                        choices=[m.value.lower() for m in LaunchMode],
                        help='launch preset for the reference run')
    parser.add_argument('--params', metavar='FILE',
                        help='JSON object of PhysicsParams fields overriding the preset')
    parser.add_argument('--out', default='outputs', help='output directory')
    parser.add_argument('--quick', action='store_true', help='skip animation')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='debug logging')
    return parser.parse_args(argv)


def load_params(mode: str, path: str = None) -> PhysicsParams:
    """Preset for `mode`, with fields overridden from a JSON file."""
    params = get_preset(mode)
    if path:
        with open(path) as fh:
            overrides = json.load(fh)
        if not isinstance(overrides, dict):
            raise ConfigurationError(
                f"{path}: expected a JSON object of parameter overrides, "
                f"got {type(overrides).__name__}")
        merged = params.to_dict()
        merged.update(overrides)
        params = PhysicsParams.from_dict(merged)
    return params


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    start_time = time.time()
    banner()
    out = ensure_output_dir(args.out)

    try:
        params = load_params(args.mode, args.params)
        validate_params(params)
    except (OSError, ValueError) as exc:
        print(f"  ✗ Could not load parameters: {exc}")
        return 2
    mode = LaunchMode[args.mode.upper()]

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Launch Mode Presets
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Launch Mode Presets")

    mode_results = {}
    for m, p in DEFAULTS.items():
        r = simulate(p)
        mode_results[m.value] = r
        print(f"  {m.value:<8s}  Range: {r.max_range:>9.2f} m  "
              f"Max H: {r.max_height:>8.2f} m  "
              f"ToF: {r.time_of_flight:>6.2f} s  "
              f"Impact: {r.impact_velocity:>7.2f} m/s")

    fig = plot_mode_comparison(mode_results, save_path=f'{out}/01_mode_comparison.png')
    plt.close(fig)
    print(f"\n  ✓ Saved: {out}/01_mode_comparison.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Reference Trajectory
    # ══════════════════════════════════════════════════════════════════════
    section(f"PHASE 2: Reference Trajectory ({mode.value})")

    result = simulate(params)
    print(result.summary())

    fig = plot_trajectory(result, save_path=f'{out}/02_reference_trajectory.png')
    plt.close(fig)
    print(f"  ✓ Saved: {out}/02_reference_trajectory.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Validation Against Closed Form
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Validation — Vacuum Trajectory")
    run_all_validations(PhysicsParams(initial_velocity=50.0), verbose=True)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Wind Effects
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Wind Effects")

    wind_cases = [
        ("No Wind", Vector3(0.0, 0.0, 0.0)),
        ("Headwind 10 m/s", Vector3(-10.0, 0.0, 0.0)),
        ("Tailwind 10 m/s", Vector3(10.0, 0.0, 0.0)),
        ("Crosswind 10 m/s", Vector3(0.0, 0.0, 10.0)),
    ]
    wind_results = {}
    for label, wind in wind_cases:
        r = simulate(params.replace(wind_speed=wind))
        wind_results[label] = r
        print(f"  {label:<20s}  Range: {r.max_range:>9.2f} m  "
              f"Drift: {r.impact_state.position.z:>+8.2f} m")

    fig = plot_top_view(wind_results, save_path=f'{out}/04_wind_effects.png')
    plt.close(fig)
    print(f"\n  ✓ Saved: {out}/04_wind_effects.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Spin (Magnus) Effects
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Spin (Magnus) Effects")

    kick = DEFAULTS[LaunchMode.KICK]
    spin_cases = [
        ("No spin", Vector3(0.0, 0.0, 0.0)),
        ("Backspin +z 10 rad/s", Vector3(0.0, 0.0, 10.0)),
        ("Topspin -z 10 rad/s", Vector3(0.0, 0.0, -10.0)),
        ("Sidespin +y 10 rad/s", Vector3(0.0, 10.0, 0.0)),
    ]
    spin_results = {}
    for label, spin in spin_cases:
        r = simulate(kick.replace(spin=spin))
        spin_results[label] = r
        print(f"  {label:<22s}  Range: {r.max_range:>7.2f} m  "
              f"Max H: {r.max_height:>6.2f} m  "
              f"Drift: {r.impact_state.position.z:>+7.2f} m")

    fig = plot_top_view(spin_results, save_path=f'{out}/05_spin_effects.png')
    plt.close(fig)
    print(f"\n  ✓ Saved: {out}/05_spin_effects.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Chart Series
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 6: Chart Series (every 5th sample)")
    series = chart_series(result)
    print(f"  {len(series['time'])} points from {len(result.path)} samples")
    print(f"  {'t (s)':>8} {'height (m)':>12} {'distance (m)':>14}")
    stride = max(1, len(series['time']) // 8)
    for t, h, d in list(zip(series['time'], series['height'], series['distance']))[::stride]:
        print(f"  {t:>8.1f} {h:>12.2f} {d:>14.2f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 7: Dashboard
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 7: Full Dashboard")
    fig = plot_dashboard(result, title=mode.value,
                         save_path=f'{out}/07_dashboard.png')
    plt.close(fig)
    fig = plot_path_3d(result, save_path=f'{out}/07b_path_3d.png')
    plt.close(fig)
    print(f"  ✓ Saved: {out}/07_dashboard.png")
    print(f"  ✓ Saved: {out}/07b_path_3d.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 8: Trajectory Animation
    # ══════════════════════════════════════════════════════════════════════
    if not args.quick:
        section("PHASE 8: Trajectory Animation (GIF)")
        create_trajectory_animation(result,
                                    save_path=f'{out}/08_trajectory_animation.gif')
        print(f"  ✓ Saved: {out}/08_trajectory_animation.gif")
    else:
        section("PHASE 8: Animation SKIPPED (--quick mode)")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 9: Narrative
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 9: Flight Analysis")
    api_key = os.environ.get(API_KEY_ENV)
    narrator = TrajectoryNarrator()
    if not api_key:
        print(f"  (set {API_KEY_ENV} to enable Gemini analysis)")
    else:
        try:
            narrator = TrajectoryNarrator(gemini_backend(api_key=api_key))
        except ImportError as exc:
            print(f"  ✗ Gemini client unavailable ({exc}); pip install .[gemini]")
    print(f"  {narrator.analyze_sync(params, result, mode.value)}")

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"""
  All outputs saved to: {os.path.abspath(out)}/

  Generated files:
    01_mode_comparison.png       — All launch presets
    02_reference_trajectory.png  — Side view of the reference run
    04_wind_effects.png          — Wind drift (top view)
    05_spin_effects.png          — Magnus drift (top view)
    07_dashboard.png             — Flight data dashboard
    07b_path_3d.png              — 3D flight path
    {'08_trajectory_animation.gif — Animated trajectory' if not args.quick else '(animation skipped)'}

  Total runtime: {elapsed:.1f} seconds
""")
    return 0


if __name__ == "__main__":
    sys.exit(main())
