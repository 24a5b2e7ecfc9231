"""
Tests for validation against closed form and the analytics projections.
"""

import sys
import os
import math
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from trajectory_sim.params import PhysicsParams
from trajectory_sim.vector import Vector3
from trajectory_sim.integrator import simulate, TIME_STEP
from trajectory_sim.presets import LaunchMode, DEFAULTS
from trajectory_sim.validation import (
    analytic_time_of_flight, analytic_max_height, analytic_range,
    analytic_impact_speed, vacuum, validate_against_analytic,
    run_all_validations, error_stats,
)
from trajectory_sim.analytics import (
    chart_series, horizontal_distance, playback_positions, playback_frames,
)


class TestClosedForm:

    def test_ground_level_range_formula(self):
        p = PhysicsParams(gravity=9.81, initial_velocity=50.0, launch_angle=45.0)
        assert analytic_range(p, height=0.0) == pytest.approx(2500.0 / 9.81)

    def test_ground_level_time_formula(self):
        p = PhysicsParams(gravity=9.81, initial_velocity=20.0, launch_angle=30.0)
        assert analytic_time_of_flight(p, height=0.0) == pytest.approx(2 * 10.0 / 9.81)

    def test_max_height_downward_launch(self):
        p = PhysicsParams(initial_velocity=20.0, launch_angle=-30.0)
        assert analytic_max_height(p) == 1.5

    def test_impact_speed_from_energy(self):
        p = PhysicsParams(gravity=10.0, initial_velocity=10.0)
        assert analytic_impact_speed(p, height=5.0) == pytest.approx(math.sqrt(200.0))

    def test_requires_positive_gravity(self):
        with pytest.raises(ValueError):
            analytic_time_of_flight(PhysicsParams(gravity=0.0))

    def test_vacuum_switches_off_air(self):
        p = vacuum(DEFAULTS[LaunchMode.KICK])
        assert p.air_density == 0.0
        assert p.spin == Vector3(0.0, 0.0, 0.0)
        assert p.mass == DEFAULTS[LaunchMode.KICK].mass


class TestValidation:

    def test_single_validation(self):
        vr = validate_against_analytic(DEFAULTS[LaunchMode.CANNON], verbose=False)
        assert abs(vr.height_error_pct) < 1e-2
        assert abs(vr.impact_error_pct) < 1e-6
        # impact overshoots the crossing by less than one step
        assert -1e-9 <= vr.sim_tof - vr.ref_tof <= TIME_STEP + 1e-9

    def test_sweep(self):
        results = run_all_validations(verbose=False)
        assert [r.launch_angle for r in results] == [15.0, 30.0, 45.0, 60.0, 75.0]
        stats = error_stats(results)
        assert stats['height'] < 1e-2
        assert stats['range'] < 1.0
        for r in results:
            assert r.sim_range >= r.ref_range - 1e-6

    def test_verbose_prints_table(self, capsys):
        run_all_validations(angles=(45.0,), verbose=True)
        out = capsys.readouterr().out
        assert 'VALIDATION' in out
        assert 'PASS' in out


class TestChartSeries:

    def test_every_fifth_sample(self):
        r = simulate(DEFAULTS[LaunchMode.THROW])
        series = chart_series(r)
        n = len(r.path)
        assert len(series['time']) == math.ceil(n / 5)
        assert series['time'][0] == 0.0
        assert series['time'][1] == r.path[5].time
        assert series['height'][2] == r.path[10].position.y
        assert series['distance'][3] == pytest.approx(horizontal_distance(r.path[15]))

    def test_custom_decimation(self):
        r = simulate(DEFAULTS[LaunchMode.THROW])
        assert len(chart_series(r, every=1)['time']) == len(r.path)

    def test_invalid_decimation(self):
        r = simulate(DEFAULTS[LaunchMode.THROW])
        with pytest.raises(ValueError):
            chart_series(r, every=0)

    def test_distance_uses_both_horizontal_axes(self):
        r = simulate(DEFAULTS[LaunchMode.KICK].replace(launch_azimuth=45.0))
        last = r.path[-1]
        assert horizontal_distance(last) == pytest.approx(r.max_range)


class TestPlayback:

    def test_sample_times_reproduce_path(self):
        r = simulate(DEFAULTS[LaunchMode.THROW])
        pos = playback_positions(r, r.time[:10])
        assert np.allclose(pos, r.positions[:10])

    def test_midpoint_interpolation(self):
        r = simulate(DEFAULTS[LaunchMode.THROW])
        t_mid = 0.5 * (r.time[3] + r.time[4])
        pos = playback_positions(r, [t_mid])[0]
        assert np.allclose(pos, 0.5 * (r.positions[3] + r.positions[4]))

    def test_clamped_outside_flight(self):
        r = simulate(DEFAULTS[LaunchMode.THROW])
        pos = playback_positions(r, [-1.0, r.time_of_flight + 5.0])
        assert np.allclose(pos[0], r.positions[0])
        assert np.allclose(pos[1], r.positions[-1])

    def test_frames_cover_flight(self):
        r = simulate(DEFAULTS[LaunchMode.KICK])
        times, positions = playback_frames(r, fps=30)
        assert times[0] == 0.0
        assert times[-1] == pytest.approx(r.time_of_flight)
        assert positions.shape == (len(times), 3)
        assert np.all(np.diff(times) > 0)

    def test_invalid_fps(self):
        r = simulate(DEFAULTS[LaunchMode.KICK])
        with pytest.raises(ValueError):
            playback_frames(r, fps=0)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
