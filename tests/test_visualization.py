"""
Smoke tests for plotting and the command-line runner.
"""

import sys
import os
import json
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from trajectory_sim.integrator import simulate
from trajectory_sim.params import ConfigurationError
from trajectory_sim.presets import LaunchMode, DEFAULTS
from trajectory_sim.visualization import (
    plot_trajectory, plot_top_view, plot_path_3d, plot_mode_comparison,
    plot_dashboard, create_trajectory_animation, ensure_output_dir,
)

import main as runner


@pytest.fixture(scope='module')
def throw_result():
    return simulate(DEFAULTS[LaunchMode.THROW])


class TestPlots:

    def test_side_view(self, throw_result, tmp_path):
        path = tmp_path / 'side.png'
        fig = plot_trajectory(throw_result, save_path=str(path))
        plt.close(fig)
        assert path.stat().st_size > 0

    def test_top_view_and_3d(self, throw_result, tmp_path):
        fig = plot_top_view({'throw': throw_result}, save_path=str(tmp_path / 'top.png'))
        plt.close(fig)
        fig = plot_path_3d(throw_result, save_path=str(tmp_path / '3d.png'))
        plt.close(fig)
        assert (tmp_path / 'top.png').exists()
        assert (tmp_path / '3d.png').exists()

    def test_mode_comparison(self, tmp_path):
        results = {m.value: simulate(p) for m, p in DEFAULTS.items()}
        fig = plot_mode_comparison(results, save_path=str(tmp_path / 'modes.png'))
        plt.close(fig)
        assert (tmp_path / 'modes.png').exists()

    def test_dashboard(self, throw_result, tmp_path):
        fig = plot_dashboard(throw_result, title='THROW',
                             save_path=str(tmp_path / 'dash.png'))
        plt.close(fig)
        assert (tmp_path / 'dash.png').exists()

    def test_animation(self, throw_result, tmp_path):
        out = create_trajectory_animation(throw_result,
                                          save_path=str(tmp_path / 'anim.gif'),
                                          fps=5, max_frames=8)
        assert os.path.exists(out)

    def test_ensure_output_dir(self, tmp_path):
        target = tmp_path / 'a' / 'b'
        assert ensure_output_dir(str(target)) == str(target)
        assert target.is_dir()


class TestRunner:

    def test_load_params_overrides_preset(self, tmp_path):
        cfg = tmp_path / 'launch.json'
        cfg.write_text(json.dumps({'launchAngle': 60, 'windSpeed': [0, 0, 3]}))
        params = runner.load_params('kick', str(cfg))
        kick = DEFAULTS[LaunchMode.KICK]
        assert params.launch_angle == 60.0
        assert params.wind_speed.z == 3.0
        assert params.mass == kick.mass

    def test_quick_run(self, tmp_path, capsys, monkeypatch):
        monkeypatch.delenv(runner.API_KEY_ENV, raising=False)
        out = tmp_path / 'outputs'
        assert runner.main(['--quick', '--mode', 'throw', '--out', str(out)]) == 0
        text = capsys.readouterr().out
        assert 'TRAJECTORY SUMMARY' in text
        assert (out / '07_dashboard.png').exists()
        assert not (out / '08_trajectory_animation.gif').exists()

    def test_invalid_params_file(self, tmp_path):
        cfg = tmp_path / 'bad.json'
        cfg.write_text(json.dumps({'mass': 0}))
        assert runner.main(['--quick', '--params', str(cfg),
                            '--out', str(tmp_path)]) == 2

    @pytest.mark.parametrize('payload', [[1, 2, 3], 42, "cannon", None])
    def test_params_file_must_be_object(self, tmp_path, payload):
        cfg = tmp_path / 'odd.json'
        cfg.write_text(json.dumps(payload))
        with pytest.raises(ConfigurationError, match="JSON object"):
            runner.load_params('kick', str(cfg))
        assert runner.main(['--quick', '--params', str(cfg),
                            '--out', str(tmp_path)]) == 2

    def test_api_key_enables_backend(self, tmp_path, capsys, monkeypatch):
        seen = {}

        def fake_backend(api_key):
            seen['api_key'] = api_key
            return lambda prompt: "Efficient, drag-limited arc."

        monkeypatch.setenv(runner.API_KEY_ENV, 'test-key')
        monkeypatch.setattr(runner, 'gemini_backend', fake_backend)
        assert runner.main(['--quick', '--mode', 'throw',
                            '--out', str(tmp_path)]) == 0
        assert seen == {'api_key': 'test-key'}
        assert "Efficient, drag-limited arc." in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
