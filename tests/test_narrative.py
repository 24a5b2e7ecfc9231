"""
Tests for the flight narrative wrapper.
"""

import sys
import os
import asyncio
import logging
import threading
import time
import types
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from trajectory_sim.integrator import simulate
from trajectory_sim.presets import LaunchMode, DEFAULTS
from trajectory_sim.narrative import (
    TrajectoryNarrator, build_prompt, gemini_backend,
    FALLBACK_MESSAGE, EMPTY_MESSAGE, GEMINI_MODEL,
)


@pytest.fixture
def cannon():
    params = DEFAULTS[LaunchMode.CANNON]
    return params, simulate(params)


class TestPrompt:

    def test_contains_launch_and_results(self, cannon):
        params, result = cannon
        prompt = build_prompt(params, result, LaunchMode.CANNON)
        assert "Launch Mode: CANNON" in prompt
        assert "Initial Velocity: 150 m/s" in prompt
        assert "Air Resistance: Enabled" in prompt
        assert f"Max Range: {result.max_range:.2f} m" in prompt
        assert f"Impact Velocity: {result.impact_velocity:.2f} m/s" in prompt
        assert "max 100 words" in prompt

    def test_air_disabled(self, cannon):
        params, result = cannon
        prompt = build_prompt(params.replace(air_density=0.0), result, 'THROW')
        assert "Air Resistance: Disabled" in prompt
        assert "Launch Mode: THROW" in prompt


class TestNarrator:

    def test_sync_backend(self, cannon):
        params, result = cannon
        prompts = []

        def generate(prompt):
            prompts.append(prompt)
            return "  Steep, drag-limited arc.  "

        narrator = TrajectoryNarrator(generate)
        text = narrator.analyze_sync(params, result, 'CANNON')
        assert text == "Steep, drag-limited arc."
        assert prompts == [build_prompt(params, result, 'CANNON')]

    def test_async_backend(self, cannon):
        params, result = cannon

        async def generate(prompt):
            await asyncio.sleep(0)
            return "Efficient trajectory."

        narrator = TrajectoryNarrator(generate)
        assert asyncio.run(narrator.analyze(params, result, 'CANNON')) == \
            "Efficient trajectory."

    def test_failure_degrades_to_fallback(self, cannon, caplog):
        params, result = cannon
        before = (result.max_range, result.max_height, len(result.path))

        def generate(prompt):
            raise ConnectionError("service unavailable")

        narrator = TrajectoryNarrator(generate)
        with caplog.at_level(logging.ERROR, logger='trajectory_sim.narrative'):
            text = narrator.analyze_sync(params, result, 'CANNON')
        assert text == FALLBACK_MESSAGE
        assert "trajectory analysis failed" in caplog.text
        assert (result.max_range, result.max_height, len(result.path)) == before

    def test_timeout_degrades_to_fallback(self, cannon):
        params, result = cannon

        async def generate(prompt):
            await asyncio.sleep(5)
            return "too late"

        narrator = TrajectoryNarrator(generate, timeout=0.05)
        assert narrator.analyze_sync(params, result, 'CANNON') == FALLBACK_MESSAGE

    def test_blocking_backend_timeout_returns_promptly(self, cannon, caplog):
        params, result = cannon
        release = threading.Event()

        def generate(prompt):
            release.wait(10)
            return "too late"

        narrator = TrajectoryNarrator(generate, timeout=0.05)
        start = time.monotonic()
        try:
            with caplog.at_level(logging.WARNING, logger='trajectory_sim.narrative'):
                text = narrator.analyze_sync(params, result, 'CANNON')
            elapsed = time.monotonic() - start
        finally:
            release.set()
        assert text == FALLBACK_MESSAGE
        assert elapsed < 1.0
        assert "timed out after 0.05 s" in caplog.text

    @pytest.mark.parametrize('reply', [None, '', '   '])
    def test_empty_reply(self, cannon, reply):
        params, result = cannon
        narrator = TrajectoryNarrator(lambda prompt: reply)
        assert narrator.analyze_sync(params, result, 'CANNON') == EMPTY_MESSAGE

    def test_no_backend(self, cannon):
        params, result = cannon
        assert TrajectoryNarrator().analyze_sync(params, result, 'CANNON') == \
            FALLBACK_MESSAGE


class _FakeModels:

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate_content(self, model, contents, config):
        self.calls.append((model, contents, config))
        if self.error is not None:
            raise self.error
        return types.SimpleNamespace(text=self.reply)


def _fake_client(models):
    return types.SimpleNamespace(aio=types.SimpleNamespace(models=models))


class TestGeminiBackend:

    @pytest.fixture(autouse=True)
    def _needs_client(self):
        pytest.importorskip("google.genai")

    def test_request_settings(self, cannon):
        params, result = cannon
        models = _FakeModels(reply="Drag shortened the arc.")
        narrator = TrajectoryNarrator(gemini_backend(client=_fake_client(models)))
        assert narrator.analyze_sync(params, result, 'CANNON') == \
            "Drag shortened the arc."
        (model, contents, config), = models.calls
        assert model == GEMINI_MODEL == "gemini-2.5-flash"
        assert contents == build_prompt(params, result, 'CANNON')
        assert config.temperature == 0.7

    def test_service_error_falls_back(self, cannon, caplog):
        params, result = cannon
        models = _FakeModels(error=RuntimeError("quota exceeded"))
        narrator = TrajectoryNarrator(gemini_backend(client=_fake_client(models)))
        with caplog.at_level(logging.ERROR, logger='trajectory_sim.narrative'):
            text = narrator.analyze_sync(params, result, 'CANNON')
        assert text == FALLBACK_MESSAGE
        assert "quota exceeded" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
