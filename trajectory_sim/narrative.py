"""
Flight Narrative
================
Builds the analysis prompt for an external text-generation service and
wraps the call so that any failure degrades to a fixed message.

The service itself is injected: `generate` is any callable taking the
prompt string and returning text, or a coroutine function doing the same.
The simulation result is only read, never modified.
"""

import asyncio
import inspect
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Awaitable, Callable, Optional, Union

from .integrator import SimulationResult
from .params import PhysicsParams

log = logging.getLogger(__name__)


FALLBACK_MESSAGE = "Unable to provide AI analysis at this time."
EMPTY_MESSAGE = "No data available."
DEFAULT_TIMEOUT = 30.0  # s
GEMINI_MODEL = "gemini-2.5-flash"
GEMINI_TEMPERATURE = 0.7

TextBackend = Callable[[str], Union[str, None, Awaitable[Optional[str]]]]


def _fmt(value: float) -> str:
    # integral floats print without a trailing .0, like the UI shows them
    return f"{value:g}"


def build_prompt(params: PhysicsParams, result: SimulationResult,
                 mode: str) -> str:
    """Analysis prompt for one launch and its outcome."""
    mode = getattr(mode, 'value', mode)
    wind = params.wind_speed
    spin = params.spin
    air = 'Enabled' if params.air_density > 0 else 'Disabled'
    return (
        "As a world-class ballistics and physics expert, analyze this "
        "projectile motion data:\n"
        f"Launch Mode: {mode}\n"
        f"Initial Velocity: {_fmt(params.initial_velocity)} m/s\n"
        f"Launch Angle: {_fmt(params.launch_angle)}°\n"
        f"Mass: {_fmt(params.mass)} kg\n"
        f"Air Resistance: {air}\n"
        f"Wind: X:{_fmt(wind.x)}, Y:{_fmt(wind.y)}, Z:{_fmt(wind.z)} m/s\n"
        f"Spin (Magnus): X:{_fmt(spin.x)}, Y:{_fmt(spin.y)}, Z:{_fmt(spin.z)} rad/s\n"
        "\n"
        "Simulation Results:\n"
        f"Max Range: {result.max_range:.2f} m\n"
        f"Max Height: {result.max_height:.2f} m\n"
        f"Time of Flight: {result.time_of_flight:.2f} s\n"
        f"Impact Velocity: {result.impact_velocity:.2f} m/s\n"
        "\n"
        "Provide a brief, professional technical insight (max 100 words) on "
        "how the variables like drag, wind, or spin influenced this specific "
        "result. Mention if the trajectory was efficient."
    )


class TrajectoryNarrator:
    """
    Fallible commentary on a finished simulation.

    Parameters
    ----------
    generate : callable, optional
        Text-generation backend, sync or async. Without one every request
        returns FALLBACK_MESSAGE.
    timeout : float
        Seconds to wait for the backend before giving up.
    """

    def __init__(self, generate: Optional[TextBackend] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self.generate = generate
        self.timeout = timeout

    async def _call(self, prompt: str,
                    executor: ThreadPoolExecutor) -> Optional[str]:
        if inspect.iscoroutinefunction(self.generate):
            return await self.generate(prompt)
        # blocking clients run off the event loop, on a pool nobody joins
        loop = asyncio.get_running_loop()
        text = await loop.run_in_executor(executor, self.generate, prompt)
        if inspect.isawaitable(text):
            text = await text
        return text

    async def analyze(self, params: PhysicsParams, result: SimulationResult,
                      mode: str) -> str:
        if self.generate is None:
            log.info("no text-generation backend configured")
            return FALLBACK_MESSAGE

        prompt = build_prompt(params, result, mode)
        executor = ThreadPoolExecutor(max_workers=1,
                                      thread_name_prefix='narrator')
        try:
            text = await asyncio.wait_for(self._call(prompt, executor),
                                          self.timeout)
        except asyncio.TimeoutError:
            log.warning("trajectory analysis timed out after %g s", self.timeout)
            return FALLBACK_MESSAGE
        except Exception:
            log.exception("trajectory analysis failed")
            return FALLBACK_MESSAGE
        finally:
            # a hung backend thread is abandoned, not awaited
            executor.shutdown(wait=False)

        if not text or not str(text).strip():
            return EMPTY_MESSAGE
        return str(text).strip()

    def analyze_sync(self, params: PhysicsParams, result: SimulationResult,
                     mode: str) -> str:
        """Blocking wrapper for scripts; not for use inside a running loop."""
        return asyncio.run(self.analyze(params, result, mode))


def gemini_backend(api_key: Optional[str] = None, model: str = GEMINI_MODEL,
                   temperature: float = GEMINI_TEMPERATURE, client=None):
    """
    Async text backend on the Google GenAI client.

    Parameters
    ----------
    api_key : str, optional
        Passed to ``genai.Client``; when omitted the client reads
        GEMINI_API_KEY / GOOGLE_API_KEY itself.
    model, temperature
        Generation settings for every request.
    client : optional
        Pre-built client exposing ``aio.models.generate_content``.

    Requires the ``gemini`` extra (google-genai).
    """
    from google.genai import types

    if client is None:
        from google import genai
        client = genai.Client(api_key=api_key)
    config = types.GenerateContentConfig(temperature=temperature)

    async def generate(prompt: str) -> Optional[str]:
        response = await client.aio.models.generate_content(
            model=model, contents=prompt, config=config)
        return response.text

    return generate
