"""
GPIO Sampler - fill a capture buffer from a receiver on a Raspberry Pi

The receiver (e.g. Canaduino 60 kHz Atomic Clock Receiver Module) outputs
the current carrier level as a logic level on a GPIO pin. The pin is read
once per sample period for the whole buffer, using the pigpio library's
microsecond tick for pacing. Accuracy depends on the jitter of the tick and
of the busy-wait loop.

Requires the pigpio daemon (pigpiod) and the `pigpio` Python package
(install with the `gpio` extra).
"""

import logging
from typing import Tuple

from ..interfaces.errors import CaptureError
from ..timing.sample_buffer import SampleBuffer
from ..timing.wwvb_constants import BUFFER_LENGTH, DEFAULT_GPIO, SAMPLE_PERIOD_MS

logger = logging.getLogger(__name__)

TICK_WRAP = 1 << 32


def _tick_diff(start: int, now: int) -> int:
    """Microseconds from start to now, across the 32-bit tick wrap."""
    return (now - start) % TICK_WRAP


def fill_buffer_gpio(
    gpio: int = DEFAULT_GPIO,
    sample_period_ms: int = SAMPLE_PERIOD_MS,
    length: int = BUFFER_LENGTH,
    host: str = 'localhost'
) -> Tuple[SampleBuffer, int]:
    """
    Sample a GPIO pin every sample_period_ms until length samples are taken.

    Args:
        gpio: BCM GPIO number the receiver output is wired to
        sample_period_ms: Sample period
        length: Number of samples (120 s at 40 samples/s by default)
        host: pigpiod host

    Raises:
        CaptureError: if pigpio is unavailable or the daemon cannot be reached

    Returns:
        (buffer, fill time in microseconds)
    """
    try:
        import pigpio
    except ImportError as e:
        raise CaptureError("pigpio not installed. Install with: pip install wwvb-decoder[gpio]") from e

    pi = pigpio.pi(host)
    if not pi.connected:
        raise CaptureError(f"Could not connect to pigpiod on {host}")

    period_usec = 1000 * sample_period_ms
    samples = bytearray(length)

    logger.info(f"Sampling GPIO{gpio} for {length * sample_period_ms / 1000:.0f}s "
                f"({length} samples, {sample_period_ms} ms period)")
    try:
        pi.set_mode(gpio, pigpio.INPUT)
        first_tick = pi.get_current_tick()
        samples[0] = pi.read(gpio)

        for i in range(1, length):
            while _tick_diff(first_tick, pi.get_current_tick()) < i * period_usec:
                pass
            samples[i] = pi.read(gpio)

        fill_time = _tick_diff(first_tick, pi.get_current_tick())
    finally:
        pi.stop()

    logger.info(f"Capture complete, fill time {fill_time} usec")
    return SampleBuffer.from_bytes(bytes(samples), 1000 // sample_period_ms), fill_time
