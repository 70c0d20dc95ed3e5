"""Sine tone synthesis from frames of pitch, intensity and duration."""

from __future__ import annotations

import math
from collections.abc import Sequence

__all__ = ["period", "note_samples", "render"]

_REFERENCE_PITCH = 440.0
_SEMITONES_PER_OCTAVE = 12.0
_FULL_INTENSITY = 65536.0
_STEPS_PER_BEAT = 16
_RAMP_DIVISOR = 8


def period(x: float) -> float:
    """The periodic waveform every note is built from."""
    return math.sin(x)


def _envelope(index: int, duration: int, ramp: int) -> float:
    if ramp <= index <= duration - ramp:
        return 1.0
    if index < ramp:
        return index / ramp
    return (ramp - (index - (duration - ramp))) / ramp


def note_samples(duration: int, frequency: float, intensity: float, ramp: int) -> list[float]:
    """Return ``duration`` samples of a note.

    ``frequency`` is in radians per sample. The amplitude rises linearly over the
    first ``ramp`` samples and falls over the last ``ramp`` samples.
    """
    return [
        _envelope(index, duration, ramp) * intensity * period(frequency * index)
        for index in range(duration)
    ]


def render(
    frequencies: Sequence[int],
    intensities: Sequence[int],
    lengths: Sequence[int],
    bpm: float = 120.0,
    sample_rate: int = 44100,
) -> list[float]:
    """Render frames of notes into samples.

    Each frame has a pitch in semitones from A440, an intensity out of 65536, and
    two entries in ``lengths``: the note length and the pause after it, both in
    sixteenths of a beat. The pause after the last frame is not rendered.
    """
    frame_count = len(frequencies)
    if len(intensities) != frame_count:
        raise ValueError("frequencies and intensities must have the same length")
    if frame_count == 0:
        return []
    segment_count = 2 * frame_count - 1
    if len(lengths) < segment_count:
        raise ValueError(
            f"{frame_count} frames need at least {segment_count} lengths, got {len(lengths)}"
        )

    samples_per_step = int(sample_rate * 60 / bpm / _STEPS_PER_BEAT)
    segment_sizes = [length * samples_per_step for length in lengths[:segment_count]]
    ramp = segment_sizes[0] // _RAMP_DIVISOR

    angular = [
        _REFERENCE_PITCH * 2 ** (semitones / _SEMITONES_PER_OCTAVE) * 2 * math.pi / sample_rate
        for semitones in frequencies
    ]
    levels = [level / _FULL_INTENSITY for level in intensities]

    out: list[float] = []
    for index, size in enumerate(segment_sizes):
        if index % 2:
            out.extend([0.0] * size)
        else:
            frame = index // 2
            out.extend(note_samples(size, angular[frame], levels[frame], ramp))
    return out