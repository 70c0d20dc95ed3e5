"""An in-memory audio file that can be read from and written to WAV or AIFF."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from rekat.aiff import decode_aiff, encode_aiff
from rekat.chunks import AudioFileError, AudioFileFormat, DecodedAudio, detect_format
from rekat.wave import decode_wave, encode_wave

__all__ = ["AudioFile"]

_DEFAULT_SAMPLE_RATE = 44100
_DEFAULT_BIT_DEPTH = 16
_RULE = "|======================================|"


class AudioFile:
    """Audio samples, indexed as ``samples[channel][index]``, with their metadata.

    ``bit_depth`` and ``sample_rate`` are the values used when the audio is saved.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None):
        self.samples: list[list[float]] = [[]]
        self.ixml: str = ""
        self.sample_rate: int = _DEFAULT_SAMPLE_RATE
        self.bit_depth: int = _DEFAULT_BIT_DEPTH
        self.format: AudioFileFormat = AudioFileFormat.NOT_LOADED
        if path is not None:
            self.load(path)

    def load(self, path: str | os.PathLike[str]) -> None:
        """Read and decode the audio file at ``path``.

        Raises OSError when the file cannot be read and AudioFileError when it
        cannot be decoded.
        """
        self.load_from_memory(Path(path).read_bytes())

    def load_from_memory(self, data: bytes) -> None:
        """Decode the bytes of a WAV or AIFF file into this object."""
        self.format = detect_format(data)
        if self.format is AudioFileFormat.WAVE:
            decoded = decode_wave(data)
        elif self.format is AudioFileFormat.AIFF:
            decoded = decode_aiff(data)
        else:
            raise AudioFileError("Audio File Type: Error")
        self._apply(decoded)

    def _apply(self, decoded: DecodedAudio) -> None:
        self.samples = [list(channel) for channel in decoded.channels]
        self.sample_rate = decoded.sample_rate
        self.bit_depth = decoded.bit_depth
        if decoded.ixml:
            self.ixml = decoded.ixml

    def to_bytes(self, format: AudioFileFormat = AudioFileFormat.WAVE) -> bytes:
        """Encode the audio as the bytes of a file in ``format``."""
        if format is AudioFileFormat.WAVE:
            return encode_wave(self.samples, self.sample_rate, self.bit_depth, self.ixml)
        if format is AudioFileFormat.AIFF:
            return encode_aiff(self.samples, self.sample_rate, self.bit_depth, self.ixml)
        raise ValueError(f"cannot save audio in format {format.name}")

    def save(
        self,
        path: str | os.PathLike[str],
        format: AudioFileFormat = AudioFileFormat.WAVE,
    ) -> None:
        """Encode the audio in ``format`` and write it to ``path``."""
        data = self.to_bytes(format)
        Path(path).write_bytes(data)

    @property
    def num_channels(self) -> int:
        """Number of channels in the buffer."""
        return len(self.samples)

    @property
    def num_samples_per_channel(self) -> int:
        """Number of samples in each channel."""
        return len(self.samples[0]) if self.samples else 0

    @property
    def is_mono(self) -> bool:
        """Whether the audio has exactly one channel."""
        return self.num_channels == 1

    @property
    def is_stereo(self) -> bool:
        """Whether the audio has exactly two channels."""
        return self.num_channels == 2

    @property
    def length_in_seconds(self) -> float:
        """Duration of the audio at the current sample rate."""
        return self.num_samples_per_channel / self.sample_rate

    def summary(self) -> str:
        """A short text description of the audio."""
        return "\n".join(
            [
                _RULE,
                f"Num Channels: {self.num_channels}",
                f"Num Samples Per Channel: {self.num_samples_per_channel}",
                f"Sample Rate: {self.sample_rate}",
                f"Bit Depth: {self.bit_depth}",
                f"Length in Seconds: {self.length_in_seconds:g}",
                _RULE,
            ]
        )

    def set_audio_buffer(self, buffer: Sequence[Sequence[float]]) -> None:
        """Replace the samples with a copy of ``buffer``."""
        channels = [[float(sample) for sample in channel] for channel in buffer]
        if not channels:
            raise ValueError("the buffer you are trying to use has no channels")
        size = len(channels[0])
        if any(len(channel) != size for channel in channels):
            raise ValueError("all channels of the buffer must have the same length")
        self.samples = channels

    def set_buffer_size(self, num_channels: int, num_samples: int) -> None:
        """Resize to ``num_channels`` channels of ``num_samples`` samples, padding with zeros."""
        if num_channels < 0:
            raise ValueError(f"number of channels must not be negative, got {num_channels}")
        self.samples = self.samples[:num_channels] + [
            [] for _ in range(num_channels - len(self.samples))
        ]
        self.set_num_samples_per_channel(num_samples)

    def set_num_samples_per_channel(self, num_samples: int) -> None:
        """Truncate or zero-pad every channel to ``num_samples`` samples."""
        if num_samples < 0:
            raise ValueError(f"number of samples must not be negative, got {num_samples}")
        self.samples = [
            channel[:num_samples] + [0.0] * (num_samples - len(channel))
            for channel in self.samples
        ]

    def set_num_channels(self, num_channels: int) -> None:
        """Change the channel count; new channels are silent and of the current length."""
        if num_channels < 0:
            raise ValueError(f"number of channels must not be negative, got {num_channels}")
        length = self.num_samples_per_channel
        self.samples = self.samples[:num_channels] + [
            [0.0] * length for _ in range(num_channels - len(self.samples))
        ]