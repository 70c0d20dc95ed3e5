"""Storage of a song's frames of pitch, intensity and duration."""

from __future__ import annotations

import io
import os
import struct
from pathlib import Path

__all__ = [
    "State",
    "PUNCTUATION",
    "VOWELS",
    "ALPHABET_LOWER",
    "ALPHABET_UPPER",
]

PUNCTUATION = "-_ ,.;:!?"
VOWELS = "aeiouAEIOU"
ALPHABET_LOWER = "abcdefghijklmnopqrstuvwxyz"
ALPHABET_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

_DEFAULT_SAMPLE_RATE = 44100
_DEFAULT_BPM = 120.0
_SHORT = (-(2**15), 2**15 - 1)
_USHORT = (0, 2**16 - 1)


def _checked(value: int, bounds: tuple[int, int], name: str) -> int:
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")
    return value


def _read_exact(stream: io.BytesIO, size: int) -> bytes:
    chunk = stream.read(size)
    if len(chunk) < size:
        raise ValueError("the state file is truncated")
    return chunk


class State:
    """Frames of a song with its tempo, sample rate and lyric phrase.

    Every frame holds a pitch in semitones from A440, an intensity, and two
    entries in ``lengths``: the note length followed by the pause after it.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None, dimension: int | None = None):
        self.path: Path | None = Path(path) if path is not None else None
        self.sample_rate: int = _DEFAULT_SAMPLE_RATE
        self.bpm: float = _DEFAULT_BPM
        self.phrase: str = ""
        self.frequencies: list[int] = []
        self.intensities: list[int] = []
        self.lengths: list[int] = []
        if dimension is None:
            dimension = 1 if path is not None else 0
        self.resize(dimension)
        if self.path is not None and self.path.exists():
            self.load()

    def __len__(self) -> int:
        return len(self.frequencies)

    def resize(self, dimension: int) -> None:
        """Set the number of frames, keeping existing ones and zeroing new ones."""
        if dimension < 0:
            raise ValueError(f"dimension must not be negative, got {dimension}")

        def fit(values: list[int], size: int) -> list[int]:
            return values[:size] + [0] * (size - len(values))

        self.frequencies = fit(self.frequencies, dimension)
        self.intensities = fit(self.intensities, dimension)
        self.lengths = fit(self.lengths, dimension * 2)

    def frame(self, index: int, frequency: int, intensity: int, pause: int, length: int) -> None:
        """Replace the frame at ``index``."""
        if not 0 <= index < len(self):
            raise IndexError("value out of borders")
        self.frequencies[index] = _checked(frequency, _SHORT, "frequency")
        self.intensities[index] = _checked(intensity, _USHORT, "intensity")
        self.lengths[index * 2] = _checked(length, _USHORT, "length")
        self.lengths[index * 2 + 1] = _checked(pause, _USHORT, "pause")

    def add_frame(
        self,
        frequency: int = 0,
        intensity: int = 0,
        pause: int = 0,
        length: int = 0,
    ) -> None:
        """Append a frame; with no arguments the frame is empty."""
        _checked(frequency, _SHORT, "frequency")
        _checked(intensity, _USHORT, "intensity")
        _checked(length, _USHORT, "length")
        _checked(pause, _USHORT, "pause")
        self.resize(len(self) + 1)
        self.frame(len(self) - 1, frequency, intensity, pause, length)

    def _resolve(self, path: str | os.PathLike[str] | None) -> Path:
        if path is not None:
            self.path = Path(path)
        if self.path is None:
            raise ValueError("no file path given")
        return self.path

    def load(self, path: str | os.PathLike[str] | None = None) -> None:
        """Read the frames and settings from ``path``, or from the remembered path."""
        target = self._resolve(path)
        if not target.exists():
            raise FileNotFoundError(f"no such state file: {target}")

        stream = io.BytesIO(target.read_bytes())
        (count,) = struct.unpack("<Q", _read_exact(stream, 8))
        stream.read(1)
        (bpm,) = struct.unpack("<d", _read_exact(stream, 8))
        stream.read(1)
        (sample_rate,) = struct.unpack("<Q", _read_exact(stream, 8))
        stream.read(1)
        phrase = stream.readline()
        if not phrase.endswith(b"\n"):
            raise ValueError("the state file is truncated")

        frequencies = struct.unpack(f"<{count}h", _read_exact(stream, count * 2))
        stream.read(1)
        intensities = struct.unpack(f"<{count}H", _read_exact(stream, count * 2))
        stream.read(1)
        raw_lengths = stream.read(count * 4)
        if len(raw_lengths) < max(count * 4 - 2, 0):
            raise ValueError("the state file is truncated")
        raw_lengths = raw_lengths.ljust(count * 4, b"\0")
        lengths = struct.unpack(f"<{count * 2}H", raw_lengths)

        self.bpm = bpm
        self.sample_rate = sample_rate
        self.phrase = phrase[:-1].decode("utf-8")
        self.frequencies = list(frequencies)
        self.intensities = list(intensities)
        self.lengths = list(lengths)

    def _encode(self) -> bytes:
        if "\n" in self.phrase:
            raise ValueError("the phrase must not contain a newline")
        count = len(self)
        parts = [
            struct.pack("<Q", count),
            struct.pack("<d", self.bpm),
            struct.pack("<Q", self.sample_rate),
            self.phrase.encode("utf-8"),
            struct.pack(f"<{count}h", *self.frequencies),
            struct.pack(f"<{count}H", *self.intensities),
        ]
        return b"\n".join(parts) + b"\n" + struct.pack(f"<{count * 2}H", *self.lengths)

    def save(self, path: str | os.PathLike[str] | None = None, force: bool = False) -> None:
        """Write the frames and settings; an existing file is kept unless ``force``."""
        target = self._resolve(path)
        if not force and target.exists():
            raise FileExistsError(f"state file already exists: {target}")
        target.write_bytes(self._encode())

    def __str__(self) -> str:
        lines = [
            "\tvalues:",
            f"\tbpm: {self.bpm:g}",
            f"\tsmp: {self.sample_rate}",
            f"\tlen: {len(self)}",
            "",
        ]
        lines.extend(
            f"\tF: {frequency}\tI: {intensity}\tL1:{length}\tL2:{pause}"
            for frequency, intensity, length, pause in zip(
                self.frequencies,
                self.intensities,
                self.lengths[0::2],
                self.lengths[1::2],
            )
        )
        return "\n".join(lines) + "\n"