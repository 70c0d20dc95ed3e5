"""File format detection and chunk lookup shared by the WAV and AIFF codecs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from rekat.samples import Endianness

__all__ = [
    "AudioFileFormat",
    "AudioFileError",
    "DecodedAudio",
    "detect_format",
    "find_chunk",
]

_CHUNK_ID_LENGTH = 4


class AudioFileFormat(Enum):
    """Kind of audio file, including the states of failure and not yet loaded."""

    ERROR = "error"
    NOT_LOADED = "not_loaded"
    WAVE = "wave"
    AIFF = "aiff"


class AudioFileError(Exception):
    """Raised when audio data cannot be decoded or encoded."""


@dataclass
class DecodedAudio:
    """Samples and metadata read from an audio file."""

    channels: list[list[float]]
    sample_rate: int
    bit_depth: int
    ixml: str = field(default="")


def detect_format(data: bytes) -> AudioFileFormat:
    """Tell the file format from the first four bytes of ``data``."""
    header = bytes(data[:4])
    if header == b"RIFF":
        return AudioFileFormat.WAVE
    if header == b"FORM":
        return AudioFileFormat.AIFF
    return AudioFileFormat.ERROR


def find_chunk(
    data: bytes,
    chunk_id: str | bytes,
    start: int,
    byteorder: Endianness = Endianness.LITTLE,
) -> int | None:
    """Return the offset of the chunk named ``chunk_id``, walking chunks from ``start``.

    Each chunk is a four-byte id followed by a signed 32-bit size in ``byteorder``.
    Returns None when the chunk is not found or the chunk chain is broken.
    """
    wanted = chunk_id.encode("latin-1") if isinstance(chunk_id, str) else bytes(chunk_id)
    if len(wanted) != _CHUNK_ID_LENGTH:
        raise ValueError(f"chunk id must be {_CHUNK_ID_LENGTH} bytes long: {chunk_id!r}")

    position = start
    while 0 <= position < len(data) - _CHUNK_ID_LENGTH:
        if data[position:position + _CHUNK_ID_LENGTH] == wanted:
            return position
        size_at = position + _CHUNK_ID_LENGTH
        size_bytes = data[size_at:size_at + 4]
        if len(size_bytes) < 4:
            return None
        size = int.from_bytes(size_bytes, byteorder.value, signed=True)
        following = size_at + 4 + size
        if following <= position:
            return None
        position = following
    return None