"""Conversions between floating point samples and their stored integer forms."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "Endianness",
    "clamp",
    "int16_to_sample",
    "sample_to_int16",
    "byte_to_sample",
    "sample_to_byte",
    "int24_to_sample",
    "sample_to_int24",
    "aiff_sample_rate_bytes",
    "aiff_sample_rate_from_bytes",
]


class Endianness(Enum):
    """Byte order of integers stored in an audio file."""

    LITTLE = "little"
    BIG = "big"


_INT24_SCALE = 8388608.0
_INT16_READ_SCALE = 32768.0
_INT16_WRITE_SCALE = 32767.0

# Ten-byte extended-precision encodings of the sample rates AIFF files may use.
_AIFF_SAMPLE_RATES: dict[int, bytes] = {
    8000: bytes([64, 11, 250, 0, 0, 0, 0, 0, 0, 0]),
    11025: bytes([64, 12, 172, 68, 0, 0, 0, 0, 0, 0]),
    16000: bytes([64, 12, 250, 0, 0, 0, 0, 0, 0, 0]),
    22050: bytes([64, 13, 172, 68, 0, 0, 0, 0, 0, 0]),
    32000: bytes([64, 13, 250, 0, 0, 0, 0, 0, 0, 0]),
    37800: bytes([64, 14, 147, 168, 0, 0, 0, 0, 0, 0]),
    44056: bytes([64, 14, 172, 24, 0, 0, 0, 0, 0, 0]),
    44100: bytes([64, 14, 172, 68, 0, 0, 0, 0, 0, 0]),
    47250: bytes([64, 14, 184, 146, 0, 0, 0, 0, 0, 0]),
    48000: bytes([64, 14, 187, 128, 0, 0, 0, 0, 0, 0]),
    50000: bytes([64, 14, 195, 80, 0, 0, 0, 0, 0, 0]),
    50400: bytes([64, 14, 196, 224, 0, 0, 0, 0, 0, 0]),
    88200: bytes([64, 15, 172, 68, 0, 0, 0, 0, 0, 0]),
    96000: bytes([64, 15, 187, 128, 0, 0, 0, 0, 0, 0]),
    176400: bytes([64, 16, 172, 68, 0, 0, 0, 0, 0, 0]),
    192000: bytes([64, 16, 187, 128, 0, 0, 0, 0, 0, 0]),
    352800: bytes([64, 17, 172, 68, 0, 0, 0, 0, 0, 0]),
    2822400: bytes([64, 20, 172, 68, 0, 0, 0, 0, 0, 0]),
    5644800: bytes([64, 21, 172, 68, 0, 0, 0, 0, 0, 0]),
}


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Limit ``value`` to the closed range ``[minimum, maximum]``."""
    return max(min(value, maximum), minimum)


def int16_to_sample(value: int) -> float:
    """Convert a signed 16-bit integer to a sample in ``[-1, 1)``."""
    return value / _INT16_READ_SCALE


def sample_to_int16(sample: float) -> int:
    """Convert a sample to a signed 16-bit integer, clamping it first."""
    return int(clamp(sample, -1.0, 1.0) * _INT16_WRITE_SCALE)


def byte_to_sample(value: int) -> float:
    """Convert an unsigned 8-bit value (offset by 128) to a sample."""
    return (value - 128) / 128.0


def sample_to_byte(sample: float) -> int:
    """Convert a sample to an unsigned 8-bit value, clamping it first."""
    scaled = (clamp(sample, -1.0, 1.0) + 1.0) / 2.0
    return int(scaled * 255.0)


def int24_to_sample(value: int) -> float:
    """Convert a 24-bit two's complement integer to a sample.

    Both the raw unsigned 24-bit pattern and an already signed value are accepted.
    """
    value &= 0xFFFFFF
    if value & 0x800000:
        value -= 0x1000000
    return value / _INT24_SCALE


def sample_to_int24(sample: float) -> int:
    """Convert a sample to a signed 24-bit integer; out-of-range values wrap."""
    value = int(sample * _INT24_SCALE)
    return ((value + 0x800000) & 0xFFFFFF) - 0x800000


def aiff_sample_rate_bytes(rate: int) -> bytes:
    """Return the ten-byte AIFF encoding of a supported sample rate."""
    try:
        return _AIFF_SAMPLE_RATES[rate]
    except KeyError:
        raise ValueError(f"unsupported AIFF sample rate: {rate}") from None


def aiff_sample_rate_from_bytes(data: bytes) -> int | None:
    """Return the sample rate whose encoding starts ``data``, or None if unknown."""
    head = bytes(data[:10])
    for rate, encoded in _AIFF_SAMPLE_RATES.items():
        if head == encoded:
            return rate
    return None