"""Reading and writing RIFF/WAVE audio data."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from enum import IntEnum

from rekat.chunks import AudioFileError, DecodedAudio, find_chunk
from rekat.samples import (
    byte_to_sample,
    int16_to_sample,
    int24_to_sample,
    sample_to_byte,
    sample_to_int16,
    sample_to_int24,
)

__all__ = ["WavAudioFormat", "decode_wave", "encode_wave"]


class WavAudioFormat(IntEnum):
    """Audio format codes found in the ``fmt `` chunk of a WAV file."""

    PCM = 0x0001
    IEEE_FLOAT = 0x0003
    ALAW = 0x0006
    MULAW = 0x0007
    EXTENSIBLE = 0xFFFE


_SUPPORTED_FORMATS = frozenset(
    {WavAudioFormat.PCM, WavAudioFormat.IEEE_FLOAT, WavAudioFormat.EXTENSIBLE}
)
_SUPPORTED_BIT_DEPTHS = (8, 16, 24, 32)
_MAX_CHANNELS = 128
# The largest signed 32-bit integer, as it rounds in single precision.
_INT32_READ_SCALE = 2147483648.0
# Fields following the id and size of the fmt chunk:
# format, channels, sample rate, bytes per second, block align, bit depth.
_FMT_LAYOUT = struct.Struct("<HHIIHh")


def _int32(value: int) -> bytes:
    return (value & 0xFFFFFFFF).to_bytes(4, "little")


def _int16(value: int) -> bytes:
    return (value & 0xFFFF).to_bytes(2, "little")


def _decode_payload(payload: bytes, bit_depth: int, audio_format: int) -> list[float]:
    if bit_depth == 8:
        return [byte_to_sample(value) for value in payload]
    if bit_depth == 16:
        return [int16_to_sample(value) for (value,) in struct.iter_unpack("<h", payload)]
    if bit_depth == 24:
        return [
            int24_to_sample(int.from_bytes(payload[offset:offset + 3], "little"))
            for offset in range(0, len(payload), 3)
        ]
    if audio_format == WavAudioFormat.IEEE_FLOAT:
        return [value for (value,) in struct.iter_unpack("<f", payload)]
    return [value / _INT32_READ_SCALE for (value,) in struct.iter_unpack("<i", payload)]


def decode_wave(data: bytes) -> DecodedAudio:
    """Decode the bytes of a WAV file.

    Raises AudioFileError when the data is not a WAV file this decoder supports.
    """
    data = bytes(data)
    data_at = find_chunk(data, b"data", 12)
    fmt_at = find_chunk(data, b"fmt ", 12)
    ixml_at = find_chunk(data, b"iXML", 12)

    if data_at is None or fmt_at is None or data[:4] != b"RIFF" or data[8:12] != b"WAVE":
        raise AudioFileError("this doesn't seem to be a valid .WAV file")

    try:
        (
            audio_format,
            num_channels,
            sample_rate,
            bytes_per_second,
            block_align,
            bit_depth,
        ) = _FMT_LAYOUT.unpack_from(data, fmt_at + 8)
        (data_size,) = struct.unpack_from("<i", data, data_at + 4)
    except struct.error:
        raise AudioFileError("the format or data chunk of this WAV file is truncated") from None

    bytes_per_sample = (bit_depth & 0xFFFF) // 8

    if audio_format not in _SUPPORTED_FORMATS:
        raise AudioFileError(
            "this .WAV file is encoded in a format that is not supported at present"
        )

    if not 1 <= num_channels <= _MAX_CHANNELS:
        raise AudioFileError(
            "this WAV file seems to be an invalid number of channels (or corrupted?)"
        )

    expected_rate = ((num_channels * sample_rate * (bit_depth & 0xFFFFFFFF)) & 0xFFFFFFFF) // 8
    if bytes_per_second != expected_rate or block_align != num_channels * bytes_per_sample:
        raise AudioFileError("the header data in this WAV file seems to be inconsistent")

    if bit_depth not in _SUPPORTED_BIT_DEPTHS:
        raise AudioFileError("this file has a bit depth that is not 8, 16, 24 or 32 bits")

    frame_size = num_channels * bit_depth // 8
    frame_count = data_size // frame_size if data_size > 0 else 0
    start = data_at + 8
    end = start + frame_count * block_align
    if end > len(data):
        raise AudioFileError(
            "the metadata indicates more samples than there are in the file data"
        )

    values = _decode_payload(data[start:end], bit_depth, audio_format)
    channels = [values[channel::num_channels] for channel in range(num_channels)]

    ixml = ""
    if ixml_at is not None:
        size_bytes = data[ixml_at + 4:ixml_at + 8]
        if len(size_bytes) == 4:
            size = max(int.from_bytes(size_bytes, "little", signed=True), 0)
            ixml = data[ixml_at + 8:ixml_at + 8 + size].decode("utf-8", errors="replace")

    return DecodedAudio(
        channels=channels,
        sample_rate=sample_rate,
        bit_depth=bit_depth,
        ixml=ixml,
    )


def _encode_payload(samples: list[float], bit_depth: int) -> bytes:
    if bit_depth == 8:
        return bytes(sample_to_byte(sample) for sample in samples)
    if bit_depth == 16:
        return struct.pack(f"<{len(samples)}h", *(sample_to_int16(s) for s in samples))
    if bit_depth == 24:
        return b"".join(
            (sample_to_int24(sample) & 0xFFFFFF).to_bytes(3, "little") for sample in samples
        )
    return struct.pack(f"<{len(samples)}f", *samples)


def encode_wave(
    channels: Sequence[Sequence[float]],
    sample_rate: int = 44100,
    bit_depth: int = 16,
    ixml: str = "",
) -> bytes:
    """Encode channels of samples as the bytes of a WAV file.

    32-bit audio is written as IEEE floats, other depths as integer PCM.
    """
    channel_lists = [list(channel) for channel in channels]
    num_channels = len(channel_lists)
    num_samples = len(channel_lists[0]) if channel_lists else 0
    if any(len(channel) != num_samples for channel in channel_lists):
        raise AudioFileError("all channels must hold the same number of samples")
    if bit_depth not in _SUPPORTED_BIT_DEPTHS:
        raise AudioFileError(f"trying to write a file with unsupported bit depth {bit_depth}")

    audio_format = WavAudioFormat.IEEE_FLOAT if bit_depth == 32 else WavAudioFormat.PCM
    fmt_size = 16 if audio_format == WavAudioFormat.PCM else 18
    bytes_per_sample = bit_depth // 8
    data_size = num_samples * num_channels * bytes_per_sample
    ixml_bytes = ixml.encode("utf-8")

    file_size = 4 + fmt_size + 8 + 8 + data_size
    if ixml_bytes:
        file_size += 8 + len(ixml_bytes)

    out = bytearray()
    out += b"RIFF" + _int32(file_size) + b"WAVE"

    out += b"fmt " + _int32(fmt_size)
    out += _int16(audio_format) + _int16(num_channels) + _int32(sample_rate)
    out += _int32(((num_channels * sample_rate * bit_depth) & 0xFFFFFFFF) // 8)
    out += _int16(num_channels * bytes_per_sample)
    out += _int16(bit_depth)
    if audio_format == WavAudioFormat.IEEE_FLOAT:
        out += _int16(0)

    out += b"data" + _int32(data_size)
    interleaved = [sample for frame in zip(*channel_lists) for sample in frame]
    out += _encode_payload(interleaved, bit_depth)

    if ixml_bytes:
        out += b"iXML" + _int32(len(ixml_bytes)) + ixml_bytes

    return bytes(out)