"""Reading and writing AIFF and AIFF-C audio data."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from enum import Enum

from rekat.chunks import AudioFileError, DecodedAudio, find_chunk
from rekat.samples import (
    Endianness,
    aiff_sample_rate_bytes,
    aiff_sample_rate_from_bytes,
    int16_to_sample,
    int24_to_sample,
    sample_to_byte,
    sample_to_int16,
    sample_to_int24,
)

__all__ = ["AiffAudioFormat", "decode_aiff", "encode_aiff"]


class AiffAudioFormat(Enum):
    """Flavour of an AIFF file, told from the form type after the header."""

    UNCOMPRESSED = "AIFF"
    COMPRESSED = "AIFC"
    ERROR = "error"


_SUPPORTED_BIT_DEPTHS = (8, 16, 24, 32)
_INT32_MAX = 2**31 - 1
_INT32_MIN = -(2**31)
# The largest signed 32-bit integer, as it rounds in single precision.
_INT32_READ_SCALE = 2147483648.0
_COMM_CHUNK_SIZE = 18
# Channels, frames per channel and bit depth following the COMM id and size.
_COMM_LAYOUT = struct.Struct(">hih")


def _form_type(tag: bytes) -> AiffAudioFormat:
    if tag == b"AIFF":
        return AiffAudioFormat.UNCOMPRESSED
    if tag == b"AIFC":
        return AiffAudioFormat.COMPRESSED
    return AiffAudioFormat.ERROR


def _decode_payload(payload: bytes, bit_depth: int, form: AiffAudioFormat) -> list[float]:
    if bit_depth == 8:
        return [value / 128.0 for (value,) in struct.iter_unpack(">b", payload)]
    if bit_depth == 16:
        return [int16_to_sample(value) for (value,) in struct.iter_unpack(">h", payload)]
    if bit_depth == 24:
        return [
            int24_to_sample(int.from_bytes(payload[offset:offset + 3], "big"))
            for offset in range(0, len(payload), 3)
        ]
    if form is AiffAudioFormat.COMPRESSED:
        return [value for (value,) in struct.iter_unpack(">f", payload)]
    return [value / _INT32_READ_SCALE for (value,) in struct.iter_unpack(">i", payload)]


def decode_aiff(data: bytes) -> DecodedAudio:
    """Decode the bytes of an AIFF or AIFF-C file.

    Raises AudioFileError when the data is not an AIFF file this decoder supports.
    """
    data = bytes(data)
    form = _form_type(data[8:12])
    comm_at = find_chunk(data, b"COMM", 12, Endianness.BIG)
    ssnd_at = find_chunk(data, b"SSND", 12, Endianness.BIG)
    ixml_at = find_chunk(data, b"iXML", 12, Endianness.BIG)

    if (
        ssnd_at is None
        or comm_at is None
        or data[:4] != b"FORM"
        or form is AiffAudioFormat.ERROR
    ):
        raise AudioFileError("this doesn't seem to be a valid AIFF file")

    try:
        num_channels, num_frames, bit_depth = _COMM_LAYOUT.unpack_from(data, comm_at + 8)
        ssnd_size, offset = struct.unpack_from(">ii", data, ssnd_at + 4)
    except struct.error:
        raise AudioFileError("the COMM or SSND chunk of this AIFF file is truncated") from None

    sample_rate = aiff_sample_rate_from_bytes(data[comm_at + 16:comm_at + 26])
    if sample_rate is None:
        raise AudioFileError("this AIFF file has an unsupported sample rate")

    if not 1 <= num_channels <= 2:
        raise AudioFileError(
            "this AIFF file seems to be neither mono nor stereo "
            "(perhaps multi-track, or corrupted?)"
        )

    if bit_depth not in _SUPPORTED_BIT_DEPTHS:
        raise AudioFileError("this file has a bit depth that is not 8, 16, 24 or 32 bits")

    frame_size = (bit_depth // 8) * num_channels
    total = num_frames * frame_size
    start = ssnd_at + 16 + offset
    if ssnd_size - 8 != total or start < 0 or total > len(data) - start:
        raise AudioFileError("the metadata for this file doesn't seem right")

    payload = data[start:start + max(num_frames, 0) * frame_size]
    values = _decode_payload(payload, bit_depth, form)
    channels = [values[channel::num_channels] for channel in range(num_channels)]

    ixml = ""
    if ixml_at is not None:
        size_bytes = data[ixml_at + 4:ixml_at + 8]
        if len(size_bytes) == 4:
            size = max(int.from_bytes(size_bytes, "big", signed=True), 0)
            ixml = data[ixml_at + 8:ixml_at + 8 + size].decode("utf-8", errors="replace")

    return DecodedAudio(
        channels=channels,
        sample_rate=sample_rate,
        bit_depth=bit_depth,
        ixml=ixml,
    )


def _sample_to_int32(sample: float) -> int:
    return min(max(int(sample * _INT32_MAX), _INT32_MIN), _INT32_MAX)


def _encode_payload(samples: list[float], bit_depth: int) -> bytes:
    if bit_depth == 8:
        return bytes(sample_to_byte(sample) for sample in samples)
    if bit_depth == 16:
        return struct.pack(f">{len(samples)}h", *(sample_to_int16(s) for s in samples))
    if bit_depth == 24:
        return b"".join(
            (sample_to_int24(sample) & 0xFFFFFF).to_bytes(3, "big") for sample in samples
        )
    return struct.pack(f">{len(samples)}i", *(_sample_to_int32(s) for s in samples))


def encode_aiff(
    channels: Sequence[Sequence[float]],
    sample_rate: int = 44100,
    bit_depth: int = 16,
    ixml: str = "",
) -> bytes:
    """Encode channels of samples as the bytes of an uncompressed AIFF file.

    All bit depths, 32-bit included, are written as signed integers.
    """
    channel_lists = [list(channel) for channel in channels]
    num_channels = len(channel_lists)
    num_frames = len(channel_lists[0]) if channel_lists else 0
    if any(len(channel) != num_frames for channel in channel_lists):
        raise AudioFileError("all channels must hold the same number of samples")
    if bit_depth not in _SUPPORTED_BIT_DEPTHS:
        raise AudioFileError(f"trying to write a file with unsupported bit depth {bit_depth}")
    try:
        rate_bytes = aiff_sample_rate_bytes(sample_rate)
    except ValueError as error:
        raise AudioFileError(str(error)) from None

    total = num_frames * num_channels * (bit_depth // 8)
    ixml_bytes = ixml.encode("utf-8")

    file_size = 4 + 26 + 16 + total
    if ixml_bytes:
        file_size += 8 + len(ixml_bytes)

    out = bytearray()
    out += b"FORM" + struct.pack(">i", file_size) + b"AIFF"
    out += b"COMM" + struct.pack(">i", _COMM_CHUNK_SIZE)
    out += _COMM_LAYOUT.pack(num_channels, num_frames, bit_depth)
    out += rate_bytes
    out += b"SSND" + struct.pack(">iii", total + 8, 0, 0)
    interleaved = [sample for frame in zip(*channel_lists) for sample in frame]
    out += _encode_payload(interleaved, bit_depth)

    if ixml_bytes:
        out += b"iXML" + struct.pack(">i", len(ixml_bytes)) + ixml_bytes

    return bytes(out)