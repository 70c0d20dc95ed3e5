import pytest

from rekat.samples import (
    aiff_sample_rate_bytes,
    aiff_sample_rate_from_bytes,
    byte_to_sample,
    clamp,
    int16_to_sample,
    int24_to_sample,
    sample_to_byte,
    sample_to_int16,
    sample_to_int24,
)

SUPPORTED_RATES = [
    8000, 11025, 16000, 22050, 32000, 37800, 44056, 44100, 47250, 48000,
    50000, 50400, 88200, 96000, 176400, 192000, 352800, 2822400, 5644800,
]


def test_clamp_limits_both_sides():
    assert clamp(2.5, -1.0, 1.0) == 1.0
    assert clamp(-2.5, -1.0, 1.0) == -1.0
    assert clamp(0.25, -1.0, 1.0) == 0.25


def test_int16_extremes():
    assert int16_to_sample(-32768) == -1.0
    assert sample_to_int16(1.0) == 32767
    assert sample_to_int16(-1.0) == -32767


def test_int16_clamps_out_of_range_samples():
    assert sample_to_int16(7.0) == sample_to_int16(1.0)
    assert sample_to_int16(-7.0) == sample_to_int16(-1.0)


@pytest.mark.parametrize("value", [-32767, -1000, -1, 0, 1, 1000, 32767])
def test_int16_round_trip_is_close(value):
    assert abs(sample_to_int16(int16_to_sample(value)) - value) <= 1


def test_byte_midpoint_is_silence():
    assert byte_to_sample(128) == 0.0


def test_byte_extremes():
    assert sample_to_byte(1.0) == 255
    assert sample_to_byte(-1.0) == 0
    assert sample_to_byte(3.0) == sample_to_byte(1.0)


def test_byte_round_trip_is_close():
    for value in range(256):
        assert abs(sample_to_byte(byte_to_sample(value)) - value) <= 1


def test_int24_sign_extension():
    assert int24_to_sample(0x800000) == -1.0
    assert int24_to_sample(0xFFFFFF) == int24_to_sample(-1)
    assert int24_to_sample(0xFFFFFF) < 0 < int24_to_sample(0x7FFFFF)


@pytest.mark.parametrize("value", [-8388608, -12345, -1, 0, 1, 12345, 8388607])
def test_int24_round_trip_exact(value):
    assert sample_to_int24(int24_to_sample(value)) == value


def test_int24_stays_in_range():
    for sample in (-3.0, -1.0, 0.5, 1.0, 3.0):
        assert -0x800000 <= sample_to_int24(sample) <= 0x7FFFFF


def test_aiff_rate_encoding_of_44100():
    assert aiff_sample_rate_bytes(44100) == bytes([64, 14, 172, 68, 0, 0, 0, 0, 0, 0])


@pytest.mark.parametrize("rate", SUPPORTED_RATES)
def test_aiff_rate_round_trip(rate):
    encoded = aiff_sample_rate_bytes(rate)
    assert len(encoded) == 10
    assert aiff_sample_rate_from_bytes(encoded + b"trailing") == rate


def test_aiff_unknown_rate_raises():
    with pytest.raises(ValueError):
        aiff_sample_rate_bytes(12345)


def test_aiff_unknown_bytes_give_none():
    assert aiff_sample_rate_from_bytes(bytes(10)) is None
    assert aiff_sample_rate_from_bytes(aiff_sample_rate_bytes(44100)[:5]) is None