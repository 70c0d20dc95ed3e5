import pytest

from rekat.audiofile import AudioFile
from rekat.chunks import AudioFileError, AudioFileFormat


def _stereo(bit_depth=16, sample_rate=44100):
    audio = AudioFile()
    audio.set_audio_buffer([[0.0, 0.5, -0.5, 0.25], [0.25, -0.25, 0.75, -0.75]])
    audio.bit_depth = bit_depth
    audio.sample_rate = sample_rate
    return audio


def test_defaults():
    audio = AudioFile()
    assert audio.sample_rate == 44100
    assert audio.bit_depth == 16
    assert audio.num_channels == 1
    assert audio.num_samples_per_channel == 0
    assert audio.format is AudioFileFormat.NOT_LOADED
    assert audio.is_mono
    assert not audio.is_stereo


@pytest.mark.parametrize("fmt", [AudioFileFormat.WAVE, AudioFileFormat.AIFF])
@pytest.mark.parametrize("bit_depth", [16, 24, 32])
def test_round_trip_in_memory(fmt, bit_depth):
    original = _stereo(bit_depth)
    data = original.to_bytes(fmt)
    loaded = AudioFile()
    loaded.load_from_memory(data)
    assert loaded.format is fmt
    assert loaded.num_channels == 2
    assert loaded.is_stereo
    assert loaded.bit_depth == bit_depth
    assert loaded.sample_rate == 44100
    for got, want in zip(loaded.samples, original.samples):
        assert got == pytest.approx(want, abs=1e-4)


def test_headers_match_format():
    audio = _stereo()
    assert audio.to_bytes(AudioFileFormat.WAVE)[:4] == b"RIFF"
    assert audio.to_bytes(AudioFileFormat.AIFF)[:4] == b"FORM"


def test_save_and_load_file(tmp_path):
    path = tmp_path / "tone.wav"
    original = _stereo(bit_depth=24, sample_rate=48000)
    original.ixml = "<BWFXML/>"
    original.save(path)
    loaded = AudioFile(path)
    assert loaded.sample_rate == 48000
    assert loaded.ixml == "<BWFXML/>"
    assert loaded.samples[1] == pytest.approx(original.samples[1], abs=1e-6)


def test_save_aiff_file(tmp_path):
    path = tmp_path / "tone.aiff"
    _stereo().save(path, AudioFileFormat.AIFF)
    loaded = AudioFile()
    loaded.load(path)
    assert loaded.format is AudioFileFormat.AIFF
    assert loaded.num_samples_per_channel == 4


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AudioFile(tmp_path / "missing.wav")


def test_unknown_data_is_rejected_and_buffer_kept():
    audio = _stereo()
    before = [list(channel) for channel in audio.samples]
    with pytest.raises(AudioFileError):
        audio.load_from_memory(b"JUNKJUNKJUNKJUNK")
    assert audio.format is AudioFileFormat.ERROR
    assert audio.samples == before


def test_save_in_invalid_format():
    with pytest.raises(ValueError):
        _stereo().to_bytes(AudioFileFormat.NOT_LOADED)


def test_aiff_unsupported_rate():
    with pytest.raises(AudioFileError):
        _stereo(sample_rate=12345).to_bytes(AudioFileFormat.AIFF)


def test_length_in_seconds():
    audio = AudioFile()
    audio.set_buffer_size(1, 22050)
    audio.sample_rate = 44100
    assert audio.length_in_seconds == 0.5


def test_summary_contents():
    text = _stereo().summary()
    lines = text.splitlines()
    assert lines[0] == lines[-1]
    assert "Num Channels: 2" in lines
    assert "Num Samples Per Channel: 4" in lines
    assert "Bit Depth: 16" in lines


def test_set_audio_buffer_errors():
    audio = AudioFile()
    with pytest.raises(ValueError):
        audio.set_audio_buffer([])
    with pytest.raises(ValueError):
        audio.set_audio_buffer([[0.0], [0.0, 1.0]])


def test_set_audio_buffer_copies():
    source = [[0.1, 0.2]]
    audio = AudioFile()
    audio.set_audio_buffer(source)
    source[0][0] = 0.9
    assert audio.samples == [[0.1, 0.2]]


def test_set_num_samples_pads_and_truncates():
    audio = AudioFile()
    audio.set_audio_buffer([[0.5, 0.5], [0.25, 0.25]])
    audio.set_num_samples_per_channel(4)
    assert audio.samples == [[0.5, 0.5, 0.0, 0.0], [0.25, 0.25, 0.0, 0.0]]
    audio.set_num_samples_per_channel(1)
    assert audio.samples == [[0.5], [0.25]]


def test_set_num_channels_adds_silence():
    audio = AudioFile()
    audio.set_audio_buffer([[0.5, -0.5, 0.25]])
    audio.set_num_channels(3)
    assert audio.num_channels == 3
    assert audio.samples[2] == [0.0, 0.0, 0.0]
    audio.set_num_channels(1)
    assert audio.samples == [[0.5, -0.5, 0.25]]


def test_set_buffer_size():
    audio = AudioFile()
    audio.set_audio_buffer([[0.5]])
    audio.set_buffer_size(2, 3)
    assert audio.samples == [[0.5, 0.0, 0.0], [0.0, 0.0, 0.0]]
    with pytest.raises(ValueError):
        audio.set_buffer_size(-1, 3)