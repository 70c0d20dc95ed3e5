# rekat

A small audio toolkit with no dependencies outside the standard library:

- read and write **WAV** and **AIFF** audio (8, 16, 24 and 32 bit);
- render simple sine-tone melodies from pitches, intensities and lengths;
- store and reload melody state files;
- bit-reversal helpers and precomputed tables for radix-2 Fourier transforms.

## Installation

```
pip install .
```

## Reading and writing audio

```python
from rekat.audiofile import AudioFile
from rekat.chunks import AudioFileFormat

audio = AudioFile("input.wav")
print(audio.summary())
print(audio.num_channels, audio.num_samples_per_channel, audio.length_in_seconds)

audio.set_num_channels(2)
audio.save("output.aif", AudioFileFormat.AIFF)
```

`num_channels`, `num_samples_per_channel`, `is_mono`, `is_stereo` and
`length_in_seconds` are properties. Samples live in `audio.samples[channel][index]`;
`sample_rate`, `bit_depth` and `ixml` are plain attributes used when saving.
The buffer can be reshaped with `set_audio_buffer`, `set_buffer_size`,
`set_num_samples_per_channel` and `set_num_channels`; new samples are zero.

`load` raises `OSError` when the file cannot be read and
`rekat.chunks.AudioFileError` when its contents cannot be decoded.
`load_from_memory` and `to_bytes` work on bytes instead of files.

WAV files are written as integer PCM, except 32-bit audio, which is written as
IEEE floats. AIFF files are always written as integers, and only at the sample
rates the AIFF table knows (8000 Hz to 5644800 Hz, including 44100 and 48000).
Reading accepts WAV files with 1 to 128 channels and AIFF/AIFF-C files with 1 or 2.

The codecs can be used directly:

```python
from rekat.wave import encode_wave, decode_wave

data = encode_wave([[0.0, 0.5, -0.5]], 44100, 16, "")
decoded = decode_wave(data)   # DecodedAudio(channels, sample_rate, bit_depth, ixml)
```

`rekat.aiff` offers `encode_aiff` and `decode_aiff` in the same shape, and
`rekat.samples` holds the per-sample conversions.

## Rendering tones

```python
from rekat.tone import render

# pitches in semitones from A440, intensities out of 65536,
# lengths in sixteenths of a beat: note, pause, note, ...
samples = render([0, 3], [32768, 32768], [4, 2, 4], 120, 44100)
```

Each frame uses two entries of `lengths`, the note and the pause after it; the
pause after the last frame is not rendered, so `2 * frames - 1` entries are needed.

## Melody state files

```python
from rekat.state import State

state = State("song.xdg", 0)
state.add_frame(0, 30000, 2, 4)     # frequency, intensity, pause, length
state.save("song.xdg", True)        # True overwrites an existing file
print(state)
```

`save` raises `FileExistsError` for an existing file unless forced, and `load`
raises `FileNotFoundError` when the file is missing.

## FFT helpers

```python
from rekat.fft import next_power_of_two, bit_reverse_order, FastFourierTransform

next_power_of_two(100)              # 128
bit_reverse_order([0, 1, 2, 3])     # [0, 2, 1, 3]
tables = FastFourierTransform(1024)
```

`FastFourierTransform` takes one to three sizes, rounds each down to a power of
two, and holds the twiddle factors and bit-reversal tables for them.

## What it does not do

The package does not play audio, open sound devices or mix sources, and
`FastFourierTransform` only prepares tables; it does not compute transforms.
There is no command-line program.

## Running the tests

```
pip install .[test]
pytest
```