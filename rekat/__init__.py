"""WAV and AIFF audio reading and writing, sine-tone synthesis, melody state files and FFT tables."""

__version__ = "0.1.0"