[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rekat"
version = "0.1.0"
description = "WAV/AIFF audio file reading and writing, simple sine-tone synthesis, melody state files and FFT table helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "wav", "aiff", "synthesis", "fft", "pcm"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rekat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
