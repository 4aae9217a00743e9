[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gengine2d"
version = "0.1.0"
description = "A small 2D game engine: camera, input, timing, sprite batching, particles, PNG decoding, fonts, sound, windows and game states, with entities of three sample games."
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = [
    "game",
    "engine",
    "2d",
    "sprite",
    "camera",
    "particles",
    "png",
    "inflate",
    "platformer",
    "shooter",
]
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
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gengine2d"]

[tool.pytest.ini_options]
addopts = "-ra"
