"""A small 2D game engine: camera, input, timing, sprite batching, PNG decoding and sample-game entities."""

__version__ = "0.1.0"