"""Vertex, colour and texture value types."""

from dataclasses import dataclass, field, fields


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class UV:
    u: float = 0.0
    v: float = 0.0


@dataclass(frozen=True)
class ColorRGBA8:
    """An 8-bit-per-channel RGBA colour."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def __post_init__(self) -> None:
        for channel in fields(self):
            value = getattr(self, channel.name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"colour channel {channel.name} must be an int in 0..255, got {value!r}")


@dataclass(frozen=True)
class Vertex:
    """A textured, coloured 2D vertex."""

    position: Position = field(default_factory=Position)
    color: ColorRGBA8 = field(default_factory=ColorRGBA8)
    uv: UV = field(default_factory=UV)


@dataclass(frozen=True)
class Texture:
    """A loaded texture: its handle and size in pixels."""

    id: int = 0
    width: int = 0
    height: int = 0