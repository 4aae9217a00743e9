"""A compact PNG decoder producing raw or 32-bit RGBA pixels."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from .errors import DecodeError
from .inflate import decompress

PNG_SIGNATURE = bytes((137, 80, 78, 71, 13, 10, 26, 10))

_HEADER_END = 33  # first byte after the signature and the IHDR chunk
_MAX_CHUNK_LENGTH = 2147483647

_VALID_BIT_DEPTHS = {
    0: (1, 2, 4, 8, 16),
    2: (8, 16),
    3: (1, 2, 4, 8),
    4: (8, 16),
    6: (8, 16),
}

# (left, top, step x, step y) of the seven Adam7 passes.
_ADAM7_PASSES = (
    (0, 0, 8, 8),
    (4, 0, 8, 8),
    (0, 4, 4, 8),
    (2, 0, 4, 4),
    (0, 2, 2, 4),
    (1, 0, 2, 2),
    (0, 1, 1, 2),
)


@dataclass
class PngInfo:
    """Header fields and colour information of a PNG image."""

    width: int = 0
    height: int = 0
    color_type: int = 0
    bit_depth: int = 0
    compression_method: int = 0
    filter_method: int = 0
    interlace_method: int = 0
    key: tuple[int, int, int] | None = None
    palette: bytearray = field(default_factory=bytearray)

    @property
    def bits_per_pixel(self) -> int:
        if self.color_type == 2:
            return 3 * self.bit_depth
        if self.color_type >= 4:
            return (self.color_type - 2) * self.bit_depth
        return self.bit_depth


@dataclass(frozen=True)
class DecodedImage:
    """Decoded pixel data with the image size and header information."""

    pixels: bytes
    width: int
    height: int
    info: PngInfo


def _read_u32(data: bytes, pos: int) -> int:
    return int.from_bytes(data[pos:pos + 4], "big")


def _read_header(data: bytes) -> PngInfo:
    if len(data) < 29:
        raise DecodeError(27, "data is smaller than a PNG header")
    if data[:8] != PNG_SIGNATURE:
        raise DecodeError(28, "missing PNG signature")
    if data[12:16] != b"IHDR":
        raise DecodeError(29, "first chunk is not IHDR")
    info = PngInfo(
        width=_read_u32(data, 16),
        height=_read_u32(data, 20),
        bit_depth=data[24],
        color_type=data[25],
        compression_method=data[26],
        filter_method=data[27],
        interlace_method=data[28],
    )
    if info.compression_method != 0:
        raise DecodeError(32, "unsupported compression method")
    if info.filter_method != 0:
        raise DecodeError(33, "unsupported filter method")
    if info.interlace_method > 1:
        raise DecodeError(34, "unsupported interlace method")
    depths = _VALID_BIT_DEPTHS.get(info.color_type)
    if depths is None:
        raise DecodeError(31, "invalid colour type")
    if info.bit_depth not in depths:
        raise DecodeError(37, "invalid bit depth for colour type")
    return info


def _read_transparency(payload: bytes, info: PngInfo) -> None:
    if info.color_type == 3:
        if 4 * len(payload) > len(info.palette):
            raise DecodeError(39, "more alpha values than palette entries")
        for index, alpha in enumerate(payload):
            info.palette[4 * index + 3] = alpha
    elif info.color_type == 0:
        if len(payload) != 2:
            raise DecodeError(40, "greyscale tRNS chunk must be 2 bytes")
        value = int.from_bytes(payload, "big")
        info.key = (value, value, value)
    elif info.color_type == 2:
        if len(payload) != 6:
            raise DecodeError(41, "RGB tRNS chunk must be 6 bytes")
        info.key = (
            int.from_bytes(payload[0:2], "big"),
            int.from_bytes(payload[2:4], "big"),
            int.from_bytes(payload[4:6], "big"),
        )
    else:
        raise DecodeError(42, "tRNS chunk not allowed for this colour type")


def _read_chunks(data: bytes, info: PngInfo) -> bytes:
    """Walk the chunks up to IEND, filling ``info`` and returning the IDAT data."""
    size = len(data)
    pos = _HEADER_END
    idat = bytearray()
    while True:
        if pos + 8 >= size:
            raise DecodeError(30, "data too small to contain the next chunk")
        length = _read_u32(data, pos)
        pos += 4
        if length > _MAX_CHUNK_LENGTH:
            raise DecodeError(63, "chunk length too large")
        if pos + length >= size:
            raise DecodeError(35, "data too small to contain the chunk")
        kind = data[pos:pos + 4]
        payload = data[pos + 4:pos + 4 + length]
        if len(payload) < length:
            raise DecodeError(35, "data too small to contain the chunk")
        if kind == b"IDAT":
            idat += payload
        elif kind == b"IEND":
            return bytes(idat)
        elif kind == b"PLTE":
            entries = length // 3
            if entries > 256:
                raise DecodeError(38, "palette too big")
            info.palette = bytearray()
            for index in range(entries):
                info.palette += payload[3 * index:3 * index + 3]
                info.palette.append(255)
        elif kind == b"tRNS":
            _read_transparency(payload, info)
        elif not kind[0] & 32:
            raise DecodeError(69, f"unknown critical chunk {kind!r}")
        pos += 4 + length + 4  # type, data and the ignored CRC


def _paeth(a: int, b: int, c: int) -> int:
    p = a + b - c
    pa, pb, pc = abs(p - a), abs(p - b), abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    return b if pb <= pc else c


def _unfilter(
    scanline: bytes, previous: bytes | None, bytewidth: int, filter_type: int
) -> bytearray:
    """Undo the PNG filter of one scanline."""
    recon = bytearray(scanline)
    if filter_type == 0:
        return recon
    length = len(recon)
    if filter_type == 1:
        for i in range(bytewidth, length):
            recon[i] = (recon[i] + recon[i - bytewidth]) & 255
    elif filter_type == 2:
        if previous is not None:
            for i in range(length):
                recon[i] = (recon[i] + previous[i]) & 255
    elif filter_type == 3:
        for i in range(length):
            left = recon[i - bytewidth] if i >= bytewidth else 0
            up = previous[i] if previous is not None else 0
            recon[i] = (recon[i] + (left + up) // 2) & 255
    elif filter_type == 4:
        for i in range(length):
            left = recon[i - bytewidth] if i >= bytewidth else 0
            up = previous[i] if previous is not None else 0
            up_left = previous[i - bytewidth] if previous is not None and i >= bytewidth else 0
            recon[i] = (recon[i] + _paeth(left, up, up_left)) & 255
    else:
        raise DecodeError(36, f"invalid filter type {filter_type}")
    return recon


def _get_bit(buffer: bytes, bit_pos: int) -> int:
    return (buffer[bit_pos >> 3] >> (7 - (bit_pos & 7))) & 1


def _set_bit(buffer: bytearray, bit_pos: int, bit: int) -> None:
    if bit:
        buffer[bit_pos >> 3] |= 1 << (7 - (bit_pos & 7))


def _require(scanlines: bytes, needed: int) -> None:
    if len(scanlines) < needed:
        raise DecodeError(91, "decompressed image data is too small")


def _decode_progressive(scanlines: bytes, info: PngInfo) -> bytearray:
    width, height, bpp = info.width, info.height, info.bits_per_pixel
    bytewidth = (bpp + 7) // 8
    line_length = (width * bpp + 7) // 8
    _require(scanlines, height * (1 + line_length))
    out = bytearray((height * width * bpp + 7) // 8)
    previous: bytearray | None = None
    out_bit = 0
    for y in range(height):
        start = y * (1 + line_length)
        row = _unfilter(
            scanlines[start + 1:start + 1 + line_length], previous, bytewidth, scanlines[start]
        )
        if bpp >= 8:
            out[y * line_length:(y + 1) * line_length] = row
        else:
            for bit_pos in range(width * bpp):
                _set_bit(out, out_bit, _get_bit(row, bit_pos))
                out_bit += 1
        previous = row
    return out


def _decode_adam7(scanlines: bytes, info: PngInfo) -> bytearray:
    width, height, bpp = info.width, info.height, info.bits_per_pixel
    bytewidth = (bpp + 7) // 8
    out = bytearray((height * width * bpp + 7) // 8)
    start = 0
    for left, top, step_x, step_y in _ADAM7_PASSES:
        pass_w = (width + step_x - 1 - left) // step_x
        pass_h = (height + step_y - 1 - top) // step_y
        if pass_w == 0 or pass_h == 0:
            continue
        line_length = (pass_w * bpp + 7) // 8
        _require(scanlines, start + pass_h * (1 + line_length))
        previous: bytearray | None = None
        for y in range(pass_h):
            offset = start + y * (1 + line_length)
            row = _unfilter(
                scanlines[offset + 1:offset + 1 + line_length],
                previous,
                bytewidth,
                scanlines[offset],
            )
            out_y = top + step_y * y
            for i in range(pass_w):
                out_x = left + step_x * i
                if bpp >= 8:
                    target = bytewidth * (width * out_y + out_x)
                    out[target:target + bytewidth] = row[bytewidth * i:bytewidth * (i + 1)]
                else:
                    out_bit = bpp * (width * out_y + out_x)
                    for b in range(bpp):
                        _set_bit(out, out_bit + b, _get_bit(row, i * bpp + b))
            previous = row
        start += pass_h * (1 + line_length)
    return out


def _packed_samples(raw: bytes, bit_depth: int, count: int) -> Iterator[int]:
    bit_pos = 0
    for _ in range(count):
        value = 0
        for _ in range(bit_depth):
            value = (value << 1) | _get_bit(raw, bit_pos)
            bit_pos += 1
        yield value


def _palette_entry(palette: bytearray, index: int, code: int) -> bytes:
    if 4 * index >= len(palette):
        raise DecodeError(code, f"palette index {index} out of range")
    return bytes(palette[4 * index:4 * index + 4])


def _to_rgba(raw: bytes, info: PngInfo) -> bytes:
    """Convert raw pixels of any colour type to 8-bit RGBA."""
    count = info.width * info.height
    depth, color_type, key = info.bit_depth, info.color_type, info.key
    out = bytearray(4 * count)

    def put(i: int, r: int, g: int, b: int, a: int) -> None:
        out[4 * i:4 * i + 4] = bytes((r, g, b, a))

    if depth == 8 and color_type == 0:
        for i in range(count):
            v = raw[i]
            put(i, v, v, v, 0 if key and v == key[0] else 255)
    elif depth == 8 and color_type == 2:
        for i in range(count):
            r, g, b = raw[3 * i:3 * i + 3]
            put(i, r, g, b, 0 if key and (r, g, b) == key else 255)
    elif depth == 8 and color_type == 3:
        for i in range(count):
            out[4 * i:4 * i + 4] = _palette_entry(info.palette, raw[i], 46)
    elif depth == 8 and color_type == 4:
        for i in range(count):
            v = raw[2 * i]
            put(i, v, v, v, raw[2 * i + 1])
    elif depth == 8 and color_type == 6:
        out[:] = raw[:4 * count]
    elif depth == 16 and color_type == 0:
        for i in range(count):
            sample = (raw[2 * i] << 8) | raw[2 * i + 1]
            v = raw[2 * i]
            put(i, v, v, v, 0 if key and sample == key[0] else 255)
    elif depth == 16 and color_type == 2:
        for i in range(count):
            base = 6 * i
            samples = tuple((raw[base + 2 * c] << 8) | raw[base + 2 * c + 1] for c in range(3))
            put(i, raw[base], raw[base + 2], raw[base + 4], 0 if key and samples == key else 255)
    elif depth == 16 and color_type == 4:
        for i in range(count):
            v = raw[4 * i]
            put(i, v, v, v, raw[4 * i + 2])
    elif depth == 16 and color_type == 6:
        for i in range(count):
            base = 8 * i
            put(i, raw[base], raw[base + 2], raw[base + 4], raw[base + 6])
    elif color_type == 0:
        max_value = (1 << depth) - 1
        for i, sample in enumerate(_packed_samples(raw, depth, count)):
            v = sample * 255 // max_value
            put(i, v, v, v, 0 if key and sample == key[0] else 255)
    elif color_type == 3:
        for i, index in enumerate(_packed_samples(raw, depth, count)):
            out[4 * i:4 * i + 4] = _palette_entry(info.palette, index, 47)
    return bytes(out)


def decode_png(data: bytes, convert_to_rgba32: bool = True) -> DecodedImage:
    """Decode a PNG file held in memory.

    With ``convert_to_rgba32`` the pixels are 8-bit RGBA whatever the image's
    colour type; otherwise they are returned in the image's own format.
    Raises DecodeError on malformed input.
    """
    data = bytes(data)
    if not data:
        raise DecodeError(48, "the given data is empty")
    info = _read_header(data)
    idat = _read_chunks(data, info)
    scanlines = decompress(idat)
    if info.interlace_method == 0:
        raw = _decode_progressive(scanlines, info)
    else:
        raw = _decode_adam7(scanlines, info)
    needs_conversion = info.color_type != 6 or info.bit_depth != 8
    pixels = _to_rgba(raw, info) if convert_to_rgba32 and needs_conversion else bytes(raw)
    return DecodedImage(pixels=pixels, width=info.width, height=info.height, info=info)