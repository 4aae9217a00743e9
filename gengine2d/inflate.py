"""DEFLATE and zlib stream decompression."""

from functools import cache

from .errors import DecodeError

_LENGTH_BASE = (
    3, 4, 5, 6, 7, 8, 9, 10, 11, 13, 15, 17, 19, 23, 27, 31,
    35, 43, 51, 59, 67, 83, 99, 115, 131, 163, 195, 227, 258,
)
_LENGTH_EXTRA = (
    0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 2, 2, 2, 2,
    3, 3, 3, 3, 4, 4, 4, 4, 5, 5, 5, 5, 0,
)
_DIST_BASE = (
    1, 2, 3, 4, 5, 7, 9, 13, 17, 25, 33, 49, 65, 97, 129, 193,
    257, 385, 513, 769, 1025, 1537, 2049, 3073, 4097, 6145, 8193, 12289, 16385, 24577,
)
_DIST_EXTRA = (
    0, 0, 0, 0, 1, 1, 2, 2, 3, 3, 4, 4, 5, 5, 6, 6,
    7, 7, 8, 8, 9, 9, 10, 10, 11, 11, 12, 12, 13, 13,
)
# Order in which code length code lengths are stored.
_CODE_LENGTH_ORDER = (16, 17, 18, 0, 8, 7, 9, 6, 10, 5, 11, 4, 12, 3, 13, 2, 14, 1, 15)

_UNFILLED = 32767
_END_OF_BLOCK = 256


class _HuffmanTree:
    """A Huffman code tree stored as pairs of child slots."""

    def __init__(self, lengths: list[int], max_bit_len: int) -> None:
        num_codes = len(lengths)
        bl_count = [0] * (max_bit_len + 1)
        for length in lengths:
            bl_count[length] += 1
        next_code = [0] * (max_bit_len + 1)
        for bits in range(1, max_bit_len + 1):
            next_code[bits] = (next_code[bits - 1] + bl_count[bits - 1]) << 1
        codes = [0] * num_codes
        for symbol, length in enumerate(lengths):
            if length:
                codes[symbol] = next_code[length]
                next_code[length] += 1

        tree = [_UNFILLED] * (num_codes * 2)
        tree_pos = 0
        nodes_filled = 0
        for symbol, (code, length) in enumerate(zip(codes, lengths)):
            for i in range(length):
                bit = (code >> (length - i - 1)) & 1
                if tree_pos > num_codes - 2:
                    raise DecodeError(55, "invalid Huffman code lengths")
                slot = 2 * tree_pos + bit
                if tree[slot] == _UNFILLED:
                    if i + 1 == length:
                        tree[slot] = symbol
                        tree_pos = 0
                    else:
                        nodes_filled += 1
                        tree[slot] = nodes_filled + num_codes
                        tree_pos = nodes_filled
                else:
                    tree_pos = tree[slot] - num_codes
        self._tree = tree
        self._num_codes = num_codes

    def step(self, tree_pos: int, bit: int) -> tuple[int | None, int]:
        """Follow one bit; return (symbol or None, next tree position)."""
        if tree_pos >= self._num_codes:
            raise DecodeError(11, "walked outside the Huffman code tree")
        result = self._tree[2 * tree_pos + bit]
        if result < self._num_codes:
            return result, 0
        return None, result - self._num_codes


@cache
def _fixed_trees() -> tuple[_HuffmanTree, _HuffmanTree]:
    lengths = [8] * 144 + [9] * 112 + [7] * 24 + [8] * 8
    return _HuffmanTree(lengths, 15), _HuffmanTree([5] * 32, 15)


class _Inflator:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._size = len(data)
        self._bp = 0
        self._out = bytearray()

    def _read_bit(self) -> int:
        index = self._bp >> 3
        if index >= self._size:
            raise DecodeError(52, "bit pointer jumps past the end of the data")
        bit = (self._data[index] >> (self._bp & 7)) & 1
        self._bp += 1
        return bit

    def _read_bits(self, count: int) -> int:
        result = 0
        for i in range(count):
            result |= self._read_bit() << i
        return result

    def _past_end(self) -> bool:
        return (self._bp >> 3) >= self._size

    def run(self) -> bytes:
        final = 0
        while not final:
            if self._past_end():
                raise DecodeError(52, "bit pointer jumps past the end of the data")
            final = self._read_bit()
            block_type = self._read_bit() + 2 * self._read_bit()
            if block_type == 3:
                raise DecodeError(20, "invalid block type")
            if block_type == 0:
                self._inflate_stored()
            else:
                self._inflate_huffman(block_type)
        return bytes(self._out)

    def _decode_symbol(self, tree: _HuffmanTree) -> int:
        tree_pos = 0
        while True:
            if self._past_end():
                raise DecodeError(10, "end of data reached without an end code")
            symbol, tree_pos = tree.step(tree_pos, self._read_bit())
            if symbol is not None:
                return symbol

    def _read_dynamic_trees(self) -> tuple[_HuffmanTree, _HuffmanTree]:
        if self._past_end():
            raise DecodeError(49, "bit pointer jumps past the end of the data")
        hlit = self._read_bits(5) + 257
        hdist = self._read_bits(5) + 1
        hclen = self._read_bits(4) + 4

        code_length_lengths = [0] * 19
        for i, symbol in enumerate(_CODE_LENGTH_ORDER):
            code_length_lengths[symbol] = self._read_bits(3) if i < hclen else 0
        code_length_tree = _HuffmanTree(code_length_lengths, 7)

        total = hlit + hdist
        lengths: list[int] = []

        def repeat(value: int, count: int, overflow_code: int) -> None:
            for _ in range(count):
                if len(lengths) >= total:
                    raise DecodeError(overflow_code, "too many code lengths")
                lengths.append(value)

        while len(lengths) < total:
            code = self._decode_symbol(code_length_tree)
            if code <= 15:
                lengths.append(code)
                continue
            if self._past_end():
                raise DecodeError(50, "bit pointer jumps past the end of the data")
            if code == 16:
                count = 3 + self._read_bits(2)
                if not lengths:
                    raise DecodeError(54, "repeat code with no previous length")
                repeat(lengths[-1], count, 13)
            elif code == 17:
                repeat(0, 3 + self._read_bits(3), 14)
            elif code == 18:
                repeat(0, 11 + self._read_bits(7), 15)
            else:
                raise DecodeError(16, "invalid code length code")

        literal_lengths = lengths[:hlit] + [0] * (288 - hlit)
        distance_lengths = lengths[hlit:] + [0] * (32 - hdist)
        if literal_lengths[_END_OF_BLOCK] == 0:
            raise DecodeError(64, "end code has zero length")
        return _HuffmanTree(literal_lengths, 15), _HuffmanTree(distance_lengths, 15)

    def _inflate_huffman(self, block_type: int) -> None:
        if block_type == 1:
            literal_tree, distance_tree = _fixed_trees()
        else:
            literal_tree, distance_tree = self._read_dynamic_trees()
        out = self._out
        while True:
            code = self._decode_symbol(literal_tree)
            if code == _END_OF_BLOCK:
                return
            if code < _END_OF_BLOCK:
                out.append(code)
            elif 257 <= code <= 285:
                if self._past_end():
                    raise DecodeError(51, "bit pointer jumps past the end of the data")
                length = _LENGTH_BASE[code - 257] + self._read_bits(_LENGTH_EXTRA[code - 257])
                distance_code = self._decode_symbol(distance_tree)
                if distance_code > 29:
                    raise DecodeError(18, "invalid distance code")
                if self._past_end():
                    raise DecodeError(51, "bit pointer jumps past the end of the data")
                distance = _DIST_BASE[distance_code] + self._read_bits(_DIST_EXTRA[distance_code])
                if distance > len(out):
                    raise DecodeError(52, "back-reference reaches before the start of the output")
                for _ in range(length):
                    out.append(out[-distance])

    def _inflate_stored(self) -> None:
        self._bp = (self._bp + 7) & ~7
        p = self._bp >> 3
        if p + 4 > self._size:
            raise DecodeError(52, "bit pointer jumps past the end of the data")
        data = self._data
        length = data[p] + 256 * data[p + 1]
        inverse = data[p + 2] + 256 * data[p + 3]
        p += 4
        if length + inverse != 65535:
            raise DecodeError(21, "NLEN is not the one's complement of LEN")
        if p + length > self._size:
            raise DecodeError(23, "stored block reads past the end of the data")
        self._out.extend(data[p:p + length])
        self._bp = (p + length) * 8


def inflate(data: bytes) -> bytes:
    """Decompress a raw DEFLATE stream."""
    return _Inflator(bytes(data)).run()


def decompress(data: bytes) -> bytes:
    """Decompress a zlib stream; the Adler-32 checksum is not verified."""
    data = bytes(data)
    if len(data) < 2:
        raise DecodeError(53, "zlib data too small")
    if (data[0] * 256 + data[1]) % 31 != 0:
        raise DecodeError(24, "invalid zlib header check value")
    method = data[0] & 15
    window_info = (data[0] >> 4) & 15
    preset_dict = (data[1] >> 5) & 1
    if method != 8 or window_info > 7:
        raise DecodeError(25, "unsupported zlib compression method")
    if preset_dict:
        raise DecodeError(26, "preset dictionaries are not allowed")
    return inflate(data[2:])