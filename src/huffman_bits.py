# filename: huffman_bits.py

from bitarray import bitarray

from huffman_errors import TruncatedPayloadError

BITS_PER_BYTE = 8


class BitWriter:
    """Accumulates bits and appends them to ``out`` one whole byte at a time.

    Bits are placed most-significant first within each byte. ``flush_to_byte``
    zero-pads a trailing partial byte.
    """

    def __init__(self, out=None):
        self.out = out if out is not None else bytearray()
        self.bits_written = 0
        self._pending = bitarray(endian="big")

    def write_bit(self, bit):
        self._pending.append(1 if bit else 0)
        self.bits_written += 1
        if len(self._pending) == BITS_PER_BYTE:
            self._drain()

    def write_code(self, code):
        self._pending.extend(code)
        self.bits_written += len(code)
        self._drain()

    def write_symbols(self, codes, symbols):
        """Append the code of every symbol, ``codes`` mapping symbol -> bitarray."""
        before = len(self._pending)
        self._pending.encode(codes, symbols)
        self.bits_written += len(self._pending) - before
        self._drain()

    def flush_to_byte(self):
        if self._pending:
            self._pending.fill()
            self.out += self._pending.tobytes()
            self._pending.clear()

    def getvalue(self):
        self.flush_to_byte()
        return bytes(self.out)

    def _drain(self):
        whole = len(self._pending) - len(self._pending) % BITS_PER_BYTE
        if whole:
            self.out += self._pending[:whole].tobytes()
            del self._pending[:whole]


class BitReader:
    """Reads bits most-significant first, loading one payload byte per refill.

    Never reads past the end of ``data``: running out of bytes raises
    TruncatedPayloadError.
    """

    def __init__(self, data, offset=0):
        self._data = memoryview(data)
        self._pos = offset
        self._byte = bitarray(endian="big")
        self._bit = BITS_PER_BYTE
        self.bits_read = 0

    def refill(self):
        if self._pos >= len(self._data):
            raise TruncatedPayloadError(f"payload ended after {self.bits_read} bits")
        self._byte = bitarray(endian="big")
        self._byte.frombytes(self._data[self._pos:self._pos + 1].tobytes())
        self._pos += 1
        self._bit = 0

    def read_bit(self):
        if self._bit >= BITS_PER_BYTE:
            self.refill()
        bit = self._byte[self._bit]
        self._bit += 1
        self.bits_read += 1
        return bit

    @property
    def position(self):
        return self._pos
