# filename: huffman_container.py
"""Persisted container layout.

    [4 bytes]  magic DE C0 EF BE
    [8 bytes]  original payload length, uint64 LE
    [8 bytes]  frequency-table entry count N, uint64 LE
    N times:   [1 byte] symbol, [8 bytes] count uint64 LE
    [rest]     packed bit payload, MSB first per byte
"""

import logging
import struct
from dataclasses import dataclass

from huffman_errors import InvalidMagicError, TruncatedOrMalformedTableError

logger = logging.getLogger(__name__)

MAGIC = b"\xde\xc0\xef\xbe"
WORD = struct.Struct("<Q")
ENTRY = struct.Struct("<BQ")
HEADER_SIZE = len(MAGIC) + WORD.size
MAX_SYMBOLS = 256


@dataclass(frozen=True)
class Container:
    original_length: int
    frequencies: dict
    payload: bytes


def table_size(freqs):
    """Serialized size in bytes of a frequency table."""
    return WORD.size + len(freqs) * ENTRY.size


def write_header(out, original_length):
    out += MAGIC
    out += WORD.pack(original_length)


def read_header(buf):
    """Validate the magic and return the original payload length."""
    if bytes(buf[:len(MAGIC)]) != MAGIC:
        raise InvalidMagicError("input is not a huffpack container")
    if len(buf) < HEADER_SIZE:
        raise TruncatedOrMalformedTableError("container header is truncated")
    (original_length,) = WORD.unpack_from(buf, len(MAGIC))
    return original_length


def save_frequency_table(out, freqs):
    out += WORD.pack(len(freqs))
    for symbol in sorted(freqs):
        out += ENTRY.pack(symbol, freqs[symbol])


def load_frequency_table(buf, offset=0):
    """Parse a table written by save_frequency_table.

    Returns ``(freqs, offset_after_table)``. The declared entry count is
    checked against the remaining buffer before any entry is read.
    """
    if len(buf) - offset < WORD.size:
        raise TruncatedOrMalformedTableError("frequency table size is truncated")
    (count,) = WORD.unpack_from(buf, offset)
    offset += WORD.size

    if count == 0 or count > MAX_SYMBOLS:
        raise TruncatedOrMalformedTableError(f"invalid frequency table size {count}")
    if count * ENTRY.size > len(buf) - offset:
        raise TruncatedOrMalformedTableError(
            f"frequency table declares {count} entries but only "
            f"{len(buf) - offset} bytes remain"
        )

    freqs = {}
    for _ in range(count):
        symbol, frequency = ENTRY.unpack_from(buf, offset)
        offset += ENTRY.size
        if symbol in freqs:
            raise TruncatedOrMalformedTableError(f"symbol {symbol} appears twice")
        if frequency == 0:
            raise TruncatedOrMalformedTableError(f"symbol {symbol} has a zero count")
        freqs[symbol] = frequency
    return freqs, offset


def unpack_container(buf):
    original_length = read_header(buf)
    freqs, offset = load_frequency_table(buf, HEADER_SIZE)
    total = sum(freqs.values())
    if total != original_length:
        raise TruncatedOrMalformedTableError(
            f"counts sum to {total} but the header declares {original_length} bytes"
        )
    logger.debug(
        "container: %d symbols, %d bytes, payload %d bytes",
        len(freqs), original_length, len(buf) - offset,
    )
    return Container(original_length, freqs, bytes(buf[offset:]))
