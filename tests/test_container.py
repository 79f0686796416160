import pytest

from huffman_container import (
    ENTRY,
    HEADER_SIZE,
    MAGIC,
    WORD,
    load_frequency_table,
    read_header,
    save_frequency_table,
    table_size,
    unpack_container,
    write_header,
)
from huffman_errors import InvalidMagicError, TruncatedOrMalformedTableError


def _container(original_length, entries, payload=b"\x00"):
    buf = bytearray(MAGIC)
    buf += WORD.pack(original_length)
    buf += WORD.pack(len(entries))
    for symbol, count in entries:
        buf += ENTRY.pack(symbol, count)
    return bytes(buf + payload)


def test_magic_is_fixed_bytes():
    assert MAGIC == bytes([0xDE, 0xC0, 0xEF, 0xBE])
    assert HEADER_SIZE == 12


def test_header_layout_little_endian():
    out = bytearray()
    write_header(out, 0x0102)
    assert out == MAGIC + b"\x02\x01" + b"\x00" * 6
    assert read_header(out) == 0x0102


def test_table_layout_sorted_by_symbol():
    out = bytearray()
    save_frequency_table(out, {0x62: 3, 0x61: 1})
    assert out == (
        b"\x02" + b"\x00" * 7
        + b"\x61" + b"\x01" + b"\x00" * 7
        + b"\x62" + b"\x03" + b"\x00" * 7
    )
    assert len(out) == table_size({0x62: 3, 0x61: 1}) == 26


def test_load_is_inverse_of_save():
    freqs = {s: s * 1000 + 1 for s in range(0, 256, 3)}
    out = bytearray(b"junk")
    save_frequency_table(out, freqs)
    loaded, offset = load_frequency_table(out, 4)
    assert loaded == freqs
    assert offset == len(out)


@pytest.mark.parametrize("buf", [b"", b"\xde\xc0", b"XXXX" + b"\x00" * 40, b"\xbe\xef\xc0\xde" + b"\x00" * 40])
def test_bad_magic(buf):
    with pytest.raises(InvalidMagicError):
        read_header(buf)


def test_header_truncated_after_magic():
    with pytest.raises(TruncatedOrMalformedTableError):
        read_header(MAGIC + b"\x01\x00")


def test_table_size_field_truncated():
    with pytest.raises(TruncatedOrMalformedTableError):
        load_frequency_table(b"\x01\x00\x00")


@pytest.mark.parametrize("count", [0, 257, 2 ** 63])
def test_table_size_out_of_range(count):
    with pytest.raises(TruncatedOrMalformedTableError):
        load_frequency_table(WORD.pack(count) + b"\x00" * 64)


def test_declared_entries_exceed_buffer():
    buf = WORD.pack(10) + ENTRY.pack(1, 1) + ENTRY.pack(2, 1)
    with pytest.raises(TruncatedOrMalformedTableError):
        load_frequency_table(buf)


def test_duplicate_symbol_rejected():
    buf = WORD.pack(2) + ENTRY.pack(7, 1) + ENTRY.pack(7, 2)
    with pytest.raises(TruncatedOrMalformedTableError):
        load_frequency_table(buf)


def test_zero_count_rejected():
    buf = WORD.pack(2) + ENTRY.pack(7, 1) + ENTRY.pack(8, 0)
    with pytest.raises(TruncatedOrMalformedTableError):
        load_frequency_table(buf)


def test_unpack_container():
    container = unpack_container(_container(5, [(0x61, 2), (0x62, 3)], b"\x12\x34"))
    assert container.original_length == 5
    assert container.frequencies == {0x61: 2, 0x62: 3}
    assert container.payload == b"\x12\x34"


def test_counts_must_match_original_length():
    with pytest.raises(TruncatedOrMalformedTableError):
        unpack_container(_container(6, [(0x61, 2), (0x62, 3)]))
