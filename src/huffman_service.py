# filename: huffman_service.py

import logging
from dataclasses import dataclass
from typing import Optional

from huffman_bits import BitReader, BitWriter
from huffman_container import save_frequency_table, table_size, unpack_container, write_header
from huffman_core import HuffmanLogic, is_leaf
from huffman_errors import (
    EmptyInputError,
    FileOpenFailureError,
    HuffmanError,
    TableTooLargeForPayloadError,
    TruncatedPayloadError,
)

logger = logging.getLogger(__name__)

COMPRESSED_SUFFIX = ".huf"


@dataclass(frozen=True)
class CodecOptions:
    # Refuse inputs whose frequency table alone is larger than the input.
    reject_if_overhead_exceeds_payload: bool = True


@dataclass(frozen=True)
class CodecResult:
    data: Optional[bytes] = None
    error: Optional[HuffmanError] = None

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        if self.error is not None:
            raise self.error
        return self.data


class HuffmanService:
    """Compresses byte buffers into self-describing Huffman containers.

    ``compress``/``decompress`` raise a HuffmanError subclass on failure.
    The file helpers keep the last input and output in ``in_buffer`` and
    ``out_buffer`` and report success as a bool.
    """

    def __init__(self, options=None):
        self.logic = HuffmanLogic()
        self.options = options or CodecOptions()
        self.in_buffer = b""
        self.out_buffer = b""

    def compress(self, data):
        data = bytes(data)
        if not data:
            raise EmptyInputError("cannot compress an empty buffer")

        freqs = self.logic.build_frequency_table(data)
        overhead = table_size(freqs)
        if self.options.reject_if_overhead_exceeds_payload and overhead > len(data):
            raise TableTooLargeForPayloadError(
                f"frequency table needs {overhead} bytes for a {len(data)} byte input"
            )

        leaves = {}
        root = self.logic.build_tree(freqs, leaves)
        codes = {symbol: self.logic.code_for(root, symbol) for symbol in leaves}

        out = bytearray()
        write_header(out, len(data))
        save_frequency_table(out, freqs)
        writer = BitWriter(out)
        writer.write_symbols(codes, data)
        writer.flush_to_byte()

        logger.debug(
            "compressed %d bytes to %d (%d payload bits)",
            len(data), len(out), writer.bits_written,
        )
        return bytes(out)

    def decompress(self, blob):
        container = unpack_container(blob)
        if not container.payload:
            raise TruncatedPayloadError("container has no payload")

        root = self.logic.build_tree(container.frequencies)
        reader = BitReader(container.payload)
        out = bytearray()
        remaining = container.original_length

        if is_leaf(root):
            # One bit per occurrence of the sole symbol
            while remaining:
                reader.read_bit()
                out.append(root.symbol)
                remaining -= 1
        else:
            node = root
            while remaining:
                node = node.right if reader.read_bit() else node.left
                if is_leaf(node):
                    out.append(node.symbol)
                    node = root
                    remaining -= 1

        logger.debug("decompressed %d payload bits to %d bytes", reader.bits_read, len(out))
        return bytes(out)

    def encode_file(self, filename):
        try:
            self.in_buffer = _read_file(filename)
            self.out_buffer = self.compress(self.in_buffer)
        except HuffmanError as exc:
            logger.warning("encoding %s failed: %s", filename, exc)
            self.out_buffer = b""
            return False
        return True

    def decode_file(self, filename):
        try:
            self.in_buffer = _read_file(filename)
            self.out_buffer = self.decompress(self.in_buffer)
        except HuffmanError as exc:
            logger.warning("decoding %s failed: %s", filename, exc)
            self.out_buffer = b""
            return False
        return True

    def save(self, out_file):
        try:
            _write_file(out_file, self.out_buffer)
        except FileOpenFailureError as exc:
            logger.warning("%s", exc)
            return False
        return True


def encode(data, options=None):
    try:
        return CodecResult(data=HuffmanService(options).compress(data))
    except HuffmanError as exc:
        logger.warning("encode failed: %s", exc)
        return CodecResult(error=exc)


def decode(data):
    try:
        return CodecResult(data=HuffmanService().decompress(data))
    except HuffmanError as exc:
        logger.warning("decode failed: %s", exc)
        return CodecResult(error=exc)


def encode_file(filename, out_file=None, options=None):
    service = HuffmanService(options)
    if not service.encode_file(filename):
        return False
    return service.save(out_file or str(filename) + COMPRESSED_SUFFIX)


def decode_file(filename, out_file=None):
    service = HuffmanService()
    if not service.decode_file(filename):
        return False
    return service.save(out_file or default_decoded_name(filename))


def default_decoded_name(filename):
    filename = str(filename)
    if filename.endswith(COMPRESSED_SUFFIX) and len(filename) > len(COMPRESSED_SUFFIX):
        return filename[:-len(COMPRESSED_SUFFIX)]
    return filename + ".out"


def _read_file(filename):
    try:
        with open(filename, "rb") as f:
            return f.read()
    except OSError as exc:
        raise FileOpenFailureError(f"cannot read {filename}: {exc}") from exc


def _write_file(filename, data):
    try:
        with open(filename, "wb") as f:
            f.write(data)
    except OSError as exc:
        raise FileOpenFailureError(f"cannot write {filename}: {exc}") from exc
