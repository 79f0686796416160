# filename: huffman_errors.py


class HuffmanError(ValueError):
    """Base class for every failure raised by the compressor."""


class EmptyInputError(HuffmanError):
    pass


class TableTooLargeForPayloadError(HuffmanError):
    """The frequency table alone would be larger than the input."""


class InvalidMagicError(HuffmanError):
    """The buffer does not start with the container magic."""


class TruncatedOrMalformedTableError(HuffmanError):
    pass


class TruncatedPayloadError(HuffmanError):
    """The bit payload ends before every symbol has been decoded."""


class FileOpenFailureError(HuffmanError):
    pass
