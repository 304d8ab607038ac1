# Licensed under the GPLv3 - see LICENSE
"""Exceptions raised while encoding or decoding.

All derive from `~basenc.base.errors.BasencError` as well as from the
closest built-in exception, so callers can catch either.  Every one of
them is fatal for the stream that raised it.
"""

__all__ = ['BasencError', 'InvalidInputSymbolError', 'MisalignedLengthError',
           'MemoryExhaustedError', 'ReadError', 'WriteError',
           'UnsupportedSchemeError']


class BasencError(Exception):
    """Base class for errors raised by the codec engine."""
    pass


class InvalidInputSymbolError(BasencError, ValueError):
    """Character outside the alphabet found while strictly decoding.

    Parameters
    ----------
    symbol : int
        Byte value of the offending character.
    offset : int
        Position of the character in the encoded stream.
    """

    def __init__(self, symbol, offset):
        self.symbol = symbol
        self.offset = offset
        super().__init__(f"invalid input: {bytes([symbol])!r} at offset "
                         f"{offset}.")


class MisalignedLengthError(BasencError, ValueError):
    """Input length does not fit the blocks required by the scheme."""
    pass


class MemoryExhaustedError(BasencError, MemoryError):
    """A stream buffer could not be allocated."""
    pass


class ReadError(BasencError, OSError):
    """Reading from the underlying filehandle failed."""
    pass


class WriteError(BasencError, OSError):
    """Writing to the underlying filehandle failed."""
    pass


class UnsupportedSchemeError(BasencError, LookupError):
    """Requested encoding scheme is not known."""
    pass
