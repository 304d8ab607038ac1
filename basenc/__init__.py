# Licensed under the GPLv3 - see LICENSE
"""Streaming binary-to-text encoding and decoding."""

from .core import (encode, decode, encode_stream, decode_stream,  # noqa
                   open, run, CodecConfig)
from .base.errors import (BasencError, InvalidInputSymbolError,  # noqa
                          MisalignedLengthError, MemoryExhaustedError,
                          ReadError, WriteError, UnsupportedSchemeError)

try:
    from .version import version as __version__
except ImportError:
    __version__ = ''

# Define minima for the documentation, but do not bother to explicitly check.
__minimum_python_version__ = '3.10'
__minimum_astropy_version__ = '5.1'
__minimum_numpy_version__ = '1.24'
