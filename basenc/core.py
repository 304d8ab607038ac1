# Licensed under the GPLv3 - see LICENSE
"""Routines to encode and decode bytes, in memory or between files."""
# We do not import basenc.io on top to keep import time as fast as possible,
# and to ensure that entry points are only generated when needed.
import io
import warnings
from collections import namedtuple

__all__ = ['encode', 'decode', 'encode_stream', 'decode_stream', 'open',
           'CodecConfig', 'run']


CodecConfig = namedtuple(
    'CodecConfig',
    ['scheme', 'mode', 'wrap_column', 'ignore_garbage', 'prog'],
    defaults=['encode', None, False, 'basenc'])
CodecConfig.__doc__ = """Configuration of one encoding or decoding session.

Parameters
----------
scheme : str or `~basenc.base.scheme.SchemeBase`
    Scheme to use (e.g., 'base64').
mode : {'encode', 'decode'}, optional
    Default: 'encode'.
wrap_column : int or None, optional
    Column at which to break encoded lines; 0 for no line breaks.  Only
    used for encoding.  Default: `None`, i.e., 76.
ignore_garbage : bool, optional
    Whether to skip non-alphabet characters when decoding.  Default: `False`.
prog : str, optional
    Program name, used to prefix messages.  Default: 'basenc'.
"""

DEFAULT_WRAP_COLUMN = 76


def _stream_class(mode):
    from .base.base import StreamDecoder, StreamEncoder
    return StreamEncoder if mode == 'encode' else StreamDecoder


def encode(data, scheme='base64', *, wrap_column=DEFAULT_WRAP_COLUMN):
    """Encode bytes.

    Parameters
    ----------
    data : bytes-like or `~numpy.ndarray`
        Raw data to encode.
    scheme : str or `~basenc.base.scheme.SchemeBase`, optional
        Scheme to use.  Default: 'base64'.
    wrap_column : int, optional
        Number of characters after which a line break is inserted.  Use 0
        to disable line breaks (in which case no final newline is added
        either).  Default: 76.

    Returns
    -------
    encoded : bytes

    Examples
    --------
    >>> from basenc import encode
    >>> encode(b'ABCD', wrap_column=4)
    b'QUJD\\nRA==\\n'
    """
    out = io.BytesIO()
    with _stream_class('encode')(out, scheme, wrap_column=wrap_column) as fh:
        fh.write(data)
        fh.finish()
        return out.getvalue()


def decode(text, scheme='base64', *, ignore_garbage=False):
    """Decode encoded text.

    Parameters
    ----------
    text : bytes-like or str
        Encoded text.  Line breaks are always ignored.
    scheme : str or `~basenc.base.scheme.SchemeBase`, optional
        Scheme to use.  Default: 'base64'.
    ignore_garbage : bool, optional
        If `True`, skip characters that are not in the alphabet.  Otherwise
        (default) these raise `~basenc.base.errors.InvalidInputSymbolError`.

    Returns
    -------
    decoded : bytes
    """
    if isinstance(text, str):
        # Non-ASCII characters become bytes outside every alphabet.
        text = text.encode('utf-8', errors='surrogateescape')
    with _stream_class('decode')(io.BytesIO(text), scheme,
                                 ignore_garbage=ignore_garbage) as fh:
        return fh.read()


def encode_stream(fh_in, fh_out, scheme='base64', *,
                  wrap_column=DEFAULT_WRAP_COLUMN):
    """Encode all data read from one filehandle, writing to another.

    Neither filehandle is closed.

    Parameters
    ----------
    fh_in : filehandle
        Opened for reading in binary mode.
    fh_out : filehandle
        Opened for writing in binary mode.
    scheme : str or `~basenc.base.scheme.SchemeBase`, optional
        Scheme to use.  Default: 'base64'.
    wrap_column : int, optional
        Number of characters after which a line break is inserted.  Use 0
        to disable line breaks.  Default: 76.

    Returns
    -------
    count : int
        Number of bytes read from ``fh_in``.
    """
    encoder = _stream_class('encode')(fh_out, scheme, wrap_column=wrap_column)
    count = encoder.encode_from(fh_in)
    encoder.finish()
    return count


def decode_stream(fh_in, fh_out, scheme='base64', *, ignore_garbage=False):
    """Decode all text read from one filehandle, writing to another.

    Neither filehandle is closed.  Bytes decoded before an error is found
    may already have been written.

    Parameters
    ----------
    fh_in : filehandle
        Opened for reading in binary mode.
    fh_out : filehandle
        Opened for writing in binary mode.
    scheme : str or `~basenc.base.scheme.SchemeBase`, optional
        Scheme to use.  Default: 'base64'.
    ignore_garbage : bool, optional
        If `True`, skip characters that are not in the alphabet.
        Default: `False`.

    Returns
    -------
    count : int
        Number of decoded bytes written to ``fh_out``.
    """
    decoder = _stream_class('decode')(fh_in, scheme,
                                      ignore_garbage=ignore_garbage)
    return decoder.decode_to(fh_out)


def open(name, mode='rs', scheme='base64', **kwargs):
    """Open an encoded file for reading or writing.

    Opened for writing, one gets a `~basenc.base.base.StreamEncoder`, to
    which raw bytes can be written and which stores them encoded in the
    file.  Opened for reading, one gets a `~basenc.base.base.StreamDecoder`,
    from which decoded bytes can be read.

    Parameters
    ----------
    name : str or filehandle
        File name or binary filehandle.
    mode : {'rs', 'ws'}, optional
        Whether to open for reading (decoding) or writing (encoding).
        Default: 'rs'.
    scheme : str or `~basenc.base.scheme.SchemeBase`, optional
        Scheme with which the file is encoded.  Default: 'base64'.
    **kwargs
        Additional arguments for the stream, i.e., ``wrap_column`` when
        writing and ``ignore_garbage`` when reading.
    """
    from .base.base import FileOpener
    from .io import get_scheme

    scheme = get_scheme(scheme)
    return FileOpener([scheme])(name, mode, **kwargs)


def run(config, fh_in, fh_out):
    """Run one encoding or decoding session.

    Parameters
    ----------
    config : `~basenc.core.CodecConfig`
        Configuration of the session.
    fh_in : filehandle
        Opened for reading in binary mode.
    fh_out : filehandle
        Opened for writing in binary mode.

    Returns
    -------
    count : int
        Number of bytes read (encoding) or written (decoding).
    """
    if config.mode == 'encode':
        if config.ignore_garbage:
            warnings.warn(f"{config.prog}: ignore_garbage has no effect "
                          "when encoding.")
        wrap_column = config.wrap_column
        if wrap_column is None:
            wrap_column = DEFAULT_WRAP_COLUMN
        count = encode_stream(fh_in, fh_out, config.scheme,
                              wrap_column=wrap_column)

    elif config.mode == 'decode':
        if config.wrap_column is not None:
            warnings.warn(f"{config.prog}: wrap_column has no effect "
                          "when decoding.")
        count = decode_stream(fh_in, fh_out, config.scheme,
                              ignore_garbage=config.ignore_garbage)

    else:
        raise ValueError(f"invalid mode {config.mode!r} "
                         "(should be 'encode' or 'decode').")

    fh_out.flush()
    return count
