# Licensed under the GPLv3 - see LICENSE
"""Common classes for encoding to and decoding from text streams.

The `~basenc.base.base.StreamEncoder` class accepts raw bytes via its
``write`` method (or by draining another filehandle with ``encode_from``),
encodes them in chunks of complete blocks, and writes the text to the
underlying filehandle, using a `~basenc.base.base.LineWrapper` to break
lines.  The `~basenc.base.base.StreamDecoder` class reads text in chunks
from the underlying filehandle, and hands out the decoded bytes via its
``read`` method.

The `~basenc.base.base.FileOpener` class helps create the ``open``
functions that each scheme family provides.
"""
import io
import functools
import operator
import textwrap

from .errors import WriteError, UnsupportedSchemeError
from .scheme import SchemeBase
from .utils import Buffer, byte_array


__all__ = ['LineWrapper', 'StreamBase', 'StreamEncoder', 'StreamDecoder',
           'FileOpener']


class LineWrapper:
    """Write encoded characters, breaking lines at a given column.

    Parameters
    ----------
    fh : filehandle
        Binary filehandle to write to.
    wrap_column : int, optional
        Number of characters after which a line break is inserted.  Use 0
        to disable line breaks.  Default: 76.

    Notes
    -----
    Line breaks are inserted only once another character has to be written,
    so a line that is exactly full does not get a line break until either
    more characters arrive or ``finish`` is called.
    """

    def __init__(self, fh, wrap_column=76):
        wrap_column = operator.index(wrap_column)
        if wrap_column < 0:
            raise ValueError(f"invalid wrap size: {wrap_column}.")
        self.fh = fh
        self.wrap_column = wrap_column
        self.current_column = 0

    def write(self, chars):
        """Write characters, inserting line breaks as needed.

        Parameters
        ----------
        chars : ~numpy.ndarray or bytes-like
            Encoded characters.
        """
        data = byte_array(chars).tobytes()
        wrap_column = self.wrap_column
        if not wrap_column:
            self._write(data)
            self.current_column += len(data)
            return

        pieces = []
        start = 0
        while start < len(data):
            if self.current_column == wrap_column:
                pieces.append(b'\n')
                self.current_column = 0
            stop = min(start + wrap_column - self.current_column, len(data))
            pieces.append(data[start:stop])
            self.current_column += stop - start
            start = stop

        self._write(b''.join(pieces))

    def finish(self):
        """Terminate a partially filled line, if line breaks are enabled."""
        if self.wrap_column and self.current_column:
            self._write(b'\n')
        self.current_column = 0

    def _write(self, data):
        if not data:
            return
        try:
            self.fh.write(data)
        except OSError as exc:
            raise WriteError(f"write error: {exc}") from exc


class StreamBase:
    """Encoded file wrapper, common to stream encoders and decoders.

    Mostly deals with getting the scheme and its coder, and providing
    access to the underlying filehandle.

    Parameters
    ----------
    fh_raw : filehandle
        Underlying binary filehandle.
    scheme : `~basenc.base.scheme.SchemeBase` or str
        Scheme to use, or its name.
    """
    chunk_nbytes = None
    """Capacity of the buffer in which data are collected."""

    def __init__(self, fh_raw, scheme):
        if not isinstance(scheme, SchemeBase):
            from ..io import get_scheme
            scheme = get_scheme(scheme)

        self.fh_raw = fh_raw
        self._scheme = scheme
        self._coder = scheme.coder()
        self.offset = 0

    @property
    def scheme(self):
        """Descriptor of the encoding scheme."""
        return self._scheme

    def tell(self):
        """Number of raw (unencoded) bytes processed so far."""
        return self.offset

    def __getattr__(self, attr):
        """Try to get things on the current open file if it is not on self."""
        if attr == 'closed':
            # Plain file-like objects need not track whether they are closed.
            return getattr(self.fh_raw, 'closed', False)
        if attr == 'name':
            return getattr(self.fh_raw, attr)
        #  __getattribute__ to raise appropriate error.
        return self.__getattribute__(attr)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.fh_raw.close()

    def _check_open(self):
        if self.closed:
            raise ValueError("I/O operation on closed stream.")

    def __repr__(self):
        return (f"<{self.__class__.__name__} name={getattr(self, 'name', '')}"
                f" offset={self.offset}\n    scheme={self.scheme.name}>")


class StreamEncoder(StreamBase):
    """Encode raw bytes to text written to an underlying file.

    Data passed in with ``write`` are collected in a buffer holding
    complete blocks of the scheme; whenever it is full, its contents are
    encoded and written.  Only on ``finish`` (or ``close``) is a possible
    partial last block encoded, with padding if the scheme requires it,
    and the last line terminated.

    Parameters
    ----------
    fh_raw : filehandle
        Should be opened in binary mode for writing.
    scheme : `~basenc.base.scheme.SchemeBase` or str
        Scheme to use, or its name.
    wrap_column : int, optional
        Number of characters after which a line break is inserted.  Use 0
        to disable line breaks.  Default: 76.
    """
    chunk_nbytes = 1024 * 3 * 10

    def __init__(self, fh_raw, scheme, *, wrap_column=76):
        super().__init__(fh_raw, scheme)
        self._wrapper = LineWrapper(fh_raw, wrap_column)
        # Whole blocks only, so that only the last chunk can be partial.
        block_nbytes = self.scheme.block_nbytes
        self._buffer = Buffer(max(self.chunk_nbytes // block_nbytes, 1)
                              * block_nbytes)
        self._finished = False

    @property
    def wrap_column(self):
        """Column at which lines are broken (0 if not)."""
        return self._wrapper.wrap_column

    def readable(self):
        return False

    def writable(self):
        return True

    def write(self, data):
        """Encode data, buffering by complete blocks.

        Parameters
        ----------
        data : ~numpy.ndarray or bytes-like
            Raw bytes to encode.

        Returns
        -------
        count : int
            Number of bytes accepted (always all of them).
        """
        self._check_open()
        data = byte_array(data)
        count = len(data)
        done = 0
        while done < count:
            done += self._buffer.fill(data[done:])
            if self._buffer.full:
                self._encode_buffer(final=False)

        self.offset += count
        return count

    def encode_from(self, fh):
        """Encode all data that can be read from a filehandle.

        Parameters
        ----------
        fh : filehandle
            Opened for reading in binary mode.  It is read until the end,
            but not closed.

        Returns
        -------
        count : int
            Number of bytes read and encoded.
        """
        self._check_open()
        offset0 = self.offset
        eof = False
        while not eof:
            nbytes0 = len(self._buffer)
            eof = self._buffer.fill_from(fh)
            self.offset += len(self._buffer) - nbytes0
            if self._buffer.full:
                self._encode_buffer(final=False)

        return self.offset - offset0

    def _encode_buffer(self, final):
        encoded = self._coder.encode(self._buffer.view(), final=final)
        self._buffer.clear()
        self._wrapper.write(encoded)

    def _check_open(self):
        super()._check_open()
        if self._finished:
            raise ValueError("cannot write to a finished stream.")

    def finish(self):
        """Encode any remaining data and terminate the last line.

        The underlying file is left open; further writes are not possible.
        """
        if self._finished:
            return
        self._finished = True
        self._encode_buffer(final=True)
        self._wrapper.finish()

    def flush(self):
        self.fh_raw.flush()

    def close(self):
        try:
            if not self.closed:
                self.finish()
        finally:
            super().close()


class StreamDecoder(StreamBase):
    """Decode text read from an underlying file into raw bytes.

    Text is read in chunks of fixed size and decoded; symbols of a group
    that straddles a chunk boundary are kept by the coder, so the result
    does not depend on the chunk size.

    Parameters
    ----------
    fh_raw : filehandle
        Should be opened in binary mode for reading.
    scheme : `~basenc.base.scheme.SchemeBase` or str
        Scheme to use, or its name.
    ignore_garbage : bool, optional
        If `True`, skip characters that are not in the alphabet.  If `False`
        (default), these raise `~basenc.base.errors.InvalidInputSymbolError`.
    """
    chunk_nbytes = 1024 * 5 * 8

    def __init__(self, fh_raw, scheme, *, ignore_garbage=False):
        super().__init__(fh_raw, scheme)
        self._ignore_garbage = bool(ignore_garbage)
        self._buffer = Buffer(self.chunk_nbytes)
        self._decoded = bytearray()
        self._eof = False

    @property
    def ignore_garbage(self):
        """Whether characters outside the alphabet are skipped."""
        return self._ignore_garbage

    def readable(self):
        return True

    def writable(self):
        return False

    def _decode_chunk(self):
        """Read and decode the next chunk of text."""
        eof = self._buffer.fill_from(self.fh_raw)
        decoded = self._coder.decode(self._buffer.view(),
                                     ignore_garbage=self.ignore_garbage,
                                     final=eof)
        self._buffer.clear()
        self._eof = eof
        return decoded

    def read(self, count=None):
        """Read and decode bytes.

        Parameters
        ----------
        count : int or None, optional
            Number of bytes to return.  If `None` (default) or negative,
            read until the end of the encoded stream.

        Returns
        -------
        data : bytes
            Fewer than ``count`` bytes are returned only if the end of the
            stream was reached.
        """
        self._check_open()
        while not self._eof and (count is None or count < 0
                                 or len(self._decoded) < count):
            self._decoded += self._decode_chunk()

        if count is None or count < 0:
            count = len(self._decoded)
        data = bytes(self._decoded[:count])
        del self._decoded[:count]
        self.offset += len(data)
        return data

    def decode_to(self, fh):
        """Decode the remainder of the stream, writing it to a filehandle.

        Parameters
        ----------
        fh : filehandle
            Opened for writing in binary mode.  It is not closed.

        Returns
        -------
        count : int
            Number of decoded bytes written.
        """
        offset0 = self.offset
        while True:
            data = self.read(self.chunk_nbytes)
            if not data:
                break
            try:
                fh.write(data)
            except OSError as exc:
                raise WriteError(f"write error: {exc}") from exc

        return self.offset - offset0


class FileOpener:
    """File opener for a family of encoding schemes.

    Each instance can be used as a function to open an encoded stream.
    It is probably best used inside a wrapper, so that the documentation
    can reflect the docstring of ``__call__`` rather than of this class.

    Parameters
    ----------
    schemes : iterable of `~basenc.base.scheme.SchemeBase`
        Schemes that can be opened.  The first is the default.
    """

    classes = {'rs': StreamDecoder, 'ws': StreamEncoder}
    """Stream classes for reading (decoding) and writing (encoding)."""

    def __init__(self, schemes):
        self.schemes = {scheme.name: scheme for scheme in schemes}
        if not self.schemes:
            raise ValueError('need at least one scheme.')

    def normalize_mode(self, mode):
        if mode in self.classes:
            return mode
        if mode[::-1] in self.classes:
            return mode[::-1]
        if mode in {'r', 'w'}:
            return mode + 's'

        raise ValueError(f'invalid mode: {mode} '
                         f'(supported are {set(self.classes)}).')

    def get_scheme(self, scheme=None):
        """Get the scheme descriptor, by default the first one."""
        if scheme is None:
            return next(iter(self.schemes.values()))
        if isinstance(scheme, SchemeBase):
            return scheme
        try:
            return self.schemes[scheme]
        except (KeyError, TypeError):
            raise UnsupportedSchemeError(
                f"unsupported scheme {scheme!r} (should be one of "
                f"{set(self.schemes)}).") from None

    def get_fh(self, name, mode):
        """Ensure name is a filehandle, opening it if necessary."""
        if hasattr(name, 'read') or hasattr(name, 'write'):
            return name

        return io.open(name, mode=mode[0] + 'b')

    def __call__(self, name, mode='rs', *, scheme=None, **kwargs):
        """
        Open an encoded file for reading or writing.

        Opened for writing, one gets a stream encoder, to which raw bytes
        can be written, which will be stored encoded in the file.  Opened
        for reading, one gets a stream decoder, from which decoded bytes
        can be read.

        Parameters
        ----------
        name : str or filehandle
            File name or binary filehandle.
        mode : {'rs', 'ws'}, optional
            Whether to open for reading (decoding) or writing (encoding).
            Default: 'rs'.
        scheme : str or `~basenc.base.scheme.SchemeBase`, optional
            Scheme to use.  Default: the first scheme of the family.
        **kwargs
            Additional arguments for the stream, i.e., ``wrap_column`` when
            writing and ``ignore_garbage`` when reading.
        """
        mode = self.normalize_mode(mode)
        scheme = self.get_scheme(scheme)
        fh = self.get_fh(name, mode)
        try:
            return self.classes[mode](fh, scheme, **kwargs)
        except Exception:
            if fh is not name:
                fh.close()
            raise

    def wrapped(self, module=None, doc=None):
        """Wrap as a function named open, replacing docstring and module."""

        @functools.wraps(self.__call__)
        def open(*args, **kwargs):
            return self(*args, **kwargs)

        if doc:
            open.__doc__ = doc

        # This ensures the function becomes visible to sphinx.
        if module:
            open.__module__ = module

        return open

    @classmethod
    def create(cls, ns, doc=None):
        """Create a standard opener for the given namespace.

        All scheme descriptors in the namespace can be opened, with the
        first one found the default.  A wrapping function is created with
        ``__module__`` set to the ``__name__`` of the namespace, and with
        the documentation of its ``__call__`` method extended with ``doc``.

        Parameters
        ----------
        ns : dict
            Namespace to look in.  Generally, pass in ``globals()`` at the
            call site.
        doc : str, optional
            Extra documentation to add to that of the opener's ``__call__``
            method.
        """
        module = ns.get('__name__', None)
        schemes = [value for value in ns.values()
                   if isinstance(value, SchemeBase)]
        if not schemes:
            raise ValueError('namespace does not contain any scheme.')

        opener = cls(schemes)
        names = ', '.join(opener.schemes)
        doc = (textwrap.dedent(opener.__call__.__doc__)
               .replace('Open an encoded file',
                        f'Open a file encoded with {names}',)
               .replace('the first scheme of the family',
                        f"'{schemes[0].name}'")
               + (doc or ''))
        return opener.wrapped(module=module, doc=doc)
