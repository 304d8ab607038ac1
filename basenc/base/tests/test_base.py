# Licensed under the GPLv3 - see LICENSE
import io

import pytest
import numpy as np

from ..base import (LineWrapper, StreamEncoder, StreamDecoder, FileOpener)
from ..errors import (MisalignedLengthError, WriteError,
                      UnsupportedSchemeError)
from ...base64 import BASE64, BASE64URL
from ...base2 import BASE2LSBF
from ...z85 import Z85


class FailingWriter:
    def write(self, data):
        raise OSError('disk full')


class TestLineWrapper:
    def test_wrap(self):
        fh = io.BytesIO()
        wrapper = LineWrapper(fh, 4)
        wrapper.write(b'QUJD')
        # Line break only emitted once more characters arrive.
        assert fh.getvalue() == b'QUJD'
        assert wrapper.current_column == 4
        wrapper.write(b'RA==')
        wrapper.finish()
        assert fh.getvalue() == b'QUJD\nRA==\n'
        assert wrapper.current_column == 0

    def test_wrap_across_writes(self):
        fh = io.BytesIO()
        wrapper = LineWrapper(fh, 3)
        for chars in (b'a', b'bcde', b'', b'fghijkl'):
            wrapper.write(chars)
        wrapper.finish()
        assert fh.getvalue() == b'abc\ndef\nghi\njkl\n'

    def test_no_wrap(self):
        fh = io.BytesIO()
        wrapper = LineWrapper(fh, 0)
        wrapper.write(b'x' * 200)
        wrapper.finish()
        assert fh.getvalue() == b'x' * 200

    def test_empty(self):
        fh = io.BytesIO()
        wrapper = LineWrapper(fh, 76)
        wrapper.finish()
        assert fh.getvalue() == b''

    def test_ndarray_input(self):
        fh = io.BytesIO()
        LineWrapper(fh, 2).write(np.frombuffer(b'abcde', 'u1'))
        assert fh.getvalue() == b'ab\ncd\ne'

    def test_invalid(self):
        with pytest.raises(ValueError, match='invalid wrap size'):
            LineWrapper(io.BytesIO(), -1)
        with pytest.raises(TypeError):
            LineWrapper(io.BytesIO(), 1.5)

    def test_write_error(self):
        wrapper = LineWrapper(FailingWriter(), 76)
        with pytest.raises(WriteError, match='disk full'):
            wrapper.write(b'abc')


class TestStreamEncoder:
    def test_basics(self):
        fh = io.BytesIO()
        encoder = StreamEncoder(fh, 'base64', wrap_column=4)
        assert encoder.scheme is BASE64
        assert encoder.wrap_column == 4
        assert encoder.writable()
        assert not encoder.readable()
        assert encoder.write(b'AB') == 2
        assert encoder.write(b'CD') == 2
        assert encoder.tell() == 4
        encoder.finish()
        assert fh.getvalue() == b'QUJD\nRA==\n'
        # Finishing again does nothing.
        encoder.finish()
        assert fh.getvalue() == b'QUJD\nRA==\n'
        with pytest.raises(ValueError, match='finished'):
            encoder.write(b'more')

    def test_context_manager(self):
        fh = io.BytesIO()
        with StreamEncoder(fh, BASE64URL, wrap_column=0) as encoder:
            encoder.write(b'\xfb\xff')
            result = fh.getvalue()
            assert result == b''
        assert encoder.closed
        assert fh.closed

    def test_close_finishes(self):
        class KeepValue(io.BytesIO):
            def close(self):
                self.final_value = self.getvalue()
                super().close()

        fh = KeepValue()
        encoder = StreamEncoder(fh, BASE64URL, wrap_column=0)
        encoder.write(b'\xfb\xff')
        encoder.close()
        assert fh.final_value == b'-_8'

    def test_encode_from(self):
        data = bytes(range(256)) * 3
        fh_out = io.BytesIO()
        encoder = StreamEncoder(fh_out, BASE2LSBF, wrap_column=0)
        assert encoder.encode_from(io.BytesIO(data)) == len(data)
        encoder.finish()
        encoded = fh_out.getvalue()
        assert len(encoded) == len(data) * 8
        assert encoded[:16] == b'0000000010000000'

    def test_buffer_whole_blocks(self, monkeypatch):
        monkeypatch.setattr(StreamEncoder, 'chunk_nbytes', 10)
        encoder = StreamEncoder(io.BytesIO(), BASE64)
        assert encoder._buffer.capacity == 9
        monkeypatch.setattr(StreamEncoder, 'chunk_nbytes', 1)
        encoder = StreamEncoder(io.BytesIO(), Z85)
        assert encoder._buffer.capacity == 4

    @pytest.mark.parametrize('chunk_nbytes', (1, 2, 5, 7, 100))
    def test_chunk_size_independence(self, chunk_nbytes, monkeypatch):
        data = bytes(range(256)) + b'end'
        expected = io.BytesIO()
        with StreamEncoder(expected, BASE64) as encoder:
            encoder.write(data)
            encoder.finish()
            expected = expected.getvalue()

        monkeypatch.setattr(StreamEncoder, 'chunk_nbytes', chunk_nbytes)
        fh = io.BytesIO()
        encoder = StreamEncoder(fh, BASE64)
        for i in range(0, len(data), 13):
            encoder.write(data[i:i+13])
        encoder.finish()
        assert fh.getvalue() == expected
        fh = io.BytesIO()
        encoder = StreamEncoder(fh, BASE64)
        encoder.encode_from(io.BytesIO(data))
        encoder.finish()
        assert fh.getvalue() == expected

    def test_z85_misaligned(self):
        fh = io.BytesIO()
        encoder = StreamEncoder(fh, Z85)
        encoder.write(b'abcde')
        with pytest.raises(MisalignedLengthError):
            encoder.finish()
        assert fh.getvalue() == b''

    def test_write_error(self):
        encoder = StreamEncoder(FailingWriter(), BASE64)
        encoder.write(b'abc')
        with pytest.raises(WriteError):
            encoder.finish()

    def test_unknown_scheme(self):
        with pytest.raises(UnsupportedSchemeError):
            StreamEncoder(io.BytesIO(), 'base63')

    def test_repr(self):
        encoder = StreamEncoder(io.BytesIO(), BASE64)
        assert repr(encoder).startswith('<StreamEncoder name=')
        assert 'scheme=base64' in repr(encoder)


class TestStreamDecoder:
    def test_read(self):
        decoder = StreamDecoder(io.BytesIO(b'Zm9v\nYmFy\n'), 'base64')
        assert decoder.readable()
        assert not decoder.writable()
        assert not decoder.ignore_garbage
        assert decoder.read(2) == b'fo'
        assert decoder.tell() == 2
        assert decoder.read(10) == b'obar'
        assert decoder.read() == b''
        assert decoder.tell() == 6

    def test_read_all(self):
        with StreamDecoder(io.BytesIO(b'QUJD!!!!RA=='), BASE64,
                           ignore_garbage=True) as decoder:
            assert decoder.read() == b'ABCD'
        assert decoder.closed
        with pytest.raises(ValueError, match='closed'):
            decoder.read()

    @pytest.mark.parametrize('chunk_nbytes', (1, 2, 3, 5, 8, 1000))
    def test_chunk_size_independence(self, chunk_nbytes, monkeypatch):
        data = bytes(range(256)) * 2
        encoded = io.BytesIO()
        with StreamEncoder(encoded, BASE64, wrap_column=10) as encoder:
            encoder.write(data)
            encoder.finish()
            encoded = encoded.getvalue()

        monkeypatch.setattr(StreamDecoder, 'chunk_nbytes', chunk_nbytes)
        decoder = StreamDecoder(io.BytesIO(encoded), BASE64)
        assert decoder.read() == data
        decoder = StreamDecoder(io.BytesIO(encoded), BASE64)
        pieces = []
        while True:
            piece = decoder.read(7)
            if not piece:
                break
            pieces.append(piece)
        assert b''.join(pieces) == data

    @pytest.mark.parametrize('chunk_nbytes', (1, 3, 4, 6))
    def test_strict_multiple_chunk_independence(self, chunk_nbytes,
                                                monkeypatch):
        monkeypatch.setattr(StreamDecoder, 'chunk_nbytes', chunk_nbytes)
        decoder = StreamDecoder(io.BytesIO(b'HelloWorld'), Z85)
        assert decoder.read() == bytes.fromhex('864fd26fb559f75b')
        decoder = StreamDecoder(io.BytesIO(b'HelloWorl'), Z85)
        with pytest.raises(MisalignedLengthError):
            decoder.read()

    def test_decode_to(self):
        fh_out = io.BytesIO()
        decoder = StreamDecoder(io.BytesIO(b'Zm9vYmFy'), BASE64)
        assert decoder.decode_to(fh_out) == 6
        assert fh_out.getvalue() == b'foobar'
        with pytest.raises(WriteError, match='disk full'):
            StreamDecoder(io.BytesIO(b'Zm9v'), BASE64).decode_to(
                FailingWriter())


class TestFileOpener:
    def setup_class(cls):
        cls.opener = FileOpener([BASE64, BASE64URL])

    def test_normalize_mode(self):
        assert self.opener.normalize_mode('rs') == 'rs'
        assert self.opener.normalize_mode('sw') == 'ws'
        assert self.opener.normalize_mode('r') == 'rs'
        assert self.opener.normalize_mode('w') == 'ws'
        with pytest.raises(ValueError, match='invalid mode'):
            self.opener.normalize_mode('rb')

    def test_get_scheme(self):
        assert self.opener.get_scheme() is BASE64
        assert self.opener.get_scheme('base64url') is BASE64URL
        assert self.opener.get_scheme(Z85) is Z85
        with pytest.raises(UnsupportedSchemeError, match='base32'):
            self.opener.get_scheme('base32')

    def test_open_filehandle(self):
        fh = io.BytesIO()
        with self.opener(fh, 'ws', wrap_column=0) as fw:
            assert isinstance(fw, StreamEncoder)
            fw.write(b'foobar')
            fw.finish()
            assert fh.getvalue() == b'Zm9vYmFy'

    def test_open_file(self, tmpdir):
        name = str(tmpdir.join('test.b64'))
        with self.opener(name, 'w', scheme='base64url') as fw:
            assert fw.scheme is BASE64URL
            assert fw.name == name
            fw.write(b'\xfb\xff')
        with open(name, 'rb') as fh:
            assert fh.read() == b'-_8\n'
        with self.opener(name, scheme='base64url') as fr:
            assert isinstance(fr, StreamDecoder)
            assert fr.read() == b'\xfb\xff'

    def test_open_failure_closes_file(self, tmpdir):
        name = str(tmpdir.join('test.b64'))
        opened = []

        class Opener(FileOpener):
            def get_fh(self, name, mode):
                fh = super().get_fh(name, mode)
                opened.append(fh)
                return fh

        with pytest.raises(TypeError):
            Opener([BASE64])(name, 'ws', ignore_garbage=True)
        assert opened[0].closed

    def test_create_opener(self):
        open_ = FileOpener.create(globals(), doc='extra')
        assert open_.__wrapped__.__func__ is FileOpener.__call__
        assert open_.__module__ == __name__
        assert 'Open a file encoded with' in open_.__doc__
        assert open_.__doc__.endswith('extra')
        with pytest.raises(ValueError, match='does not contain'):
            FileOpener.create({'__name__': 'empty'})


class TestPlainFileObjects:
    """Objects with only read or write methods, without ``closed``."""

    class Reader:
        def __init__(self, data):
            self.data = data

        def read(self, count=None):
            data, self.data = self.data[:count], self.data[count:]
            return data

    class Writer:
        def __init__(self):
            self.written = []

        def write(self, data):
            self.written.append(bytes(data))

    def test_decode_from_reader(self):
        decoder = StreamDecoder(self.Reader(b'Zm9vYmFy'), BASE64)
        assert not decoder.closed
        assert decoder.read() == b'foobar'

    def test_encode_to_writer(self):
        fh = self.Writer()
        encoder = StreamEncoder(fh, BASE64, wrap_column=0)
        encoder.write(b'foo')
        assert encoder.encode_from(self.Reader(b'bar')) == 3
        encoder.finish()
        assert b''.join(fh.written) == b'Zm9vYmFy'
