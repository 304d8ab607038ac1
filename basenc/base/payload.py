# Licensed under the GPLv3 - see LICENSE
"""
Base definitions for block coders.

Defines a coder class BlockCoderBase that translates between bytes and
encoded text for a given scheme, block by block, and RadixBlockCoder,
which does this for all schemes whose alphabet size is a power of two.
Coders keep symbols of an incomplete group between calls, so that text
can be decoded in chunks of arbitrary size.
"""
import numpy as np

from .errors import InvalidInputSymbolError, MisalignedLengthError
from .utils import INVALID, PAD, byte_array


__all__ = ['BlockCoderBase', 'RadixBlockCoder']


class BlockCoderBase:
    """Container for encoding and decoding blocks of a given scheme.

    Any subclass should define ``_encode``, which turns bytes into symbol
    values, ``_decode``, which turns complete groups of symbol values into
    bytes, and ``_decode_partial``, which deals with an incomplete final
    group.

    Parameters
    ----------
    scheme : `~basenc.base.scheme.SchemeBase`
        Descriptor of the scheme to encode or decode.
    """

    def __init__(self, scheme):
        self.scheme = scheme
        # Symbol values of a not yet complete group.
        self._pending = np.empty(0, dtype='u1')
        # Number of encoded characters seen so far.
        self.offset = 0

    @property
    def npending(self):
        """Number of symbols waiting for their group to be completed."""
        return len(self._pending)

    def encode(self, data, final=True):
        """Encode bytes into characters.

        Parameters
        ----------
        data : ~numpy.ndarray or bytes-like
            Bytes to encode.
        final : bool, optional
            Whether these are the last bytes of the stream.  If not, they
            should consist of complete blocks.  Default: `True`.

        Returns
        -------
        encoded : `~numpy.ndarray` of byte
            The encoded characters, including any padding.
        """
        data = byte_array(data)
        nbytes = len(data)
        block_nbytes = self.scheme.block_nbytes
        strict_multiple = self.scheme.strict_multiple
        if strict_multiple and nbytes % strict_multiple:
            raise MisalignedLengthError(
                f"invalid input: {self.scheme.name} encoding input length "
                f"must be a multiple of {strict_multiple}.")
        if not final and nbytes % block_nbytes:
            raise ValueError(f"non-final data should consist of complete "
                             f"blocks of {block_nbytes} bytes.")

        values = self._encode(data)
        encoded = self.scheme.encoding_table[values]
        npad = self.scheme.encoded_nsymbols(nbytes) - len(encoded)
        if npad > 0:
            pad = np.full(npad, ord(self.scheme.pad_symbol), dtype='u1')
            encoded = np.concatenate([encoded, pad])

        return encoded

    def decode(self, text, ignore_garbage=False, final=True):
        """Decode characters into bytes.

        Parameters
        ----------
        text : ~numpy.ndarray, bytes-like, or str
            Encoded characters.  Line breaks are always skipped, and padding
            characters end any incomplete group.
        ignore_garbage : bool, optional
            If `True`, characters outside of the alphabet are skipped.
            Otherwise, they raise an error.  Default: `False`.
        final : bool, optional
            Whether this is the end of the encoded stream.  If not, symbols
            of an incomplete group are kept for the next call.
            Default: `True`.

        Returns
        -------
        decoded : bytes

        Raises
        ------
        ~basenc.base.errors.InvalidInputSymbolError
            If ``ignore_garbage`` is `False` and a character is invalid.
        ~basenc.base.errors.MisalignedLengthError
            If the scheme requires complete groups and the stream ends or
            is padded inside a group.
        """
        chars = byte_array(text)
        codes = self.scheme.decoding_table[chars]
        if not ignore_garbage:
            invalid = np.nonzero(codes == INVALID)[0]
            if len(invalid):
                first = invalid[0]
                raise InvalidInputSymbolError(int(chars[first]),
                                              self.offset + int(first))

        self.offset += len(chars)
        decoded = []
        start = 0
        for stop in np.nonzero(codes == PAD)[0].tolist() + [len(codes)]:
            segment = codes[start:stop]
            decoded.append(self._decode_values(segment[segment >= 0]))
            if stop < len(codes):
                decoded.append(self.flush())
            start = stop + 1

        if final:
            decoded.append(self.flush())

        return b''.join(decoded)

    def _decode_values(self, values):
        """Decode all complete groups, keeping the remainder pending."""
        values = values.astype('u1')
        if len(self._pending):
            values = np.concatenate([self._pending, values])
        group = self.scheme.block_nsymbols
        ncomplete = len(values) // group * group
        self._pending = values[ncomplete:]
        if not ncomplete:
            return b''
        return self._decode(values[:ncomplete])

    def flush(self):
        """Decode any symbols of an incomplete group.

        Returns
        -------
        decoded : bytes
            Only bytes fully determined by the symbols are included.
        """
        if not self.npending:
            return b''
        pending = self._pending
        self._pending = pending[:0]
        return self._decode_partial(pending)

    def _decode_partial(self, values):
        raise MisalignedLengthError(
            f"invalid input: {self.scheme.name} decoding input length must "
            f"be a multiple of {self.scheme.block_nsymbols}.")


class RadixBlockCoder(BlockCoderBase):
    """Coder for schemes with an alphabet size that is a power of two.

    Since each symbol represents a fixed number of bits, encoding simply
    regroups the bits of the input bytes, and decoding the reverse.  A
    partial final block is treated as if it were completed with zero bytes,
    with only the symbols carrying real data kept.

    Parameters
    ----------
    scheme : `~basenc.base.scheme.RadixScheme`
        Descriptor of the scheme to encode or decode.
    """

    def __init__(self, scheme):
        super().__init__(scheme)
        bits_per_symbol = scheme.bits_per_symbol
        # Weights and shifts for the bits within a symbol, high bit first.
        self._shifts = np.arange(bits_per_symbol - 1, -1, -1, dtype='u1')
        self._weights = np.left_shift(1, self._shifts).astype('u1')

    def _encode(self, data):
        bits_per_symbol = self.scheme.bits_per_symbol
        bits = np.unpackbits(data, bitorder=self.scheme.bitorder)
        extra = -len(bits) % bits_per_symbol
        if extra:
            bits = np.concatenate([bits, np.zeros(extra, dtype='u1')])
        return bits.reshape(-1, bits_per_symbol) @ self._weights

    def _unpack(self, values, nbytes):
        bits = (values[:, np.newaxis] >> self._shifts) & 1
        return np.packbits(bits.reshape(-1)[:nbytes * 8],
                           bitorder=self.scheme.bitorder).tobytes()

    def _decode(self, values):
        return self._unpack(values,
                            len(values) * self.scheme.bits_per_symbol // 8)

    def _decode_partial(self, values):
        nbits = len(values) * self.scheme.bits_per_symbol
        strict_multiple = self.scheme.strict_multiple
        if strict_multiple and nbits % (8 * strict_multiple):
            raise MisalignedLengthError(
                f"invalid input: number of bits not a multiple of "
                f"{8 * strict_multiple}.")
        # Only keep bytes for which all bits are present.
        return self._unpack(values, nbits // 8)
