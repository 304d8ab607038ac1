# Licensed under the GPLv3 - see LICENSE
"""
Base definitions for encoding scheme descriptors.

A descriptor holds everything that distinguishes one binary-to-text
encoding from another: the alphabet, how many bytes go into a block and
how many symbols come out, whether and how incomplete blocks are padded,
and look-up tables to translate symbol values to characters and back.
The actual packing and unpacking is done by block coders (see
`~basenc.base.payload`), one instance of which is created per stream
using :meth:`~basenc.base.scheme.SchemeBase.coder`.
"""
import numpy as np
from astropy.utils import lazyproperty

from .utils import INVALID, SKIP, PAD, lcm, byte_array
from .payload import RadixBlockCoder


__all__ = ['INVALID', 'SKIP', 'PAD', 'SchemeBase', 'RadixScheme']


LINE_BREAKS = b'\n\r'


class SchemeBase:
    """Descriptor of a binary-to-text encoding scheme.

    Any subclass should define ``_coder_class``, the block coder used to
    encode and decode with the scheme.

    Parameters
    ----------
    name : str
        Name under which the scheme is known (e.g., 'base64').
    alphabet : bytes
        Characters used for the symbol values, in order.
    block_nbytes : int
        Number of bytes encoded in one complete block.
    block_nsymbols : int
        Number of symbols in one complete encoded block.
    pad_symbol : bytes, optional
        Character used to complete a partial final block on encoding.
        Default: `None`, i.e., no padding.
    fold_case : bool, optional
        Whether lower-case versions of the alphabet are accepted when
        decoding.  Default: `False`.
    strict_multiple : int, optional
        If given, the number of bytes encoded or decoded must be a multiple
        of this, and incomplete final blocks are an error instead of being
        truncated.  Default: `None`.
    description : str, optional
        Short description, e.g., for command-line help.
    """
    _coder_class = None
    # Characters that are structurally special when decoding.
    _pad_characters = b''

    def __init__(self, name, alphabet, *, block_nbytes, block_nsymbols,
                 pad_symbol=None, fold_case=False, strict_multiple=None,
                 description=''):
        alphabet = bytes(alphabet)
        if len(set(alphabet)) != len(alphabet):
            raise ValueError("alphabet should not contain duplicate symbols.")
        if pad_symbol is not None and pad_symbol in alphabet:
            raise ValueError("padding symbol cannot be part of the alphabet.")

        self.name = name
        self.alphabet = alphabet
        self.block_nbytes = block_nbytes
        self.block_nsymbols = block_nsymbols
        self.pad_symbol = pad_symbol
        self.fold_case = fold_case
        self.strict_multiple = strict_multiple
        self.description = description

    @property
    def radix(self):
        """Number of different symbol values."""
        return len(self.alphabet)

    @property
    def uses_padding(self):
        """Whether partial final blocks are padded when encoding."""
        return self.pad_symbol is not None

    @lazyproperty
    def encoding_table(self):
        """Look-up table of characters, indexed by symbol value."""
        return byte_array(self.alphabet)

    @lazyproperty
    def decoding_table(self):
        """Look-up table of symbol values, indexed by character.

        Characters outside of the alphabet have the value ``INVALID``,
        except for line breaks (``SKIP``) and, for schemes that know
        padding, the padding character (``PAD``).
        """
        table = np.full(256, INVALID, dtype=np.int16)
        table[byte_array(LINE_BREAKS)] = SKIP
        table[byte_array(self._pad_characters)] = PAD
        values = np.arange(self.radix, dtype=np.int16)
        table[self.encoding_table] = values
        if self.fold_case:
            table[byte_array(self.alphabet.lower())] = values
        table.flags.writeable = False
        return table

    def encode_symbol(self, value):
        """Get the character that represents a symbol value.

        Parameters
        ----------
        value : int
            Symbol value, between 0 and ``radix - 1``.

        Returns
        -------
        char : bytes
            Single character.
        """
        if not 0 <= value < self.radix:
            raise ValueError(f"symbol value {value} out of range for "
                             f"{self.name}.")
        return self.alphabet[value:value+1]

    def decode_symbol(self, char):
        """Get the symbol value represented by a character.

        Parameters
        ----------
        char : bytes, str or int
            Single character, or its byte value.

        Returns
        -------
        value : int or None
            `None` if the character is not part of the alphabet.
        """
        if not isinstance(char, int):
            char = ord(char)
        value = int(self.decoding_table[char]) if 0 <= char < 256 else INVALID
        return value if value >= 0 else None

    def encoded_nsymbols(self, nbytes):
        """Number of symbols (without line breaks) encoding ``nbytes``."""
        nblock, rest = divmod(nbytes, self.block_nbytes)
        nsymbols = nblock * self.block_nsymbols
        if rest:
            nsymbols += (self.block_nsymbols if self.uses_padding
                         else self._partial_nsymbols(rest))
        return nsymbols

    def _partial_nsymbols(self, nbytes):
        return self.block_nsymbols

    def coder(self):
        """Create a new block coder for this scheme.

        Coders hold state (symbols of incomplete groups), so each stream
        should use its own.
        """
        return self._coder_class(self)

    def __repr__(self):
        return (f"<{self.__class__.__name__} name={self.name}, "
                f"block_nbytes={self.block_nbytes}, "
                f"block_nsymbols={self.block_nsymbols}>")


class RadixScheme(SchemeBase):
    """Descriptor for schemes with an alphabet size that is a power of two.

    Each symbol then represents a fixed number of bits, and block sizes
    follow from the least common multiple of that number and 8.

    Parameters
    ----------
    name : str
        Name under which the scheme is known (e.g., 'base64').
    alphabet : bytes
        Characters used for the symbol values, in order.  Its length
        should be a power of two.
    bitorder : {'big', 'little'}, optional
        Order in which bits of a byte are assigned to symbols.  Default:
        'big', i.e., most significant bit first.
    **kwargs
        Further arguments for `~basenc.base.scheme.SchemeBase`.

    Notes
    -----
    When decoding, the padding character '=' is always consumed, even for
    schemes that do not pad when encoding.
    """
    _coder_class = RadixBlockCoder
    _pad_characters = b'='

    def __init__(self, name, alphabet, *, bitorder='big', **kwargs):
        radix = len(alphabet)
        bits_per_symbol = radix.bit_length() - 1
        if radix < 2 or radix != 1 << bits_per_symbol:
            raise ValueError("alphabet size should be a power of two.")
        if bitorder not in ('big', 'little'):
            raise ValueError("bitorder should be 'big' or 'little'.")
        block_nbits = lcm(bits_per_symbol, 8)
        kwargs.setdefault('block_nbytes', block_nbits // 8)
        kwargs.setdefault('block_nsymbols', block_nbits // bits_per_symbol)
        super().__init__(name, alphabet, **kwargs)
        self.bits_per_symbol = bits_per_symbol
        self.bitorder = bitorder

    def _partial_nsymbols(self, nbytes):
        return -(-nbytes * 8 // self.bits_per_symbol)

