# Licensed under the GPLv3 - see LICENSE
"""
Definitions for the Z85 scheme descriptor.

Z85 uses 85 printable ASCII characters, chosen so that encoded text can
be put in source code and XML without quoting.  The characters all lie in
the range 33 to 125, so a dense table covering just that range suffices
for decoding; it is provided as ``Z85Scheme.dense_table``.
"""
from astropy.utils import lazyproperty

from ..base.scheme import SchemeBase
from .payload import Z85BlockCoder


__all__ = ['Z85Scheme', 'Z85', 'Z85_ALPHABET']


Z85_ALPHABET = (b'0123456789'
                b'abcdefghijklmnopqrstuvwxyz'
                b'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
                b'.-:+=^!/*?&<>()[]{}@%$#')


class Z85Scheme(SchemeBase):
    """Descriptor for the Z85 scheme (ZeroMQ RFC 32).

    Parameters
    ----------
    name : str, optional
        Default: 'z85'.
    alphabet : bytes, optional
        Default: the standard Z85 alphabet.
    **kwargs
        Further arguments for `~basenc.base.scheme.SchemeBase`.
    """
    _coder_class = Z85BlockCoder
    first_char = 33
    last_char = 125

    def __init__(self, name='z85', alphabet=Z85_ALPHABET, **kwargs):
        if len(alphabet) != 85:
            raise ValueError("Z85 alphabet should have 85 symbols.")
        kwargs.setdefault('description',
                          'ascii85-like encoding (ZeroMQ spec:32/Z85)')
        super().__init__(name, alphabet, block_nbytes=4, block_nsymbols=5,
                         strict_multiple=4, **kwargs)

    @lazyproperty
    def dense_table(self):
        """Decoding table for characters 33 to 125 only.

        Entries for characters that are not in the alphabet are -1.
        """
        return self.decoding_table[self.first_char:self.last_char+1]


Z85 = Z85Scheme()
