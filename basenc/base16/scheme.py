# Licensed under the GPLv3 - see LICENSE
"""Definition of the base16 (hex) scheme descriptor (RFC 4648 section 8)."""
from ..base.scheme import RadixScheme


__all__ = ['BASE16_ALPHABET', 'BASE16']


BASE16_ALPHABET = b'0123456789ABCDEF'

BASE16 = RadixScheme('base16', BASE16_ALPHABET, fold_case=True,
                     description='hex encoding (RFC4648 section 8)')
"""Upper-case hex; lower-case digits are accepted when decoding."""
