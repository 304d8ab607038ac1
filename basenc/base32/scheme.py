# Licensed under the GPLv3 - see LICENSE
"""
Definitions for the base32 scheme descriptors.

Both the standard alphabet (RFC 4648 section 6) and the extended hex one
(RFC 4648 section 7) encode 5 bytes into 8 symbols of 5 bits.  Decoding
is case-insensitive.
"""
from ..base.scheme import RadixScheme


__all__ = ['BASE32_ALPHABET', 'BASE32HEX_ALPHABET', 'BASE32', 'BASE32HEX']


BASE32_ALPHABET = b'ABCDEFGHIJKLMNOPQRSTUVWXYZ234567'
BASE32HEX_ALPHABET = b'0123456789ABCDEFGHIJKLMNOPQRSTUV'

BASE32 = RadixScheme(
    'base32', BASE32_ALPHABET, pad_symbol=b'=', fold_case=True,
    description="same as 'base32' program (RFC4648 section 6)")

BASE32HEX = RadixScheme(
    'base32hex', BASE32HEX_ALPHABET, pad_symbol=b'=', fold_case=True,
    description="extended hex alphabet base32 (RFC4648 section 7)")
