# Licensed under the GPLv3 - see LICENSE
"""
Definitions for the base64 scheme descriptors.

Both the standard alphabet (RFC 4648 section 4) and the URL and filename
safe one (RFC 4648 section 5) encode 3 bytes into 4 symbols of 6 bits.
"""
from ..base.scheme import RadixScheme


__all__ = ['BASE64_ALPHABET', 'BASE64URL_ALPHABET', 'BASE64', 'BASE64URL']


BASE64_ALPHABET = (b'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
                   b'abcdefghijklmnopqrstuvwxyz'
                   b'0123456789+/')
BASE64URL_ALPHABET = BASE64_ALPHABET[:-2] + b'-_'

BASE64 = RadixScheme(
    'base64', BASE64_ALPHABET, pad_symbol=b'=',
    description="same as 'base64' program (RFC4648 section 4)")
"""Standard base64, padding partial blocks with '='."""

BASE64URL = RadixScheme(
    'base64url', BASE64URL_ALPHABET,
    description="file- and url-safe base64 (RFC4648 section 5)")
"""URL-safe base64.  Encodes without padding, but accepts it on decoding."""
