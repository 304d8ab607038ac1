# Licensed under the GPLv3 - see LICENSE
"""
Definitions for the base2 scheme descriptors.

Each byte is written as 8 characters '0' or '1', with either the most or
the least significant bit first.  Since no padding exists, decoded input
has to consist of a multiple of 8 bits.
"""
from ..base.scheme import RadixScheme


__all__ = ['BASE2_ALPHABET', 'BASE2MSBF', 'BASE2LSBF']


BASE2_ALPHABET = b'01'

BASE2MSBF = RadixScheme(
    'base2msbf', BASE2_ALPHABET, bitorder='big', strict_multiple=1,
    description='bit string with most significant bit (msb) first')

BASE2LSBF = RadixScheme(
    'base2lsbf', BASE2_ALPHABET, bitorder='little', strict_multiple=1,
    description='bit string with least significant bit (lsb) first')
