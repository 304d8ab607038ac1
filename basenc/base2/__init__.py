# Licensed under the GPLv3 - see LICENSE
"""Base2 encoding and decoding, as strings of '0' and '1'.

Bits can be ordered with the most significant first (``base2msbf``) or
the least significant first (``base2lsbf``).
"""
from ..base.base import FileOpener
from .scheme import BASE2MSBF, BASE2LSBF, BASE2_ALPHABET  # noqa


open = FileOpener.create(globals())
