# Licensed under the GPLv3 - see LICENSE
"""Base16 (hexadecimal) encoding and decoding."""
from ..base.base import FileOpener
from .scheme import BASE16, BASE16_ALPHABET  # noqa


open = FileOpener.create(globals())
