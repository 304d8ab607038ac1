# Licensed under the GPLv3 - see LICENSE
"""Base32 encoding and decoding, with standard or extended hex alphabet.

For the specification, see https://www.rfc-editor.org/rfc/rfc4648
"""
from ..base.base import FileOpener
from .scheme import (BASE32, BASE32HEX,  # noqa
                     BASE32_ALPHABET, BASE32HEX_ALPHABET)


open = FileOpener.create(globals())
