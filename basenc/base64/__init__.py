# Licensed under the GPLv3 - see LICENSE
"""Base64 encoding and decoding, with standard or URL-safe alphabet.

For the specification, see https://www.rfc-editor.org/rfc/rfc4648
"""
from ..base.base import FileOpener
from .scheme import (BASE64, BASE64URL,  # noqa
                     BASE64_ALPHABET, BASE64URL_ALPHABET)


open = FileOpener.create(globals())
