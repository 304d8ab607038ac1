# Licensed under the GPLv3 - see LICENSE
"""Z85 encoding and decoding.

Z85 encodes each group of 4 bytes, taken as a big-endian 32-bit integer,
as 5 base-85 digits.  There is no padding, so the input length must be a
multiple of 4 bytes when encoding and of 5 characters when decoding.

For the specification, see https://rfc.zeromq.org/spec/32/
"""
from ..base.base import FileOpener
from .scheme import Z85Scheme, Z85, Z85_ALPHABET  # noqa
from .payload import Z85BlockCoder  # noqa


open = FileOpener.create(globals())
