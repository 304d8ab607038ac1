# Licensed under the GPLv3 - see LICENSE
"""
Definitions for Z85 blocks.

Implements a Z85BlockCoder class that encodes groups of 4 bytes into 5
base-85 digits and decodes them again.

See the `ZeroMQ specification <https://rfc.zeromq.org/spec/32/>`_ for
details.
"""
import warnings

import numpy as np

from ..base.payload import BlockCoderBase


__all__ = ['Z85BlockCoder']


powers85 = 85 ** np.arange(4, -1, -1, dtype=np.int64)
"""Weights of the five digits of a group, most significant first."""


class Z85BlockCoder(BlockCoderBase):
    """Coder for Z85, which maps big-endian 32-bit words to 5 digits.

    Unlike for the radix-2^n schemes, there is no way to encode partial
    words, so input lengths have to be a multiple of 4 bytes when
    encoding and of 5 symbols when decoding.

    Parameters
    ----------
    scheme : `~basenc.z85.Z85Scheme`
        Descriptor of the scheme.
    """

    def _encode(self, data):
        words = data.view('>u4').astype(np.int64)
        digits = (words[:, np.newaxis] // powers85) % 85
        return digits.reshape(-1)

    def _decode(self, values):
        words = values.reshape(-1, 5).astype(np.int64) @ powers85
        overflow = words > 0xffffffff
        if overflow.any():
            warnings.warn("Z85 groups with values beyond 32 bits found; "
                          "only their lower 32 bits are kept.")
            words &= 0xffffffff
        return words.astype('>u4').tobytes()
