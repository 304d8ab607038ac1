# Licensed under the GPLv3 - see LICENSE
"""Base classes shared by all encoding schemes.

Scheme descriptors live in `~basenc.base.scheme`, the block coders that
do the actual packing and unpacking in `~basenc.base.payload`, and the
stream encoder and decoder in `~basenc.base.base`.
"""
