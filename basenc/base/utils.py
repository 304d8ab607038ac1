# Licensed under the GPLv3 - see LICENSE
from math import gcd

import numpy as np

from .errors import MemoryExhaustedError, ReadError


__all__ = ['INVALID', 'SKIP', 'PAD', 'lcm', 'byte_array', 'Buffer']


INVALID = -1
"""Decoding table entry for characters that are not part of the alphabet."""
SKIP = -2
"""Decoding table entry for line breaks, which are always ignored."""
PAD = -3
"""Decoding table entry for the padding character."""


def lcm(a, b):
    """Calculate the least common multiple of a and b."""
    return abs(a * b) // gcd(a, b)


def byte_array(data):
    """Convert data to a byte array.

    Parameters
    ----------
    data : ~numpy.ndarray, bytes-like, or str
        Data to convert.  For a `~numpy.ndarray`, a flat byte view is taken.
        A `str` is taken to be ASCII text.

    Returns
    -------
    byte_array : `~numpy.ndarray` of byte
    """
    if isinstance(data, np.ndarray):
        # Quick turn-around for input that is OK already.
        return np.ascontiguousarray(data).reshape(-1).view('u1')

    if isinstance(data, str):
        data = data.encode('ascii')

    return np.frombuffer(data, dtype='u1')


class Buffer:
    """Fixed-capacity byte buffer owned by a single stream.

    Parameters
    ----------
    capacity : int
        Maximum number of bytes the buffer can hold.

    Raises
    ------
    ~basenc.base.errors.MemoryExhaustedError
        If the memory for the buffer could not be allocated.
    """

    def __init__(self, capacity):
        try:
            self._data = np.empty(capacity, dtype='u1')
        except MemoryError:
            raise MemoryExhaustedError(
                f"memory allocation failed for a {capacity} byte buffer."
            ) from None
        self.nbytes = 0

    @property
    def capacity(self):
        """Maximum number of bytes in the buffer."""
        return self._data.size

    @property
    def free(self):
        """Number of bytes that can still be added."""
        return self.capacity - self.nbytes

    @property
    def full(self):
        return self.nbytes == self.capacity

    def __len__(self):
        return self.nbytes

    def view(self):
        """Array view of the filled part of the buffer."""
        return self._data[:self.nbytes]

    def clear(self):
        self.nbytes = 0

    def fill(self, data):
        """Copy as much of ``data`` into the buffer as fits.

        Returns
        -------
        count : int
            Number of bytes of ``data`` that were used.
        """
        data = byte_array(data)
        count = min(len(data), self.free)
        self._data[self.nbytes:self.nbytes + count] = data[:count]
        self.nbytes += count
        return count

    def fill_from(self, fh):
        """Read from a filehandle until the buffer is full or input ends.

        Parameters
        ----------
        fh : filehandle
            Opened for reading in binary mode.

        Returns
        -------
        eof : bool
            Whether the end of the input was reached.
        """
        while not self.full:
            try:
                data = fh.read(self.free)
            except OSError as exc:
                raise ReadError(f"read error: {exc}") from exc

            if not data:
                return True

            self.fill(data)

        return False
