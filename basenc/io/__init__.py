# Licensed under the GPLv3 - see LICENSE
"""Registry of encoding schemes and entry point.

Gives access to the descriptors of all known schemes by name, i.e.,
``basenc.io.base64`` is the `~basenc.base.scheme.RadixScheme` for the
standard base64 encoding.  Besides the built-in schemes, any descriptors
registered via entry point group 'basenc.schemes' are available, e.g.,
'base58 = mypackage.schemes:BASE58'.

Attributes
----------
SCHEMES : list
    Names of the available schemes, built-in ones first.

"""
import sys

import entrypoints

from ..base.errors import UnsupportedSchemeError
from ..base.scheme import SchemeBase


__all__ = ['get_scheme']


__self__ = sys.modules[__name__]
"""Link to our own module, for convenience below."""

# We only load entries on demand, to keep import time minimal.
_entries = {}
"""Entry points found."""
_bad_entries = set()
"""Any entry points that failed to load. These will not be retried."""

_BUILTIN = (('base64', 'base64', 'BASE64'),
            ('base64url', 'base64', 'BASE64URL'),
            ('base32', 'base32', 'BASE32'),
            ('base32hex', 'base32', 'BASE32HEX'),
            ('base16', 'base16', 'BASE16'),
            ('base2msbf', 'base2', 'BASE2MSBF'),
            ('base2lsbf', 'base2', 'BASE2LSBF'),
            ('z85', 'z85', 'Z85'))


def __getattr__(attr):
    """Get a missing attribute from a possible entry point.

    Looks for the attribute among the (possibly updated) entry points,
    and, if found, tries loading the entry.  If that fails, the entry
    is added to _bad_entries to ensure it does not recur.
    """
    if attr.startswith('_') or attr in _bad_entries:
        raise AttributeError(f"module {__name__!r} has no attribute {attr!r}")

    SCHEMES = globals().setdefault('SCHEMES', [])
    if attr not in _entries:
        if not _entries:
            # On initial update, we add our own schemes as explicit entries,
            # in part to set some order, but also so things work even in a
            # pure source checkout, where entry points are missing.
            SCHEMES.clear()
            _entries.update({
                name: entrypoints.EntryPoint(name, 'basenc.' + module, obj)
                for name, module, obj in _BUILTIN})

        _entries.update({
            name: entry for name, entry
            in entrypoints.get_group_named('basenc.schemes').items()
            if name not in _bad_entries})
        SCHEMES.extend([name for name in _entries if name not in SCHEMES])
        if attr == 'SCHEMES':
            return SCHEMES

    entry = _entries.get(attr, None)
    if entry is None:
        raise AttributeError(f"module {__name__!r} has no attribute {attr!r}")

    try:
        value = entry.load()
    except Exception:
        _entries.pop(attr)
        _bad_entries.add(attr)
        if attr in SCHEMES:
            SCHEMES.remove(attr)
        raise AttributeError(f"{entry} was not loadable. Now removed")

    # Update so we do not have to go through __getattr__ again.
    globals()[attr] = value
    return value


def __dir__():
    # Force update of entries, creates 'SCHEMES' if it doesn't exist.
    hasattr(__self__, 'absolutely_no_way_this_exists')
    return sorted(set(globals()).union(_entries).difference(_bad_entries))


def get_scheme(scheme):
    """Get the descriptor of an encoding scheme.

    Parameters
    ----------
    scheme : str or `~basenc.base.scheme.SchemeBase`
        Name of the scheme (e.g., 'base64'), or a descriptor, which is
        returned unchanged.

    Returns
    -------
    scheme : `~basenc.base.scheme.SchemeBase`

    Raises
    ------
    ~basenc.base.errors.UnsupportedSchemeError
        If the scheme is not known, or its entry does not load a descriptor.
    """
    if isinstance(scheme, SchemeBase):
        return scheme

    if not isinstance(scheme, str) or scheme.startswith('_'):
        raise UnsupportedSchemeError(f"unsupported scheme {scheme!r}.")

    try:
        value = getattr(__self__, scheme)
    except AttributeError:
        value = None

    if not isinstance(value, SchemeBase):
        raise UnsupportedSchemeError(
            f"unsupported scheme {scheme!r} (should be one of "
            f"{', '.join(__self__.SCHEMES)}).")

    return value
