# Licensed under the GPLv3 - see LICENSE
"""Command-line interface to encode or decode files or standard input.

Usage is like that of the GNU coreutils ``basenc`` program, e.g.::

    basenc --base64 -w 0 file.bin > file.b64
    basenc --base64 -d file.b64 > file.bin
"""
import argparse
import sys

from . import __version__
from . import io as basenc_io
from .base.errors import BasencError
from .core import CodecConfig, run


__all__ = ['main', 'get_parser']


def wrap_size(value):
    """Parse a line wrap size, which should be a non-negative integer."""
    try:
        size = int(value)
    except ValueError:
        size = -1
    if size < 0:
        raise argparse.ArgumentTypeError(f"invalid wrap size: {value!r}")
    return size


def get_parser(prog='basenc'):
    parser = argparse.ArgumentParser(
        prog=prog,
        description="basenc encode or decode FILE, or standard input, to "
        "standard output.  With no FILE, or when FILE is -, read standard "
        "input.")
    schemes = parser.add_argument_group('encodings')
    for name in basenc_io.SCHEMES:
        try:
            scheme = basenc_io.get_scheme(name)
        except BasencError:
            continue
        schemes.add_argument(f'--{name}', action='append_const',
                             dest='schemes', const=name,
                             help=scheme.description or None)

    parser.add_argument('-d', '--decode', action='store_true',
                        help="decode data")
    parser.add_argument('-i', '--ignore-garbage', action='store_true',
                        help="when decoding, ignore non-alphabet characters")
    parser.add_argument('-w', '--wrap', type=wrap_size, metavar='COLS',
                        help="wrap encoded lines after COLS character "
                        "(default 76).  Use 0 to disable line wrapping")
    parser.add_argument('file', nargs='?', default='-', metavar='FILE',
                        help="file to encode or decode (default: stdin)")
    parser.add_argument('--version', action='version',
                        version=f"%(prog)s {__version__ or 'from source'}")
    return parser


def get_config(args, prog='basenc'):
    """Turn parsed command-line arguments into a session configuration."""
    return CodecConfig(scheme=args.schemes[0],
                       mode='decode' if args.decode else 'encode',
                       wrap_column=args.wrap,
                       ignore_garbage=args.ignore_garbage,
                       prog=prog)


def main(argv=None, prog='basenc'):
    """Run the command-line interface.

    Parameters
    ----------
    argv : list of str, optional
        Arguments; by default, those given on the command line.
    prog : str, optional
        Program name, used in messages.  Default: 'basenc'.

    Returns
    -------
    status : int
        Exit status: 0 on success, 1 on failure.
    """
    parser = get_parser(prog)
    args = parser.parse_args(argv)
    if not args.schemes:
        parser.error("missing encoding type")
    if len(set(args.schemes)) > 1:
        parser.error("multiple encoding types given: "
                     + ', '.join(f'--{name}' for name in args.schemes))

    config = get_config(args, prog)
    fh_out = sys.stdout.buffer
    try:
        if args.file == '-':
            run(config, sys.stdin.buffer, fh_out)
        else:
            with open(args.file, 'rb') as fh_in:
                run(config, fh_in, fh_out)

    except (BasencError, OSError) as exc:
        print(f"{prog}: {exc}", file=sys.stderr)
        return 1

    return 0
