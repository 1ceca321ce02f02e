import argparse
import re
import sys

WRONG_ARGUMENTS = "Wrong number of arguments"
BYTES_TO_COPY_ERROR = ("Number of bytes to copy invalid. "
                       "Must be given as raw number or number followed by 'k' or 'm'.")
START_OFFSET_ERROR = "Start offset invalid. Must be given as a decimal number."
USAGE = ("%(prog)s <pathnfile of dest file> <pathnfile of src file> "
         "<start copying with byte n> "
         "<number of bytes to copy. Either raw number or followed by 'k' or 'm'>")
OPEN_SRC_ERROR = "could not open source file"
OPEN_DEST_ERROR = "could not create destination file"
POSITION_ERROR = "could not go to desired position"

# Checked in this order; the first one found splits the count.
MULTIPLIERS = (
    ('k', 1024),
    ('K', 1024),
    ('m', 1048576),
    ('M', 1048576),
)

# strtol base 0: hex with 0x, octal with a leading 0, decimal otherwise
NUMBER_RE = re.compile(r'\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|(0[0-7]*)|([1-9][0-9]*))')


def exit_on_failure(rc, message):
    """Report message on stderr and leave with return code rc."""
    print(message, file=sys.stderr)
    print(f"exiting program with rc = {rc}", file=sys.stderr)
    sys.exit(rc)


def parse_number(text):
    """Parse an integer the way strtol does with base 0.

    Returns None when the text is not entirely a number. An empty string
    is 0, like strtol converting nothing.
    """
    if text == '':
        return 0
    match = NUMBER_RE.fullmatch(text)
    if match is None:
        return None
    sign, hex_digits, octal_digits, decimal_digits = match.groups()
    if hex_digits is not None:
        value = int(hex_digits, 16)
    elif octal_digits is not None:
        value = int(octal_digits, 8)
    else:
        value = int(decimal_digits, 10)
    return -value if sign == '-' else value


def get_number_of_bytes(arg):
    """Turn a count like '512', '4k' or '0x10M' into a number of bytes.

    Returns -1 when the count has anything but a number and one trailing
    'k', 'K', 'm' or 'M'.
    """
    number = arg
    multiplier = 1
    for suffix, factor in MULTIPLIERS:
        pos = arg.find(suffix)
        if pos != -1:
            if arg[pos + 1:]:
                return -1
            number = arg[:pos]
            multiplier = factor
            break

    value = parse_number(number)
    if value is None:
        return -1
    return value * multiplier


def get_start_offset(arg):
    try:
        return int(arg, 10)
    except ValueError:
        exit_on_failure(1, START_OFFSET_ERROR)


def read_write(dest, src, startpos, n):
    """Copy n bytes of src, starting at startpos, into dest.

    Bytes are moved one at a time. Hitting the end of src first is not an
    error, dest is just shorter. Returns the number of bytes copied.
    """
    try:
        src_file = open(src, 'rb')
    except OSError:
        exit_on_failure(1, OPEN_SRC_ERROR)

    with src_file:
        try:
            dest_file = open(dest, 'wb')
        except OSError:
            exit_on_failure(1, OPEN_DEST_ERROR)

        with dest_file:
            try:
                src_file.seek(startpos)
            except (OSError, ValueError, OverflowError):
                exit_on_failure(1, POSITION_ERROR)

            copied = 0
            while n > 0:
                byte = src_file.read(1)
                if not byte:
                    break
                dest_file.write(byte)
                copied += 1
                n -= 1

    return copied


class NcopyArgumentParser(argparse.ArgumentParser):
    """Argument errors are fatal with rc 1 instead of argparse's 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        exit_on_failure(1, f"{WRONG_ARGUMENTS} ({message})")


def build_parser():
    parser = NcopyArgumentParser(
        prog='ncopy',
        usage=USAGE,
        description='Copy a range of bytes from one file into another.')
    parser.add_argument('dest', help='Destination file, created or truncated')
    parser.add_argument('src', help='Source file')
    parser.add_argument('start', help='Byte offset in the source to start copying from (0-based)')
    parser.add_argument('count', help="Number of bytes to copy, optionally followed by 'k' or 'm'")
    return parser


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    parser = build_parser()
    if argv in (['-h'], ['--help']):
        parser.print_help()
        return 0
    if len(argv) != 4:
        parser.print_usage(sys.stderr)
        exit_on_failure(1, WRONG_ARGUMENTS)

    # Paths and counts may start with '-', never treat them as options
    args = parser.parse_args(['--'] + argv)

    print("Arguments:")
    for i, value in enumerate([parser.prog] + argv):
        print(f"{i}: {value}")

    nbytes = get_number_of_bytes(args.count)
    if nbytes <= 0:
        exit_on_failure(1, BYTES_TO_COPY_ERROR)

    startpos = get_start_offset(args.start)

    read_write(args.dest, args.src, startpos, nbytes)
    return 0


if __name__ == '__main__':
    sys.exit(main())
