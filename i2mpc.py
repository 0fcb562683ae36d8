import argparse
import sys

# Import sibling modules
try:
    from iodcodes import load_observer_codes
    from iodconv import passes_gate, transcode
    from iodlayout import IOD_MAX_LENGTH, IOD_TIMESTAMP
    from iodtime import iod_timestamp_to_nfd, nfd_to_mjd
except ImportError as e:
    print(f"Error importing helper modules (iodcodes, iodconv, iodlayout, iodtime): {e}")
    print("Please ensure the i2mpc modules are installed.")
    sys.exit(1)


def observation_mjds(lines):
    """Returns the MJDs of the lines that pass the IOD layout checks, skipping impossible dates."""
    mjds = []
    for line in lines:
        if not passes_gate(line):
            continue
        try:
            mjds.append(nfd_to_mjd(iod_timestamp_to_nfd(line[IOD_TIMESTAMP])))
        except ValueError:
            continue
    return mjds


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='i2mpc: Convert IOD satellite observations to MPC 80-column format.',
        epilog='Records are always written to stdout; OUTPUT receives a copy.'
    )
    parser.add_argument('input',
                        help='IOD observation file')
    parser.add_argument('output', nargs='?', default=None,
                        help='Optional file to receive a copy of the MPC records')
    parser.add_argument('-f', '--standard-time', action='store_true',
                        help='Write times in MPC standard format (0.000001 day precision) '
                             'instead of the millisecond extended format')
    parser.add_argument('-c', '--codes', default=None,
                        help='Extra observer code file (default from ST_OBSCODES_TXT '
                             'or ST_DATADIR/data/obscodes.txt, if present)')

    args, unknown = parser.parse_known_args(argv)
    for option in unknown:
        print(f"Option '{option}' ignored", file=sys.stderr)

    try:
        # One character per byte, whatever the observer's locale
        with open(args.input, 'r', encoding='latin-1') as ifile:
            lines = [line[:IOD_MAX_LENGTH] for line in ifile]
    except OSError:
        print(f"Couldn't find '{args.input}'")
        sys.exit(1)

    try:
        codes = load_observer_codes(args.codes)
    except (OSError, ValueError) as e:
        print(f"Error loading observer codes: {e}")
        sys.exit(1)

    use_extended_time_format = not args.standard_time

    if args.output:
        try:
            ofile = open(args.output, 'w')
        except OSError:
            print(f"Couldn't open output file '{args.output}'")
            sys.exit(1)
        with ofile:
            n_written = transcode(lines, sys.stdout, ofile,
                                  use_extended_time_format=use_extended_time_format,
                                  codes=codes)
    else:
        n_written = transcode(lines, sys.stdout,
                              use_extended_time_format=use_extended_time_format,
                              codes=codes)

    mjds = observation_mjds(lines)
    if mjds:
        print(f"Converted {n_written} observations, MJD {min(mjds):.5f} to {max(mjds):.5f}",
              file=sys.stderr)
    else:
        print(f"Converted {n_written} observations", file=sys.stderr)
    return n_written


if __name__ == "__main__":
    main()
