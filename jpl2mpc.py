"""
jpl2mpc: convert an ephemeris gathered from JPL's Horizons system into the
format used by MPC's DASO service.

The Horizons ephemeris must be a text VECTORS table in AU, equatorial J2000
(not the default ecliptic) coordinates, e.g. an e-mail job with

    TABLE_TYPE = 'VECTORS'
    CENTER     = '500@399'
    REF_PLANE  = 'FRAME'
    REF_SYSTEM = 'J2000'
    OUT_UNITS  = 'AU-D'
    VECT_TABLE = '1'
    VECT_CORR  = 'NONE'
    CAL_FORMAT = 'CAL'

VECT_TABLE = '2' adds velocities, which are then carried over as well;
range, range-rate and light time are ignored if present.
"""
import argparse
import re
import sys

import numpy as np

try:
    from iodtime import jd_to_nfd
except ImportError as e:
    print(f"Error importing helper module iodtime: {e}")
    sys.exit(1)

__version__ = "0.1.0"

JD_MIN = 2000000.0
JD_MAX = 3000000.0
MIN_EPOCH_LINE_LENGTH = 54
EPOCH_TAG = (17, " = A.D.")
EPOCH_TIME_TAG = (42, ":00.0000 TDB")
VELOCITY_HEADER = "   VX    VY    VZ"
START_OF_EPHEMERIS = "$$SOE"

# Column where each of X, Y, Z starts in a data line
PLAIN_COLUMNS = (1, 24, 47)
LABELLED_COLUMNS = (4, 30, 56)   # " X =-1.2E-01 Y = ..."

LEADING_FLOAT_RE = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def _leading_float(text):
    """Parses the number at the start of `text`, 0.0 if there is none."""
    match = LEADING_FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def _has_tag(line, tag):
    column, text = tag
    return line[column:column + len(text)] == text


def _is_epoch_line(line):
    jd = _leading_float(line)
    return (JD_MIN < jd < JD_MAX and len(line) >= MIN_EPOCH_LINE_LENGTH
            and _has_tag(line, EPOCH_TAG) and _has_tag(line, EPOCH_TIME_TAG))


def _columns_for(line):
    return LABELLED_COLUMNS if line[1:2] == 'X' else PLAIN_COLUMNS


def _read_triplet(line, columns):
    return [_leading_float(line[column:]) for column in columns]


class HorizonsEphemeris:
    """Class to hold the vectors read from a Horizons ephemeris."""
    def __init__(self):
        self.jd = np.zeros(0)              # Epochs, JD (TDB)
        self.positions = np.zeros((0, 3))  # AU
        self.velocities = None             # AU/day, only for state vector tables
        self.header = []                   # Lines preceding $$SOE

    @property
    def n_steps(self):
        return len(self.jd)

    @property
    def jd0(self):
        return float(self.jd[0]) if self.n_steps else 0.0

    @property
    def step_size(self):
        return float(self.jd[1] - self.jd[0]) if self.n_steps > 1 else 0.0


def read_horizons_vectors(lines):
    """
    Reads a Horizons VECTORS table.

    Args:
        lines (iterable): Lines of the Horizons output, e.g. an open file.

    Returns:
        HorizonsEphemeris: Epochs, positions and (if the table has them)
                           velocities, plus the header text.

    Raises:
        ValueError: If the file ends in the middle of a record.
    """
    lines = [line.rstrip('\r\n') for line in lines]
    ephem = HorizonsEphemeris()

    for line in lines:
        if line.startswith(START_OF_EPHEMERIS):
            break
        ephem.header.append(line)

    state_vectors = False
    jds, positions, velocities = [], [], []
    remaining = iter(lines)
    for line in remaining:
        if _is_epoch_line(line):
            data = next(remaining, None)
            if data is None:
                raise ValueError("Failed to get data from input file")
            # Velocities share the layout of the position line
            columns = _columns_for(data)
            jds.append(_leading_float(line))
            positions.append(_read_triplet(data, columns))
            if state_vectors:
                data = next(remaining, None)
                if data is None:
                    raise ValueError("Failed to get data from input file")
                velocities.append(_read_triplet(data, columns))
        elif line.startswith(VELOCITY_HEADER):
            state_vectors = True

    ephem.jd = np.array(jds, dtype=float)
    ephem.positions = np.array(positions, dtype=float).reshape(-1, 3)
    if state_vectors:
        ephem.velocities = np.array(velocities, dtype=float).reshape(-1, 3)
    return ephem


def write_daso_ephemeris(ephem, ofile):
    """
    Writes an ephemeris in DASO form: a 'JD0 step count' line, one line
    per epoch, then the Horizons header for reference.
    """
    ofile.write("%13.5f %10.6f %4d\n" % (ephem.jd0, ephem.step_size, ephem.n_steps))
    for i in range(ephem.n_steps):
        x, y, z = ephem.positions[i]
        ofile.write("%13.5f%16.10f%16.10f%16.10f" % (ephem.jd[i], x, y, z))
        if ephem.velocities is None:
            ofile.write("\n")
        else:
            vx, vy, vz = ephem.velocities[i]
            ofile.write(" %16.12f%16.12f%16.12f\n" % (vx, vy, vz))

    ofile.write(f"\n\nCreated from Horizons data by 'jpl2mpc', ver {__version__}\n")
    for line in ephem.header:
        ofile.write(line + "\n")


USAGE = """
JPL2MPC takes input ephemeri(de)s generated by HORIZONS,
and produces file(s) suitable for use in DASO.  The name of
the input ephemeris must be provided as a command-line argument.
For example:

jpl2mpc gaia.txt

The JPL ephemeris must be in text form (can use the 'download/save'
option for this),  with vectors in units of AU.  Also,  the data
should be equatorial (not the default ecliptic!) coordinates.
You can also select position (xyz) output only,  if you wish,  but
you don't have to;  velocities and range/rate/light time will
simply be ignored if present.
"""


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='jpl2mpc: Convert a JPL Horizons vector ephemeris to DASO format.',
    )
    parser.add_argument('input', nargs='?', default=None,
                        help='Horizons ephemeris (text VECTORS table)')
    parser.add_argument('output', nargs='?', default=None,
                        help='Output file [default: stdout]')
    args = parser.parse_args(argv)

    if args.input is None:
        print(USAGE)
        sys.exit(1)

    try:
        with open(args.input, 'r', encoding='latin-1') as ifile:
            ephem = read_horizons_vectors(ifile)
    except OSError:
        print(f"\nCouldn't open the Horizons file '{args.input}'")
        print(USAGE)
        sys.exit(1)
    except ValueError as e:
        print(e)
        sys.exit(2)

    if args.output:
        try:
            with open(args.output, 'w') as ofile:
                write_daso_ephemeris(ephem, ofile)
        except OSError:
            print(f"\nCouldn't open the output file '{args.output}'")
            sys.exit(1)
    else:
        write_daso_ephemeris(ephem, sys.stdout)

    if ephem.n_steps:
        print(f"JD0: {ephem.jd0:f} ({jd_to_nfd(ephem.jd0)} TDB)   "
              f"Step size: {ephem.step_size:f}   {ephem.n_steps} steps", file=sys.stderr)
    else:
        print("No ephemeris records found.", file=sys.stderr)
    return ephem


if __name__ == "__main__":
    main()
