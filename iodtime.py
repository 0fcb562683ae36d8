import numpy as np
from astropy.time import Time

from iodlayout import (
    IOD_CENTURY, IOD_YYMMDD, IOD_HHMMSSSSS, IOD_YEAR, IOD_MONTH, IOD_DAY_TIME,
    MPC_DAY_FORMAT,
)

# Weights for the (DD, HH, MM, SS, cc) digit pairs, in days
DAY_PAIR_DIVISORS = np.array([1.0, 24.0, 1440.0, 86400.0, 8640000.0])


def extended_time_field(line):
    """
    Builds the 17-character extended time field (MPC columns 16-32),
    e.g. 'K130213:032353605' for 2013 Feb 13, 03:23:53.605.

    Only Find_Orb understands this form, but it keeps the millisecond
    precision of the IOD timestamp. Nothing is computed, the digits are
    moved around verbatim.
    """
    century = 'J' if line[IOD_CENTURY] == '9' else 'K'
    return century + line[IOD_YYMMDD] + ':' + line[IOD_HHMMSSSSS]


def fractional_day(digits):
    """
    Converts ten digits DDHHMMSScc into a fractional day of month.

    Args:
        digits (str): Day, hours, minutes, seconds and hundredths of a
            second, two digits each.

    Returns:
        float: Day of month, e.g. '2202134729' -> 22.0929084...
    """
    values = np.frombuffer(digits.encode('ascii'), dtype=np.uint8).astype(np.int64) - ord('0')
    if values.size != 10 or np.any((values < 0) | (values > 9)):
        raise ValueError(f"Expected ten digits, got '{digits}'")
    pairs = values[0::2] * 10 + values[1::2]

    # Summed in order, so the result matches a plain left-to-right evaluation
    day = 0.0
    for pair, divisor in zip(pairs, DAY_PAIR_DIVISORS):
        day += float(pair) / divisor
    return day


def standard_time_field(line):
    """
    Builds the 17-character MPC standard time field 'YYYY MM DD.dddddd'.
    Precision is 0.000001 day = 86.4 milliseconds.
    """
    day = fractional_day(line[IOD_DAY_TIME])
    return line[IOD_YEAR] + ' ' + line[IOD_MONTH] + ' ' + (MPC_DAY_FORMAT % day)


def iod_timestamp_to_nfd(timestamp):
    """
    Converts a 17-digit IOD timestamp 'YYYYMMDDHHMMSSsss' into
    'YYYY-MM-DDTHH:MM:SS.sss' format (NFD).
    """
    if len(timestamp) != 17 or not timestamp.isdigit():
        raise ValueError(f"Invalid IOD timestamp: '{timestamp}'")
    return (f"{timestamp[0:4]}-{timestamp[4:6]}-{timestamp[6:8]}T"
            f"{timestamp[8:10]}:{timestamp[10:12]}:{timestamp[12:14]}.{timestamp[14:17]}")


def nfd_to_mjd(nfd_str):
    """
    Converts a date string in 'YYYY-MM-DDTHH:MM:SS.fff' format (NFD)
    to Modified Julian Date (MJD), UTC.
    """
    try:
        t = Time(nfd_str, format='isot', scale='utc')
    except ValueError:
        raise ValueError(f"Invalid date format: '{nfd_str}'. Expected 'YYYY-MM-DDTHH:MM:SS.fff'")
    return t.mjd


def jd_to_nfd(jd, scale='tdb'):
    """Converts a Julian Date to 'YYYY-MM-DDTHH:MM:SS.fff' in the given time scale."""
    t = Time(jd, format='jd', scale=scale)
    return t.isot[:23]
