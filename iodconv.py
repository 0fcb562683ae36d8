"""
IOD to MPC observation conversion.

The IOD (Interactive Orbit Determination) observation format is described at
http://www.satobs.org/position/IODformat.html

Each IOD line is converted on its own into one 80-column MPC record. Lines
that don't look like IOD observations are skipped without complaint.
"""
from iodcodes import OBSERVER_CODES, lookup_code
from iodlayout import (
    AngleFormat,
    IOD_MIN_LENGTH, IOD_GATE_SPACE, IOD_DIGITS_START, IOD_DIGITS_END,
    IOD_DESIGNATOR, IOD_STATION, IOD_ANGLE_FORMAT,
    IOD_RA_HOURS, IOD_RA_MINUTES, IOD_RA_SUB, IOD_RA_EXTRA,
    IOD_DEC_DEGREES, IOD_DEC_MINUTES, IOD_DEC_SUB, IOD_DEC_FRACTION,
    IOD_MAG_SIGN, IOD_MAG_TENS, IOD_MAG_UNITS, IOD_MAG_TENTHS,
    MPC_LINE_LENGTH, MPC_CENTURY, MPC_NOTE, MPC_NOTE_VALUE, MPC_TIME_FLAG,
    MPC_RA_HOURS, MPC_RA_MINUTES, MPC_RA_SUB,
    MPC_RA_SECONDS_POINT, MPC_RA_SECONDS_EXTRA,
    MPC_RA_MINUTES_POINT, MPC_RA_MINUTES_EXTRA,
    MPC_DEC_DEGREES, MPC_DEC_DEGREES_POINT, MPC_DEC_FRACTION,
    MPC_DEC_MINUTES, MPC_DEC_MINUTES_POINT, MPC_DEC_SUB,
    MPC_MAG_TENS, MPC_MAG_UNITS, MPC_MAG_POINT, MPC_MAG_TENTHS,
    MPC_OBSERVER,
)
from iodtime import extended_time_field, standard_time_field
from satutl import expand_designator


def _put(record, pos, text):
    record[pos:pos + len(text)] = text


def passes_gate(line):
    """
    Checks that a line has the fixed IOD layout: long enough, a blank in
    column 23 and exactly 17 digits (the timestamp) from column 24 on.
    """
    line = line.rstrip('\r\n')
    if len(line) < IOD_MIN_LENGTH or line[IOD_GATE_SPACE] != ' ':
        return False

    end = IOD_DIGITS_START
    while end < len(line) and '0' <= line[end] <= '9':
        end += 1
    return end == IOD_DIGITS_END


# --- RA layouts ---

def _ra_seconds(record, line):
    """HH MM SS.s"""
    record[MPC_RA_SECONDS_POINT] = '.'
    record[MPC_RA_SECONDS_EXTRA] = line[IOD_RA_EXTRA]


def _ra_decimal_minutes(record, line):
    """HH MM.mmm"""
    record[MPC_RA_MINUTES_POINT] = '.'
    record[MPC_RA_MINUTES_EXTRA] = line[IOD_RA_EXTRA]


RA_LAYOUTS = {
    AngleFormat.SECONDS: _ra_seconds,
    AngleFormat.DECIMAL_MINUTES: _ra_decimal_minutes,
    AngleFormat.DECIMAL_DEGREES: _ra_decimal_minutes,
    AngleFormat.OTHER: _ra_decimal_minutes,
}


# --- Dec layouts ---

def _dec_seconds(record, line):
    """sDD MM SS"""
    _put(record, MPC_DEC_MINUTES, line[IOD_DEC_MINUTES])
    _put(record, MPC_DEC_SUB, line[IOD_DEC_SUB])


def _dec_decimal_minutes(record, line):
    """sDD MM.mm"""
    _put(record, MPC_DEC_MINUTES, line[IOD_DEC_MINUTES])
    record[MPC_DEC_MINUTES_POINT] = '.'
    _put(record, MPC_DEC_SUB, line[IOD_DEC_SUB])


def _dec_decimal_degrees(record, line):
    """sDD.dddd"""
    record[MPC_DEC_DEGREES_POINT] = '.'
    _put(record, MPC_DEC_FRACTION, line[IOD_DEC_FRACTION])


DEC_LAYOUTS = {
    AngleFormat.SECONDS: _dec_seconds,
    AngleFormat.DECIMAL_MINUTES: _dec_decimal_minutes,
    AngleFormat.DECIMAL_DEGREES: _dec_decimal_degrees,
    AngleFormat.OTHER: _dec_seconds,
}


def _put_magnitude(record, line):
    # Only positive magnitudes are carried over; anything else stays blank
    if line[IOD_MAG_SIGN] != '+':
        return
    if line[IOD_MAG_TENS] != '0':
        record[MPC_MAG_TENS] = line[IOD_MAG_TENS]
    record[MPC_MAG_UNITS] = line[IOD_MAG_UNITS]
    record[MPC_MAG_POINT] = '.'
    record[MPC_MAG_TENTHS] = line[IOD_MAG_TENTHS]


def convert_line(line, use_extended_time_format=True, codes=OBSERVER_CODES):
    """
    Converts one IOD observation line into an MPC 80-column record.

    Args:
        line (str): Raw IOD line; a trailing newline is ignored.
        use_extended_time_format (bool): If True, the time is written as
            'CYYMMDD:HHMMSSsss' (millisecond precision, Find_Orb only).
            If False, the MPC standard 'YYYY MM DD.dddddd' is used.
        codes (Mapping): Station code -> 3-character observer abbreviation.

    Returns:
        str: The 80-character MPC record, or None if the line doesn't
             pass the structural checks.
    """
    line = line.rstrip('\r\n')
    if not passes_gate(line):
        return None
    # Short lines still have to index up to the magnitude columns
    line = line.ljust(MPC_LINE_LENGTH)

    record = [' '] * MPC_LINE_LENGTH
    _put(record, MPC_CENTURY, expand_designator(line[IOD_DESIGNATOR]))
    record[MPC_NOTE] = MPC_NOTE_VALUE

    if use_extended_time_format:
        _put(record, MPC_TIME_FLAG, extended_time_field(line))
    else:
        _put(record, MPC_TIME_FLAG, standard_time_field(line))

    angle_format = AngleFormat.from_flag(line[IOD_ANGLE_FORMAT])
    _put(record, MPC_RA_HOURS, line[IOD_RA_HOURS])
    _put(record, MPC_RA_MINUTES, line[IOD_RA_MINUTES])
    _put(record, MPC_RA_SUB, line[IOD_RA_SUB])
    RA_LAYOUTS[angle_format](record, line)

    _put(record, MPC_DEC_DEGREES, line[IOD_DEC_DEGREES])
    DEC_LAYOUTS[angle_format](record, line)

    _put_magnitude(record, line)
    _put(record, MPC_OBSERVER, lookup_code(line[IOD_STATION], codes))
    return ''.join(record)


def transcode(lines, sink, secondary=None, use_extended_time_format=True,
              codes=OBSERVER_CODES):
    """
    Converts a sequence of IOD lines, writing every MPC record to `sink`
    and, if given, the same text to `secondary`.

    Args:
        lines (iterable): IOD lines, e.g. an open text file.
        sink: Writable text stream, always written to.
        secondary: Optional second writable text stream.
        use_extended_time_format (bool): See convert_line().
        codes (Mapping): See convert_line().

    Returns:
        int: Number of records written.
    """
    n_written = 0
    for line in lines:
        record = convert_line(line, use_extended_time_format, codes)
        if record is None:
            continue
        sink.write(record + "\n")
        if secondary is not None:
            secondary.write(record + "\n")
        n_written += 1
    return n_written
