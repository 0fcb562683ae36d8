"""
Column layout of IOD observation lines and of the MPC 80-column records
they are converted into.

The IOD format is described at http://www.satobs.org/position/IODformat.html
and the MPC format at https://www.minorplanetcenter.net/iau/info/ObsFormat.html

All positions are 0-indexed. Fields are slices, single columns are ints.
"""
from enum import Enum

# --- IOD input ---
IOD_MIN_LENGTH = 64
IOD_MAX_LENGTH = 200    # longer lines are truncated by the reader
IOD_GATE_SPACE = 22     # must hold a blank
IOD_DIGITS_START = 23   # 17 digits YYYYMMDDHHMMSSsss ...
IOD_DIGITS_END = 40     # ... ending exactly here

IOD_DESIGNATOR = slice(6, 15)   # "YY NNNPPP"
IOD_STATION = slice(16, 20)
IOD_TIMESTAMP = slice(23, 40)

IOD_CENTURY = 24                # second digit of the year
IOD_YYMMDD = slice(25, 31)
IOD_HHMMSSSSS = slice(31, 40)
IOD_YEAR = slice(23, 27)
IOD_MONTH = slice(27, 29)
IOD_DAY_TIME = slice(29, 39)    # DDHHMMSScc

IOD_ANGLE_FORMAT = 44
IOD_RA_HOURS = slice(47, 49)
IOD_RA_MINUTES = slice(49, 51)
IOD_RA_SUB = slice(51, 53)      # seconds, or hundredths of a minute
IOD_RA_EXTRA = 53
IOD_DEC_DEGREES = slice(54, 57) # sign included
IOD_DEC_MINUTES = slice(57, 59)
IOD_DEC_SUB = slice(59, 61)
IOD_DEC_FRACTION = slice(57, 61)

IOD_MAG_SIGN = 66
IOD_MAG_TENS = 67
IOD_MAG_UNITS = 68
IOD_MAG_TENTHS = 69

# --- MPC output ---
MPC_LINE_LENGTH = 80

MPC_CENTURY = 0         # "YYYY-NNNPPP", 11 columns
MPC_NOTE = 14           # 'C' = CCD observation
MPC_NOTE_VALUE = 'C'

MPC_TIME_FLAG = 15      # 17 columns, "KYYMMDD:HHMMSSsss" or "YYYY MM DD.dddddd"
MPC_DAY_FORMAT = "%09.6f"

MPC_RA_HOURS = 32
MPC_RA_MINUTES = 35
MPC_RA_SUB = 38
MPC_RA_SECONDS_POINT = 40
MPC_RA_SECONDS_EXTRA = 41
MPC_RA_MINUTES_POINT = 37
MPC_RA_MINUTES_EXTRA = 40

MPC_DEC_DEGREES = 44
MPC_DEC_DEGREES_POINT = 47
MPC_DEC_FRACTION = 48
MPC_DEC_MINUTES = 48
MPC_DEC_MINUTES_POINT = 50
MPC_DEC_SUB = 51

MPC_MAG_TENS = 65
MPC_MAG_UNITS = 66
MPC_MAG_POINT = 67
MPC_MAG_TENTHS = 68

MPC_OBSERVER = 77
UNKNOWN_OBSERVER = "???"


class AngleFormat(Enum):
    """IOD angle format code (column 44) as far as RA/Dec layout is concerned."""
    SECONDS = '1'           # HHMMSSs  +DDMMSS
    DECIMAL_MINUTES = '2'   # HHMMmmm  +DDMMmm
    DECIMAL_DEGREES = '3'   # HHMMmmm  +DDdddd
    OTHER = None            # anything else (alt/az and friends)

    @classmethod
    def from_flag(cls, flag):
        for member in cls:
            if member.value == flag:
                return member
        return cls.OTHER
