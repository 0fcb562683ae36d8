import os
import re
import warnings
from types import MappingProxyType

from iodlayout import UNKNOWN_OBSERVER

# Station code -> MPC-style observer abbreviation.
# Many more satellite observer sites are listed at
# https://github.com/cbassa/sattools/blob/master/data/sites.txt
BUILTIN_CODES = (
    ("0433", "GRR"),    # Greg Roberts
    ("1086", "AOO"),    # Odessa Astronomical Observatory, Kryzhanovka
    ("1244", "AMa"),    # Andriy Makeyev
    ("1753", "VMe"),    # Vitaly Mechinsky
    ("1775", "Fet"),    # Kevin Fetter
    ("1860", "SGu"),    # Sergey Guryanov, Siberia, N56.1016, E94.5536, Alt=170m
    ("4171", "CBa"),    # Cees Bassa
    ("4172", "Alm"),    # ALMERE  52.3713 N 5.2580 E  -3 m ASL
    ("4353", "Lei"),    # Leiden 52.15412 N 4.49081 E  +0 ASL
    ("4355", "Cro"),    # Cronesteyn 52.13878 N 4.49947 E -2 m ASL
    ("4541", "Ran"),    # Alberto Rango
    ("4553", "SOb"),    # Unknown sat observer: 53.3199N, 2.24377W, 86 m
    ("7778", "E12"),    # Siding Spring
    ("8049", "ScT"),    # Roberts Creek 1 (Scott Tilley)
    ("8335", "Tu2"),    # Tulsa-2 (Oklahoma) +35.8311  -96.1411 330m
    ("8336", "Tu1"),    # Tulsa-1 (Oklahoma) +36.139208,-95.983429 201m
)

# Example: 0433 GRR   Greg Roberts
CODE_LINE_RE = re.compile(r"^(\d{4})\s+(\S{3})(?:\s+(.*))?$")


def build_code_table(entries):
    """
    Builds a read-only station code table.

    Args:
        entries (iterable): (code, abbreviation) pairs. Codes are 4 characters,
            abbreviations 3 characters.

    Returns:
        MappingProxyType: code -> abbreviation.

    Raises:
        ValueError: On a malformed entry or a code listed twice.
    """
    table = {}
    for code, abbreviation in entries:
        if len(code) != 4 or len(abbreviation) != 3:
            raise ValueError(f"Malformed observer code entry '{code} {abbreviation}'")
        if code in table:
            raise ValueError(f"Observer code {code} is defined more than once "
                             f"('{table[code]}' and '{abbreviation}')")
        table[code] = abbreviation
    return MappingProxyType(table)


OBSERVER_CODES = build_code_table(BUILTIN_CODES)


def lookup_code(station, codes=OBSERVER_CODES):
    """Returns the abbreviation for a 4-character station code, '???' if unknown."""
    return codes.get(station, UNKNOWN_OBSERVER)


def get_code_filepath():
    """Determines the path to the extra observer code file using environment variables."""
    env_codes_txt = os.getenv("ST_OBSCODES_TXT")
    if env_codes_txt and os.path.exists(env_codes_txt):
        return env_codes_txt

    env_datadir = os.getenv("ST_DATADIR", ".")
    default_path = os.path.join(env_datadir, "data", "obscodes.txt")

    if env_codes_txt:
        warnings.warn(f"ST_OBSCODES_TXT path '{env_codes_txt}' not found. Trying default.")
    return default_path


def read_code_file(filepath):
    """
    Reads (code, abbreviation) pairs from an observer code file.

    One station per line, e.g. "0433 GRR  Greg Roberts". Empty lines and
    lines starting with '#' are skipped, as are lines that don't parse.

    Args:
        filepath (str): Path to the code file.

    Returns:
        list: (code, abbreviation) tuples in file order.
    """
    entries = []
    with open(filepath, 'r') as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue

            match = CODE_LINE_RE.match(line)
            if not match:
                warnings.warn(f"Could not parse line {line_num} in {filepath}: {line}")
                continue
            entries.append((match.group(1), match.group(2)))
    return entries


def load_observer_codes(filepath=None):
    """
    Returns the built-in code table merged with the stations of a code file.

    Args:
        filepath (str, optional): Path to the code file. If None, uses
            ST_OBSCODES_TXT or ST_DATADIR/data/obscodes.txt. A missing
            file leaves the built-in table as it is.

    Returns:
        MappingProxyType: code -> abbreviation.

    Raises:
        ValueError: If the file redefines a code already in the table.
    """
    if filepath is None:
        filepath = get_code_filepath()

    if not os.path.exists(filepath):
        return OBSERVER_CODES

    extra = read_code_file(filepath)
    return build_code_table(BUILTIN_CODES + tuple(extra))
