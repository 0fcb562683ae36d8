"""Satellite designator helpers."""

# Launch years 1957..1999 start with '5'..'9'; everything else is 2000 onwards
TWENTIETH_CENTURY_DIGITS = "56789"


def century_prefix(first_char):
    """
    Returns the century for a two-digit launch year.
    Example: '9' -> '19', '1' -> '20'
    """
    if first_char in TWENTIETH_CENTURY_DIGITS:
        return "19"
    return "20"


def expand_designator(raw):
    """
    Converts the 9-character IOD designator field into the 11-character
    MPC form.
    Example: '98 067A  ' -> '1998-067A  '

    Args:
        raw (str): Input columns 7-15 ("YY NNNPPP").

    Returns:
        str: "YYYY-NNNPPP", piece padding kept as it was.
    """
    if len(raw) != 9:
        raise ValueError("Designator field must be 9 characters long.")
    return century_prefix(raw[0]) + raw[:2] + "-" + raw[3:]
