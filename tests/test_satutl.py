import pytest

from satutl import century_prefix, expand_designator


@pytest.mark.parametrize("first_char, expected", [
    ("0", "20"), ("4", "20"), ("5", "19"), ("9", "19"), (" ", "20"),
])
def test_century_prefix(first_char, expected):
    assert century_prefix(first_char) == expected


def test_expand_designator():
    assert expand_designator("98 067A  ") == "1998-067A  "
    assert expand_designator("14-067A  ") == "2014-067A  "
    assert expand_designator("20 001BZ ") == "2020-001BZ "


def test_expand_designator_wrong_length():
    with pytest.raises(ValueError):
        expand_designator("98 067A")
