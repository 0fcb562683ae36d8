import pytest

from iodcodes import (
    BUILTIN_CODES, OBSERVER_CODES, build_code_table, lookup_code,
    read_code_file, load_observer_codes, get_code_filepath,
)


def test_builtin_table():
    assert len(OBSERVER_CODES) == len(BUILTIN_CODES) == 16
    assert OBSERVER_CODES["0433"] == "GRR"
    assert OBSERVER_CODES["4171"] == "CBa"
    assert OBSERVER_CODES["8336"] == "Tu1"


def test_builtin_table_is_read_only():
    with pytest.raises(TypeError):
        OBSERVER_CODES["9999"] = "New"


def test_lookup_code():
    assert lookup_code("7778") == "E12"
    assert lookup_code("0000") == "???"
    assert lookup_code("0433", codes={}) == "???"


def test_duplicate_code_rejected():
    with pytest.raises(ValueError, match="more than once"):
        build_code_table([("0433", "GRR"), ("1086", "AOO"), ("0433", "Gre")])


@pytest.mark.parametrize("entry", [("043", "GRR"), ("0433", "GR"), ("04333", "GRR")])
def test_malformed_entry_rejected(entry):
    with pytest.raises(ValueError):
        build_code_table([entry])


@pytest.fixture
def code_file(tmp_path):
    path = tmp_path / "obscodes.txt"
    path.write_text(
        "# No  Abbr  Observer\n"
        "\n"
        "2018 PWi   Peter Wakelin\n"
        "2701 TLi\n"
        "this line is not a station\n"
    )
    return str(path)


def test_read_code_file(code_file):
    with pytest.warns(UserWarning, match="Could not parse line 5"):
        entries = read_code_file(code_file)
    assert entries == [("2018", "PWi"), ("2701", "TLi")]


def test_load_observer_codes_merges(code_file):
    with pytest.warns(UserWarning):
        codes = load_observer_codes(code_file)
    assert codes["2018"] == "PWi"
    assert codes["0433"] == "GRR"
    assert len(codes) == 18


def test_load_observer_codes_redefinition(tmp_path):
    path = tmp_path / "obscodes.txt"
    path.write_text("0433 Gre  Someone else\n")
    with pytest.raises(ValueError):
        load_observer_codes(str(path))


def test_load_observer_codes_missing_file(tmp_path):
    assert load_observer_codes(str(tmp_path / "nope.txt")) is OBSERVER_CODES


def test_code_filepath_from_environment(monkeypatch, code_file, tmp_path):
    monkeypatch.setenv("ST_OBSCODES_TXT", code_file)
    assert get_code_filepath() == code_file

    monkeypatch.delenv("ST_OBSCODES_TXT")
    monkeypatch.setenv("ST_DATADIR", str(tmp_path))
    assert get_code_filepath() == str(tmp_path / "data" / "obscodes.txt")


def test_code_filepath_warns_on_missing_env_file(monkeypatch, tmp_path):
    monkeypatch.setenv("ST_OBSCODES_TXT", str(tmp_path / "missing.txt"))
    monkeypatch.setenv("ST_DATADIR", str(tmp_path))
    with pytest.warns(UserWarning, match="not found"):
        path = get_code_filepath()
    assert path == str(tmp_path / "data" / "obscodes.txt")
