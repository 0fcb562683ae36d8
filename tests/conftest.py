import pytest


def make_iod_line(norad="23862", designator="96 029D  ", station="4553", conditions="G",
                  timestamp="20120511221706217", precision="17", angle_format="2",
                  epoch="5", ra="2121225", dec="+480700", uncertainty="37",
                  behaviour="S", magnitude=""):
    """Assembles an IOD line field by field; magnitude is sign + 3 digits, e.g. '+020'."""
    return (f"{norad:5} {designator:9} {station:4} {conditions} {timestamp} {precision} "
            f"{angle_format}{epoch} {ra:7}{dec:7} {uncertainty:2} {behaviour}{magnitude}")


@pytest.fixture
def iod_line():
    """Factory for IOD lines."""
    return make_iod_line


@pytest.fixture
def iod_file(tmp_path):
    """An IOD file with two observations, a comment and a garbage line."""
    path = tmp_path / "obs.iod"
    lines = [
        "# satobs report",
        make_iod_line(),
        make_iod_line(norad="40258", designator="14 067A  ", station="0433",
                      timestamp="20141022021347291", angle_format="1",
                      ra="1234567", dec="+123456", magnitude="+020"),
        "not an observation at all",
    ]
    path.write_text("\n".join(lines) + "\n")
    return str(path)


HORIZONS_HEADER = [
    "*******************************************************************************",
    "Ephemeris / WWW_USER Tue Oct 14 10:00:00 2014 Pasadena, USA      / Horizons",
    "*******************************************************************************",
    "Target body name: Gaia (spacecraft) (-139479)     {source: Gaia_merged}",
    "Center body name: Earth (399)                     {source: DE431}",
    "*******************************************************************************",
]


def _epoch_line(jd, date):
    return f"{jd:.9f} = A.D. {date} 00:00:00.0000 TDB "


def make_horizons_text(labelled=False, velocities=False, truncate=False):
    """Builds a two-record Horizons VECTORS table."""
    records = [
        (2456944.5, "2014-Oct-14", (1.0e-2, -2.5e-3, 3.75e-4), (1.0e-4, -2.0e-4, 3.0e-5)),
        (2456945.5, "2014-Oct-15", (1.1e-2, -2.4e-3, 3.5e-4), (1.1e-4, -2.1e-4, 3.1e-5)),
    ]
    lines = list(HORIZONS_HEADER)
    if velocities:
        lines.append("   VX    VY    VZ")
    lines.append("$$SOE")
    for jd, date, (x, y, z), (vx, vy, vz) in records:
        lines.append(_epoch_line(jd, date))
        if labelled:
            lines.append(f" X ={x:22.15E} Y ={y:22.15E} Z ={z:22.15E}")
            if velocities:
                lines.append(f" VX={vx:22.15E} VY={vy:22.15E} VZ={vz:22.15E}")
        else:
            lines.append(f" {x:22.15E} {y:22.15E} {z:22.15E}")
            if velocities:
                lines.append(f" {vx:22.15E} {vy:22.15E} {vz:22.15E}")
    lines.append("$$EOE")
    if truncate:
        lines = lines[:lines.index("$$EOE") - (2 if velocities else 1)]
    return "\n".join(lines) + "\n"


@pytest.fixture
def horizons_text():
    """Factory for Horizons VECTORS tables."""
    return make_horizons_text
