import pytest

from progkit.sorting import (
    TRACKS,
    by_artist,
    by_year,
    custom_order,
    format_length,
    format_tracks,
    main,
    parse_length,
)

ARTIST_OUTPUT = """\
Title       Artist          Album              Year  Length
-----       ------          -----              ----  ------
Go Ahead    Alicia Keys     As I Am            2007  4m36s
Go          Delilah         From the Roots Up  2012  3m38s
Ready 2 Go  Martin Solveig  Smash              2011  4m24s
Go          Moby            Moby               1992  3m37s
"""

ARTIST_REV_OUTPUT = """\
Title       Artist          Album              Year  Length
-----       ------          -----              ----  ------
Go          Moby            Moby               1992  3m37s
Ready 2 Go  Martin Solveig  Smash              2011  4m24s
Go          Delilah         From the Roots Up  2012  3m38s
Go Ahead    Alicia Keys     As I Am            2007  4m36s
"""

YEAR_OUTPUT = """\
Title       Artist          Album              Year  Length
-----       ------          -----              ----  ------
Go          Moby            Moby               1992  3m37s
Go Ahead    Alicia Keys     As I Am            2007  4m36s
Ready 2 Go  Martin Solveig  Smash              2011  4m24s
Go          Delilah         From the Roots Up  2012  3m38s
"""

CUSTOM_OUTPUT = """\
Title       Artist          Album              Year  Length
-----       ------          -----              ----  ------
Go          Moby            Moby               1992  3m37s
Go          Delilah         From the Roots Up  2012  3m38s
Go Ahead    Alicia Keys     As I Am            2007  4m36s
Ready 2 Go  Martin Solveig  Smash              2011  4m24s
"""


def trimmed(text):
    return [line.rstrip() for line in text.splitlines()]


def test_by_artist_table():
    assert trimmed(format_tracks(by_artist(TRACKS))) == ARTIST_OUTPUT.splitlines()


def test_reverse_by_artist_table():
    tracks = list(reversed(by_artist(TRACKS)))
    assert trimmed(format_tracks(tracks)) == ARTIST_REV_OUTPUT.splitlines()


def test_by_year_table():
    assert trimmed(format_tracks(by_year(TRACKS))) == YEAR_OUTPUT.splitlines()


def test_custom_table():
    tracks = custom_order(by_year(TRACKS))
    assert trimmed(format_tracks(tracks)) == CUSTOM_OUTPUT.splitlines()


def test_table_rows_have_equal_width():
    lines = format_tracks(TRACKS).splitlines()
    assert len({len(line) for line in lines}) == 1


def test_sorting_keeps_all_tracks():
    for order in (by_artist, by_year, custom_order):
        assert sorted(order(TRACKS), key=repr) == sorted(TRACKS, key=repr)


def test_by_year_is_non_decreasing():
    years = [t.year for t in by_year(TRACKS)]
    assert years == sorted(years)


@pytest.mark.parametrize(
    "text", ["3m38s", "3m37s", "4m36s", "4m24s", "1.5s", "250ms", "1h0m0s", "-2m0s"]
)
def test_length_round_trip(text):
    assert format_length(parse_length(text)) == text


def test_length_units_agree():
    assert parse_length("1m") == parse_length("60s")
    assert parse_length("1h") == 60 * parse_length("1m")
    assert parse_length("1s") == 1000 * parse_length("1ms")


def test_zero_length():
    assert parse_length("0") == 0.0
    assert format_length(0) == "0s"


@pytest.mark.parametrize("text", ["", "bogus", "3", "1x", ".s", "-"])
def test_invalid_length(text):
    with pytest.raises(ValueError):
        parse_length(text)


def test_main_prints_all_sections(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("byArtist:\n")
    for heading in ("Reverse(byArtist):", "byYear:", "Custom:"):
        assert "\n" + heading + "\n" in out