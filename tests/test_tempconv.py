import pytest

from progkit.tempconv import (
    Celsius,
    Fahrenheit,
    c_to_f,
    f_to_c,
    main,
    parse_celsius,
)


@pytest.mark.parametrize("value", [-40.0, 0.0, 20.0, 37.5, 100.0])
def test_conversion_round_trip(value):
    assert f_to_c(c_to_f(Celsius(value))) == pytest.approx(value)
    assert c_to_f(f_to_c(Fahrenheit(value))) == pytest.approx(value)


def test_conversions_return_unit_types():
    assert isinstance(c_to_f(Celsius(1)), Fahrenheit)
    assert isinstance(f_to_c(Fahrenheit(1)), Celsius)
    assert c_to_f(Celsius(-40)) == -40


def test_celsius_string():
    assert str(Celsius(20)) == "20°C"
    assert str(Celsius(-40)) == "-40°C"
    assert str(Celsius(37.5)) == "37.5°C"
    assert str(Celsius(1e6)) == "1e+06°C"


@pytest.mark.parametrize("text", ["100C", "100°C", "100 C"])
def test_parse_celsius_units(text):
    assert parse_celsius(text) == Celsius(100)


@pytest.mark.parametrize("text", ["212F", "212°F"])
def test_parse_fahrenheit_units(text):
    assert parse_celsius(text) == f_to_c(Fahrenheit(212))


@pytest.mark.parametrize("text", ["abc", "100", "100K", "C"])
def test_parse_invalid(text):
    with pytest.raises(ValueError, match="invalid temperature"):
        parse_celsius(text)


def test_parse_invalid_message():
    with pytest.raises(ValueError) as info:
        parse_celsius("abc")
    assert str(info.value) == 'invalid temperature "abc"'


def test_main_default(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "20°C\n"


def test_main_with_temperature(capsys):
    main(["-temp", "-18C"])
    assert capsys.readouterr().out == "-18°C\n"
    main(["-temp", "212°F"])
    assert capsys.readouterr().out == "100°C\n"


def test_main_rejects_bad_temperature(capsys):
    with pytest.raises(SystemExit):
        main(["-temp", "abc"])
    assert 'invalid temperature "abc"' in capsys.readouterr().err