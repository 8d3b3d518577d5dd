"""Celsius and Fahrenheit temperatures and a command-line temperature option."""

from __future__ import annotations

import argparse
import math
import re
import sys
from decimal import Decimal
from typing import Optional


def _format_g(x: float) -> str:
    """Format x with the shortest digits that round-trip, %g style."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    if x == 0:
        return "-0" if math.copysign(1.0, x) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(x)).as_tuple()
    digits = "".join(map(str, digit_tuple))
    dp = len(digits) + exponent
    digits = digits.rstrip("0")
    prefix = "-" if sign else ""
    exp10 = dp - 1
    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'+' if exp10 >= 0 else '-'}{abs(exp10):02d}"
    if dp <= 0:
        body = "0." + "0" * -dp + digits
    elif dp >= len(digits):
        body = digits + "0" * (dp - len(digits))
    else:
        body = digits[:dp] + "." + digits[dp:]
    return prefix + body


class Celsius(float):
    """A temperature in degrees Celsius."""

    def __str__(self) -> str:
        return f"{_format_g(self)}°C"

    def __repr__(self) -> str:
        return f"Celsius({float(self)!r})"


class Fahrenheit(float):
    """A temperature in degrees Fahrenheit."""

    def __repr__(self) -> str:
        return f"Fahrenheit({float(self)!r})"


def c_to_f(c: float) -> Fahrenheit:
    """Convert a Celsius temperature to Fahrenheit."""
    return Fahrenheit(c * 9.0 / 5.0 + 32.0)


def f_to_c(f: float) -> Celsius:
    """Convert a Fahrenheit temperature to Celsius."""
    return Celsius((f - 32.0) * 5.0 / 9.0)


_TEMPERATURE = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*(\S*)"
)


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def parse_celsius(text: str) -> Celsius:
    """Parse a quantity with a unit, such as "100C" or "212°F", as Celsius."""
    match = _TEMPERATURE.match(text)
    if match:
        value, unit = float(match.group(1)), match.group(2)
        if unit in ("C", "°C"):
            return Celsius(value)
        if unit in ("F", "°F"):
            return f_to_c(Fahrenheit(value))
    raise ValueError(f"invalid temperature {_quote(text)}")


def _temperature_arg(text: str) -> Celsius:
    try:
        return parse_celsius(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def main(argv: Optional[list[str]] = None) -> int:
    """Print the value of the -temp option in Celsius."""
    parser = argparse.ArgumentParser(prog="tempflag")
    parser.add_argument(
        "-temp",
        "--temp",
        type=_temperature_arg,
        default=Celsius(20.0),
        help="the temperature",
    )
    args = parser.parse_args(argv)
    print(args.temp)
    return 0


if __name__ == "__main__":
    sys.exit(main())