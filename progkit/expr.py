"""Arithmetic expressions: parsing, checking, evaluating and formatting."""

from __future__ import annotations

import abc
import enum
import math
import re
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional

from progkit.tempconv import _format_g

Env = Mapping[str, float]


class ExprError(ValueError):
    """Raised for malformed, ill-typed or unsupported expressions."""


_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
}


def _escape(ch: str, quote: str) -> str:
    if ch == quote:
        return "\\" + ch
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if ch.isprintable():
        return ch
    code = ord(ch)
    if code < 0x80:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def _quote_rune(ch: str) -> str:
    return "'" + _escape(ch, "'") + "'"


def _quote_string(text: str) -> str:
    return '"' + "".join(_escape(ch, '"') for ch in text) + '"'


def _divide(x: float, y: float) -> float:
    try:
        return x / y
    except ZeroDivisionError:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)


def _is_odd_int(y: float) -> bool:
    return math.isfinite(y) and y == int(y) and int(y) % 2 == 1


def _pow(x: float, y: float) -> float:
    try:
        return math.pow(x, y)
    except OverflowError:
        return -math.inf if x < 0 and _is_odd_int(y) else math.inf
    except ValueError:
        if x == 0 and y < 0:
            return math.copysign(math.inf, x) if _is_odd_int(y) else math.inf
        return math.nan


def _sin(x: float) -> float:
    try:
        return math.sin(x)
    except ValueError:
        return math.nan


def _sqrt(x: float) -> float:
    if x < 0:
        return math.nan
    return math.sqrt(x)


_NUM_PARAMS = {"pow": 2, "sin": 1, "sqrt": 1}


class Expr(abc.ABC):
    """An arithmetic expression."""

    @abc.abstractmethod
    def eval(self, env: Optional[Env]) -> float:
        """Return the value of this expression in env; unknown variables are 0."""

    @abc.abstractmethod
    def check(self, vars: set[str]) -> None:
        """Raise ExprError for errors in this expression; add its variables to vars."""

    @abc.abstractmethod
    def _write(self, out: list[str]) -> None:
        """Append the fully parenthesised text of this expression to out."""

    def __str__(self) -> str:
        return format_expr(self)


@dataclass(frozen=True)
class Var(Expr):
    """A variable reference, e.g. x."""

    name: str

    def eval(self, env: Optional[Env]) -> float:
        return float((env or {}).get(self.name, 0.0))

    def check(self, vars: set[str]) -> None:
        vars.add(self.name)

    def _write(self, out: list[str]) -> None:
        out.append(self.name)


@dataclass(frozen=True)
class Literal(Expr):
    """A numeric constant, e.g. 3.141."""

    value: float

    def eval(self, env: Optional[Env]) -> float:
        return float(self.value)

    def check(self, vars: set[str]) -> None:
        return None

    def _write(self, out: list[str]) -> None:
        out.append(_format_g(float(self.value)))


@dataclass(frozen=True)
class Unary(Expr):
    """A unary operator expression, e.g. -x."""

    op: str
    x: Expr

    def eval(self, env: Optional[Env]) -> float:
        if self.op == "+":
            return +self.x.eval(env)
        if self.op == "-":
            return -self.x.eval(env)
        raise ExprError(f"unsupported unary operator: {_quote_rune(self.op)}")

    def check(self, vars: set[str]) -> None:
        if self.op not in ("+", "-"):
            raise ExprError(f"unexpected unary op {_quote_rune(self.op)}")
        self.x.check(vars)

    def _write(self, out: list[str]) -> None:
        out.append(f"({self.op}")
        self.x._write(out)
        out.append(")")


@dataclass(frozen=True)
class Binary(Expr):
    """A binary operator expression, e.g. x+y."""

    op: str
    x: Expr
    y: Expr

    def eval(self, env: Optional[Env]) -> float:
        if self.op == "+":
            return self.x.eval(env) + self.y.eval(env)
        if self.op == "-":
            return self.x.eval(env) - self.y.eval(env)
        if self.op == "*":
            return self.x.eval(env) * self.y.eval(env)
        if self.op == "/":
            return _divide(self.x.eval(env), self.y.eval(env))
        raise ExprError(f"unsupported binary operator: {_quote_rune(self.op)}")

    def check(self, vars: set[str]) -> None:
        if self.op not in ("+", "-", "*", "/"):
            raise ExprError(f"unexpected binary op {_quote_rune(self.op)}")
        self.x.check(vars)
        self.y.check(vars)

    def _write(self, out: list[str]) -> None:
        out.append("(")
        self.x._write(out)
        out.append(f" {self.op} ")
        self.y._write(out)
        out.append(")")


@dataclass(frozen=True)
class Call(Expr):
    """A function call expression, e.g. sin(x)."""

    fn: str
    args: tuple[Expr, ...] = ()

    def eval(self, env: Optional[Env]) -> float:
        if self.fn == "pow":
            return _pow(self.args[0].eval(env), self.args[1].eval(env))
        if self.fn == "sin":
            return _sin(self.args[0].eval(env))
        if self.fn == "sqrt":
            return _sqrt(self.args[0].eval(env))
        raise ExprError(f"unsupported function call: {self.fn}")

    def check(self, vars: set[str]) -> None:
        arity = _NUM_PARAMS.get(self.fn)
        if arity is None:
            raise ExprError(f"unknown function {_quote_string(self.fn)}")
        if len(self.args) != arity:
            raise ExprError(
                f"call to {self.fn} has {len(self.args)} args, want {arity}"
            )
        for arg in self.args:
            arg.check(vars)

    def _write(self, out: list[str]) -> None:
        out.append(f"{self.fn}(")
        for i, arg in enumerate(self.args):
            if i:
                out.append(", ")
            arg._write(out)
        out.append(")")


# ---- lexer ----


class _Kind(enum.Enum):
    EOF = enum.auto()
    IDENT = enum.auto()
    NUMBER = enum.auto()
    CHAR = enum.auto()


@dataclass(frozen=True)
class _Token:
    kind: _Kind
    text: str


_WHITESPACE = " \t\n\r"
_NUMBER = re.compile(
    r"[0-9]+(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?|\.[0-9]+(?:[eE][+-]?[0-9]+)?"
)


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_ident_part(ch: str) -> bool:
    return ch.isalpha() or ch.isdecimal() or ch == "_"


def _tokenize(text: str) -> Iterator[_Token]:
    pos, end = 0, len(text)
    while True:
        while pos < end and text[pos] in _WHITESPACE:
            pos += 1
        if pos >= end:
            yield _Token(_Kind.EOF, "")
            return
        ch = text[pos]
        if _is_ident_start(ch):
            stop = pos + 1
            while stop < end and _is_ident_part(text[stop]):
                stop += 1
            yield _Token(_Kind.IDENT, text[pos:stop])
            pos = stop
            continue
        match = _NUMBER.match(text, pos)
        if match:
            yield _Token(_Kind.NUMBER, match.group())
            pos = match.end()
            continue
        yield _Token(_Kind.CHAR, ch)
        pos += 1


def _precedence(token: _Token) -> int:
    if token.kind is not _Kind.CHAR:
        return 0
    if token.text in ("*", "/"):
        return 2
    if token.text in ("+", "-"):
        return 1
    return 0


# ---- parser ----


class _Parser:
    def __init__(self, text: str) -> None:
        self._tokens = _tokenize(text)
        self.token = next(self._tokens)

    def advance(self) -> None:
        self.token = next(self._tokens)

    def is_char(self, ch: str) -> bool:
        return self.token.kind is _Kind.CHAR and self.token.text == ch

    def describe(self) -> str:
        kind = self.token.kind
        if kind is _Kind.EOF:
            return "end of file"
        if kind is _Kind.IDENT:
            return f"identifier {self.token.text}"
        if kind is _Kind.NUMBER:
            return f"number {self.token.text}"
        return _quote_rune(self.token.text)

    def expect_close(self) -> None:
        if not self.is_char(")"):
            raise ExprError(f"got {self.describe()}, want ')'")
        self.advance()

    def parse_expr(self) -> Expr:
        return self.parse_binary(1)

    def parse_binary(self, prec1: int) -> Expr:
        lhs = self.parse_unary()
        prec = _precedence(self.token)
        while prec >= prec1:
            while _precedence(self.token) == prec:
                op = self.token.text
                self.advance()
                rhs = self.parse_binary(prec + 1)
                lhs = Binary(op, lhs, rhs)
            prec -= 1
        return lhs

    def parse_unary(self) -> Expr:
        if self.is_char("+") or self.is_char("-"):
            op = self.token.text
            self.advance()
            return Unary(op, self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        token = self.token
        if token.kind is _Kind.IDENT:
            self.advance()
            if not self.is_char("("):
                return Var(token.text)
            self.advance()
            args: list[Expr] = []
            if not self.is_char(")"):
                while True:
                    args.append(self.parse_expr())
                    if not self.is_char(","):
                        break
                    self.advance()
            self.expect_close()
            return Call(token.text, tuple(args))
        if token.kind is _Kind.NUMBER:
            try:
                value = float(token.text)
            except ValueError as exc:
                raise ExprError(str(exc)) from exc
            self.advance()
            return Literal(value)
        if self.is_char("("):
            self.advance()
            e = self.parse_expr()
            self.expect_close()
            return e
        raise ExprError(f"unexpected {self.describe()}")


def parse(text: str) -> Expr:
    """Parse text as an arithmetic expression, raising ExprError on bad syntax.

    expr = num | id | id '(' expr ',' ... ')' | '-' expr | expr '+' expr
    """
    parser = _Parser(text)
    e = parser.parse_expr()
    if parser.token.kind is not _Kind.EOF:
        raise ExprError(f"unexpected {parser.describe()}")
    return e


def format_expr(expr: Expr) -> str:
    """Format an expression as fully parenthesised text."""
    if not isinstance(expr, Expr):
        raise TypeError(f"unknown Expr: {type(expr).__name__}")
    out: list[str] = []
    expr._write(out)
    return "".join(out)