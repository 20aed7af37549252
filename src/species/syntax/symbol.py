from dataclasses import dataclass
from typing import Optional, Tuple

from species.parser.combinators import first_of, parse_all, separated1
from species.parser.command import Command, SeqKind, command
from species.parser.errors import (
    MissingArgumentError,
    UnclassifiableSymbolError,
    UnexpectedTokenError,
)
from species.parser.lexer import expect, skip_inline, skip_separators

TERMINAL_ESCAPE = "K"
NONTERMINAL_ESCAPE = "X"
# Lower-case structural markers that never name a grammar symbol.
STRUCTURAL = ("end", "production")


@dataclass(frozen=True)
class Symbol:
    pass


def _suffix(repetition: Optional[SeqKind]) -> str:
    return str(repetition) if repetition else ""


@dataclass(frozen=True)
class Term(Symbol):
    name: str
    repetition: Optional[SeqKind] = None

    def __str__(self):
        return f"\\{self.name}{_suffix(self.repetition)}"


@dataclass(frozen=True)
class Nonterm(Symbol):
    name: str
    repetition: Optional[SeqKind] = None

    def __str__(self):
        return f"\\{self.name}{_suffix(self.repetition)}"


@dataclass(frozen=True)
class Record(Symbol):
    pairs: Tuple[Tuple[Term, Symbol], ...]

    def __str__(self):
        fields = ", ".join(f"{key} {value}" for key, value in self.pairs)
        return f"\\{{{fields}\\}}"


@dataclass(frozen=True)
class Vec(Symbol):
    inner: Nonterm

    def __str__(self):
        return f"\\vec({self.inner})"


@dataclass(frozen=True)
class BracedVec(Symbol):
    vec: Vec

    def __str__(self):
        return f"[{self.vec}]"


@dataclass(frozen=True)
class Arrow(Symbol):
    source: Nonterm
    target: Nonterm

    def __str__(self):
        return f"{self.source} \\to {self.target}"


def _escaped_name(cmd: Command, text: str, pos: int) -> str:
    if not cmd.args:
        raise MissingArgumentError(text, pos, f"a symbol name argument to \\{cmd.name}")
    return cmd.args[0].name()


def terminal_name(cmd: Command, text: str = "", pos: int = 0) -> Optional[str]:
    """
    The terminal identifier `cmd` stands for, or None if it is not a terminal.

    `\\K{name}` escapes any name; otherwise every letter must be upper-case.
    """
    if cmd.name == TERMINAL_ESCAPE:
        return _escaped_name(cmd, text, pos)
    if all(c.isupper() for c in cmd.name if c.isalpha()):
        return cmd.name
    return None


def nonterminal_name(cmd: Command, text: str = "", pos: int = 0) -> Optional[str]:
    """Counterpart of `terminal_name`: `\\X{name}` or an all lower-case name."""
    if cmd.name == NONTERMINAL_ESCAPE:
        return _escaped_name(cmd, text, pos)
    if all(c.islower() for c in cmd.name if c.isalpha()):
        return cmd.name
    return None


def term(text: str, pos: int) -> Tuple[Term, int]:
    cmd, end = command(text, pos)
    name = terminal_name(cmd, text, pos)
    if name is None:
        raise UnclassifiableSymbolError(text, pos, "a terminal")
    return Term(name, cmd.repetition), end


def nonterm(text: str, pos: int) -> Tuple[Nonterm, int]:
    cmd, end = command(text, pos)
    if cmd.name in STRUCTURAL:
        raise UnclassifiableSymbolError(text, pos, "a nonterminal")
    name = nonterminal_name(cmd, text, pos)
    if name is None:
        raise UnclassifiableSymbolError(text, pos, "a nonterminal")
    return Nonterm(name, cmd.repetition), end


def record(text: str, pos: int) -> Tuple[Record, int]:
    pos = expect(text, pos, "\\{", skip=skip_inline)
    pairs, pos = separated1(_pair, _comma, text, pos, "a record field")
    pos = expect(text, pos, "\\}", skip=skip_inline)
    return Record(tuple(pairs)), pos


def _pair(text: str, pos: int) -> Tuple[Tuple[Term, Symbol], int]:
    pos = skip_separators(text, pos)
    key, pos = term(text, pos)
    value, pos = first_of(text, pos, (vec, nonterm), "a vector or a nonterminal")
    return (key, value), skip_separators(text, pos)


def _comma(text: str, pos: int):
    if not text.startswith(",", pos):
        raise UnexpectedTokenError(text, pos, "','")
    return None, pos + 1


def vec(text: str, pos: int) -> Tuple[Vec, int]:
    cmd, end = command(text, pos)
    if cmd.name != "vec":
        raise UnclassifiableSymbolError(text, pos, "\\vec")
    end = expect(text, end, "(", skip=skip_inline)
    inner, end = nonterm(text, end)
    end = expect(text, end, ")", skip=skip_inline)
    return Vec(inner), end


def braced_vec(text: str, pos: int) -> Tuple[BracedVec, int]:
    pos = expect(text, pos, "[", skip=skip_inline)
    inner, pos = vec(text, pos)
    pos = expect(text, pos, "]", skip=skip_inline)
    return BracedVec(inner), pos


def arrow(text: str, pos: int) -> Tuple[Arrow, int]:
    source, end = nonterm(text, pos)
    cmd, end_of_arrow = command(text, end)
    if cmd.name != "to":
        raise UnclassifiableSymbolError(text, end, "\\to")
    target, end = nonterm(text, end_of_arrow)
    return Arrow(source, target), end


# Order encodes precedence: an arrow starts with a nonterminal, a vector
# command would also classify as a nonterminal.
_SHAPES = (record, arrow, braced_vec, vec, nonterm, term)


def symbol(text: str, pos: int) -> Tuple[Symbol, int]:
    return first_of(text, pos, _SHAPES, "a grammar symbol", UnclassifiableSymbolError)


def parse_symbol(text: str) -> Tuple[Symbol, str]:
    return parse_all(symbol, text)


def parse_record(text: str) -> Tuple[Record, str]:
    return parse_all(record, text)
