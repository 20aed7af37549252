import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from species.parser.combinators import first_of, many1, parse_all, separated1
from species.parser.command import command
from species.parser.errors import (
    EmptyMatchError,
    MathSyntaxError,
    MissingArgumentError,
    UnclassifiableSymbolError,
    UnexpectedTokenError,
)
from species.parser.lexer import EQUAL, bar, equal, line_break, skip_separators
from species.syntax.symbol import Nonterm, Record, Symbol, record, symbol

logger = logging.getLogger(__name__)

SymbolTuple = Tuple[Symbol, ...]


@dataclass(frozen=True)
class Rhs:
    pass


@dataclass(frozen=True)
class UnionRhs(Rhs):
    cases: Tuple[SymbolTuple, ...]

    def __str__(self):
        return " | ".join(" ".join(str(s) for s in case) for case in self.cases)


@dataclass(frozen=True)
class RecordRhs(Rhs):
    record: Record

    def __str__(self):
        return str(self.record)


@dataclass(frozen=True)
class Production:
    name: str
    lhs: Tuple[Symbol, ...]
    rhs: Rhs

    @property
    def lhs_names(self) -> List[str]:
        return [s.name for s in self.lhs]

    def __str__(self):
        lhs = " ".join(str(s) for s in self.lhs)
        return f"{self.name}: {lhs} ::= {self.rhs}"


@dataclass(frozen=True)
class MathBlock:
    productions: Tuple[Production, ...]

    def __str__(self):
        return "\n".join(str(p) for p in self.productions)


def _tuple(text: str, pos: int) -> Tuple[SymbolTuple, int]:
    symbols, pos = many1(symbol, text, pos, "a grammar symbol")
    return tuple(symbols), pos


def union(text: str, pos: int) -> Tuple[UnionRhs, int]:
    cases, pos = separated1(_tuple, bar, text, pos, "a union case")
    return UnionRhs(tuple(cases)), pos


def _record_rhs(text: str, pos: int) -> Tuple[RecordRhs, int]:
    rec, pos = record(text, pos)
    return RecordRhs(rec), pos


def rhs(text: str, pos: int) -> Tuple[Rhs, int]:
    result, pos = first_of(
        text, pos, (union, _record_rhs), "a union or a record", UnclassifiableSymbolError
    )
    if isinstance(result, UnionRhs) and len(result.cases) == 1:
        (case,) = result.cases
        if len(case) == 1 and isinstance(case[0], Record):
            return RecordRhs(case[0]), pos
    return result, pos


def _head(text: str, pos: int, name: str):
    cmd, end = command(text, pos)
    if cmd.name != name:
        raise UnexpectedTokenError(text, pos, f"\\{name}")
    return cmd, end


def production(text: str, pos: int) -> Tuple[Production, int]:
    head, end = _head(text, pos, "production")
    if not head.args:
        raise MissingArgumentError(text, pos, "a production label")
    name = head.args[0].name()

    lhs = []
    while not text.startswith(EQUAL, end):
        try:
            cmd, end = command(text, end)
        except MathSyntaxError as e:
            raise UnexpectedTokenError(text, end, f"{EQUAL!r} or a left-hand side symbol") from e
        lhs.append(Nonterm(cmd.name, cmd.repetition))
    _, end = equal(text, end)

    right, end = rhs(text, end)
    _, end = line_break(text, end)
    return Production(name, tuple(lhs), right), end


def is_production(text: str) -> bool:
    """Whether a complete production starts `text`. Consumes nothing."""
    try:
        parse_all(production, text)
    except MathSyntaxError:
        return False
    return True


def math_block(text: str, pos: int) -> Tuple[MathBlock, int]:
    pos = skip_separators(text, pos)
    _, pos = _head(text, pos, "begin")

    productions = []
    failure: Optional[MathSyntaxError] = None
    while True:
        try:
            prod, pos = production(text, pos)
        except MissingArgumentError:
            raise
        except MathSyntaxError as e:
            failure = e
            break
        logger.debug("parsed production %r at offset %d", prod.name, pos)
        productions.append(prod)

    # A production that failed past its own start explains the failure
    # better than the `\end` or empty-match error at that start.
    deeper = failure if failure is not None and failure.pos_in_stream > pos else None
    if not productions:
        if deeper is not None:
            raise deeper
        raise EmptyMatchError(text, pos, "at least one \\production") from failure
    try:
        _, pos = _head(text, pos, "end")
    except MathSyntaxError:
        if deeper is not None:
            raise deeper
        raise
    return MathBlock(tuple(productions)), skip_separators(text, pos)


def parse_production(text: str) -> Tuple[Production, str]:
    return parse_all(production, text)


def parse_math_block(text: str) -> Tuple[MathBlock, str]:
    block, rest = parse_all(math_block, text)
    logger.debug("parsed math block with %d productions", len(block.productions))
    return block, rest
