from species.parser.command import Argument, Cmd, Command, SeqKind, Str, parse_command
from species.parser.errors import (
    EmptyMatchError,
    MathSyntaxError,
    MissingArgumentError,
    UnclassifiableSymbolError,
    UnexpectedTokenError,
)
from .symbol import (
    Arrow,
    BracedVec,
    Nonterm,
    Record,
    Symbol,
    Term,
    Vec,
    parse_record,
    parse_symbol,
)
from .grammar import (
    MathBlock,
    Production,
    RecordRhs,
    Rhs,
    UnionRhs,
    is_production,
    parse_math_block,
    parse_production,
)

__all__ = [
    "Argument", "Cmd", "Command", "SeqKind", "Str",
    "MathSyntaxError", "UnexpectedTokenError", "EmptyMatchError",
    "UnclassifiableSymbolError", "MissingArgumentError",
    "Symbol", "Term", "Nonterm", "Record", "Vec", "BracedVec", "Arrow",
    "Rhs", "UnionRhs", "RecordRhs", "Production", "MathBlock",
    "parse_command", "parse_symbol", "parse_record", "parse_production",
    "parse_math_block", "is_production",
]
