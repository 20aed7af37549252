"""
Backtracking helpers shared by the recursive-descent parsers.

A parser here is any callable `parser(text, pos) -> (node, new_pos)` that
raises `MathSyntaxError` on mismatch. Failures are discarded at trial
points and the next alternative restarts from the starting position,
except `MissingArgumentError`, which always propagates.
"""
from typing import Any, Callable, List, Sequence, Tuple, Type

from species.parser.errors import (
    EmptyMatchError,
    MathSyntaxError,
    MissingArgumentError,
    UnexpectedTokenError,
)

Parser = Callable[[str, int], Tuple[Any, int]]


def first_of(
    text: str,
    pos: int,
    alternatives: Sequence[Parser],
    expected: str,
    error: Type[MathSyntaxError] = UnexpectedTokenError,
) -> Tuple[Any, int]:
    """Run `alternatives` in order and return the first success."""
    for alternative in alternatives:
        try:
            return alternative(text, pos)
        except MissingArgumentError:
            raise
        except MathSyntaxError:
            continue
    raise error(text, pos, expected)


def many(parser: Parser, text: str, pos: int) -> Tuple[List[Any], int]:
    items = []
    while True:
        try:
            item, new_pos = parser(text, pos)
        except MissingArgumentError:
            raise
        except MathSyntaxError:
            break
        items.append(item)
        if new_pos == pos:
            # a parser that consumes nothing would match forever
            break
        pos = new_pos
    return items, pos


def many1(parser: Parser, text: str, pos: int, expected: str) -> Tuple[List[Any], int]:
    try:
        first, new_pos = parser(text, pos)
    except MissingArgumentError:
        raise
    except MathSyntaxError as e:
        raise EmptyMatchError(text, pos, expected) from e
    rest, new_pos = many(parser, text, new_pos)
    return [first] + rest, new_pos


def separated1(
    parser: Parser, separator: Parser, text: str, pos: int, expected: str
) -> Tuple[List[Any], int]:
    """
    One or more `parser` matches separated by `separator`.

    A separator that is not followed by an element is left unconsumed.
    """
    try:
        item, pos = parser(text, pos)
    except MissingArgumentError:
        raise
    except MathSyntaxError as e:
        raise EmptyMatchError(text, pos, expected) from e
    items = [item]
    while True:
        try:
            _, after_separator = separator(text, pos)
            item, after_item = parser(text, after_separator)
        except MissingArgumentError:
            raise
        except MathSyntaxError:
            break
        items.append(item)
        pos = after_item
    return items, pos


def parse_all(parser: Parser, text: str) -> Tuple[Any, str]:
    """Run `parser` from the start of `text` and return `(node, remainder)`."""
    try:
        node, pos = parser(text, 0)
    except RecursionError:
        raise UnexpectedTokenError(text, 0, "input nested less deeply") from None
    return node, text[pos:]
