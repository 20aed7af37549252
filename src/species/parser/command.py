"""
Commands are the lexical unit of the notation:

    \\name[param,param]{argument}{argument}^?

Arguments are either a nested command or a literal over letters, digits
and `./-# `; literals may contain balanced braces, whose content is
concatenated flat.
"""
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from species.parser.combinators import first_of, many, parse_all
from species.parser.errors import UnexpectedTokenError
from species.parser.lexer import skip_inline

_HEAD = re.compile(r"\\([A-Za-z0-9]+)")
_PARAMS = re.compile(r"\[([A-Za-z0-9]+(?:,[A-Za-z0-9]+)*)\]")
_LETTERS = re.compile(r"[A-Za-z0-9./\-# ]*")


class SeqKind(Enum):
    OPT = "^?"
    MANY_POSSIBLY_EMPTY = "^\\ast"
    MANY_NON_EMPTY = "^+"
    EXACTLY_N = "^n"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Argument(ABC):
    @abstractmethod
    def name(self) -> str:
        pass


@dataclass(frozen=True)
class Str(Argument):
    text: str

    def name(self) -> str:
        return self.text

    def __str__(self):
        return "{" + self.text + "}"


@dataclass(frozen=True)
class Cmd(Argument):
    command: "Command"

    def name(self) -> str:
        return self.command.name

    def __str__(self):
        return "{" + str(self.command) + "}"


@dataclass(frozen=True)
class Command:
    name: str
    params: Tuple[str, ...] = ()
    args: Tuple[Argument, ...] = ()
    repetition: Optional[SeqKind] = None

    def __str__(self):
        params = f"[{','.join(self.params)}]" if self.params else ""
        args = "".join(str(a) for a in self.args)
        repetition = str(self.repetition) if self.repetition else ""
        return f"\\{self.name}{params}{args}{repetition}"


def seq_kind(text: str, pos: int) -> Tuple[Optional[SeqKind], int]:
    for kind in SeqKind:
        if text.startswith(kind.value, pos):
            return kind, pos + len(kind.value)
    return None, pos


def command(text: str, pos: int) -> Tuple[Command, int]:
    head = _HEAD.match(text, pos)
    if not head:
        raise UnexpectedTokenError(text, pos, "a command")
    pos = head.end()

    params = ()
    param_list = _PARAMS.match(text, pos)
    if param_list:
        params = tuple(param_list.group(1).split(","))
        pos = param_list.end()

    args, pos = many(argument, text, pos)
    repetition, pos = seq_kind(text, pos)
    pos = skip_inline(text, pos)
    return Command(head.group(1), params, tuple(args), repetition), pos


def argument(text: str, pos: int) -> Tuple[Argument, int]:
    if not text.startswith("{", pos):
        raise UnexpectedTokenError(text, pos, "'{'")
    return first_of(text, pos + 1, (_command_argument, _literal_argument), "an argument")


def _command_argument(text: str, pos: int) -> Tuple[Argument, int]:
    nested, pos = command(text, pos)
    return Cmd(nested), _close_brace(text, pos)


def _literal_argument(text: str, pos: int) -> Tuple[Argument, int]:
    literal, pos = _literal(text, pos)
    return Str(literal), _close_brace(text, pos)


def _literal(text: str, pos: int) -> Tuple[str, int]:
    parts = []
    depth = 0
    while True:
        run = _LETTERS.match(text, pos)
        parts.append(run.group())
        pos = run.end()
        if text.startswith("{", pos):
            depth += 1
        elif depth and text.startswith("}", pos):
            depth -= 1
        elif depth:
            raise UnexpectedTokenError(text, pos, "'}'")
        else:
            return "".join(parts), pos
        pos += 1


def _close_brace(text: str, pos: int) -> int:
    if not text.startswith("}", pos):
        raise UnexpectedTokenError(text, pos, "'}'")
    return pos + 1


def parse_command(text: str) -> Tuple[Command, str]:
    return parse_all(command, text)
