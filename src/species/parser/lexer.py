import re

from species.parser.errors import UnexpectedTokenError

EQUAL = "::="
BAR = "|"
LINE_BREAK = "\\\\"

# TeX spacing and alignment tokens; `\quad` must not eat the head of `\quadruple`.
_SPACING = r"\s|\\q?quad(?![A-Za-z])|\\[ ,:;!]|[&~]"

_INLINE_RUN = re.compile(rf"(?:{_SPACING})*")
_SEPARATOR_RUN = re.compile(rf"(?:{_SPACING}|\\\\)*")


def skip_inline(text: str, pos: int = 0) -> int:
    """Skip spacing tokens on the current line, stopping before a `\\\\` line break."""
    return _INLINE_RUN.match(text, pos).end()


def skip_separators(text: str, pos: int = 0) -> int:
    """Skip spacing tokens and `\\\\` line breaks. Never fails."""
    return _SEPARATOR_RUN.match(text, pos).end()


def ws(text: str) -> str:
    return text[skip_separators(text):]


def expect(text: str, pos: int, literal: str, skip=skip_separators) -> int:
    """Consume `literal` at `pos`, then whatever `skip` accepts after it."""
    if not text.startswith(literal, pos):
        raise UnexpectedTokenError(text, pos, repr(literal))
    return skip(text, pos + len(literal))


def equal(text: str, pos: int):
    return None, expect(text, pos, EQUAL)


def bar(text: str, pos: int):
    """The `|` between union cases, with the separators around it."""
    return None, expect(text, skip_separators(text, pos), BAR)


def line_break(text: str, pos: int):
    return None, expect(text, skip_inline(text, pos), LINE_BREAK)
