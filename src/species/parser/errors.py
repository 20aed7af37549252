from lark.exceptions import UnexpectedInput


class MathSyntaxError(UnexpectedInput):
    """
    A local syntax mismatch at a position of the parsed text.

    Positions are offsets into the text handed to the entry point that
    raised the error; `line` and `column` are 1-based, as for every other
    lark error, so callers can handle all parser failures as `LarkError`.
    """

    kind = "syntax error"

    def __init__(self, text: str, pos: int, expected: str):
        self.pos_in_stream = pos
        self.line = text.count("\n", 0, pos) + 1
        self.column = pos - (text.rfind("\n", 0, pos) + 1) + 1
        self.expected = expected
        found = text[pos:pos + 12] or "end of input"
        super().__init__(
            f"{self.kind} at line {self.line}, column {self.column}: "
            f"expected {expected}, found {found!r}"
        )


class UnexpectedTokenError(MathSyntaxError):
    kind = "unexpected token"


class EmptyMatchError(MathSyntaxError):
    kind = "empty match"


class UnclassifiableSymbolError(MathSyntaxError):
    kind = "unclassifiable symbol"


class MissingArgumentError(MathSyntaxError):
    # Never recovered by an alternative: the escape itself was misused.
    kind = "missing argument"
