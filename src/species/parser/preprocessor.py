from bisect import bisect_right

DEFAULT_MARKER = ".. math::"


class MathSource:
    """
    One extracted math block.

    `content` is the block's lines joined without their line breaks;
    `segments` holds, for each source line, its document line number
    (0-based) and the offset at which it starts inside `content`.
    """

    def __init__(self, content, segments):
        self.content = content
        self.segments = segments

    @property
    def start_line(self):
        return self.segments[0][0]

    def locate(self, pos):
        """Map an offset inside `content` to a 0-based (line, column) of the document."""
        offsets = [offset for _, offset in self.segments]
        index = max(bisect_right(offsets, pos) - 1, 0)
        line, offset = self.segments[index]
        return line, pos - offset

    def __repr__(self):
        return f"MathSource(start_line={self.start_line}, lines={len(self.segments)})"


def extract_math_blocks(text, marker=DEFAULT_MARKER):
    """
    Extracts the math blocks that follow `marker` lines in a document.

    Each block is the maximal run of non-blank lines right after the
    marker line. Returns a list of MathSource objects.
    """
    lines = text.splitlines()
    blocks = []

    i = 0
    while i < len(lines):
        if not lines[i].strip().startswith(marker):
            i += 1
            continue

        i += 1
        parts = []
        segments = []
        length = 0
        while i < len(lines) and lines[i].strip():
            segments.append((i, length))
            parts.append(lines[i])
            length += len(lines[i])
            i += 1

        if parts:
            blocks.append(MathSource("".join(parts), segments))

    return blocks
