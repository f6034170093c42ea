"""Line classification: raw text to depth-annotated lines."""

from dataclasses import dataclass
from typing import Iterator, Literal, Optional

from ..config import ParserConfig

LineKind = Literal["item", "text", "blank"]


@dataclass(frozen=True)
class ClassifiedLine:
    """One source line with its computed indentation level."""
    text: str
    depth: int
    raw_index: int
    kind: LineKind = "text"

    @property
    def is_list_item(self) -> bool:
        return self.kind == "item"

    @property
    def is_blank(self) -> bool:
        return self.kind == "blank"


def _leading_width(line: str, tab_width: int) -> tuple[int, int]:
    """Return (visual width, character count) of the leading whitespace."""
    width = 0
    count = 0
    for ch in line:
        if ch == "\t":
            width += tab_width
        elif ch.isspace():
            width += 1
        else:
            break
        count += 1
    return width, count


def classify_line(
    raw: str,
    raw_index: int,
    config: Optional[ParserConfig] = None,
) -> ClassifiedLine:
    """
    Classify a single line.

    A line is a list item when its first non-whitespace characters are the
    list marker followed by whitespace or end of line. Anything else with
    visible text is plain content. Never raises.
    """
    config = config or ParserConfig()
    line = raw.rstrip("\r")

    if not line.strip():
        return ClassifiedLine(text="", depth=0, raw_index=raw_index, kind="blank")

    width, count = _leading_width(line, config.tab_width)
    depth = width // config.indentation_unit_width
    body = line[count:]

    marker = config.list_marker
    if body.startswith(marker):
        rest = body[len(marker):]
        if not rest or rest[0].isspace():
            return ClassifiedLine(
                text=rest.strip(),
                depth=depth,
                raw_index=raw_index,
                kind="item",
            )

    return ClassifiedLine(text=body.rstrip(), depth=depth, raw_index=raw_index, kind="text")


class ClassifiedLines:
    """
    Lazy, restartable sequence of classified lines.

    Each iteration rescans the source text from the first line, so the same
    object can be consumed any number of times.
    """

    def __init__(self, text: str, config: Optional[ParserConfig] = None):
        self.text = text
        self.config = config or ParserConfig()

    def __iter__(self) -> Iterator[ClassifiedLine]:
        text = self.text
        if not text:
            return
        start = 0
        index = 1
        while True:
            end = text.find("\n", start)
            if end == -1:
                yield classify_line(text[start:], index, self.config)
                return
            yield classify_line(text[start:end], index, self.config)
            start = end + 1
            index += 1

    def __len__(self) -> int:
        return self.text.count("\n") + 1 if self.text else 0


def classify_lines(text: str, config: Optional[ParserConfig] = None) -> ClassifiedLines:
    """Classify every line of `text`, preserving order."""
    return ClassifiedLines(text, config)
