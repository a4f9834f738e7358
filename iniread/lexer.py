"""Turn raw INI text into classified logical lines.

Physical lines are joined on trailing backslashes, trimmed, and stripped of
blank and comment lines before each surviving line is classified as a section
header, a key/value pair or a malformed line.
"""

import re
from typing import Iterator, NamedTuple

COMMENT_PREFIXES = ("#", ";")
CONTINUATION = "\\"
SEPARATOR = "="

_NEWLINE = re.compile(r"\r?\n")


class LogicalLine(NamedTuple):
    lineno: int
    text: str


class SectionHeader(NamedTuple):
    name: str
    lineno: int = 0


class KeyValue(NamedTuple):
    key: str
    value: str
    lineno: int = 0


class Malformed(NamedTuple):
    text: str
    lineno: int = 0


Token = SectionHeader | KeyValue | Malformed


def split_lines(text: str) -> list[str]:
    return _NEWLINE.split(text)


def is_comment(line: str) -> bool:
    return line.lstrip().startswith(COMMENT_PREFIXES)


def normalize(text: str) -> Iterator[LogicalLine]:
    """Yield the logical lines of text.

    The line number of a logical line is the number of its first physical
    line, counting from 1.
    """
    pending: list[str] = []
    start = 0
    for lineno, physical in enumerate(split_lines(text), 1):
        if not pending:
            start = lineno
        if physical.endswith(CONTINUATION):
            pending.append(physical[:-1])
            continue
        pending.append(physical)
        line = _finish(pending)
        pending = []
        if line:
            yield LogicalLine(start, line)

    # a continuation on the last line has nothing left to join
    if pending and (line := _finish(pending)):
        yield LogicalLine(start, line)


def _finish(parts: list[str]) -> str:
    line = "".join(parts).strip()
    if not line or is_comment(line):
        return ""
    return line


def classify(line: LogicalLine | str) -> Token:
    if isinstance(line, LogicalLine):
        lineno, text = line
    else:
        lineno, text = 0, line.strip()

    if len(text) >= 2 and text.startswith("[") and text.endswith("]"):
        return SectionHeader(text[1:-1].strip(), lineno)

    key, sep, value = text.partition(SEPARATOR)
    key = key.strip()
    if not sep or not key:
        return Malformed(text, lineno)

    return KeyValue(key, value.strip(), lineno)


def tokenize(text: str) -> Iterator[Token]:
    for line in normalize(text):
        yield classify(line)
