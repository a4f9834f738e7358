import os

from iniread.document import GLOBAL_SECTION, Document, Section
from iniread.lexer import KeyValue, LogicalLine, Malformed, SectionHeader, tokenize
from iniread.logger import logger


class DocumentBuilder:
    """Accumulates sections and entries while the parser walks the text."""

    def __init__(self):
        self._sections: dict[str, dict[str, str]] = {GLOBAL_SECTION: {}}
        self._current = self._sections[GLOBAL_SECTION]
        self.skipped: list[LogicalLine] = []

    def header(self, name: str) -> None:
        # a repeated header re-opens the existing section
        self._current = self._sections.setdefault(name, {})

    def entry(self, key: str, value: str) -> None:
        self._current[key] = value

    def skip(self, line: LogicalLine) -> None:
        self.skipped.append(line)

    def build(self) -> Document:
        sections = {name: Section(name, entries) for name, entries in self._sections.items()}
        return Document(sections, self.skipped)


class INIParser:
    def __init__(self, report_malformed: bool = False):
        self.report_malformed = report_malformed

    def parse(self, ini_string: str) -> Document:
        builder = DocumentBuilder()
        for token in tokenize(ini_string):
            if isinstance(token, SectionHeader):
                builder.header(token.name)
            elif isinstance(token, KeyValue):
                builder.entry(token.key, token.value)
            elif isinstance(token, Malformed):
                self._skip(builder, token)

        return builder.build()

    def parse_file(self, file_path: str | os.PathLike, encoding: str = "utf-8") -> Document:
        with open(file_path, "rb") as f:
            raw = f.read()
        logger.debug(f"Read {len(raw)} bytes from {file_path}")
        return self.parse(raw.decode(encoding, errors="surrogateescape"))

    def _skip(self, builder: DocumentBuilder, token: Malformed) -> None:
        builder.skip(LogicalLine(token.lineno, token.text))
        msg = f"Skipping malformed line {token.lineno}: {token.text!r}"
        if self.report_malformed:
            logger.warning(msg)
        else:
            logger.debug(msg)


def loads(ini_string: str, report_malformed: bool = False) -> Document:
    return INIParser(report_malformed).parse(ini_string)


def load(
    file_path: str | os.PathLike, encoding: str = "utf-8", report_malformed: bool = False
) -> Document | None:
    """Parse the INI file at file_path.

    Returns None when the file cannot be read or decoded with the given
    encoding; problems inside the text never make the load fail.
    """
    try:
        return INIParser(report_malformed).parse_file(file_path, encoding)
    except (OSError, LookupError) as e:
        logger.error(f"Failed to load {file_path}: {e}")
        return None
