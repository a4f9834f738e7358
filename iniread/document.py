from types import MappingProxyType
from typing import Iterator, Mapping

from iniread.lexer import LogicalLine

GLOBAL_SECTION = "global"


class Section:
    """A named, read-only group of raw key/value entries."""

    __slots__ = ("name", "_entries")

    def __init__(self, name: str, entries: dict[str, str] | None = None):
        self.name = name
        self._entries = MappingProxyType(dict(entries or {}))

    @property
    def entries(self) -> Mapping[str, str]:
        return self._entries

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._entries.get(key, default)

    def items(self):
        return self._entries.items()

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return self.name == other.name and dict(self._entries) == dict(other._entries)

    def __repr__(self) -> str:
        return f"Section({self.name!r}, {dict(self._entries)!r})"


class Document:
    """
    Parsed INI document: an ordered collection of uniquely named sections.

    The global section holds the properties declared before the first header and
    is always present, possibly empty. A Document is built once by the parser
    and never changes afterwards; release() drops its contents as a whole.
    """

    def __init__(self, sections: Mapping[str, Section], skipped: list[LogicalLine] | None = None):
        global_section = sections.get(GLOBAL_SECTION)
        ordered = {GLOBAL_SECTION: global_section if global_section is not None else Section(GLOBAL_SECTION)}
        ordered.update((name, section) for name, section in sections.items() if name != GLOBAL_SECTION)
        self._sections: Mapping[str, Section] | None = MappingProxyType(ordered)
        self.skipped: tuple[LogicalLine, ...] = tuple(skipped or ())

    @property
    def released(self) -> bool:
        return self._sections is None

    def _live(self) -> Mapping[str, Section]:
        if self._sections is None:
            raise RuntimeError("Document has been released")
        return self._sections

    @property
    def global_section(self) -> Section:
        return self._live()[GLOBAL_SECTION]

    def section(self, name: str | None = None) -> Section | None:
        """Resolve a section name; None and "" both mean the global section."""
        if not name:
            name = GLOBAL_SECTION
        return self._live().get(name)

    def sections(self) -> list[str]:
        return list(self._live())

    def get(self, section: str | None, key: str, default: str | None = None) -> str | None:
        found = self.section(section)
        if found is None:
            return default
        return found.get(key, default)

    def as_dict(self) -> dict[str, dict[str, str]]:
        return {name: dict(section.entries) for name, section in self._live().items()}

    def release(self) -> None:
        self._live()
        self._sections = None
        self.skipped = ()

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, *exc_info) -> None:
        if not self.released:
            self.release()

    def __contains__(self, name) -> bool:
        return name in self._live()

    def __getitem__(self, name: str) -> Section:
        return self._live()[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._live())

    def __len__(self) -> int:
        return len(self._live())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        if self.released:
            return "Document(<released>)"
        return f"Document({self.sections()!r})"
