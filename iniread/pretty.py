import io
import json
import sys
from typing import TextIO

import yaml

from iniread.document import Document


def pretty_print(document: Document, stream: TextIO | None = None) -> None:
    """Write a readable tree of every section and entry in document."""
    out = stream if stream is not None else sys.stdout
    for name in document:
        section = document[name]
        out.write(f"[{name}] ({len(section)} entries)\n")
        for key, value in section.items():
            out.write(f"    {key} = {value}\n")


def dump(document: Document) -> str:
    buf = io.StringIO()
    pretty_print(document, buf)
    return buf.getvalue()


def dump_json(document: Document) -> str:
    return json.dumps(document.as_dict(), indent=4, ensure_ascii=False)


def dump_yaml(document: Document) -> str:
    return yaml.safe_dump(document.as_dict(), sort_keys=False, allow_unicode=True)


FORMATTERS = {
    "tree": dump,
    "json": dump_json,
    "yaml": dump_yaml,
}
