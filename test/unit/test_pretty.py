import io
import json

import yaml

from iniread.parser import loads
from iniread.pretty import FORMATTERS, dump, dump_json, dump_yaml, pretty_print

TEXT = "top = 1\n[a]\nx = hello world\n[b]\n"


def test_dump_tree():
    assert dump(loads(TEXT)) == (
        "[global] (1 entries)\n"
        "    top = 1\n"
        "[a] (1 entries)\n"
        "    x = hello world\n"
        "[b] (0 entries)\n"
    )


def test_pretty_print_to_stream():
    buf = io.StringIO()
    pretty_print(loads(TEXT), buf)
    assert buf.getvalue() == dump(loads(TEXT))


def test_pretty_print_defaults_to_stdout(capsys):
    pretty_print(loads("k = v"))
    assert capsys.readouterr().out == "[global] (1 entries)\n    k = v\n"


def test_dump_is_read_only():
    document = loads(TEXT)
    before = document.as_dict()
    for formatter in FORMATTERS.values():
        formatter(document)
    assert document.as_dict() == before


def test_dump_json():
    assert json.loads(dump_json(loads(TEXT))) == {"global": {"top": "1"}, "a": {"x": "hello world"}, "b": {}}


def test_dump_yaml():
    assert yaml.safe_load(dump_yaml(loads("名字 = 小明"))) == {"global": {"名字": "小明"}}
