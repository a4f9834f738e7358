import pytest

from iniread.document import GLOBAL_SECTION, Document, Section
from iniread.parser import loads


def test_global_section_always_exists():
    document = Document({"a": Section("a", {"k": "v"})})
    assert document.sections() == [GLOBAL_SECTION, "a"]
    assert len(document.global_section) == 0


def test_global_section_listed_first():
    document = loads("[z]\nk = v\n[global]\ng = 1")
    assert document.sections() == [GLOBAL_SECTION, "z"]


@pytest.mark.parametrize("name", [None, "", GLOBAL_SECTION])
def test_section_resolution_of_global(name):
    document = loads("k = v")
    assert document.section(name) is document.global_section


def test_section_lookup_is_case_sensitive():
    document = loads("[Main]\nk = v")
    assert document.section("Main") is not None
    assert document.section("main") is None
    assert document.get("main", "k") is None
    assert document.get("Main", "K", "fallback") == "fallback"


def test_section_is_read_only():
    section = loads("[a]\nk = v")["a"]
    with pytest.raises(TypeError):
        section.entries["k"] = "changed"
    assert "k" in section
    assert list(section) == ["k"]
    assert dict(section.items()) == {"k": "v"}


def test_release():
    document = loads("[a]\nk = v")
    document.release()
    assert document.released
    assert repr(document) == "Document(<released>)"
    with pytest.raises(RuntimeError):
        document.section("a")
    with pytest.raises(RuntimeError):
        document.release()


def test_context_manager_releases():
    with loads("k = v") as document:
        assert document.get(None, "k") == "v"
    assert document.released


def test_context_manager_tolerates_explicit_release():
    with loads("k = v") as document:
        document.release()
    assert document.released
