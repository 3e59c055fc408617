"""
Tests for the Idiom Table and its JSON loader.
"""

import json

import pytest

from py2rs.semantics import idioms as idioms_module
from py2rs.semantics.idioms import IdiomEntry, IdiomTable, get_definitions_path, load_idiom_table


def test_packaged_table_has_print(idioms):
  assert idioms.lookup("print") == "println!"
  assert "print" in idioms


def test_lookup_miss_returns_none(idioms):
  assert idioms.lookup("foo") is None
  assert "foo" not in idioms


def test_packaged_entries_are_callable_spellings(idioms):
  """Every packaged target accepts a plain argument list, e.g. ``String::from("a")``."""
  assert set(idioms.identifiers()) == {"exit", "list", "print", "str", "sys.exit"}
  assert "repr" not in idioms
  assert "input" not in idioms


def test_lookup_is_stable_across_calls(idioms):
  """The same identifier always maps to the same spelling within a process."""
  first = [idioms.lookup(name) for name in idioms.identifiers()]
  second = [load_idiom_table("python_rust").lookup(name) for name in idioms.identifiers()]
  assert first == second
  assert None not in first


def test_loader_caches_instance():
  assert load_idiom_table("python_rust") is load_idiom_table("python_rust")


def test_table_is_read_only(idioms):
  with pytest.raises(TypeError):
    idioms._entries["print"] = IdiomEntry(target="x")  # type: ignore[index]


def test_extended_returns_new_table(idioms):
  extended = idioms.extended({"len": "Vec::len", "print": "print!"})
  assert extended.lookup("len") == "Vec::len"
  assert extended.lookup("print") == "print!"
  # Original untouched
  assert idioms.lookup("print") == "println!"
  assert "len" not in idioms
  assert len(extended) == len(idioms) + 1


def test_identifiers_sorted(idioms):
  names = idioms.identifiers()
  assert list(names) == sorted(names)
  assert list(idioms) == list(names)


def test_missing_definition_file_gives_empty_table(tmp_path, monkeypatch):
  monkeypatch.setattr(idioms_module, "DEFINITIONS_DIR", tmp_path)
  table = load_idiom_table("python_cobol")
  assert len(table) == 0
  assert table.lookup("print") is None


def test_custom_definition_file(tmp_path, monkeypatch):
  monkeypatch.setattr(idioms_module, "DEFINITIONS_DIR", tmp_path)
  (tmp_path / "python_go.json").write_text(json.dumps({"print": {"target": "fmt.Println"}}))

  table = load_idiom_table("python_go")
  assert table.lookup("print") == "fmt.Println"
  assert table.entry("print").description is None
  assert get_definitions_path("python_go") == tmp_path / "python_go.json"


@pytest.mark.parametrize(
  "content",
  [
    "{not json",
    '{"print": {"description": "no target"}}',
    '{"print": {"target": ""}}',
    '["print"]',
  ],
)
def test_invalid_definition_file(tmp_path, monkeypatch, content):
  monkeypatch.setattr(idioms_module, "DEFINITIONS_DIR", tmp_path)
  (tmp_path / "python_bad.json").write_text(content)

  with pytest.raises(ValueError, match="python_bad.json"):
    load_idiom_table("python_bad")


def test_empty_table_repr():
  assert repr(IdiomTable()) == "IdiomTable(0 entries)"
