# tests/test_exporter.py

import json
from pathlib import Path

import pytest

from bwdedup.common.errors import ExportFormatError, ExportReadError, ExportWriteError
from bwdedup.common.exporter import ExportWriter, default_output_path, load_export


def test_default_output_path():
    assert default_output_path(Path("exports/vault.json")) == Path("exports/vault.dedup.json")
    assert default_output_path(Path("vault")) == Path("vault.dedup.json")


def test_load_export(tmp_path):
    path = tmp_path / "vault.json"
    path.write_text(json.dumps({"encrypted": False, "folders": [], "items": [{"name": "é"}]}), encoding="utf-8")
    root = load_export(path)
    assert root["items"] == [{"name": "é"}]


@pytest.mark.parametrize("content", ['{"folders": []}', '[{"name": "x"}]', '{"items": {}}'])
def test_load_export_requires_items_list(tmp_path, content):
    path = tmp_path / "vault.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ExportFormatError, match="items"):
        load_export(path)


def test_load_export_invalid_json(tmp_path):
    path = tmp_path / "vault.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ExportReadError, match="Failed to parse JSON"):
        load_export(path)


def test_load_export_missing_file(tmp_path):
    with pytest.raises(ExportReadError, match="Failed to read"):
        load_export(tmp_path / "missing.json")


def test_writer_replaces_items_and_keeps_other_keys(tmp_path):
    root = {"encrypted": False, "folders": [{"id": "f"}], "items": [1, 2, 3]}
    path = tmp_path / "out.json"

    written = ExportWriter().write(root, [{"name": "Ünïcode"}], path)

    text = path.read_text(encoding="utf-8")
    assert text == '{"encrypted":false,"folders":[{"id":"f"}],"items":[{"name":"Ünïcode"}]}'
    assert written["items"] == [{"name": "Ünïcode"}]
    assert root["items"] == [1, 2, 3]


def test_writer_pretty(tmp_path):
    path = tmp_path / "out.json"
    ExportWriter(pretty=True).write({"items": []}, [{"a": 1}], path)
    assert path.read_text(encoding="utf-8") == '{\n  "items": [\n    {\n      "a": 1\n    }\n  ]\n}'


def test_load_export_not_utf8(tmp_path):
    path = tmp_path / "vault.json"
    path.write_bytes(b'{"items": [{"name": "\xff\xfe"}]}')
    with pytest.raises(ExportReadError, match="Failed to read"):
        load_export(path)


def test_load_export_nesting_too_deep(tmp_path):
    path = tmp_path / "vault.json"
    path.write_text('{"items": ' + "[" * 100000 + "]" * 100000 + "}", encoding="utf-8")
    with pytest.raises(ExportReadError, match="nesting too deep"):
        load_export(path)


def test_writer_unencodable_text_keeps_existing_file(tmp_path):
    path = tmp_path / "out.json"
    path.write_text("previous run", encoding="utf-8")
    root = json.loads('{"items": [{"name": "\\ud800"}]}')

    with pytest.raises(ExportWriteError, match="Cannot encode"):
        ExportWriter().write(root, root["items"], path)

    assert path.read_text(encoding="utf-8") == "previous run"
