"""Unit tests for the audit JSON export of extracted tables."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import json

import pytest

from wheel_matrix.catalog.export import load_tables, save_tables, tables_from_dict, tables_to_dict
from wheel_matrix.catalog.extraction import extract_tables
from wheel_matrix.errors import CatalogFormatError


class TestTablesToDict:

    def test_document_shape(self, flash_attn_matrix):
        document = tables_to_dict(extract_tables(flash_attn_matrix))
        first = document["tables"][0]
        assert set(first) == {"section", "subsection", "index", "header", "rows"}
        assert first["section"] == "flash-attn"
        assert first["subsection"] == "2.8.x"
        assert first["index"] == 0
        assert first["header"] == ["Torch", "CUDA", "Python", "Link"]
        assert first["rows"][0] == {
            "Torch": "2.8.0",
            "CUDA": "12.8",
            "Python": "3.13",
            "Link": "[whl](https://example.org/fa-2.8.3-cu128-cp313.whl)",
        }

    def test_empty(self):
        assert tables_to_dict([]) == {"tables": []}


class TestSaveLoad:

    def test_reload_matches_extraction(self, tmp_path, flash_attn_matrix):
        tables = extract_tables(flash_attn_matrix)
        path = tmp_path / "audit" / "tables.json"
        save_tables(tables, path)
        assert json.loads(path.read_text(encoding="utf-8")) == tables_to_dict(tables)
        assert load_tables(path) == tables

    def test_missing_tables_key(self):
        with pytest.raises(CatalogFormatError):
            tables_from_dict({"rows": []})
