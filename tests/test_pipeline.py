"""Tests for catalog loading and end-to-end resolution with an injected fetch."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import json

import pytest

from wheel_matrix.catalog.providers import StructuredCatalog, TableCatalog
from wheel_matrix.errors import CatalogFormatError
from wheel_matrix.pipeline import load_catalog, load_structured_catalog, load_table_catalog, resolve_source
from wheel_matrix.resolve.schema import MatchSuccess, RequestDescriptor

INDEX_JSON = json.dumps(
    {"packages": [{"name": "sageattention", "wheels": [{"torch": "2.8.0", "cuda": "12.8", "python": "3.12", "url": "https://x/sage.whl"}]}]}
)


def request(**overrides) -> RequestDescriptor:
    fields = {"package_name": "flash-attn", "framework_version": "2.8.0", "accelerator_tag": "cu129", "language_tag": "3.12"}
    fields.update(overrides)
    return RequestDescriptor(**fields)


class TestLoaders:

    def test_table_catalog(self, flash_attn_matrix):
        catalog = load_table_catalog(flash_attn_matrix)
        assert isinstance(catalog, TableCatalog)
        assert len(catalog.tables) == 3

    def test_structured_catalog(self):
        assert isinstance(load_structured_catalog(INDEX_JSON), StructuredCatalog)

    def test_invalid_json(self):
        with pytest.raises(CatalogFormatError):
            load_structured_catalog("{not json")

    def test_load_catalog_from_url(self, flash_attn_matrix):
        catalog = load_catalog("https://example.org/README.md", fetch=lambda url: flash_attn_matrix)
        assert isinstance(catalog, TableCatalog)


class TestResolveSource:

    def test_markdown_source(self, flash_attn_matrix):
        result = resolve_source("https://example.org/README.md", request(), fetch=lambda url: flash_attn_matrix)
        assert isinstance(result, MatchSuccess)
        assert result.url == "https://example.org/fa-2.7.4-cu129-cp312.whl"

    def test_structured_source(self):
        result = resolve_source(
            "https://example.org/index.json",
            request(package_name="SageAttention"),
            structured=True,
            fetch=lambda url: INDEX_JSON,
        )
        assert result.url == "https://x/sage.whl"
        assert result.tier_used == 2
