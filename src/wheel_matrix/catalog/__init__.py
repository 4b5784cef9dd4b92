"""Catalog parsing: pipe-table extraction, tag normalisation, candidate providers.

Submodules:
  patterns    -- compiled regex patterns and the column-role table
  schema      -- HeadingPath, Row, Table and Artifact Pydantic models
  tags        -- accelerator tag conversion (cu129 <-> 12.9) and version helpers
  extraction  -- heading-aware pipe-table extractor
  providers   -- table-backed and structured-JSON artifact streams
  export      -- audit JSON serialisation of extracted tables
"""
