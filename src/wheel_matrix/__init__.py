"""Resolve prebuilt wheel URLs from hand-maintained compatibility catalogs.

Subpackages:
  catalog  -- table extraction, tag normalisation, candidate providers
  resolve  -- field predicates and the tiered / scored matchers
"""
