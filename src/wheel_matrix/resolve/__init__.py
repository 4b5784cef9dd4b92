"""Compatibility resolution over catalog artifacts.

Submodules:
  schema      -- RequestDescriptor and the MatchSuccess / MatchFailure results
  predicates  -- per-field match rules and candidate scoring
  matcher     -- tiered (table catalog) and scored (JSON index) strategies
"""
