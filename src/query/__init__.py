"""Repository query model and resolution engine.

This module builds immutable queries over artifact coordinates and
resolves them against a directory index.
"""
