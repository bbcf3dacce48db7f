"""Repository directory indexing.

This module scans materialized repository roots into read-only
indexes of configuration directories keyed by artifact module.
"""
