"""Metadata repository facades.

This module wires location resolution, indexing, and query resolution
into repository objects answering configuration-directory lookups.
"""
