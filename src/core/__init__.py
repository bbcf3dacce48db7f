"""Core models, configuration, and error types.

This module holds the shared building blocks used by the cache,
index, query, and repository layers.
"""
