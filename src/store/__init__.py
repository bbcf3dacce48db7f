"""Repository cache layer.

This module materializes repository archives into content-keyed cache
slots and resolves repository locations to local directory roots.
"""
