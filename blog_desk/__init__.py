"""
blog-desk - A small Django blog authoring app.

Features:
- Post list grouped by category and recency
- Composer with slug derivation and optional cover upload
- Optimistic delete with rollback
- Flat JSON file store or hosted table + object storage buckets
- JSON API for listing, creating and deleting posts
"""

__version__ = "0.1.0"
__author__ = "Nestor Wheelock"
