"""
Document store layer for the CMS content collections.

Provides interchangeable async document stores (SQLite JSON for local
development and tests, MongoDB for deployments) and the entity schemas
used to deserialize stored documents.
"""
