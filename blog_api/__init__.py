"""
Blog posts API package.

This package provides a FastAPI application exposing CRUD operations on blog
posts, with a SQLAlchemy-backed document store and an in-memory store for
development and tests.
"""
