"""Unit tests for core domain logic.

These tests exercise the data model and the query results wrapper
without external dependencies.
"""
