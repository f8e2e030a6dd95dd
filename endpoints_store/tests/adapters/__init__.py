"""Tests for adapter implementations.

These tests exercise the store against the in-memory remote API fake
and the JSON-RPC client against a mocked httpx transport.
"""
