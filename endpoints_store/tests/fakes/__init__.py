"""Fake implementations of core ports for testing.

- FakeRemoteApi: In-memory remote API that records every call
- FakeRemoteRequest: Canned request with configurable callback timing
"""

from .remote import FakeRemoteApi, FakeRemoteRequest

__all__ = [
    "FakeRemoteApi",
    "FakeRemoteRequest",
]
