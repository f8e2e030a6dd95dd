"""Test suite for the endpoints store.

Organized into three categories:

1. core/: Unit tests for the data model and query results
   - No external dependencies, fast execution

2. adapters/: Tests for adapter implementations
   - EndpointsStore against the in-memory remote API fake
   - EndpointsRpcClient against httpx.MockTransport
   - CLI command handler

3. fakes/: Port implementations for testing
   - In-memory implementation of RemoteApiPort
"""
