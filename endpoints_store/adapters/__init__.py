"""External adapters for the endpoints store.

This package contains all external dependencies (httpx, the CLI loop)
and provides implementations of the core port interfaces.

Adapter Organization:

- store/: The object store built on a remote API (EndpointsStore)
- remote/: Remote API clients (Cloud Endpoints JSON-RPC over httpx)
- cli/: Command-line interface commands
"""
