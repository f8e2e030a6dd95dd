"""Object store adapters backed by remote APIs."""

from .endpoints import EndpointsStore

__all__ = ["EndpointsStore"]
