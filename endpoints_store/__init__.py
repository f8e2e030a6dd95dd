"""Object store adapter for Cloud Endpoints style remote APIs."""

__version__ = "0.1.0"
