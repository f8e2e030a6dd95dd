"""Errors surfaced by the endpoints store."""

from typing import Any


class RemoteCallError(Exception):
    """A remote call completed with an error value.

    The value delivered by the remote client is kept verbatim in
    ``error``; no classification or translation is applied.
    """

    def __init__(self, error: Any):
        self.error = error
        super().__init__(self._describe(error))

    @staticmethod
    def _describe(error: Any) -> str:
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return str(error)
