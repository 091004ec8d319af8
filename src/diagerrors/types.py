"""
Core types and protocols used across modules.

This module provides the shared type aliases and protocol definitions used by
the error, logging and HTTP layers so they agree on what a field mapping is and
what it means for an error to carry an HTTP status.
"""

from typing import Any, Dict, Protocol, runtime_checkable

Fields = Dict[str, Any]


@runtime_checkable
class HTTPStatusProvider(Protocol):
    """
    Protocol for errors that carry an HTTP status classification.

    Any exception type may satisfy this protocol by exposing an
    ``http_status()`` method. The status classifier queries for the capability
    instead of branching on concrete types, so new status-bearing error kinds
    need no changes to the classifier.
    """

    def http_status(self) -> int:
        """
        Return the HTTP status code this error maps to.

        Returns:
            Integer HTTP status code (e.g. 404)
        """
        ...


__all__ = [
    "Fields",
    "HTTPStatusProvider",
]
