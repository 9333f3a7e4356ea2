"""Exceptions raised when analysis input breaks the tree/profile contract.

Analysis never recovers from these: reach probabilities and combo counts
below a malformed node are meaningless, so the whole run is aborted.
"""

from __future__ import annotations

__all__ = ["AnalysisError", "InvalidFrequencyError", "MalformedTreeError"]


class AnalysisError(ValueError):
    """Base class for rejected analysis input."""


class MalformedTreeError(AnalysisError):
    """The decision tree has duplicate ids, a shared subtree or a cycle."""

    def __init__(self, message: str, *, node_id: str | None = None) -> None:
        super().__init__(message)
        self.node_id = node_id


class InvalidFrequencyError(AnalysisError):
    """A frequency or weak percentage lies outside ``[0, 1]``."""

    def __init__(self, message: str, *, node_id: str | None = None, value: float | None = None) -> None:
        super().__init__(message)
        self.node_id = node_id
        self.value = value
