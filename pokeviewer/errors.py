"""Error taxonomy for PokéViewer."""

from __future__ import annotations

from typing import List, Optional


class PokeViewerError(Exception):
    """Base class for all PokéViewer errors."""


class TransportError(PokeViewerError):
    """A fetch failed: network, HTTP status, timeout or unusable payload."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class NotFoundError(TransportError):
    """The referenced resource does not exist (HTTP 404)."""


class MalformedChainError(PokeViewerError):
    """Evolution chain traversal hit a cycle, the depth bound or a bad node.

    ``stages`` holds the valid prefix resolved before the problem was found.
    """

    def __init__(self, message: str, stages: List) -> None:
        super().__init__(message)
        self.stages = stages
