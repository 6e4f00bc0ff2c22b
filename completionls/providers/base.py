"""
Completion provider interface.

A provider is the language-intelligence backend the translator delegates to.
It receives an AutoCompleteRequest and returns raw candidates in the order
the backend ranked them. Providers may raise (backend faults) or be
cancelled while awaiting; callers propagate both.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from completionls.completion.models import AutoCompleteRequest, AutoCompleteResponse


class CompletionProvider(ABC):
    """Base class for completion backends."""

    # Index base of the line/column coordinates the backend expects.
    position_base: int = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this provider."""
        pass

    @abstractmethod
    async def auto_complete(
        self, request: AutoCompleteRequest
    ) -> Sequence[AutoCompleteResponse]:
        """Return the completion candidates for the requested position."""
        pass


class StaticCompletionProvider(CompletionProvider):
    """Provider returning the same candidates for every position."""

    def __init__(
        self,
        name: str,
        completions: Sequence[AutoCompleteResponse],
        position_base: int = 0,
    ) -> None:
        self._name = name
        self._completions = list(completions)
        self.position_base = position_base

    @property
    def name(self) -> str:
        return self._name

    async def auto_complete(
        self, request: AutoCompleteRequest
    ) -> Sequence[AutoCompleteResponse]:
        if request.want_snippet:
            return list(self._completions)
        # Backends only produce snippet text when asked for it
        return [
            AutoCompleteResponse(
                completion_text=c.completion_text,
                display_text=c.display_text,
                return_type=c.return_type,
                description=c.description,
                kind=c.kind,
            )
            for c in self._completions
        ]
