"""
LSP Capabilities Manager

Completion requests are served by capability handlers. Each handler decides
whether it can handle a request (usually by matching the document against a
selector) and produces completion items for it. The manager aggregates the
results of every capable handler.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lsprotocol.types import CompletionItem, CompletionList, CompletionParams


if TYPE_CHECKING:
    from completionls.lsp.completion_language_server import CompletionLanguageServer


class Capability(ABC):
    """
    Base class for all LSP capability handlers.

    Each capability handles one LSP feature and decides whether it can
    handle a specific request based on context.
    """

    def __init__(self, server: CompletionLanguageServer) -> None:
        self.server = server

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this capability."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this capability does."""
        pass

    @abstractmethod
    async def can_handle(self, params) -> bool:
        """Check if the capability can handle the request."""
        pass


class CompletionCapability(Capability):
    """Base class for completion capabilities."""

    @abstractmethod
    async def can_handle(self, params: CompletionParams) -> bool:
        """
        Check if this capability can handle the completion request.

        Returns True if this capability should provide completions
        for the current document.
        """
        pass

    @abstractmethod
    async def complete(self, params: CompletionParams) -> CompletionList:
        """
        Provide completion items.

        Only called if can_handle() returns True.
        """
        pass

    async def resolve(self, item: CompletionItem) -> CompletionItem:
        """
        Resolve a completion item.

        Items are returned fully populated by complete(), so by default
        the item is returned unchanged.
        """
        return item


class CapabilityManager:
    """
    Central manager for all LSP capabilities.

    Usage:
        manager = CapabilityManager(server, {"csharp": capability})
        result = await manager.handle_completion(params)
    """

    def __init__(
        self,
        server: CompletionLanguageServer,
        capabilities: dict[str, Capability] | None = None,
    ):
        self.server = server
        self.capabilities = capabilities if capabilities is not None else {}

    def get_capability(self, name: str) -> Capability | None:
        """Get a specific capability by name"""
        return self.capabilities.get(name)

    def get_capabilities_by_type(self, capability_type: type) -> list[Capability]:
        """Get all capabilities of a specific type (e.g., all CompletionCapability)."""
        return [
            cap
            for cap in self.capabilities.values()
            if isinstance(cap, capability_type)
        ]

    async def handle_completion(self, params: CompletionParams) -> CompletionList:
        """
        Handle completion requests by delegating to capable handlers.

        Results are concatenated in registration order. A label already
        provided by an earlier handler is skipped, so labels stay unique.
        Errors and cancellation raised by a handler propagate to the caller.
        """
        all_items: list[CompletionItem] = []
        seen_labels: set[str] = set()

        for capability in self.get_capabilities_by_type(CompletionCapability):
            if await capability.can_handle(params):
                result = await capability.complete(params)  # pyright: ignore
                for item in result.items:
                    if item.label in seen_labels:
                        continue
                    seen_labels.add(item.label)
                    all_items.append(item)

        return CompletionList(is_incomplete=False, items=all_items)

    async def resolve_completion(self, item: CompletionItem) -> CompletionItem:
        """Completion items are never resolved lazily; echo the item back."""
        return item
