"""
Backend auto-complete capability.

Serves textDocument/completion for the documents matched by a provider
registration, translating the provider's candidates with CompletionTranslator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lsprotocol.types import CompletionItem, CompletionList, CompletionParams

from completionls.completion.models import CompletionQuery
from completionls.completion.translator import CompletionTranslator
from completionls.lsp.capabilities.capabilities import CompletionCapability
from completionls.providers.registry import ProviderRegistration
from completionls.utils.uris import from_uri

if TYPE_CHECKING:
    from completionls.lsp.completion_language_server import CompletionLanguageServer


class AutoCompleteCapability(CompletionCapability):
    """Provides completion items from one completion provider."""

    def __init__(
        self, server: CompletionLanguageServer, registration: ProviderRegistration
    ) -> None:
        super().__init__(server)
        self.selector = registration.selector
        self.translator = CompletionTranslator(registration.provider)

    @property
    def name(self) -> str:
        return f"{self.translator.provider.name}_completion"

    @property
    def description(self) -> str:
        return f"Auto-complete from the '{self.translator.provider.name}' backend"

    async def can_handle(self, params: CompletionParams) -> bool:
        """Check if the document is served by this provider."""
        document = self.server.workspace.get_text_document(params.text_document.uri)
        return self.selector.matches(params.text_document.uri, document.language_id)

    async def complete(self, params: CompletionParams) -> CompletionList:
        document = self.server.workspace.get_text_document(params.text_document.uri)
        snippet_support = self._client_supports_snippets()

        query = CompletionQuery(
            file_name=from_uri(params.text_document.uri),
            line=params.position.line,
            column=params.position.character,
            wants_snippets=snippet_support,
            buffer=document.source if document.version is not None else None,
        )

        return await self.translator.translate(query, snippet_support)

    async def resolve(self, item: CompletionItem) -> CompletionItem:
        return await self.translator.resolve(item)

    def _client_supports_snippets(self) -> bool:
        """Read textDocument.completion.completionItem.snippetSupport."""
        capabilities = self.server.client_capabilities
        text_document = capabilities.text_document if capabilities else None
        completion = text_document.completion if text_document else None
        completion_item = completion.completion_item if completion else None
        if completion_item is None:
            return False
        return bool(completion_item.snippet_support)
