"""
Completion translator.

Turns a backend's auto-complete candidates into an LSP CompletionList:

1. Ask the provider for candidates, always requesting kinds, documentation
   and return types, and snippets only when the client supports them.
2. Shape every candidate into a CompletionItem (label, detail, kind,
   documentation, insert text and format).
3. Collapse candidates sharing a label into their first occurrence, noting
   the number of hidden overloads in its detail.

The translator holds no per-request state. Provider faults and cancellation
propagate to the caller unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from lsprotocol.types import CompletionItem, CompletionList, InsertTextFormat

from completionls.completion.kinds import classify_kind
from completionls.completion.models import (
    AutoCompleteRequest,
    AutoCompleteResponse,
    CompletionQuery,
)

if TYPE_CHECKING:
    from completionls.providers.base import CompletionProvider

logger = logging.getLogger(__name__)


class CompletionTranslator:
    """Adapts a CompletionProvider to LSP completion requests."""

    def __init__(self, provider: CompletionProvider) -> None:
        self.provider = provider

    def build_request(self, query: CompletionQuery) -> AutoCompleteRequest:
        """Build the provider request, converting from zero-based coordinates."""
        base = self.provider.position_base
        return AutoCompleteRequest(
            file_name=query.file_name,
            line=query.line + base,
            column=query.column + base,
            want_kind=True,
            want_documentation_for_every_completion_result=True,
            want_return_type=True,
            want_snippet=query.wants_snippets,
            buffer=query.buffer,
        )

    async def translate(
        self, query: CompletionQuery, snippet_support: bool | None = None
    ) -> CompletionList:
        """
        Provide the completion list for a query.

        Args:
            query: Document position to complete at
            snippet_support: Client snippet support; overrides
                query.wants_snippets when given

        Returns:
            CompletionList with one item per distinct label, in the order
            each label was first returned by the provider
        """
        if snippet_support is not None and snippet_support != query.wants_snippets:
            query = CompletionQuery(
                file_name=query.file_name,
                line=query.line,
                column=query.column,
                wants_snippets=snippet_support,
                buffer=query.buffer,
            )

        request = self.build_request(query)
        candidates = await self.provider.auto_complete(request)

        items = self.collapse_overloads(self.to_item(c) for c in candidates)
        logger.debug(
            "%s: %d candidates -> %d items for %s:%d:%d",
            self.provider.name,
            len(candidates),
            len(items),
            query.file_name,
            query.line,
            query.column,
        )
        return CompletionList(is_incomplete=False, items=items)

    def to_item(self, candidate: AutoCompleteResponse) -> CompletionItem:
        """Shape a single raw candidate."""
        if candidate.snippet:
            text = candidate.snippet
            text_format = InsertTextFormat.Snippet
        else:
            text = candidate.completion_text
            text_format = InsertTextFormat.PlainText

        if candidate.return_type:
            detail = f"{candidate.return_type} {candidate.display_text}"
        else:
            detail = candidate.display_text

        return CompletionItem(
            label=candidate.completion_text,
            detail=detail,
            documentation=candidate.description,
            kind=classify_kind(candidate.kind),
            insert_text=text,
            insert_text_format=text_format,
        )

    def collapse_overloads(
        self, items: Iterable[CompletionItem]
    ) -> list[CompletionItem]:
        """Keep the first item per label, counting the rest as overloads."""
        groups: dict[str, list[CompletionItem]] = {}
        for item in items:
            groups.setdefault(item.label, []).append(item)

        result: list[CompletionItem] = []
        for group in groups.values():
            suggestion = group[0]
            overload_count = len(group) - 1

            if overload_count > 0:
                suggestion.detail = f"{suggestion.detail} (+ {overload_count} overload(s))"

            result.append(suggestion)

        return result

    async def resolve(self, item: CompletionItem) -> CompletionItem:
        """Items are fully populated up front, so resolving is a no-op."""
        return item
