"""
Provider registrations.

Every configured provider is paired with the document selector it serves.
The server creates one completion capability per registration.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from completionls.completion.models import AutoCompleteResponse
from completionls.config import ConfigError, FilterConfig, ProviderConfig, ServerConfig
from completionls.providers.base import CompletionProvider, StaticCompletionProvider
from completionls.providers.command import CommandCompletionProvider
from completionls.utils.glob import glob_match
from completionls.utils.uris import from_uri, uri_scheme


@dataclass
class DocumentSelector:
    """A set of document filters; a document matches if any filter does."""

    filters: list[FilterConfig] = field(default_factory=list)

    def matches(self, uri: str, language_id: str | None = None) -> bool:
        # An empty selector applies to every document
        if not self.filters:
            return True
        return any(self._filter_matches(f, uri, language_id) for f in self.filters)

    @staticmethod
    def _filter_matches(
        document_filter: FilterConfig, uri: str, language_id: str | None
    ) -> bool:
        if document_filter.language and document_filter.language != language_id:
            return False
        if document_filter.scheme and document_filter.scheme != uri_scheme(uri):
            return False
        if document_filter.pattern:
            path = from_uri(uri).replace("\\", "/")
            if not glob_match(path, document_filter.pattern):
                return False
        return True


@dataclass
class ProviderRegistration:
    selector: DocumentSelector
    provider: CompletionProvider


def create_provider(
    provider_config: ProviderConfig, working_dir: Path | None = None
) -> CompletionProvider:
    """Instantiate the provider described by a ProviderConfig."""
    if provider_config.kind == "command":
        return CommandCompletionProvider(
            name=provider_config.name,
            command=provider_config.command,
            position_base=provider_config.position_base,
            timeout=provider_config.timeout,
            working_dir=working_dir,
        )

    if provider_config.kind == "static":
        return StaticCompletionProvider(
            name=provider_config.name,
            completions=[
                AutoCompleteResponse.from_dict(c) for c in provider_config.completions
            ],
            position_base=provider_config.position_base,
        )

    raise ConfigError(
        f"Provider '{provider_config.name}': unknown kind '{provider_config.kind}'"
    )


def enumerate_registrations(
    config: ServerConfig, working_dir: Path | None = None
) -> Iterator[ProviderRegistration]:
    """Yield a registration for each configured provider, in config order."""
    for provider_config in config.providers:
        yield ProviderRegistration(
            selector=DocumentSelector(list(provider_config.selector)),
            provider=create_provider(provider_config, working_dir),
        )
