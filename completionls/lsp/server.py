from __future__ import annotations

import logging
from pathlib import Path

from lsprotocol.types import (
    COMPLETION_ITEM_RESOLVE,
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    CompletionItem,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    InitializeParams,
    LogMessageParams,
    MessageType,
)

from completionls.config import ConfigError, ServerConfig, load_config
from completionls.lsp.capabilities.autocomplete_capability import AutoCompleteCapability
from completionls.lsp.capabilities.capabilities import Capability, CapabilityManager
from completionls.lsp.completion_language_server import CompletionLanguageServer
from completionls.providers.registry import enumerate_registrations
from completionls.utils.uris import from_uri

logger = logging.getLogger(__name__)

TRIGGER_CHARACTERS = ["."]


def create_capabilities(
    server: CompletionLanguageServer,
    config: ServerConfig,
    working_dir: Path | None = None,
) -> dict[str, Capability]:
    """Create one completion capability per configured provider."""
    capabilities: dict[str, Capability] = {}
    for registration in enumerate_registrations(config, working_dir):
        capability = AutoCompleteCapability(server, registration)
        capabilities[capability.name] = capability
    return capabilities


def _workspace_root(params: InitializeParams) -> Path | None:
    if params.root_uri:
        return Path(from_uri(params.root_uri))
    if params.root_path:
        return Path(params.root_path)
    return None


async def initialize(ls: CompletionLanguageServer, params: InitializeParams):
    """Load the configuration and set up the completion providers."""
    workspace_root = _workspace_root(params)

    try:
        ls.config = load_config(workspace_root, params.initialization_options)
    except ConfigError as e:
        logger.error("Failed to load configuration: %s", e)
        ls.window_log_message(
            LogMessageParams(MessageType.Error, f"Invalid configuration: {e}")
        )
        ls.config = ServerConfig()

    ls.capability_manager = CapabilityManager(
        ls, create_capabilities(ls, ls.config, workspace_root)
    )

    names = ", ".join(ls.capability_manager.capabilities) or "none"
    ls.window_log_message(
        LogMessageParams(MessageType.Info, f"Completion providers: {names}")
    )


async def completion(ls: CompletionLanguageServer, params: CompletionParams):
    if ls.capability_manager:
        return await ls.capability_manager.handle_completion(params)
    return CompletionList(is_incomplete=False, items=[])


async def completion_resolve(ls: CompletionLanguageServer, item: CompletionItem):
    """Items are sent fully populated; resolving returns them unchanged."""
    if ls.capability_manager:
        return await ls.capability_manager.resolve_completion(item)
    return item


def create_server() -> CompletionLanguageServer:
    """
    Creates and returns a configured Language Server instance.

    The LanguageServer class from pygls handles:
    - JSON-RPC communication with clients (editors)
    - Request/response lifecycle, including $/cancelRequest
    - Capability negotiation during initialize
    """
    server = CompletionLanguageServer("completionls", "0.1.0")

    server.feature(INITIALIZE)(initialize)
    server.feature(
        TEXT_DOCUMENT_COMPLETION,
        CompletionOptions(trigger_characters=TRIGGER_CHARACTERS, resolve_provider=False),
    )(completion)
    server.feature(COMPLETION_ITEM_RESOLVE)(completion_resolve)

    return server
