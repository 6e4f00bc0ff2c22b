from pygls.lsp.server import LanguageServer

from completionls.config import ServerConfig
from completionls.lsp.capabilities.capabilities import CapabilityManager


class CompletionLanguageServer(LanguageServer):
    """
    Language Server hosting the completion capabilities.

    Attributes:
        config: Configuration loaded during initialize
        capability_manager: Completion handlers, one per configured provider
    """

    def __init__(self, name: str, version: str):
        super().__init__(name, version)

        self.config: ServerConfig | None = None
        self.capability_manager: CapabilityManager | None = None
