"""
Main entry point for the completion language server.

This file is executed when running: python -m completionls

The server communicates with editors via stdin/stdout using JSON-RPC,
so diagnostics are logged to stderr.
"""
import logging
import os
import sys

from completionls.lsp.server import create_server


def configure_logging() -> None:
    """Log to stderr; DEBUG=1 enables verbose output."""
    level = logging.DEBUG if os.getenv("DEBUG") else logging.WARNING
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Start the language server on stdin/stdout."""
    configure_logging()

    server = create_server()

    # Start the server - it will listen on stdin/stdout for LSP messages
    # from the editor client
    server.start_io()


if __name__ == "__main__":
    main()
