"""Language server translating backend auto-complete results into LSP completions."""

__version__ = "0.1.0"
