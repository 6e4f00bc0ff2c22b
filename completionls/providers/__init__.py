"""Completion backends for completionls."""
from .base import CompletionProvider, StaticCompletionProvider
from .command import CommandCompletionProvider, CompletionBackendError

__all__ = [
    'CompletionProvider',
    'StaticCompletionProvider',
    'CommandCompletionProvider',
    'CompletionBackendError',
]
