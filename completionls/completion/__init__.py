"""Completion translation for completionls."""
from .kinds import COMPLETION_KINDS, classify_kind
from .models import AutoCompleteRequest, AutoCompleteResponse, CompletionQuery
from .translator import CompletionTranslator

__all__ = [
    'COMPLETION_KINDS',
    'classify_kind',
    'AutoCompleteRequest',
    'AutoCompleteResponse',
    'CompletionQuery',
    'CompletionTranslator',
]
