"""
Data passed between the LSP layer, the translator and completion backends.

The request/response shapes follow the backend's auto-complete wire format:
requests are sent as camelCase JSON, responses may come back in PascalCase
(the .NET default) or camelCase.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _text(data: dict[str, Any], key: str) -> str:
    """Read a string field in either PascalCase or camelCase, None as ''."""
    value = data.get(key)
    if value is None:
        value = data.get(key[0].lower() + key[1:])
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class CompletionQuery:
    """A completion request at a zero-based document position."""

    file_name: str
    line: int
    column: int
    wants_snippets: bool = False
    buffer: str | None = None


@dataclass
class AutoCompleteRequest:
    """Request sent to a completion provider."""

    file_name: str
    line: int
    column: int
    want_kind: bool = True
    want_documentation_for_every_completion_result: bool = True
    want_return_type: bool = True
    want_snippet: bool = False
    buffer: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "fileName": self.file_name,
            "line": self.line,
            "column": self.column,
            "wantKind": self.want_kind,
            "wantDocumentationForEveryCompletionResult": (
                self.want_documentation_for_every_completion_result
            ),
            "wantReturnType": self.want_return_type,
            "wantSnippet": self.want_snippet,
        }
        if self.buffer is not None:
            data["buffer"] = self.buffer
        return data


@dataclass
class AutoCompleteResponse:
    """One raw completion candidate as produced by a backend."""

    completion_text: str
    display_text: str = ""
    return_type: str = ""
    description: str = ""
    kind: str = ""
    snippet: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AutoCompleteResponse:
        return cls(
            completion_text=_text(data, "CompletionText"),
            display_text=_text(data, "DisplayText"),
            return_type=_text(data, "ReturnType"),
            description=_text(data, "Description"),
            kind=_text(data, "Kind"),
            snippet=_text(data, "Snippet"),
        )
