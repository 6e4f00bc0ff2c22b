from types import MappingProxyType

from lsprotocol.types import CompletionItemKind


# Mapping of backend kind tags to LSP completion item kinds
COMPLETION_KINDS = MappingProxyType(
    {
        # Types
        "Class": CompletionItemKind.Class,
        "Delegate": CompletionItemKind.Function,
        "Enum": CompletionItemKind.Enum,
        "Interface": CompletionItemKind.Interface,
        "Struct": CompletionItemKind.Struct,

        # Variables
        "Local": CompletionItemKind.Variable,
        "Parameter": CompletionItemKind.Variable,
        "RangeVariable": CompletionItemKind.Variable,

        # Members
        "Const": CompletionItemKind.Constant,
        "EnumMember": CompletionItemKind.Enum,
        "Event": CompletionItemKind.Event,
        "Field": CompletionItemKind.Field,
        "Method": CompletionItemKind.Method,
        "Property": CompletionItemKind.Property,

        # Other
        "Label": CompletionItemKind.Text,
        "Keyword": CompletionItemKind.Keyword,
        "Namespace": CompletionItemKind.Module,
    }
)

DEFAULT_KIND = CompletionItemKind.Property


def classify_kind(tag: str | None) -> CompletionItemKind:
    """
    Classify a backend kind tag.

    Unknown, empty or missing tags fall back to DEFAULT_KIND.
    """
    if not tag:
        return DEFAULT_KIND
    return COMPLETION_KINDS.get(tag, DEFAULT_KIND)
