import pytest

from lsprotocol.types import CompletionItemKind

from completionls.completion.kinds import COMPLETION_KINDS, DEFAULT_KIND, classify_kind


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("Class", CompletionItemKind.Class),
        ("Delegate", CompletionItemKind.Function),
        ("Enum", CompletionItemKind.Enum),
        ("Interface", CompletionItemKind.Interface),
        ("Struct", CompletionItemKind.Struct),
        ("Local", CompletionItemKind.Variable),
        ("Parameter", CompletionItemKind.Variable),
        ("RangeVariable", CompletionItemKind.Variable),
        ("Const", CompletionItemKind.Constant),
        ("EnumMember", CompletionItemKind.Enum),
        ("Event", CompletionItemKind.Event),
        ("Field", CompletionItemKind.Field),
        ("Method", CompletionItemKind.Method),
        ("Property", CompletionItemKind.Property),
        ("Label", CompletionItemKind.Text),
        ("Keyword", CompletionItemKind.Keyword),
        ("Namespace", CompletionItemKind.Module),
    ],
)
def test_known_tags(tag, expected):
    assert classify_kind(tag) == expected


@pytest.mark.parametrize("tag", ["", None, "method", "TypeParameter", "Unknown"])
def test_unknown_tags_default_to_property(tag):
    assert classify_kind(tag) == CompletionItemKind.Property
    assert DEFAULT_KIND == CompletionItemKind.Property


def test_mapping_is_read_only():
    with pytest.raises(TypeError):
        COMPLETION_KINDS["Alias"] = CompletionItemKind.Class  # type: ignore[index]

    assert "Alias" not in COMPLETION_KINDS
