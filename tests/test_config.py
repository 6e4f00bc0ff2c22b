from pathlib import Path

import pytest

from completionls.config import (
    CONFIG_ENV_VAR,
    ConfigError,
    FilterConfig,
    find_config_file,
    load_config,
    parse_config,
)


CONFIG_YAML = """\
providers:
  - name: csharp
    command: ["backend", "complete"]
    position_base: 1
    timeout: 3
    selector:
      - language: csharp
      - pattern: "**/*.cs"
  - name: keywords
    kind: static
    completions:
      - CompletionText: foreach
        Kind: Keyword
"""


@pytest.fixture(autouse=True)
def no_env_override(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / ".completionls.yml").write_text(CONFIG_YAML)
    return tmp_path


class TestLoadConfig:

    def test_no_workspace(self):
        config = load_config(None)
        assert config.providers == []
        assert config.source is None

    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path).providers == []

    def test_loads_workspace_file(self, workspace):
        config = load_config(workspace)

        assert config.source == workspace / ".completionls.yml"
        assert [p.name for p in config.providers] == ["csharp", "keywords"]

        csharp = config.providers[0]
        assert csharp.kind == "command"
        assert csharp.command == ["backend", "complete"]
        assert csharp.position_base == 1
        assert csharp.timeout == 3.0
        assert csharp.selector == [
            FilterConfig(language="csharp"),
            FilterConfig(pattern="**/*.cs"),
        ]

        keywords = config.providers[1]
        assert keywords.kind == "static"
        assert keywords.completions == [{"CompletionText": "foreach", "Kind": "Keyword"}]

    def test_yaml_extension(self, tmp_path):
        (tmp_path / ".completionls.yaml").write_text(CONFIG_YAML)
        assert len(load_config(tmp_path).providers) == 2

    def test_env_override(self, tmp_path, monkeypatch):
        config_file = tmp_path / "custom.yml"
        config_file.write_text("providers:\n  - name: other\n    command: backend\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))

        config = load_config(None)

        assert config.source == config_file
        assert config.providers[0].command == ["backend"]

    def test_env_override_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.yml"))

        with pytest.raises(ConfigError):
            find_config_file(None)

    def test_initialization_options_win(self, workspace):
        config = load_config(
            workspace,
            {"providers": [{"name": "from-client", "command": ["client-backend"]}]},
        )

        assert [p.name for p in config.providers] == ["from-client"]

    def test_initialization_options_without_providers_ignored(self, workspace):
        config = load_config(workspace, {"somethingElse": True})
        assert len(config.providers) == 2

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / ".completionls.yml").write_text("providers: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(tmp_path)

    def test_empty_file(self, tmp_path):
        (tmp_path / ".completionls.yml").write_text("")
        assert load_config(tmp_path).providers == []


class TestParseConfig:

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError):
            parse_config(["providers"])

    def test_providers_not_a_list(self):
        with pytest.raises(ConfigError):
            parse_config({"providers": {"name": "x"}})

    def test_command_required(self):
        with pytest.raises(ConfigError, match="'command' is required"):
            parse_config({"providers": [{"name": "x"}]})

    def test_unknown_kind(self):
        with pytest.raises(ConfigError, match="unknown kind"):
            parse_config({"providers": [{"name": "x", "kind": "http"}]})

    def test_invalid_position_base(self):
        with pytest.raises(ConfigError, match="position_base"):
            parse_config(
                {"providers": [{"name": "x", "command": ["b"], "position_base": 2}]}
            )

    def test_invalid_timeout(self):
        with pytest.raises(ConfigError, match="timeout"):
            parse_config(
                {"providers": [{"name": "x", "command": ["b"], "timeout": "soon"}]}
            )

    def test_duplicate_names(self):
        with pytest.raises(ConfigError, match="Duplicate"):
            parse_config(
                {
                    "providers": [
                        {"name": "x", "command": ["a"]},
                        {"name": "x", "command": ["b"]},
                    ]
                }
            )

    def test_unknown_selector_key(self):
        with pytest.raises(ConfigError, match="selector"):
            parse_config(
                {
                    "providers": [
                        {"name": "x", "command": ["a"], "selector": [{"glob": "*.cs"}]}
                    ]
                }
            )

    def test_single_selector_mapping(self):
        config = parse_config(
            {"providers": [{"name": "x", "command": ["a"], "selector": {"language": "cs"}}]}
        )
        assert config.providers[0].selector == [FilterConfig(language="cs")]

    def test_default_name(self):
        config = parse_config({"providers": [{"command": ["a"]}]})
        assert config.providers[0].name == "provider-0"


def test_invalid_selector_pattern():
    with pytest.raises(ConfigError, match="glob pattern"):
        parse_config(
            {
                "providers": [
                    {"name": "x", "command": ["a"], "selector": [{"pattern": "**/*.{cs"}]}
                ]
            }
        )
