"""
Server configuration.

Providers are declared in a YAML file at the workspace root:

    providers:
      - name: csharp
        kind: command
        command: ["my-backend", "complete"]
        position_base: 0
        timeout: 10
        selector:
          - language: csharp
          - pattern: "**/*.cs"
      - name: keywords
        kind: static
        completions:
          - CompletionText: foreach
            Kind: Keyword

The file path can be overridden with the COMPLETIONLS_CONFIG environment
variable. LSP initializationOptions use the same shape and take precedence
over the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from completionls.utils.glob import compile_glob

CONFIG_ENV_VAR = "COMPLETIONLS_CONFIG"
CONFIG_FILE_NAMES = [".completionls.yml", ".completionls.yaml"]
PROVIDER_KINDS = ("command", "static")


class ConfigError(ValueError):
    """Raised when the configuration cannot be loaded or is invalid."""


@dataclass
class FilterConfig:
    """One document filter; unset fields match anything."""

    language: str | None = None
    scheme: str | None = None
    pattern: str | None = None


@dataclass
class ProviderConfig:
    """A configured completion provider."""

    name: str
    kind: str = "command"
    command: list[str] = field(default_factory=list)
    position_base: int = 0
    timeout: float = 10.0
    selector: list[FilterConfig] = field(default_factory=list)
    completions: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class ServerConfig:
    """Top-level server configuration."""

    providers: list[ProviderConfig] = field(default_factory=list)
    source: Path | None = None


def find_config_file(workspace_root: Path | None) -> Path | None:
    """Locate the configuration file, honoring COMPLETIONLS_CONFIG."""
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        if not path.is_file():
            raise ConfigError(f"{CONFIG_ENV_VAR} points to a missing file: {path}")
        return path

    if workspace_root is None:
        return None

    for file_name in CONFIG_FILE_NAMES:
        candidate = workspace_root / file_name
        if candidate.is_file():
            return candidate

    return None


def load_config(
    workspace_root: Path | None = None,
    initialization_options: Any = None,
) -> ServerConfig:
    """
    Load the server configuration.

    Args:
        workspace_root: Workspace directory to search for the config file
        initialization_options: LSP initializationOptions sent by the client

    Returns:
        ServerConfig; empty when nothing is configured

    Raises:
        ConfigError: If the file or the options are malformed
    """
    config = ServerConfig()

    config_file = find_config_file(workspace_root)
    if config_file is not None:
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

        config = parse_config(data or {})
        config.source = config_file

    if isinstance(initialization_options, dict) and "providers" in initialization_options:
        source = config.source
        config = parse_config(initialization_options)
        config.source = source

    return config


def parse_config(data: Any) -> ServerConfig:
    """Build a ServerConfig from a decoded YAML/JSON mapping."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    providers = data.get("providers") or []
    if not isinstance(providers, list):
        raise ConfigError("'providers' must be a list")

    parsed = [_parse_provider(entry, index) for index, entry in enumerate(providers)]

    names = [p.name for p in parsed]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigError(f"Duplicate provider names: {', '.join(duplicates)}")

    return ServerConfig(providers=parsed)


def _parse_provider(entry: Any, index: int) -> ProviderConfig:
    if not isinstance(entry, dict):
        raise ConfigError(f"Provider #{index} must be a mapping")

    name = entry.get("name") or f"provider-{index}"
    kind = entry.get("kind", "command")
    if kind not in PROVIDER_KINDS:
        raise ConfigError(
            f"Provider '{name}': unknown kind '{kind}' "
            f"(expected one of {', '.join(PROVIDER_KINDS)})"
        )

    command = entry.get("command") or []
    if isinstance(command, str):
        command = command.split()
    if kind == "command" and not command:
        raise ConfigError(f"Provider '{name}': 'command' is required")

    position_base = entry.get("position_base", 0)
    if position_base not in (0, 1):
        raise ConfigError(f"Provider '{name}': 'position_base' must be 0 or 1")

    try:
        timeout = float(entry.get("timeout", 10.0))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Provider '{name}': invalid timeout") from e

    completions = entry.get("completions") or []
    if not isinstance(completions, list) or not all(
        isinstance(c, dict) for c in completions
    ):
        raise ConfigError(f"Provider '{name}': 'completions' must be a list of mappings")

    return ProviderConfig(
        name=str(name),
        kind=kind,
        command=[str(part) for part in command],
        position_base=position_base,
        timeout=timeout,
        selector=_parse_selector(entry.get("selector") or [], name),
        completions=completions,
    )


def _parse_selector(selector: Any, name: str) -> list[FilterConfig]:
    if isinstance(selector, dict):
        selector = [selector]
    if not isinstance(selector, list):
        raise ConfigError(f"Provider '{name}': 'selector' must be a list")

    filters = []
    for item in selector:
        if not isinstance(item, dict):
            raise ConfigError(f"Provider '{name}': selector entries must be mappings")
        unknown = set(item) - {"language", "scheme", "pattern"}
        if unknown:
            raise ConfigError(
                f"Provider '{name}': unknown selector keys {', '.join(sorted(unknown))}"
            )
        pattern = item.get("pattern")
        if pattern is not None:
            try:
                compile_glob(str(pattern))
            except ValueError as e:
                raise ConfigError(f"Provider '{name}': {e}") from e
        filters.append(
            FilterConfig(
                language=item.get("language"),
                scheme=item.get("scheme"),
                pattern=str(pattern) if pattern is not None else None,
            )
        )

    return filters
