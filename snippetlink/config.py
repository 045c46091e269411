"""Configuration loading for snippetlink (.snippetlink.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".snippetlink.yml"

DEFAULT_INCLUDE = ["*.md"]
DEFAULT_EXCLUDE_PATHS = [
    ".git/",
    ".hg/",
    ".svn/",
    ".venv/",
    "node_modules/",
    "bin/",
    "obj/",
]


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DocumentsConfig:
    """Which documentation files are scanned for snippet markers."""

    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude_paths: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATHS))


@dataclass
class PluginConfig:
    """Enabled plugin names; ``None`` enables every registered plugin."""

    enabled: Optional[List[str]] = None


@dataclass
class SnippetLinkConfig:
    """Represents the settings defined in .snippetlink.yml."""

    root: Path
    documents: DocumentsConfig = field(default_factory=DocumentsConfig)
    extractors: PluginConfig = field(default_factory=PluginConfig)
    renderers: PluginConfig = field(default_factory=PluginConfig)


def load_config(config_path: Path) -> SnippetLinkConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SnippetLinkConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    documents = DocumentsConfig()
    documents_data = _as_dict(data.get("documents"))
    if "include" in documents_data:
        documents.include = _as_str_list(documents_data.get("include"))
    if "exclude_paths" in documents_data:
        documents.exclude_paths = _as_str_list(documents_data.get("exclude_paths"))

    return SnippetLinkConfig(
        root=root,
        documents=documents,
        extractors=_plugin_config(data.get("extractors")),
        renderers=_plugin_config(data.get("renderers")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _plugin_config(value: Any) -> PluginConfig:
    data = _as_dict(value)
    if "enabled" not in data or data.get("enabled") is None:
        return PluginConfig()
    return PluginConfig(enabled=_as_str_list(data.get("enabled")))


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DocumentsConfig",
    "PluginConfig",
    "SnippetLinkConfig",
    "load_config",
]
