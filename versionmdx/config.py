"""Configuration loading for versionmdx (.versionmdx.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

CONFIG_FILENAME = ".versionmdx.yml"

DEFAULT_DOCUMENT = "stories/01. Docs/Version.mdx"
DEFAULT_FRAGMENT_DIR = "stories/01. Docs/fragments"
DEFAULT_FRAGMENT_SUFFIX = ".mdx"

STRATEGY_PER_COMMIT = "per_commit"
STRATEGY_FIRST_CATEGORY = "first_category"
FRAGMENT_STRATEGIES = (STRATEGY_PER_COMMIT, STRATEGY_FIRST_CATEGORY)

ENV_NEXT_VERSION = "NEXT_VERSION"
ENV_RELEASE_NOTES = "RELEASE_NOTES"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class FragmentConfig:
    """Where fragment files live and how they are matched to commits."""

    directory: str = DEFAULT_FRAGMENT_DIR
    suffix: str = DEFAULT_FRAGMENT_SUFFIX
    strategy: str = STRATEGY_PER_COMMIT


@dataclass
class RenderConfig:
    """Release block rendering options."""

    capitalize_components: bool = False
    template: Optional[Path] = None


@dataclass
class VersionMdxConfig:
    """Settings for one repository, resolved against its root."""

    root: Path
    document: str = DEFAULT_DOCUMENT
    fragments: FragmentConfig = field(default_factory=FragmentConfig)
    strict: bool = False
    render: RenderConfig = field(default_factory=RenderConfig)

    @property
    def document_path(self) -> Path:
        return self.root / self.document

    @property
    def fragment_dir(self) -> Path:
        return self.root / self.fragments.directory


def load_config(config_path: Path) -> VersionMdxConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return VersionMdxConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = VersionMdxConfig(root=root)

    document = _as_str(data.get("document"))
    if document:
        config.document = document

    fragment_data = _as_dict(data.get("fragments"))
    if fragment_data:
        directory = _as_str(fragment_data.get("directory"))
        suffix = _as_str(fragment_data.get("suffix"))
        strategy = _as_str(fragment_data.get("strategy"))
        if directory:
            config.fragments.directory = directory
        if suffix:
            config.fragments.suffix = suffix if suffix.startswith(".") else f".{suffix}"
        if strategy:
            config.fragments.strategy = validate_strategy(strategy)

    classification = _as_dict(data.get("classification"))
    strict = _as_bool(classification.get("strict")) if classification else None
    if strict is not None:
        config.strict = strict

    render_data = _as_dict(data.get("render"))
    if render_data:
        capitalize = _as_bool(render_data.get("capitalize_components"))
        if capitalize is not None:
            config.render.capitalize_components = capitalize
        template = _as_str(render_data.get("template"))
        if template:
            config.render.template = root / template

    return config


def validate_strategy(strategy: str) -> str:
    """Return the normalised fragment strategy name or raise ``ConfigError``."""
    normalised = strategy.strip().lower().replace("-", "_")
    if normalised not in FRAGMENT_STRATEGIES:
        allowed = ", ".join(FRAGMENT_STRATEGIES)
        raise ConfigError(f"Unknown fragment strategy '{strategy}' (expected one of: {allowed})")
    return normalised


def read_env_value(env: Mapping[str, str], key: str) -> Optional[str]:
    """Return a stripped environment value, treating blanks as missing."""
    value = env.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None
