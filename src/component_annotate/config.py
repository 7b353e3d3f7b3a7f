"""
Annotation Configuration

Holds the options the annotation pass honors and loads them from the host
plugin's option dict, a YAML file, or environment variables.

Option keys follow the bundler plugin's spelling:
    native                 use the camelCase attribute names
    annotate-fragments     give the first child of a root fragment the
                           component name
    ignoredComponents      exact component/element names to leave alone
    experimental           select the legacy traversal policy
"""

import logging
import os
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional, Tuple

import yaml

from component_annotate.constants import (
    DEFAULT_IGNORED_ELEMENTS,
    KNOWN_INCOMPATIBLE_PACKAGES,
    NATIVE_COMPONENT_NAME,
    NATIVE_ELEMENT_NAME,
    NATIVE_SOURCE_FILE_NAME,
    WEB_COMPONENT_NAME,
    WEB_ELEMENT_NAME,
    WEB_SOURCE_FILE_NAME,
)

logger = logging.getLogger(__name__)


# Option files checked in order when no explicit path is given
CONFIG_SEARCH_PATHS = [
    Path.cwd() / "component-annotate.yaml",
    Path.home() / ".component-annotate" / "config.yaml",
]

ENV_PREFIX = "COMPONENT_ANNOTATE_"

OPTION_KEYS = frozenset({
    "native",
    "annotate-fragments",
    "ignoredComponents",
    "ignored-components",
    "experimental",
    "policy",
})


class ConfigError(Exception):
    """Invalid or unreadable configuration."""
    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Config error in {path}: {message}")


class TraversalPolicy(Enum):
    """How the tree walker descends from a component root."""

    # Visit every element, all three attributes, fragment-child propagation
    FULL = auto()

    # Component attribute only; stop at the first host element on each path
    LEGACY = auto()


class AttributeNames(NamedTuple):
    component: str
    element: str
    source_file: str


WEB_ATTRIBUTE_NAMES = AttributeNames(WEB_COMPONENT_NAME, WEB_ELEMENT_NAME, WEB_SOURCE_FILE_NAME)
NATIVE_ATTRIBUTE_NAMES = AttributeNames(
    NATIVE_COMPONENT_NAME, NATIVE_ELEMENT_NAME, NATIVE_SOURCE_FILE_NAME
)


@dataclass(frozen=True)
class AnnotationConfig:
    """Read-only options for one annotation run."""
    use_alternate_attribute_names: bool = False
    annotate_fragments: bool = False
    ignored_components: Tuple[str, ...] = ()
    source_file_name: Optional[str] = None
    policy: TraversalPolicy = TraversalPolicy.FULL
    ignored_elements: FrozenSet[str] = field(default=DEFAULT_IGNORED_ELEMENTS)
    incompatible_packages: Tuple[str, ...] = KNOWN_INCOMPATIBLE_PACKAGES

    @property
    def attribute_names(self) -> AttributeNames:
        if self.use_alternate_attribute_names:
            return NATIVE_ATTRIBUTE_NAMES
        return WEB_ATTRIBUTE_NAMES

    def for_file(self, path: Optional[str]) -> "AnnotationConfig":
        """Copy of this config with the source file name taken from a path."""
        return replace(self, source_file_name=source_file_name_from_path(path))

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]]) -> "AnnotationConfig":
        """Build a config from a plugin-style options dict."""
        options = options or {}
        unknown = sorted(str(key) for key in options if key not in OPTION_KEYS)
        if unknown:
            logger.warning(f"Ignoring unknown options: {', '.join(unknown)}")

        ignored = options.get("ignoredComponents", options.get("ignored-components", ()))
        if isinstance(ignored, str):
            ignored = [ignored]
        if not isinstance(ignored, (list, tuple)):
            raise ConfigError("<options>", f"ignoredComponents must be a list, got {type(ignored).__name__}")

        policy = _parse_policy(options.get("policy"))
        if options.get("experimental") is True:
            policy = TraversalPolicy.LEGACY

        return cls(
            use_alternate_attribute_names=options.get("native") is True,
            annotate_fragments=options.get("annotate-fragments") is True,
            ignored_components=tuple(str(name) for name in ignored),
            policy=policy,
        )


def source_file_name_from_path(path: Optional[str]) -> Optional[str]:
    """Basename of a path, accepting either separator."""
    if not path:
        return None
    if "/" in path:
        return path.split("/")[-1]
    if "\\" in path:
        return path.split("\\")[-1]
    return path


def _parse_policy(value: Any) -> TraversalPolicy:
    if value is None:
        return TraversalPolicy.FULL
    if isinstance(value, TraversalPolicy):
        return value
    try:
        return TraversalPolicy[str(value).upper()]
    except KeyError:
        raise ConfigError("<options>", f"unknown traversal policy {value!r}") from None


# =============================================================================
# Loading
# =============================================================================

def load_options(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load plugin options from YAML, then apply environment overrides.

    Args:
        config_path: Explicit YAML file. When omitted the search paths are
            tried in order and a missing file is not an error.

    Raises:
        ConfigError: The file is unreadable, not YAML, or not a mapping.
    """
    options: Dict[str, Any] = {}
    search_paths = [config_path] if config_path else CONFIG_SEARCH_PATHS

    for path in search_paths:
        if path is None or not path.exists():
            if config_path is not None:
                raise ConfigError(str(path), "file not found")
            continue
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(str(path), str(e)) from e
        if not isinstance(loaded, dict):
            raise ConfigError(str(path), "top level must be a mapping")
        logger.debug(f"Loaded options from {path}")
        options.update(loaded)
        break

    _apply_env_overrides(options)
    return options


def _apply_env_overrides(options: Dict[str, Any]) -> None:
    """Apply COMPONENT_ANNOTATE_* environment variables."""
    flags = {
        "NATIVE": "native",
        "ANNOTATE_FRAGMENTS": "annotate-fragments",
    }
    for env_name, key in flags.items():
        value = os.environ.get(ENV_PREFIX + env_name)
        if value is not None:
            options[key] = value.strip().lower() in ("1", "true", "yes", "on")

    ignored = os.environ.get(ENV_PREFIX + "IGNORED")
    if ignored is not None:
        options["ignoredComponents"] = _split_list(ignored)

    policy = os.environ.get(ENV_PREFIX + "POLICY")
    if policy:
        options["policy"] = policy


def _split_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def load_config(config_path: Optional[Path] = None) -> AnnotationConfig:
    """Load options and build an AnnotationConfig from them."""
    return AnnotationConfig.from_options(load_options(config_path))
