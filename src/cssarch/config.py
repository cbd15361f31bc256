"""Lint configuration: layer names, naming conventions, and per-rule settings."""

from __future__ import annotations

import logging
import re
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from cssarch.model.enums import RuleKind, RuleSetting
from cssarch.model.layer import CANONICAL_LAYERS, LayerTag
from cssarch.rules.catalog import get_rule

log = logging.getLogger("cssarch")

# Layout primitives that are conventionally named after their pattern.
DEFAULT_LAYOUT_PATTERNS: tuple[str, ...] = (
    "box",
    "center",
    "cluster",
    "cover",
    "flow",
    "frame",
    "grid",
    "icon",
    "imposter",
    "reel",
    "region",
    "repel",
    "sidebar",
    "stack",
    "switcher",
    "wrapper",
)

_LAYER_NAME_RE = re.compile(r"^[A-Za-z_-][A-Za-z0-9_-]*$")

# Aliases accepted in configuration files, after key normalization.
_KEY_ALIASES = {
    "utility_marker_convention": "utility_marker",
}


class ConfigError(Exception):
    """Raised when a configuration is invalid; no analysis is performed."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


@dataclass(frozen=True)
class LintConfig:
    """Options controlling classification, API tracking, and rule severities.

    Attributes:
        layer_names: Four layer identifiers mapped, in order, onto the
            global, layout, block and utility layers.
        utility_marker: Regex a class name matches when it is a utility.
        api_property_prefix: Prefix marking a custom property as public API.
        private_property_prefix: Prefix marking a custom property as internal,
            regardless of ``api_property_prefix``.
        token_property_prefix: When set, custom properties declared on global
            rules must start with it.
        layout_patterns: Class names recognized as layout primitives.
        class_pattern: Regex every class name must match.
        property_pattern: Regex every custom property name must match.
        scoped_sub_apis: Descendant selectors allowed to declare API properties.
        missing_api_threshold: Number of modifiers overriding the same raw
            property before ``missing-api`` fires.
        severities: Per-rule overrides, given as a mapping or as pairs and
            stored as pairs sorted by rule kind; unlisted rules use the
            catalog default.
    """

    layer_names: tuple[str, ...] = ("global", "layout", "block", "utility")
    utility_marker: str = r"^--"
    api_property_prefix: str = "--"
    private_property_prefix: str = "--_"
    token_property_prefix: str = ""
    layout_patterns: tuple[str, ...] = DEFAULT_LAYOUT_PATTERNS
    class_pattern: str = r"^(?:--)?[a-z0-9]+(?:-[a-z0-9]+)*$"
    property_pattern: str = r"^--_?[a-z0-9]+(?:-[a-z0-9]+)*$"
    scoped_sub_apis: tuple[str, ...] = ()
    missing_api_threshold: int = 2
    severities: Mapping[RuleKind, RuleSetting] | tuple[tuple[RuleKind, RuleSetting], ...] = ()

    def __post_init__(self) -> None:
        self._check_layer_names()
        for name in ("utility_marker", "class_pattern", "property_pattern"):
            pattern = getattr(self, name)
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigError(f"Invalid regular expression for {name}: {exc}", key=name) from exc
        if not self.api_property_prefix.startswith("--"):
            raise ConfigError(
                f"api_property_prefix must start with '--', got {self.api_property_prefix!r}",
                key="api_property_prefix",
            )
        if self.token_property_prefix and not self.token_property_prefix.startswith("--"):
            raise ConfigError(
                f"token_property_prefix must start with '--', got {self.token_property_prefix!r}",
                key="token_property_prefix",
            )
        if self.missing_api_threshold < 2:
            raise ConfigError(
                f"missing_api_threshold must be >= 2, got {self.missing_api_threshold}",
                key="missing_api_threshold",
            )
        items = tuple(self.severities.items() if isinstance(self.severities, Mapping) else self.severities)
        for kind, setting in items:
            if not isinstance(kind, RuleKind):
                raise ConfigError(f"Unknown rule kind: {kind!r}", key="severities")
            if not isinstance(setting, RuleSetting):
                raise ConfigError(f"Invalid setting for {kind.value}: {setting!r}", key="severities")
        # Stored as sorted pairs so the config stays hashable.
        object.__setattr__(self, "severities", tuple(sorted(items, key=lambda item: item[0].value)))

    def _check_layer_names(self) -> None:
        names = self.layer_names
        if len(names) != len(CANONICAL_LAYERS):
            raise ConfigError(
                f"layer_names must list exactly {len(CANONICAL_LAYERS)} layers, got {len(names)}",
                key="layer_names",
            )
        for name in names:
            if not isinstance(name, str) or not _LAYER_NAME_RE.match(name):
                raise ConfigError(f"Invalid layer name: {name!r}", key="layer_names")
        lowered = [n.lower() for n in names]
        if len(set(lowered)) != len(lowered):
            raise ConfigError(f"Duplicate layer names: {list(names)}", key="layer_names")

    # ---- lookups ----

    def setting_for(self, kind: RuleKind) -> RuleSetting:
        """Return the configured setting for *kind*, falling back to the catalog."""
        for configured, setting in self.severities:
            if configured is kind:
                return setting
        return get_rule(kind).default

    def layer_tag_for(self, layer_name: str | None) -> LayerTag | None:
        """Map an ``@layer`` name onto a LayerTag.

        Dotted names are resolved from the innermost segment outwards; returns
        ``None`` when no segment is one of the configured layer names.
        """
        if not layer_name:
            return None
        lookup = {n.lower(): tag for n, tag in zip(self.layer_names, CANONICAL_LAYERS)}
        for segment in reversed(layer_name.lower().split(".")):
            tag = lookup.get(segment.strip())
            if tag is not None:
                return tag
        return None

    def is_utility_class(self, class_name: str) -> bool:
        return re.search(self.utility_marker, class_name) is not None

    def is_layout_pattern(self, class_name: str) -> bool:
        return class_name in self.layout_patterns

    def is_private_property(self, name: str) -> bool:
        return bool(self.private_property_prefix) and name.startswith(self.private_property_prefix)

    def is_api_property(self, name: str) -> bool:
        if self.is_private_property(name):
            return False
        return name.startswith(self.api_property_prefix)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _normalize_key(key: str) -> str:
    """Turn ``layerNames`` / ``layer-names`` / ``layer_names`` into snake_case."""
    key = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", key).replace("-", "_").lower()
    return _KEY_ALIASES.get(key, key)


def _parse_rule_kind(raw: str) -> RuleKind:
    try:
        return RuleKind(str(raw).strip().lower().replace("_", "-"))
    except ValueError:
        known = ", ".join(k.value for k in RuleKind)
        raise ConfigError(f"Unknown rule kind {raw!r}; expected one of: {known}", key="severities") from None


def _parse_setting(kind: RuleKind, raw: Any) -> RuleSetting:
    try:
        return RuleSetting(str(raw).strip().lower())
    except ValueError:
        raise ConfigError(
            f"Invalid setting {raw!r} for {kind.value}; expected off, warning or error",
            key="severities",
        ) from None


def _as_str_tuple(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"{key} must be a list of strings", key=key)
    if not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings", key=key)
    return tuple(value)


def config_from_mapping(data: Mapping[str, Any]) -> LintConfig:
    """Build a LintConfig from a plain mapping, e.g. a parsed TOML table."""
    known = {f.name: f for f in fields(LintConfig)}
    kwargs: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _normalize_key(raw_key)
        if key not in known:
            raise ConfigError(f"Unknown configuration option: {raw_key!r}", key=raw_key)
        if key == "severities":
            if not isinstance(value, Mapping):
                raise ConfigError("severities must be a table of rule kind to setting", key=key)
            severities: dict[RuleKind, RuleSetting] = {}
            for raw_kind, raw_setting in value.items():
                kind = _parse_rule_kind(raw_kind)
                severities[kind] = _parse_setting(kind, raw_setting)
            kwargs[key] = severities
        elif key in ("layer_names", "layout_patterns", "scoped_sub_apis"):
            kwargs[key] = _as_str_tuple(key, value)
        elif key == "missing_api_threshold":
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{key} must be an integer", key=key)
            kwargs[key] = value
        else:
            if not isinstance(value, str):
                raise ConfigError(f"{key} must be a string", key=key)
            kwargs[key] = value
    return LintConfig(**kwargs)


CONFIG_FILENAMES = ("cssarch.toml", ".cssarch.toml")


def discover_config(directory: str | Path = ".") -> Path | None:
    """Find a configuration file in *directory*.

    ``cssarch.toml`` and ``.cssarch.toml`` win over a ``pyproject.toml``,
    which only counts when it has a ``[tool.cssarch]`` table.
    """
    base = Path(directory)
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    pyproject = base / "pyproject.toml"
    if pyproject.is_file():
        try:
            data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError):
            return None
        if "cssarch" in data.get("tool", {}):
            return pyproject
    return None


def load_config(path: str | Path) -> LintConfig:
    """Load a LintConfig from a TOML file.

    For ``pyproject.toml`` the ``[tool.cssarch]`` table is used; any other
    file is read as a standalone cssarch configuration.
    """
    config_path = Path(path)
    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file {config_path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("cssarch", {})
    log.debug("Loaded configuration from %s (%d option(s))", config_path, len(data))
    return config_from_mapping(data)
