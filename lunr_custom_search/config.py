from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger("lunr_custom_search.config")

WIDGETS = ("flatten", "relational", "nested")
FORMATS = ("js", "json")


class ConfigError(Exception):
    """Raised when the configuration file is missing or malformed."""


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    TEST = "test"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, value) -> "Environment":
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        try:
            return cls(name)
        except ValueError:
            # names outside the enum (preview, local) count as development
            logger.info("Treating environment %r as development", value)
            return cls.DEVELOPMENT


@dataclass(frozen=True)
class FieldSpec:
    searchfield: str
    jekyllfields: Tuple[str, ...]
    boost: float = 1
    widget: Optional[str] = None
    collection: Optional[str] = None
    matchfield: Optional[str] = None
    secondaryfield: Optional[str] = None
    parentfield: Optional[str] = None


@dataclass(frozen=True)
class Settings:
    fields: Tuple[FieldSpec, ...]
    collections: Tuple[str, ...]
    js_dir: str = "js"
    css_dir: str = "css"
    format: str = "js"
    environment: Environment = Environment.DEVELOPMENT
    baseurl: Optional[str] = None
    assets_dir: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    def field_boosts(self) -> Dict[str, float]:
        """Boost per distinct searchfield, in first-seen order; the last spec wins."""
        boosts: Dict[str, float] = {}
        for spec in self.fields:
            previous = boosts.get(spec.searchfield)
            if previous is not None and previous != spec.boost:
                logger.warning(
                    "Conflicting boosts for field '%s' (%s, %s); using %s",
                    spec.searchfield,
                    previous,
                    spec.boost,
                    spec.boost,
                )
            boosts[spec.searchfield] = spec.boost
        return boosts

    @property
    def filename(self) -> str:
        return f"{self.js_dir}/index.{self.format}"


def load_config(path: str) -> Dict[str, Any]:
    """Load a YAML site configuration into a dictionary."""
    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping.")

    return data


def _required(descriptor: Dict[str, Any], key: str, position: int):
    value = descriptor.get(key)
    if value in (None, "", []):
        raise ConfigError(f"Field #{position}: '{key}' is required")
    return value


def parse_field(descriptor: Dict[str, Any], position: int = 0) -> FieldSpec:
    if not isinstance(descriptor, dict):
        raise ConfigError(f"Field #{position} must be a mapping")

    searchfield = str(_required(descriptor, "searchfield", position))
    if "/" in searchfield:
        raise ConfigError(f"Field '{searchfield}' contains illegal character '/'")

    jekyllfields = _required(descriptor, "jekyllfields", position)
    if isinstance(jekyllfields, str):
        jekyllfields = [jekyllfields]
    if not isinstance(jekyllfields, list):
        raise ConfigError(f"Field '{searchfield}': 'jekyllfields' must be a list")

    boost = descriptor.get("boost", 1)
    if isinstance(boost, bool) or not isinstance(boost, (int, float)) or boost <= 0:
        raise ConfigError(f"Field '{searchfield}': boost must be a positive number, got {boost!r}")

    widget = descriptor.get("widget") or None
    if widget is not None and widget not in WIDGETS:
        raise ConfigError(f"Field '{searchfield}': unknown widget {widget!r}")
    if widget == "relational":
        _required(descriptor, "collection", position)
        _required(descriptor, "matchfield", position)
    if widget == "nested":
        _required(descriptor, "parentfield", position)

    return FieldSpec(
        searchfield=searchfield,
        jekyllfields=tuple(str(name) for name in jekyllfields),
        boost=boost,
        widget=widget,
        collection=descriptor.get("collection"),
        matchfield=descriptor.get("matchfield"),
        secondaryfield=descriptor.get("secondaryfield"),
        parentfield=descriptor.get("parentfield"),
    )


def parse_settings(config: Dict[str, Any], environment=None) -> Settings:
    """Build Settings from a site config holding a ``lunr_settings`` section."""
    section = config.get("lunr_settings")
    if not isinstance(section, dict):
        raise ConfigError("Section 'lunr_settings' must be a mapping.")

    descriptors = section.get("fields")
    if not isinstance(descriptors, list) or not descriptors:
        raise ConfigError("'lunr_settings.fields' must be a non-empty list")
    fields = tuple(parse_field(d, i) for i, d in enumerate(descriptors))

    collections = section.get("collections")
    if isinstance(collections, str):
        collections = [collections]
    if not isinstance(collections, list) or not collections:
        raise ConfigError("'lunr_settings.collections' must be a non-empty list")

    fmt = section.get("format") or "js"
    if fmt not in FORMATS:
        raise ConfigError(f"Unsupported output format {fmt!r}; expected one of {FORMATS}")

    if environment is None:
        environment = section.get("environment") or Environment.DEVELOPMENT

    return Settings(
        fields=fields,
        collections=tuple(str(c) for c in collections),
        js_dir=section.get("js_dir") or "js",
        css_dir=section.get("css_dir") or "css",
        format=fmt,
        environment=Environment.parse(environment),
        baseurl=config.get("baseurl"),
        assets_dir=section.get("assets_dir"),
        raw=section,
    )
