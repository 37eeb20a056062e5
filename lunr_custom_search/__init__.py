"""Build a lunr.js search bundle from site collections."""
from .artifact import serialize
from .assemble import IndexedDocument, assemble
from .config import ConfigError, Environment, FieldSpec, Settings, load_config, parse_settings
from .index import IndexBuildError, build_index
from .output import build_search_index

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "Environment",
    "FieldSpec",
    "IndexBuildError",
    "IndexedDocument",
    "Settings",
    "assemble",
    "build_index",
    "build_search_index",
    "load_config",
    "parse_settings",
    "serialize",
]
