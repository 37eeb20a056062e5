from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Sequence

from lunr import __TARGET_JS_VERSION__
from lunr.builder import Builder
from lunr.trimmer import trimmer

from .assemble import IndexedDocument
from .config import Settings

logger = logging.getLogger("lunr_custom_search.index")

# whitespace and , . ; : / ? ! ( ) separate words; hyphens and apostrophes don't
SEPARATOR_RE = re.compile(r"[\s,.;:/?!()]+")


class IndexBuildError(Exception):
    """Raised when the lunr engine rejects the configuration or a document."""


def tokenize(value) -> List[str]:
    """Split a field value into lowercase tokens with the index separator."""
    if value is None:
        return []
    if isinstance(value, Mapping):
        return tokenize(list(value.values()))
    if isinstance(value, (list, tuple)):
        tokens = []
        for v in value:
            tokens.extend(tokenize(v))
        return tokens
    return [t.lower() for t in SEPARATOR_RE.split(str(value)) if t]


def _extractor(name):
    return lambda doc: tokenize(doc.get(name))


def make_builder(settings: Settings) -> Builder:
    # trimmer only: no stemmer and no stop word filter, at index or query time
    builder = Builder()
    builder.pipeline.add(trimmer)
    builder.ref("id")
    for name, boost in settings.field_boosts().items():
        builder.field(name, boost=boost, extractor=_extractor(name))
    return builder


def empty_index(settings: Settings) -> Dict[str, Any]:
    """Serialized index with the configured fields and no documents."""
    return {
        "version": __TARGET_JS_VERSION__,
        "fields": list(settings.field_boosts()),
        "fieldVectors": [],
        "invertedIndex": [],
        "pipeline": [],
    }


def build_index(documents: Sequence[IndexedDocument], settings: Settings) -> Dict[str, Any]:
    """Submit ``documents`` in order and return the serialized lunr index."""
    try:
        builder = make_builder(settings)
        if not documents:
            return empty_index(settings)
        for doc in documents:
            builder.add(doc.as_submission())
        index = builder.build()
        return index.serialize()
    except Exception as exc:
        raise IndexBuildError(f"Could not build search index: {exc}") from exc


def lunr_version(serialized: Dict[str, Any]) -> str:
    return serialized.get("version", "unknown")
