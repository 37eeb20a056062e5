from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt

from .config import Environment, Settings
from .widgets import clean_values, format_value, resolve

logger = logging.getLogger("lunr_custom_search.assemble")

_md = MarkdownIt("commonmark", {"html": True})
NEWLINES_RE = re.compile(r"\s*\n\s*")


@dataclass
class IndexedDocument:
    """One item as submitted to the index: joined text plus raw widget values."""

    ref: str
    fields: Dict[str, str] = field(default_factory=dict)
    flat_data: Dict[str, List[Any]] = field(default_factory=dict)

    def as_submission(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = dict(self.fields)
        doc.update(self.flat_data)
        doc["id"] = self.ref
        return doc


def is_indexed(item, environment: Environment) -> bool:
    # inactive records stay visible outside production so authors can preview them
    return item.get("recordstatus") != "inactive" or environment is not Environment.PRODUCTION


def excerpt(content) -> str:
    """Render markdown, strip the markup and put everything on one line."""
    html = _md.render(str(content))
    text = BeautifulSoup(html, "html.parser").get_text()
    return NEWLINES_RE.sub(" ", text).strip()


def build_document(item, settings: Settings, site) -> IndexedDocument:
    doc = IndexedDocument(ref=str(item.get("slug")))
    for spec in settings.fields:
        name = spec.searchfield
        for jekyllfield in spec.jekyllfields:
            value = resolve(item, spec, jekyllfield, site)
            if spec.widget is not None:
                value = clean_values(value)
                if value is not None:
                    doc.flat_data.setdefault(name, []).extend(value)
            text = format_value(value)
            if not text:
                continue
            if name in doc.fields:
                doc.fields[name] += " " + text
            else:
                doc.fields[name] = text
    return doc


def store_entry(item, doc: IndexedDocument) -> Dict[str, Any]:
    entry = dict(item)
    if item.get("content") is not None:
        entry["content"] = excerpt(item["content"])
    entry.update(doc.flat_data)
    return entry


def assemble(items, settings: Settings, site) -> Tuple[List[IndexedDocument], Dict[str, Dict[str, Any]]]:
    """Build the ordered index documents and the doc store for ``items``.

    Documents keep the order of ``items``; the engine numbers documents by
    submission order.
    """
    documents = []
    docstore = {}
    skipped = 0
    for item in items:
        if not is_indexed(item, settings.environment):
            skipped += 1
            continue
        doc = build_document(item, settings, site)
        documents.append(doc)
        docstore[doc.ref] = store_entry(item, doc)
        if item.get("title"):
            logger.debug("%s (%s)", item["title"], item.get("url"))
        else:
            logger.debug("%s", item.get("url"))
    if skipped:
        logger.info("Skipped %d inactive items", skipped)
    return documents, docstore
