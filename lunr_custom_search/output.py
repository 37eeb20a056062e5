from __future__ import annotations

import glob
import logging
import os
import shutil
from typing import List

from .artifact import serialize
from .assemble import assemble
from .config import Settings
from .content import items_to_index
from .index import build_index, lunr_version

logger = logging.getLogger("lunr_custom_search.output")


def write_artifact(dest: str, settings: Settings, payload: bytes) -> str:
    os.makedirs(os.path.join(dest, settings.js_dir), exist_ok=True)
    os.makedirs(os.path.join(dest, settings.css_dir), exist_ok=True)
    filename = settings.filename
    with open(os.path.join(dest, filename), "wb") as f:
        f.write(payload)
    return filename


def _copy_group(src_dir, pattern, dest, subdir) -> List[str]:
    extras = sorted(glob.glob(os.path.join(src_dir, pattern)))
    if not extras:
        return []
    target = os.path.join(dest, subdir)
    os.makedirs(target, exist_ok=True)
    for path in extras:
        shutil.copy(path, target)
    logger.debug("Added %s to %s", pattern, subdir)
    return [f"{subdir}/{os.path.basename(p)}" for p in extras]


def copy_assets(dest: str, settings: Settings) -> List[str]:
    """Copy the client runtime files next to the artifact; returns relative paths."""
    src = settings.assets_dir
    if not src:
        return []
    # assets already living in the output js dir need no copy
    if os.path.abspath(os.path.join(dest, settings.js_dir)) == os.path.abspath(src):
        return []
    added = _copy_group(src, "*.js", dest, settings.js_dir)
    added += _copy_group(src, "*.css", dest, settings.css_dir)
    return added


def build_search_index(site, settings: Settings, dest: str) -> List[str]:
    """Index the configured collections of ``site`` and write the bundle under ``dest``.

    Returns the files written, artifact first, so the host can keep them
    out of its own cleanup.
    """
    logger.info("Creating search index...")
    items = items_to_index(site, settings.collections)
    documents, docstore = assemble(items, settings, site)
    index = build_index(documents, settings)
    payload = serialize(docstore, index, settings.baseurl, settings.raw, settings.format)
    added = [write_artifact(dest, settings, payload)]
    logger.info("Index ready (%d documents, lunr.js v%s)", len(documents), lunr_version(index))
    added.extend(copy_assets(dest, settings))
    return added
