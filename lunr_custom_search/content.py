"""Read site collections from disk.

A collection ``posts`` comes from ``<source>/posts.ndjson`` when that file
exists, otherwise from the markdown files under ``<source>/_posts/``.
"""
import json
import logging
import os

import frontmatter

from .config import ConfigError

logger = logging.getLogger("lunr_custom_search.content")

MARKDOWN_EXTS = (".md", ".markdown")


def split_front_matter(text):
    """Return (front matter dict, body) for a markdown document."""
    post = frontmatter.loads(text)
    if not isinstance(post.metadata, dict):
        raise ConfigError("Front matter must be a mapping")
    if frontmatter.checks(text) and post.content == text.strip():
        raise ConfigError("Front matter is not closed with ---")
    return dict(post.metadata), post.content


def load_ndjson(path):
    rows = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            rows.append(json.loads(line))
    return rows


def load_markdown_dir(path, name):
    items = []
    for fn in sorted(os.listdir(path)):
        if not fn.endswith(MARKDOWN_EXTS):
            continue
        with open(os.path.join(path, fn), "r", encoding="utf-8") as fh:
            meta, body = split_front_matter(fh.read())
        slug = os.path.splitext(fn)[0]
        item = {"slug": slug, "url": f"/{name}/{slug}/", "collection": name}
        item.update(meta)
        item["content"] = body
        items.append(item)
    return items


def load_collection(source_dir, name):
    ndjson_path = os.path.join(source_dir, f"{name}.ndjson")
    md_dir = os.path.join(source_dir, f"_{name}")
    if os.path.isfile(ndjson_path):
        items = load_ndjson(ndjson_path)
    elif os.path.isdir(md_dir):
        items = load_markdown_dir(md_dir, name)
    else:
        logger.warning("No content found for collection '%s' in %s", name, source_dir)
        items = []
    logger.debug("Loaded %d items from collection '%s'", len(items), name)
    return items


def load_site(source_dir, names):
    return {name: load_collection(source_dir, name) for name in names}


def items_to_index(site, names):
    items = []
    for name in names:
        items.extend(site.get(name) or [])
    return items


def collections_needed(settings):
    """Indexed collections plus those relational fields look into."""
    names = list(settings.collections)
    for spec in settings.fields:
        if spec.widget == "relational" and spec.collection not in names:
            names.append(spec.collection)
    return names
