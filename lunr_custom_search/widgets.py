"""Field widgets: derive a search field's raw value from an item.

Every resolver reads only. A missing source (field, parent, related
collection) resolves to None instead of raising.
"""
from collections.abc import Mapping

EMPTY = (None, "", [], {})


def _is_sequence(value):
    return isinstance(value, (list, tuple))


def _flatten_once(values):
    out = []
    for v in values:
        if _is_sequence(v):
            out.extend(v)
        else:
            out.append(v)
    return out


def _unique(values):
    # equality based so dict entries (nested records) survive too
    out = []
    for v in values:
        if v not in out:
            out.append(v)
    return out


def resolve_flatten(item, spec, jekyllfield, site):
    value = item.get(jekyllfield)
    if not value:
        return None
    if not isinstance(value, Mapping):
        return value
    return _flatten_once(value.values())


def resolve_relational(item, spec, jekyllfield, site):
    slug = item.get("slug")
    related = site.get(spec.collection) or []
    out = []
    for other in related:
        refs = other.get(spec.matchfield)
        if not refs:
            out.append(None)
            continue
        if not _is_sequence(refs):
            refs = [refs]
        if spec.secondaryfield:
            refs = [r.get(spec.secondaryfield) if isinstance(r, Mapping) else None for r in refs]
        out.append(other.get(jekyllfield) if slug in refs else None)
    return out


def resolve_nested(item, spec, jekyllfield, site):
    parent = item.get(spec.parentfield)
    if not parent:
        # no parent: keep the plain field value
        return item.get(jekyllfield)
    if _is_sequence(parent):
        return [p.get(jekyllfield) if isinstance(p, Mapping) else None for p in parent]
    if isinstance(parent, Mapping):
        return parent.get(jekyllfield)
    return None


RESOLVERS = {
    "flatten": resolve_flatten,
    "relational": resolve_relational,
    "nested": resolve_nested,
}


def resolve(item, spec, jekyllfield, site):
    """Raw value of ``jekyllfield`` for ``item`` under the spec's widget.

    ``site`` maps collection names to their ordered items and is only
    consulted by the relational widget.
    """
    if spec.widget is None:
        return item.get(jekyllfield)
    return RESOLVERS[spec.widget](item, spec, jekyllfield, site)


def clean_values(value):
    """Flatten one level, drop empty entries and duplicates; None when nothing is left."""
    if value in EMPTY:
        return None
    if not _is_sequence(value):
        return [value]
    values = [v for v in _flatten_once(value) if v not in EMPTY]
    return _unique(values) or None


def format_value(value):
    """Single display string for a raw value ('' when there is nothing to show)."""
    if value is None:
        return ""
    if _is_sequence(value):
        parts = [format_value(v) for v in _unique(value) if v is not None]
        return " ".join(p for p in parts if p)
    if isinstance(value, Mapping):
        return format_value(list(value.values()))
    return str(value).strip()
