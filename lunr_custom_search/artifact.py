import json

from .config import FORMATS, ConfigError


def _dumps(value):
    # front matter can carry dates and other YAML scalars json can't encode
    return json.dumps(value, ensure_ascii=False, default=str)


def serialize(docstore, index, baseurl, lunr_settings, fmt="js") -> bytes:
    """Encode the search bundle as a JSON object or as a script of ``var`` assignments."""
    if fmt not in FORMATS:
        raise ConfigError(f"Unsupported output format {fmt!r}; expected one of {FORMATS}")
    if fmt == "json":
        total = _dumps({
            "docs": docstore,
            "index": index,
            "baseurl": baseurl,
            "lunr_settings": lunr_settings,
        })
    else:
        total = "\n".join([
            f"var docs = {_dumps(docstore)}",
            f"var index = {_dumps(index)}",
            f"var baseurl = {_dumps(baseurl)}",
            f"var lunr_settings = {_dumps(lunr_settings)}",
        ])
    return total.encode("utf-8")
