from lunr_custom_search.config import parse_settings


def make_settings(fields, collections=("posts",), environment="development", **extra):
    section = {"fields": fields, "collections": list(collections)}
    section.update(extra)
    return parse_settings({"baseurl": "/blog", "lunr_settings": section}, environment=environment)


TITLE_BODY = [
    {"searchfield": "title", "jekyllfields": ["title"], "boost": 10},
    {"searchfield": "body", "jekyllfields": ["content"], "boost": 1},
]
