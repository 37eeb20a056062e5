# build_lunr_index.py
import argparse
import logging
import os
import sys

from lunr_custom_search.config import ConfigError, load_config, parse_settings
from lunr_custom_search.content import collections_needed, load_site
from lunr_custom_search.index import IndexBuildError
from lunr_custom_search.output import build_search_index


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build the lunr search bundle for a site.")
    parser.add_argument("--config", default="_config.yml", help="site config holding lunr_settings")
    parser.add_argument("--source", default=".", help="directory with <collection>.ndjson or _<collection>/ folders")
    parser.add_argument("--dest", default="_site", help="output directory")
    parser.add_argument("--env", default=os.environ.get("JEKYLL_ENV", "development"),
                        help="deployment environment (defaults to $JEKYLL_ENV); inactive items are hidden only in production")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = parse_settings(load_config(args.config), environment=args.env)
        site = load_site(args.source, collections_needed(settings))
        added = build_search_index(site, settings, args.dest)
    except (ConfigError, IndexBuildError) as e:
        print("error:", e, file=sys.stderr)
        return 1
    print(f"Wrote {', '.join(added)} under {args.dest}/")
    return 0


if __name__ == "__main__":
    sys.exit(main())
