"""
enumerate_list.py - print every item of a MediaWiki list

Examples:
    python scripts/enumerate_list.py categorymembers --target "Category:Physics" --max-items 100
    python scripts/enumerate_list.py recentchanges --limit 50 --fetch-more
"""

import sys
import os
import logging
import argparse
from itertools import islice

import requests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from wikilist.config import load_config, CONFIG_PATH
from wikilist.errors import WikiClientError
from wikilist.lists import LISTS, ContinuationLoopBehavior, WikiListCompatibilityOptions
from wikilist.site import WikiSite

# lists that take a target and the keyword argument it maps to
TARGET_ARGS = {
    'categorymembers': 'category_title',
    'backlinks': 'target_title',
    'embeddedin': 'target_title',
    'search': 'keyword',
}


def build_list(site, name, target, limit, options):
    cls = LISTS[name]
    kwargs = {'compatibility_options': options}
    if limit:
        kwargs['pagination_size'] = limit
    if name in TARGET_ARGS:
        if not target:
            raise ValueError(f'list "{name}" requires --target')
        kwargs[TARGET_ARGS[name]] = target
    return cls(site, **kwargs)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Enumerate a MediaWiki list.')
    parser.add_argument('list', choices=sorted(LISTS), help='Value of the list= parameter')
    parser.add_argument('--config', default=str(CONFIG_PATH), help='Path to config.yaml')
    parser.add_argument('--target', help='Category, target page or search keyword')
    parser.add_argument('--limit', type=int, help='Items per API request')
    parser.add_argument('--max-items', type=int, help='Stop after this many items')
    parser.add_argument('--fetch-more', action='store_true',
                        help='Fetch bigger batches to get out of continuation loops')
    parser.add_argument('--verbose', action='store_true', help='Log every request')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(message)s')

    config = load_config(args.config)
    options = WikiListCompatibilityOptions.from_config(config)
    if args.fetch_more:
        options.continuation_loop_behaviors |= ContinuationLoopBehavior.FETCH_MORE
    limit = args.limit or config['lists'].get('pagination_size')

    try:
        site = WikiSite.from_config(config).initialize()
        logging.info('Connected to %s as %s.', site, site.account_info)
        wiki_list = build_list(site, args.list, args.target, limit, options)
        count = 0
        for item in islice(wiki_list, args.max_items):
            print(item)
            count += 1
    except (WikiClientError, requests.RequestException, ValueError) as e:
        logging.error(f'Enumeration failed: {e}')
        print(f'[Error] {e}', file=sys.stderr)
        return 1
    logging.info(f'Enumerated {count} items.')
    return 0


if __name__ == '__main__':
    sys.exit(main())
