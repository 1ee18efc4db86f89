"""
Query continuation handling.

MediaWiki hands out the parameters for the next page of a list either in a
single `continue` object (MW 1.21+) or, on older builds, in a `query-continue`
object keyed by module name:

    {"continue": {"cmcontinue": "page|50|123", "continue": "-||"}, ...}
    {"query-continue": {"categorymembers": {"cmcontinue": "page|50|123"}}, ...}

See https://www.mediawiki.org/wiki/API:Continue and
https://www.mediawiki.org/wiki/API:Raw_query_continue .
"""

from enum import Enum

from .errors import UnexpectedDataError


class ContinuationStatus(Enum):
    DONE = 'done'
    AVAILABLE = 'available'
    LOOP = 'loop'


def build_query_params(*sources):
    """Merge parameter mappings in order; later sources win on key collision."""
    merged = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged


def find_continuation_root(response, list_name=None):
    """Return the continuation object of a response, or None."""
    if not isinstance(response, dict):
        return None
    modern = response.get('continue')
    if modern is not None:
        if not isinstance(modern, dict):
            raise UnexpectedDataError(f'Expected "continue" to be a JSON object, got {type(modern).__name__}.')
        return modern
    legacy = response.get('query-continue')
    if not legacy:
        return None
    if not isinstance(legacy, dict) or not all(isinstance(v, dict) for v in legacy.values()):
        raise UnexpectedDataError('Expected "query-continue" to be a JSON object of module objects.')
    if list_name and list_name in legacy:
        return legacy[list_name]
    merged = {}
    for module_params in legacy.values():
        merged.update(module_params)
    return merged


def find_items_root(response, list_name):
    """
    Locate the item array of `list=<list_name>` in a response.

    Items live under `query.<list_name>`; a few modules (e.g. watchlistraw)
    put them at the top level. Returns None when the response carries no
    items at all, and raises UnexpectedDataError when the node is there but
    is not an array.
    """
    if not isinstance(response, dict):
        raise UnexpectedDataError(f'Expected a JSON object as response, got {type(response).__name__}.')
    query = response.get('query')
    items = None
    if query is not None:
        if not isinstance(query, dict):
            raise UnexpectedDataError('Expected "query" to be a JSON object.')
        items = query.get(list_name)
    if items is None:
        items = response.get(list_name)
    if items is None:
        return None
    if not isinstance(items, list):
        raise UnexpectedDataError(f'Expected an array of items for list "{list_name}", '
                                  f'got {type(items).__name__}.')
    return items


def _same_value(left, right):
    if left == right:
        return True
    # the server may echo numbers as strings and vice versa
    return left is not None and right is not None and str(left) == str(right)


def parse_continuation(response, query_params, continuation_params, list_name=None):
    """
    Decide what comes after `response`, which was fetched with `query_params`.

    On AVAILABLE, `continuation_params` is replaced with the new continuation
    values. LOOP means the server asked for exactly the parameters that
    produced this response; `continuation_params` is left untouched.
    """
    continuation = find_continuation_root(response, list_name)
    if not continuation:
        return ContinuationStatus.DONE
    if all(key in query_params and _same_value(query_params[key], value)
           for key, value in continuation.items()):
        return ContinuationStatus.LOOP
    continuation_params.clear()
    continuation_params.update(continuation)
    return ContinuationStatus.AVAILABLE
