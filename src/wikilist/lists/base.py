# Paginated enumeration of MediaWiki lists (action=query&list=...)

import json
import logging
import re
from collections import deque
from enum import Enum

from ..cancellation import raise_if_cancelled
from ..continuation import (
    ContinuationStatus,
    build_query_params,
    find_continuation_root,
    find_items_root,
    parse_continuation,
)
from ..errors import ContinuationLoopError
from .options import ContinuationLoopBehavior

logger = logging.getLogger(__name__)

# xxlimit, e.g. cmlimit, rclimit
_LIMIT_PARAM = re.compile(r'^[a-z]{2}limit$')

# items per request to start from when fetching more to escape a loop
MIN_FETCH_MORE_LIMIT = 50


class WikiList:
    """
    A configured MediaWiki list (https://www.mediawiki.org/wiki/API:Lists).

    Subclasses set `list_name` and implement `list_params` and
    `item_from_json`. Iterating the list (or calling `enum_items`) walks
    every page of results lazily.
    """

    list_name = None

    def __init__(self, site, pagination_size=None, compatibility_options=None):
        if site is None:
            raise ValueError('site is required.')
        self.site = site
        self.compatibility_options = compatibility_options
        self._pagination_size = None
        self.pagination_size = pagination_size

    @property
    def pagination_size(self) -> int:
        """
        Maximum items per API call. Unless set explicitly, this follows
        `site.list_pagination_size` (500, or 5000 with apihighlimits).
        """
        if self._pagination_size is None:
            return self.site.list_pagination_size
        return self._pagination_size

    @pagination_size.setter
    def pagination_size(self, value):
        # None goes back to the site default
        if value is not None and value < 1:
            raise ValueError('pagination_size must be at least 1.')
        self._pagination_size = value

    def list_params(self):
        """Parameters for this list; they override the base query parameters."""
        raise NotImplementedError()

    def item_from_json(self, node):
        """Turn one node of `query.<list_name>` into an item."""
        raise NotImplementedError()

    def on_enum_items_failed(self, exc):
        """
        Called with any exception raised while fetching a page. Raise a more
        specific error here if there is one; returning normally lets the
        original exception propagate.
        """

    def enum_items(self, cancellation=None):
        return ListEnumerator(self.site, self, self.compatibility_options, cancellation)

    def __iter__(self):
        return self.enum_items()


class _State(Enum):
    FETCH = 1
    RECOVER = 2
    DONE = 3


def _node_key(node):
    return json.dumps(node, sort_keys=True, ensure_ascii=False)


class ListEnumerator:
    """
    Single-pass iterator over the items of a list.

    `source` supplies `list_name`, `list_params()`, `item_from_json(node)`,
    `pagination_size` and optionally `on_enum_items_failed(exc)`. An API call
    is made only when all items of the previous page have been handed out.
    """

    def __init__(self, site, source, compatibility_options=None, cancellation=None):
        self.site = site
        self.source = source
        self.compatibility_options = compatibility_options
        self.cancellation = cancellation
        self.base_params = None
        self.continuation_params = {}
        self.query_params = {}
        self._buffer = deque()
        self._state = _State.FETCH
        self._loop_nodes = None

    def __iter__(self):
        return self

    def __next__(self):
        while not self._buffer:
            if self._state is _State.DONE:
                raise StopIteration
            try:
                if self._state is _State.RECOVER:
                    self._recover()
                else:
                    self._fetch_next_page()
            except Exception:
                self._state = _State.DONE
                raise
        return self._buffer.popleft()

    def _build_base_params(self):
        params = {'action': 'query', 'maxlag': 5, 'list': self.source.list_name}
        params.update(self.source.list_params())
        return params

    def _invoke(self, params):
        """Fetch one page. Returns the response, its item nodes and the continuation status."""
        try:
            response = self.site.invoke(params, self.cancellation)
            # a page that arrives after cancellation is dropped
            raise_if_cancelled(self.cancellation)
            nodes = find_items_root(response, self.source.list_name)
            status = parse_continuation(response, params, self.continuation_params,
                                        self.source.list_name)
        except Exception as e:
            hook = getattr(self.source, 'on_enum_items_failed', None)
            if hook is not None:
                hook(e)
            raise
        return response, nodes, status

    def _parse_items(self, nodes):
        return [self.source.item_from_json(n) for n in nodes]

    def _fetch_next_page(self):
        raise_if_cancelled(self.cancellation)
        if self.base_params is None:
            self.base_params = self._build_base_params()
        self.query_params = build_query_params(self.base_params, self.continuation_params)
        response, nodes, status = self._invoke(self.query_params)
        if nodes:
            self._buffer.extend(self._parse_items(nodes))
        if status is ContinuationStatus.DONE:
            self._state = _State.DONE
        elif status is ContinuationStatus.AVAILABLE:
            if not nodes:
                logger.warning('Empty query page with continuation received for list=%s.',
                               self.source.list_name)
        else:
            logger.warning('Continuation information provided by server response leads to infinite loop. %s',
                           find_continuation_root(response, self.source.list_name))
            # recover on the next pull, after this page has been handed out
            self._loop_nodes = nodes or []
            self._state = _State.RECOVER

    def _find_limit_param(self):
        for key in self.query_params:
            if _LIMIT_PARAM.match(key):
                return key
        return None

    def _recover(self):
        options = self.compatibility_options
        behaviors = options.continuation_loop_behaviors if options else ContinuationLoopBehavior.NONE
        if not behaviors & ContinuationLoopBehavior.FETCH_MORE:
            raise ContinuationLoopError('Unexpected continuation loop: the server keeps returning '
                                        f'the same continuation parameters for list={self.source.list_name}.')
        limit_param = self._find_limit_param()
        if limit_param is None:
            logger.warning('Failed to find the underlying parameter name for pagination size.')
            raise ContinuationLoopError(f'Cannot fetch more items for list={self.source.list_name}: '
                                        'no limit parameter.')
        max_limit = self.site.max_list_limit()
        current_limit = max(self.source.pagination_size, MIN_FETCH_MORE_LIMIT)
        yielded = {_node_key(n) for n in self._loop_nodes}
        while current_limit < max_limit:
            current_limit = min(max_limit, current_limit * 2)
            raise_if_cancelled(self.cancellation)
            logger.debug('Try to fetch more with %s=%s.', limit_param, current_limit)
            params = build_query_params(self.base_params, self.continuation_params,
                                        {limit_param: current_limit})
            response, nodes, status = self._invoke(params)
            if status is ContinuationStatus.LOOP:
                continue
            logger.info('Successfully got out of the continuation loop.')
            fresh = [n for n in nodes or () if _node_key(n) not in yielded]
            self._buffer.extend(self._parse_items(fresh))
            self._loop_nodes = None
            self._state = _State.DONE if status is ContinuationStatus.DONE else _State.FETCH
            return
        raise ContinuationLoopError(f'Still in a continuation loop for list={self.source.list_name} '
                                    f'after fetching {current_limit} items per request.')
