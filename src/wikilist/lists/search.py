# Full text search (list=search)

from ..errors import InvalidSearchBackendError, OperationFailedError
from ..models import SearchResultItem
from .base import WikiList


class SearchList(WikiList):

    list_name = 'search'

    def __init__(self, site, keyword=None, namespace_ids=None, matching_field=None,
                 includes_interwiki=False, backend_name=None, **kwargs):
        super().__init__(site, **kwargs)
        self.keyword = keyword
        # None searches every namespace
        self.namespace_ids = namespace_ids
        # 'title', 'text' or 'nearmatch'; None lets the backend decide
        self.matching_field = matching_field
        self.includes_interwiki = includes_interwiki
        self.backend_name = backend_name

    def list_params(self):
        if not self.keyword:
            raise ValueError('keyword is required.')
        return {
            'srsearch': self.keyword,
            'srnamespace': '*' if self.namespace_ids is None else list(self.namespace_ids),
            'srwhat': self.matching_field,
            'srlimit': self.pagination_size,
            'srinterwiki': self.includes_interwiki,
            'srbackend': self.backend_name,
            'srprop': 'size|wordcount|timestamp|snippet',
        }

    def item_from_json(self, node):
        return SearchResultItem.from_json(node)

    def on_enum_items_failed(self, exc):
        if not isinstance(exc, OperationFailedError) or self.backend_name is None:
            return
        if exc.code == 'unknown_srbackend' or (exc.code == 'badvalue' and 'srbackend' in (exc.info or '')):
            raise InvalidSearchBackendError(exc.code, exc.info) from exc
