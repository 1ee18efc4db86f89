import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest

from wikilist.account import AccountInfo
from wikilist.site import WikiSite

API_URL = 'https://wiki.example.org/w/api.php'


class FakeClient:
    """Stands in for WikiClient: replays canned responses and records each request."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def invoke(self, api_url, params, cancellation=None):
        self.calls.append(dict(params))
        if not self.responses:
            raise AssertionError(f'Unexpected request: {params}')
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(params)
        return response


def page(n, ns=0):
    return {'pageid': n, 'ns': ns, 'title': f'Page {n}'}


def list_response(list_name, items, continuation=None, legacy=False):
    response = {'batchcomplete': ''}
    if items is not None:
        response['query'] = {list_name: items}
    if continuation is not None:
        if legacy:
            response['query-continue'] = {list_name: continuation}
        else:
            response['continue'] = dict(continuation, **{'continue': '-||'})
    return response


@pytest.fixture
def make_site():
    """Factory for a WikiSite backed by a FakeClient.

    Usage:
        site = make_site([response1, response2], rights=('apihighlimits',))
        site.client.calls  # requests sent so far
    """

    def _make(responses, rights=None, groups=('*', 'user'), **kwargs):
        site = WikiSite(FakeClient(responses), API_URL, **kwargs)
        if rights is not None:
            site._account_info = AccountInfo(id=1, name='Tester', groups=tuple(groups), rights=tuple(rights))
            site.list_pagination_size = 5000 if 'apihighlimits' in rights else 500
        return site

    return _make
