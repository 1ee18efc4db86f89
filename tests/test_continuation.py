import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest

from wikilist.continuation import (
    ContinuationStatus,
    build_query_params,
    find_continuation_root,
    find_items_root,
    parse_continuation,
)
from wikilist.errors import UnexpectedDataError


def test_build_query_params_later_sources_win():
    base = {'action': 'query', 'list': 'categorymembers', 'cmlimit': 10}
    cont = {'cmcontinue': 'page10', 'cmlimit': 20}
    merged = build_query_params(base, cont)
    assert merged == {'action': 'query', 'list': 'categorymembers', 'cmlimit': 20, 'cmcontinue': 'page10'}
    # inputs untouched
    assert base['cmlimit'] == 10
    assert list(merged) == ['action', 'list', 'cmlimit', 'cmcontinue']


def test_modern_continuation_replaces_accumulator():
    response = {'continue': {'cmcontinue': 'page20', 'continue': '-||'}, 'query': {'categorymembers': []}}
    accumulator = {'cmcontinue': 'page10', 'continue': '-||', 'stale': 'x'}
    query = {'cmcontinue': 'page10', 'continue': '-||'}
    status = parse_continuation(response, query, accumulator)
    assert status is ContinuationStatus.AVAILABLE
    assert accumulator == {'cmcontinue': 'page20', 'continue': '-||'}


def test_legacy_continuation():
    response = {'query-continue': {'allpages': {'apcontinue': 'B'}}, 'query': {'allpages': [{'title': 'A'}]}}
    accumulator = {}
    status = parse_continuation(response, {'list': 'allpages'}, accumulator, 'allpages')
    assert status is ContinuationStatus.AVAILABLE
    assert accumulator == {'apcontinue': 'B'}


def test_legacy_continuation_without_list_name_merges_modules():
    response = {'query-continue': {'recentchanges': {'rcstart': '2018-01-01T00:00:00Z'}}}
    assert find_continuation_root(response) == {'rcstart': '2018-01-01T00:00:00Z'}


def test_no_continuation_is_done():
    accumulator = {'cmcontinue': 'page10'}
    status = parse_continuation({'query': {'categorymembers': []}}, {}, accumulator)
    assert status is ContinuationStatus.DONE
    assert accumulator == {'cmcontinue': 'page10'}


def test_identical_continuation_is_loop():
    query = {'action': 'query', 'list': 'recentchanges', 'rccontinue': '20180101000000|999', 'continue': '-||'}
    response = {'continue': {'rccontinue': '20180101000000|999', 'continue': '-||'}}
    accumulator = {'rccontinue': '20180101000000|999', 'continue': '-||'}
    status = parse_continuation(response, query, accumulator)
    assert status is ContinuationStatus.LOOP
    assert accumulator == {'rccontinue': '20180101000000|999', 'continue': '-||'}


def test_loop_detection_tolerates_number_formatting():
    query = {'apoffset': '50'}
    assert parse_continuation({'continue': {'apoffset': 50}}, query, {}) is ContinuationStatus.LOOP


def test_partially_changed_continuation_is_not_loop():
    query = {'rccontinue': '20180101000000|999', 'continue': '-||'}
    response = {'continue': {'rccontinue': '20180101000000|1000', 'continue': '-||'}}
    assert parse_continuation(response, query, {}) is ContinuationStatus.AVAILABLE


def test_find_items_root_under_query():
    items = [{'title': 'A'}]
    assert find_items_root({'query': {'allpages': items}}, 'allpages') is items


def test_find_items_root_at_top_level():
    items = [{'title': 'A', 'ns': 0}]
    assert find_items_root({'watchlistraw': items}, 'watchlistraw') is items


def test_find_items_root_missing():
    assert find_items_root({'batchcomplete': ''}, 'allpages') is None
    assert find_items_root({'query': {}}, 'allpages') is None


def test_find_items_root_rejects_unexpected_shape():
    with pytest.raises(UnexpectedDataError):
        find_items_root({'query': {'allpages': {'1': {'title': 'A'}}}}, 'allpages')
    with pytest.raises(UnexpectedDataError):
        find_items_root({'query': []}, 'allpages')


def test_identical_legacy_continuation_is_loop():
    query = {'action': 'query', 'list': 'recentchanges', 'rcstart': '2018-01-01T00:00:00Z'}
    response = {'query-continue': {'recentchanges': {'rcstart': '2018-01-01T00:00:00Z'}},
                'query': {'recentchanges': []}}
    accumulator = {'rcstart': '2018-01-01T00:00:00Z'}
    status = parse_continuation(response, query, accumulator, 'recentchanges')
    assert status is ContinuationStatus.LOOP
    assert accumulator == {'rcstart': '2018-01-01T00:00:00Z'}


@pytest.mark.parametrize('response', [
    {'continue': 'apcontinue'},
    {'query-continue': ['allpages']},
    {'query-continue': {'allpages': 'B'}},
])
def test_malformed_continuation_is_unexpected_data(response):
    with pytest.raises(UnexpectedDataError):
        parse_continuation(response, {}, {}, 'allpages')
