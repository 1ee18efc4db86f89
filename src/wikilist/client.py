# MediaWiki API client for wikilist

import logging
import time
from datetime import datetime, timezone

import requests

from .cancellation import raise_if_cancelled
from .errors import (
    AccountAssertionFailureError,
    BadTokenError,
    InvalidActionError,
    MediaWikiRemoteError,
    OperationConflictError,
    OperationFailedError,
    UnauthorizedOperationError,
)

logger = logging.getLogger(__name__)

# HTTP status codes worth another attempt
RETRY_STATUS = (429, 500, 502, 503, 504)

# Alternative multi-value separator, see https://www.mediawiki.org/wiki/API:Data_formats#Multivalue_parameters
UNIT_SEPARATOR = '\u001f'


def join_values(values):
    """Join values with '|' for a multi-value parameter.

    If any value contains a pipe, MediaWiki expects U+001F as separator
    and a leading U+001F to announce it.
    """
    parts = ['' if v is None else str(v) for v in values]
    if any('|' in p for p in parts):
        if any(UNIT_SEPARATOR in p for p in parts):
            raise ValueError('Values cannot contain both "|" and U+001F.')
        return UNIT_SEPARATOR + UNIT_SEPARATOR.join(parts)
    return '|'.join(parts)


def to_query_value(value):
    """Serialize one parameter value. Returns None when the key must be omitted."""
    if value is None:
        return None
    if isinstance(value, bool):
        # MediaWiki treats any present boolean parameter as true
        return '' if value else None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime('%Y-%m-%dT%H:%M:%SZ')
    if isinstance(value, (list, tuple, set, frozenset)):
        return join_values(value)
    return str(value)


def to_wiki_params(params):
    result = {}
    for key, value in params.items():
        text = to_query_value(value)
        if text is not None:
            result[key] = text
    return result


def raise_api_error(error):
    """Translate the `error` node of a response into an exception."""
    code = error.get('code') or ''
    info = (error.get('info') or '').strip()
    if code in ('permissiondenied', 'readapidenied', 'mustbeloggedin'):
        raise UnauthorizedOperationError(code, info)
    if code == 'permissions':
        if error.get('permissions'):
            info += ' Desired permissions: ' + join_values(error['permissions'])
        raise UnauthorizedOperationError(code, info)
    if code == 'badtoken':
        raise BadTokenError(code, info)
    if code == 'unknown_action':
        raise InvalidActionError(code, info)
    if code in ('assertuserfailed', 'assertbotfailed'):
        raise AccountAssertionFailureError(code, info)
    if code == 'prev_revision' or code.endswith('conflict'):
        raise OperationConflictError(code, info)
    if code.startswith('internal_api_error_'):
        raise MediaWikiRemoteError(code, info,
                                   error_class=error.get('errorclass'),
                                   remote_trace=error.get('*'))
    raise OperationFailedError(code, info)


def _retry_after(response, default):
    """Seconds from the Retry-After header; `default` when missing or not a number."""
    try:
        return int(response.headers.get('Retry-After', default))
    except (TypeError, ValueError):
        return default


class WikiClient:

    def __init__(self, user_agent=None, timeout=30, max_retries=3, backoff=2, session=None):
        self.session = session or requests.Session()
        if user_agent:
            self.session.headers.update({'User-Agent': user_agent})
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.backoff = backoff

    @classmethod
    def from_config(cls, cfg):
        client = cfg['client']
        return cls(user_agent=client.get('user_agent'),
                   timeout=client.get('timeout', 30),
                   max_retries=client.get('max_retries', 3),
                   backoff=client.get('backoff', 2))

    def invoke(self, api_url, params, cancellation=None):
        """
        POSTs one request to the MediaWiki API and returns the parsed JSON.
        Retries on network errors, 5xx/429 responses, malformed JSON and
        `maxlag` errors; API errors are raised as OperationFailedError
        subclasses without retrying.
        """
        data = to_wiki_params(params)
        data['format'] = 'json'
        last_error = None
        for attempt in range(1, self.max_retries + 1):
            raise_if_cancelled(cancellation)
            logger.debug('POST %s %s', api_url, data)
            delay = self.backoff * attempt
            try:
                response = self.session.post(api_url, data=data, timeout=self.timeout)
                if response.status_code in RETRY_STATUS:
                    response.raise_for_status()
            except requests.RequestException as e:
                last_error = e
            else:
                # 4xx other than 429 will not get better by retrying
                response.raise_for_status()
                try:
                    root = response.json()
                except ValueError as e:
                    last_error = e
                else:
                    error = root.get('error') if isinstance(root, dict) else None
                    if error and error.get('code') == 'maxlag':
                        last_error = OperationFailedError(error.get('code'), error.get('info'))
                        delay = _retry_after(response, delay)
                    else:
                        return self._handle_result(root)
            if attempt < self.max_retries:
                logger.warning('Request to %s failed (%s), retrying in %ss', api_url, last_error, delay)
                time.sleep(delay)
        raise last_error

    def _handle_result(self, root):
        # action=logout on old builds returns [] instead of {}
        if not isinstance(root, dict):
            return root
        warnings = root.get('warnings')
        if warnings:
            for module, warning in warnings.items():
                if isinstance(warning, dict):
                    warning = warning.get('*', warning.get('warnings', warning))
                logger.warning('API warning [%s]: %s', module, warning)
        error = root.get('error')
        if error:
            logger.warning('API error: %s - %s', error.get('code'), error.get('info'))
            raise_api_error(error)
        return root
