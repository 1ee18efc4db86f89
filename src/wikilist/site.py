# A MediaWiki site: endpoint, account and site metadata, API invocation

import logging

from .account import AccountInfo, UserRights
from .client import WikiClient
from .config import api_url as config_api_url
from .errors import AccountAssertionFailureError
from .siteinfo import SiteInfo

logger = logging.getLogger(__name__)

ASSERT_NONE = 'none'
ASSERT_USER = 'user'
ASSERT_BOT = 'bot'


class WikiSite:
    """
    Entry point for talking to one wiki.

    `account_assertion` controls the `assert` parameter appended to every
    request once account info is known: 'user' asserts a logged-in user,
    'bot' asserts the bot flag for bot accounts (and 'user' otherwise).
    When the server rejects an assertion (e.g. the session expired),
    `account_assertion_failure_handler(site)` is called; if it returns True
    the request is sent once more after refreshing the account info.
    """

    def __init__(self, client: WikiClient, api_url: str, account_assertion=ASSERT_NONE,
                 account_assertion_failure_handler=None):
        if account_assertion not in (ASSERT_NONE, ASSERT_USER, ASSERT_BOT):
            raise ValueError(f'Unknown account assertion: {account_assertion!r}')
        self.client = client
        self.api_url = api_url
        self.account_assertion = account_assertion
        self.account_assertion_failure_handler = account_assertion_failure_handler
        self._site_info = None
        self._account_info = None
        # items per request for callers that want "as many as allowed"
        self.list_pagination_size = 500

    @classmethod
    def from_config(cls, cfg, client=None, **kwargs):
        client = client or WikiClient.from_config(cfg)
        return cls(client, config_api_url(cfg),
                   account_assertion=cfg['site'].get('account_assertion', ASSERT_NONE),
                   **kwargs)

    def initialize(self):
        self.refresh_site_info()
        self.refresh_account_info()
        return self

    def refresh_site_info(self):
        root = self.invoke({'action': 'query', 'meta': 'siteinfo', 'siprop': 'general'},
                           suppress_account_assertion=True)
        self._site_info = SiteInfo.from_json(root['query']['general'])
        logger.debug('Loaded site info for %s (%s).', self._site_info, self._site_info.generator)

    def refresh_account_info(self):
        root = self.invoke({'action': 'query', 'meta': 'userinfo', 'uiprop': 'blockinfo|groups|rights'},
                           suppress_account_assertion=True)
        self._account_info = AccountInfo.from_json(root['query']['userinfo'])
        self.list_pagination_size = 5000 if self._account_info.has_right(UserRights.API_HIGH_LIMITS) else 500
        logger.debug('Loaded account info for %s.', self._account_info)

    @property
    def site_info(self) -> SiteInfo:
        if self._site_info is None:
            raise RuntimeError('SiteInfo is not initialized. Call initialize() first.')
        return self._site_info

    @property
    def account_info(self) -> AccountInfo:
        if self._account_info is None:
            raise RuntimeError('AccountInfo is not initialized. Call initialize() first.')
        return self._account_info

    def has_right(self, right):
        """False until account info has been loaded."""
        return self._account_info is not None and self._account_info.has_right(right)

    def max_list_limit(self):
        """Largest `xxlimit` worth asking for when fetching more to break a continuation loop."""
        return 1000 if self.has_right(UserRights.API_HIGH_LIMITS) else 500

    def _assertion_value(self):
        account = self._account_info
        if account is None or self.account_assertion == ASSERT_NONE:
            return None
        if self.account_assertion == ASSERT_BOT and account.is_bot:
            return 'bot'
        if account.is_user:
            return 'user'
        return None

    def invoke(self, params, cancellation=None, suppress_account_assertion=False):
        """Send one API request and return the parsed response."""
        relogin_tried = False
        while True:
            request = dict(params)
            if not suppress_account_assertion:
                assertion = self._assertion_value()
                if assertion:
                    request['assert'] = assertion
            try:
                return self.client.invoke(self.api_url, request, cancellation)
            except AccountAssertionFailureError:
                if relogin_tried or self.account_assertion_failure_handler is None:
                    raise
                relogin_tried = True
                logger.warning('Account assertion failed. Try to relogin.')
                if not self.account_assertion_failure_handler(self):
                    raise
                self.refresh_account_info()

    def __str__(self):
        if self._site_info is not None:
            return self._site_info.site_name
        return self.api_url
