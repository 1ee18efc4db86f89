"""Paginated access to MediaWiki lists over the action API."""

from .account import AccountInfo, UserGroups, UserRights
from .cancellation import CancellationToken
from .client import WikiClient
from .config import load_config
from .continuation import ContinuationStatus, build_query_params, parse_continuation
from .errors import (
    AccountAssertionFailureError,
    BadTokenError,
    ContinuationLoopError,
    InvalidActionError,
    InvalidSearchBackendError,
    MediaWikiRemoteError,
    OperationCancelledError,
    OperationConflictError,
    OperationFailedError,
    UnauthorizedOperationError,
    UnexpectedDataError,
    WikiClientError,
)
from .lists import (
    LISTS,
    AllCategoriesList,
    AllPagesList,
    BacklinksList,
    CategoryMembersList,
    ContinuationLoopBehavior,
    ListEnumerator,
    LogEventsList,
    MyWatchlistList,
    RecentChangesList,
    SearchList,
    TranscludedInList,
    WikiList,
    WikiListCompatibilityOptions,
)
from .models import LogEventItem, PageStub, RecentChangeItem, SearchResultItem, WatchlistItem
from .site import WikiSite
from .siteinfo import SiteInfo

__version__ = '0.1.0'
