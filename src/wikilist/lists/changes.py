# Recent changes, log events and the watchlist

from ..account import UserRights
from ..models import LogEventItem, RecentChangeItem, WatchlistItem
from .base import WikiList
from .pages import filter_value

RECENT_CHANGE_TYPES = ('edit', 'external', 'new', 'log', 'categorize')

RC_PROPS = 'user|userid|comment|flags|timestamp|title|ids|sizes|redirect|loginfo|tags|sha1'

LOG_PROPS = 'user|userid|comment|timestamp|title|ids|details|type|tags'


def _direction(ascending):
    return 'newer' if ascending else 'older'


class RecentChangesList(WikiList):

    list_name = 'recentchanges'

    def __init__(self, site, time_ascending=False, start_time=None, end_time=None,
                 namespace_ids=None, user_name=None, excluded_user_name=None, tag=None,
                 types=RECENT_CHANGE_TYPES, minor=None, bot=None, anonymous=None,
                 redirects=None, patrolled=None, last_revisions_only=False, **kwargs):
        super().__init__(site, **kwargs)
        self.time_ascending = time_ascending
        self.start_time = start_time
        self.end_time = end_time
        self.namespace_ids = namespace_ids
        self.user_name = user_name
        self.excluded_user_name = excluded_user_name
        self.tag = tag
        self.types = types
        # tri-state filters: None = don't care
        self.minor = minor
        self.bot = bot
        self.anonymous = anonymous
        self.redirects = redirects
        self.patrolled = patrolled
        self.last_revisions_only = last_revisions_only

    def _show(self):
        flags = [
            filter_value(self.minor, 'minor', '!minor'),
            filter_value(self.bot, 'bot', '!bot'),
            filter_value(self.anonymous, 'anon', '!anon'),
            filter_value(self.redirects, 'redirect', '!redirect'),
            filter_value(self.patrolled, 'patrolled', '!patrolled'),
        ]
        flags = [f for f in flags if f]
        return flags or None

    def list_params(self):
        types = [t for t in RECENT_CHANGE_TYPES if t in (self.types or ())]
        if not types:
            raise ValueError(f'types must contain at least one of {RECENT_CHANGE_TYPES}.')
        props = RC_PROPS
        # asking for patrol flags without the right is an API error
        if self.site.has_right(UserRights.PATROL):
            props += '|patrolled'
        return {
            'rcdir': _direction(self.time_ascending),
            'rcstart': self.start_time,
            'rcend': self.end_time,
            'rcnamespace': None if self.namespace_ids is None else list(self.namespace_ids),
            'rcuser': self.user_name,
            'rcexcludeuser': self.excluded_user_name,
            'rctag': self.tag,
            'rctype': types,
            'rcshow': self._show(),
            'rctoponly': self.last_revisions_only,
            'rcprop': props,
            'rclimit': self.pagination_size,
        }

    def item_from_json(self, node):
        return RecentChangeItem.from_json(node)


class LogEventsList(WikiList):

    list_name = 'logevents'

    def __init__(self, site, log_type=None, log_action=None, time_ascending=False,
                 start_time=None, end_time=None, namespace_id=None, user_name=None,
                 title=None, tag=None, **kwargs):
        super().__init__(site, **kwargs)
        self.log_type = log_type
        self.log_action = log_action
        self.time_ascending = time_ascending
        self.start_time = start_time
        self.end_time = end_time
        self.namespace_id = namespace_id
        self.user_name = user_name
        self.title = title
        self.tag = tag

    def list_params(self):
        action = self.log_action
        # leaction takes "type/action"
        if action and '/' not in action:
            if not self.log_type:
                raise ValueError('log_action requires log_type.')
            action = f'{self.log_type}/{action}'
        return {
            'leprop': LOG_PROPS,
            'ledir': _direction(self.time_ascending),
            'lestart': self.start_time,
            'leend': self.end_time,
            'lenamespace': self.namespace_id,
            'leuser': self.user_name,
            'letitle': self.title,
            'letag': self.tag,
            # letype and leaction are mutually exclusive
            'letype': None if action else self.log_type,
            'leaction': action,
            'lelimit': self.pagination_size,
        }

    def item_from_json(self, node):
        return LogEventItem.from_json(node)


class MyWatchlistList(WikiList):
    """Pages on the current user's watchlist (list=watchlistraw)."""

    list_name = 'watchlistraw'

    def __init__(self, site, namespace_ids=None, changed=None, descending=False,
                 from_title=None, to_title=None, **kwargs):
        super().__init__(site, **kwargs)
        self.namespace_ids = namespace_ids
        # True: only pages changed since last visit; False: only unchanged
        self.changed = changed
        self.descending = descending
        self.from_title = from_title
        self.to_title = to_title

    def list_params(self):
        return {
            'wrnamespace': None if self.namespace_ids is None else list(self.namespace_ids),
            'wrlimit': self.pagination_size,
            'wrprop': 'changed',
            'wrshow': filter_value(self.changed, 'changed', '!changed'),
            'wrdir': 'descending' if self.descending else 'ascending',
            'wrfromtitle': self.from_title,
            'wrtotitle': self.to_title,
        }

    def item_from_json(self, node):
        return WatchlistItem.from_json(node)
