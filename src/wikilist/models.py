# Item records produced by the list parsers

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple


def parse_timestamp(value):
    """Parse a MediaWiki ISO 8601 timestamp into an aware datetime."""
    if not value:
        return None
    return datetime.strptime(value, '%Y-%m-%dT%H:%M:%SZ').replace(tzinfo=timezone.utc)


def _flag(node, name):
    # formatversion=1 marks true flags with an empty string, 2 with true
    return name in node and node[name] is not False


@dataclass(frozen=True)
class PageStub:
    id: int
    title: str
    namespace_id: int

    @classmethod
    def from_json(cls, node):
        return cls(id=int(node.get('pageid', 0)),
                   title=node.get('title'),
                   namespace_id=int(node.get('ns', 0)))

    def __str__(self):
        return self.title if self.title is not None else f'#{self.id}'


@dataclass(frozen=True)
class RecentChangeItem:
    id: int
    type: str
    title: str
    namespace_id: int
    page_id: int
    revision_id: int
    old_revision_id: int
    user_name: Optional[str]
    user_id: int
    old_content_length: Optional[int]
    new_content_length: Optional[int]
    timestamp: Optional[datetime]
    comment: Optional[str]
    minor: bool = False
    bot: bool = False
    created: bool = False
    anonymous: bool = False
    patrolled: bool = False
    tags: Tuple[str, ...] = field(default_factory=tuple)
    log_type: Optional[str] = None
    log_action: Optional[str] = None

    @classmethod
    def from_json(cls, node):
        return cls(
            id=int(node.get('rcid', 0)),
            type=node.get('type'),
            title=node.get('title'),
            namespace_id=int(node.get('ns', 0)),
            page_id=int(node.get('pageid', 0)),
            revision_id=int(node.get('revid', 0)),
            old_revision_id=int(node.get('old_revid', 0)),
            user_name=node.get('user'),
            user_id=int(node.get('userid', 0)),
            old_content_length=node.get('oldlen'),
            new_content_length=node.get('newlen'),
            timestamp=parse_timestamp(node.get('timestamp')),
            comment=node.get('comment'),
            minor=_flag(node, 'minor'),
            bot=_flag(node, 'bot'),
            created=_flag(node, 'new'),
            anonymous=_flag(node, 'anon'),
            patrolled=_flag(node, 'patrolled'),
            tags=tuple(node.get('tags', ())),
            log_type=node.get('logtype'),
            log_action=node.get('logaction'),
        )

    @property
    def delta_content_length(self):
        if self.old_content_length is None or self.new_content_length is None:
            return None
        return self.new_content_length - self.old_content_length

    def __str__(self):
        return f'[{self.id},{self.type}]{self.title},{self.user_name}'


@dataclass(frozen=True)
class SearchResultItem:
    page_id: int
    namespace_id: int
    title: str
    content_length: int
    word_count: int
    snippet: Optional[str]
    timestamp: Optional[datetime]

    @classmethod
    def from_json(cls, node):
        return cls(
            page_id=int(node.get('pageid', 0)),
            namespace_id=int(node.get('ns', 0)),
            title=node.get('title'),
            content_length=int(node.get('size', 0)),
            word_count=int(node.get('wordcount', 0)),
            snippet=node.get('snippet'),
            timestamp=parse_timestamp(node.get('timestamp')),
        )

    def __str__(self):
        return f'[{self.page_id}]{self.title}'


@dataclass(frozen=True)
class LogEventItem:
    id: int
    type: str
    action: str
    title: Optional[str]
    namespace_id: int
    page_id: int
    user_name: Optional[str]
    user_id: int
    timestamp: Optional[datetime]
    comment: Optional[str]
    tags: Tuple[str, ...] = field(default_factory=tuple)
    params: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_json(cls, node):
        params = dict(node.get('params') or {})
        # legacy builds put move details in a sibling node
        if 'move' in node:
            move = node['move']
            params.setdefault('target_ns', move.get('new_ns'))
            params.setdefault('target_title', move.get('new_title'))
        return cls(
            id=int(node.get('logid', 0)),
            type=node.get('type'),
            action=node.get('action'),
            title=node.get('title'),
            namespace_id=int(node.get('ns', 0)),
            page_id=int(node.get('pageid', 0)),
            user_name=node.get('user'),
            user_id=int(node.get('userid', 0)),
            timestamp=parse_timestamp(node.get('timestamp')),
            comment=node.get('comment'),
            tags=tuple(node.get('tags', ())),
            params=params,
        )

    def __str__(self):
        return f'{self.timestamp},{self.type}/{self.action},{self.title},{self.user_name}'


@dataclass(frozen=True)
class WatchlistItem:
    title: str
    namespace_id: int
    changed: Optional[datetime] = None

    @classmethod
    def from_json(cls, node):
        return cls(title=node.get('title'),
                   namespace_id=int(node.get('ns', 0)),
                   changed=parse_timestamp(node.get('changed')))

    def __str__(self):
        return self.title
