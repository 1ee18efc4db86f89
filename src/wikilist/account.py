# Current account information (meta=userinfo)

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from .errors import UnauthorizedOperationError
from .models import parse_timestamp


class UserGroups:
    USER = 'user'
    BOT = 'bot'


class UserRights:
    API_HIGH_LIMITS = 'apihighlimits'
    PATROL = 'patrol'


@dataclass(frozen=True)
class AccountInfo:
    id: int
    name: str
    anonymous: bool = False
    groups: Tuple[str, ...] = field(default_factory=tuple)
    rights: Tuple[str, ...] = field(default_factory=tuple)
    block_id: int = 0
    blocked_by: Optional[str] = None
    block_reason: Optional[str] = None
    block_expiry: Optional[datetime] = None

    @classmethod
    def from_json(cls, node):
        """Build from the `query.userinfo` node."""
        expiry = node.get('blockexpiry')
        return cls(
            id=int(node.get('id', 0)),
            name=node.get('name', ''),
            anonymous='anon' in node and node['anon'] is not False,
            groups=tuple(node.get('groups', ())),
            rights=tuple(node.get('rights', ())),
            block_id=int(node.get('blockid', 0)),
            blocked_by=node.get('blockedby'),
            block_reason=node.get('blockreason'),
            block_expiry=None if expiry in (None, 'infinite', 'infinity') else parse_timestamp(expiry),
        )

    @property
    def is_user(self):
        return UserGroups.USER in self.groups

    @property
    def is_bot(self):
        return UserGroups.BOT in self.groups

    @property
    def is_blocked(self):
        return self.block_id != 0

    def is_in_group(self, group):
        return group in self.groups

    def has_right(self, right):
        return right in self.rights

    def assert_in_group(self, group):
        if not self.is_in_group(group):
            raise UnauthorizedOperationError(None, f'The account is not in group "{group}".')

    def assert_right(self, right):
        if not self.has_right(right):
            raise UnauthorizedOperationError(None, f'The account does not have the "{right}" right.')

    def __str__(self):
        return self.name
