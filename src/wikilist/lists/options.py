# Compatibility options for WikiList

from dataclasses import dataclass
from enum import Flag


class ContinuationLoopBehavior(Flag):
    """
    What to do when the server hands back the same continuation parameters
    that were just sent.

    On builds with raw query continuation, cursors are timestamps truncated
    to seconds. If more rows share one timestamp than fit in a page, the
    next page starts where the current one did, forever.
    """
    # raise ContinuationLoopError
    NONE = 0
    # retry with a doubled xxlimit (up to 500, or 1000 with apihighlimits)
    # hoping the last row of the bigger batch carries a different cursor
    FETCH_MORE = 1


@dataclass
class WikiListCompatibilityOptions:
    continuation_loop_behaviors: ContinuationLoopBehavior = ContinuationLoopBehavior.NONE

    @classmethod
    def from_config(cls, cfg):
        value = str(cfg.get('lists', {}).get('continuation_loop', 'none')).lower()
        if value == 'fetch_more':
            return cls(ContinuationLoopBehavior.FETCH_MORE)
        if value == 'none':
            return cls()
        raise ValueError(f'Unknown continuation_loop option: {value!r}')
