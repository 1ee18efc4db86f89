# Site metadata (meta=siteinfo, general block)

import re
from dataclasses import dataclass
from typing import Optional, Tuple

_VERSION_PATTERN = re.compile(r'MediaWiki\s+(\d+)\.(\d+)(?:\.(\d+))?')


def parse_version(generator):
    """'MediaWiki 1.39.3' -> (1, 39, 3). Returns None for unknown formats."""
    if not generator:
        return None
    m = _VERSION_PATTERN.search(generator)
    if not m:
        return None
    return tuple(int(g) for g in m.groups(default='0'))


@dataclass(frozen=True)
class SiteInfo:
    site_name: str
    main_page: str
    base_url: str
    generator: str
    server: str
    script_path: str
    time_zone: Optional[str] = None
    version: Optional[Tuple[int, int, int]] = None

    @classmethod
    def from_json(cls, general):
        return cls(
            site_name=general.get('sitename', ''),
            main_page=general.get('mainpage', ''),
            base_url=general.get('base', ''),
            generator=general.get('generator', ''),
            server=general.get('server', ''),
            script_path=general.get('scriptpath', ''),
            time_zone=general.get('timezone'),
            version=parse_version(general.get('generator')),
        )

    def __str__(self):
        return self.site_name
