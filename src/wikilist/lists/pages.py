# Lists that enumerate pages

from ..models import PageStub
from .base import WikiList

REDIRECTS = 'redirects'
NON_REDIRECTS = 'nonredirects'

MEMBER_TYPES = ('page', 'subcat', 'file')


def filter_value(option, when_true, when_false, when_none=None):
    """Map a tri-state filter (True / False / None) to its parameter value."""
    if option is None:
        return when_none
    return when_true if option else when_false


def _redirects_filter(redirects):
    return filter_value(redirects, REDIRECTS, NON_REDIRECTS)


def _namespaces(namespace_ids):
    return None if namespace_ids is None else list(namespace_ids)


class PageList(WikiList):
    """A list whose items are plain page stubs."""

    def item_from_json(self, node):
        return PageStub.from_json(node)


class AllPagesList(PageList):
    """All pages in one namespace, in title order."""

    list_name = 'allpages'

    def __init__(self, site, namespace_id=0, start_title=None, end_title=None, prefix=None,
                 redirects=None, language_links=None, min_content_length=None,
                 max_content_length=None, **kwargs):
        super().__init__(site, **kwargs)
        self.namespace_id = namespace_id
        self.start_title = start_title
        self.end_title = end_title
        self.prefix = prefix
        # None: both; True: only redirects; False: only non-redirects
        self.redirects = redirects
        self.language_links = language_links
        self.min_content_length = min_content_length
        self.max_content_length = max_content_length

    def list_params(self):
        return {
            'apfrom': self.start_title,
            'apto': self.end_title,
            'aplimit': self.pagination_size,
            'apnamespace': self.namespace_id,
            'apprefix': self.prefix,
            'apfilterredir': _redirects_filter(self.redirects),
            'apfilterlanglinks': filter_value(self.language_links, 'withlanglinks', 'withoutlanglinks'),
            'apminsize': self.min_content_length,
            'apmaxsize': self.max_content_length,
        }


class AllCategoriesList(WikiList):
    """All categories, yielded as category names without namespace prefix."""

    list_name = 'allcategories'

    def __init__(self, site, start_title=None, end_title=None, prefix=None,
                 min_children_count=None, max_children_count=None, **kwargs):
        super().__init__(site, **kwargs)
        self.start_title = start_title
        self.end_title = end_title
        self.prefix = prefix
        self.min_children_count = min_children_count
        self.max_children_count = max_children_count

    def list_params(self):
        return {
            'acfrom': self.start_title,
            'acto': self.end_title,
            'acprefix': self.prefix,
            'acmin': self.min_children_count,
            'acmax': self.max_children_count,
            'aclimit': self.pagination_size,
        }

    def item_from_json(self, node):
        # formatversion=1 uses "*", 2 uses "category"
        return node.get('category', node.get('*'))


class CategoryMembersList(PageList):
    list_name = 'categorymembers'

    def __init__(self, site, category_title=None, category_id=None, namespace_ids=None,
                 member_types=MEMBER_TYPES, **kwargs):
        super().__init__(site, **kwargs)
        self.category_title = category_title
        self.category_id = category_id
        self.namespace_ids = namespace_ids
        self.member_types = member_types

    def list_params(self):
        if not self.category_title and not self.category_id:
            raise ValueError('Either category_title or category_id is required.')
        types = [t for t in MEMBER_TYPES if t in (self.member_types or ())]
        if not types:
            raise ValueError(f'member_types must contain at least one of {MEMBER_TYPES}.')
        return {
            'cmtitle': self.category_title,
            'cmpageid': None if self.category_title else self.category_id,
            'cmlimit': self.pagination_size,
            'cmnamespace': _namespaces(self.namespace_ids),
            'cmtype': types,
        }


class _TargetedPageList(PageList):
    """Lists that need exactly one of a target title or a target page id."""

    prefix = None

    def __init__(self, site, target_title=None, target_id=None, namespace_ids=None,
                 redirects=None, **kwargs):
        super().__init__(site, **kwargs)
        self.target_title = target_title
        self.target_id = target_id
        self.namespace_ids = namespace_ids
        self.redirects = redirects

    def list_params(self):
        if (self.target_title is None) == (self.target_id is None):
            raise ValueError('Exactly one of target_title and target_id must be set.')
        p = self.prefix
        return {
            p + 'title': self.target_title,
            p + 'pageid': self.target_id,
            p + 'namespace': _namespaces(self.namespace_ids),
            p + 'filterredir': _redirects_filter(self.redirects),
            p + 'limit': self.pagination_size,
        }


class BacklinksList(_TargetedPageList):
    """Pages linking to the target page."""

    list_name = 'backlinks'
    prefix = 'bl'

    def __init__(self, site, target_title=None, target_id=None, allow_redirected_links=False, **kwargs):
        super().__init__(site, target_title, target_id, **kwargs)
        self.allow_redirected_links = allow_redirected_links

    def list_params(self):
        params = super().list_params()
        params['blredirect'] = self.allow_redirected_links
        return params


class TranscludedInList(_TargetedPageList):
    """Pages transcluding the target page."""

    list_name = 'embeddedin'
    prefix = 'ei'
