from .base import ListEnumerator, WikiList
from .changes import LogEventsList, MyWatchlistList, RecentChangesList
from .options import ContinuationLoopBehavior, WikiListCompatibilityOptions
from .pages import (
    AllCategoriesList,
    AllPagesList,
    BacklinksList,
    CategoryMembersList,
    TranscludedInList,
)
from .search import SearchList

# list=... name -> class, used by the command line
LISTS = {
    cls.list_name: cls
    for cls in (AllPagesList, AllCategoriesList, CategoryMembersList, BacklinksList,
                TranscludedInList, RecentChangesList, LogEventsList, MyWatchlistList,
                SearchList)
}
