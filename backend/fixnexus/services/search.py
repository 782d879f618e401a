"""
FixNexus Backend: Search & Pagination Helpers
===============================================

What:  Builds the service-name search filter and converts page/size query
       parameters into skip/limit values.
Who:   GET /services and GET /services-count, which must agree on the filter
       so the count matches the paginated listing.
"""

import re
from typing import Any, Dict, Optional, Tuple

SEARCH_FIELD = "serviceName"


def build_search_filter(search: Optional[str]) -> Dict[str, Any]:
    """
    Case-insensitive, unanchored substring match on ``serviceName``.

    The search text is matched literally: regex metacharacters are escaped,
    so "c++" finds "C++ Tutoring" instead of raising a regex error.
    An empty or missing search string yields an empty filter, so every
    document matches, including ones with no string ``serviceName``.

    Example:
        build_search_filter("lock")
        → {"serviceName": {"$regex": "lock", "$options": "i"}}
        which matches "Deadlock Repair".
    """
    if not search:
        return {}
    return {SEARCH_FIELD: {"$regex": re.escape(search), "$options": "i"}}


def page_window(page: Optional[int], size: Optional[int]) -> Tuple[Optional[int], Optional[int]]:
    """
    Translate a 1-indexed page and a page size into (skip, limit).

    Both must be supplied for pagination to apply; otherwise (None, None) is
    returned and the caller receives the full match set.

        page=1, size=5 → (0, 5)
        page=2, size=5 → (5, 5)
    """
    if page is None or size is None:
        return None, None
    return (page - 1) * size, size
