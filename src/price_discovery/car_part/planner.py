"""Page sampling policy for price-sorted catalog searches.

Results are requested sorted ascending by price. Page 1 is always fetched
while resolving the variant, so the planner only returns additional pages:

- 1 page:      nothing more
- 2-3 pages:   everything
- 4-10 pages:  everything except the last page (lowest-price outliers)
- 11+ pages:   five pages: page 2, the two middle pages, and the second-
               and third-to-last pages
"""

from __future__ import annotations

import math

SAMPLE_THRESHOLD = 11
FETCH_ALL_MAX = 3


def plan_pages(total_pages: int) -> list[int]:
    """Return the additional page numbers to fetch after page 1."""
    if total_pages <= 1:
        return []

    if total_pages <= FETCH_ALL_MAX:
        return list(range(2, total_pages + 1))

    if total_pages >= SAMPLE_THRESHOLD:
        middle = math.ceil(total_pages / 2)
        return [2, middle, middle + 1, total_pages - 2, total_pages - 1]

    return list(range(2, total_pages))
