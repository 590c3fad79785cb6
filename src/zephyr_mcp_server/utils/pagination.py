"""Zephyr Pagination Utilities

Accumulates every item of a paged Zephyr Scale endpoint by issuing
successive page requests until the result set is exhausted.
"""

import logging
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

PageRequestFn = Callable[[Dict[str, int]], Any]


def page_items(response: Any) -> Tuple[List[Any], int]:
    """Normalize a page response into (items, total).

    Enveloped responses carry ``values`` and ``total`` (or ``size``). A bare
    list is treated as a single page whose total is its own length. Anything
    else yields no items and a total of 0.

    Args:
        response: Parsed JSON body of one page request

    Returns:
        Tuple of the page's items and the reported total
    """
    if isinstance(response, list):
        return list(response), len(response)

    if isinstance(response, dict):
        items = response.get("values")
        total = response.get("total") or response.get("size") or 0
        return list(items or []), total

    return [], 0


def paginate(request_page: PageRequestFn, max_results: int) -> List[Any]:
    """Fetch every page of a paged endpoint and concatenate the items.

    Stops when the accumulated length reaches the reported total or a page
    comes back shorter than ``max_results``. An endpoint that keeps returning
    full pages with a total that is never reached keeps this loop running.
    Exceptions raised by ``request_page`` propagate and the partial result is
    discarded.

    Args:
        request_page: Callable taking ``{"maxResults": int, "startAt": int}``
            and returning the parsed page response
        max_results: Page size to request

    Returns:
        All items across pages, in server order

    Raises:
        ValueError: If max_results is not a positive integer
    """
    if max_results < 1:
        raise ValueError("max_results must be a positive integer")

    results: List[Any] = []
    start_at = 0

    while True:
        response = request_page({"maxResults": max_results, "startAt": start_at})
        items, total = page_items(response)
        results.extend(items)

        logger.debug(
            f"Fetched page startAt={start_at}: {len(items)} items "
            f"(accumulated {len(results)}, total {total})"
        )

        if len(results) >= total or len(items) < max_results:
            break

        start_at += max_results

    if total and len(results) > total:
        del results[total:]

    return results
