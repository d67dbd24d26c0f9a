from dataclasses import dataclass


@dataclass(frozen=True)
class PageWindow:
    offset: int
    limit: int


def normalize_page(page_number: int, page_size: int, default_page_size: int, max_page_size: int) -> PageWindow:
    """
    Turn a 1-based page number and a requested page size into a zero-based
    offset and a bounded limit. Out of range values are clamped, never rejected.
    """
    if page_size < 1:
        page_size = default_page_size

    if page_size > max_page_size:
        page_size = max_page_size

    page_number -= 1

    if page_number < 0:
        page_number = 0

    return PageWindow(offset=page_number * page_size, limit=page_size)
