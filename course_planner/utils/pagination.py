# course_planner/utils/pagination.py
from __future__ import annotations

import math
from typing import Any, Sequence, Tuple, TypeVar

from course_planner.schemas.pagination import PaginationMeta

T = TypeVar("T")

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 50


def _to_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return default


def clamp_page_size(value: Any, default: int = DEFAULT_PAGE_SIZE) -> int:
    """None / 非數字 -> default，再夾到 [1, MAX_PAGE_SIZE]"""
    return max(1, min(MAX_PAGE_SIZE, _to_int(value, default)))


def clamp_page(value: Any) -> int:
    return max(1, _to_int(value, 1))


def paginate(items: Sequence[T], page: Any = 1, page_size: Any = DEFAULT_PAGE_SIZE) -> Tuple[list[T], PaginationMeta]:
    """
    items 切出第 page 頁：
    - page / page_size 超出範圍時夾住，不丟錯
    - page > total_pages 時回空 list，metadata 仍然正確
    """
    page = clamp_page(page)
    page_size = clamp_page_size(page_size)

    total = len(items)
    total_pages = math.ceil(total / page_size)
    start = (page - 1) * page_size

    window = list(items[start:start + page_size])
    meta = PaginationMeta(
        current_page=page,
        page_size=page_size,
        total_courses=total,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )
    return window, meta
