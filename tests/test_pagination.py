import math

import pytest

from course_planner.schemas.course import PageRequest
from course_planner.utils.pagination import MAX_PAGE_SIZE, clamp_page, clamp_page_size, paginate


class TestClamping:
    @pytest.mark.parametrize("raw, expected", [
        (None, 50), (0, 1), (-5, 1), (1, 1), (37, 37), (100, 100), (101, 100), (10_000, 100),
        ("20", 20), ("abc", 50), ("7.9", 7), ("", 50),
    ])
    def test_page_size(self, raw, expected):
        assert clamp_page_size(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        (None, 1), (0, 1), (-3, 1), (1, 1), (12, 12), ("4", 4), ("x", 1),
    ])
    def test_page(self, raw, expected):
        assert clamp_page(raw) == expected

    def test_page_request_clamps_instead_of_rejecting(self):
        req = PageRequest(page=-2, page_size=500)
        assert req.page == 1
        assert req.page_size == MAX_PAGE_SIZE

    def test_page_request_accepts_camel_case(self):
        req = PageRequest.model_validate({"page": "3", "pageSize": "10"})
        assert (req.page, req.page_size) == (3, 10)


class TestPaginate:
    def test_middle_page(self):
        window, meta = paginate(list(range(25)), page=2, page_size=10)
        assert window == list(range(10, 20))
        assert meta.current_page == 2
        assert meta.total_courses == 25
        assert meta.total_pages == 3
        assert meta.has_next_page is True
        assert meta.has_prev_page is True

    def test_last_partial_page(self):
        window, meta = paginate(list(range(25)), page=3, page_size=10)
        assert window == [20, 21, 22, 23, 24]
        assert meta.has_next_page is False

    def test_page_beyond_total_is_empty_with_valid_metadata(self):
        window, meta = paginate(list(range(5)), page=9, page_size=2)
        assert window == []
        assert meta.total_pages == 3
        assert meta.has_next_page is False
        assert meta.has_prev_page is True

    def test_empty_input(self):
        window, meta = paginate([], page=1, page_size=10)
        assert window == []
        assert meta.total_courses == 0
        assert meta.total_pages == 0
        assert meta.has_next_page is False
        assert meta.has_prev_page is False

    @pytest.mark.parametrize("total", [0, 1, 9, 10, 11, 99, 100, 101, 250])
    @pytest.mark.parametrize("size", [1, 7, 10, 100])
    def test_total_pages_is_ceiling(self, total, size):
        _window, meta = paginate(list(range(total)), page=1, page_size=size)
        assert meta.total_pages == math.ceil(total / size)

    def test_serializes_with_camel_case_keys(self):
        _window, meta = paginate([1, 2, 3], page=1, page_size=2)
        assert meta.model_dump(by_alias=True) == {
            "currentPage": 1,
            "pageSize": 2,
            "totalCourses": 3,
            "totalPages": 2,
            "hasNextPage": True,
            "hasPrevPage": False,
        }
