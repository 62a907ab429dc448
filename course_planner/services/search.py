"""
Tiered course search.

Students type course codes letter by letter ("C" -> "CS" -> "CS1" -> "CS101"),
so structural matches on the code always beat free-text hits. The tiers are
tried in order against the whole catalog and the first one that still has a
match after filtering is the result:

    1. exact full code      fullCode == q
    2. exact subject        subject == q
    3. prefix               fullCode or subject starts with q
    4. free text            q in title or description

All comparisons are case-insensitive on the trimmed query. Catalog order is
kept inside a tier; there is no relevance scoring.

With no query text the cascade is skipped: no filters means the first
DEFAULT_RESULT_CAP courses of the catalog, filters means a filters-only pass
over everything.
"""

import logging
from typing import Callable, List, Optional, Tuple

from course_planner.schemas.course import (
    CourseRecord, CourseSuggestion, FilterSet, MatchTier, PageRequest, SearchQuery, SearchResultPage,
)
from course_planner.services.catalog import CourseCatalog
from course_planner.utils.pagination import paginate

logger = logging.getLogger("course_planner.search")

DEFAULT_RESULT_CAP = 100
SUGGESTION_MIN_LENGTH = 2
SUGGESTION_LIMIT = 10

Predicate = Callable[[CourseRecord, str], bool]


def _exact_code(course: CourseRecord, term: str) -> bool:
    return course.full_code.lower() == term


def _exact_subject(course: CourseRecord, term: str) -> bool:
    return course.subject.lower() == term


def _prefix(course: CourseRecord, term: str) -> bool:
    return course.full_code.lower().startswith(term) or course.subject.lower().startswith(term)


def _free_text(course: CourseRecord, term: str) -> bool:
    return term in course.title.lower() or term in course.description.lower()


TIERS: List[Tuple[MatchTier, Predicate]] = [
    (MatchTier.EXACT_CODE, _exact_code),
    (MatchTier.EXACT_SUBJECT, _exact_subject),
    (MatchTier.PREFIX, _prefix),
    (MatchTier.FREE_TEXT, _free_text),
]


class RankedSearchEngine:
    def __init__(self, catalog: CourseCatalog):
        self.catalog = catalog

    def match(self, query: Optional[str], filters: Optional[FilterSet] = None) -> Tuple[MatchTier, List[CourseRecord]]:
        """Unpaginated result set and the tier that produced it."""
        courses = self.catalog.get_snapshot()
        filters = filters or FilterSet()
        term = (query or "").strip().lower()

        if not term:
            if filters.is_empty():
                return MatchTier.DEFAULT, list(courses[:DEFAULT_RESULT_CAP])
            return MatchTier.FILTERS_ONLY, [c for c in courses if filters.matches(c)]

        for tier, predicate in TIERS:
            hits = [c for c in courses if predicate(c, term) and filters.matches(c)]
            if hits:
                return tier, hits

        return MatchTier.NONE, []

    def search(
        self,
        query: Optional[str] = None,
        filters: Optional[FilterSet] = None,
        pagination: Optional[PageRequest] = None,
    ) -> SearchResultPage:
        pagination = pagination or PageRequest()
        tier, hits = self.match(query, filters)
        window, meta = paginate(hits, pagination.page, pagination.page_size)

        logger.debug("search q=%r tier=%s matches=%d page=%d", query, tier.value, len(hits), meta.current_page)
        return SearchResultPage(courses=window, pagination=meta, tier=tier)

    def run(self, q: SearchQuery) -> SearchResultPage:
        return self.search(q.text, q.filters, q.pagination)

    def suggestions(self, query: Optional[str], limit: int = SUGGESTION_LIMIT) -> List[CourseSuggestion]:
        term = (query or "").strip()
        if len(term) < SUGGESTION_MIN_LENGTH:
            return []
        _tier, hits = self.match(term)
        return [
            CourseSuggestion(id=c.full_code, title=c.title, academic_group=c.academic_group)
            for c in hits[:limit]
        ]
