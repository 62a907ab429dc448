# course_planner/deps.py
from functools import lru_cache

from fastapi import Depends

from course_planner.config import settings
from course_planner.services.catalog import CourseCatalog
from course_planner.services.loader import JsonDirectoryLoader
from course_planner.services.search import RankedSearchEngine
from course_planner.utils.conflict import ConflictDetector


@lru_cache
def get_catalog() -> CourseCatalog:
    return CourseCatalog(
        loader=JsonDirectoryLoader(settings.LOCAL_DATA_PATH),
        ttl_seconds=settings.CACHE_DURATION,
    )


def get_search_engine(catalog: CourseCatalog = Depends(get_catalog)) -> RankedSearchEngine:
    return RankedSearchEngine(catalog)


def get_conflict_detector() -> ConflictDetector:
    return ConflictDetector()
