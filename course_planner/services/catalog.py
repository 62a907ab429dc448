"""
In-memory course catalog with a read-through TTL cache.

A snapshot is a tuple of CourseRecord built from every raw unit the loader
yields. It is rebuilt on first access, after `invalidate()`, or once it is
older than `ttl_seconds`; otherwise the same tuple is handed out again.
Building never raises: bad units and bad records are logged and skipped,
and a loader that blows up leaves an empty catalog.
"""

import logging
import time
from typing import Any, Callable, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from course_planner.schemas.course import CourseRecord
from course_planner.services.loader import RawUnit

logger = logging.getLogger("course_planner.catalog")

Loader = Callable[[], Iterable[RawUnit]]


def _raw_records(payload: Any) -> List[dict]:
    # list -> 原樣；dict -> 攤平所有 value，只留帶 code 的物件
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        out = []
        for value in payload.values():
            items = value if isinstance(value, list) else [value]
            for item in items:
                if isinstance(item, dict) and item.get("code"):
                    out.append(item)
        return out
    raise ValueError(f"unsupported payload type {type(payload).__name__}")


def build_records(units: Iterable[RawUnit]) -> Tuple[CourseRecord, ...]:
    records: List[CourseRecord] = []
    for subject, payload in units:
        try:
            raw_records = _raw_records(payload)
        except ValueError as e:
            logger.warning("skip unit %s: %s", subject, e)
            continue

        for raw in raw_records:
            if not isinstance(raw, dict):
                logger.warning("skip non-object record in %s", subject)
                continue
            try:
                records.append(CourseRecord.model_validate({**raw, "subject": subject}))
            except ValidationError as e:
                logger.warning("skip record %s%s: %s", subject, raw.get("code", "?"), e.errors()[0]["msg"])
    return tuple(records)


class CourseCatalog:
    def __init__(self, loader: Loader, ttl_seconds: float = 3600, clock: Callable[[], float] = time.monotonic):
        self._loader = loader
        self._ttl = ttl_seconds
        self._clock = clock
        self._snapshot: Tuple[CourseRecord, ...] = ()
        self.loaded_at: Optional[float] = None

    def _is_fresh(self) -> bool:
        if self.loaded_at is None:
            return False
        return self._clock() - self.loaded_at < self._ttl

    def get_snapshot(self) -> Tuple[CourseRecord, ...]:
        if self._is_fresh():
            return self._snapshot

        started = self._clock()
        try:
            snapshot = build_records(self._loader())
        except Exception:
            logger.exception("catalog load failed, serving an empty catalog")
            snapshot = ()

        # last write wins
        self._snapshot = snapshot
        self.loaded_at = self._clock()
        logger.info("catalog loaded: %d courses (%.3fs)", len(snapshot), self.loaded_at - started)
        return snapshot

    def invalidate(self) -> None:
        self.loaded_at = None

    # ===== lookups over the current snapshot =====

    def get_by_full_code(self, full_code: str) -> Optional[CourseRecord]:
        key = (full_code or "").strip().upper()
        for course in self.get_snapshot():
            if course.full_code.upper() == key:
                return course
        return None

    def get_by_subject_and_code(self, subject: str, code: str) -> Optional[CourseRecord]:
        subject = (subject or "").strip().upper()
        code = (code or "").strip()
        for course in self.get_snapshot():
            if course.subject == subject and course.code == code:
                return course
        return None

    def courses_for_subject(self, subject: str) -> List[CourseRecord]:
        subject = (subject or "").strip().upper()
        return [c for c in self.get_snapshot() if c.subject == subject]

    # 給前端下拉選單用
    def subjects(self) -> List[str]:
        return self._distinct("subject")

    def academic_groups(self) -> List[str]:
        return self._distinct("academic_group")

    def careers(self) -> List[str]:
        return self._distinct("career")

    def units(self) -> List[str]:
        def key(u: str):
            try:
                return (0, float(u), u)
            except ValueError:
                return (1, 0.0, u)
        return sorted(self._distinct("units"), key=key)

    def _distinct(self, field: str) -> List[str]:
        return sorted({getattr(c, field) for c in self.get_snapshot() if getattr(c, field)})
