import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import Field, ValidationError

from course_planner.schemas.course import CamelModel, CourseRecord, TermTable

logger = logging.getLogger("course_planner.schedule")


class MeetingSlot(CamelModel):
    day: int
    start_time: str
    end_time: str
    section: str = ""
    term: str = ""
    location: Optional[str] = None
    instructor: Optional[str] = None


class ScheduleEntry(CamelModel):
    """One selected course, already flattened to its weekly meetings."""
    code: str
    title: str = ""
    units: str = ""
    academic_group: str = ""
    course: Optional[CourseRecord] = None
    slots: List[MeetingSlot] = Field(default_factory=list)

    @classmethod
    def from_course(
        cls,
        course: CourseRecord,
        selected_sections: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> "ScheduleEntry":
        """
        selected_sections: term -> section names to keep.
        None keeps every section of every term.
        """
        return cls(
            code=course.full_code,
            title=course.title,
            units=course.units,
            academic_group=course.academic_group,
            course=course,
            slots=_flatten_terms(course.terms, selected_sections),
        )

    @classmethod
    def from_payload(cls, obj: Mapping[str, Any]) -> "ScheduleEntry":
        """
        Course object as the schedule UI sends it:
        - resolved `schedule` array wins when present
        - otherwise `terms`, narrowed by `selectedSections`
        """
        subject = str(obj.get("subject") or "").strip().upper()
        raw_code = str(obj.get("code") or "").strip()
        code = str(obj.get("fullCode") or obj.get("full_code") or f"{subject}{raw_code}")

        schedule = obj.get("schedule")
        if isinstance(schedule, list):
            slots = []
            for item in schedule:
                try:
                    slots.append(MeetingSlot.model_validate(item))
                except ValidationError:
                    logger.debug("skip malformed slot on %s: %r", code, item)
        else:
            try:
                terms = TermTable.model_validate(obj.get("terms") or {})
            except ValidationError:
                logger.debug("skip malformed terms on %s", code)
                terms = TermTable({})
            slots = _flatten_terms(terms, _selected_sections(obj.get("selectedSections"), terms))

        return cls(
            code=code,
            title=str(obj.get("title") or ""),
            units=_text(obj.get("units")),
            academic_group=str(obj.get("academicGroup") or obj.get("academic_group") or ""),
            slots=slots,
        )


def _text(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def _selected_sections(raw: Any, terms: TermTable) -> Optional[Dict[str, List[str]]]:
    # {"2025-26 Term 1": ["--LEC (1234)"]} 或 ["--LEC (1234)"]（套用到每個學期）
    if isinstance(raw, dict):
        return {str(t): [str(s) for s in (names or [])] for t, names in raw.items()}
    if isinstance(raw, list):
        names = [str(s) for s in raw]
        return {t: names for t in terms}
    return None


def _flatten_terms(
    terms: TermTable,
    selected_sections: Optional[Mapping[str, Iterable[str]]] = None,
) -> List[MeetingSlot]:
    keep = None
    if selected_sections is not None:
        keep = {t: set(names) for t, names in selected_sections.items()}

    slots: List[MeetingSlot] = []
    for term_name, section_name, meeting in terms.sections():
        if keep is not None and section_name not in keep.get(term_name, ()):
            continue
        for day, start, end, location, instructor in meeting.occurrences():
            slots.append(MeetingSlot(
                day=day,
                start_time=start,
                end_time=end,
                section=section_name,
                term=term_name,
                location=location,
                instructor=instructor,
            ))
    return slots


class ConflictSide(CamelModel):
    code: str
    title: str = ""
    section: str = ""
    term: str = ""
    day: str
    time_range: str


class ConflictPair(CamelModel):
    course1: ConflictSide   # the meeting being added
    course2: ConflictSide   # the meeting already on that day


class ScheduledSlot(CamelModel):
    code: str
    title: str = ""
    section: str = ""
    term: str = ""
    start_time: str
    end_time: str
    location: Optional[str] = None
    instructor: Optional[str] = None


class ValidationReport(CamelModel):
    is_valid: bool
    conflicts: List[ConflictPair] = Field(default_factory=list)
    per_day_schedule: Dict[int, List[ScheduledSlot]] = Field(default_factory=dict)


class CreditLimitReport(CamelModel):
    within_limit: bool
    total_credits: float
    max_credits: float
    remaining: float


class PrerequisiteReport(CamelModel):
    satisfied: bool
    missing: List[str] = Field(default_factory=list)


class ScheduleSummary(CamelModel):
    total_courses: int
    total_credits: float
    terms: List[str] = Field(default_factory=list)
    academic_groups: List[str] = Field(default_factory=list)
    schedule_by_day: Dict[int, List[ScheduledSlot]] = Field(default_factory=dict)
    credit_limit: CreditLimitReport


# ===== request bodies =====

class ScheduleIn(CamelModel):
    # items that are not objects are dropped by the router, not rejected here
    courses: List[Any] = Field(default_factory=list)


class CourseIdsIn(CamelModel):
    courses: List[str]


class PrerequisitesIn(CamelModel):
    completed: List[str] = Field(default_factory=list)
