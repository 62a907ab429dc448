from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator
from pydantic.alias_generators import to_camel

from course_planner.schemas.pagination import PaginationMeta
from course_planner.utils.pagination import DEFAULT_PAGE_SIZE, clamp_page, clamp_page_size


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire; both accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SectionMeeting(CamelModel):
    """
    One section's meeting pattern. Index i across the parallel lists
    describes one weekly occurrence.
    """
    days: Optional[List[int]] = None
    start_times: Optional[List[str]] = None
    end_times: Optional[List[str]] = None
    locations: Optional[List[Optional[str]]] = None
    instructors: Optional[List[Optional[str]]] = None

    def is_well_formed(self) -> bool:
        if self.days is None or self.start_times is None or self.end_times is None:
            return False
        return len(self.days) == len(self.start_times) == len(self.end_times)

    def occurrences(self) -> Iterator[Tuple[int, str, str, Optional[str], Optional[str]]]:
        """(day, start, end, location, instructor); malformed meetings yield nothing"""
        if not self.is_well_formed():
            return
        for i, day in enumerate(self.days):
            yield (
                day,
                self.start_times[i],
                self.end_times[i],
                _at(self.locations, i),
                _at(self.instructors, i),
            )


def _at(values: Optional[List[Optional[str]]], i: int) -> Optional[str]:
    if not values or i >= len(values):
        return None
    return values[i]


class SectionTable(RootModel[Dict[str, SectionMeeting]]):
    """section name -> SectionMeeting, in source order"""

    def __iter__(self):
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, name: str) -> SectionMeeting:
        return self.root[name]

    def items(self):
        return self.root.items()


class TermTable(RootModel[Dict[str, SectionTable]]):
    """term name -> SectionTable, in source order"""

    def __iter__(self):
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, name: str) -> SectionTable:
        return self.root[name]

    def items(self):
        return self.root.items()

    def sections(self) -> Iterator[Tuple[str, str, SectionMeeting]]:
        for term_name, table in self.root.items():
            for section_name, meeting in table.items():
                yield term_name, section_name, meeting


class CourseRecord(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    subject: str
    code: str
    full_code: str
    title: str = ""
    description: str = ""
    academic_group: str = ""
    career: str = ""
    units: str = ""
    requirements: str = ""
    terms: TermTable = Field(default_factory=lambda: TermTable({}))

    @model_validator(mode="before")
    @classmethod
    def _stamp_full_code(cls, data: Any):
        # full_code 一律由 subject + code 推導，不信任輸入
        if not isinstance(data, dict):
            return data
        data = dict(data)
        subject = str(data.get("subject") or "").strip().upper()
        code = str(data.get("code") if data.get("code") is not None else "").strip()
        if not subject or not code:
            raise ValueError("course record needs both subject and code")
        data.pop("full_code", None)
        data["subject"] = subject
        data["code"] = code
        data["fullCode"] = f"{subject}{code}"
        if data.get("terms") is None:
            data["terms"] = {}
        return data

    @field_validator("title", "description", "academic_group", "career", "units", "requirements", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        return str(v)


class FilterSet(CamelModel):
    """
    AND across dimensions, OR within one.
    An empty dimension does not constrain anything.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    subjects: FrozenSet[str] = frozenset()
    academic_groups: FrozenSet[str] = frozenset()
    careers: FrozenSet[str] = frozenset()
    units: FrozenSet[str] = frozenset()

    @classmethod
    def from_csv(
        cls,
        subjects: Optional[str] = None,
        academic_groups: Optional[str] = None,
        careers: Optional[str] = None,
        units: Optional[str] = None,
    ) -> "FilterSet":
        """ "CSCI, MATH" -> {"CSCI", "MATH"} """
        return cls(
            subjects=_split_csv(subjects),
            academic_groups=_split_csv(academic_groups),
            careers=_split_csv(careers),
            units=_split_csv(units),
        )

    def is_empty(self) -> bool:
        return not (self.subjects or self.academic_groups or self.careers or self.units)

    def matches(self, course: CourseRecord) -> bool:
        if self.subjects and course.subject not in self.subjects:
            return False
        if self.academic_groups and course.academic_group not in self.academic_groups:
            return False
        if self.careers and course.career not in self.careers:
            return False
        if self.units and course.units not in self.units:
            return False
        return True


def _split_csv(value: Optional[str]) -> FrozenSet[str]:
    if not value:
        return frozenset()
    return frozenset(p.strip() for p in value.split(",") if p.strip())


class PageRequest(CamelModel):
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @field_validator("page", mode="before")
    @classmethod
    def _clamp_page(cls, v: Any) -> int:
        return clamp_page(v)

    @field_validator("page_size", mode="before")
    @classmethod
    def _clamp_page_size(cls, v: Any) -> int:
        return clamp_page_size(v)


class SearchQuery(CamelModel):
    text: str = ""
    filters: FilterSet = Field(default_factory=FilterSet)
    pagination: PageRequest = Field(default_factory=PageRequest)


class MatchTier(str, Enum):
    EXACT_CODE = "exact_code"
    EXACT_SUBJECT = "exact_subject"
    PREFIX = "prefix"
    FREE_TEXT = "free_text"
    FILTERS_ONLY = "filters_only"
    DEFAULT = "default"
    NONE = "none"


class SearchResultPage(CamelModel):
    courses: List[CourseRecord] = Field(default_factory=list)
    pagination: PaginationMeta
    tier: MatchTier = MatchTier.NONE


class CourseSuggestion(CamelModel):
    id: str
    title: str
    academic_group: str
