import re
from typing import Iterable

from course_planner.schemas.course import CourseRecord
from course_planner.schemas.schedule import PrerequisiteReport

_CLAUSE_PATTERNS = [
    re.compile(r"prerequisites?:\s*([^.]+)", re.IGNORECASE),
    re.compile(r"pre-requisites?:\s*([^.]+)", re.IGNORECASE),
]
_CODE_PAT = re.compile(r"\b([A-Za-z]{4})\s?(\d{4})\b")


def required_codes(requirements: str) -> list[str]:
    """
    "Prerequisite: MATH1510 or ENGG 1130." -> ["MATH1510", "ENGG1130"]
    Only codes inside a prerequisite clause count.
    """
    out: list[str] = []
    for pat in _CLAUSE_PATTERNS:
        for clause in pat.findall(requirements or ""):
            for subject, number in _CODE_PAT.findall(clause):
                code = f"{subject.upper()}{number}"
                if code not in out:
                    out.append(code)
    return out


def check_prerequisites(course: CourseRecord, completed_codes: Iterable[str]) -> PrerequisiteReport:
    done = {c.replace(" ", "").upper() for c in completed_codes}
    missing = [code for code in required_codes(course.requirements) if code not in done]
    return PrerequisiteReport(satisfied=not missing, missing=missing)
