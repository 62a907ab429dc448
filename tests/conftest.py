import pytest

from course_planner.services.catalog import CourseCatalog
from course_planner.services.search import RankedSearchEngine


def _meeting(days, starts, ends, rooms=None, instructors=None):
    m = {"days": days, "startTimes": starts, "endTimes": ends}
    if rooms is not None:
        m["locations"] = rooms
    if instructors is not None:
        m["instructors"] = instructors
    return m


RAW_UNITS = [
    ("CSCI", [
        {
            "code": "1130",
            "title": "Introduction to Computing",
            "description": "Programming basics for engineers",
            "academic_group": "Engineering",
            "career": "Undergraduate",
            "units": 3,
            "requirements": "",
            "terms": {
                "2025-26 Term 1": {
                    "--LEC (5001)": _meeting([1], ["10:30"], ["12:15"], ["ERB LT"], ["Prof. Chan"]),
                },
            },
        },
        {
            "code": "5010",
            "title": "Advanced Algorithms",
            "description": "Graduate level algorithm design",
            "academic_group": "Engineering",
            "career": "Postgraduate",
            "units": "3",
            "requirements": "Prerequisite: CSCI 3160 and MATH1510.",
        },
    ]),
    ("MATE", [
        {
            "code": "1000",
            "title": "Materials Today",
            "description": "Everyday materials",
            "academic_group": "Engineering",
            "career": "Undergraduate",
            "units": "2",
        },
    ]),
    ("MATH", [
        {
            "code": "1510",
            "title": "Calculus for Engineers",
            "description": "Limits, derivatives and integrals",
            "academicGroup": "Science",
            "career": "Undergraduate",
            "units": "3",
            "terms": {
                "2025-26 Term 1": {
                    "--LEC (1001)": _meeting([1, 3], ["09:30", "09:30"], ["11:15", "10:15"],
                                             ["LSB LT1", "LSB LT1"], ["Prof. Lee", "Prof. Lee"]),
                    "-T01-TUT (1002)": _meeting([4], ["17:30"], ["18:15"]),
                },
                "2025-26 Term 2": {
                    "--LEC (2001)": _meeting([2], ["14:30"], ["16:15"]),
                },
            },
        },
        {
            "code": "2040",
            "title": "Linear Algebra",
            "description": "Vector spaces and linear maps",
            "academic_group": "Science",
            "career": "Undergraduate",
            "units": "3",
        },
    ]),
    ("PHYS", [
        {
            "code": "1001",
            "title": "Foundations of Physics",
            "description": "Mechanics using basic math concepts",
            "academic_group": "Science",
            "career": "Undergraduate",
            "units": "2",
        },
    ]),
]


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def raw_units():
    return list(RAW_UNITS)


@pytest.fixture
def catalog(raw_units):
    return CourseCatalog(loader=lambda: iter(raw_units), ttl_seconds=3600)


@pytest.fixture
def engine(catalog):
    return RankedSearchEngine(catalog)


@pytest.fixture
def clock():
    return FakeClock()
