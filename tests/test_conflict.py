"""
Conflict detection.

Two meetings conflict when they share a weekday and their half-open time
ranges overlap: touching endpoints (end == start) is NOT a conflict.
"""

import pytest

from course_planner.schemas.schedule import MeetingSlot, ScheduleEntry
from course_planner.utils.conflict import (
    ConflictDetector, overlaps, validate_course_ids, validate_schedule,
)
from course_planner.utils.timeslots import parse_time


def clash(start1, end1, start2, end2):
    return overlaps(parse_time(start1), parse_time(end1), parse_time(start2), parse_time(end2))


def entry(code, *slots, title=""):
    return ScheduleEntry(
        code=code,
        title=title or code,
        slots=[
            MeetingSlot(day=d, start_time=s, end_time=e, section=f"{code}-LEC", term="T1")
            for d, s, e in slots
        ],
    )


class TestOverlap:
    def test_touching_is_not_a_conflict(self):
        assert clash("09:00", "10:00", "10:00", "11:00") is False

    def test_partial_overlap(self):
        assert clash("09:00", "10:30", "10:00", "11:00") is True

    def test_containment(self):
        assert clash("09:00", "12:00", "10:00", "11:00") is True
        assert clash("10:00", "11:00", "09:00", "12:00") is True

    def test_identical(self):
        assert overlaps(540, 600, 540, 600) is True

    def test_bad_format_raises(self):
        with pytest.raises(ValueError):
            clash("9am", "10:00", "09:00", "10:00")


class TestConflictDetector:
    def test_back_to_back_is_valid(self):
        report = validate_schedule([
            entry("MATH1510", (1, "09:00", "10:00")),
            entry("CSCI1130", (1, "10:00", "11:00")),
        ])
        assert report.is_valid is True
        assert report.conflicts == []

    def test_overlap_same_day(self):
        report = validate_schedule([
            entry("MATH1510", (1, "09:00", "10:30"), title="Calculus"),
            entry("CSCI1130", (1, "10:00", "11:00"), title="Computing"),
        ])
        assert report.is_valid is False
        assert len(report.conflicts) == 1

        pair = report.conflicts[0]
        # course1 is the meeting being added, course2 the one already there
        assert pair.course1.code == "CSCI1130"
        assert pair.course1.title == "Computing"
        assert pair.course1.day == "Monday"
        assert pair.course1.time_range == "10:00 AM - 11:00 AM"
        assert pair.course1.section == "CSCI1130-LEC"
        assert pair.course1.term == "T1"
        assert pair.course2.code == "MATH1510"
        assert pair.course2.time_range == "9:00 AM - 10:30 AM"

    def test_different_days_do_not_conflict(self):
        report = validate_schedule([
            entry("A", (1, "09:00", "11:00")),
            entry("B", (2, "09:00", "11:00")),
        ])
        assert report.is_valid is True

    def test_every_overlapping_pair_in_processing_order(self):
        report = validate_schedule([
            entry("A", (3, "09:00", "11:00")),
            entry("B", (3, "10:00", "12:00")),
            entry("C", (3, "10:30", "11:30")),
        ])
        pairs = [(p.course1.code, p.course2.code) for p in report.conflicts]
        assert pairs == [("B", "A"), ("C", "A"), ("C", "B")]

    def test_meetings_within_one_entry_are_checked(self):
        report = validate_schedule([entry("A", (5, "13:00", "15:00"), (5, "14:00", "16:00"))])
        assert len(report.conflicts) == 1
        assert report.conflicts[0].course1.code == report.conflicts[0].course2.code == "A"

    def test_afternoon_formatting(self):
        report = validate_schedule([
            entry("A", (7, "12:00", "13:30")),
            entry("B", (7, "13:00", "14:15")),
        ])
        assert report.conflicts[0].course1.day == "Sunday"
        assert report.conflicts[0].course1.time_range == "1:00 PM - 2:15 PM"
        assert report.conflicts[0].course2.time_range == "12:00 PM - 1:30 PM"

    def test_per_day_schedule_keeps_insertion_order(self):
        report = validate_schedule([
            entry("A", (2, "14:00", "15:00"), (4, "09:00", "10:00")),
            entry("B", (2, "08:00", "09:00")),
        ])
        assert sorted(report.per_day_schedule) == [2, 4]
        assert [s.code for s in report.per_day_schedule[2]] == ["A", "B"]
        assert report.per_day_schedule[2][1].start_time == "08:00"
        assert [s.code for s in report.per_day_schedule[4]] == ["A"]

    @pytest.mark.parametrize("day, start, end", [
        (0, "09:00", "10:00"),
        (8, "09:00", "10:00"),
        (1, "25:00", "26:00"),
        (1, "nine", "10:00"),
        (1, "", "10:00"),
        (1, "11:00", "10:00"),
        (1, "10:00", "10:00"),
    ])
    def test_malformed_slots_are_skipped(self, day, start, end):
        report = validate_schedule([
            entry("BAD", (day, start, end)),
            entry("OK", (1, "09:30", "10:30")),
        ])
        assert report.is_valid is True
        assert [s.code for s in report.per_day_schedule[1]] == ["OK"]

    def test_empty_input(self):
        report = ConflictDetector().validate([])
        assert report.is_valid is True
        assert report.per_day_schedule == {}

    def test_identical_input_gives_identical_output(self):
        entries = [
            entry("A", (1, "09:00", "11:00"), (3, "09:00", "11:00")),
            entry("B", (1, "10:00", "12:00")),
            entry("C", (3, "10:30", "11:30"), (1, "08:00", "09:30")),
        ]
        detector = ConflictDetector()
        first = detector.validate(entries).model_dump_json(by_alias=True)
        second = detector.validate(entries).model_dump_json(by_alias=True)
        assert first == second

    def test_wire_format_is_camel_case(self):
        report = validate_schedule([
            entry("A", (1, "09:00", "10:30")),
            entry("B", (1, "10:00", "11:00")),
        ])
        data = report.model_dump(mode="json", by_alias=True)
        assert data["isValid"] is False
        assert set(data["conflicts"][0]["course1"]) == {"code", "title", "section", "term", "day", "timeRange"}
        assert "1" in data["perDaySchedule"]


class TestValidateCourseIds:
    def test_checks_all_sections_of_catalog_courses(self, catalog):
        # MATH1510 Mon 09:30-11:15 lecture vs CSCI1130 Mon 10:30-12:15 lecture
        report = validate_course_ids(["MATH1510", "CSCI1130"], catalog)
        assert report.is_valid is False
        assert [(p.course1.code, p.course2.code) for p in report.conflicts] == [("CSCI1130", "MATH1510")]
        assert report.conflicts[0].course2.section == "--LEC (1001)"
        assert report.conflicts[0].course2.term == "2025-26 Term 1"

    def test_unknown_ids_are_skipped(self, catalog):
        report = validate_course_ids(["NOPE0000", "math1510"], catalog)
        assert report.is_valid is True
        assert sorted(report.per_day_schedule) == [1, 2, 3, 4]
