# course_planner/utils/conflict.py
import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from course_planner.schemas.schedule import (
    ConflictPair, ConflictSide, MeetingSlot, ScheduleEntry, ScheduledSlot, ValidationReport,
)
from course_planner.utils.timeslots import day_name, format_time_range, is_valid_day, parse_time

logger = logging.getLogger("course_planner.conflict")


def overlaps(start1: int, end1: int, start2: int, end2: int) -> bool:
    """
    Half-open intervals [start, end):
    touching endpoints (end1 == start2) is NOT a conflict.
    """
    return start1 < end2 and start2 < end1


def _side(entry: ScheduleEntry, slot: MeetingSlot) -> ConflictSide:
    return ConflictSide(
        code=entry.code,
        title=entry.title,
        section=slot.section,
        term=slot.term,
        day=day_name(slot.day),
        time_range=format_time_range(slot.start_time, slot.end_time),
    )


class ConflictDetector:
    """
    Finds every overlapping pair of meetings on the same weekday.

    Entries (and the slots within each entry) are processed in input order.
    Each new slot is compared with every slot already recorded for its day,
    then recorded itself, so the conflict list is stable for a given input.
    O(n^2) per day is fine for a schedule of a few dozen meetings.
    """

    def validate(self, entries: Sequence[ScheduleEntry]) -> ValidationReport:
        conflicts: List[ConflictPair] = []
        # day -> [(start, end, entry, slot)]
        by_day: Dict[int, List[Tuple[int, int, ScheduleEntry, MeetingSlot]]] = {}

        for entry in entries:
            for slot in entry.slots:
                parsed = self._parse(entry, slot)
                if parsed is None:
                    continue
                start, end = parsed

                day_slots = by_day.setdefault(slot.day, [])
                for other_start, other_end, other_entry, other_slot in day_slots:
                    if overlaps(start, end, other_start, other_end):
                        conflicts.append(ConflictPair(
                            course1=_side(entry, slot),
                            course2=_side(other_entry, other_slot),
                        ))

                day_slots.append((start, end, entry, slot))

        per_day = {
            day: [
                ScheduledSlot(
                    code=e.code,
                    title=e.title,
                    section=s.section,
                    term=s.term,
                    start_time=s.start_time,
                    end_time=s.end_time,
                    location=s.location,
                    instructor=s.instructor,
                )
                for _start, _end, e, s in day_slots
            ]
            for day, day_slots in by_day.items()
        }

        if conflicts:
            logger.debug("schedule has %d conflict(s) across %d entries", len(conflicts), len(entries))

        return ValidationReport(is_valid=not conflicts, conflicts=conflicts, per_day_schedule=per_day)

    @staticmethod
    def _parse(entry: ScheduleEntry, slot: MeetingSlot):
        if not is_valid_day(slot.day):
            logger.debug("skip %s: day %r out of range", entry.code, slot.day)
            return None
        try:
            start = parse_time(slot.start_time)
            end = parse_time(slot.end_time)
        except ValueError:
            logger.debug("skip %s: bad time %r-%r", entry.code, slot.start_time, slot.end_time)
            return None
        # end <= start 視為無效時段，避免奇怪的衝突
        if end <= start:
            logger.debug("skip %s: empty range %s-%s", entry.code, slot.start_time, slot.end_time)
            return None
        return start, end


def validate_schedule(entries: Sequence[ScheduleEntry]) -> ValidationReport:
    return ConflictDetector().validate(entries)


def validate_course_ids(course_ids: Iterable[str], catalog) -> ValidationReport:
    """
    Look every full code up in the catalog and check all of its sections.
    Unknown codes are skipped.
    """
    entries = []
    for cid in course_ids:
        course = catalog.get_by_full_code(cid)
        if course is None:
            logger.debug("validate_course_ids: unknown course %r", cid)
            continue
        entries.append(ScheduleEntry.from_course(course))
    return validate_schedule(entries)
