from typing import Dict, Iterable, List, Sequence

from course_planner.schemas.schedule import CreditLimitReport, ScheduleEntry, ScheduledSlot, ScheduleSummary
from course_planner.utils.timeslots import parse_time

DEFAULT_MAX_CREDITS = 21
TBA = "TBA"


def _credits(units: str) -> float:
    try:
        return float(units)
    except (TypeError, ValueError):
        return 0.0


def check_credit_limit(entries: Iterable[ScheduleEntry], max_credits: float = DEFAULT_MAX_CREDITS) -> CreditLimitReport:
    total = sum(_credits(e.units) for e in entries)
    return CreditLimitReport(
        within_limit=total <= max_credits,
        total_credits=total,
        max_credits=max_credits,
        remaining=max_credits - total,
    )


def _start_key(slot: ScheduledSlot) -> int:
    try:
        return parse_time(slot.start_time)
    except ValueError:
        return 0


def summarize_schedule(entries: Sequence[ScheduleEntry], max_credits: float = DEFAULT_MAX_CREDITS) -> ScheduleSummary:
    terms: List[str] = []
    groups: List[str] = []
    by_day: Dict[int, List[ScheduledSlot]] = {}

    for e in entries:
        if e.academic_group and e.academic_group not in groups:
            groups.append(e.academic_group)

        for s in e.slots:
            if s.term and s.term not in terms:
                terms.append(s.term)
            by_day.setdefault(s.day, []).append(ScheduledSlot(
                code=e.code,
                title=e.title,
                section=s.section,
                term=s.term,
                start_time=s.start_time,
                end_time=s.end_time,
                location=s.location or TBA,
                instructor=s.instructor or TBA,
            ))

    # 每天依開始時間排序（stable）
    for day in by_day:
        by_day[day].sort(key=_start_key)

    credit = check_credit_limit(entries, max_credits)
    return ScheduleSummary(
        total_courses=len(entries),
        total_credits=credit.total_credits,
        terms=terms,
        academic_groups=groups,
        schedule_by_day=dict(sorted(by_day.items())),
        credit_limit=credit,
    )
