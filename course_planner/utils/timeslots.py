from typing import Optional

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def parse_time(hhmm: str) -> int:
    """
    "09:30" -> 570 (minutes since midnight)
    Raises ValueError for invalid formats.
    """
    parts = str(hhmm or "").strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 24 and 0 <= m <= 59) or (h == 24 and m != 0):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    return h * 60 + m


def format_time(hhmm: Optional[str]) -> str:
    """ "13:05" -> "1:05 PM" ; empty -> "" """
    if not hhmm:
        return ""
    minutes = parse_time(hhmm)
    h, m = divmod(minutes, 60)
    period = "PM" if 12 <= h < 24 else "AM"
    display = h % 12 or 12
    return f"{display}:{m:02d} {period}"


def format_time_range(start: str, end: str) -> str:
    return f"{format_time(start)} - {format_time(end)}"


def is_valid_day(day) -> bool:
    return isinstance(day, int) and not isinstance(day, bool) and 1 <= day <= 7


def day_name(day: int) -> str:
    return DAY_NAMES[day - 1] if is_valid_day(day) else "Unknown"
