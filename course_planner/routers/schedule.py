from collections.abc import Mapping

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from course_planner.config import settings
from course_planner.deps import get_conflict_detector
from course_planner.schemas.schedule import ScheduleEntry, ScheduleIn
from course_planner.utils.conflict import ConflictDetector
from course_planner.utils.excel_export import make_filename, schedule_to_xlsx_bytes
from course_planner.utils.schedule_summary import summarize_schedule

import logging
logger = logging.getLogger("course_planner.schedule")

router = APIRouter(prefix="/api/schedule", tags=["Schedule"])


def _entries(body: ScheduleIn) -> list[ScheduleEntry]:
    entries = []
    for i, c in enumerate(body.courses):
        if not isinstance(c, Mapping):
            logger.debug("skip schedule item %d: not an object (%s)", i, type(c).__name__)
            continue
        entries.append(ScheduleEntry.from_payload(c))
    return entries


@router.post("/validate")
def validate_schedule(
    body: ScheduleIn,
    detector: ConflictDetector = Depends(get_conflict_detector),
):
    report = detector.validate(_entries(body))
    return {"success": True, "data": report.model_dump(mode="json", by_alias=True)}


@router.post("/summary")
def schedule_summary(body: ScheduleIn):
    summary = summarize_schedule(_entries(body), max_credits=settings.MAX_CREDITS)
    return {"success": True, "data": summary.model_dump(mode="json", by_alias=True)}


@router.post("/export")
def export_schedule_excel(body: ScheduleIn):
    """
    匯出課表成 Excel（.xlsx），一列一個上課時段
    """
    xlsx_bytes = schedule_to_xlsx_bytes(_entries(body))
    filename = make_filename("schedule")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
