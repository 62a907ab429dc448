# course_planner/routers/courses.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException

from course_planner.deps import get_catalog, get_search_engine
from course_planner.schemas.course import FilterSet, PageRequest
from course_planner.schemas.schedule import CourseIdsIn, PrerequisitesIn
from course_planner.services.catalog import CourseCatalog
from course_planner.services.search import RankedSearchEngine
from course_planner.utils.conflict import validate_course_ids
from course_planner.utils.prerequisites import check_prerequisites

import logging
logger = logging.getLogger("course_planner.courses")


router = APIRouter(prefix="/api/courses", tags=["Courses"])


def _dump(model):
    return model.model_dump(mode="json", by_alias=True)


@router.get("")
def search_courses(
    engine: RankedSearchEngine = Depends(get_search_engine),

    q: Optional[str] = Query(None, description="course code, subject or keyword"),
    subjects: Optional[str] = Query(None, description="comma-separated, e.g. CSCI,MATH"),
    academic_groups: Optional[str] = Query(None, description="comma-separated"),
    careers: Optional[str] = Query(None, description="comma-separated"),
    units: Optional[str] = Query(None, description="comma-separated, e.g. 3,3.0"),

    # 超出範圍一律夾住，不回 422
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
):
    filters = FilterSet.from_csv(subjects, academic_groups, careers, units)
    result = engine.search(q, filters, PageRequest(page=page, page_size=limit))

    return {
        "success": True,
        "data": {
            "courses": [_dump(c) for c in result.courses],
            "pagination": _dump(result.pagination),
            "tier": result.tier.value,
        },
    }


# 給前端下拉選單用
@router.get("/meta/subjects")
@router.get("/subjects")
def list_subjects(catalog: CourseCatalog = Depends(get_catalog)):
    return {"success": True, "data": catalog.subjects()}


@router.get("/meta/academic-groups")
@router.get("/academic-groups")
def list_academic_groups(catalog: CourseCatalog = Depends(get_catalog)):
    return {"success": True, "data": catalog.academic_groups()}


@router.get("/meta/careers")
def list_careers(catalog: CourseCatalog = Depends(get_catalog)):
    return {"success": True, "data": catalog.careers()}


@router.get("/meta/units")
def list_units(catalog: CourseCatalog = Depends(get_catalog)):
    return {"success": True, "data": catalog.units()}


@router.get("/search/suggestions")
def search_suggestions(
    engine: RankedSearchEngine = Depends(get_search_engine),
    q: Optional[str] = Query(None),
):
    return {"success": True, "data": [_dump(s) for s in engine.suggestions(q)]}


@router.get("/subjects/{subject}")
def subject_courses(subject: str, catalog: CourseCatalog = Depends(get_catalog)):
    subject = subject.strip().upper()
    courses = catalog.courses_for_subject(subject)
    return {"success": True, "data": {"subject": subject, "courses": [_dump(c) for c in courses]}}


@router.post("/cache/invalidate")
def invalidate_cache(catalog: CourseCatalog = Depends(get_catalog)):
    catalog.invalidate()
    logger.info("catalog cache invalidated")
    return {"success": True, "message": "Catalog cache invalidated"}


@router.post("/validate-schedule")
def validate_schedule_by_ids(body: CourseIdsIn, catalog: CourseCatalog = Depends(get_catalog)):
    report = validate_course_ids(body.courses, catalog)
    return {"success": True, "data": _dump(report)}


@router.post("/{full_code}/prerequisites")
def course_prerequisites(full_code: str, body: PrerequisitesIn, catalog: CourseCatalog = Depends(get_catalog)):
    course = catalog.get_by_full_code(full_code)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return {"success": True, "data": _dump(check_prerequisites(course, body.completed))}


@router.get("/{subject}/{code}")
def get_course_by_subject_and_code(subject: str, code: str, catalog: CourseCatalog = Depends(get_catalog)):
    course = catalog.get_by_subject_and_code(subject, code)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return {"success": True, "data": _dump(course)}


@router.get("/{full_code}")
def get_course(full_code: str, catalog: CourseCatalog = Depends(get_catalog)):
    course = catalog.get_by_full_code(full_code)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return {"success": True, "data": _dump(course)}
