# course_planner/main.py
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from course_planner.config import settings
from course_planner.routers import courses, schedule

import time
import logging
from fastapi import Request
from course_planner.logging_config import setup_logging


setup_logging(settings.LOG_DIR)
logger = logging.getLogger("course_planner")


app = FastAPI(title="Course Planner API", version="1.0.0")

origins = [
    settings.CORS_ORIGIN,
]


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


@app.exception_handler(HTTPException)
async def http_error(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail or "Server Error"},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        loc = [str(p) for p in first.get("loc", ()) if p != "body"]
        message = f"{'.'.join(loc)}: {first.get('msg', 'invalid')}" if loc else first.get("msg", message)
    return JSONResponse(status_code=400, content={"success": False, "error": message})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    return JSONResponse(status_code=500, content={"success": False, "error": "Server Error"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(courses.router)
app.include_router(schedule.router)


@app.get("/health")
def health():
    return {
        "success": True,
        "message": "Course Planner API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.APP_ENV,
    }


@app.get("/")
def root():
    return {
        "success": True,
        "message": "Welcome to Course Planner API",
        "version": "1.0.0",
        "endpoints": {"courses": "/api/courses", "schedule": "/api/schedule", "health": "/health"},
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("course_planner.main:app", host="0.0.0.0", port=settings.PORT, reload=False)
