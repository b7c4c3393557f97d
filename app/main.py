# /app/main.py

import logging

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

# --- Application-specific Imports ---
from .core.config import settings
from .core.errors import (
    SchoolCoreError,
    NotFoundError,
    ConflictError,
    InvalidTransitionError,
    OutOfRangeError,
    EmptySubmissionError,
    AlreadyPastDueError,
    PermissionDeniedError,
)
from .core.logging_config import configure_logging
from .db.base import Base
from .db.database import engine
from .routers import (
    classes_router,
    subjects_router,
    users_router,
    assignments_router,
    submissions_router,
    gradebook_router,
)

configure_logging()
logger = logging.getLogger(__name__)

# Most specific class first; DuplicateLinkError is caught by ConflictError.
ERROR_STATUS_CODES = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (AlreadyPastDueError, status.HTTP_409_CONFLICT),
    (OutOfRangeError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (EmptySubmissionError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
]


def status_code_for(error: SchoolCoreError) -> int:
    for error_class, code in ERROR_STATUS_CODES:
        if isinstance(error, error_class):
            return code
    return status.HTTP_400_BAD_REQUEST


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured on %s", engine.url)
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title=settings.APP_NAME,
    description="Classes, enrollments, assignments, submissions and gradebooks for a school.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Domain Error Handling ---
@app.exception_handler(SchoolCoreError)
async def school_core_error_handler(request: Request, exc: SchoolCoreError):
    code = status_code_for(exc)
    logger.info("%s %s -> %s (%s)", request.method, request.url.path, code, exc.kind)
    return JSONResponse(status_code=code, content=exc.to_dict())


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "invalid_request", "detail": str(exc)},
    )


# --- API Router Inclusion ---
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])
app.include_router(subjects_router.router, prefix="/api/subjects", tags=["Subjects"])
app.include_router(users_router.router, prefix="/api/users", tags=["Users"])
app.include_router(assignments_router.router, prefix="/api/assignments", tags=["Assignments"])
app.include_router(submissions_router.router, prefix="/api/submissions", tags=["Submissions"])
app.include_router(gradebook_router.router, prefix="/api/gradebook", tags=["Gradebook"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": f"{settings.APP_NAME} is running!", "version": app.version}
