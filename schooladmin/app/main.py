"""School administration backend entrypoint.

Run with: uvicorn schooladmin.app.main:app --reload

Authentication uses opaque bearer tokens (Authorization: Bearer <token>)
issued by POST /auth/login and backed by server-side sessions.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from schooladmin.app.api import accounts
from schooladmin.app.api import auth
from schooladmin.app.api import classes
from schooladmin.app.api import enrollments
from schooladmin.app.api import grades
from schooladmin.app.api import profile
from schooladmin.app.api import students
from schooladmin.app.api import subjects
from schooladmin.app.api import teachers
from schooladmin.app.core.dev_seed import ensure_bootstrap_admin
from schooladmin.app.core.errors import AuthenticationError, DependencyError, SchoolAdminError
from schooladmin.app.core.settings import get_settings
from schooladmin.app.db.base import Base
from schooladmin.app.db.session import SessionLocal, engine
from schooladmin.app.dependencies.auth import get_password_hasher

logger = logging.getLogger("schooladmin.app.main")

settings = get_settings()
app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(accounts.router)
app.include_router(profile.router)
app.include_router(students.router)
app.include_router(teachers.router)
app.include_router(classes.router)
app.include_router(subjects.router)
app.include_router(enrollments.router)
app.include_router(grades.router)


@app.exception_handler(SchoolAdminError)
async def handle_domain_error(request: Request, exc: SchoolAdminError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    error = DependencyError()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


@app.get("/")
def read_root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def startup():
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_bootstrap_admin(db, settings, get_password_hasher())
    finally:
        db.close()
