"""Main FastAPI application."""
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy import inspect

from tenant_api.core.config import settings
from tenant_api.core.logging import request_id_var, setup_logging, get_logger
from tenant_api.core.database import engine
from tenant_api.core.exceptions import PersistenceError, TenantAPIError
from tenant_api.events.publisher import build_event_publisher
from tenant_api.api.v1 import router as v1_router
from tenant_api.models import tenant  # noqa: F401  (registers the model with Base)


setup_logging(settings.DEBUG)
logger = get_logger(__name__)

REQUIRED_TENANT_COLUMNS = (
    "id", "name", "description", "parent_tenant_id", "created_at", "updated_at", "deleted_at",
)


def _check_schema(sync_conn) -> list:
    """Return the tenant columns missing from the database (all of them if no table)."""
    inspector = inspect(sync_conn)
    if "tenants" not in inspector.get_table_names():
        return list(REQUIRED_TENANT_COLUMNS)
    columns = {c["name"] for c in inspector.get_columns("tenants")}
    return [c for c in REQUIRED_TENANT_COLUMNS if c not in columns]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting {settings.APP_NAME}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    app.state.event_publisher = build_event_publisher(settings)
    logger.info(f"Event publisher: {type(app.state.event_publisher).__name__}")

    try:
        async with engine.connect() as conn:
            missing = await conn.run_sync(_check_schema)
        if missing:
            logger.error(f"DANGER: tenants schema is missing columns {missing}. Run `alembic upgrade head`.")
        else:
            logger.info("Database schema check passed.")
    except Exception as e:
        # Keep serving; requests will surface persistence errors on their own.
        logger.error(f"Database schema check failed: {e}")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")
    await app.state.event_publisher.close()
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Hierarchical tenant management API",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

REQUEST_ID_HEADER = "X-Request-ID"


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Tag every log line of a request with its id and echo the id back."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


app.include_router(v1_router, prefix="/api")


@app.exception_handler(TenantAPIError)
async def tenant_api_exception_handler(request: Request, exc: TenantAPIError):
    if isinstance(exc, PersistenceError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render request validation failures as 400 validation errors."""
    logger.info(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": "request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.APP_NAME}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/api/docs",
    }
