"""FastAPI app entry point for the vehicle validation service."""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from vehicle_validation.api.deps import get_session
from vehicle_validation.api.routes import router
from vehicle_validation.config import get_settings
from vehicle_validation.core.logging import (
    log_request,
    log_response,
    logger,
    setup_logging,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup / shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Vehicle validation service starting")
    yield
    get_session().reset()


app = FastAPI(
    title="Smart Vehicle Data Validation API",
    description="Fuzzy validation and normalization of vehicle registration data",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    start = time.time()
    extra = {}
    if request.headers.get("content-length"):
        extra["bytes"] = request.headers["content-length"]
    log_request(request.method, request.url.path, **extra)
    response = await call_next(request)
    log_response(
        request.method,
        request.url.path,
        response.status_code,
        (time.time() - start) * 1000,
    )
    return response


# Routes
app.include_router(router, prefix="/api")


@app.get("/health")
async def health():
    return {"status": "ok", "service": "vehicle-validation"}
