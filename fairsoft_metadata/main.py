"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fairsoft_metadata.api import extractor, health, updater
from fairsoft_metadata.config import settings
from fairsoft_metadata.core.logging import setup_logging
from fairsoft_metadata.core.tracing import TracingContext
from fairsoft_metadata.middleware.error_codes import get_error_code
from fairsoft_metadata.services.pipeline_exceptions import PipelineError

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Extract FAIRsoft metadata from GitHub repositories and propose metadata files as pull requests",
    version=settings.APP_VERSION,
    docs_url="/api-docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def tracing_middleware(request: Request, call_next):
    correlation_id = request.headers.get("X-Request-ID") or TracingContext.generate_correlation_id()
    TracingContext.set(correlation_id=correlation_id)
    try:
        response = await call_next(request)
    finally:
        TracingContext.clear()
    response.headers["X-Request-ID"] = correlation_id
    return response


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "data": None,
            "status": exc.status_code,
            "code": get_error_code(exc.status_code).value,
            "kind": exc.kind,
            "message": exc.message,
        },
    )


app.include_router(health.router, tags=["Health"])
app.include_router(extractor.router, tags=["Metadata Extractor for FAIRsoft"])
app.include_router(updater.router, tags=["Metadata Updater for FAIRsoft"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/api-docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("fairsoft_metadata.main:app", host="0.0.0.0", port=8080)
