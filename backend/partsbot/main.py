"""
FastAPI main application.
Entry point for the PartSelect triage API.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from partsbot.core.config import get_settings
from partsbot.api import routes_triage
from partsbot.core.constants import ErrorCodes
from partsbot.core.logging import setup_logging
from partsbot.services.message_service import MessageValidationError
from partsbot.utils.keyword_loader import get_keyword_tables

logger = setup_logging()

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load keyword tables before the first request."""
    logger.info("Starting PartSelect triage API...")
    tables = get_keyword_tables()
    logger.info(f"Keyword tables v{tables.version} loaded.")
    yield
    logger.info("Shutting down PartSelect triage API...")


app = FastAPI(
    title="PartSelect Triage API",
    description="Rule-based scope and intent triage for the refrigerator and dishwasher parts chat agent",
    version=VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes_triage.router, prefix="/api", tags=["triage"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "message": "PartSelect triage API is running",
        "version": VERSION
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    tables = get_keyword_tables()
    return {
        "status": "healthy",
        "version": VERSION,
        "keyword_tables_version": tables.version
    }


@app.exception_handler(MessageValidationError)
async def message_validation_handler(request: Request, exc: MessageValidationError):
    logger.warning(f"Rejected message: {exc.code} ({exc})")
    return JSONResponse(
        status_code=400,
        content={"error": {"code": exc.code, "message": str(exc)}},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": {"code": ErrorCodes.INTERNAL_SERVER_ERROR, "message": str(exc)}},
    )


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "partsbot.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
