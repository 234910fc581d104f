import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import careers, contact, health
from app.core.config import settings
from app.core.email import get_mail_client
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.core.middleware import LatencyMonitorMiddleware, RequestIdMiddleware
from app.services.mail_dispatcher import MailDispatcher
from app.services.upload_service import UploadHandler

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


tags_metadata = [
    {
        "name": "contact",
        "description": "**Contact** - Public contact form relayed to the team inbox.",
    },
    {
        "name": "careers",
        "description": "**Careers** - Job applications with a PDF/DOC/DOCX resume attached.",
    },
    {
        "name": "health",
        "description": "**Health** - Liveness and readiness checks.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("Starting %s v%s", settings.PROJECT_NAME, settings.VERSION)
    logger.info("Environment: %s", settings.ENVIRONMENT)

    uploads = UploadHandler(settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)
    uploads.ensure_directory()
    app.state.upload_handler = uploads
    logger.info("Holding directory ready: %s", uploads.directory)

    if not settings.mail_configured:
        logger.warning("EMAIL_USER/EMAIL_PASS not set; mail delivery will fail")
    app.state.mail_dispatcher = MailDispatcher(
        client=get_mail_client(),
        account=settings.EMAIL_USER,
        recipient=settings.mail_recipient,
        timeout=settings.MAIL_TIMEOUT_SECONDS,
    )

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
## FormRelay API

Relays website contact messages and job applications to the team inbox by email.
    """,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=settings.ALLOWED_METHODS,
    allow_headers=settings.ALLOWED_HEADERS,
    expose_headers=["X-Request-ID"],
)

# Latency Monitoring (SLO Check)
app.add_middleware(LatencyMonitorMiddleware)

# Request ID Tracing
app.add_middleware(RequestIdMiddleware)

register_exception_handlers(app)

app.include_router(contact.router, prefix=settings.API_PREFIX, tags=["contact"])
app.include_router(careers.router, prefix=settings.API_PREFIX, tags=["careers"])
app.include_router(
    health.router, prefix=f"{settings.API_PREFIX}/health", tags=["health"]
)


@app.get("/health", summary="Health check")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/", summary="API root")
async def root():
    """Root endpoint with API info"""
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": "/docs",
        "health": "/health",
    }


def run() -> None:
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
