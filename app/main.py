"""
Main FastAPI application
"""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.config.database import db_config
from app.config.settings import settings
from app.database.db_operations import db_ops
from app.services.form_store import FormStore, FormStoreError
from app.services.sessions import SessionRegistry
from app.services.webhook_client import WebhookDispatcher

from app.routes import admin, portal

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def init_state(app: FastAPI, store: FormStore, dispatcher: WebhookDispatcher) -> None:
    """Attach the application-owned store, sessions and webhook client"""
    app.state.store = store
    app.state.sessions = SessionRegistry(store)
    app.state.dispatcher = dispatcher


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events"""
    # Startup
    await db_config.connect_db()
    init_state(app, FormStore(db_ops), WebhookDispatcher())
    try:
        await app.state.store.load()
    except FormStoreError as e:
        # Retried on the first request that needs the forms
        logger.error("❌ Initial form load failed: %s", e)
    logger.info("🚀 %s v%s started", settings.APP_NAME, settings.VERSION)
    yield
    # Shutdown
    await db_config.close_db()
    logger.info("👋 Application shutdown")

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[settings.SESSION_HEADER],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.info("🌐 %s %s - %s (%.2fs)", request.method, request.url.path, response.status_code, duration)
    return response

# Include routers
app.include_router(portal.router, prefix="/api")
app.include_router(admin.router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "running"
    }

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}
