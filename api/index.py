"""
EventHub - Client Application

FastAPI entry point. One process is one client: it restores the Supabase
session at startup and serves the cart, checkout, catalog, vendor and admin
endpoints to the local frontend.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from eventhub.config import get_settings
from eventhub.errors import EventHubError
from eventhub.logging import configure_logging, get_logger
from eventhub.routers.deps import reset_dependencies
from eventhub.routers.errors import eventhub_error_handler, request_validation_error_handler
from eventhub.routers.webapp import router as webapp_router
from eventhub.services.database import init_database, set_database

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    configure_logging(get_settings().log_level)
    db = await init_database()
    logger.info(f"Session restored: {'signed in' if db.session.actor_id else 'anonymous'}")
    yield
    # Shutdown
    reset_dependencies()
    set_database(None)


app = FastAPI(
    title="EventHub",
    description="Event ticketing marketplace client",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(EventHubError, eventhub_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

app.include_router(webapp_router)


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "eventhub"}
