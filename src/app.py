"""Campus Trucks FastAPI application.

Serves the JSON API under ``/api/v1`` and the server-rendered pages.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from identity.api import router as identity_router
from ordering.api import cart_router, order_router, pickup_router
from shared import clock
from shared.http import register_exception_handlers, request_context_middleware
from shared.utils.db import ping_db, setup_db
from shared.utils.logging import configure_logging, get_logger
from vendors.api import menu_router, truck_router
from web import router as web_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    setup_db()
    logger.info("application_started")
    yield
    logger.info("application_stopped")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Campus Trucks API",
    description="Campus food-truck ordering — accounts, menus, carts and orders",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_context_middleware)

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(identity_router)
app.include_router(truck_router)
app.include_router(menu_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(pickup_router)
app.include_router(web_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/api/v1/health")
async def health():
    timestamp = clock.now().isoformat()
    try:
        ping_db()
    except Exception as exc:
        logger.error("health_check_failed", error=str(exc))
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "error": "Database connection failed",
                "timestamp": timestamp,
            },
        )
    return JSONResponse(
        content={
            "status": "healthy",
            "timestamp": timestamp,
            "service": "campus-trucks",
        }
    )
