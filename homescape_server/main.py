"""
HomeScape API: listings, identities, bookings and payment intents.
Default port 5000; configure with PORT.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from homescape_server.bookings import router as bookings_router
from homescape_server.config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT
from homescape_server.database import SessionLocal, init_db
from homescape_server.homes import router as homes_router
from homescape_server.payments import router as payments_router
from homescape_server.seed import seed_from_env
from homescape_server.users import router as users_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed the admin on startup. A store failure is logged; the app still starts."""
    try:
        init_db()
        db = SessionLocal()
        try:
            seed_from_env(db)
        finally:
            db.close()
        logger.info("Database connected")
    except SQLAlchemyError as e:
        logger.error("Database initialisation failed: %s", e)
    yield


app = FastAPI(title="HomeScape API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(users_router, tags=["users"])
app.include_router(payments_router, tags=["payments"])
app.include_router(bookings_router, tags=["bookings"])
app.include_router(homes_router, tags=["homes"])


@app.exception_handler(OperationalError)
async def store_unavailable_handler(request: Request, exc: OperationalError):
    logger.error("Store unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Store unavailable"})


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Store error"})


@app.get("/", response_class=PlainTextResponse)
def root():
    """Liveness check; works even when the store is down."""
    return "Server is running..."


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "homescape_server"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "homescape_server.main:app",
        host=HOST,
        port=PORT,
    )
