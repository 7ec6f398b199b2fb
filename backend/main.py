import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1 import plants, revisions
from app.core.config import settings
from app.core.exceptions import ValidationError, register_exception_handlers
from app.core.log_config import setup_logging
from app.db.database import check_db_connection, get_db

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Treelof Wiki API",
    description="Plant wiki pages and their revision history",
    version="0.1.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same fixed 400 as missing identifying fields."""
    logger.info(f"{request.method} {request.url.path} -> 400: {exc.errors()}")
    return JSONResponse(status_code=400, content=ValidationError().to_body())


app.include_router(revisions.router)
app.include_router(plants.router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "status": "ok",
        "message": "Treelof Wiki API",
        "version": "0.1.0"
    }


@app.get("/health")
async def health(session: AsyncSession = Depends(get_db)):
    """Health check endpoint"""
    db_ok = await check_db_connection(session)
    return {"status": "healthy", "database": "ok" if db_ok else "unavailable"}
