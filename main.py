"""
main.py
-------
Entry point for the Bookshelf HTTP API.

Responsibilities:
    - Initialize the database connection pool and schema on startup.
    - Build the FastAPI application and register all routers.
    - Translate unrecovered store failures into generic 500 responses.
    - Serve the application with uvicorn.
"""

from contextlib import asynccontextmanager

import psycopg2
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import API_HOST, API_PORT
from db.connection import init_pool, close_pool
from db.init_db import create_tables
from handlers.book_handler import router as book_router
from repositories.book_repo import BookMappingError
from utils.logger import get_logger

logger = get_logger(__name__)


async def database_error_handler(request: Request, exc: psycopg2.Error) -> JSONResponse:
    """Any failure talking to PostgreSQL becomes a generic server error."""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Database error"})


async def mapping_error_handler(request: Request, exc: BookMappingError) -> JSONResponse:
    logger.error(f"Invalid book row on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Invalid book record"})


def create_app(init_db: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        init_db: If True, open the connection pool and create the schema
            on startup, and close the pool on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            if init_db:
                logger.info("Initializing database...")
                init_pool()
                create_tables()
            yield
        finally:
            if init_db:
                close_pool()
                logger.info("Bookshelf API stopped.")

    app = FastAPI(title="Bookshelf API", lifespan=lifespan)
    app.include_router(book_router)
    app.add_exception_handler(psycopg2.Error, database_error_handler)
    app.add_exception_handler(BookMappingError, mapping_error_handler)
    return app


app = create_app()


def main() -> None:
    """Run the API server."""
    logger.info(f"🚀 Bookshelf API listening on http://{API_HOST}:{API_PORT}")
    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
