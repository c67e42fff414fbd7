"""
Smart ToDo API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from api.routes import router as tasks_router
from auth.routes import router as auth_router
from config.settings import config
from database.models import init_models
from database.session import engine

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

ENDPOINTS = {
    "auth": {
        "POST /api/auth/register": "Register a new user",
        "POST /api/auth/login": "Login and get a bearer token",
    },
    "tasks": {
        "POST /api/tasks": "Create a new task (requires authentication)",
        "GET /api/tasks": "Get all tasks for the authenticated user (requires authentication)",
        "PUT /api/tasks/{id}": "Update a task (requires authentication)",
        "DELETE /api/tasks/{id}": "Delete a task (requires authentication)",
    },
}


def create_app() -> FastAPI:
    app = FastAPI(
        title="Smart ToDo API",
        version="1.0.0",
        description="Per-user todo lists behind bearer-token authentication.",
        docs_url="/api-docs/swagger",
        redoc_url=None,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(tasks_router, prefix="/api/tasks")

    @app.get("/health", tags=["meta"])
    async def health_check():
        return {
            "status": "OK",
            "message": "Smart ToDo API is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/api-docs", tags=["meta"])
    async def api_docs():
        return {
            "message": "API Documentation",
            "endpoints": ENDPOINTS,
            "swagger": "Visit /api-docs/swagger for interactive documentation",
        }

    @app.on_event("startup")
    async def on_startup():
        logger.info("Creating database tables…")
        await init_models(engine)
        logger.info("Application ready to accept requests.")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
