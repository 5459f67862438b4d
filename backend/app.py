"""FastAPI application entry point for the personal-site backend."""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from errors import register_error_handlers
from models import init_db

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Visitor database ready")
    logger.info("Static files from: %s", settings.static_dir)
    logger.info("GitHub user: %s", settings.github_user)
    logger.info("GitHub token: %s", "provided" if settings.github_token else "not provided")
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Personal Site API", version="1.0.0", lifespan=lifespan)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.visitors import router as visitors_router
    from routes.github import router as github_router
    from routes.quotes import router as quotes_router
    from routes.static import router as static_router

    app.include_router(health_router, prefix="/api")
    app.include_router(visitors_router, prefix="/api")
    app.include_router(github_router, prefix="/api")
    app.include_router(quotes_router, prefix="/api")
    # Catch-all, must stay last
    app.include_router(static_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
