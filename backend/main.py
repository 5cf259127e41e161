# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
FastAPI application factory.

Responsibilities
----------------
* Build every component once from a ``Settings`` value and hang it on
  ``app.state`` (engine, repositories, usecases, auth gate).
* Apply the logging configuration and register CORS and request-logging
  middleware.
* Render every error as ``{"message": ..., "code": ...}``.
* Mount the user and recipe routers.
* Expose a /health endpoint for container liveness checks.

Run with::

    uvicorn main:create_app --factory
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from core.config import Settings
from core.errors import AppError, BadRequest, InternalError
from core.logger import configure_logging, logger
from core.security import PasswordHasher, TokenService
from database import create_db_engine
from recipes.repository import SqlRecipeRepository
from recipes.router import router as recipe_router
from recipes.usecase import RecipeUsecase
from users.gate import AuthGate
from users.repository import SqlUserRepository
from users.router import router as user_router
from users.usecase import UserUsecase


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Logs every inbound request: method, path, client IP, status, latency.
# Bodies (passwords, tokens) are never echoed.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            client_ip,
            response.status_code,
            elapsed_ms,
        )
        return response


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------


def _error_body(error: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"message": error.message, "code": error.status_code},
    )


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_body(exc)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("%s %s | validation failed: %s", request.method, request.url.path, exc.errors())
    return _error_body(BadRequest())


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("%s %s | database error", request.method, request.url.path)
    return _error_body(InternalError())


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s | unhandled error", request.method, request.url.path, exc_info=exc)
    return _error_body(InternalError())


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """
    Wire the application.  *settings* defaults to the environment /
    etc/app.conf; *engine* defaults to a pooled engine for
    ``settings.database_url`` (tests pass their own).
    """
    settings = settings or Settings()
    engine = engine or create_db_engine(settings)
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("endeus service starting up")
        yield
        logger.info("endeus service shutting down")
        engine.dispose()
        logger.info("database connection pool closed")

    app = FastAPI(title="endeus", version="1.0.1", lifespan=lifespan)

    # -- components ------------------------------------------------------
    tokens = TokenService(settings)
    user_repository = SqlUserRepository(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.auth_gate = AuthGate(tokens, user_repository)
    app.state.user_usecase = UserUsecase(
        user_repository,
        PasswordHasher(rounds=settings.password_hash_rounds),
        tokens,
    )
    app.state.recipe_usecase = RecipeUsecase(SqlRecipeRepository(engine))

    # -- middleware ------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )
    app.add_middleware(_RequestLogMiddleware)

    # -- errors ----------------------------------------------------------
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)
    # anything else still leaves as {"message", "code"}
    app.add_exception_handler(Exception, _unhandled_error_handler)

    # -- routers ---------------------------------------------------------
    app.include_router(user_router)
    app.include_router(recipe_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
