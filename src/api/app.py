from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from src.app.services import errors
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


def error_body(code: str, message: str) -> dict:
    return {"success": False, "error": {"code": code, "message": message}}


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} on {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.base_error.code, exc.base_error.message),
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(exc.base_error.code, "Internal server error"),
    )


async def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.error(f"Store unavailable on {request.url.path}: {type(exc).__name__}")
    error = errors.service_unavailable()
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_body(error.code, error.message),
    )


def create_app(ApplicationConfig, token_sweeper=None, init_db=None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_db is not None:
            await init_db()
        if token_sweeper is not None:
            await token_sweeper.start()
        yield
        if token_sweeper is not None:
            await token_sweeper.stop()

    app = FastAPI(title="Park Portal Auth", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, health_check, password, register, two_factor

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(register.router, tags=["Registration"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(two_factor.router, tags=["Two-Factor"])
    app.include_router(password.router, tags=["Password"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)

    return app
