from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel
from .error import STORE_FAILURE, ClientError, ServerError
from .pages import PAGE_TITLES, PageResponse, strip_passwords
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error on {request.url.path}: {exc.base_error.code}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(
        f"Server error on {request.url.path}: {exc.base_error.code} ({exc.base_error.message})"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def handle_store_error(request: Request, exc: SQLAlchemyError):
    # Unexpected store failures propagate out of use cases; log with traceback
    logger.exception(f"Store failure on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ServerError(STORE_FAILURE).to_body(),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Re-render the submitting page with the first error and the user's input"""
    errors = exc.errors()
    path = request.url.path

    validation_errors = {}
    for error in errors:
        loc = error.get("loc") or ()
        if len(loc) > 1:
            field = str(loc[-1])
            validation_errors[field] = field

    page = PageResponse(
        path=path,
        page_title=PAGE_TITLES.get(path, ""),
        error_message=errors[0]["msg"] if errors else None,
        validation_errors=validation_errors,
        old_input=strip_passwords(exc.body),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder(page),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    from authflow.depends import engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Authflow", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from authflow.api.routes import auth, health_check, home

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(home.router, tags=["Home"])
    app.include_router(auth.router, tags=["Authentication"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
