import logging
from contextlib import asynccontextmanager

import pydantic
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.config import settings
from app.database import async_session, init_db
from app.errors import AppError
from app.middleware.cors import CORS_HEADERS, FixedCorsMiddleware
from app.middleware.logging import StructuredLoggingMiddleware
from app.routers import categories, events, games, players, status, teams, templates
from app.services.text_generator import seed_template_variables
from app.store import SqlStore, get_memory_store

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    if settings.uses_memory_store:
        await seed_template_variables(get_memory_store())
    else:
        async with async_session() as session:
            await seed_template_variables(SqlStore(session))
            await session.commit()
    logger.info("Game Day API started (%s)", settings.environment)
    yield
    logger.info("Game Day API shut down")


app = FastAPI(
    title="AIHL Game Day API",
    version=settings.api_version,
    description="Game state, events and broadcast text for ice hockey game day",
    lifespan=lifespan,
)

# Last added is outermost
app.add_middleware(StructuredLoggingMiddleware)
app.add_middleware(FixedCorsMiddleware)

app.include_router(games.router)
app.include_router(events.router)
app.include_router(templates.router)
app.include_router(categories.router)
app.include_router(categories.variables_router)
app.include_router(teams.router)
app.include_router(players.router)
app.include_router(status.router)


def _error_response(status_code: int, message: str, error_type: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "errorType": error_type},
        headers=headers,
    )


def _describe(errors: list[dict]) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error_response(400, _describe(exc.errors()), "ValidationError")


@app.exception_handler(pydantic.ValidationError)
async def body_validation_handler(request: Request, exc: pydantic.ValidationError):
    return _error_response(400, _describe(exc.errors()), "ValidationError")


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    error_type = "UnauthorizedError" if exc.status_code == 401 else "HTTPError"
    return _error_response(exc.status_code, str(exc.detail), error_type, exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500, "Internal server error", "InternalError", CORS_HEADERS)
