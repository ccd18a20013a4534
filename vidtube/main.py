import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vidtube import database
from vidtube.config import get_settings
from vidtube.exceptions import ApiError, BadRequestError, InternalError
from vidtube.logging_setup import setup_logging
from vidtube.responses import encode
from vidtube.routers.comments import router as comments_router
from vidtube.routers.healthcheck import router as healthcheck_router
from vidtube.routers.likes import router as likes_router
from vidtube.routers.playlists import router as playlists_router
from vidtube.routers.tweets import router as tweets_router
from vidtube.routers.videos import router as videos_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level)
    if settings.create_indexes:
        database.ensure_indexes()
    logger.info("vidtube started, database %s", settings.database_name)
    yield
    database.close_client()
    logger.info("vidtube stopped")


# --- FastAPI app ---

api = FastAPI(title="vidtube", version="0.1.0", lifespan=lifespan)
api.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
api.include_router(healthcheck_router)
api.include_router(tweets_router)
api.include_router(playlists_router)
api.include_router(likes_router)
api.include_router(comments_router)
api.include_router(videos_router)


# --- Exception handlers ---

def _error_response(exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=encode(exc.to_response()))


@api.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected with %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return _error_response(exc)


@api.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    return _error_response(BadRequestError("Invalid request", errors=errors))


@api.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(InternalError("Internal server error"))


def run():
    settings = get_settings()
    uvicorn.run(
        "vidtube.main:api",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
