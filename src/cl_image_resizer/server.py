"""HTTP server - FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from .common.dispatcher import Dispatcher
from .common.errors import FailedToResize, NotFound, UnsupportedEncoding
from .common.schemas import EncodeConfig, ServerConfig
from .routes import create_router


async def handle_not_found(request: Request, exc: Exception) -> PlainTextResponse:
    source = exc.source if isinstance(exc, NotFound) else None
    logger.error(f"{request.method} {request.url.path}: {exc} (source={source!r})")
    return PlainTextResponse("not found", status_code=404)


async def handle_failed_to_resize(request: Request, exc: Exception) -> PlainTextResponse:
    message = exc.message if isinstance(exc, FailedToResize) else str(exc)
    logger.error(f"{request.method} {request.url.path}: {exc!r}")
    return PlainTextResponse(message, status_code=500)


async def handle_unsupported_encoding(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return PlainTextResponse(str(exc), status_code=400)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFound, handle_not_found)
    app.add_exception_handler(FailedToResize, handle_failed_to_resize)
    app.add_exception_handler(UnsupportedEncoding, handle_unsupported_encoding)


def create_app(server_config: ServerConfig, encode_config: EncodeConfig) -> FastAPI:
    """Build the resize service.

    The dispatcher's worker pool lives as long as the application and is
    shut down by the lifespan handler.

    Example:
        app = create_app(ServerConfig(images_dir=Path("images")), EncodeConfig())
        uvicorn.run(app, host="0.0.0.0", port=3000)
    """
    dispatcher = Dispatcher(
        encode_config,
        concurrency_limit=server_config.concurrency_limit,
        workers=server_config.worker_count,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            f"serving images from {server_config.images_dir} "
            + f"(concurrency={dispatcher.gate.limit}, workers={dispatcher.workers}, "
            + f"quality={encode_config.quality}, speed={encode_config.speed}, "
            + f"filter={encode_config.filter})"
        )
        try:
            yield
        finally:
            dispatcher.close()

    app = FastAPI(title="cl_image_resizer", lifespan=lifespan)
    app.state.dispatcher = dispatcher
    register_exception_handlers(app)
    app.include_router(create_router(dispatcher, server_config.images_dir))
    return app
