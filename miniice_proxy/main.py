import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from miniice_proxy.core import config
from miniice_proxy.api.routers.health import router as health_router
from miniice_proxy.api.routers.chat import router as chat_router
from miniice_proxy.services.limiter import ProcessLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("mini-ice API server running on http://%s:%s", config.HOST, config.PORT)
    logger.info("model: %s (script: %s, timeout: %gs)", config.MINI_ICE_MODEL, config.MINI_ICE_SCRIPT, config.MINI_ICE_TIMEOUT_SECONDS)
    logger.info("health check: /health, api endpoint: /api/mini-ice")
    yield
    logger.info("shutting down mini-ice API server")


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    locs = [tuple(err.get("loc", ())) for err in errors]
    if any(loc[:2] == ("body", "message") or loc == ("body",) for loc in locs):
        error = "Message is required and must be a string"
    else:
        error = "Invalid request body"
    logger.info("rejected %s %s: %s", request.method, request.url.path, error)
    # the offending input is not echoed back
    details = [{k: v for k, v in err.items() if k != "input"} for err in errors]
    return JSONResponse(status_code=400, content={"error": error, "details": jsonable_encoder(details)})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": f"{type(exc).__name__}: {exc}"},
    )


async def options_ok(path: str) -> Response:
    # bare OPTIONS; real preflights are answered by CORSMiddleware before routing
    return Response(status_code=200)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="mini-ice API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # one limiter per app; routers reach it through Depends(get_limiter)
    app.state.limiter = ProcessLimiter(
        max_concurrent=config.MAX_CONCURRENT_PROCESSES,
        queue_timeout=config.QUEUE_TIMEOUT_SECONDS,
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Routers
    app.include_router(health_router)
    app.include_router(chat_router)
    app.add_api_route("/{path:path}", options_ok, methods=["OPTIONS"], include_in_schema=False)

    return app


app = create_app()
