"""FastAPI main application."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from devtoolbox import __version__
from devtoolbox.api.routers import convert, settings as settings_router, workspace
from devtoolbox.bootstrap import bootstrap
from devtoolbox.config import settings

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings.setup_logging()
    if getattr(app.state, "context", None) is None:
        app.state.context = bootstrap()
    logger.info(
        "devtoolbox_startup",
        host=settings.api_host,
        port=settings.api_port,
        root=str(app.state.context.store.root),
    )
    yield
    logger.info("devtoolbox_shutdown")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Flatten pydantic errors into field/type/msg triples."""
    logger.debug("request_rejected", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Request validation failed",
            "path": request.url.path,
            "errors": [
                {
                    "field": " -> ".join(str(part) for part in err.get("loc", [])),
                    "type": err.get("type", "unknown"),
                    "msg": err.get("msg", "validation error"),
                }
                for err in exc.errors()
            ],
        },
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="DevToolbox",
        description="Sandboxed document workspace and text conversion tools",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(workspace.router, prefix="/api/v1")
    app.include_router(convert.router, prefix="/api/v1")
    app.include_router(settings_router.router, prefix="/api/v1")

    @app.get("/health")
    async def health(request: Request):
        """Health check endpoint."""
        context = getattr(request.app.state, "context", None)
        return {"status": "ok", "root": str(context.store.root) if context else None}

    return app


app = create_app()
