"""Product Service — FastAPI application for managing products."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import Body, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from common.models import HealthResponse
from product_service.config import Settings, get_settings
from product_service.errors import register_error_handlers
from product_service.handlers import HandlerResponse, ProductHandlers
from product_service.logging import configure_logging
from product_service.store import InMemoryProductStore, ProductGateway

logger = logging.getLogger(__name__)


def get_handlers(request: Request) -> ProductHandlers:
    return request.app.state.handlers


def _respond(response: HandlerResponse) -> JSONResponse:
    return JSONResponse(status_code=response.status_code, content=response.body)


def create_app(
    settings: Settings | None = None, gateway: ProductGateway | None = None
) -> FastAPI:
    if settings is None:
        settings = get_settings()
    if gateway is None:
        gateway = InMemoryProductStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level, service=settings.service_name)
        logger.info(
            "Starting %s %s (%s)",
            settings.service_name,
            settings.version,
            settings.environment,
        )
        yield
        logger.info("Stopping %s", settings.service_name)

    app = FastAPI(
        title="Product Service", version=settings.version, lifespan=lifespan
    )
    app.state.settings = settings
    app.state.handlers = ProductHandlers(gateway, dev_mode=settings.dev_mode)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app, dev_mode=settings.dev_mode)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", service=settings.service_name)

    @app.get("/api/products")
    async def list_products(handlers: ProductHandlers = Depends(get_handlers)):
        return _respond(await handlers.list())

    @app.post("/api/products")
    async def create_product(
        payload: Any = Body(None),
        handlers: ProductHandlers = Depends(get_handlers),
    ):
        return _respond(await handlers.create(payload))

    @app.get("/api/products/{product_id}")
    async def get_product(
        product_id: str, handlers: ProductHandlers = Depends(get_handlers)
    ):
        return _respond(await handlers.get(product_id))

    @app.put("/api/products/{product_id}")
    async def update_product(
        product_id: str,
        payload: Any = Body(None),
        handlers: ProductHandlers = Depends(get_handlers),
    ):
        return _respond(await handlers.update(product_id, payload))

    @app.delete("/api/products/{product_id}")
    async def delete_product(
        product_id: str, handlers: ProductHandlers = Depends(get_handlers)
    ):
        return _respond(await handlers.delete(product_id))

    # Mounted last so API routes take precedence.
    if Path(settings.static_dir).is_dir():
        static = StaticFiles(directory=settings.static_dir, html=True)
        app.mount("/", static, name="static")

    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
