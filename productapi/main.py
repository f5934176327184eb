# productapi/main.py
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import Settings, settings as default_settings
from .core import InvalidPayload, ProductApiError
from .database import DocumentStore, build_store
from .facade import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_products_logic,
    update_product_logic,
)
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


# ---------------------------
# Request helpers
# ---------------------------
def _parse_form(raw: bytes) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in parse_qsl(raw.decode("utf-8"), keep_blank_values=True):
        if key not in out:
            out[key] = value
        elif isinstance(out[key], list):
            out[key].append(value)
        else:
            out[key] = [out[key], value]
    return out


async def read_body(request: Request) -> Any:
    """Decode the request body; an empty body reads as ``{}``."""
    raw = await request.body()
    if not raw.strip():
        return {}
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    try:
        if content_type == FORM_CONTENT_TYPE:
            return _parse_form(raw)
        return json.loads(raw)
    except ValueError as e:
        raise InvalidPayload(str(e)) from e


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_collection(request: Request) -> str:
    return request.app.state.settings.products_collection


# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(tags=["products"])


@router.post("/products", response_class=PlainTextResponse)
async def create_product(
    request: Request,
    store: DocumentStore = Depends(get_store),
    collection: str = Depends(get_collection),
):
    data = await read_body(request)
    return await create_product_logic(store, data, collection)


@router.get("/products")
async def list_products(
    store: DocumentStore = Depends(get_store),
    collection: str = Depends(get_collection),
) -> List[Dict[str, Any]]:
    return await list_products_logic(store, collection)


@router.get("/products/{product_id}")
async def get_product(
    product_id: str,
    store: DocumentStore = Depends(get_store),
    collection: str = Depends(get_collection),
) -> Dict[str, Any]:
    return await get_product_logic(store, product_id, collection)


@router.api_route(
    "/products/{product_id}", methods=["PATCH", "PUT"], response_class=PlainTextResponse
)
async def update_product(
    product_id: str,
    request: Request,
    store: DocumentStore = Depends(get_store),
    collection: str = Depends(get_collection),
):
    data = await read_body(request)
    return await update_product_logic(store, product_id, data, collection)


@router.delete("/products/{product_id}", response_class=PlainTextResponse)
async def delete_product(
    product_id: str,
    store: DocumentStore = Depends(get_store),
    collection: str = Depends(get_collection),
):
    return await delete_product_logic(store, product_id, collection)


async def product_api_error_handler(request: Request, exc: ProductApiError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


# ---------------------------
# Application
# ---------------------------
def create_app(
    settings: Optional[Settings] = None, store: Optional[DocumentStore] = None
) -> FastAPI:
    """Build the API.

    Pass ``store`` to use an existing document store; otherwise one is
    created from ``settings`` when the application starts and closed when
    it stops.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = app.state.store is None
        if owns_store:
            app.state.store = build_store(settings)
        logger.info("Server is live @ %s", settings.host_url)
        try:
            yield
        finally:
            if owns_store:
                await app.state.store.close()
                app.state.store = None

    app = FastAPI(title="product-api", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ProductApiError, product_api_error_handler)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()


def run():
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
