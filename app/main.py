# app/main.py
import logging
from typing import Optional

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import Settings, get_settings
from .core import product_create_payload, product_update_payload
from .database import ProductStore, get_store
from .error_handlers import register_error_handlers
from .handlers import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, product_stats_logic, search_products_logic,
    update_product_logic,
)
from .logging_config import setup_logging
from .middleware import RequestLoggingMiddleware, async_wrapper, require_api_key
from .models import DeletedProduct, Product, ProductIn, ProductPage, ProductStats, ProductUpdate, SearchResult

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Welcome to the Product API! Go to /api/products to see all products."


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    if settings.uses_default_api_key:
        logger.warning("API_KEY is not set; using the insecure development default key")

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore.seeded()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # added last so it wraps everything else
    app.add_middleware(RequestLoggingMiddleware)

    register_routes(app)
    register_error_handlers(app)
    return app


def register_routes(app: FastAPI) -> None:
    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return WELCOME_TEXT

    # ---------------------------
    # Read endpoints
    # ---------------------------
    @app.get("/api/products", response_model=ProductPage)
    @async_wrapper
    async def list_products(
        search: Optional[str] = None,
        category: Optional[str] = None,
        in_stock: Optional[str] = Query(None, alias="inStock"),
        page: Optional[str] = None,
        limit: Optional[str] = None,
        store: ProductStore = Depends(get_store),
    ):
        return await list_products_logic(store, search, category, in_stock, page, limit)

    # /search and /stats must be registered before /{product_id}
    @app.get("/api/products/search", response_model=SearchResult)
    @async_wrapper
    async def search_products(q: Optional[str] = None, store: ProductStore = Depends(get_store)):
        return await search_products_logic(store, q)

    @app.get("/api/products/stats", response_model=ProductStats)
    @async_wrapper
    async def product_stats(store: ProductStore = Depends(get_store)):
        return await product_stats_logic(store)

    @app.get("/api/products/{product_id}", response_model=Product)
    @async_wrapper
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return await get_product_logic(store, product_id)

    # ---------------------------
    # Write endpoints (API key required)
    # ---------------------------
    @app.post("/api/products", status_code=201, response_model=Product,
              dependencies=[Depends(require_api_key)])
    @async_wrapper
    async def create_product(
        payload: ProductIn = Depends(product_create_payload),
        store: ProductStore = Depends(get_store),
    ):
        return await create_product_logic(store, payload)

    @app.put("/api/products/{product_id}", response_model=Product,
             dependencies=[Depends(require_api_key)])
    @async_wrapper
    async def update_product(
        product_id: str,
        payload: ProductUpdate = Depends(product_update_payload),
        store: ProductStore = Depends(get_store),
    ):
        return await update_product_logic(store, product_id, payload)

    @app.delete("/api/products/{product_id}", response_model=DeletedProduct,
                dependencies=[Depends(require_api_key)])
    @async_wrapper
    async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        return await delete_product_logic(store, product_id)


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
