# app/handlers.py
import math
import re
from collections import Counter
from typing import Optional

from .database import ProductStore
from .errors import NotFoundError, ValidationError
from .models import (
    DeletedProduct, Pagination, Product, ProductIn, ProductPage,
    ProductStats, ProductUpdate, SearchResult,
)

# This file contains the core logic for the product endpoints.

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _positive_int(raw: Optional[str], default: int) -> int:
    # leading digits count ("2abc" -> 2, "1.5" -> 1); no digits, zero and
    # negative values fall back to the default
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if value >= 1 else default


def _round_half_up(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def _matches(product: Product, term: str) -> bool:
    term = term.lower()
    return term in product.name.lower() or term in product.description.lower()


async def list_products_logic(
    store: ProductStore,
    search: Optional[str] = None,
    category: Optional[str] = None,
    in_stock: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> ProductPage:
    products = await store.list()

    if search:
        products = [p for p in products if _matches(p, search)]
    if category:
        wanted = category.lower()
        products = [p for p in products if p.category.lower() == wanted]
    if in_stock is not None:
        flag = in_stock == "true"
        products = [p for p in products if p.in_stock == flag]

    page_no = _positive_int(page, DEFAULT_PAGE)
    per_page = _positive_int(limit, DEFAULT_LIMIT)
    start = (page_no - 1) * per_page
    end = start + per_page
    total = len(products)

    return ProductPage(
        products=products[start:end],
        pagination=Pagination(
            current_page=page_no,
            total_pages=math.ceil(total / per_page),
            total_products=total,
            has_next=end < total,
            has_prev=page_no > 1,
        ),
    )


async def search_products_logic(store: ProductStore, q: Optional[str]) -> SearchResult:
    if not q:
        raise ValidationError('Search query parameter "q" is required')
    results = [p for p in await store.list() if _matches(p, q)]
    return SearchResult(query=q, results=results, count=len(results))


async def product_stats_logic(store: ProductStore) -> ProductStats:
    products = await store.list()
    in_stock = sum(1 for p in products if p.in_stock)
    average = 0
    if products:
        average = _round_half_up(sum(p.price for p in products) / len(products))
    return ProductStats(
        total_products=len(products),
        in_stock_count=in_stock,
        out_of_stock_count=len(products) - in_stock,
        categories=dict(Counter(p.category for p in products)),
        average_price=average,
    )


async def get_product_logic(store: ProductStore, product_id: str) -> Product:
    product = await store.get(product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


async def create_product_logic(store: ProductStore, payload: ProductIn) -> Product:
    return await store.insert(payload.model_dump())


async def update_product_logic(store: ProductStore, product_id: str, payload: ProductUpdate) -> Product:
    product = await store.update(product_id, payload.model_dump(exclude_unset=True))
    if product is None:
        raise NotFoundError("Product not found")
    return product


async def delete_product_logic(store: ProductStore, product_id: str) -> DeletedProduct:
    product = await store.delete(product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return DeletedProduct(message="Product deleted successfully", product=product)
