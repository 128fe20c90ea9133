# app/database.py
import asyncio
import uuid
from typing import Any, Callable, Dict, Iterable, List, Optional

from fastapi import Request

from .models import Product

# This file holds the in-memory product store and the lock guarding it.

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "in_stock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "in_stock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "in_stock": False,
    },
]


def _new_id() -> str:
    return uuid.uuid4().hex


class ProductStore:
    """Ordered, process-lifetime product collection.

    Reads hand out copies; insert/update/delete run under a single lock so
    read-modify-write sequences never interleave.  Every id ever issued or
    seeded is remembered, so a deleted product's id is never handed out again.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None,
                 id_factory: Callable[[], str] = _new_id):
        self._products: List[Product] = [p.model_copy() for p in (products or [])]
        # grows forever: ids of deleted products must stay reserved
        self._issued = {p.id for p in self._products}
        self._id_factory = id_factory
        self._lock = asyncio.Lock()

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls(Product(**p) for p in SEED_PRODUCTS)

    def next_id(self) -> str:
        pid = self._id_factory()
        while pid in self._issued:
            pid = self._id_factory()
        self._issued.add(pid)
        return pid

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    async def list(self) -> List[Product]:
        return [p.model_copy() for p in self._products]

    async def get(self, product_id: str) -> Optional[Product]:
        i = self._index_of(product_id)
        if i == -1:
            return None
        return self._products[i].model_copy()

    async def insert(self, fields: Dict[str, Any]) -> Product:
        async with self._lock:
            product = Product(id=self.next_id(), **fields)
            self._products.append(product)
            return product.model_copy()

    async def update(self, product_id: str, changes: Dict[str, Any]) -> Optional[Product]:
        async with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return None
            changes = {k: v for k, v in changes.items() if k != "id"}
            merged = self._products[i].model_copy(update=changes)
            self._products[i] = merged
            return merged.model_copy()

    async def delete(self, product_id: str) -> Optional[Product]:
        async with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return None
            return self._products.pop(i)

    def __len__(self) -> int:
        return len(self._products)


def get_store(request: Request) -> ProductStore:
    return request.app.state.store
