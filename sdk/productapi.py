# sdk/productapi.py
import os
from typing import Any, Dict, Optional

import httpx
import requests

DEFAULT_BASE_URL = "http://localhost:3000"
API_PREFIX = "/api/products"


class ProductClient:
    """Thin client for the Product API.

    ``session`` may be any requests-style client (``requests.Session``,
    ``httpx.Client``, FastAPI's ``TestClient``); a ``requests.Session`` is
    created when omitted.  Non-2xx responses raise through
    ``raise_for_status()``.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, api_key: Optional[str] = None,
                 timeout: int = 10, session: Any = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}{API_PREFIX}{path}"

    # Read endpoints
    def list_products(self, search: Optional[str] = None, category: Optional[str] = None,
                      in_stock: Optional[bool] = None, page: Optional[int] = None,
                      limit: Optional[int] = None):
        params: Dict[str, Any] = {}
        if search:
            params["search"] = search
        if category:
            params["category"] = category
        if in_stock is not None:
            params["inStock"] = "true" if in_stock else "false"
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url(), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def search_products(self, q: str):
        r = self.session.get(self._url("/search"), params={"q": q}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_stats(self):
        r = self.session.get(self._url("/stats"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Write endpoints
    def create_product(self, name: str, description: str, price: float, category: str,
                       in_stock: Optional[bool] = None):
        payload: Dict[str, Any] = {
            "name": name, "description": description, "price": price, "category": category
        }
        if in_stock is not None:
            payload["inStock"] = in_stock
        r = self.session.post(self._url(), json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, **changes: Any):
        # python-style in_stock is accepted as well as the wire name
        if "in_stock" in changes:
            changes["inStock"] = changes.pop("in_stock")
        r = self.session.put(self._url(f"/{product_id}"), json=changes, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str):
        r = self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async create (example)
    async def create_product_async(self, name: str, description: str, price: float, category: str,
                                   in_stock: Optional[bool] = None,
                                   transport: Optional[httpx.AsyncBaseTransport] = None):
        payload: Dict[str, Any] = {
            "name": name, "description": description, "price": price, "category": category
        }
        if in_stock is not None:
            payload["inStock"] = in_stock
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(timeout=self.timeout, transport=transport) as client:
            r = await client.post(self._url(), json=payload, headers=headers)
            r.raise_for_status()
            return r.json()


def _parse_bool(raw: str) -> bool:
    return raw.lower() in ("1", "true", "yes", "y")


if __name__ == "__main__":
    import argparse
    from rich import print

    parser = argparse.ArgumentParser(description="Product API command line")
    parser.add_argument("--base-url", default=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--search", help="Substring of name or description")
    lp.add_argument("--category", help="Exact category (case insensitive)")
    lp.add_argument("--in-stock", type=_parse_bool, help="true/false")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    sp = subparsers.add_parser("search", help="Search products by name or description")
    sp.add_argument("q", help="Search term")

    subparsers.add_parser("stats", help="Catalogue statistics")

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("product_id")

    cp = subparsers.add_parser("create", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--in-stock", type=_parse_bool)

    up = subparsers.add_parser("update", help="Update fields of a product")
    up.add_argument("product_id")
    up.add_argument("--name")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--category")
    up.add_argument("--in-stock", type=_parse_bool)

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("product_id")

    args = parser.parse_args()
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list":
        print(c.list_products(args.search, args.category, args.in_stock, args.page, args.limit))
    elif args.command == "search":
        print(c.search_products(args.q))
    elif args.command == "stats":
        print(c.get_stats())
    elif args.command == "get":
        print(c.get_product(args.product_id))
    elif args.command == "create":
        print(c.create_product(args.name, args.description, args.price, args.category, args.in_stock))
    elif args.command == "update":
        fields = {
            "name": args.name, "description": args.description, "price": args.price,
            "category": args.category, "in_stock": args.in_stock,
        }
        print(c.update_product(args.product_id, **{k: v for k, v in fields.items() if v is not None}))
    elif args.command == "delete":
        print(c.delete_product(args.product_id))
