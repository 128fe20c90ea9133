#!/usr/bin/env python
import os

import requests

from sdk.productapi import ProductClient


def main():
    c = ProductClient(
        base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "your-secret-api-key-123"),
    )

    # -----------------------------
    # Browse the seeded catalogue
    # -----------------------------
    print("Listing products...")
    print(c.list_products())

    print("\nElectronics only, 1 per page, page 2...")
    print(c.list_products(category="Electronics", page=2, limit=1))

    print("\nSearching for 'coffee'...")
    print(c.search_products("coffee"))

    print("\nStatistics...")
    print(c.get_stats())

    # -----------------------------
    # Create, update, delete
    # -----------------------------
    print("\nCreating a product...")
    kettle = c.create_product("Kettle", "1.7L electric kettle", 35.5, "kitchen")
    print(kettle)

    print("\nMarking it out of stock...")
    print(c.update_product(kettle["id"], in_stock=False, price=32))

    print("\nDeleting it...")
    print(c.delete_product(kettle["id"]))

    # -----------------------------
    # Error envelope
    # -----------------------------
    print("\nDeleting it again...")
    try:
        c.delete_product(kettle["id"])
    except requests.HTTPError as e:
        print(e.response.status_code, e.response.json())

    print("\nCreating without an API key...")
    anonymous = ProductClient(base_url=c.base_url)
    try:
        anonymous.create_product("Toaster", "Two slots", 20, "kitchen")
    except requests.HTTPError as e:
        print(e.response.status_code, e.response.json())


if __name__ == "__main__":
    main()
