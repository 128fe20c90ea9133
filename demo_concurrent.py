import asyncio
import os

import httpx

from sdk.productapi import ProductClient


async def create_one(client: ProductClient, n: int):
    try:
        product = await client.create_product_async(
            f"Widget {n}", f"Concurrently created widget #{n}", 10 + n, "widgets"
        )
        print(f"✅ created {product['name']} (id {product['id']})")
        return product
    except httpx.HTTPStatusError as e:
        print(f"❌ widget {n} failed with {e.response.status_code}: {e.response.text}")
        return None


async def main():
    c = ProductClient(
        base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "your-secret-api-key-123"),
    )
    before = c.get_stats()["totalProducts"]

    print("\n⚡ Creating 20 products concurrently...")
    created = await asyncio.gather(*(create_one(c, n) for n in range(20)))
    ids = [p["id"] for p in created if p]

    stats = c.get_stats()
    print(f"\n📦 {len(ids)} created, {len(set(ids))} distinct ids")
    print(f"📊 totalProducts went from {before} to {stats['totalProducts']}")
    print("🏷️ categories:", stats["categories"])

    # clean up
    for pid in ids:
        c.delete_product(pid)


if __name__ == "__main__":
    asyncio.run(main())
