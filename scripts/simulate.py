"""
Concurrent Order Simulation Script

Fires many orders at a running server in parallel and checks that every
returned total equals the sum of its line subtotals.
Run from project root (after scripts/seed.py): python scripts/simulate.py
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from decimal import Decimal
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:8080"
TOTAL_ORDERS = 50

CUSTOMER_IDS = [1, 2]
RESTAURANT_ID = 10
PRODUCT_IDS = [100, 101, 102]
STREETS = ["Rua das Flores", "Avenida Paulista", "Rua Augusta", "Rua Oscar Freire"]


def generate_items() -> list[dict[str, int]]:
    """Random lines; the same product may appear more than once."""
    return [
        {"product_id": random.choice(PRODUCT_IDS), "quantity": random.randint(1, 3)}
        for _ in range(random.randint(1, 4))
    ]


def generate_payload() -> dict[str, Any]:
    """Generate payload for /api/orders endpoint."""
    return {
        "customer_id": random.choice(CUSTOMER_IDS),
        "restaurant_id": RESTAURANT_ID,
        "delivery_address": {
            "street": random.choice(STREETS),
            "number": str(random.randint(1, 999)),
            "neighborhood": "Centro",
            "city": "São Paulo",
            "state": "SP",
            "postal_code": "01001-000",
        },
        "items": generate_items(),
    }


def total_matches(order: dict[str, Any]) -> bool:
    expected = sum(
        (Decimal(str(i["unit_price"])) * i["quantity"] for i in order["items"]),
        Decimal("0"),
    )
    return Decimal(str(order["total"])) == expected


async def send_order(client: httpx.AsyncClient, order_num: int) -> dict[str, Any]:
    """Send one order and check its total."""
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/api/orders",
            json=generate_payload(),
            timeout=30.0
        )
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 201:
            data = response.json()
            return {
                "order_num": order_num,
                "success": True,
                "order_id": data["id"],
                "total": Decimal(str(data["total"])),
                "consistent": total_matches(data),
                "time": elapsed,
            }
        return {
            "order_num": order_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
        }
    except httpx.HTTPError as e:
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
        }


async def run_simulation(num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Run the simulation.

    Args:
        num_orders: Number of orders to fire concurrently
    """
    print("=" * 70)
    print("CONCURRENT ORDER SIMULATION")
    print("=" * 70)
    print(f"Total Orders: {num_orders}")
    print(f"Target: {API_BASE_URL}")
    print(f"Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()
    async with httpx.AsyncClient() as client:
        health = await client.get(f"{API_BASE_URL}/health")
        if health.status_code != 200 or health.json().get("status") != "UP":
            print(f"Health check failed: {health.text}")
            sys.exit(1)

        tasks = [send_order(client, i + 1) for i in range(num_orders)]
        results = await asyncio.gather(*tasks)

    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]
    inconsistent = [r for r in successful if not r["consistent"]]

    print(f"\nSuccessful Orders: {len(successful)}/{num_orders}")
    print(f"Failed Orders: {len(failed)}/{num_orders}")
    print(f"Inconsistent Totals: {len(inconsistent)}")
    print(f"Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        revenue = sum((r["total"] for r in successful), Decimal("0"))
        print(f"Average Response: {avg_time}s")
        print(f"Total Revenue: R$ {revenue}")

    if failed:
        print("\nFailed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "inconsistent": len(inconsistent),
        "total_time": total_time,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent Order Simulation")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--url", default=API_BASE_URL, help="API base URL")
    args = parser.parse_args()

    API_BASE_URL = args.url
    summary = asyncio.run(run_simulation(args.orders))
    sys.exit(1 if summary["inconsistent"] else 0)
