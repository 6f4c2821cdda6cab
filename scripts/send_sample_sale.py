"""
Send a sample sale to a running Sales Processor.

Posts one toy or jewelry sale to the webhook endpoint and prints the response.
Useful after deployment to confirm that a row lands in the sheet and the
Telegram message arrives.

Usage:
    python scripts/send_sample_sale.py toy --item "Марк" --material "Золотой" --price 40
    python scripts/send_sample_sale.py jewelry --item "Серьги" --price 1500 --url http://localhost:8080
"""

import argparse
import json
import sys

import httpx

ENDPOINTS = {
    "toy": "/3d-toy-sale/",
    "jewelry": "/jewelry-sale/",
}


def build_payload(args: argparse.Namespace) -> dict:
    payload = {
        "item": args.item,
        "price": args.price,
        "paymentType": args.payment_type,
    }
    if args.time:
        payload["time"] = args.time
    if args.product_line == "toy":
        payload["material"] = args.material
    return payload


def main() -> int:
    parser = argparse.ArgumentParser(description="Send a sample sale to the Sales Processor")
    parser.add_argument("product_line", choices=sorted(ENDPOINTS), help="Product line endpoint to call")
    parser.add_argument("--url", default="http://localhost:8080", help="Base URL of the server")
    parser.add_argument("--item", default="Марк", help="Item sold")
    parser.add_argument("--material", default="Золотой", help="Print material (toy only)")
    parser.add_argument("--price", default="40", help="Sale price")
    parser.add_argument("--payment-type", default="Карта", help="Payment type")
    parser.add_argument("--time", default=None, help="Sale time (YYYY-MM-DD HH:MM:SS); server time if omitted")
    args = parser.parse_args()

    payload = build_payload(args)
    url = args.url.rstrip("/") + ENDPOINTS[args.product_line]

    print(f"POST {url}")
    print(json.dumps(payload, ensure_ascii=False, indent=2))

    try:
        response = httpx.post(url, json=payload, timeout=30.0)
    except httpx.HTTPError as e:
        print(f"[ERROR] Request failed: {e}")
        return 1

    print(f"[{response.status_code}] {response.text}")
    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
