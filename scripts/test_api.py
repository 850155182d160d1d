#!/usr/bin/env python3
"""Smoke test for the Word Lookup API endpoints.

Run the server first:
  cd src && python main.py

Then run this test:
  python scripts/test_api.py
"""

import json
import sys

try:
    import httpx
except ImportError:
    print("Please install httpx: pip install httpx")
    sys.exit(1)

BASE_URL = "http://localhost:8000"


def test_endpoint(name: str, method: str, path: str, data: dict | None = None):
    """Call an API endpoint and print results."""
    print(f"\n{'='*60}")
    print(f"TEST: {name}")
    print(f"{'='*60}")

    url = f"{BASE_URL}{path}"
    print(f"{method} {path}")
    if data:
        print(f"Request: {json.dumps(data, ensure_ascii=False)}")

    try:
        with httpx.Client(timeout=30) as client:
            if method == "GET":
                response = client.get(url)
            else:
                response = client.post(url, json=data)

        print(f"\nStatus: {response.status_code}")

        result = response.json()
        print(f"Response:\n{json.dumps(result, ensure_ascii=False, indent=2)}")

        return response.status_code == 200
    except httpx.ConnectError:
        print("❌ Could not connect to server. Is it running?")
        return False
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return False


def main():
    print("="*60)
    print("WORD LOOKUP API SMOKE TEST")
    print("="*60)

    # Health check
    if not test_endpoint("Health Check", "GET", "/health"):
        print("\n⚠️  Server not running. Start with: cd src && python main.py")
        return

    test_endpoint(
        "Deinflect - Complex Verb",
        "POST", "/deinflect",
        {"word": "食べさせられなかった"}
    )

    test_endpoint(
        "Lookup - Chained Conjugation",
        "POST", "/lookup",
        {"word": "読んでいた"}
    )

    # Homograph: 日 read as にち rather than ひ
    test_endpoint(
        "Lookup - Reading Hint",
        "POST", "/lookup",
        {"word": "日", "reading_hint": "ニチ"}
    )

    test_endpoint(
        "Lookup Best - Adjective",
        "POST", "/lookup_best",
        {"word": "高くなかった"}
    )

    test_endpoint(
        "Longest Match - Compound",
        "POST", "/lookup_substrings",
        {"text": "日本語を勉強しています。", "start_index": 0}
    )

    test_endpoint(
        "Click Position - Sudachi",
        "POST", "/lookup_at",
        {"text": "昨日は本を読んでいた。", "offset": 6}
    )

    print("\n" + "="*60)
    print("SMOKE TEST COMPLETE")
    print("="*60)


if __name__ == "__main__":
    main()
