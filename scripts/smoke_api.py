#!/usr/bin/env python3
"""Post a sample comparison to a running setwise API."""

import argparse
import json
import sys

import requests

SAMPLE_REQUEST = {
    "lines_a": "host1.example.com\nhost2.example.com\n",
    "lines_b": "host2\nhost3\n",
    "label_a": "inventory",
    "label_b": "dns",
    "operation": "difference",
    "ignore_fqdn": True,
}


def main():
    """Send the sample request and print a summary."""
    parser = argparse.ArgumentParser(description="Smoke test a running setwise API")
    parser.add_argument("--url", default="http://127.0.0.1:8000", help="API base URL")
    args = parser.parse_args()

    try:
        response = requests.post(f"{args.url}/compare", json=SAMPLE_REQUEST, timeout=30)
    except requests.exceptions.RequestException as e:
        print(f"Request failed: {e}")
        return 1

    print(f"Status Code: {response.status_code}")
    if response.status_code != 200:
        print(response.text[:500])
        return 1

    result = response.json()
    if not result.get("ok"):
        error = result.get("error", {})
        print(f"Error Code: {error.get('code')}")
        print(f"Error Message: {error.get('message')}")
        return 1

    data = result["data"]
    print(f"Counts: {data['counts']}")
    print(json.dumps(data["results"], indent=2))

    if data["results"].get("A-B") == ["host1"]:
        print("Result matches expectation")
        return 0
    print("Unexpected result")
    return 1


if __name__ == "__main__":
    sys.exit(main())
