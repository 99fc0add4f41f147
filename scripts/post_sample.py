#!/usr/bin/env python3
"""Post a captured gateway batch to a running exporter and print the scrape.

Handy for checking a deployment without a physical gateway.

Usage
-----
::

    ruuvigw --port 9000 &
    python scripts/post_sample.py --url http://127.0.0.1:9000

Options::

    --url URL        Exporter base URL (default: http://127.0.0.1:9000)
    --file FILE      Post this JSON document instead of the built-in sample
    --verbose, -v    Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

import aiohttp

_logger = logging.getLogger("post_sample")


def sample_payload() -> dict[str, Any]:
    now = int(time.time())
    return {
        "data": {
            "coordinates": "",
            "gw_mac": "FF:81:4E:A5:22:E7",
            "nonce": 3267643756,
            "timestamp": now,
            "tags": {
                "DD:19:92:CB:60:21": {
                    "data": "0201061BFF9904050FE0337CC4ABFC1400340024A5B6EBA544DD1992CB6021",
                    "rssi": -50,
                    "timestamp": now,
                },
                "CB:B8:33:4C:88:4F": {
                    "data": (
                        "2BFF9904E1170C5668C79E0065007004BD11CA00C90A0213E0ACFFFFFF"
                        "DECDEE10FFFFFFFFFFCBB8334C884F"
                    ),
                    "rssi": -65,
                    "timestamp": now,
                },
            },
        }
    }


async def run(url: str, payload: dict[str, Any]) -> int:
    base = url.rstrip("/")
    async with aiohttp.ClientSession() as session:
        async with session.post(f"{base}/", json=payload) as resp:
            body = await resp.text()
            _logger.debug("POST / -> %s %r", resp.status, body)
            if resp.status != 200:
                print(f"Ingestion rejected ({resp.status}): {body}", file=sys.stderr)
                return 1
        async with session.get(f"{base}/metrics") as resp:
            print(await resp.text(), end="")
            return 0 if resp.status == 200 else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Post a sample gateway batch and print /metrics")
    parser.add_argument("--url", default="http://127.0.0.1:9000", help="Exporter base URL")
    parser.add_argument("--file", help="JSON document to post instead of the built-in sample")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    payload = json.loads(Path(args.file).read_text(encoding="utf-8")) if args.file else sample_payload()
    try:
        return asyncio.run(run(args.url, payload))
    except aiohttp.ClientError as exc:
        print(f"Request failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
