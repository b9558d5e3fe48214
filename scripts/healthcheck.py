"""
Container health check for the measurements API.
"""

from __future__ import annotations

import json
import os
from urllib.error import URLError
from urllib.request import urlopen


def main() -> int:
    port = os.getenv("PORT", "8000")
    url = os.getenv("HEALTHCHECK_URL", f"http://127.0.0.1:{port}/health")

    try:
        with urlopen(url, timeout=2) as response:
            if not 200 <= response.status < 300:
                return 1
            payload = json.loads(response.read() or b"{}")
    except (URLError, TimeoutError, ValueError):
        return 1
    return 0 if payload.get("status") == "ok" else 1


if __name__ == "__main__":
    raise SystemExit(main())
