#!/usr/bin/env python3
"""
Local quote service for trying out quoteclient.

Serves GET /api/random on port 8080 with a quote picked at random, so that

    python examples/local_quote_service.py &
    python -m quoteclient

works without any other service running.

Usage:
    python examples/local_quote_service.py [--port 8080]
"""

from __future__ import annotations

import argparse
import json
import random
from http.server import BaseHTTPRequestHandler, HTTPServer

QUOTES = [
    "Simple things should be simple, complex things should be possible.",
    "Premature optimization is the root of all evil.",
    "Errors should never pass silently.",
    "Make it work, make it right, make it fast.",
    "There are only two hard things in computer science.",
]


class QuoteHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        if self.path != "/api/random":
            self.send_response(404)
            self.end_headers()
            return
        idx = random.randrange(len(QUOTES))
        body = json.dumps(
            {"type": "success", "value": {"id": idx + 1, "quote": QUOTES[idx]}}
        ).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


def main():
    parser = argparse.ArgumentParser(description="Serve random quotes on /api/random")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args()

    server = HTTPServer(("127.0.0.1", args.port), QuoteHandler)
    print(f"Serving quotes on http://127.0.0.1:{args.port}/api/random")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
