"""HTTP server exposing the rendered arrivals board."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
import logging
from typing import Any
from urllib.parse import urlsplit

from muni_board.config import AppConfig, load_config
from muni_board.data.stop_monitoring_client import (
    StopMonitoringClient,
    StopMonitoringClientError,
)
from muni_board.logging_config import configure_logging
from muni_board.pipeline import render_png
from muni_board.rendering.surface import RenderError

logger = logging.getLogger(__name__)

INDEX_HTML = """<!doctype html>
<html>
  <head>
    <meta http-equiv="refresh" content="30">
    <style>
      body { background: #fff; font-family: sans-serif; }
    </style>
    <title>Muni Arrivals</title>
  </head>
  <body>
    <img src="/stops.png" alt="Next arrivals">
  </body>
</html>"""


class BoardServer(ThreadingHTTPServer):
    """Threaded HTTP server carrying the app config and feed client."""

    daemon_threads = True

    def __init__(self, config: AppConfig, client: StopMonitoringClient) -> None:
        self.config = config
        self.client = client
        super().__init__((config.server.host, config.server.port), BoardRequestHandler)


class BoardRequestHandler(BaseHTTPRequestHandler):
    server: BoardServer

    def do_GET(self) -> None:  # noqa: N802
        path = urlsplit(self.path).path
        if path == "/stops.png":
            self._send_board()
            return

        if path == "/healthz":
            self._send(200, "text/plain; charset=utf-8", b"ok")
            return

        if path == "/":
            self._send(200, "text/html; charset=utf-8", INDEX_HTML.encode("utf-8"))
            return

        self._send(404, "text/plain; charset=utf-8", b"not found")

    def _send_board(self) -> None:
        config = self.server.config
        try:
            records = self.server.client.get_arrivals(config.feed.agency)
        except StopMonitoringClientError as exc:
            logger.error("Feed fetch failed: %s", exc)
            self._send(502, "text/plain; charset=utf-8", b"upstream feed unavailable")
            return

        now = datetime.now(timezone.utc)
        try:
            png = render_png(records, config.board, config.display, now)
        except RenderError as exc:
            logger.error("Board render failed: %s", exc)
            self._send(500, "text/plain; charset=utf-8", b"render failed")
            return

        logger.debug("Rendered board from %d records", len(records))
        self._send(200, "image/png", png)

    def _send(self, status: int, content_type: str, body: bytes) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-store")
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)


def create_server(config: AppConfig, client: StopMonitoringClient | None = None) -> BoardServer:
    if client is None:
        client = StopMonitoringClient(
            config.feed.api_key,
            base_url=config.feed.base_url,
            timeout_seconds=config.feed.timeout_seconds,
        )
    return BoardServer(config, client)


def main() -> int:
    parser = argparse.ArgumentParser(description="Serve the Muni arrivals board as a PNG")
    parser.add_argument("--config", default="config/config.yaml", help="Path to YAML config")
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)

    server = create_server(config)
    host, port = server.server_address[:2]
    logger.info("Visit http://%s:%s/stops.png", host, port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        return 0
    finally:
        server.server_close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
