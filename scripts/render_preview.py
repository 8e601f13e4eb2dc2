"""Render a board PNG from a saved stop-monitoring response or a live fetch."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
import json
import logging
from typing import Any

from muni_board.config import load_config
from muni_board.data.stop_monitoring_client import StopMonitoringClient, records_from_payload
from muni_board.logic.countdown import parse_timestamp
from muni_board.logging_config import configure_logging
from muni_board.pipeline import build_board
from muni_board.rendering import render_board, save_frame

logger = logging.getLogger("render_preview")


def _load_payload(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8-sig") as handle:
        return json.load(handle)


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("path", nargs="?", help="Saved StopMonitoring JSON; fetches live if omitted")
    parser.add_argument("--config", default="config/config.yaml")
    parser.add_argument("--output", default="output/stops.png")
    parser.add_argument("--now", help="ISO-8601 reference time (default: current UTC time)")
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)

    if args.path:
        records = records_from_payload(_load_payload(args.path))
    else:
        client = StopMonitoringClient(
            config.feed.api_key,
            base_url=config.feed.base_url,
            timeout_seconds=config.feed.timeout_seconds,
        )
        records = client.get_arrivals(config.feed.agency)

    now = datetime.now(timezone.utc)
    if args.now:
        now = parse_timestamp(args.now)
        if now is None:
            parser.error(f"--now is not an ISO-8601 timestamp: {args.now}")

    board = build_board(records, config.board)
    image = render_board(board, now, config.display, title_prefix=config.board.title_prefix)
    save_frame(image, args.output)
    logger.info("Wrote %s (%d records)", args.output, len(records))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
