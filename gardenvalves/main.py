"""Command that runs the web panel and the watering sequences together."""

from __future__ import annotations

import argparse
import logging
import time
from typing import Optional, Sequence

from gardenvalves.clock import Clock
from gardenvalves.relays import PoolCycle, RelayBoard, Schedule, WateringCycle
from gardenvalves.web import Panel, make_server

logger = logging.getLogger(__name__)


class Controller:
    """Owns the relays, schedule and clock, and advances both sequences."""

    def __init__(
        self,
        board: Optional[RelayBoard] = None,
        schedule: Optional[Schedule] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.board = board or RelayBoard()
        self.board.all_off()
        self.schedule = schedule or Schedule()
        self.clock = clock or Clock()
        self.watering = WateringCycle(self.board, self.schedule)
        self.pool = PoolCycle(self.board)

    def tick(self, now_ms: int) -> None:
        self.clock.update()
        self.watering.step(now_ms, self.clock.hour, self.clock.minute)
        self.pool.step(now_ms)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Garden valve controller with a web panel.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=80, help="port to listen on")
    parser.add_argument(
        "--interval", type=float, default=0.01, help="seconds to wait for a request per loop"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    controller = Controller()
    panel = Panel(controller.board, controller.schedule, controller.pool, controller.clock)
    server = make_server(panel, args.host, args.port)
    server.timeout = args.interval
    logger.info("Serwer wystartował.")

    start = time.monotonic()
    try:
        while True:
            server.handle_request()
            controller.tick(int((time.monotonic() - start) * 1000))
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
        controller.board.all_off()
    return 0