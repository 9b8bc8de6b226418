"""Web control panel for the relays, the watering schedule and the pool."""

from __future__ import annotations

import logging
import re
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

from gardenvalves.clock import Clock
from gardenvalves.relays import PoolCycle, RelayBoard, Schedule

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, str], str]

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

_STATE_LABELS = {True: "WŁĄCZONY", False: "WYŁĄCZONY"}

_HEAD = (
    "<!DOCTYPE html><html><head><meta charset='UTF-8'><title>ZAWORY OGRODOWE</title>"
    "<meta name='viewport' content='width=device-width, initial-scale=1'>"
    "<style>body{font-family:sans-serif;max-width:540px;margin:24px auto;padding:0 12px}"
    "h1{font-size:20px} .card{border:1px solid #ddd;border-radius:8px;padding:12px;margin-bottom:12px}"
    "b{display:inline-block;min-width:160px} button{padding:8px 12px;border-radius:6px;"
    "border:1px solid #888;background:#f2f2f2;cursor:pointer}"
    "form{display:inline} .row{display:flex;justify-content:space-between;align-items:center}</style>"
    "</head><body><h1>Sterowanie Panelem przekaźników</h1>"
)


def parse_int(text: str) -> int:
    """Read a leading integer the lenient way: whitespace, sign, digits; else 0."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def parse_hhmm(text: str) -> Optional[Tuple[int, int]]:
    """Split "HH:MM" into hour and minute; None when no colon follows the hour."""
    sep = text.find(":")
    if sep <= 0:
        return None
    return parse_int(text[:sep]), parse_int(text[sep + 1:])


def _u8(value: int) -> int:
    return value & 0xFF


def _redirect() -> Response:
    return 303, {"Location": "/"}, ""


class Panel:
    """Renders the control page and applies the form submissions."""

    def __init__(self, board: RelayBoard, schedule: Schedule, pool: PoolCycle, clock: Clock) -> None:
        self.board = board
        self.schedule = schedule
        self.pool = pool
        self.clock = clock

    def render_root(self) -> str:
        s = self.schedule
        morning = f"{s.start_hour1:02d}:{s.start_minute1:02d}"
        evening = f"{s.start_hour2:02d}:{s.start_minute2:02d}"
        parts = [
            _HEAD,
            "<div class='card'><div class='row'><div><b>Aktualny czas:</b> ",
            self.clock.hhmm(),
            "</div></div></div>",
        ]
        for index, (pin, action) in enumerate(((0, "/toggle"), (2, "/toggle2")), start=1):
            parts += [
                f"<div class='card'><div class='row'><div><b>Przekaźnik {index} (GPIO{pin}):</b> ",
                _STATE_LABELS[bool(self.board.is_on(index))],
                f"</div><form action=\"{action}\" method=\"POST\">"
                "<button type=\"submit\">Zmień</button></form></div></div>",
            ]
        parts += [
            "<div class='card'><form action='/settime' method='POST'>",
            "<div class='row'><div><b>Czas podlewania (minuty):</b> ",
            str(s.watering_time),
            "</div><input type='number' name='time' min='1' max='3600' style='width:80px'> ",
            "<button type='submit'>Ustaw</button></div></form></div>",
            "<div class='card'><form action='/settimes' method='POST'>",
            "<div class='row'><div><b>Podlewanie ranne:</b> ",
            f"</div><input type='time' name='morning' value='{morning}'></div>",
            "<div class='row'><div><b>Podlewanie wieczorne:</b> ",
            f"</div><input type='time' name='evening' value='{evening}'></div>",
            "<div class='row'><button type='submit'>Zapisz czasy podlewania</button></div>",
            "</form></div>",
            "<div class='card'><form action='/togglePool' method='POST'>",
            "<div class='row'><div><b>Basen:</b> ",
            "<input type='checkbox' name='pool' value='1' onchange='this.form.submit()' ",
            "checked" if self.pool.enabled else "",
            ">",
            f"Liczba cykli: {self.pool.counter}",
            "</div></div></form></div>",
            "</body></html>",
        ]
        return "".join(parts)

    def toggle(self, index: int) -> Response:
        self.board.toggle(index)
        return _redirect()

    def set_watering_time(self, form: Mapping[str, str]) -> Response:
        if "time" in form:
            self.schedule.watering_time = _u8(parse_int(form["time"]))
            logger.info("Ustawiono czas podlewania: %d s", self.schedule.watering_time)
        return _redirect()

    def set_start_times(self, form: Mapping[str, str]) -> Response:
        s = self.schedule
        if "morning" in form:
            parsed = parse_hhmm(form["morning"])
            if parsed is not None:
                s.start_hour1, s.start_minute1 = map(_u8, parsed)
        if "evening" in form:
            parsed = parse_hhmm(form["evening"])
            if parsed is not None:
                s.start_hour2, s.start_minute2 = map(_u8, parsed)
        logger.info("Ustawiono czas ranny: %02d:%02d", s.start_hour1, s.start_minute1)
        logger.info("Ustawiono czas wieczorny: %02d:%02d", s.start_hour2, s.start_minute2)
        return _redirect()

    def toggle_pool(self, form: Mapping[str, str]) -> Response:
        self.pool.enabled = "pool" in form
        logger.info("Basen: %s", "Włączony" if self.pool.enabled else "Wyłączony")
        return _redirect()

    def dispatch(self, method: str, path: str, form: Mapping[str, str]) -> Response:
        """Route a request to its handler; unknown routes get a 404."""
        method = method.upper()
        if (method, path) == ("GET", "/"):
            return 200, {"Content-Type": "text/html"}, self.render_root()
        if method == "POST":
            if path == "/toggle":
                return self.toggle(1)
            if path == "/toggle2":
                return self.toggle(2)
            if path == "/settime":
                return self.set_watering_time(form)
            if path == "/settimes":
                return self.set_start_times(form)
            if path == "/togglePool":
                return self.toggle_pool(form)
        return 404, {"Content-Type": "text/plain"}, f"Not found: {path}"


def _parse_form(text: str) -> Dict[str, str]:
    return {key: values[0] for key, values in parse_qs(text, keep_blank_values=True).items()}


def make_server(panel: Panel, host: str, port: int) -> HTTPServer:
    """Build an HTTP server that hands every request to the panel."""

    class _Handler(BaseHTTPRequestHandler):
        def _serve(self) -> None:
            url = urlsplit(self.path)
            form = _parse_form(url.query)
            if self.command == "POST":
                length = int(self.headers.get("Content-Length") or 0)
                body = self.rfile.read(length).decode("utf-8", "replace")
                form.update(_parse_form(body))
            status, headers, text = panel.dispatch(self.command, url.path, form)
            data = text.encode("utf-8")
            self.send_response(status)
            for name, value in headers.items():
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(data)))
            self.end_headers()
            self.wfile.write(data)

        do_GET = _serve
        do_POST = _serve

        def log_message(self, format: str, *args: object) -> None:
            logger.debug("%s - %s", self.address_string(), format % args)

    return HTTPServer((host, port), _Handler)