from __future__ import annotations

import json
import webbrowser
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse


def run_web(*, site_dir: Path, host: str = "127.0.0.1", port: int = 8000, open_browser: bool = True) -> None:
    if not (site_dir / "index.html").exists():
        raise FileNotFoundError(f"No exported chart in {site_dir} (run 'build' first)")

    server = make_server(site_dir=site_dir, host=host, port=port)
    url = f"http://{host}:{port}/"
    print(f"Serving chart: {url}")
    if open_browser:
        try:
            webbrowser.open(url)
        except webbrowser.Error:
            pass
    server.serve_forever()


def make_server(*, site_dir: Path, host: str, port: int) -> ThreadingHTTPServer:
    class Handler(_Handler):
        _site_dir = site_dir

    return ThreadingHTTPServer((host, int(port)), Handler)


class _Handler(BaseHTTPRequestHandler):
    _site_dir: Path

    def log_message(self, fmt: str, *args: Any) -> None:
        # Keep console output readable.
        return

    def do_GET(self) -> None:  # noqa: N802
        path = urlparse(self.path).path

        if path in {"/", "/index.html"}:
            rel = "index.html"
        else:
            rel = path.lstrip("/")

        try:
            self._serve_file(rel)
        except _ApiError as exc:
            self._json({"error": exc.message}, status=exc.status)

    def _serve_file(self, rel_path: str, *, content_type: Optional[str] = None) -> None:
        safe = (rel_path or "").replace("\\", "/").lstrip("/")
        if ".." in safe:
            raise _ApiError(400, "Invalid path")
        root = self._site_dir.resolve()
        path = (root / safe).resolve()
        if root not in path.parents and path != root:
            raise _ApiError(400, "Invalid path")
        if not path.exists() or not path.is_file():
            raise _ApiError(404, "Not found")

        ctype = content_type or guess_content_type(path.name)
        data = path.read_bytes()
        self.send_response(200)
        self.send_header("Content-Type", ctype)
        self.send_header("Cache-Control", "no-store")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def _json(self, data: Any, *, status: int = 200) -> None:
        raw = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self.send_response(int(status))
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(raw)))
        self.end_headers()
        self.wfile.write(raw)


class _ApiError(Exception):
    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = int(status)
        self.message = message


def guess_content_type(name: str) -> str:
    lower = name.lower()
    if lower.endswith(".html"):
        return "text/html; charset=utf-8"
    if lower.endswith(".css"):
        return "text/css; charset=utf-8"
    if lower.endswith(".js"):
        return "application/javascript; charset=utf-8"
    if lower.endswith(".json"):
        return "application/json; charset=utf-8"
    if lower.endswith(".svg"):
        return "image/svg+xml"
    return "application/octet-stream"
