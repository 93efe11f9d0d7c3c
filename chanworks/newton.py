"""Render the Newton fractal of z**4 - 1 in parallel and serve it as PNG."""

from __future__ import annotations

import argparse
import io
import math
import os
import time
from concurrent.futures import ThreadPoolExecutor
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from PIL import Image

XMIN, YMIN, XMAX, YMAX = -2.0, -2.0, 2.0, 2.0
WIDTH, HEIGHT = 1024, 1024
_ITERATIONS = 37


def newton(z: complex) -> int:
    """Return the grey level of point ``z``: brighter when Newton's method converges sooner.

    Points that do not reach a root of z**4 - 1 within the iteration limit are black (0).
    """
    for n in range(_ITERATIONS):
        try:
            z -= (z - 1 / (z * z * z)) / 4
        except ZeroDivisionError:
            return 0
        if abs(z * z * z * z - 1) < 1e-6:
            if n == 0:
                return 255
            return 255 - int(math.log(n) / math.log(_ITERATIONS) * 255)
    return 0


def _render_row(py: int, width: int, height: int) -> list[int]:
    y = py / height * (YMAX - YMIN) + YMIN
    return [newton(complex(px / width * (XMAX - XMIN) + XMIN, y)) for px in range(width)]


def render(width: int = WIDTH, height: int = HEIGHT, workers: int | None = None) -> Image.Image:
    """Render the fractal as a greyscale image, rows shared among ``workers`` threads."""
    workers = os.cpu_count() or 1 if workers is None else workers
    with ThreadPoolExecutor(max_workers=workers) as pool:
        rows = pool.map(_render_row, range(height), [width] * height, [height] * height)
        data = [value for row in rows for value in row]
    image = Image.new("L", (width, height))
    image.putdata(data)
    return image


def main(argv: list[str] | None = None) -> int:
    """Render the fractal, then serve it as PNG over HTTP."""
    parser = argparse.ArgumentParser(prog="newton")
    parser.add_argument("--size", type=int, default=WIDTH, help="image width and height")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)

    start = time.monotonic()
    image = render(args.size, args.size)
    print(f"rendered in: {time.monotonic() - start:.3f}s", flush=True)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    png = buffer.getvalue()

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:
            self.send_response(200)
            self.send_header("Content-Type", "image/png")
            self.send_header("Content-Length", str(len(png)))
            self.end_headers()
            self.wfile.write(png)

    with ThreadingHTTPServer((args.host, args.port), Handler) as server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0