"""Make thumbnail-size copies of images."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import BinaryIO

from PIL import Image

logger = logging.getLogger(__name__)

_SIZE = 128


def thumbnail(src: Image.Image) -> Image.Image:
    """Return a copy of ``src`` at most 128 pixels on its longer side.

    The aspect ratio is kept; pixels are sampled by nearest neighbour.
    """
    xs, ys = src.size
    width, height = _SIZE, _SIZE
    aspect = xs / ys
    if aspect < 1.0:
        width = int(_SIZE * aspect)  # portrait
    else:
        height = int(_SIZE / aspect)  # landscape
    xscale = xs / width
    yscale = ys / height

    pixels = src.convert("RGBA").load()
    dst = Image.new("RGBA", (width, height))
    dst.putdata(
        [
            pixels[int(x * xscale), int(y * yscale)]
            for y in range(height)
            for x in range(width)
        ]
    )
    return dst


def thumbnail_stream(dst: BinaryIO, src: BinaryIO) -> None:
    """Read an image from ``src`` and write its thumbnail to ``dst`` as JPEG."""
    with Image.open(src) as image:
        image.load()
        thumb = thumbnail(image)
    thumb.convert("RGB").save(dst, format="JPEG")


def thumbnail_file_to(outfile: str, infile: str) -> None:
    """Write a thumbnail of the image in ``infile`` to ``outfile``.

    Raises ValueError when the image cannot be scaled or written.
    """
    with open(infile, "rb") as src, open(outfile, "wb") as dst:
        try:
            thumbnail_stream(dst, src)
        except (OSError, ValueError) as exc:
            raise ValueError(f"scaling {infile} to {outfile}: {exc}") from exc


def _ext(path: str) -> str:
    name = os.path.basename(path)
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def thumbnail_file(infile: str) -> str:
    """Write a thumbnail of ``infile`` beside it and return its name, e.g. foo.thumb.jpeg."""
    ext = _ext(infile)
    stem = infile[: len(infile) - len(ext)]
    outfile = f"{stem}.thumb{ext}"
    thumbnail_file_to(outfile, infile)
    return outfile


def make_thumbnails(filenames: Iterable[str]) -> list[str]:
    """Make thumbnails of all files in parallel and return their names.

    The first error met, in the order of ``filenames``, is raised.
    """
    filenames = list(filenames)
    if not filenames:
        return []
    with ThreadPoolExecutor(max_workers=len(filenames)) as pool:
        return list(pool.map(thumbnail_file, filenames))


def total_thumbnail_size(filenames: Iterable[str]) -> int:
    """Make thumbnails of all files in parallel and return their total size in bytes.

    Files that fail are logged and skipped.
    """
    total = 0
    with ThreadPoolExecutor() as pool:
        futures = {pool.submit(thumbnail_file, name): name for name in filenames}
        for future in as_completed(futures):
            try:
                thumb = future.result()
            except (OSError, ValueError) as exc:
                logger.warning("%s", exc)
                continue
            total += os.stat(thumb).st_size
    return total


def main(argv: list[str] | None = None) -> int:
    """Make thumbnails of the image files given and print their names."""
    parser = argparse.ArgumentParser(prog="thumbnail")
    parser.add_argument("files", nargs="+")
    args = parser.parse_args(argv)
    try:
        thumbs = make_thumbnails(args.files)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    for thumb in thumbs:
        print(thumb)
    return 0