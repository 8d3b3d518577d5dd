"""Producing thumbnail-size JPEG images from larger images."""

from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import BinaryIO, Iterable, Optional

from PIL import Image, UnidentifiedImageError

log = logging.getLogger(__name__)

_SIZE = 128


def thumbnail_size(width: int, height: int) -> tuple[int, int]:
    """Return the thumbnail size for an image, preserving its aspect ratio."""
    if width <= 0 or height <= 0:
        raise ValueError(f"image has no area: {width}x{height}")
    thumb_w, thumb_h = _SIZE, _SIZE
    aspect = width / height
    if aspect < 1.0:
        thumb_w = int(_SIZE * aspect)  # portrait
    else:
        thumb_h = int(_SIZE / aspect)  # landscape
    return thumb_w, thumb_h


def make_thumbnail(image: Image.Image) -> Image.Image:
    """Return a thumbnail-size RGBA copy of image using crude nearest scaling."""
    src = image.convert("RGBA")
    xs, ys = src.size
    width, height = thumbnail_size(xs, ys)
    dst = Image.new("RGBA", (width, height))
    if width and height:
        xscale, yscale = xs / width, ys / height
        pixels = src.load()
        dst.putdata(
            [
                pixels[min(xs - 1, int(x * xscale)), min(ys - 1, int(y * yscale))]
                for y in range(height)
                for x in range(width)
            ]
        )
    return dst


def image_stream(dst: BinaryIO, src: BinaryIO) -> None:
    """Read an image from src and write a JPEG thumbnail of it to dst."""
    try:
        with Image.open(src) as image:
            image.load()
            thumb = make_thumbnail(image)
    except UnidentifiedImageError as exc:
        raise ValueError("image: unknown format") from exc
    except OSError as exc:
        raise ValueError(str(exc)) from exc
    thumb.convert("RGB").save(dst, format="JPEG", quality=75)


def image_file2(outfile: str, infile: str) -> None:
    """Read an image from infile and write its thumbnail to outfile."""
    with open(infile, "rb") as src, open(outfile, "wb") as dst:
        try:
            image_stream(dst, src)
        except ValueError as exc:
            raise ValueError(f"scaling {infile} to {outfile}: {exc}") from exc


def _extension(path: str) -> str:
    base = path.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def image_file(infile: str) -> str:
    """Write a thumbnail beside infile and return its name, e.g. "foo.thumb.jpeg"."""
    ext = _extension(infile)
    stem = infile[: len(infile) - len(ext)]
    outfile = stem + ".thumb" + ext
    image_file2(outfile, infile)
    return outfile


def make_thumbnails(filenames: Iterable[str]) -> list[str]:
    """Make thumbnails of the files in parallel and return their names in order."""
    with ThreadPoolExecutor() as pool:
        return list(pool.map(image_file, filenames))


def main(argv: Optional[list[str]] = None) -> int:
    """Make thumbnails of the files named on each line of standard input."""
    del argv
    for line in sys.stdin:
        name = line.rstrip("\r\n")
        try:
            thumb = image_file(name)
        except (OSError, ValueError) as exc:
            print(exc, file=sys.stderr)
            continue
        print(thumb)
    return 0


if __name__ == "__main__":
    sys.exit(main())