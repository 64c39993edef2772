"""Render image lists to a stream or a file."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .errors import FilesystemError
from .images import ParsedImage


def print_images(
    images: Iterable[ParsedImage], stream: Optional[TextIO] = None
) -> None:
    stream = stream if stream is not None else sys.stdout
    for image in images:
        print(image, file=stream)


def write_images(images: Iterable[ParsedImage], path: Path) -> None:
    """Write one image per line to *path*, replacing any existing file."""

    try:
        with Path(path).open("w", encoding="utf-8") as handle:
            print_images(images, handle)
    except OSError as exc:
        raise FilesystemError(f"creating file {path}: {exc}") from exc
