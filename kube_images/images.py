"""Image reference parsing and de-duplication."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .errors import ImageReferenceError

# Registry hosts are recognised by this marker in the first path segment.
HOST_MARKER = ".io"


@dataclass(frozen=True)
class ParsedImage:
    host: str
    repository: str
    name: str
    tag: str

    def __str__(self) -> str:
        prefix = f"{self.host}/" if self.host else ""
        return f"{prefix}{self.repository}:{self.tag}"


def parse_image(reference: str) -> ParsedImage:
    """Split *reference* into host, repository, name and tag.

    The tag follows the last ``:``. The first path segment is only treated as
    a registry host when it contains ``.io``; ``localhost:5000/app:1`` keeps
    ``localhost:5000`` in the repository.

    Raises
    ------
    ImageReferenceError
        If *reference* has no ``:`` separating a tag.
    """

    path, separator, tag = reference.rpartition(":")
    if not separator:
        raise ImageReferenceError(f"image reference {reference!r} has no tag")

    segments = path.split("/")
    host = segments[0] if HOST_MARKER in segments[0] else ""
    repository = path
    if host and path.startswith(f"{host}/"):
        repository = path[len(host) + 1 :]

    return ParsedImage(host=host, repository=repository, name=segments[-1], tag=tag)


def dedupe_images(images: Iterable[str]) -> List[str]:
    """Return the first occurrence of each image, ignoring case."""

    seen = set()
    result: List[str] = []
    for image in images:
        key = image.lower()
        if key not in seen:
            seen.add(key)
            result.append(image)
    return result


def parse_images(images: Iterable[str]) -> List[ParsedImage]:
    return [parse_image(image) for image in images]
