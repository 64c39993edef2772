"""The image listing pipeline: walk, split, extract, dedupe and parse."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Tuple

from .documents import read_documents
from .errors import ManifestParseError
from .extract import Extracted, Fatal, Skipped, extract_document
from .files import collect_manifest_files
from .images import ParsedImage, dedupe_images, parse_images


def extract_images(
    documents: Iterable[Tuple[Path, int, bytes]], *, verbose: bool = False
) -> List[str]:
    """Concatenate the images of *documents* in order.

    Skipped documents are ignored, and reported on stderr when *verbose*.
    The first fatal document aborts with its :class:`ManifestParseError`.
    """

    images: List[str] = []
    for path, index, document in documents:
        result = extract_document(document)
        if isinstance(result, Fatal):
            raise ManifestParseError(
                f"{path} document {index}: {result.error}"
            ) from result.error
        if isinstance(result, Skipped):
            if verbose:
                print(
                    f"Skipping {path} document {index}: {result.reason}",
                    file=sys.stderr,
                )
            continue
        if isinstance(result, Extracted):
            images.extend(result.images)
    return images


def get_images_in_path(path: Path, *, verbose: bool = False) -> List[ParsedImage]:
    """Return the unique images referenced by manifests below *path*."""

    files = collect_manifest_files(path)
    documents = read_documents(files)
    images = extract_images(documents, verbose=verbose)
    return parse_images(dedupe_images(images))
