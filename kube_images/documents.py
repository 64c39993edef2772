"""Split manifest files into individual YAML documents."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Tuple

from .errors import FilesystemError

# A separator line is exactly ``---``; either line ending is accepted so the
# same file splits identically on every platform.
DOCUMENT_SEPARATOR = re.compile(rb"\r?\n---\r?\n")


def split_documents(data: bytes) -> List[bytes]:
    """Return the documents contained in *data*.

    Empty input yields a single empty document.
    """

    return DOCUMENT_SEPARATOR.split(data)


def read_documents(paths: Iterable[Path]) -> List[Tuple[Path, int, bytes]]:
    """Read *paths* and return ``(path, index, document)`` triples in order."""

    documents: List[Tuple[Path, int, bytes]] = []
    for path in paths:
        try:
            content = Path(path).read_bytes()
        except OSError as exc:
            raise FilesystemError(f"open file {path}: {exc}") from exc

        for index, document in enumerate(split_documents(content)):
            documents.append((path, index, document))
    return documents
