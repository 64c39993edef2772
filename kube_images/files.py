"""Locate Kubernetes manifest files below a directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from .errors import FilesystemError

MANIFEST_SUFFIXES = (".yaml", ".yml")
SKIPPED_DIRECTORIES = {".git"}


def _is_manifest(path: Path) -> bool:
    # Path.suffix is empty for a file named ".yaml", which still counts.
    return path.name.endswith(MANIFEST_SUFFIXES)


def _walk(directory: Path, files: List[Path]) -> None:
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError as exc:
        raise FilesystemError(f"walk path {directory}: {exc}") from exc

    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            if entry.name in SKIPPED_DIRECTORIES:
                continue
            _walk(path, files)
        elif _is_manifest(path):
            files.append(path)


def collect_manifest_files(root: Path) -> List[Path]:
    """Return the YAML files found below *root* in lexical walk order.

    Directories named ``.git`` are pruned, the root included. A root that is
    itself a YAML file is returned on its own.

    Raises
    ------
    FilesystemError
        If *root* does not exist or a directory cannot be read.
    """

    root = Path(root)
    if not root.exists():
        raise FilesystemError(f"walk path {root}: no such file or directory")

    if not root.is_dir():
        return [root] if _is_manifest(root) else []

    if root.name in SKIPPED_DIRECTORIES:
        return []

    files: List[Path] = []
    _walk(root, files)
    return files
