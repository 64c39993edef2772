"""Exceptions raised while listing images from manifests."""

from __future__ import annotations


class KubeImagesError(Exception):
    """Base class for errors that abort a listing run."""


class FilesystemError(KubeImagesError):
    """Raised when a manifest tree or output file cannot be accessed."""


class ManifestParseError(KubeImagesError):
    """Raised when a Prometheus or Alertmanager resource is malformed."""


class ImageReferenceError(KubeImagesError, ValueError):
    """Raised when an image reference has no tag separator."""
