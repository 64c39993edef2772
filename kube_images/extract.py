"""Extract raw image references from individual manifest documents.

Each document is classified by its ``kind``. Prometheus and Alertmanager
resources carry their image as ``spec.baseImage`` plus ``spec.version``; every
other resource is searched for pod specs. The outcome for a document is one of
:class:`Extracted`, :class:`Skipped` or :class:`Fatal` so callers can treat a
malformed operator resource differently from an unrelated document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Union

import yaml
from jsonschema import ValidationError

from .errors import ManifestParseError
from .validators import OPERATOR, POD_TEMPLATE, TYPE_META, get_validator

OPERATOR_KINDS = ("Prometheus", "Alertmanager")


@dataclass(frozen=True)
class Extracted:
    images: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Skipped:
    reason: str


@dataclass(frozen=True)
class Fatal:
    error: ManifestParseError


DocumentResult = Union[Extracted, Skipped, Fatal]


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def images_from_args(args: Optional[Iterable[str]]) -> List[str]:
    """Return image references passed as ``key=image:tag`` arguments.

    Arguments without a ``:`` or containing ``=:`` never carry an image.
    """

    images: List[str] = []
    for arg in args or []:
        if ":" not in arg or "=:" in arg:
            continue
        tokens = arg.split("=")
        if len(tokens) < 2:
            continue
        images.append(tokens[1])
    return images


def images_from_containers(
    containers: Optional[Iterable[Mapping[str, Any]]],
) -> List[str]:
    images: List[str] = []
    for container in containers or []:
        image = container.get("image")
        if image:
            images.append(image)
        images.extend(images_from_args(container.get("args")))
    return images


def _pod_specs(kind: str, document: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    spec = _mapping(document.get("spec"))
    template = _mapping(spec.get("template"))
    job_template = _mapping(_mapping(spec.get("jobTemplate")).get("spec"))

    pod_specs = [
        _mapping(template.get("spec")),
        _mapping(_mapping(job_template.get("template")).get("spec")),
    ]
    if kind == "Pod":
        pod_specs.append(spec)
    return pod_specs


def _extract_operator_image(kind: str, document: Mapping[str, Any]) -> DocumentResult:
    try:
        get_validator(OPERATOR).validate(document)
    except ValidationError as exc:
        return Fatal(ManifestParseError(f"unmarshal {kind.lower()}: {exc.message}"))

    spec = _mapping(document.get("spec"))
    base_image = spec.get("baseImage") or ""
    version = spec.get("version") or ""
    return Extracted([f"{base_image}:{version}"])


def _extract_pod_images(kind: str, document: Mapping[str, Any]) -> DocumentResult:
    try:
        get_validator(POD_TEMPLATE).validate(document)
    except ValidationError as exc:
        return Skipped(f"not a pod template: {exc.message}")

    images: List[str] = []
    for pod_spec in _pod_specs(kind, document):
        images.extend(images_from_containers(pod_spec.get("initContainers")))
        images.extend(images_from_containers(pod_spec.get("containers")))
    return Extracted(images)


def extract_document(data: bytes) -> DocumentResult:
    """Classify a single manifest document and collect its images."""

    # Only the first document counts when a separator line carries a comment
    # or the chunk ends in a bare "---".
    try:
        document = next(yaml.safe_load_all(data), None)
    except yaml.YAMLError as exc:
        return Skipped(f"invalid YAML: {exc}")

    try:
        get_validator(TYPE_META).validate(document)
    except ValidationError as exc:
        return Skipped(f"no type metadata: {exc.message}")

    if document is None:
        return Extracted()

    kind = document.get("kind") or ""
    if kind in OPERATOR_KINDS:
        return _extract_operator_image(kind, document)
    return _extract_pod_images(kind, document)
