"""JSON schemas describing the manifest shapes images are read from."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from jsonschema import Draft202012Validator

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"

TYPE_META = "type-meta"
OPERATOR = "operator"
POD_TEMPLATE = "pod-template"


def load_yaml(path: Path) -> dict:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:  # pragma: no cover - schemas ship with the package
        raise ValueError(f"Failed to parse YAML file {path}: {exc}") from exc


@lru_cache(maxsize=None)
def get_validator(name: str) -> Draft202012Validator:
    """Return a validator for the bundled schema called *name*."""

    schema_path = SCHEMA_DIR / f"{name}.schema.yml"
    schema = load_yaml(schema_path)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)
