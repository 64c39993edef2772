"""Options for the ``list`` command."""

from __future__ import annotations

import os
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

OUTPUT_ENV = "KUBE_IMAGES_OUTPUT"


@dataclass(frozen=True)
class ListOptions:
    path: Path
    output: Optional[Path] = None
    verbose: bool = False


def resolve_path(value: str, cwd: Path) -> Path:
    """Join *value* onto *cwd* unless it is already absolute."""

    return cwd / Path(value).expanduser()


def load_options(
    args: Namespace,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> ListOptions:
    """Build :class:`ListOptions` from parsed arguments and the environment.

    ``--output`` wins over ``KUBE_IMAGES_OUTPUT``; an empty value disables
    file output.
    """

    environ = os.environ if environ is None else environ
    cwd = Path.cwd() if cwd is None else cwd

    output_value = args.output if args.output is not None else environ.get(OUTPUT_ENV)
    output = resolve_path(output_value, cwd) if output_value else None

    return ListOptions(
        path=resolve_path(args.path, cwd),
        output=output,
        verbose=bool(getattr(args, "verbose", False)),
    )
