from __future__ import annotations

import sys
from argparse import ArgumentParser, Namespace
from typing import List, Optional

from .config import OUTPUT_ENV, load_options
from .errors import KubeImagesError
from .listing import get_images_in_path
from .output import print_images, write_images


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="kube-images",
        description="Inspect container images referenced by Kubernetes manifests",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list", help="List the images found in the repository"
    )
    list_parser.add_argument(
        "path", help="Directory (or manifest file) to scan, relative to the cwd"
    )
    list_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help=f"Output path for the image list (default: ${OUTPUT_ENV} or stdout)",
    )
    list_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report documents that were skipped on stderr",
    )
    list_parser.set_defaults(handler=run_list_command)
    return parser


def run_list_command(args: Namespace) -> int:
    options = load_options(args)
    images = get_images_in_path(options.path, verbose=options.verbose)

    if options.output is not None:
        write_images(images, options.output)
        print(f"Wrote {len(images)} images to {options.output}", file=sys.stderr)
    else:
        print_images(images)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return args.handler(args)
    except KubeImagesError as exc:
        print(f"{args.command}: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
