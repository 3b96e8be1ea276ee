"""Command line entry point.

    bundler conf  --config bundle.yaml
    bundler dist  --config bundle.yaml --source build/app [--target DIR]
    bundler stage --config bundle.yaml --source build/app [--staging-dir DIR]

Target and staging directories default to the BUNDLE_* settings.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from bundler.core.config import get_settings
from bundler.core.logging import bind_bundle_name, configure_structlog
from bundler.descriptor import render_bundle_conf
from bundler.model import BundleError, load_spec
from bundler.packaging import create_archive, directory_mappings, stage

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="bundler",
        description="Package a built component into a content-addressed bundle",
    )
    ap.add_argument("--debug", action="store_true", default=None, help="Verbose console logs")
    sub = ap.add_subparsers(dest="command", required=True)

    conf = sub.add_parser("conf", help="Print the rendered bundle.conf")
    conf.add_argument("--config", type=Path, required=True, help="Bundle descriptor (YAML)")

    dist = sub.add_parser("dist", help="Create the digest-named bundle archive")
    dist.add_argument("--config", type=Path, required=True, help="Bundle descriptor (YAML)")
    dist.add_argument("--source", type=Path, required=True, help="Directory of component files")
    dist.add_argument("--target", type=Path, default=None, help="Archive output directory")

    stg = sub.add_parser("stage", help="Stage the bundle as a plain directory")
    stg.add_argument("--config", type=Path, required=True, help="Bundle descriptor (YAML)")
    stg.add_argument("--source", type=Path, required=True, help="Directory of component files")
    stg.add_argument("--staging-dir", type=Path, default=None, help="Staging directory")

    return ap


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    debug = settings.debug if args.debug is None else args.debug
    configure_structlog(debug=debug)

    try:
        spec = load_spec(args.config)
        with bind_bundle_name(spec.package_name):
            if args.command == "conf":
                sys.stdout.write(render_bundle_conf(spec))
                return 0

            mappings = directory_mappings(args.source)
            if args.command == "dist":
                result = create_archive(spec, mappings, args.target or settings.target_dir)
            else:
                result = stage(
                    spec, mappings, args.staging_dir or settings.resolved_staging_dir
                )
    except (BundleError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"bundler: error: {exc}", file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
