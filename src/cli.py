"""Command-line interface for modgraph."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.write import generate_all_artifacts
from contract.validation import validate_artifacts
from errors import AnalysisError
from rules.config import ConfigError, load_config
from verify.verify import verify_determinism

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _root_parent() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )
    return parent


def _artifacts_parent() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )
    return parent


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modgraph",
        description="Build acyclic dependency graphs of Go modules.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    root = _root_parent()
    artifacts = _artifacts_parent()

    generate = subparsers.add_parser(
        "generate",
        parents=[root],
        help="Analyze module dependencies and write artifacts",
    )
    generate.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )
    generate.set_defaults(handler=_run_generate)

    validate = subparsers.add_parser(
        "validate", parents=[root, artifacts], help="Validate artifacts"
    )
    validate.add_argument(
        "--strict",
        action="store_true",
        help="Treat records without schema_version as errors",
    )
    validate.set_defaults(handler=_run_validate)

    verify = subparsers.add_parser(
        "verify",
        parents=[root, artifacts],
        help="Regenerate artifacts and compare them with existing ones",
    )
    verify.set_defaults(handler=_run_verify)

    return parser


def _artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        return (root / load_config(root).output_dir).resolve()
    return Path(artifacts_dir).expanduser().resolve()


def _run_generate(root: Path, args: argparse.Namespace) -> int:
    out_dir = None
    if args.out_dir is not None:
        out_dir = Path(args.out_dir).expanduser().resolve()
    summary = generate_all_artifacts(root=root, out_dir=out_dir)
    sys.stdout.write(
        f"{summary['project_count']} projects, {summary['package_count']} packages, "
        f"{summary['edge_count']} edges\n"
    )
    for artifact in summary["artifacts"]:  # type: ignore[attr-defined]
        sys.stdout.write(f"wrote {artifact}\n")
    return 0


def _run_validate(root: Path, args: argparse.Namespace) -> int:
    result = validate_artifacts(
        _artifacts_dir(root, args.artifacts_dir),
        strict_schema_version=args.strict,
    )
    for warning in result.warnings:
        sys.stderr.write(f"warning: {warning}\n")
    for error in result.errors:
        sys.stderr.write(f"{error}\n")
    return 0 if result.ok else 1


def _run_verify(root: Path, args: argparse.Namespace) -> int:
    artifacts_dir = _artifacts_dir(root, args.artifacts_dir)
    try:
        result = verify_determinism(root=root, artifacts_dir=artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    for label, names in (
        ("missing", result.missing),
        ("extra", result.extra),
        ("mismatch", result.mismatches),
    ):
        for name in names:
            sys.stderr.write(f"{label}: {name}\n")
    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    root = Path(args.root).expanduser().resolve()
    try:
        return args.handler(root, args)
    except (AnalysisError, ConfigError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
