"""CLI entrypoints for the ODS GP practice extract."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ods_practices.common.config_loader import load_pipeline_config
from ods_practices.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS, EXIT_USAGE
from ods_practices.common.errors import PipelineError, UsageError
from ods_practices.common.ids import generate_run_id
from ods_practices.common.logging import build_logger, log_event
from ods_practices.pipeline.export import write_practices_json
from ods_practices.pipeline.reports import write_run_summary
from ods_practices.pipeline.runner import run_pipeline


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)


def usage_message(prog: str, *, joined: bool = False) -> str:
    if joined:
        return f"Usage: {prog} directory_file.csv ods_data_file.csv [ods_amendment_file_1.csv ...]"
    return f"Usage: {prog} ods_data_file.csv [ods_amendment_file_1.csv ...]"


def build_parser(*, joined: bool = False, prog: str | None = None) -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=prog, description=__doc__)
    if joined:
        parser.add_argument("directory_file")
    parser.add_argument("registry_file")
    parser.add_argument("amendment_files", nargs="*")
    parser.add_argument("--config", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-dir", default=None)
    parser.add_argument("--log-level", default="WARN", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--summary-path", default=None)
    return parser


def parse_args(argv: list[str], *, joined: bool = False) -> argparse.Namespace:
    return build_parser(joined=joined).parse_args(argv)


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    logger = build_logger(
        run_id,
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=args.log_level,
    )

    registry_paths = [Path(args.registry_file), *(Path(p) for p in args.amendment_files)]
    directory_file = getattr(args, "directory_file", None)
    directory_path = Path(directory_file) if directory_file else None

    log_event(logger, "run start", event="RUN_START", status="ok")
    try:
        config = load_pipeline_config(Path(args.config) if args.config else None)
        result = run_pipeline(registry_paths, directory_path, config=config, logger=logger)
        if args.summary_path:
            write_run_summary(
                Path(args.summary_path),
                run_id=run_id,
                stats=result.stats,
                registry_paths=registry_paths,
                directory_path=directory_path,
            )
        write_practices_json(result.records, sys.stdout, indent=config.indent)
    except PipelineError as exc:
        log_event(
            logger,
            str(exc),
            level=logging.ERROR,
            event="RUN_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_HARD_FAIL
    except Exception as exc:
        log_event(
            logger,
            f"unexpected failure: {exc!r}",
            level=logging.ERROR,
            event="RUN_FAIL",
            status="error",
            error_code="UNEXPECTED_ERROR",
        )
        print(f"error: unexpected failure: {exc}", file=sys.stderr)
        return EXIT_HARD_FAIL

    log_event(
        logger,
        "run end",
        stage="export",
        event="RUN_END",
        status="ok",
        rows_out=result.stats.output,
    )
    return EXIT_SUCCESS


def _main(argv: list[str] | None, *, joined: bool) -> int:
    parser = build_parser(joined=joined)
    try:
        args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    except UsageError:
        print(usage_message(parser.prog, joined=joined), file=sys.stderr)
        return EXIT_USAGE
    return run_command(args)


def main(argv: list[str] | None = None) -> int:
    """Registry-only mode: ``ods_data_file.csv [ods_amendment_file.csv ...]``."""
    return _main(argv, joined=False)


def main_joined(argv: list[str] | None = None) -> int:
    """Joined mode: ``directory_file.csv ods_data_file.csv [ods_amendment_file.csv ...]``."""
    return _main(argv, joined=True)


if __name__ == "__main__":
    raise SystemExit(main())
