"""
Main entry for the GEDCOM validator.

This module is intentionally thin:
- argument parsing
- configuration setup
- pipeline orchestration

No parsing or business logic lives here. Exit status is 0 when the file has
no findings and 1 when it has findings or cannot be read.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from gedcom_validator.config import get_config
from gedcom_validator.logging import get_logger, set_debug

from gedcom_validator.core.context import ParseContext
from gedcom_validator.core.exceptions import PipelineError
from gedcom_validator.core.pipeline import Pipeline, resolve_reference_date
from gedcom_validator.reports import ListingSettings, render_report
from gedcom_validator.utils import resolve_project_path

log = get_logger("main")


# ---------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------
def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="GEDCOM validator: consistency report for a family file"
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Path to GEDCOM input file",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Also write the store and findings as JSON to this path",
    )
    parser.add_argument(
        "--now",
        default=None,
        help="Reference date used as 'now', e.g. '1 JAN 2020'",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


def resolve_output_path(output_path: Optional[str], cfg) -> Optional[str]:
    """
    A bare file name goes under ``paths.outputs_dir``; anything with a
    directory part is used as given.
    """
    if not output_path:
        return None
    path = Path(output_path)
    outputs_dir = cfg.paths.get("outputs_dir")
    if path.is_absolute() or path.parent != Path(".") or not outputs_dir:
        return str(path)
    return str(resolve_project_path(Path(outputs_dir) / path))


# ---------------------------------------------------------
# Pipeline Runner
# ---------------------------------------------------------
def run(
    input_path: str,
    output_path: Optional[str] = None,
    debug_flag: bool = False,
    now: Optional[str] = None,
) -> int:
    """
    Prepare context, execute the pipeline and print the report.

    Returns the process exit status.
    """

    cfg = get_config()
    cfg.debug = bool(debug_flag) or cfg.debug
    set_debug(cfg.debug)

    log.info(f"Loading GEDCOM: {input_path}")

    try:
        reference_date = resolve_reference_date(now or cfg.reference_date)
    except ValueError as exc:
        log.error(str(exc))
        return 1

    ctx = ParseContext(
        config=cfg,
        logger=log,
        input_path=input_path,
        output_path=resolve_output_path(output_path, cfg),
        reference_date=reference_date,
        debug=cfg.debug,
    )

    try:
        result = Pipeline(ctx).run()
    except PipelineError:
        return 1

    render_report(
        result.store,
        result.findings,
        result.now,
        settings=ListingSettings.from_config(cfg),
    )

    log.info(f"Main pipeline complete. Findings: {len(result.findings)}")
    return 0 if result.ok else 1


# ---------------------------------------------------------
# Program Entry Point
# ---------------------------------------------------------
def main(argv: Optional[List[str]] = None) -> None:
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    # --now wins over pipeline.reference_date; either may be malformed
    try:
        resolve_reference_date(args.now or get_config().reference_date)
    except ValueError as exc:
        ap.error(str(exc))

    status = run(
        input_path=args.input,
        output_path=args.output,
        debug_flag=args.debug,
        now=args.now,
    )
    sys.exit(status)


if __name__ == "__main__":
    main()
