from __future__ import annotations

import json
import os
import sys
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.theme import Theme

from . import __version__
from . import ui_messages as ui
from ._cli_args import build_parser
from ._cli_meta import _build_report_meta
from ._cli_paths import _validate_output_path
from ._cli_summary import _print_summary
from .contracts import DEBUG_ENV_VAR, MIN_COMPONENT_OCCURRENCES, ExitCode
from .detector import DetectionResult, find_components
from .errors import DocumentReadError, ValidationError
from .mock import generate_mock_tree
from .nodes import VisualNode, iter_nodes, node_to_dict
from .report import (
    DocumentReport,
    build_component_summaries,
    to_json_report,
    to_text_report,
)
from .scanner import iter_design_files, load_document
from .signature import SignatureConfig

# Custom theme for Rich
custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "dim": "dim",
    }
)


def _make_console(*, no_color: bool) -> Console:
    return Console(theme=custom_theme, width=100, no_color=no_color)


console = _make_console(no_color=False)


@dataclass(slots=True)
class ProcessingResult:
    """Result of processing a single design document."""

    filepath: str
    success: bool
    error: str | None = None
    root: VisualNode | None = None
    result: DetectionResult | None = None
    error_kind: str | None = None


def process_file(
    filepath: str,
    cfg: SignatureConfig,
    min_occurrences: int,
) -> ProcessingResult:
    """
    Load one design document and detect its components.

    Failures are returned as an unsuccessful ProcessingResult so that one
    bad document never aborts the whole scan.
    """
    try:
        try:
            root = load_document(filepath)
        except DocumentReadError as e:
            return ProcessingResult(
                filepath=filepath,
                success=False,
                error=str(e),
                error_kind="source_read_error",
            )
        except ValidationError as e:
            return ProcessingResult(
                filepath=filepath,
                success=False,
                error=f"Invalid document: {e}",
                error_kind="format_error",
            )

        result = find_components(root, cfg, min_occurrences=min_occurrences)
        return ProcessingResult(
            filepath=filepath,
            success=True,
            root=root,
            result=result,
        )

    except Exception as e:
        return ProcessingResult(
            filepath=filepath,
            success=False,
            error=f"Unexpected error: {type(e).__name__}: {e}",
            error_kind="unexpected_error",
        )


def print_banner() -> None:
    console.print(
        Panel(
            ui.banner_title(__version__),
            border_style="blue",
            padding=(0, 2),
            width=ui.CLI_LAYOUT_WIDTH,
            expand=False,
        )
    )


def _is_debug_enabled(
    *,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> bool:
    args = list(sys.argv[1:] if argv is None else argv)
    debug_from_flag = any(arg == "--debug" for arg in args)
    env = os.environ if environ is None else environ
    debug_from_env = env.get(DEBUG_ENV_VAR) == "1"
    return debug_from_flag or debug_from_env


def _write_output(*, out: Path, content: str, label: str) -> None:
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, "utf-8")
    except OSError as e:
        console.print(
            ui.fmt_contract_error(
                ui.fmt_report_write_failed(label=label, path=out, error=e)
            )
        )
        sys.exit(ExitCode.CONTRACT_ERROR)


def _write_mock(path: str, seed: int | None) -> None:
    out = _validate_output_path(path, kind="mock", console=console)
    root = generate_mock_tree(seed)
    _write_output(
        out=out,
        content=json.dumps(node_to_dict(root), ensure_ascii=False, indent=2),
        label="mock",
    )
    console.print(
        ui.fmt_mock_saved(path=out, nodes=sum(1 for _ in iter_nodes(root)))
    )


def _print_components(documents: Sequence[DocumentReport]) -> None:
    for doc in documents:
        console.print(
            ui.fmt_document_components(path=doc.filepath, count=len(doc.result.groups))
        )
        for s in build_component_summaries(doc.root, doc.result):
            console.print(
                ui.fmt_component_line(
                    component_id=s.component_id,
                    name=s.name,
                    instances=s.instances,
                    node_ids=s.node_ids,
                ),
                highlight=False,
            )


def _main_impl() -> None:
    ap = build_parser(__version__)
    args = ap.parse_args()

    global console
    console = _make_console(no_color=args.no_color)

    if args.min_occurrences < MIN_COMPONENT_OCCURRENCES:
        console.print(
            ui.fmt_contract_error(
                ui.fmt_invalid_min_occurrences(MIN_COMPONENT_OCCURRENCES)
            )
        )
        sys.exit(ExitCode.CONTRACT_ERROR)

    if args.generate_mock:
        _write_mock(args.generate_mock, args.seed)
        return

    t0 = time.monotonic()

    if not args.quiet:
        print_banner()

    try:
        root_path = Path(args.root).resolve()
        if not root_path.exists():
            console.print(
                ui.fmt_contract_error(ui.ERR_ROOT_NOT_FOUND.format(path=root_path))
            )
            sys.exit(ExitCode.CONTRACT_ERROR)
    except OSError as e:
        console.print(ui.fmt_contract_error(ui.ERR_INVALID_ROOT_PATH.format(error=e)))
        sys.exit(ExitCode.CONTRACT_ERROR)

    if not args.quiet:
        console.print(ui.fmt_scanning_root(root_path))

    json_out_path: Path | None = None
    text_out_path: Path | None = None
    if args.json_out:
        json_out_path = _validate_output_path(
            args.json_out, kind="JSON", console=console
        )
    if args.text_out:
        text_out_path = _validate_output_path(
            args.text_out, kind="text", console=console
        )

    cfg = SignatureConfig(
        include_size=args.include_size,
        include_border=args.include_border,
    )

    # Discovery phase
    try:
        if args.quiet:
            files = list(iter_design_files(str(root_path)))
        else:
            with console.status(ui.STATUS_DISCOVERING, spinner="dots"):
                files = list(iter_design_files(str(root_path)))
    except (OSError, ValidationError) as e:
        console.print(ui.fmt_contract_error(ui.ERR_SCAN_FAILED.format(error=e)))
        sys.exit(ExitCode.CONTRACT_ERROR)

    if not files and not args.quiet:
        console.print(ui.fmt_no_documents(root_path))

    # Processing phase
    documents: list[DocumentReport] = []
    failed_files: list[str] = []
    for fp in files:
        processed = process_file(fp, cfg, args.min_occurrences)
        if (
            processed.success
            and processed.root is not None
            and processed.result is not None
        ):
            documents.append(
                DocumentReport(
                    filepath=processed.filepath,
                    root=processed.root,
                    result=processed.result,
                )
            )
        else:
            failed_files.append(f"{processed.filepath}: {processed.error}")

    if failed_files:
        console.print(ui.fmt_failed_files_header(len(failed_files)))
        for failure in failed_files[:10]:
            console.print(f"  • {failure}")
        if len(failed_files) > 10:
            console.print(f"  ... and {len(failed_files) - 10} more")

    component_groups = sum(len(d.result.groups) for d in documents)

    if not args.quiet:
        console.print(Rule(style="dim"))

    _print_summary(
        console=console,
        quiet=args.quiet,
        documents_found=len(files),
        documents_analyzed=len(documents),
        documents_skipped=len(failed_files),
        nodes=sum(d.node_count for d in documents),
        component_groups=component_groups,
        component_nodes=sum(d.component_node_count for d in documents),
    )

    if args.verbose:
        _print_components(documents)

    report_meta = _build_report_meta(
        designclone_version=__version__,
        scan_root=root_path,
        cfg=cfg,
        min_occurrences=args.min_occurrences,
        documents_skipped=len(failed_files),
    )

    # Outputs
    output_notice_printed = False

    def _print_output_notice(message: str) -> None:
        nonlocal output_notice_printed
        if args.quiet:
            return
        if not output_notice_printed:
            console.print("")
            output_notice_printed = True
        console.print(message)

    if json_out_path:
        _write_output(
            out=json_out_path,
            content=to_json_report(documents, report_meta),
            label="JSON",
        )
        _print_output_notice(ui.fmt_path(ui.INFO_JSON_REPORT_SAVED, json_out_path))

    if text_out_path:
        _write_output(
            out=text_out_path,
            content=to_text_report(meta=report_meta, documents=documents),
            label="text",
        )
        _print_output_notice(ui.fmt_path(ui.INFO_TEXT_REPORT_SAVED, text_out_path))

    # Exit Codes
    if 0 <= args.fail_threshold < component_groups:
        console.print(
            ui.fmt_gating_failure(
                ui.fmt_fail_threshold(
                    total=component_groups, threshold=args.fail_threshold
                )
            )
        )
        sys.exit(ExitCode.GATING_FAILURE)

    if not args.quiet:
        elapsed = time.monotonic() - t0
        console.print(f"\n[dim]Done in {elapsed:.1f}s[/dim]")


def main() -> None:
    try:
        _main_impl()
    except SystemExit:
        raise
    except Exception as e:
        console.print(
            ui.fmt_internal_error(
                e,
                debug=_is_debug_enabled(),
            )
        )
        sys.exit(ExitCode.INTERNAL_ERROR)


if __name__ == "__main__":
    main()
