from __future__ import annotations

import platform
import shlex
import sys
import traceback
from pathlib import Path

from . import __version__
from .contracts import DEBUG_ENV_VAR

BANNER_SUBTITLE = "[italic]Structural component detector for design trees[/italic]"

MARKER_CONTRACT_ERROR = "[error]CONTRACT ERROR:[/error]"
MARKER_GATING_FAILURE = "[error]GATING FAILURE:[/error]"
MARKER_INTERNAL_ERROR = "[error]INTERNAL ERROR:[/error]"

HELP_VERSION = "Print the DesignClone version and exit."
HELP_ROOT = "Design document (.json) or directory of documents to scan."
HELP_MIN_OCCURRENCES = "Minimum occurrences for a shape to become a component."
HELP_INCLUDE_SIZE = "Treat width and height as part of the structural signature."
HELP_INCLUDE_BORDER = "Treat the border as part of the structural signature."
HELP_FAIL_THRESHOLD = (
    "Exit with error if total component groups across documents exceed this number."
)
HELP_GENERATE_MOCK = "Write a randomly generated design document to FILE and exit."
HELP_SEED = "Random seed for --generate-mock."
HELP_JSON = "Generate a JSON report to FILE."
HELP_TEXT = "Generate a text report to FILE."
HELP_NO_COLOR = "Disable ANSI colors in output."
HELP_QUIET = "Minimize output (still shows warnings and errors)."
HELP_VERBOSE = "Print every detected component and its node ids."
HELP_DEBUG = "Print debug details (traceback and environment) on internal errors."

SUMMARY_TITLE = "Analysis Summary"
CLI_LAYOUT_WIDTH = 40
SUMMARY_LABEL_DOCUMENTS_FOUND = "Documents found"
SUMMARY_LABEL_DOCUMENTS_ANALYZED = "Documents analyzed"
SUMMARY_LABEL_DOCUMENTS_SKIPPED = "Documents skipped"
SUMMARY_LABEL_NODES = "Nodes"
SUMMARY_LABEL_COMPONENTS = "Component groups"
SUMMARY_LABEL_COMPONENT_NODES = "Component nodes"
SUMMARY_COMPACT_INPUT = "Input: found={found} analyzed={analyzed} skipped={skipped}"
SUMMARY_COMPACT_COMPONENTS = (
    "Components: groups={groups} component_nodes={component_nodes} nodes={nodes}"
)
WARN_SUMMARY_ACCOUNTING_MISMATCH = (
    "Summary accounting mismatch: "
    "documents_found != documents_analyzed + documents_skipped"
)

STATUS_DISCOVERING = "[bold green]Discovering design documents..."

INFO_SCANNING_ROOT = "[info]Scanning root:[/info] {root}"
INFO_JSON_REPORT_SAVED = "[info]JSON report saved:[/info] {path}"
INFO_TEXT_REPORT_SAVED = "[info]Text report saved:[/info] {path}"
INFO_MOCK_SAVED = "[info]Mock document saved:[/info] {path} (nodes={nodes})"
INFO_DOCUMENT_COMPONENTS = "\n[info]{path}[/info] [dim](components={count})[/dim]"
INFO_COMPONENT_LINE = "  {component_id} {name} [dim]x{instances}[/dim]: {node_ids}"

WARN_FAILED_FILES_HEADER = "\n[warning]{count} documents failed to load:[/warning]"
WARN_NO_DOCUMENTS = "[warning]No design documents found under {root}.[/warning]"

ERR_INVALID_OUTPUT_EXT = (
    "[error]Invalid {label} output extension: {path} "
    "(expected {expected_suffix}).[/error]"
)
ERR_ROOT_NOT_FOUND = "[error]Root path does not exist: {path}[/error]"
ERR_INVALID_ROOT_PATH = "[error]Invalid root path: {error}[/error]"
ERR_SCAN_FAILED = "[error]Scan failed: {error}[/error]"
ERR_REPORT_WRITE_FAILED = (
    "[error]Failed to write {label} report: {path} ({error}).[/error]"
)
ERR_INVALID_MIN_OCCURRENCES = "--min-occurrences must be at least {minimum}."

ERR_FAIL_THRESHOLD = "Total component groups ({total}) exceed threshold ({threshold})."


def version_output(version: str) -> str:
    return f"DesignClone {version}"


def banner_title(version: str) -> str:
    return (
        f"[bold white]DesignClone[/bold white] [dim]v{version}[/dim]\n"
        f"{BANNER_SUBTITLE}"
    )


def fmt_invalid_output_extension(
    *, label: str, path: Path, expected_suffix: str
) -> str:
    return ERR_INVALID_OUTPUT_EXT.format(
        label=label, path=path, expected_suffix=expected_suffix
    )


def fmt_report_write_failed(*, label: str, path: Path, error: object) -> str:
    return ERR_REPORT_WRITE_FAILED.format(label=label, path=path, error=error)


def fmt_scanning_root(root: Path) -> str:
    return INFO_SCANNING_ROOT.format(root=root)


def fmt_failed_files_header(count: int) -> str:
    return WARN_FAILED_FILES_HEADER.format(count=count)


def fmt_no_documents(root: Path) -> str:
    return WARN_NO_DOCUMENTS.format(root=root)


def fmt_mock_saved(*, path: Path, nodes: int) -> str:
    return INFO_MOCK_SAVED.format(path=path, nodes=nodes)


def fmt_document_components(*, path: str, count: int) -> str:
    return INFO_DOCUMENT_COMPONENTS.format(path=path, count=count)


def fmt_component_line(
    *, component_id: str, name: str, instances: int, node_ids: tuple[str, ...]
) -> str:
    return INFO_COMPONENT_LINE.format(
        component_id=component_id,
        name=name,
        instances=instances,
        node_ids=", ".join(node_ids),
    )


def fmt_invalid_min_occurrences(minimum: int) -> str:
    return ERR_INVALID_MIN_OCCURRENCES.format(minimum=minimum)


def fmt_path(template: str, path: Path) -> str:
    return template.format(path=path)


def fmt_summary_compact_input(*, found: int, analyzed: int, skipped: int) -> str:
    return SUMMARY_COMPACT_INPUT.format(found=found, analyzed=analyzed, skipped=skipped)


def fmt_summary_compact_components(
    *, groups: int, component_nodes: int, nodes: int
) -> str:
    return SUMMARY_COMPACT_COMPONENTS.format(
        groups=groups, component_nodes=component_nodes, nodes=nodes
    )


def fmt_fail_threshold(*, total: int, threshold: int) -> str:
    return ERR_FAIL_THRESHOLD.format(total=total, threshold=threshold)


def fmt_contract_error(message: str) -> str:
    return f"{MARKER_CONTRACT_ERROR}\n{message}"


def fmt_gating_failure(message: str) -> str:
    return f"{MARKER_GATING_FAILURE}\n{message}"


def fmt_internal_error(
    error: BaseException,
    *,
    debug: bool = False,
) -> str:
    error_name = type(error).__name__
    error_text = str(error).strip() or "<no message>"
    lines = [
        MARKER_INTERNAL_ERROR,
        "Unexpected exception.",
        f"Reason: {error_name}: {error_text}",
        "",
        "Next steps:",
        f"- Re-run with --debug (or {DEBUG_ENV_VAR}=1) to include a traceback.",
        "- If this is reproducible, report it to the project maintainers.",
        (
            "- Attach: command line, DesignClone version, Python version, "
            "and the design document if possible."
        ),
    ]
    if not debug:
        return "\n".join(lines)

    traceback_lines = traceback.format_exception(
        type(error), error, error.__traceback__
    )
    command_line = shlex.join(sys.argv)
    lines.extend(
        [
            "",
            "DEBUG DETAILS",
            f"Platform: {platform.platform()}",
            f"Python: {sys.version.split()[0]}",
            f"DesignClone: {__version__}",
            f"Command: {command_line}",
            f"CWD: {Path.cwd()}",
            "Traceback:",
            "".join(traceback_lines).rstrip(),
        ]
    )
    return "\n".join(lines)
