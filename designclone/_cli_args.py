"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import argparse
from typing import cast

from . import ui_messages as ui
from .contracts import MIN_COMPONENT_OCCURRENCES, cli_help_epilog


class _HelpFormatter(
    argparse.RawDescriptionHelpFormatter, argparse.ArgumentDefaultsHelpFormatter
):
    def _get_help_string(self, action: argparse.Action) -> str:
        if action.dest in {"seed", "generate_mock"}:
            return action.help or ""
        return cast(str, super()._get_help_string(action))


def build_parser(version: str) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="designclone",
        description="Structural component detector for visual design trees.",
        formatter_class=_HelpFormatter,
        epilog=cli_help_epilog(),
    )
    ap.add_argument(
        "--version",
        action="version",
        version=ui.version_output(version),
        help=ui.HELP_VERSION,
    )

    core_group = ap.add_argument_group("Target")
    core_group.add_argument(
        "root",
        nargs="?",
        default=".",
        help=ui.HELP_ROOT,
    )

    tune_group = ap.add_argument_group("Detection Tuning")
    tune_group.add_argument(
        "--min-occurrences",
        type=int,
        default=MIN_COMPONENT_OCCURRENCES,
        metavar="N",
        help=ui.HELP_MIN_OCCURRENCES,
    )
    tune_group.add_argument(
        "--include-size",
        action="store_true",
        help=ui.HELP_INCLUDE_SIZE,
    )
    tune_group.add_argument(
        "--include-border",
        action="store_true",
        help=ui.HELP_INCLUDE_BORDER,
    )

    ci_group = ap.add_argument_group("CI/CD")
    ci_group.add_argument(
        "--fail-threshold",
        type=int,
        default=-1,
        metavar="MAX_COMPONENTS",
        help=ui.HELP_FAIL_THRESHOLD,
    )

    mock_group = ap.add_argument_group("Mock Data")
    mock_group.add_argument(
        "--generate-mock",
        dest="generate_mock",
        metavar="FILE",
        default=None,
        help=ui.HELP_GENERATE_MOCK,
    )
    mock_group.add_argument(
        "--seed",
        type=int,
        default=None,
        help=ui.HELP_SEED,
    )

    out_group = ap.add_argument_group("Reporting")
    out_group.add_argument(
        "--json",
        dest="json_out",
        metavar="FILE",
        help=ui.HELP_JSON,
    )
    out_group.add_argument(
        "--text",
        dest="text_out",
        metavar="FILE",
        help=ui.HELP_TEXT,
    )
    out_group.add_argument(
        "--no-color",
        action="store_true",
        help=ui.HELP_NO_COLOR,
    )
    out_group.add_argument(
        "--quiet",
        action="store_true",
        help=ui.HELP_QUIET,
    )
    out_group.add_argument(
        "--verbose",
        action="store_true",
        help=ui.HELP_VERBOSE,
    )
    out_group.add_argument(
        "--debug",
        action="store_true",
        help=ui.HELP_DEBUG,
    )
    return ap
