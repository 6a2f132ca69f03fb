"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Final, Literal

from rich.console import Console

from .contracts import ExitCode
from .ui_messages import fmt_contract_error, fmt_invalid_output_extension

OutputKind = Literal["JSON", "text", "mock"]

# output kind -> required file suffix
OUTPUT_SUFFIXES: Final[dict[OutputKind, str]] = {
    "JSON": ".json",
    "text": ".txt",
    "mock": ".json",
}


def _validate_output_path(path: str, *, kind: OutputKind, console: Console) -> Path:
    """Resolve an output file for ``kind``; a wrong suffix is a contract error."""
    expected_suffix = OUTPUT_SUFFIXES[kind]
    out = Path(path).expanduser()
    if out.suffix.lower() != expected_suffix:
        console.print(
            fmt_contract_error(
                fmt_invalid_output_extension(
                    label=kind, path=out, expected_suffix=expected_suffix
                )
            )
        )
        sys.exit(ExitCode.CONTRACT_ERROR)
    return out.resolve()
