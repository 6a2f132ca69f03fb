"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

REPORT_SCHEMA_VERSION: Final = "1.0"
SIGNATURE_VERSION: Final = "1"

MIN_COMPONENT_OCCURRENCES: Final = 2
COMPONENT_ID_PREFIX: Final = "C"


class ExitCode(IntEnum):
    SUCCESS = 0
    CONTRACT_ERROR = 2
    GATING_FAILURE = 3
    INTERNAL_ERROR = 5


DEBUG_ENV_VAR: Final = "DESIGNCLONE_DEBUG"

EXIT_CODE_DESCRIPTIONS: Final[tuple[tuple[ExitCode, str], ...]] = (
    (ExitCode.SUCCESS, "success"),
    (
        ExitCode.CONTRACT_ERROR,
        "contract error (missing path, invalid output extensions, unwritable reports)",
    ),
    (
        ExitCode.GATING_FAILURE,
        "gating failure (component groups exceed threshold)",
    ),
    (
        ExitCode.INTERNAL_ERROR,
        "internal error (unexpected exception; please report)",
    ),
)


def cli_help_epilog() -> str:
    lines = ["Exit codes"]
    for code, description in EXIT_CODE_DESCRIPTIONS:
        lines.append(f"  - {int(code)} - {description}")
    lines.extend(
        [
            "",
            "Environment",
            f"  - {DEBUG_ENV_VAR}=1 - same as --debug",
        ]
    )
    return "\n".join(lines)
