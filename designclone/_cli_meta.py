"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TypedDict

from .contracts import REPORT_SCHEMA_VERSION, SIGNATURE_VERSION
from .signature import SignatureConfig


def _current_python_version() -> str:
    return f"{sys.version_info.major}.{sys.version_info.minor}"


class ReportMeta(TypedDict):
    """
    Report metadata shared by JSON and TXT reports.

    - signature_attributes: node attributes that took part in signatures
    - documents_skipped: documents that failed to load and were not analyzed
    """

    report_schema_version: str
    designclone_version: str
    python_version: str
    signature_version: str
    signature_attributes: list[str]
    min_occurrences: int
    scan_root: str
    documents_skipped: int


def _build_report_meta(
    *,
    designclone_version: str,
    scan_root: Path,
    cfg: SignatureConfig,
    min_occurrences: int,
    documents_skipped: int,
) -> ReportMeta:
    return {
        "report_schema_version": REPORT_SCHEMA_VERSION,
        "designclone_version": designclone_version,
        "python_version": _current_python_version(),
        "signature_version": SIGNATURE_VERSION,
        "signature_attributes": cfg.describe(),
        "min_occurrences": min_occurrences,
        "scan_root": str(scan_root),
        "documents_skipped": documents_skipped,
    }
