"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import ui_messages as ui

_COMPONENT_LABELS = frozenset(
    {
        ui.SUMMARY_LABEL_COMPONENTS,
        ui.SUMMARY_LABEL_COMPONENT_NODES,
    }
)


def _summary_value_style(*, label: str, value: int) -> str:
    if value == 0:
        return "dim"
    if label == ui.SUMMARY_LABEL_DOCUMENTS_SKIPPED:
        return "yellow"
    if label in _COMPONENT_LABELS:
        return "bold yellow"
    return "bold"


def _build_summary_rows(
    *,
    documents_found: int,
    documents_analyzed: int,
    documents_skipped: int,
    nodes: int,
    component_groups: int,
    component_nodes: int,
) -> list[tuple[str, int]]:
    return [
        (ui.SUMMARY_LABEL_DOCUMENTS_FOUND, documents_found),
        (ui.SUMMARY_LABEL_DOCUMENTS_ANALYZED, documents_analyzed),
        (ui.SUMMARY_LABEL_DOCUMENTS_SKIPPED, documents_skipped),
        (ui.SUMMARY_LABEL_NODES, nodes),
        (ui.SUMMARY_LABEL_COMPONENTS, component_groups),
        (ui.SUMMARY_LABEL_COMPONENT_NODES, component_nodes),
    ]


def _build_summary_table(rows: list[tuple[str, int]]) -> Table:
    summary_table = Table(
        title=ui.SUMMARY_TITLE,
        show_header=True,
        width=ui.CLI_LAYOUT_WIDTH,
    )
    summary_table.add_column("Metric")
    summary_table.add_column("Value", justify="right")
    for label, value in rows:
        summary_table.add_row(
            label,
            Text(str(value), style=_summary_value_style(label=label, value=value)),
        )
    return summary_table


def _print_summary(
    *,
    console: Console,
    quiet: bool,
    documents_found: int,
    documents_analyzed: int,
    documents_skipped: int,
    nodes: int,
    component_groups: int,
    component_nodes: int,
) -> None:
    invariant_ok = documents_found == documents_analyzed + documents_skipped
    rows = _build_summary_rows(
        documents_found=documents_found,
        documents_analyzed=documents_analyzed,
        documents_skipped=documents_skipped,
        nodes=nodes,
        component_groups=component_groups,
        component_nodes=component_nodes,
    )

    if quiet:
        console.print(ui.SUMMARY_TITLE)
        console.print(
            ui.fmt_summary_compact_input(
                found=documents_found,
                analyzed=documents_analyzed,
                skipped=documents_skipped,
            )
        )
        console.print(
            ui.fmt_summary_compact_components(
                groups=component_groups,
                component_nodes=component_nodes,
                nodes=nodes,
            )
        )
    else:
        console.print(_build_summary_table(rows))

    if not invariant_ok:
        console.print(f"[warning]{ui.WARN_SUMMARY_ACCOUNTING_MISMATCH}[/warning]")
