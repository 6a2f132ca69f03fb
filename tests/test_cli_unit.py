import os
import sys
from pathlib import Path

import pytest
from rich.console import Console

import designclone._cli_summary as cli_summary
import designclone.cli as cli
from designclone import __version__
from designclone import ui_messages as ui
from designclone._cli_args import build_parser
from designclone._cli_paths import OUTPUT_SUFFIXES, _validate_output_path
from designclone.cli import process_file
from designclone.contracts import DEBUG_ENV_VAR, ExitCode
from designclone.signature import SignatureConfig
from tests._tree_fixtures import DocumentWriter


def test_output_suffixes_by_kind() -> None:
    assert OUTPUT_SUFFIXES == {"JSON": ".json", "text": ".txt", "mock": ".json"}


@pytest.mark.parametrize(
    ("kind", "filename"),
    [("JSON", "report.JSON"), ("text", "report.txt"), ("mock", "tree.json")],
)
def test_validate_output_path_accepts_kind_suffix(
    tmp_path: Path, kind: str, filename: str
) -> None:
    console = Console(theme=cli.custom_theme, no_color=True)
    out = _validate_output_path(
        str(tmp_path / filename),
        kind=kind,  # type: ignore[arg-type]
        console=console,
    )
    assert out == (tmp_path / filename).resolve()
    assert out.is_absolute()


def test_validate_output_path_rejects_other_suffix(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    console = Console(theme=cli.custom_theme, width=200, no_color=True)
    with pytest.raises(SystemExit) as exc:
        _validate_output_path(str(tmp_path / "mock.txt"), kind="mock", console=console)
    assert exc.value.code == ExitCode.CONTRACT_ERROR
    out = capsys.readouterr().out
    assert "CONTRACT ERROR" in out
    assert "Invalid mock output extension" in out
    assert "(expected .json)" in out


def test_process_file_success(write_document: DocumentWriter) -> None:
    result = process_file(str(write_document()), SignatureConfig(), 2)
    assert result.success is True
    assert result.error_kind is None
    assert result.root is not None
    assert result.result is not None
    assert result.result.as_component_map() == {"C1": ["card-a", "card-b"]}


def test_process_file_stat_error(
    monkeypatch: pytest.MonkeyPatch, write_document: DocumentWriter
) -> None:
    path = write_document()

    def _boom(_path: str) -> int:
        raise OSError("nope")

    monkeypatch.setattr(os.path, "getsize", _boom)
    result = process_file(str(path), SignatureConfig(), 2)
    assert result.success is False
    assert result.error_kind == "source_read_error"
    assert result.error is not None
    assert "Cannot stat file" in result.error


def test_process_file_read_oserror(
    monkeypatch: pytest.MonkeyPatch, write_document: DocumentWriter
) -> None:
    path = write_document()

    def _boom(*_args: object, **_kwargs: object) -> str:
        raise OSError("read failed")

    monkeypatch.setattr(Path, "read_text", _boom)
    result = process_file(str(path), SignatureConfig(), 2)
    assert result.success is False
    assert result.error is not None
    assert "Cannot read file" in result.error


def test_process_file_format_error(write_document: DocumentWriter) -> None:
    path = write_document(payload={"id": "", "type": "Div"})
    result = process_file(str(path), SignatureConfig(), 2)
    assert result.success is False
    assert result.error_kind == "format_error"
    assert result.error is not None
    assert result.error.startswith("Invalid document: ")


def test_process_file_unexpected_error(
    monkeypatch: pytest.MonkeyPatch, write_document: DocumentWriter
) -> None:
    path = write_document()

    def _boom(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("kaboom")

    monkeypatch.setattr(cli, "find_components", _boom)
    result = process_file(str(path), SignatureConfig(), 2)
    assert result.success is False
    assert result.error_kind == "unexpected_error"
    assert result.error == "Unexpected error: RuntimeError: kaboom"


def test_cli_help_text_consistency(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    parser = build_parser(__version__)
    monkeypatch.setattr(sys, "argv", ["designclone", "--help"])
    with pytest.raises(SystemExit) as exc:
        parser.parse_args()
    assert exc.value.code == 0
    out = capsys.readouterr().out
    expected_parts = (
        "Exit codes",
        "0 - success",
        "2 - contract error",
        "3 - gating failure",
        "5 - internal error",
        f"{DEBUG_ENV_VAR}=1 - same as --debug",
        "Detection Tuning",
        "Mock Data",
    )
    for expected in expected_parts:
        assert expected in out
    assert "http" not in out


def test_build_parser_defaults() -> None:
    args = build_parser(__version__).parse_args([])
    assert args.root == "."
    assert args.min_occurrences == 2
    assert args.include_size is False
    assert args.include_border is False
    assert args.fail_threshold == -1
    assert args.generate_mock is None
    assert args.seed is None


def test_build_parser_version(
    capsys: pytest.CaptureFixture[str],
) -> None:
    with pytest.raises(SystemExit) as exc:
        build_parser("9.9.9").parse_args(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == "DesignClone 9.9.9"


def test_is_debug_enabled() -> None:
    assert cli._is_debug_enabled(argv=["--debug"], environ={}) is True
    assert cli._is_debug_enabled(argv=[], environ={"DESIGNCLONE_DEBUG": "1"}) is True
    assert cli._is_debug_enabled(argv=[], environ={"DESIGNCLONE_DEBUG": "0"}) is False
    assert cli._is_debug_enabled(argv=["."], environ={}) is False


def test_fmt_internal_error_without_debug() -> None:
    text = ui.fmt_internal_error(ValueError(""))
    assert "Reason: ValueError: <no message>" in text
    assert f"{DEBUG_ENV_VAR}=1" in text
    assert "http" not in text
    assert "DEBUG DETAILS" not in text


def test_fmt_internal_error_with_debug() -> None:
    try:
        raise KeyError("missing")
    except KeyError as e:
        text = ui.fmt_internal_error(e, debug=True)
    assert "DEBUG DETAILS" in text
    assert f"DesignClone: {__version__}" in text
    assert "KeyError" in text


def test_summary_value_style() -> None:
    assert cli_summary._summary_value_style(label="Nodes", value=0) == "dim"
    assert (
        cli_summary._summary_value_style(
            label=ui.SUMMARY_LABEL_DOCUMENTS_SKIPPED, value=1
        )
        == "yellow"
    )
    assert (
        cli_summary._summary_value_style(label=ui.SUMMARY_LABEL_COMPONENTS, value=3)
        == "bold yellow"
    )
    assert cli_summary._summary_value_style(label="Nodes", value=3) == "bold"


def test_print_summary_accounting_mismatch(
    capsys: pytest.CaptureFixture[str],
) -> None:
    console = Console(theme=cli.custom_theme, width=120, no_color=True)
    cli_summary._print_summary(
        console=console,
        quiet=True,
        documents_found=3,
        documents_analyzed=1,
        documents_skipped=1,
        nodes=10,
        component_groups=1,
        component_nodes=2,
    )
    out = capsys.readouterr().out
    assert "Input: found=3 analyzed=1 skipped=1" in out
    assert "Summary accounting mismatch" in out


def test_fmt_component_line() -> None:
    line = ui.fmt_component_line(
        component_id="C4", name="Card", instances=2, node_ids=("a", "b")
    )
    assert line == "  C4 Card [dim]x2[/dim]: a, b"
