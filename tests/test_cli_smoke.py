from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from cli import main

FIXTURE_ROOT = Path(__file__).parent / "fixtures" / "mini_repo"


def _copy_mini_repo_fixture(root: Path) -> Path:
    shutil.copytree(FIXTURE_ROOT, root)
    return root


def _write_clean_repo(root: Path) -> Path:
    (root / "core").mkdir(parents=True)
    (root / "utils").mkdir()
    (root / "core" / "app.ts").write_text(
        "import { fmt } from '../utils/fmt';\n", encoding="utf-8"
    )
    (root / "utils" / "fmt.ts").write_text(
        "export const fmt = (v: string) => v;\n", encoding="utf-8"
    )
    return root


def test_cli_analyze_clean_repo_exits_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = _write_clean_repo(tmp_path / "repo")

    exit_code = main(["analyze", str(repo_root), "--config-root", str(tmp_path)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Total modules analyzed: 2" in out
    assert "🎉 No violations found!" in out


def test_cli_analyze_cyclic_fixture_exits_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = _copy_mini_repo_fixture(tmp_path / "repo")

    exit_code = main(["analyze", str(repo_root), "--config-root", str(tmp_path)])

    assert exit_code == 1
    out = capsys.readouterr().out
    assert "❌ Module prefix dependencies contain cycles" in out
    assert "core -> ui (mutual dependency):" in out


def test_cli_analyze_json_to_stdout(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = _copy_mini_repo_fixture(tmp_path / "repo")

    exit_code = main(
        ["analyze", str(repo_root), "--json", "--config-root", str(tmp_path)]
    )

    assert exit_code == 1
    document = json.loads(capsys.readouterr().out)
    assert document["summary"] == {
        "totalModules": 6,
        "totalImports": 7,
        "prefixCount": 5,
        "violationCount": 2,
        "feedbackArcCount": 1,
        "isAcyclic": False,
    }


def test_cli_analyze_writes_output_and_dot_files(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = _copy_mini_repo_fixture(tmp_path / "repo")
    report_path = tmp_path / "report.txt"
    dot_path = tmp_path / "graph.dot"

    exit_code = main(
        [
            "analyze",
            str(repo_root),
            "-o",
            str(report_path),
            "--dot",
            str(dot_path),
            "--config-root",
            str(tmp_path),
        ]
    )

    assert exit_code == 1
    out = capsys.readouterr().out
    assert f"Report written to {report_path}" in out
    assert f"DOT graph written to {dot_path}" in out
    assert report_path.read_text(encoding="utf-8").startswith(
        "Directory Dependency Analysis Report\n"
    )
    assert '  "ui" -> "core" [color=red, style=bold];' in dot_path.read_text(
        encoding="utf-8"
    )


def test_cli_exclude_flag_breaks_cycle(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = _copy_mini_repo_fixture(tmp_path / "repo")

    exit_code = main(
        [
            "analyze",
            str(repo_root),
            "--exclude",
            "ui",
            "--config-root",
            str(tmp_path),
        ]
    )

    assert exit_code == 0
    assert "Total modules analyzed: 4" in capsys.readouterr().out


def test_cli_analyze_multiple_directories(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    first = _write_clean_repo(tmp_path / "first")
    second = _write_clean_repo(tmp_path / "second")

    exit_code = main(
        ["analyze", str(first), str(second), "--config-root", str(tmp_path)]
    )

    assert exit_code == 0
    assert "Total modules analyzed: 4" in capsys.readouterr().out


def test_cli_missing_directory_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "missing"

    exit_code = main(["analyze", str(missing), "--config-root", str(tmp_path)])

    assert exit_code == 2
    assert "Source directory does not exist" in capsys.readouterr().err


def test_cli_invalid_config_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = _write_clean_repo(tmp_path / "repo")
    (tmp_path / "dircycle.toml").write_text("unknown = 1\n", encoding="utf-8")

    exit_code = main(["analyze", str(repo_root), "--config-root", str(tmp_path)])

    assert exit_code == 2
    assert "Invalid config" in capsys.readouterr().err


def test_cli_verify_round_trip(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = _copy_mini_repo_fixture(tmp_path / "repo")
    report_path = tmp_path / "report.json"

    main(
        [
            "analyze",
            str(repo_root),
            "--json",
            "-o",
            str(report_path),
            "--config-root",
            str(tmp_path),
        ]
    )
    capsys.readouterr()

    exit_code = main(
        [
            "verify",
            str(repo_root),
            "--report",
            str(report_path),
            "--config-root",
            str(tmp_path),
        ]
    )

    assert exit_code == 0


def test_cli_verify_detects_stale_report(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = _copy_mini_repo_fixture(tmp_path / "repo")
    report_path = tmp_path / "report.json"
    main(
        [
            "analyze",
            str(repo_root),
            "--json",
            "-o",
            str(report_path),
            "--config-root",
            str(tmp_path),
        ]
    )
    (repo_root / "utils" / "extra.ts").write_text("", encoding="utf-8")
    capsys.readouterr()

    exit_code = main(
        [
            "verify",
            str(repo_root),
            "--report",
            str(report_path),
            "--config-root",
            str(tmp_path),
        ]
    )

    assert exit_code == 1
    assert f"mismatch: {report_path}" in capsys.readouterr().err


def test_cli_verify_missing_report_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = _write_clean_repo(tmp_path / "repo")
    report_path = tmp_path / "missing.json"

    exit_code = main(
        [
            "verify",
            str(repo_root),
            "--report",
            str(report_path),
            "--config-root",
            str(tmp_path),
        ]
    )

    assert exit_code == 2
    captured = capsys.readouterr()
    assert f"report: {report_path}" in captured.err
    assert "Report file does not exist" in captured.err
