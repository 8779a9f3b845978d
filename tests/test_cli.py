"""Tests for CLI parser and main behavior."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from hostsmith.cli.main import build_parser, main


def test_build_parser_accepts_show_flags(tmp_path: Path) -> None:
    parser = build_parser()

    args = parser.parse_args(["show", "--root", str(tmp_path), "--format", "json", "--verbose"])

    assert args.command == "show"
    assert args.root == tmp_path
    assert args.format == "json"
    assert args.verbose is True


@pytest.mark.parametrize(
    ("short_args", "long_args"),
    [
        pytest.param(["show", "-r", ".", "-c", "h.yaml"], ["show", "--root", ".", "--config", "h.yaml"], id="show"),
        pytest.param(
            ["validate-config", "-r", ".", "-c", "h.yaml"],
            ["validate-config", "--root", ".", "--config", "h.yaml"],
            id="validate-config",
        ),
    ],
)
def test_short_flags_match_long_flags(short_args: list[str], long_args: list[str]) -> None:
    parser = build_parser()

    assert vars(parser.parse_args(short_args)) == vars(parser.parse_args(long_args))


def test_build_parser_rejects_unknown_format(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["show", "-r", str(tmp_path), "--format", "xml"])


def test_show_prints_text_plan(basic_repo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["show", "-r", str(basic_repo_root)])

    out = capsys.readouterr().out
    assert code == 0
    assert "nixosConfigurations (3)" in out
    assert "  server  [nixpkgs]" in out
    assert "  laptop  [nix-darwin]" in out


def test_show_prints_json_plan(basic_repo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["show", "-r", str(basic_repo_root), "--format", "json"])

    document = json.loads(capsys.readouterr().out)
    assert code == 0
    assert sorted(document["collections"]["homeConfigurations"]) == ["alice"]
    assert document["collections"]["nixosConfigurations"]["kiosk"]["special_args"] == [
        "inputs",
        "pure_only",
        "self",
    ]


def test_show_reports_configuration_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "hostsmith.yaml").write_text("auto:\n  enable: true\n", encoding="utf-8")

    code = main(["show", "-r", str(tmp_path)])

    assert code == 2
    assert "Configuration error: auto: no hosts directory found" in capsys.readouterr().err


def test_show_rejects_non_string_special_arg_names(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "hosts").mkdir()
    (tmp_path / "hosts" / "web.yaml").write_text("special_args:\n  1: one\n", encoding="utf-8")
    (tmp_path / "hostsmith.yaml").write_text("auto:\n  enable: true\n", encoding="utf-8")

    code = main(["show", "-r", str(tmp_path), "--format", "json"])

    assert code == 2
    assert "argument names must be strings" in capsys.readouterr().err


def test_show_reports_unknown_builder_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "hostsmith.yaml").write_text(
        "hosts:\n  mac:\n    class: darwin\n    builders: {darwin: missing-darwin}\n",
        encoding="utf-8",
    )

    code = main(["show", "-r", str(tmp_path)])

    assert code == 2
    assert "missing-darwin" in capsys.readouterr().err


def test_validate_config_success(basic_repo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["validate-config", "-r", str(basic_repo_root)])

    assert code == 0
    assert "Configuration is valid. 6 host(s) resolved." in capsys.readouterr().out


def test_validate_config_reports_duplicates(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    hosts = tmp_path / "hosts"
    (hosts / "web").mkdir(parents=True)
    (hosts / "web" / "default.yaml").write_text("{}\n", encoding="utf-8")
    (hosts / "web.yaml").write_text("{}\n", encoding="utf-8")
    (tmp_path / "hostsmith.yaml").write_text("auto:\n  enable: true\n", encoding="utf-8")

    code = main(["validate-config", "-r", str(tmp_path)])

    assert code == 2
    assert "web" in capsys.readouterr().err
